"""Error hierarchy for the nuclino client.

Every public error class inherits from :class:`NuclinoError`. Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

The hierarchy separates the five ways a call can fail so callers can tell
them apart with ``except`` clauses:

* :class:`NuclinoConfigError` -- the client could not be configured.
* :class:`NuclinoValidationError` -- a payload or argument was rejected
  locally, before any request was sent.
* :class:`NuclinoTransportError` -- no usable HTTP exchange happened.
* :class:`NuclinoAPIError` -- the service answered with a structured error.
* :class:`NuclinoDeserializationError` -- the service answered, but the body
  did not match the expected shape.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the client can raise."""

    CONFIG_ERROR = "CONFIG_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    API_ERROR = "API_ERROR"
    CLIENT_ERROR = "CLIENT_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"
    DESERIALIZATION_ERROR = "DESERIALIZATION_ERROR"
    UNKNOWN_VARIANT = "UNKNOWN_VARIANT"
    NO_DATA = "NO_DATA"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class NuclinoError(Exception):
    """Base exception for all nuclino errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Local errors (raised before any request is sent)
# ---------------------------------------------------------------------------

class NuclinoConfigError(NuclinoError):
    """The client configuration is missing or invalid.

    Context keys: ``setting``, ``env_var``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.CONFIG_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class NuclinoValidationError(NuclinoError):
    """A request payload or argument failed local validation.

    Context keys: ``field``, ``value``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )

    @property
    def field(self) -> str | None:
        """Name of the offending field, when there is one."""
        return self.context.get("field")


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------

class NuclinoTransportError(NuclinoError):
    """Base class for failures where no structured API answer was obtained.

    Context varies by subclass.
    """

    def __init__(
        self,
        code: str = ErrorCode.TRANSPORT_ERROR,
        message: str = "Transport error",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class NuclinoNetworkError(NuclinoTransportError):
    """A transport-level failure occurred (timeout, DNS, TLS, connection reset).

    Context keys: ``method``, ``url``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NETWORK_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class NuclinoHTTPError(NuclinoTransportError):
    """A non-2xx response arrived without a parseable error envelope.

    Context keys: ``status_code``, ``body`` (truncated raw text), ``method``,
    ``path``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.HTTP_ERROR,
            message=message,
            context=context,
            cause=cause,
        )

    @property
    def status_code(self) -> int | None:
        return self.context.get("status_code")

    @property
    def body(self) -> str:
        return self.context.get("body", "")


# ---------------------------------------------------------------------------
# API errors (the service answered with a structured error)
# ---------------------------------------------------------------------------

class NuclinoAPIError(NuclinoError):
    """Base class for errors reported by the Nuclino API.

    Context keys: ``status_code``, ``api_status`` (the envelope's ``status``
    value, ``"fail"`` or ``"error"``), ``method``, ``path``.
    """

    def __init__(
        self,
        code: str = ErrorCode.API_ERROR,
        message: str = "API error",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )

    @property
    def status_code(self) -> int | None:
        return self.context.get("status_code")

    @property
    def api_status(self) -> str | None:
        return self.context.get("api_status")

    @property
    def api_message(self) -> str:
        """The message the service included with the error."""
        return self.context.get("api_message", "")


class NuclinoClientError(NuclinoAPIError):
    """The service rejected the request (4xx)."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        code: str = ErrorCode.CLIENT_ERROR,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class NuclinoAuthError(NuclinoClientError):
    """The service returned 401 -- the API key is invalid or revoked."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.AUTH_ERROR)


class NuclinoPermissionError(NuclinoClientError):
    """The service returned 403 -- the key's user cannot access the resource."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.PERMISSION_ERROR)


class NuclinoNotFoundError(NuclinoClientError):
    """The requested resource does not exist (404).

    Also raised locally by lookups that search an already-fetched resource,
    e.g. a field id missing from its workspace.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.NOT_FOUND)


class NuclinoRateLimitError(NuclinoClientError):
    """The service returned 429. Never retried by the client.

    Context keys: ``retry_after_seconds`` when the server sent ``Retry-After``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.RATE_LIMITED)


class NuclinoServerError(NuclinoAPIError):
    """The service reported an error on its own side (5xx)."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.SERVER_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Deserialization errors
# ---------------------------------------------------------------------------

class NuclinoDeserializationError(NuclinoError):
    """A response body did not match the expected schema.

    Context keys: ``resource``, ``field``, ``value``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        code: str = ErrorCode.DESERIALIZATION_ERROR,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class NuclinoUnknownVariantError(NuclinoDeserializationError):
    """A discriminator field held a value outside its closed variant set.

    Context keys: ``resource``, ``field``, ``variant``, ``allowed``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.UNKNOWN_VARIANT)

    @property
    def variant(self) -> Any:
        return self.context.get("variant")


class NuclinoNoDataError(NuclinoDeserializationError):
    """A successful response envelope did not include a ``data`` field."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=ErrorCode.NO_DATA)
