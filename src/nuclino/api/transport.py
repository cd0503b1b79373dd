"""Synchronous HTTP transport for the Nuclino API.

Every call follows the same single-shot lifecycle:

1. Send the HTTP request with the auth, content-type and user-agent headers.
2. On a transport failure (DNS, TLS, connect, read, timeout) -- raise
   :class:`NuclinoNetworkError`.  Nothing is retried.
3. Parse the response envelope ``{"status", "message", "data"}``.
4. On ``2xx`` with ``status == "success"`` -- return ``data``.
5. On an error envelope -- raise the :class:`NuclinoAPIError` subclass
   matching the HTTP status.
6. On a non-``2xx`` without an envelope -- raise :class:`NuclinoHTTPError`
   with the raw status and body.
"""

from __future__ import annotations

import json as _json
import sys
import time
from typing import Any, NoReturn

import httpx

from nuclino.config import NuclinoConfig
from nuclino.errors import (
    NuclinoAuthError,
    NuclinoClientError,
    NuclinoDeserializationError,
    NuclinoHTTPError,
    NuclinoNetworkError,
    NuclinoNoDataError,
    NuclinoNotFoundError,
    NuclinoPermissionError,
    NuclinoRateLimitError,
    NuclinoServerError,
)
from nuclino.observability import NoopMetricsHook, get_logger

log = get_logger("nuclino.transport")

_BODY_PREVIEW_CHARS = 500


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_retry_after(response: httpx.Response) -> float | None:
    """Extract the ``Retry-After`` header value as a float, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return None


def _parse_envelope(response: httpx.Response) -> dict[str, Any] | None:
    """Return the response envelope, or ``None`` if the body is not one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("status"), str):
        return body
    return None


def _raise_api_error(
    response: httpx.Response,
    envelope: dict[str, Any],
    method: str,
    path: str,
) -> NoReturn:
    """Raise the :class:`NuclinoAPIError` subclass for an error envelope."""
    status = response.status_code
    api_status = envelope["status"]
    api_message = envelope.get("message")
    if not isinstance(api_message, str):
        api_message = ""

    context: dict[str, Any] = {
        "status_code": status,
        "api_status": api_status,
        "api_message": api_message,
        "method": method,
        "path": path,
    }
    detail = f"status={status}; {api_message}" if api_message else f"status={status}"

    if status == 401:
        raise NuclinoAuthError(f"Authentication failed on {method} {path}: {detail}", context)
    if status == 403:
        raise NuclinoPermissionError(f"Permission denied on {method} {path}: {detail}", context)
    if status == 404:
        raise NuclinoNotFoundError(f"Resource not found on {method} {path}: {detail}", context)
    if status == 429:
        context["retry_after_seconds"] = _parse_retry_after(response)
        raise NuclinoRateLimitError(f"Rate limited on {method} {path}: {detail}", context)
    if 400 <= status < 500:
        raise NuclinoClientError(f"Client error on {method} {path}: {detail}", context)
    if status >= 500 or api_status == "error":
        raise NuclinoServerError(f"Nuclino service error on {method} {path}: {detail}", context)
    # A 2xx (or 1xx/3xx) carrying a "fail" envelope.
    raise NuclinoClientError(f"Request rejected on {method} {path}: {detail}", context)


def _unwrap(response: httpx.Response, method: str, path: str) -> Any:
    """Interpret *response* and return the envelope's ``data`` payload."""
    envelope = _parse_envelope(response)
    status = response.status_code

    if envelope is None:
        body_preview = response.text[:_BODY_PREVIEW_CHARS]
        if 200 <= status < 300:
            raise NuclinoDeserializationError(
                f"Response to {method} {path} is not a Nuclino response envelope",
                context={"status_code": status, "method": method, "path": path, "body": body_preview},
            )
        raise NuclinoHTTPError(
            f"HTTP {status} on {method} {path}",
            context={"status_code": status, "method": method, "path": path, "body": body_preview},
        )

    if 200 <= status < 300 and envelope["status"] == "success":
        data = envelope.get("data")
        if data is None:
            raise NuclinoNoDataError(
                f"Successful response to {method} {path} carried no data field",
                context={"status_code": status, "method": method, "path": path},
            )
        return data

    _raise_api_error(response, envelope, method, path)


def _dump_payload(
    method: str,
    url: str,
    payload: Any | None,
    response_status: int | None,
    response_body: Any | None,
    secret: str | None = None,
) -> None:
    """Write a redacted debug dump of the request/response to stderr."""
    from nuclino.utils.redact import redact

    dump: dict[str, Any] = {
        "method": method,
        "url": url,
    }
    if payload is not None:
        dump["request_body"] = payload
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    print(
        _json.dumps(redact(dump, secret), indent=2, default=str),
        file=sys.stderr,
    )


def _emit_debug_dump(
    config: NuclinoConfig,
    method: str,
    response: httpx.Response,
    json_payload: Any,
) -> None:
    """Emit a redacted debug dump of request/response if enabled."""
    if not config.debug_dump_payload:
        return
    try:
        resp_body = response.json()
    except ValueError:
        resp_body = response.text[:1000]
    _dump_payload(
        method, str(response.url), json_payload,
        response.status_code, resp_body,
        secret=config.api_key,
    )


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

class NuclinoTransport:
    """Synchronous HTTP transport with auth and error mapping.

    Owns one :class:`httpx.Client`.  Thread safety follows httpx: a single
    transport may be shared between threads.

    Parameters
    ----------
    config:
        A :class:`NuclinoConfig` instance controlling all transport behaviour.
    """

    def __init__(self, config: NuclinoConfig) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

        self._client = httpx.Client(
            base_url=config.api_root,
            headers={
                "Authorization": config.authorization,
                "Content-Type": "application/json",
                "User-Agent": config.user_agent,
            },
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
        )

    @property
    def config(self) -> NuclinoConfig:
        return self._config

    # -- public API --------------------------------------------------------

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Execute one HTTP request against the Nuclino API.

        Parameters
        ----------
        method:
            HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
        path:
            API path relative to the versioned root (e.g. ``/items``).
        **kwargs:
            Forwarded to :meth:`httpx.Client.request`.  Use ``json=`` for
            bodies and ``params=`` for query strings.

        Returns
        -------
        Any
            The ``data`` member of the success envelope.

        Raises
        ------
        NuclinoNetworkError
            On transport-level failures.
        NuclinoHTTPError
            On non-2xx responses without an error envelope.
        NuclinoAPIError
            On error envelopes (see the subclasses for status mapping).
        NuclinoDeserializationError
            When a 2xx body is not a valid envelope or carries no data.
        """
        response = self._send(method, path, kwargs.get("json"), **kwargs)
        return _unwrap(response, method, path)

    def download(self, url: str) -> bytes:
        """Fetch raw bytes from an absolute URL, such as a file download link.

        Download links are pre-signed, so the API key is not sent.
        """
        method = "GET"
        request = self._client.build_request(method, url)
        for header in ("Authorization", "Content-Type"):
            if header in request.headers:
                del request.headers[header]

        response = self._send_request(request, method, "download")
        if not 200 <= response.status_code < 300:
            raise NuclinoHTTPError(
                f"HTTP {response.status_code} downloading file",
                context={
                    "status_code": response.status_code,
                    "method": method,
                    "path": "download",
                    "body": response.text[:_BODY_PREVIEW_CHARS],
                },
            )
        return response.content

    def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> NuclinoTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # -- internals ---------------------------------------------------------

    def _send(self, method: str, path: str, json_payload: Any, **kwargs: Any) -> httpx.Response:
        t0 = time.monotonic()
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            self._network_failure(method, path, exc)
        self._record(method, path, response, t0)
        _emit_debug_dump(self._config, method, response, json_payload)
        return response

    def _send_request(self, request: httpx.Request, method: str, path: str) -> httpx.Response:
        t0 = time.monotonic()
        try:
            response = self._client.send(request)
        except httpx.TransportError as exc:
            self._network_failure(method, path, exc)
        self._record(method, path, response, t0)
        return response

    def _network_failure(self, method: str, path: str, exc: Exception) -> NoReturn:
        self._metrics.increment(
            "nuclino.requests_total",
            tags={"method": method, "path": path, "status": "error"},
        )
        log.warning(
            "Request network error",
            extra={
                "extra_fields": {
                    "op": "request",
                    "method": method,
                    "path": path,
                    "error": str(exc),
                }
            },
        )
        raise NuclinoNetworkError(
            message=f"Network error on {method} {path}: {exc}",
            context={"method": method, "url": path},
            cause=exc,
        ) from exc

    def _record(self, method: str, path: str, response: httpx.Response, t0: float) -> None:
        elapsed_ms = (time.monotonic() - t0) * 1000
        tags = {"method": method, "path": path, "status": str(response.status_code)}
        self._metrics.increment("nuclino.requests_total", tags=tags)
        self._metrics.timing("nuclino.request_duration_ms", elapsed_ms, tags=tags)
        log.debug(
            "Request complete",
            extra={
                "extra_fields": {
                    "op": "request",
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": round(elapsed_ms, 2),
                }
            },
        )
