"""Client configuration for nuclino.

:class:`NuclinoConfig` is a frozen dataclass that captures every tuneable
knob exposed by the client. It is built once -- either directly or with
:func:`load_config`, which reads the process environment -- and then shared
read-only by the client and its transport.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from nuclino.errors import NuclinoConfigError

BASE_URL = "https://api.nuclino.com"
"""Root URL of the Nuclino API."""

API_VERSION = "v0"
"""Path prefix for every endpoint."""

APIKEY_ENV_VAR = "NUCLINO_API_KEY"
"""Environment variable read by :func:`load_config` for the API key."""

BASE_URL_ENV_VAR = "NUCLINO_BASE_URL"
"""Optional environment variable overriding :data:`BASE_URL`."""

DEFAULT_USER_AGENT = "nuclino-python"

_LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


@dataclass(frozen=True)
class NuclinoConfig:
    """Complete configuration for a nuclino client.

    Parameters
    ----------
    api_key:
        Nuclino API key.  **Required.**  Never logged.
    base_url:
        API root URL.  Override for proxy or testing environments.  Plain
        ``http`` is only accepted for local hosts.
    auth_scheme:
        Scheme prefixed to the key in the ``Authorization`` header.  With
        ``None`` the bare key is sent.
    user_agent:
        Value of the ``User-Agent`` header.
    timeout_seconds:
        HTTP timeout in seconds.  This is the only bound on how long a call
        can block.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    metrics:
        Optional :class:`~nuclino.observability.MetricsHook` backend.
    debug_dump_payload:
        Write a redacted dump of every request/response to *stderr*.
    """

    api_key: str = ""

    base_url: str = BASE_URL

    auth_scheme: str | None = "Bearer"

    user_agent: str = DEFAULT_USER_AGENT

    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    metrics: Any | None = None

    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not isinstance(self.api_key, str) or not self.api_key.strip():
            raise NuclinoConfigError(
                "A Nuclino API key is required.",
                context={"setting": "api_key", "env_var": APIKEY_ENV_VAR},
            )

        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise NuclinoConfigError(
                f"base_url must be an absolute http(s) URL, got {self.base_url!r}",
                context={"setting": "base_url"},
            )
        if parsed.scheme == "http" and parsed.hostname not in _LOCAL_HOSTS:
            raise NuclinoConfigError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API key, or target localhost for testing.",
                context={"setting": "base_url"},
            )

        if isinstance(self.timeout_seconds, bool) or not isinstance(self.timeout_seconds, (int, float)):
            raise NuclinoConfigError(
                f"timeout_seconds must be a number, got {type(self.timeout_seconds).__name__}",
                context={"setting": "timeout_seconds"},
            )
        if self.timeout_seconds <= 0:
            raise NuclinoConfigError(
                f"timeout_seconds must be > 0, got {self.timeout_seconds}",
                context={"setting": "timeout_seconds"},
            )

        # Normalise the trailing slash so path joins stay predictable.
        if self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def authorization(self) -> str:
        """The ``Authorization`` header value."""
        if self.auth_scheme:
            return f"{self.auth_scheme} {self.api_key}"
        return self.api_key

    @property
    def api_root(self) -> str:
        """Base URL including the API version prefix."""
        return f"{self.base_url}/{API_VERSION}"

    def __repr__(self) -> str:
        """Mask the API key to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "api_key":
                masked = f"...{val[-4:]}" if len(val) >= 8 else "****"
                parts.append(f"api_key='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"NuclinoConfig({', '.join(parts)})"


def load_config(
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> NuclinoConfig:
    """Build a :class:`NuclinoConfig` from the process environment.

    Reads :data:`APIKEY_ENV_VAR` and, if present, :data:`BASE_URL_ENV_VAR`.
    Explicit keyword *overrides* win over environment values.

    Raises
    ------
    NuclinoConfigError
        If no API key is available.
    """
    env = os.environ if environ is None else environ

    if "api_key" not in overrides:
        key = env.get(APIKEY_ENV_VAR)
        if not key:
            raise NuclinoConfigError(
                f"Cannot find an API key in the process environment ({APIKEY_ENV_VAR}).",
                context={"setting": "api_key", "env_var": APIKEY_ENV_VAR},
            )
        overrides["api_key"] = key

    if "base_url" not in overrides:
        base_url = env.get(BASE_URL_ENV_VAR)
        if base_url:
            overrides["base_url"] = base_url

    return NuclinoConfig(**overrides)
