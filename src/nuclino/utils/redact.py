"""Secret redaction for debug dumps.

:func:`redact` is applied to every request/response dump before it is
written anywhere.  It guarantees:

* values under credential-like keys (``authorization``, ``api_key``, ...)
  are masked;
* ``Bearer <key>`` strings are masked wherever they appear;
* the literal API key, when supplied, is scrubbed from every string;
* raw bytes are replaced with ``<binary:N_bytes>``.
"""

from __future__ import annotations

import copy
import re
from typing import Any

_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "credential",
    "authorization",
    "cookie",
    "api_key",
    "api-key",
    "apikey",
})

_BEARER_RE = re.compile(r"(Bearer\s+)\S+")


def _mask_secret(value: str, secret: str | None) -> str:
    if secret and secret in value:
        suffix = secret[-4:] if len(secret) >= 8 else "****"
        value = value.replace(secret, f"<redacted:...{suffix}>")
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)


def _redact_value(value: Any, secret: str | None) -> Any:
    if isinstance(value, dict):
        return _redact_dict(value, secret)
    if isinstance(value, list):
        return [_redact_value(item, secret) for item in value]
    if isinstance(value, str):
        return _mask_secret(value, secret)
    if isinstance(value, (bytes, bytearray)):
        return f"<binary:{len(value)}_bytes>"
    return value


def _redact_dict(d: dict, secret: str | None) -> dict:
    result: dict = {}
    for key, value in d.items():
        key_lower = key.lower() if isinstance(key, str) else ""
        if any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS):
            result[key] = "<redacted>"
        else:
            result[key] = _redact_value(value, secret)
    return result


def redact(payload: dict, secret: str | None = None) -> dict:
    """Return a deep copy of *payload* with credentials removed.

    Parameters
    ----------
    payload:
        The dictionary to sanitise (a request body, headers, or a dump).
    secret:
        The API key.  Any occurrence of it in any string value is replaced.

    Examples
    --------
    >>> redact({"Authorization": "Bearer abc123"})
    {'Authorization': '<redacted>'}
    """
    return _redact_dict(copy.deepcopy(payload), secret)
