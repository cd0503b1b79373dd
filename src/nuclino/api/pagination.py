"""Query and path helpers for the Nuclino endpoints.

The service pages with ``limit`` (1-100, server default 100) and ``after``,
the id of the last result of the previous page.  Resource ids are opaque
strings that end up in the URL path, so they are checked and percent-encoded
before use.  Invalid values are caught here, before a request is sent.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from nuclino.errors import NuclinoValidationError

MIN_LIMIT = 1
MAX_LIMIT = 100


def check_limit(limit: int | None) -> None:
    """Raise :class:`NuclinoValidationError` unless *limit* is ``None`` or in range."""
    if limit is None:
        return
    if isinstance(limit, bool) or not isinstance(limit, int) or not MIN_LIMIT <= limit <= MAX_LIMIT:
        raise NuclinoValidationError(
            f"limit must be an integer between {MIN_LIMIT} and {MAX_LIMIT}, got {limit!r}",
            context={"field": "limit", "value": limit},
        )


def check_id(value: Any, field: str) -> str:
    """Return *value* if it is a non-blank id string, else raise."""
    if not isinstance(value, str) or not value.strip():
        raise NuclinoValidationError(
            f"{field} must be a non-empty id string, got {value!r}",
            context={"field": field, "value": value},
        )
    return value


def resource_path(collection: str, resource_id: Any, field: str) -> str:
    """Build ``/<collection>/<id>`` with the id checked and fully percent-encoded.

    Examples
    --------
    >>> resource_path("items", "abc?teamId=x", "item_id")
    '/items/abc%3FteamId%3Dx'
    """
    return f"/{collection}/{quote(check_id(resource_id, field), safe='')}"


def query_params(**values: Any) -> dict[str, Any]:
    """Build a params dict, dropping ``None`` values."""
    return {key: value for key, value in values.items() if value is not None}


def list_params(limit: int | None = None, after: str | None = None, **filters: Any) -> dict[str, Any]:
    """Validate pagination arguments and merge them with endpoint *filters*."""
    check_limit(limit)
    if after is not None:
        check_id(after, "after")
    return query_params(limit=limit, after=after, **filters)
