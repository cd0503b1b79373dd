"""nuclino -- Blocking Python client for the Nuclino wiki API.

Public re-exports
-----------------

* **Client:** :class:`NuclinoClient`
* **Configuration:** :class:`NuclinoConfig`, :func:`load_config`
* **Request builders:** :class:`NewPageBuilder`, :class:`NewPage`,
  :class:`ModifyPage`
* **Errors:** Every :class:`NuclinoError` subclass and :class:`ErrorCode`
* **Models:** All resource models (frozen pydantic) and enums

Usage::

    from nuclino import NuclinoClient

    client = NuclinoClient(api_key="...")
    for team in client.list_teams():
        print(team.name)
"""

from __future__ import annotations

# ── Builders ────────────────────────────────────────────────────────────
from nuclino.builders import ModifyPage, NewPage, NewPageBuilder

# ── Client ──────────────────────────────────────────────────────────────
from nuclino.client import NuclinoClient

# ── Configuration ───────────────────────────────────────────────────────
from nuclino.config import (
    APIKEY_ENV_VAR,
    BASE_URL,
    BASE_URL_ENV_VAR,
    NuclinoConfig,
    load_config,
)

# ── Errors ──────────────────────────────────────────────────────────────
from nuclino.errors import (
    ErrorCode,
    NuclinoAPIError,
    NuclinoAuthError,
    NuclinoClientError,
    NuclinoConfigError,
    NuclinoDeserializationError,
    NuclinoError,
    NuclinoHTTPError,
    NuclinoNetworkError,
    NuclinoNoDataError,
    NuclinoNotFoundError,
    NuclinoPermissionError,
    NuclinoRateLimitError,
    NuclinoServerError,
    NuclinoTransportError,
    NuclinoUnknownVariantError,
    NuclinoValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from nuclino.models import (
    Collection,
    ContentMeta,
    DownloadInfo,
    Field,
    FieldConfig,
    FieldType,
    File,
    IdOnly,
    Item,
    Page,
    PageKind,
    ResourceList,
    SelectOption,
    Team,
    User,
    Workspace,
    parse_page,
)

__all__ = [
    # Client
    "NuclinoClient",
    # Configuration
    "APIKEY_ENV_VAR",
    "BASE_URL",
    "BASE_URL_ENV_VAR",
    "NuclinoConfig",
    "load_config",
    # Builders
    "ModifyPage",
    "NewPage",
    "NewPageBuilder",
    # Errors
    "ErrorCode",
    "NuclinoAPIError",
    "NuclinoAuthError",
    "NuclinoClientError",
    "NuclinoConfigError",
    "NuclinoDeserializationError",
    "NuclinoError",
    "NuclinoHTTPError",
    "NuclinoNetworkError",
    "NuclinoNoDataError",
    "NuclinoNotFoundError",
    "NuclinoPermissionError",
    "NuclinoRateLimitError",
    "NuclinoServerError",
    "NuclinoTransportError",
    "NuclinoUnknownVariantError",
    "NuclinoValidationError",
    # Models
    "Collection",
    "ContentMeta",
    "DownloadInfo",
    "Field",
    "FieldConfig",
    "FieldType",
    "File",
    "IdOnly",
    "Item",
    "Page",
    "PageKind",
    "ResourceList",
    "SelectOption",
    "Team",
    "User",
    "Workspace",
    "parse_page",
]
