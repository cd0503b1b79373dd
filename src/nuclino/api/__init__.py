"""nuclino.api -- HTTP transport and endpoint wrappers.

This sub-package provides:

* :mod:`.transport` -- HTTP transport with auth and error mapping.
* :mod:`.pagination` -- ``limit`` / ``after`` query helpers.
* :mod:`.users`, :mod:`.teams`, :mod:`.workspaces`, :mod:`.items`,
  :mod:`.files` -- thin per-resource wrappers returning raw ``data`` dicts.
"""

from __future__ import annotations

from .files import FileAPI
from .items import ItemAPI
from .pagination import MAX_LIMIT, MIN_LIMIT, check_limit
from .teams import TeamAPI
from .transport import NuclinoTransport
from .users import UserAPI
from .workspaces import WorkspaceAPI

__all__ = [
    "FileAPI",
    "ItemAPI",
    "MAX_LIMIT",
    "MIN_LIMIT",
    "NuclinoTransport",
    "TeamAPI",
    "UserAPI",
    "WorkspaceAPI",
    "check_limit",
]
