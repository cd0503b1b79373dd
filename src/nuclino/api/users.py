"""User API wrapper for the Nuclino API.

Users can only be fetched one at a time; they are referenced by id from
teams, workspaces and pages.
"""

from __future__ import annotations

from typing import Any

from .pagination import resource_path
from .transport import NuclinoTransport


class UserAPI:
    """Synchronous wrapper for ``/v0/users``.

    Parameters
    ----------
    transport:
        A configured :class:`NuclinoTransport` instance.
    """

    def __init__(self, transport: NuclinoTransport) -> None:
        self._transport = transport

    def retrieve(self, user_id: str) -> dict[str, Any]:
        """Retrieve a user by id."""
        return self._transport.request("GET", resource_path("users", user_id, "user_id"))
