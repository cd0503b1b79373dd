"""Team API wrapper for the Nuclino API."""

from __future__ import annotations

from typing import Any

from .pagination import list_params, resource_path
from .transport import NuclinoTransport


class TeamAPI:
    """Synchronous wrapper for ``/v0/teams``.

    Parameters
    ----------
    transport:
        A configured :class:`NuclinoTransport` instance.
    """

    def __init__(self, transport: NuclinoTransport) -> None:
        self._transport = transport

    def list(self, limit: int | None = None, after: str | None = None) -> dict[str, Any]:
        """List the teams the API key's user belongs to.

        Returns
        -------
        dict
            The list object, ``{"object": "list", "results": [...]}``.
        """
        params = list_params(limit, after)
        return self._transport.request("GET", "/teams", params=params)

    def retrieve(self, team_id: str) -> dict[str, Any]:
        """Retrieve a team by id."""
        return self._transport.request("GET", resource_path("teams", team_id, "team_id"))
