"""Workspace API wrapper for the Nuclino API."""

from __future__ import annotations

from typing import Any

from .pagination import list_params, resource_path
from .transport import NuclinoTransport


class WorkspaceAPI:
    """Synchronous wrapper for ``/v0/workspaces``.

    Parameters
    ----------
    transport:
        A configured :class:`NuclinoTransport` instance.
    """

    def __init__(self, transport: NuclinoTransport) -> None:
        self._transport = transport

    def list(
        self,
        limit: int | None = None,
        after: str | None = None,
        team_id: str | None = None,
    ) -> dict[str, Any]:
        """List accessible workspaces, optionally restricted to one team."""
        params = list_params(limit, after, teamId=team_id)
        return self._transport.request("GET", "/workspaces", params=params)

    def retrieve(self, workspace_id: str) -> dict[str, Any]:
        """Retrieve a workspace, including its field definitions and child ids."""
        return self._transport.request("GET", resource_path("workspaces", workspace_id, "workspace_id"))
