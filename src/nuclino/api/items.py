"""Item API wrappers for the Nuclino API.

Items and collections share the ``/v0/items`` endpoints; the ``object``
field of each body says which kind it is.  Like the other wrappers these
return raw ``data`` dicts and leave model mapping to the client.
"""

from __future__ import annotations

from typing import Any

from nuclino.errors import NuclinoValidationError

from .pagination import list_params, resource_path
from .transport import NuclinoTransport


def scope_params(team_id: str | None, workspace_id: str | None) -> dict[str, str]:
    """Exactly one of team or workspace scopes an item listing."""
    if (team_id is None) == (workspace_id is None):
        raise NuclinoValidationError(
            "Pass exactly one of team_id or workspace_id.",
            context={"field": "team_id" if team_id is None else "workspace_id"},
        )
    if team_id is not None:
        return {"teamId": team_id}
    return {"workspaceId": workspace_id}  # type: ignore[dict-item]


class ItemAPI:
    """Synchronous wrapper for ``/v0/items``.

    Parameters
    ----------
    transport:
        A configured :class:`NuclinoTransport` instance.
    """

    def __init__(self, transport: NuclinoTransport) -> None:
        self._transport = transport

    def list(
        self,
        team_id: str | None = None,
        workspace_id: str | None = None,
        limit: int | None = None,
        after: str | None = None,
    ) -> dict[str, Any]:
        """List items and collections of a team or workspace, without content.

        Parameters
        ----------
        team_id, workspace_id:
            The scope of the listing.  Exactly one must be given.
        limit:
            Page size, 1-100.  The server defaults to 100.
        after:
            Id of the last result of the previous page.
        """
        params = list_params(limit, after, **scope_params(team_id, workspace_id))
        return self._transport.request("GET", "/items", params=params)

    def search(
        self,
        query: str,
        team_id: str | None = None,
        workspace_id: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Full-text search within a team or workspace.

        Results omit content but carry a ``highlight`` snippet.
        """
        if not isinstance(query, str) or not query.strip():
            raise NuclinoValidationError(
                "A search query must be a non-empty string.",
                context={"field": "query", "value": query},
            )
        params = list_params(limit, None, search=query, **scope_params(team_id, workspace_id))
        return self._transport.request("GET", "/items", params=params)

    def retrieve(self, item_id: str) -> dict[str, Any]:
        """Retrieve an item (with content) or a collection by id."""
        return self._transport.request("GET", resource_path("items", item_id, "item_id"))

    def create(self, body: dict[str, Any]) -> dict[str, Any]:
        """Create an item or collection from a serialised ``NewPage``."""
        return self._transport.request("POST", "/items", json=body)

    def update(self, item_id: str, body: dict[str, Any]) -> dict[str, Any]:
        """Update an item or collection with a serialised ``ModifyPage``.

        Only the keys present in *body* are sent.
        """
        return self._transport.request("PUT", resource_path("items", item_id, "item_id"), json=body)

    def delete(self, item_id: str) -> dict[str, Any]:
        """Move an item or collection to the trash.  Returns ``{"id": ...}``."""
        return self._transport.request("DELETE", resource_path("items", item_id, "item_id"))
