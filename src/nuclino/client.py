"""Synchronous Nuclino API client.

:class:`NuclinoClient` is the single authenticated gateway to the service.
It owns one transport, exposes one method per endpoint, and maps every
response onto the typed models in :mod:`nuclino.models`.  Calls block until
the response arrives and are never retried.

Usage::

    from nuclino import NewPageBuilder, NuclinoClient

    with NuclinoClient.from_env() as client:
        for workspace in client.list_workspaces():
            print(workspace.name, workspace.id)

        page = client.create_page(
            NewPageBuilder.item()
            .title("Hello")
            .content("Written from *Python*.")
            .workspace(workspace.id)
            .build()
        )
        client.delete_page(page.id)
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from typing import Any

from nuclino.api.files import FileAPI
from nuclino.api.items import ItemAPI, scope_params
from nuclino.api.pagination import MAX_LIMIT, check_limit
from nuclino.api.teams import TeamAPI
from nuclino.api.transport import NuclinoTransport
from nuclino.api.users import UserAPI
from nuclino.api.workspaces import WorkspaceAPI
from nuclino.builders import ModifyPage, NewPage
from nuclino.config import NuclinoConfig, load_config
from nuclino.errors import NuclinoNotFoundError, NuclinoValidationError
from nuclino.models import (
    Field,
    File,
    IdOnly,
    Page,
    ResourceList,
    Team,
    User,
    Workspace,
    parse_page,
)
from nuclino.observability import get_logger

log = get_logger("nuclino.client")


class NuclinoClient:
    """Synchronous Nuclino API client.

    Parameters
    ----------
    api_key:
        Nuclino API key.  Required unless *config* is given.
    config:
        A pre-built :class:`NuclinoConfig`.  *api_key* and *kwargs*, when
        given alongside it, override its values.
    **kwargs:
        Forwarded to :class:`NuclinoConfig`.

    Raises
    ------
    NuclinoConfigError
        If no usable API key or an invalid setting is supplied.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: NuclinoConfig | None = None,
        **kwargs: Any,
    ) -> None:
        if config is None:
            config = NuclinoConfig(api_key=api_key if api_key is not None else "", **kwargs)
        elif api_key is not None or kwargs:
            if api_key is not None:
                kwargs["api_key"] = api_key
            config = dataclasses.replace(config, **kwargs)

        self._config = config
        self._transport = NuclinoTransport(config)
        self._users = UserAPI(self._transport)
        self._teams = TeamAPI(self._transport)
        self._workspaces = WorkspaceAPI(self._transport)
        self._items = ItemAPI(self._transport)
        self._files = FileAPI(self._transport)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> NuclinoClient:
        """Create a client whose API key is read from ``NUCLINO_API_KEY``.

        Raises
        ------
        NuclinoConfigError
            If the variable is unset or empty.
        """
        return cls(config=load_config(environ, **kwargs))

    @property
    def config(self) -> NuclinoConfig:
        return self._config

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_user(self, user_id: str) -> User:
        """Fetch a single user by id."""
        return User.from_dict(self._users.retrieve(user_id))

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------

    def list_teams(
        self,
        limit: int | None = None,
        after: str | None = None,
    ) -> ResourceList[Team]:
        """List teams, one page at a time.

        Pass ``result.next_after`` as *after* to fetch the following page.
        """
        return ResourceList[Team].from_dict(self._teams.list(limit, after))

    def get_team(self, team_id: str) -> Team:
        """Fetch a single team by id."""
        return Team.from_dict(self._teams.retrieve(team_id))

    # ------------------------------------------------------------------
    # Workspaces and fields
    # ------------------------------------------------------------------

    def list_workspaces(
        self,
        limit: int | None = None,
        after: str | None = None,
        team_id: str | None = None,
    ) -> ResourceList[Workspace]:
        """List workspaces, optionally only those of one team."""
        data = self._workspaces.list(limit, after, team_id=team_id)
        return ResourceList[Workspace].from_dict(data)

    def get_workspace(self, workspace_id: str) -> Workspace:
        """Fetch a single workspace by id."""
        return Workspace.from_dict(self._workspaces.retrieve(workspace_id))

    def list_fields(self, workspace_id: str) -> tuple[Field, ...]:
        """The custom field definitions of a workspace."""
        return self.get_workspace(workspace_id).fields

    def get_field(self, workspace_id: str, field_id: str) -> Field:
        """One field definition of a workspace.

        Raises
        ------
        NuclinoNotFoundError
            If the workspace has no field with that id.
        """
        for field in self.list_fields(workspace_id):
            if field.id == field_id:
                return field
        raise NuclinoNotFoundError(
            f"Workspace {workspace_id} has no field {field_id}",
            context={"resource_type": "field", "resource_id": field_id, "workspace_id": workspace_id},
        )

    # ------------------------------------------------------------------
    # Pages (items and collections)
    # ------------------------------------------------------------------

    def list_pages(
        self,
        team_id: str | None = None,
        workspace_id: str | None = None,
        limit: int | None = None,
        after: str | None = None,
    ) -> ResourceList[Page]:
        """List the items and collections of a team or workspace.

        Results carry no content.  Exactly one of *team_id* and
        *workspace_id* must be given.
        """
        data = self._items.list(team_id=team_id, workspace_id=workspace_id, limit=limit, after=after)
        return ResourceList[Page].from_dict(data)

    def iter_pages(
        self,
        team_id: str | None = None,
        workspace_id: str | None = None,
        page_size: int = MAX_LIMIT,
    ) -> Iterator[Page]:
        """Yield every page of a team or workspace, following the cursor.

        Arguments are checked on the call itself.  Each underlying request is
        issued lazily as the iterator advances.
        """
        check_limit(page_size)
        scope_params(team_id, workspace_id)
        return self._iter_pages(team_id, workspace_id, page_size)

    def _iter_pages(
        self,
        team_id: str | None,
        workspace_id: str | None,
        page_size: int,
    ) -> Iterator[Page]:
        after: str | None = None
        while True:
            batch = self.list_pages(
                team_id=team_id,
                workspace_id=workspace_id,
                limit=page_size,
                after=after,
            )
            yield from batch
            if len(batch) < page_size or batch.next_after is None:
                return
            after = batch.next_after

    def search_pages(
        self,
        query: str,
        team_id: str | None = None,
        workspace_id: str | None = None,
        limit: int | None = None,
    ) -> ResourceList[Page]:
        """Search the pages of a team or workspace for *query*.

        Items in the result carry a ``highlight`` snippet and no content.
        """
        data = self._items.search(query, team_id=team_id, workspace_id=workspace_id, limit=limit)
        return ResourceList[Page].from_dict(data)

    def get_page(self, page_id: str) -> Page:
        """Fetch an item (with its content) or a collection by id."""
        return parse_page(self._items.retrieve(page_id))

    def create_page(self, page: NewPage) -> Page:
        """Create an item or collection from a built :class:`NewPage`."""
        if not isinstance(page, NewPage):
            raise NuclinoValidationError(
                "create_page expects a NewPage; use NewPageBuilder(...).build().",
                context={"field": "page", "value": type(page).__name__},
            )
        created = parse_page(self._items.create(page.to_dict()))
        log.info(
            "Page created",
            extra={"extra_fields": {"op": "create_page", "page_id": created.id, "kind": created.kind.value}},
        )
        return created

    def update_page(
        self,
        page_id: str,
        changes: ModifyPage | None = None,
        *,
        title: str | None = None,
        content: str | None = None,
    ) -> Page:
        """Change the title and/or content of a page.

        Pass a :class:`ModifyPage` or the *title* / *content* keywords.  Only
        the given fields are sent.
        """
        if changes is None:
            changes = ModifyPage(title=title, content=content)
        elif title is not None or content is not None:
            raise NuclinoValidationError(
                "Pass either a ModifyPage or title/content keywords, not both.",
                context={"field": "changes"},
            )
        updated = parse_page(self._items.update(page_id, changes.to_dict()))
        log.info(
            "Page updated",
            extra={"extra_fields": {"op": "update_page", "page_id": updated.id}},
        )
        return updated

    def delete_page(self, page_id: str) -> IdOnly:
        """Move an item or collection to the trash."""
        deleted = IdOnly.from_dict(self._items.delete(page_id))
        log.info(
            "Page deleted",
            extra={"extra_fields": {"op": "delete_page", "page_id": deleted.id}},
        )
        return deleted

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def get_file(self, file_id: str) -> File:
        """Fetch file metadata, including a short-lived download link."""
        return File.from_dict(self._files.retrieve(file_id))

    def download_file(self, file: File | str) -> bytes:
        """Download a file's bytes.

        Parameters
        ----------
        file:
            A :class:`File` (its download link is used) or a download URL.
        """
        url = file.download.url if isinstance(file, File) else file
        return self._files.download(url)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the HTTP transport."""
        self._transport.close()

    def __enter__(self) -> NuclinoClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
