"""Request payloads sent to the Nuclino API.

The same endpoint creates both kinds of page; which one is created depends
on the posted ``object`` value.  :class:`NewPageBuilder` collects the
settings for a new page and only hands out a :class:`NewPage` once the
required ones are present, so a malformed create request can never be sent.

Usage::

    from nuclino import NewPageBuilder

    page = (
        NewPageBuilder.item()
        .title("Release notes")
        .content("# 1.2.0\\n\\n* faster sync")
        .workspace(workspace_id)
        .build()
    )
    client.create_page(page)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from nuclino.errors import NuclinoValidationError
from nuclino.models import PageKind


@dataclass(frozen=True)
class NewPage:
    """A validated, immutable create request for an item or a collection.

    Do not construct this directly; use :class:`NewPageBuilder`.

    Attributes
    ----------
    kind:
        Whether an item or a collection is created.
    title:
        The page title.
    workspace_id:
        Create the page at the top level of this workspace.  Mutually
        exclusive with *parent_id*.
    parent_id:
        Create the page inside this collection.  Mutually exclusive with
        *workspace_id*.
    index:
        Position among the parent's children.  ``None`` appends at the end.
    content:
        Markdown body.  Always ``None`` for collections.
    """

    kind: PageKind
    title: str
    workspace_id: str | None = None
    parent_id: str | None = None
    index: int | None = None
    content: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the request body, omitting unset keys."""
        body: dict[str, Any] = {"object": self.kind.value, "title": self.title}
        if self.workspace_id is not None:
            body["workspaceId"] = self.workspace_id
        if self.parent_id is not None:
            body["parentId"] = self.parent_id
        if self.index is not None:
            body["index"] = self.index
        if self.content is not None:
            body["content"] = self.content
        return body


class NewPageBuilder:
    """Fluent, single-use builder for :class:`NewPage`.

    Start with :meth:`item` or :meth:`collection`, chain the setters, then
    call :meth:`build`.  Once built, the builder refuses further use.
    """

    def __init__(self, kind: PageKind = PageKind.ITEM) -> None:
        self._kind = kind
        self._title: str | None = None
        self._workspace_id: str | None = None
        self._parent_id: str | None = None
        self._index: int | None = None
        self._content: str | None = None
        self._built = False

    @classmethod
    def item(cls) -> NewPageBuilder:
        """Start building a regular wiki page."""
        return cls(PageKind.ITEM)

    @classmethod
    def collection(cls) -> NewPageBuilder:
        """Start building a collection."""
        return cls(PageKind.COLLECTION)

    @property
    def kind(self) -> PageKind:
        return self._kind

    def _check_open(self) -> None:
        if self._built:
            raise NuclinoValidationError(
                "This builder has already produced a page; start a new builder.",
                context={"field": None},
            )

    def title(self, title: str) -> NewPageBuilder:
        """Set the page title."""
        self._check_open()
        self._title = title
        return self

    def content(self, content: str) -> NewPageBuilder:
        """Set the Markdown body.  Dropped for collections, which the API
        rejects with content."""
        self._check_open()
        self._content = content
        return self

    def workspace(self, workspace_id: str) -> NewPageBuilder:
        """Place the page at the top level of a workspace.  Clears any parent."""
        self._check_open()
        self._workspace_id = str(workspace_id)
        self._parent_id = None
        return self

    def parent(self, parent_id: str) -> NewPageBuilder:
        """Place the page inside a collection.  Clears any workspace."""
        self._check_open()
        self._parent_id = str(parent_id)
        self._workspace_id = None
        return self

    def index(self, index: int) -> NewPageBuilder:
        """Position the page among its parent's children."""
        self._check_open()
        self._index = index
        return self

    def build(self) -> NewPage:
        """Validate the collected settings and return the immutable payload.

        Raises
        ------
        NuclinoValidationError
            If ``title`` is missing or blank, if neither a workspace nor a
            parent was chosen (``field="workspace_id"``), if ``index`` is
            negative, or if the builder was already used.
        """
        self._check_open()

        if self._title is None or not self._title.strip():
            raise NuclinoValidationError(
                "A new page requires a title.",
                context={"field": "title", "value": self._title},
            )
        if self._workspace_id is None and self._parent_id is None:
            raise NuclinoValidationError(
                "A new page requires a workspace or a parent collection.",
                context={"field": "workspace_id", "value": None},
            )
        if self._index is not None and (
            isinstance(self._index, bool) or not isinstance(self._index, int) or self._index < 0
        ):
            raise NuclinoValidationError(
                f"index must be a non-negative integer, got {self._index!r}",
                context={"field": "index", "value": self._index},
            )

        content = None if self._kind is PageKind.COLLECTION else self._content
        page = NewPage(
            kind=self._kind,
            title=self._title,
            workspace_id=self._workspace_id,
            parent_id=self._parent_id,
            index=self._index,
            content=content,
        )
        self._built = True
        return page


@dataclass(frozen=True)
class ModifyPage:
    """Partial update for an item or collection.

    Only the fields that are set are sent; everything else is left as the
    server has it.
    """

    title: str | None = None
    content: str | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.title is not None:
            body["title"] = self.title
        if self.content is not None:
            body["content"] = self.content
        if not body:
            raise NuclinoValidationError(
                "An update must change at least one of title or content.",
                context={"field": "title"},
            )
        return body
