"""Resource models for the nuclino client.

Every type here is a frozen pydantic model mirroring one JSON schema of the
Nuclino API.  Instances are only ever built from a server response (via
``from_dict``) or by the caller for tests; they are never mutated.  Each type
maps back to the service's camelCase JSON with ``to_dict`` so that
``Model.from_dict(obj.to_dict()) == obj`` holds.

Parsing rules shared by all models:

* Unknown keys are ignored, so new server fields never break old clients.
* Missing required keys and wrongly typed values raise
  :class:`NuclinoDeserializationError`.
* Discriminators (:class:`PageKind`, :class:`FieldType`) form closed sets;
  an unrecognised value raises :class:`NuclinoUnknownVariantError`.
* Timestamps become timezone-aware :class:`~datetime.datetime` objects;
  malformed strings raise instead of producing a sentinel.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, ClassVar, Generic, Literal, TypeVar, Union

import pydantic
from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    PlainSerializer,
    SerializerFunctionWrapHandler,
    StrictBool,
    StrictInt,
    TypeAdapter,
    ValidationError,
    model_serializer,
)
from pydantic.alias_generators import to_camel

from nuclino.errors import NuclinoDeserializationError, NuclinoUnknownVariantError

T = TypeVar("T")
M = TypeVar("M", bound="NuclinoModel")


# ---------------------------------------------------------------------------
# Wire types
# ---------------------------------------------------------------------------

def format_timestamp(value: datetime) -> str:
    """Render a datetime the way the service does: UTC with a ``Z`` suffix."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    timespec = "milliseconds" if value.microsecond % 1000 == 0 else "microseconds"
    return value.isoformat(timespec=timespec) + "Z"


def _assume_utc(value: datetime) -> datetime:
    # The service always sends an offset; a bare value is UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _freeze(value: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(value))


def _thaw(value: Mapping[str, Any]) -> dict[str, Any]:
    return dict(value)


Timestamp = Annotated[
    datetime,
    AfterValidator(_assume_utc),
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]
"""An ISO-8601 timestamp, written back as UTC with a ``Z`` suffix."""

FieldValues = Annotated[
    Mapping[str, Any],
    AfterValidator(_freeze),
    PlainSerializer(_thaw, return_type=dict[str, Any]),
]
"""Read-only mapping of field name to the raw JSON value."""


# ---------------------------------------------------------------------------
# Validation errors
# ---------------------------------------------------------------------------

_VARIANT_ERRORS = frozenset({"enum", "union_tag_invalid"})


def _deserialization_error(exc: ValidationError, resource: str) -> NuclinoDeserializationError:
    """Translate the first pydantic error into a nuclino error."""
    errors = exc.errors(include_url=False)
    first = errors[0]
    kind = first["type"]
    ctx = first.get("ctx") or {}
    location = [str(part) for part in first["loc"]]

    if kind == "union_tag_invalid":
        location.append(str(ctx.get("discriminator", "object")).strip("'"))
    field_name = ".".join(location)
    where = f"{resource}.{field_name}" if field_name else resource
    message = f"{where}: {first['msg']}"
    if len(errors) > 1:
        message += f" (and {len(errors) - 1} more)"

    if kind in _VARIANT_ERRORS:
        variant = ctx.get("tag") if kind == "union_tag_invalid" else first["input"]
        allowed = ctx.get("expected_tags") if kind == "union_tag_invalid" else ctx.get("expected")
        return NuclinoUnknownVariantError(
            message,
            context={"resource": resource, "field": field_name, "variant": variant, "allowed": allowed},
            cause=exc,
        )

    context: dict[str, Any] = {"resource": resource, "field": field_name, "error_type": kind}
    if kind != "missing":
        context["value"] = first["input"]
    return NuclinoDeserializationError(message, context=context, cause=exc)


# ---------------------------------------------------------------------------
# Base model
# ---------------------------------------------------------------------------

class NuclinoModel(BaseModel):
    """Frozen, camelCase-aliased base of every resource model."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    resource_name: ClassVar[str] = "object"

    @classmethod
    def from_dict(cls: type[M], data: Any) -> M:
        """Validate one JSON object from the service."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise _deserialization_error(exc, cls.resource_name) from exc

    def to_dict(self) -> dict[str, Any]:
        """Dump to the service's camelCase JSON, leaving out unset optionals."""
        return self.model_dump(mode="json", by_alias=True)

    @model_serializer(mode="wrap")
    def serialize_wire(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PageKind(str, Enum):
    """The two kinds of page, keyed by the ``object`` field on the wire."""

    ITEM = "item"
    """A regular wiki page with Markdown content."""

    COLLECTION = "collection"
    """A page that only lists other pages."""


class FieldType(str, Enum):
    """The closed set of workspace field types."""

    DATE = "date"
    TEXT = "text"
    NUMBER = "number"
    CURRENCY = "currency"
    SELECT = "select"
    MULTI_SELECT = "multiSelect"
    MULTI_COLLABORATOR = "multiCollaborator"
    CREATED_BY = "createdBy"
    LAST_UPDATED_BY = "lastUpdatedBy"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

    @property
    def has_config(self) -> bool:
        """Whether fields of this type carry a ``config`` object."""
        return self in _CONFIGURABLE_FIELD_TYPES


_CONFIGURABLE_FIELD_TYPES = frozenset({
    FieldType.NUMBER,
    FieldType.CURRENCY,
    FieldType.SELECT,
    FieldType.MULTI_SELECT,
    FieldType.CREATED_AT,
    FieldType.UPDATED_AT,
})


# ---------------------------------------------------------------------------
# Users, teams, workspaces
# ---------------------------------------------------------------------------

class User(NuclinoModel):
    """A Nuclino user.  Referenced by id from other resources."""

    resource_name: ClassVar[str] = "user"

    object: Literal["user"] = "user"
    id: str
    first_name: str
    last_name: str
    email: str
    avatar_url: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Team(NuclinoModel):
    """A Nuclino team, the top-level owner of workspaces."""

    resource_name: ClassVar[str] = "team"

    object: Literal["team"] = "team"
    id: str
    url: str
    name: str
    created_at: Timestamp
    created_user_id: str


class SelectOption(NuclinoModel):
    """One choice of a select / multi-select field."""

    resource_name: ClassVar[str] = "selectOption"

    id: str
    name: str


class FieldConfig(NuclinoModel):
    """Type-specific settings of a field.

    Number and currency fields use ``fraction_digits`` (and ``currency``),
    select fields use ``options``, timestamp fields use ``include_time``.
    Fields without configuration get an empty instance.
    """

    resource_name: ClassVar[str] = "fieldConfig"

    fraction_digits: StrictInt | None = None
    currency: str | None = None
    options: tuple[SelectOption, ...] | None = None
    include_time: StrictBool | None = None

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.fraction_digits, self.currency, self.options, self.include_time)
        )


class Field(NuclinoModel):
    """A custom field defined on a workspace.

    Workspace fields describe which metadata its pages can carry; the values
    live on each :class:`Item` keyed by field name.
    """

    resource_name: ClassVar[str] = "field"

    object: Literal["field"] = "field"
    id: str
    name: str
    type: FieldType
    config: FieldConfig = pydantic.Field(default_factory=FieldConfig)

    @model_serializer(mode="wrap")
    def serialize_wire(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        out = {key: value for key, value in handler(self).items() if value is not None}
        if self.config.is_empty:
            out.pop("config", None)
        return out


class Workspace(NuclinoModel):
    """A workspace: the container that owns a tree of pages."""

    resource_name: ClassVar[str] = "workspace"

    object: Literal["workspace"] = "workspace"
    id: str
    team_id: str
    name: str
    created_at: Timestamp
    created_user_id: str
    fields: tuple[Field, ...] = ()
    child_ids: tuple[str, ...] = ()

    def field_by_name(self, name: str) -> Field | None:
        return next((f for f in self.fields if f.name == name), None)


# ---------------------------------------------------------------------------
# Pages: items and collections
# ---------------------------------------------------------------------------

class ContentMeta(NuclinoModel):
    """Ids of the pages and files referenced inside an item's content."""

    resource_name: ClassVar[str] = "contentMeta"

    item_ids: tuple[str, ...] = ()
    file_ids: tuple[str, ...] = ()


class Item(NuclinoModel):
    """A regular wiki page with Markdown content.

    ``content`` is only populated when the page is fetched by id; list and
    search results omit it.  ``highlight`` is only set on search results.
    ``fields`` is a read-only view, so items stay hashable by id and
    revision.
    """

    resource_name: ClassVar[str] = "item"
    kind: ClassVar[PageKind] = PageKind.ITEM

    object: Literal["item"] = "item"
    id: str
    workspace_id: str
    url: str
    title: str
    created_at: Timestamp
    created_user_id: str
    last_updated_at: Timestamp
    last_updated_user_id: str
    fields: FieldValues = pydantic.Field(default_factory=lambda: MappingProxyType({}))
    content: str | None = None
    content_meta: ContentMeta = pydantic.Field(default_factory=ContentMeta)
    highlight: str | None = None

    def __hash__(self) -> int:
        return hash((type(self), self.id, self.last_updated_at))


class Collection(NuclinoModel):
    """A page that holds an ordered list of child pages and no content."""

    resource_name: ClassVar[str] = "collection"
    kind: ClassVar[PageKind] = PageKind.COLLECTION

    object: Literal["collection"] = "collection"
    id: str
    workspace_id: str
    url: str
    title: str
    created_at: Timestamp
    created_user_id: str
    last_updated_at: Timestamp
    last_updated_user_id: str
    child_ids: tuple[str, ...] = ()


Page = Annotated[Union[Item, Collection], pydantic.Field(discriminator="object")]
"""Either kind of page.  Match on the concrete type (or ``page.kind``)."""

_PAGE_ADAPTER: TypeAdapter[Item | Collection] = TypeAdapter(Page)


def parse_page(data: Any) -> Item | Collection:
    """Deserialize an item or a collection, dispatching on ``object``."""
    try:
        return _PAGE_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise _deserialization_error(exc, "page") from exc


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

class DownloadInfo(NuclinoModel):
    """A short-lived link to a file's bytes."""

    resource_name: ClassVar[str] = "download"

    url: str
    expires_at: Timestamp

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at


class File(NuclinoModel):
    """Metadata of a file attached to an item."""

    resource_name: ClassVar[str] = "file"

    object: Literal["file"] = "file"
    id: str
    item_id: str
    file_name: str
    created_at: Timestamp
    created_user_id: str
    download: DownloadInfo


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------

class IdOnly(NuclinoModel):
    """The id-only body returned by ``DELETE`` endpoints."""

    resource_name: ClassVar[str] = "id"

    id: str


class ResourceList(NuclinoModel, Generic[T]):
    """One page of a list response.

    Parametrize with the result type before parsing, e.g.
    ``ResourceList[Team].from_dict(data)`` or ``ResourceList[Page]``.
    ``results`` keeps the order the server returned.  ``total`` is the
    server-reported count when the response carries one.  The service
    paginates by cursor: pass :attr:`next_after` as ``after`` to fetch the
    following page.
    """

    resource_name: ClassVar[str] = "list"

    object: Literal["list"] = "list"
    results: tuple[T, ...]
    total: StrictInt | None = None

    @property
    def next_after(self) -> str | None:
        """Cursor for the next page: the id of the last result."""
        if not self.results:
            return None
        return self.results[-1].id  # type: ignore[attr-defined]

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[T]:  # type: ignore[override]
        return iter(self.results)

    def __getitem__(self, index: int) -> T:
        return self.results[index]
