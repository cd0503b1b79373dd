"""Tests for nuclino/builders.py: NewPageBuilder, NewPage and ModifyPage."""

from __future__ import annotations

import pytest

from nuclino.builders import ModifyPage, NewPage, NewPageBuilder
from nuclino.errors import NuclinoValidationError
from nuclino.models import PageKind


class TestNewPageBuilder:
    def test_item_in_workspace(self):
        page = (
            NewPageBuilder.item()
            .title("Release notes")
            .content("# 1.2.0")
            .workspace("ws-1")
            .build()
        )
        assert page == NewPage(
            kind=PageKind.ITEM,
            title="Release notes",
            workspace_id="ws-1",
            content="# 1.2.0",
        )

    def test_collection_under_parent_at_index(self):
        page = NewPageBuilder.collection().title("Guides").parent("col-1").index(0).build()
        assert page.kind is PageKind.COLLECTION
        assert page.parent_id == "col-1"
        assert page.workspace_id is None
        assert page.index == 0

    def test_default_kind_is_item(self):
        assert NewPageBuilder().kind is PageKind.ITEM

    def test_setters_chain(self):
        builder = NewPageBuilder.item()
        assert builder.title("t") is builder
        assert builder.content("c") is builder
        assert builder.workspace("w") is builder
        assert builder.parent("p") is builder
        assert builder.index(1) is builder

    def test_collection_drops_content(self):
        page = NewPageBuilder.collection().title("C").content("ignored").workspace("ws-1").build()
        assert page.content is None
        assert "content" not in page.to_dict()

    def test_parent_replaces_workspace(self):
        page = NewPageBuilder.item().title("T").workspace("ws-1").parent("col-1").build()
        assert page.workspace_id is None
        assert page.parent_id == "col-1"

    def test_workspace_replaces_parent(self):
        page = NewPageBuilder.item().title("T").parent("col-1").workspace("ws-1").build()
        assert page.workspace_id == "ws-1"
        assert page.parent_id is None

    def test_last_title_wins(self):
        page = NewPageBuilder.item().title("first").title("second").workspace("w").build()
        assert page.title == "second"


class TestNewPageBuilderValidation:
    def test_missing_title(self):
        with pytest.raises(NuclinoValidationError) as exc_info:
            NewPageBuilder.item().workspace("ws-1").build()
        assert exc_info.value.field == "title"

    @pytest.mark.parametrize("title", ["", "   ", "\n"])
    def test_blank_title(self, title):
        with pytest.raises(NuclinoValidationError) as exc_info:
            NewPageBuilder.item().title(title).workspace("ws-1").build()
        assert exc_info.value.field == "title"

    def test_missing_location(self):
        with pytest.raises(NuclinoValidationError) as exc_info:
            NewPageBuilder.item().title("T").build()
        assert exc_info.value.field == "workspace_id"

    @pytest.mark.parametrize("index", [-1, 1.5, True, "2"])
    def test_invalid_index(self, index):
        with pytest.raises(NuclinoValidationError) as exc_info:
            NewPageBuilder.item().title("T").workspace("w").index(index).build()
        assert exc_info.value.field == "index"

    def test_builder_is_single_use(self):
        builder = NewPageBuilder.item().title("T").workspace("w")
        builder.build()
        with pytest.raises(NuclinoValidationError):
            builder.build()
        with pytest.raises(NuclinoValidationError):
            builder.title("again")

    def test_failed_build_can_be_fixed(self):
        builder = NewPageBuilder.item().workspace("w")
        with pytest.raises(NuclinoValidationError):
            builder.build()
        assert builder.title("T").build().title == "T"


class TestNewPageToDict:
    def test_item_body(self):
        page = NewPageBuilder.item().title("T").content("body").workspace("ws-1").index(3).build()
        assert page.to_dict() == {
            "object": "item",
            "title": "T",
            "workspaceId": "ws-1",
            "index": 3,
            "content": "body",
        }

    def test_collection_body(self):
        page = NewPageBuilder.collection().title("C").parent("col-1").build()
        assert page.to_dict() == {"object": "collection", "title": "C", "parentId": "col-1"}

    def test_frozen(self):
        page = NewPageBuilder.item().title("T").workspace("w").build()
        with pytest.raises(AttributeError):
            page.title = "changed"  # type: ignore[misc]


class TestModifyPage:
    def test_title_only(self):
        assert ModifyPage(title="New").to_dict() == {"title": "New"}

    def test_content_only(self):
        assert ModifyPage(content="body").to_dict() == {"content": "body"}

    def test_both(self):
        assert ModifyPage(title="New", content="").to_dict() == {"title": "New", "content": ""}

    def test_empty_update_rejected(self):
        with pytest.raises(NuclinoValidationError):
            ModifyPage().to_dict()
