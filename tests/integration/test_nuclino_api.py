"""Integration tests against the live Nuclino API.

These tests require a real API key and a workspace the key may write to.
Set NUCLINO_API_KEY and NUCLINO_TEST_WORKSPACE_ID to run them.

Usage:
    NUCLINO_API_KEY=xxx NUCLINO_TEST_WORKSPACE_ID=xxx pytest tests/integration/ -v
"""
import os

import pytest

# Skip entire module if no key is configured
pytestmark = pytest.mark.skipif(
    not os.environ.get("NUCLINO_API_KEY"),
    reason="NUCLINO_API_KEY not set; skipping integration tests",
)


@pytest.fixture
def client():
    from nuclino import NuclinoClient
    with NuclinoClient.from_env() as c:
        yield c


@pytest.fixture
def workspace_id():
    wid = os.environ.get("NUCLINO_TEST_WORKSPACE_ID")
    if not wid:
        pytest.skip("NUCLINO_TEST_WORKSPACE_ID not set")
    return wid


class TestReadOnly:
    def test_list_teams(self, client):
        teams = client.list_teams()
        assert len(teams) >= 1
        assert client.get_team(teams[0].id).id == teams[0].id

    def test_list_workspaces(self, client):
        workspaces = client.list_workspaces(limit=5)
        assert len(workspaces) <= 5

    def test_missing_page(self, client):
        from nuclino import NuclinoNotFoundError

        with pytest.raises(NuclinoNotFoundError):
            client.get_page("00000000-0000-0000-0000-000000000000")

    def test_bad_key(self):
        from nuclino import NuclinoAuthError, NuclinoClient

        with NuclinoClient(api_key="definitely-not-a-valid-key") as c:
            with pytest.raises(NuclinoAuthError):
                c.list_teams()


class TestPageLifecycle:
    def test_create_update_delete(self, client, workspace_id):
        from nuclino import Item, NewPageBuilder

        page = client.create_page(
            NewPageBuilder.item()
            .title("nuclino integration test")
            .content("Created by the nuclino Python client test suite.")
            .workspace(workspace_id)
            .build()
        )
        try:
            assert isinstance(page, Item)
            updated = client.update_page(page.id, title="nuclino integration test (renamed)")
            assert updated.title == "nuclino integration test (renamed)"

            fetched = client.get_page(page.id)
            assert fetched.content.startswith("Created by")
        finally:
            assert client.delete_page(page.id).id == page.id

    def test_iter_pages(self, client, workspace_id):
        ids = [p.id for p in client.iter_pages(workspace_id=workspace_id, page_size=10)]
        assert len(ids) == len(set(ids))
