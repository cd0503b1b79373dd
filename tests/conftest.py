"""Shared test fixtures for the nuclino test suite.

The payload fixtures mirror the example responses of the Nuclino API
documentation and return a fresh dict on every use.
"""

from __future__ import annotations

import pytest

from nuclino.config import NuclinoConfig

USER_ID = "2e96f1f4-f5a2-4d4c-8b15-46e6a4b2c3d1"
TEAM_ID = "e3f4bd2c-3b0c-4f38-9a6e-2b8c7a1d5e90"
WORKSPACE_ID = "5cb1c3b5-9e61-4a3f-8f0e-0c6f4d2b7a11"
ITEM_ID = "3a4e8f1b-7c2d-4e5f-a6b7-c8d9e0f1a2b3"
COLLECTION_ID = "9f8e7d6c-5b4a-4392-8170-fedcba987654"
FILE_ID = "b1c2d3e4-f5a6-4b7c-8d9e-0f1a2b3c4d5e"


@pytest.fixture
def config() -> NuclinoConfig:
    """Default test configuration with a dummy API key."""
    return NuclinoConfig(api_key="test-key-1234abcd")


@pytest.fixture
def user_payload() -> dict:
    return {
        "object": "user",
        "id": USER_ID,
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane.doe@example.com",
        "avatarUrl": "https://files.nuclino.com/avatars/jane.png",
    }


@pytest.fixture
def team_payload() -> dict:
    return {
        "object": "team",
        "id": TEAM_ID,
        "url": "https://app.nuclino.com/My-Team",
        "name": "My Team",
        "createdAt": "2021-12-15T07:48:50.123Z",
        "createdUserId": USER_ID,
    }


@pytest.fixture
def workspace_payload() -> dict:
    return {
        "object": "workspace",
        "id": WORKSPACE_ID,
        "teamId": TEAM_ID,
        "name": "Engineering",
        "createdAt": "2021-12-15T07:48:50.123Z",
        "createdUserId": USER_ID,
        "fields": [
            {
                "object": "field",
                "id": "f-deadline",
                "type": "date",
                "name": "Deadline",
            },
            {
                "object": "field",
                "id": "f-status",
                "type": "select",
                "name": "Status",
                "config": {
                    "options": [
                        {"id": "opt-open", "name": "Open"},
                        {"id": "opt-done", "name": "Done"},
                    ]
                },
            },
            {
                "object": "field",
                "id": "f-budget",
                "type": "currency",
                "name": "Budget",
                "config": {"fractionDigits": 2, "currency": "EUR"},
            },
            {
                "object": "field",
                "id": "f-created",
                "type": "createdAt",
                "name": "Created",
                "config": {"includeTime": True},
            },
        ],
        "childIds": [ITEM_ID, COLLECTION_ID],
    }


@pytest.fixture
def item_payload() -> dict:
    return {
        "object": "item",
        "id": ITEM_ID,
        "workspaceId": WORKSPACE_ID,
        "url": "https://app.nuclino.com/My-Team/Engineering/Onboarding-3a4e8f1b",
        "title": "Onboarding",
        "createdAt": "2021-12-15T07:48:50.123Z",
        "createdUserId": USER_ID,
        "lastUpdatedAt": "2022-01-03T10:00:00.000Z",
        "lastUpdatedUserId": USER_ID,
        "fields": {"Deadline": "2022-02-01", "Status": "Open"},
        "content": "# Welcome\n\nRead the [handbook](https://example.com).",
        "contentMeta": {"itemIds": [COLLECTION_ID], "fileIds": [FILE_ID]},
    }


@pytest.fixture
def collection_payload() -> dict:
    return {
        "object": "collection",
        "id": COLLECTION_ID,
        "workspaceId": WORKSPACE_ID,
        "url": "https://app.nuclino.com/My-Team/Engineering/Guides-9f8e7d6c",
        "title": "Guides",
        "createdAt": "2021-12-16T09:30:00.000Z",
        "createdUserId": USER_ID,
        "lastUpdatedAt": "2021-12-16T09:30:00.000Z",
        "lastUpdatedUserId": USER_ID,
        "childIds": [ITEM_ID],
    }


@pytest.fixture
def file_payload() -> dict:
    return {
        "object": "file",
        "id": FILE_ID,
        "itemId": ITEM_ID,
        "fileName": "architecture.png",
        "createdAt": "2021-12-15T07:48:50.123Z",
        "createdUserId": USER_ID,
        "download": {
            "url": "https://files.nuclino.com/files/b1c2d3e4/architecture.png?sig=abc",
            "expiresAt": "2021-12-15T08:48:50.123Z",
        },
    }
