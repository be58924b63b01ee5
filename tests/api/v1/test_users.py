"""
Tests for users API endpoints.

These tests cover the /api/v1/users endpoints including:
- Registering users (and refusing duplicates)
- Reading users, including the empty-object answer for unknown ids
- lastAccess bookkeeping on reads
"""

from datetime import UTC, datetime

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from maskshare.models import Users


@pytest.mark.api
class TestCreateUser:
    """Tests for POST /api/v1/users endpoint."""

    async def test_create_user(self, client: AsyncClient, db_session: AsyncSession):
        """New users are stored with both permissions granted."""
        response = await client.post(
            "/api/v1/users",
            json={"googleId": "g-123", "name": "Ada", "photoUrl": "https://img.example.com/ada.png"},
        )
        assert response.status_code == 200
        assert response.text == "User created"

        user = await db_session.get(Users, "g-123")
        assert user is not None
        assert user.name == "Ada"
        assert user.photo_url == "https://img.example.com/ada.png"
        assert user.can_comment is True
        assert user.can_upload is True
        assert user.creation_date is not None
        assert user.last_access is not None

    async def test_photo_url_is_optional(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post("/api/v1/users", json={"googleId": "g-1", "name": "Bo"})
        assert response.status_code == 200

        user = await db_session.get(Users, "g-1")
        assert user is not None
        assert user.photo_url is None

    async def test_duplicate_user_is_rejected_without_overwrite(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        """Registering an existing id fails and keeps the original record."""
        first = await client.post("/api/v1/users", json={"googleId": "g-dup", "name": "Original"})
        assert first.status_code == 200

        second = await client.post("/api/v1/users", json={"googleId": "g-dup", "name": "Impostor"})
        assert second.status_code == 400
        assert second.text == "User already exists"

        user = await db_session.get(Users, "g-dup")
        assert user is not None
        assert user.name == "Original"

    @pytest.mark.parametrize(
        "payload, field",
        [
            ({"name": "NoId"}, "googleId"),
            ({"googleId": "g-2"}, "name"),
            ({"googleId": "", "name": "Empty"}, "googleId"),
            ({"googleId": "g-3", "name": ""}, "name"),
        ],
    )
    async def test_missing_fields(self, client: AsyncClient, payload: dict, field: str):
        """Missing or empty required fields are 400s naming the field."""
        response = await client.post("/api/v1/users", json=payload)
        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == f"Missing required field: {field}"

    async def test_whitespace_name_is_rejected(self, client: AsyncClient):
        response = await client.post("/api/v1/users", json={"googleId": "g-4", "name": "   "})
        assert response.status_code == 400

    async def test_wrong_method(self, client: AsyncClient):
        response = await client.put("/api/v1/users", json={"googleId": "g-5", "name": "X"})
        assert response.status_code == 405


@pytest.mark.api
class TestGetUser:
    """Tests for GET /api/v1/users endpoint."""

    async def test_get_user(self, client: AsyncClient, test_user: Users):
        response = await client.get("/api/v1/users", params={"googleId": test_user.google_id})
        assert response.status_code == 200
        data = response.json()
        assert data["googleId"] == test_user.google_id
        assert data["name"] == test_user.name
        assert data["canComment"] is True
        assert data["canUpload"] is True
        assert data["creationDate"].endswith("Z")
        assert data["lastAccess"].endswith("Z")

    async def test_unknown_user_returns_empty_object(self, client: AsyncClient):
        """Unknown ids answer 200 with {} rather than 404."""
        response = await client.get("/api/v1/users", params={"googleId": "nobody"})
        assert response.status_code == 200
        assert response.json() == {}

    async def test_read_updates_last_access(
        self, client: AsyncClient, db_session: AsyncSession, test_user: Users
    ):
        test_user.last_access = datetime(2020, 1, 1, tzinfo=UTC)
        await db_session.commit()

        response = await client.get("/api/v1/users", params={"googleId": test_user.google_id})
        assert response.status_code == 200
        assert not response.json()["lastAccess"].startswith("2020-01-01")

        await db_session.refresh(test_user)
        assert test_user.last_access.year > 2020

    async def test_missing_google_id(self, client: AsyncClient):
        response = await client.get("/api/v1/users")
        assert response.status_code == 400
        assert response.text == "Missing required field: googleId"
