"""API tests for the /users endpoints with dependency overrides."""

from uuid import uuid4

import httpx
import pytest_asyncio

from src.api.dependencies.database import get_db
from src.api.dependencies.services import get_identity_provider
from src.api.main import create_application


@pytest_asyncio.fixture
async def client(session, identity_provider):
    app = create_application()

    async def override_get_db():
        yield session
        await session.commit()

    async def override_get_identity_provider():
        return identity_provider

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = override_get_identity_provider

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestRegistration:
    """POST /users/register"""

    async def test_register(self, client, identity_provider):
        response = await client.post(
            "/users/register",
            json={"username": "dave", "email": "dave@example.com", "password": "correct-horse"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["user"]["username"] == "dave"
        assert body["data"]["user"]["id"] == str(identity_provider.created[0][0])
        assert "password" not in body["data"]["user"]

    async def test_register_conflict(self, client, alice):
        response = await client.post(
            "/users/register",
            json={"username": "alice", "email": "new@example.com", "password": "correct-horse"},
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    async def test_register_validation_error(self, client):
        response = await client.post(
            "/users/register",
            json={"username": "dave", "email": "dave@example.com", "password": "short"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestLookup:
    """GET endpoints."""

    async def test_by_username(self, client, alice):
        response = await client.get("/users/by-username/alice")

        assert response.status_code == 200
        assert response.json()["data"]["user"]["id"] == str(alice.id)

    async def test_by_id_not_found(self, client):
        response = await client.get(f"/users/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    async def test_exists(self, client, alice):
        taken = await client.get("/users/exists", params={"username": "x", "email": "alice@example.com"})
        free = await client.get("/users/exists", params={"username": "x", "email": "x@example.com"})

        assert taken.json() == {"exists": True}
        assert free.json() == {"exists": False}


class TestRelationships:
    """PUT followers/followings."""

    async def test_add_and_remove_follower(self, client, alice, bob):
        added = await client.put(
            f"/users/{alice.id}/followers",
            json={"user_id": str(bob.id), "operation": "ADD"},
        )
        assert added.status_code == 200
        assert added.json()["data"]["user"]["followers"] == [str(bob.id)]

        removed = await client.put(
            f"/users/{alice.id}/followers",
            json={"user_id": str(bob.id), "operation": "REMOVE"},
        )
        assert removed.json()["data"]["user"]["followers"] == []

    async def test_follow_self(self, client, alice):
        response = await client.put(
            f"/users/{alice.id}/followings",
            json={"user_id": str(alice.id), "operation": "ADD"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "SELF_REFERENCE"

    async def test_follow_unknown_user(self, client, alice):
        response = await client.put(
            f"/users/{alice.id}/followings",
            json={"user_id": str(uuid4()), "operation": "ADD"},
        )

        assert response.status_code == 404

    async def test_invalid_operation(self, client, alice, bob):
        response = await client.put(
            f"/users/{alice.id}/followers",
            json={"user_id": str(bob.id), "operation": "TOGGLE"},
        )

        assert response.status_code == 400
