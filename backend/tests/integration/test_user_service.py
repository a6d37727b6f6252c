"""Integration tests for UserService against SQLite with a fake identity provider."""

import asyncio
from uuid import uuid4

import pytest

from src.shared.core.exceptions import ConflictError, UserAlreadyExistsError, UserNotFoundError
from src.shared.repositories.user_repository import UserRepository
from src.shared.schemas.user import UserCreate, UserResponse
from src.shared.services.user_service import UserService


@pytest.fixture
def service(session, identity_provider):
    return UserService(session, identity_provider)


def registration(username="dave", email="dave@example.com"):
    return UserCreate(
        username=username,
        email=email,
        password="correct-horse",
        first_name="Dave",
        last_name="Lister",
    )


class TestRegisterUser:
    """Registration flow."""

    async def test_register_uses_identity_provider_id_and_role(self, service, identity_provider):
        result = await service.register_user(registration())

        created_id, forwarded = identity_provider.created[0]
        assert result.id == created_id
        assert forwarded.password == "correct-horse"
        assert result.username == "dave"
        assert result.email == "dave@example.com"
        assert result.first_name == "Dave"
        assert result.roles == ["default-roles-troop"]
        assert result.followers == set()
        assert result.followings == set()

    async def test_registered_user_is_stored(self, service):
        result = await service.register_user(registration())

        assert (await service.get_user_by_id(result.id)).username == "dave"

    async def test_duplicate_username_rejected(self, service, identity_provider, alice):
        with pytest.raises(UserAlreadyExistsError) as exc_info:
            await service.register_user(registration(username="alice"))

        assert exc_info.value.status_code == 409
        assert identity_provider.created == []

    async def test_duplicate_email_rejected(self, service, alice):
        with pytest.raises(ConflictError):
            await service.register_user(registration(email="alice@example.com"))

    async def test_requires_identity_provider(self, session):
        with pytest.raises(RuntimeError):
            await UserService(session).register_user(registration())


class TestLookup:
    """Lookup by username and id."""

    async def test_get_by_username(self, service, alice):
        result = await service.get_user_by_username("alice")

        assert result.id == alice.id

    async def test_get_by_username_missing(self, service):
        with pytest.raises(UserNotFoundError) as exc_info:
            await service.get_user_by_username("nobody")

        assert exc_info.value.message == "User with username 'nobody' not found"

    async def test_get_by_id_missing(self, service):
        with pytest.raises(UserNotFoundError):
            await service.get_user_by_id(uuid4())

    async def test_get_user_id_by_username(self, service, alice):
        assert await service.get_user_id_by_username("alice") == alice.id


class TestUserExists:
    """Username OR email uniqueness check."""

    async def test_neither_exists(self, service):
        assert await service.user_exists("alice", "a@x.com") is False

    async def test_username_exists(self, service, make_user):
        await make_user("alice", "other@example.com")

        assert await service.user_exists("alice", "a@x.com") is True

    async def test_email_exists(self, service, make_user):
        await make_user("someone", "a@x.com")

        assert await service.user_exists("alice", "a@x.com") is True

    async def test_both_exist(self, service, make_user):
        await make_user("alice", "a@x.com")

        assert await service.user_exists("alice", "a@x.com") is True


class TestConcurrentRegistration:
    """Two registrations for the same username, one session each."""

    async def test_loser_gets_conflict(self, session_factory, gated_identity_provider):
        async def register():
            async with session_factory() as session:
                result = await UserService(session, gated_identity_provider).register_user(registration())
                await session.commit()
                return result

        outcomes = await asyncio.gather(register(), register(), return_exceptions=True)

        assert len(gated_identity_provider.created) == 2
        assert sum(isinstance(outcome, UserResponse) for outcome in outcomes) == 1
        assert sum(isinstance(outcome, UserAlreadyExistsError) for outcome in outcomes) == 1

        async with session_factory() as session:
            stored = await UserRepository(session).get_by_username("dave")
        winner = next(outcome for outcome in outcomes if isinstance(outcome, UserResponse))
        assert stored.id == winner.id
