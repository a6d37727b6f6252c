"""Integration tests for RelationshipService against SQLite."""

import asyncio
from uuid import uuid4

import pytest

from src.shared.core.exceptions import NotFoundError, SelfReferenceError, UserNotFoundError
from src.shared.models.enums import Operation
from src.shared.repositories.user_repository import UserRepository
from src.shared.services.relationship_service import RelationshipService


@pytest.fixture
def service(session):
    return RelationshipService(session)


class TestUpdateFollowers:
    """Followers set mutations."""

    async def test_add_follower(self, service, alice, bob):
        result = await service.update_followers(alice.id, bob.id, Operation.ADD)

        assert result.id == alice.id
        assert result.followers == {bob.id}
        assert result.followings == set()

    async def test_add_twice_keeps_single_member(self, service, alice, bob):
        await service.update_followers(alice.id, bob.id, Operation.ADD)
        result = await service.update_followers(alice.id, bob.id, Operation.ADD)

        assert result.followers == {bob.id}
        assert await service.followers_of(alice.id) == {bob.id}

    async def test_add_then_remove_restores_previous_set(self, service, alice, bob, carol):
        await service.update_followers(alice.id, carol.id, Operation.ADD)
        before = await service.followers_of(alice.id)

        await service.update_followers(alice.id, bob.id, Operation.ADD)
        result = await service.update_followers(alice.id, bob.id, Operation.REMOVE)

        assert result.followers == before == {carol.id}

    async def test_remove_absent_member_is_noop(self, service, alice, bob):
        result = await service.update_followers(alice.id, bob.id, Operation.REMOVE)

        assert result.followers == set()

    @pytest.mark.parametrize("operation", [Operation.ADD, Operation.REMOVE])
    async def test_self_reference_rejected(self, service, alice, operation):
        with pytest.raises(SelfReferenceError) as exc_info:
            await service.update_followers(alice.id, alice.id, operation)

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "SELF_REFERENCE"
        assert "followers" in exc_info.value.message

    async def test_self_reference_checked_before_existence(self, service):
        ghost = uuid4()

        with pytest.raises(SelfReferenceError):
            await service.update_followers(ghost, ghost, Operation.ADD)

    async def test_unknown_current_user(self, service, bob):
        missing = uuid4()

        with pytest.raises(UserNotFoundError) as exc_info:
            await service.update_followers(missing, bob.id, Operation.ADD)

        assert str(missing) in exc_info.value.message

    async def test_unknown_target_user(self, service, alice):
        missing = uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            await service.update_followers(alice.id, missing, Operation.ADD)

        assert str(missing) in exc_info.value.message
        assert await service.followers_of(alice.id) == set()

    async def test_does_not_touch_other_users_record(self, service, alice, bob):
        await service.update_followers(alice.id, bob.id, Operation.ADD)

        assert await service.followers_of(bob.id) == set()
        assert await service.followings_of(bob.id) == set()

    async def test_scenario(self, service, alice, bob):
        """ADD, repeated ADD, REMOVE, then a self follow."""
        assert (await service.update_followers(alice.id, bob.id, Operation.ADD)).followers == {bob.id}
        assert (await service.update_followers(alice.id, bob.id, Operation.ADD)).followers == {bob.id}
        assert (await service.update_followers(alice.id, bob.id, Operation.REMOVE)).followers == set()

        with pytest.raises(SelfReferenceError):
            await service.update_followers(alice.id, alice.id, Operation.ADD)


class TestUpdateFollowings:
    """Followings set mutations."""

    async def test_add_and_remove_following(self, service, alice, bob):
        added = await service.update_followings(alice.id, bob.id, Operation.ADD)
        assert added.followings == {bob.id}
        assert added.followers == set()

        removed = await service.update_followings(alice.id, bob.id, Operation.REMOVE)
        assert removed.followings == set()

    @pytest.mark.parametrize("operation", [Operation.ADD, Operation.REMOVE])
    async def test_unknown_target_fails_for_every_operation(self, service, alice, operation):
        with pytest.raises(NotFoundError):
            await service.update_followings(alice.id, uuid4(), operation)

    async def test_self_reference_rejected(self, service, alice):
        with pytest.raises(SelfReferenceError) as exc_info:
            await service.update_followings(alice.id, alice.id, Operation.ADD)

        assert "followings" in exc_info.value.message

    async def test_following_does_not_update_target_followers(self, service, alice, bob):
        await service.update_followings(alice.id, bob.id, Operation.ADD)

        assert await service.followers_of(bob.id) == set()

    async def test_sets_are_independent(self, service, alice, bob, carol):
        await service.update_followers(alice.id, bob.id, Operation.ADD)
        await service.update_followings(alice.id, carol.id, Operation.ADD)
        result = await service.update_followings(alice.id, bob.id, Operation.ADD)

        assert result.followers == {bob.id}
        assert result.followings == {bob.id, carol.id}


class TestReadHelpers:
    """followers_of / followings_of."""

    async def test_unknown_user(self, service):
        with pytest.raises(UserNotFoundError):
            await service.followers_of(uuid4())

        with pytest.raises(UserNotFoundError):
            await service.followings_of(uuid4())

    async def test_many_followers(self, service, make_user, alice):
        fans = [await make_user(f"fan{i}") for i in range(5)]

        for fan in fans:
            await service.update_followers(alice.id, fan.id, Operation.ADD)

        assert await service.followers_of(alice.id) == {fan.id for fan in fans}


class TestConcurrentUpdates:
    """Parallel mutations of one user's sets, one session per request."""

    async def test_concurrent_adds_all_land(self, session_factory):
        async with session_factory() as session:
            repo = UserRepository(session)
            alice = await repo.create(id=uuid4(), username="alice", email="alice@example.com", roles=[])
            fans = [
                await repo.create(id=uuid4(), username=f"fan{i}", email=f"fan{i}@example.com", roles=[])
                for i in range(6)
            ]
            await session.commit()

        async def follow(fan_id):
            async with session_factory() as session:
                await RelationshipService(session).update_followers(alice.id, fan_id, Operation.ADD)
                await session.commit()

        # Every fan is added twice
        await asyncio.gather(*(follow(fan.id) for fan in fans * 2))

        async with session_factory() as session:
            followers = await RelationshipService(session).followers_of(alice.id)
        assert followers == {fan.id for fan in fans}
