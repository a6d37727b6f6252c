"""
Relationship Service

Maintains each user's followers and followings sets.

Rules:
======
- A user never appears in their own followers or followings.
- Both sets are sets: ADD of a present member and REMOVE of an absent
  member change nothing.
- The two sets are independent. Adding B to A's followings does not add
  A to B's followers; callers that want both sides make two calls.

Validation Order:
=================
    1. current == other           → SelfReferenceError
    2. current user missing       → UserNotFoundError
    3. other user missing         → UserNotFoundError
    4. apply ADD/REMOVE atomically, return the fresh projection

Both directions share one code path, so they get the same guarantees:
the mutation is a single INSERT ... ON CONFLICT DO NOTHING or DELETE
inside the request transaction.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import SelfReferenceError, UserNotFoundError
from src.shared.core.logging import logger
from src.shared.models.enums import Operation, RelationshipType
from src.shared.repositories.user_repository import UserRepository
from src.shared.schemas.user import UserResponse, to_user_response


class RelationshipService:
    """Service for follower/following business logic."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)

    async def update_followers(
        self,
        current_user_id: UUID,
        other_user_id: UUID,
        operation: Operation,
    ) -> UserResponse:
        """
        Add or remove other_user_id in current_user_id's followers.

        Args:
            current_user_id: Owner of the followers set
            other_user_id: Follower being added or removed
            operation: ADD or REMOVE

        Returns:
            Updated projection of the current user

        Raises:
            SelfReferenceError: If both ids are equal
            UserNotFoundError: If either user does not exist
        """
        return await self._update(current_user_id, other_user_id, operation, RelationshipType.FOLLOWER)

    async def update_followings(
        self,
        current_user_id: UUID,
        other_user_id: UUID,
        operation: Operation,
    ) -> UserResponse:
        """
        Add or remove other_user_id in current_user_id's followings.

        Same contract as update_followers().
        """
        return await self._update(current_user_id, other_user_id, operation, RelationshipType.FOLLOWING)

    async def followers_of(self, user_id: UUID) -> set[UUID]:
        """Ids of the users following user_id."""
        return await self._related_ids(user_id, RelationshipType.FOLLOWER)

    async def followings_of(self, user_id: UUID) -> set[UUID]:
        """Ids of the users user_id follows."""
        return await self._related_ids(user_id, RelationshipType.FOLLOWING)

    # ═══════════════════════════════════════════════════════════════════════════
    # INTERNALS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _update(
        self,
        current_user_id: UUID,
        other_user_id: UUID,
        operation: Operation,
        relationship_type: RelationshipType,
    ) -> UserResponse:
        if current_user_id == other_user_id:
            logger.warning(
                "Rejected self reference",
                user_id=str(current_user_id),
                relationship_type=relationship_type.value,
            )
            raise SelfReferenceError(relationship_type.set_name)

        if not await self.repo.exists(current_user_id):
            raise UserNotFoundError(str(current_user_id))

        if not await self.repo.exists(other_user_id):
            raise UserNotFoundError(str(other_user_id))

        if operation == Operation.ADD:
            changed = await self.repo.add_relation(current_user_id, other_user_id, relationship_type)
        else:
            changed = await self.repo.remove_relation(current_user_id, other_user_id, relationship_type)

        logger.info(
            "Relationship set updated",
            user_id=str(current_user_id),
            other_user_id=str(other_user_id),
            relationship_type=relationship_type.value,
            operation=operation.value,
            changed=changed,
        )

        user = await self.repo.reload(current_user_id)
        if user is None:
            # Deleted between the existence check and the reload
            raise UserNotFoundError(str(current_user_id))

        logger.debug("User details", user=repr(user))
        return to_user_response(user)

    async def _related_ids(self, user_id: UUID, relationship_type: RelationshipType) -> set[UUID]:
        if not await self.repo.exists(user_id):
            raise UserNotFoundError(str(user_id))
        return await self.repo.get_related_ids(user_id, relationship_type)
