"""
User Repository

Database operations specific to the User model and its relationship sets.
Extends BaseRepository with user-specific query methods.

Common Operations:
==================
- get_by_username()   → Find user by username
- get_by_email()      → Find user by email address
- username_exists()   → Check if username is taken
- email_exists()      → Check if email is taken
- add_relation()      → Atomically add a member to a relationship set
- remove_relation()   → Atomically remove a member from a relationship set
- get_related_ids()   → Read one relationship set

Atomic Set Operations:
======================
Relationship sets are never read, modified in Python and written back.
Each ADD and REMOVE is one statement against user_relationships:

    ADD:     INSERT ... ON CONFLICT DO NOTHING
    REMOVE:  DELETE ... WHERE user_id = ? AND related_user_id = ? AND relationship_type = ?

so concurrent callers touching the same user's set cannot lose each
other's updates, and a duplicate ADD is absorbed by the primary key.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.enums import RelationshipType
from src.shared.models.user import User
from src.shared.models.user_relationship import UserRelationship


# Dialects with an INSERT ... ON CONFLICT DO NOTHING construct
_CONFLICT_AWARE_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class UserRepository(BaseRepository[User]):
    """
    Repository for User database operations.

    Provides methods beyond basic CRUD:
    - Lookups and uniqueness checks by username and email
    - Set-semantics mutation of followers/followings
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize UserRepository.

        Args:
            session: Async database session
        """
        super().__init__(User, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_username(self, username: str) -> Optional[User]:
        """
        Get user by username.

        Args:
            username: Username to search for

        Returns:
            User if found, None otherwise

        SQL Generated:
            SELECT * FROM users WHERE username = 'alice'
        """
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for

        Returns:
            User if found, None otherwise
        """
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def username_exists(self, username: str) -> bool:
        """
        Check if username is already registered.

        Args:
            username: Username to check

        Returns:
            True if taken, False if available
        """
        result = await self.session.execute(select(User.id).where(User.username == username))
        return result.first() is not None

    async def email_exists(self, email: str) -> bool:
        """
        Check if email is already registered.

        Args:
            email: Email address to check

        Returns:
            True if taken, False if available
        """
        result = await self.session.execute(select(User.id).where(User.email == email))
        return result.first() is not None

    async def reload(self, user_id: UUID) -> Optional[User]:
        """
        Re-read a user, overwriting the copy held in the session.

        Needed after add_relation()/remove_relation(), which change rows
        behind the ORM's back and leave the loaded relationships stale.

        Args:
            user_id: User to re-read

        Returns:
            Fresh User, or None if it no longer exists
        """
        result = await self.session.execute(
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIP SETS
    # ═══════════════════════════════════════════════════════════════════════════

    async def add_relation(
        self,
        user_id: UUID,
        related_user_id: UUID,
        relationship_type: RelationshipType,
    ) -> bool:
        """
        Add a member to one of a user's relationship sets.

        Args:
            user_id: Owner of the set
            related_user_id: Member to add
            relationship_type: FOLLOWER or FOLLOWING

        Returns:
            True if the member was inserted, False if it was already present

        SQL Generated:
            INSERT INTO user_relationships (user_id, related_user_id, relationship_type)
            VALUES ('550e8400-...', '660e8400-...', 'FOLLOWER')
            ON CONFLICT DO NOTHING
        """
        statement = (
            self._insert()(UserRelationship)
            .values(
                user_id=user_id,
                related_user_id=related_user_id,
                relationship_type=relationship_type,
            )
            .on_conflict_do_nothing()
        )
        result = await self.session.execute(statement)
        return result.rowcount > 0

    async def remove_relation(
        self,
        user_id: UUID,
        related_user_id: UUID,
        relationship_type: RelationshipType,
    ) -> bool:
        """
        Remove a member from one of a user's relationship sets.

        Args:
            user_id: Owner of the set
            related_user_id: Member to remove
            relationship_type: FOLLOWER or FOLLOWING

        Returns:
            True if a member was deleted, False if it was not present
        """
        statement = delete(UserRelationship).where(
            UserRelationship.user_id == user_id,
            UserRelationship.related_user_id == related_user_id,
            UserRelationship.relationship_type == relationship_type,
        )
        result = await self.session.execute(statement)
        return result.rowcount > 0

    async def get_related_ids(
        self,
        user_id: UUID,
        relationship_type: RelationshipType,
    ) -> set[UUID]:
        """
        Read one relationship set straight from the table.

        Args:
            user_id: Owner of the set
            relationship_type: FOLLOWER or FOLLOWING

        Returns:
            Set of member ids (empty if none)
        """
        result = await self.session.execute(
            select(UserRelationship.related_user_id).where(
                UserRelationship.user_id == user_id,
                UserRelationship.relationship_type == relationship_type,
            )
        )
        return set(result.scalars().all())

    def _insert(self):
        """Pick the dialect's conflict-aware insert() for the bound engine."""
        dialect = self.session.get_bind().dialect.name
        try:
            return _CONFLICT_AWARE_INSERTS[dialect]
        except KeyError:
            raise RuntimeError(f"Unsupported database dialect for relationship sets: {dialect}") from None
