"""
Base Repository

Generic base repository with the CRUD operations the services rely on.
Entity-specific repositories inherit from this class.

What This Provides:
===================
- get(id)        → Fetch single record by UUID
- exists(id)     → Check if record exists without loading it
- create()       → Create new record

Generic Type Pattern:
=====================
    class UserRepository(BaseRepository[User]):
        pass

    repo = UserRepository(db)
    user = await repo.get(id)  # Returns User, not Any!

flush() vs commit():
====================
Repository methods only flush(). The transaction is committed by get_db()
after the request handler completes, or rolled back if it raised.
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from src.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., User)
            session: Async database session from get_db()
        """
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        Args:
            record_id: The UUID of the record to fetch

        Returns:
            The model instance if found, None otherwise

        SQL Generated:
            SELECT * FROM users WHERE id = '550e8400-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def exists(self, record_id: UUID) -> bool:
        """
        Check if a record exists without loading it.

        Args:
            record_id: The UUID to check

        Returns:
            True if record exists, False otherwise

        SQL Generated:
            SELECT COUNT(*) FROM users WHERE id = '...'
        """
        result = await self.session.execute(
            select(sql_count()).select_from(self.model).where(self.model.id == record_id)
        )
        return (result.scalar() or 0) > 0

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Adds the instance to the session and flushes so database defaults
        (created_at, updated_at) are populated on the returned object.

        Args:
            **kwargs: Field values for the new record

        Returns:
            The created model instance with all DB-generated values

        SQL Generated:
            INSERT INTO users (id, username, email, ...)
            VALUES ('550e8400-...', 'alice', 'alice@example.com', ...)
        """
        instance = self.model(**kwargs)

        # Pending insert until flush
        self.session.add(instance)

        # Send INSERT without committing the request transaction
        await self.session.flush()

        # Reload to pick up server defaults
        await self.session.refresh(instance)

        return instance
