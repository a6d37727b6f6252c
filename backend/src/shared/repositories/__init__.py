"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← Generic CRUD operations
         │
         └── UserRepository             ← User lookups and relationship sets

Usage Example:
==============
    from src.shared.repositories import UserRepository

    async def follow(db: AsyncSession, user_id: UUID, target_id: UUID):
        repo = UserRepository(db)
        await repo.add_relation(user_id, target_id, RelationshipType.FOLLOWING)
"""

from src.shared.repositories.base import BaseRepository
from src.shared.repositories.user_repository import UserRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "UserRepository",
]
