"""
Database Dependency

FastAPI dependency for database sessions.

The session is committed when the handler returns and rolled back if it
raises, so every relationship update in a request is one transaction.

Usage:
======
    from src.api.dependencies.database import DbSession

    @router.get("/users/{user_id}")
    async def get_user(user_id: UUID, db: DbSession):
        ...
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Yields:
        AsyncSession: Database session for the current request
    """
    async for session in _get_db():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
