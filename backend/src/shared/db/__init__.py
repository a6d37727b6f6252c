"""
Database Module

Database connectivity and session management.

Architecture Overview:
======================
    FastAPI Route
        │  Dependency Injection: get_db()
        ▼
    AsyncSession (one per request, commit on success, rollback on error)
        │  Passed to services
        ▼
    UserRepository
        │  SQL
        ▼
    PostgreSQL (users, user_relationships)

Usage in FastAPI:
=================
    from fastapi import Depends
    from src.shared.db import get_db

    @app.get("/users/{user_id}")
    async def get_user(user_id: UUID, db: AsyncSession = Depends(get_db)):
        return await UserService(db).get_user_by_id(user_id)
"""

from src.shared.db.session import (
    get_db,
    init_db,
    close_db,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "AsyncSessionLocal",
    "engine",
]
