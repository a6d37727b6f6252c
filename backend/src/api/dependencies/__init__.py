"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Services: get_user_service(), get_relationship_service()
- Identity provider: get_identity_provider()

Usage:
======
    from src.api.dependencies import DbSession

    @router.get("/users/{user_id}")
    async def get_user(user_id: UUID, db: DbSession):
        return await UserService(db).get_user_by_id(user_id)
"""

from src.api.dependencies.database import (
    get_db,
    DbSession,
)
from src.api.dependencies.services import (
    get_identity_provider,
    get_user_service,
    get_relationship_service,
)

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Services
    "get_identity_provider",
    "get_user_service",
    "get_relationship_service",
]
