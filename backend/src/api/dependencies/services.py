"""
Service Dependencies

FastAPI dependencies for service injection.

Services are created per request around the request's db session. The
Keycloak adapter is the exception: it is created once in the application
lifespan (it caches its admin token) and read from app.state.

Usage:
======
    from src.api.dependencies.services import get_relationship_service

    @router.put("/{user_id}/followers")
    async def update_followers(
        user_id: UUID,
        body: RelationshipUpdate,
        service: RelationshipService = Depends(get_relationship_service),
    ):
        return await service.update_followers(user_id, body.user_id, body.operation)
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies.database import get_db
from src.shared.adapters.keycloak_adapter import IdentityProvider
from src.shared.services.user_service import UserService
from src.shared.services.relationship_service import RelationshipService


async def get_identity_provider(request: Request) -> IdentityProvider:
    """Identity provider created during application startup."""
    return request.app.state.identity_provider


async def get_user_service(
    db: AsyncSession = Depends(get_db),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> UserService:
    """
    Dependency to get UserService instance.
    """
    return UserService(db, identity_provider)


async def get_relationship_service(
    db: AsyncSession = Depends(get_db),
) -> RelationshipService:
    """
    Dependency to get RelationshipService instance.
    """
    return RelationshipService(db)
