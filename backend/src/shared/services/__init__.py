"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
external services, and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ Keycloak

Services should:
- Contain business logic and validation
- Coordinate repositories and the identity provider
- NOT handle HTTP concerns (that's for handlers)
- NOT commit (get_db() owns the transaction)

Available Services:
===================
- UserService: Registration and user lookup
- RelationshipService: Followers and followings

Usage:
======
    from src.shared.services import RelationshipService

    service = RelationshipService(db)
    user = await service.update_followers(user_id, follower_id, Operation.ADD)
"""

from src.shared.services.user_service import UserService
from src.shared.services.relationship_service import RelationshipService

__all__ = [
    "UserService",
    "RelationshipService",
]
