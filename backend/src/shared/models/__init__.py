"""
SQLAlchemy Models

Database models for the user service.

Model Hierarchy:
================
    User
       └── relationships (UserRelationship[])
              ├── FOLLOWER rows   → User.followers
              └── FOLLOWING rows  → User.followings

Models Overview:
================
- Base: Base class and timestamp mixin
- User: Registered user account
- UserRelationship: One member of a followers/followings set

Usage:
======
    from src.shared.models import User, RelationshipType

    user = await repo.get(user_id)
    user.followers   # set of UUIDs
    user.followings  # set of UUIDs
"""

from src.shared.models.base import Base, TimestampMixin
from src.shared.models.enums import Operation, RelationshipType
from src.shared.models.user import User
from src.shared.models.user_relationship import UserRelationship

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    # Enums
    "Operation",
    "RelationshipType",
    # Models
    "User",
    "UserRelationship",
]
