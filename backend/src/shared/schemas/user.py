"""
User Schemas

Request/response models for registration, lookup and relationship endpoints.

The projection from the User entity to UserResponse is the explicit
to_user_response() function below; every field is mapped by hand.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from src.shared.models.enums import Operation
from src.shared.models.user import User
from src.shared.schemas.common import BaseSchema


class UserCreate(BaseModel):
    """Schema for user registration. The password is only forwarded to Keycloak."""

    username: str = Field(
        min_length=3,
        max_length=100,
        pattern=r"^[A-Za-z0-9._-]+$",
        description="Unique login name",
    )
    email: EmailStr
    password: str = Field(
        min_length=8,
        description="Password (minimum 8 characters)",
    )
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


class UserResponse(BaseSchema):
    """External view of a user."""

    id: UUID
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    roles: list[str] = Field(default_factory=list)
    followers: set[UUID] = Field(default_factory=set)
    followings: set[UUID] = Field(default_factory=set)
    created_at: Optional[datetime] = None


class RelationshipUpdate(BaseModel):
    """Body of PUT /users/{user_id}/followers and /followings."""

    user_id: UUID = Field(description="User added to or removed from the set")
    operation: Operation


class UserExistsResponse(BaseModel):
    """Result of the username/email availability check."""

    exists: bool


def to_user_response(user: User) -> UserResponse:
    """
    Map a stored User to its external view.

    Args:
        user: User entity with its relationships loaded

    Returns:
        UserResponse carrying both relationship sets
    """
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        roles=list(user.roles or []),
        followers=user.followers,
        followings=user.followings,
        created_at=user.created_at,
    )
