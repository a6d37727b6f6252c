"""
User Entity Model

Represents a registered user account.

Model Hierarchy:
================
    User
       └── relationships (UserRelationship[]) - followers and followings rows

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000  (Keycloak user id)  │
│ username         │ "alice"                                                   │
│ email            │ "alice@example.com"                                       │
│ first_name       │ "Alice"                                                   │
│ last_name        │ "Liddell"                                                 │
│ roles            │ ["default-roles-troop"]                                   │
│ created_at       │ 2024-01-01T00:00:00Z                                      │
│ updated_at       │ 2024-01-15T10:30:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, TimestampMixin
from src.shared.models.enums import RelationshipType


if TYPE_CHECKING:
    from src.shared.models.user_relationship import UserRelationship


class User(Base, TimestampMixin):
    """
    User model.

    The primary key is the identifier assigned by the identity provider at
    registration; it is never generated locally.

    Attributes:
        id: Identity provider user id (UUID)
        username: Unique login name
        email: Unique email address
        first_name: Optional given name
        last_name: Optional family name
        roles: Role names granted at registration

    Relationships:
        relationships: Rows of both relationship sets, see followers/followings
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE
    # ═══════════════════════════════════════════════════════════════════════════

    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    roles: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    # Loaded eagerly so followers/followings work on an AsyncSession
    relationships: Mapped[list["UserRelationship"]] = relationship(
        "UserRelationship",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def related_ids(self, relationship_type: RelationshipType) -> set[uuid.UUID]:
        """Ids in one of the two relationship sets."""
        return {
            row.related_user_id
            for row in self.relationships
            if row.relationship_type == relationship_type
        }

    @property
    def followers(self) -> set[uuid.UUID]:
        """Ids of users who follow this user."""
        return self.related_ids(RelationshipType.FOLLOWER)

    @property
    def followings(self) -> set[uuid.UUID]:
        """Ids of users this user follows."""
        return self.related_ids(RelationshipType.FOLLOWING)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, username={self.username})>"
