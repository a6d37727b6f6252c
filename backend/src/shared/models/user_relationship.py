"""
UserRelationship Entity Model

One member of a user's followers or followings set.

The composite primary key (user_id, related_user_id, relationship_type)
makes each set a real set at the database level: inserting an existing
member conflicts instead of duplicating it.

SAMPLE USER_RELATIONSHIP RECORDS:
┌──────────────────────────────────────────────────────────────────────────────┐
│ user_id          │ 550e8400-...  (alice)                                     │
│ related_user_id  │ 660e8400-...  (bob)                                       │
│ relationship_type│ FOLLOWER      → bob is in alice's followers               │
├──────────────────────────────────────────────────────────────────────────────┤
│ user_id          │ 550e8400-...  (alice)                                     │
│ related_user_id  │ 770e8400-...  (carol)                                     │
│ relationship_type│ FOLLOWING     → carol is in alice's followings            │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import Enum, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, TimestampMixin
from src.shared.models.enums import RelationshipType


if TYPE_CHECKING:
    from src.shared.models.user import User


class UserRelationship(Base, TimestampMixin):
    """
    Junction row linking a user to a member of one of their relationship sets.

    related_user_id is deliberately not a foreign key: the sets hold plain
    identifiers, existence is checked by the service when a member is added.

    Attributes:
        user_id: Owner of the set (part of composite PK)
        related_user_id: Member of the set (part of composite PK)
        relationship_type: FOLLOWER or FOLLOWING (part of composite PK)
    """

    __tablename__ = "user_relationships"

    # ═══════════════════════════════════════════════════════════════════════════
    # COMPOSITE PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    related_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        index=True,
    )

    relationship_type: Mapped[RelationshipType] = mapped_column(
        Enum(RelationshipType, name="relationship_type"),
        primary_key=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    user: Mapped["User"] = relationship(
        "User",
        back_populates="relationships",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<UserRelationship(user_id={self.user_id}, "
            f"related_user_id={self.related_user_id}, type={self.relationship_type.value})>"
        )
