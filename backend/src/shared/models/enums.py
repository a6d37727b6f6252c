"""
Enums used across the application.
"""

from enum import Enum


class Operation(str, Enum):
    """Mutation applied to a relationship set."""

    ADD = "ADD"
    REMOVE = "REMOVE"


class RelationshipType(str, Enum):
    """
    Which of a user's two relationship sets a row belongs to.

    FOLLOWER rows record who follows the owning user; FOLLOWING rows record
    who the owning user follows. The two sets are maintained independently.
    """

    FOLLOWER = "FOLLOWER"
    FOLLOWING = "FOLLOWING"

    @property
    def set_name(self) -> str:
        """Plural name used in messages and projections."""
        return "followers" if self is RelationshipType.FOLLOWER else "followings"
