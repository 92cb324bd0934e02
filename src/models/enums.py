"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Access tier controlling which feedback a user can see."""

    USER = "USER"
    ADMIN = "ADMIN"

    def sees_all_feedback(self) -> bool:
        """Check if this role is exempt from creator scoping."""
        return self == Role.ADMIN


class FeedbackSource(str, Enum):
    """Channel a piece of feedback was collected through."""

    WEB = "web"
    MOBILE = "mobile"
    EMAIL = "email"
    IN_PERSON = "in-person"


RATING_MIN = 1
RATING_MAX = 5
COMMENT_MIN_LENGTH = 3
COMMENT_MAX_LENGTH = 1000
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
