"""SQLAlchemy models."""

from src.models.feedback import Feedback
from src.models.user import User

__all__ = [
    "User",
    "Feedback",
]
