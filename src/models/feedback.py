"""Feedback model."""

from sqlalchemy import Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Feedback(Base, TimestampMixin):
    """A rating and comment submitted by a user."""

    __tablename__ = "feedback"
    __table_args__ = (Index("ix_feedback_rating_created_at", "rating", "created_at"),)

    id = Column(Integer, primary_key=True, index=True)
    rating = Column(Integer, nullable=False, index=True)  # 1-5
    comment = Column(String(1000), nullable=False)
    source = Column(String(20), nullable=False, index=True)  # web | mobile | email | in-person
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    creator = relationship("User", backref="feedback")
