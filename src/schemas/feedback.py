"""Feedback schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from src.models.enums import (
    COMMENT_MAX_LENGTH,
    COMMENT_MIN_LENGTH,
    RATING_MAX,
    RATING_MIN,
    FeedbackSource,
)
from src.models.feedback import Feedback

Comment = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, min_length=COMMENT_MIN_LENGTH, max_length=COMMENT_MAX_LENGTH
    ),
]


class FeedbackCreate(BaseModel):
    """Submit a new piece of feedback."""

    rating: int = Field(..., ge=RATING_MIN, le=RATING_MAX)
    comment: Comment
    source: FeedbackSource


class CreatorResponse(BaseModel):
    """The public part of the user who wrote a feedback record."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str


class FeedbackResponse(BaseModel):
    """Feedback response with the creator resolved."""

    id: int
    rating: int
    comment: str
    source: FeedbackSource
    created_by: CreatorResponse
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, feedback: Feedback) -> "FeedbackResponse":
        return cls(
            id=feedback.id,
            rating=feedback.rating,
            comment=feedback.comment,
            source=feedback.source,
            created_by=CreatorResponse.model_validate(feedback.creator),
            created_at=feedback.created_at,
            updated_at=feedback.updated_at,
        )


class Pagination(BaseModel):
    """Offset pagination metadata."""

    page: int
    limit: int
    total: int
    pages: int


class FeedbackPage(BaseModel):
    """One page of feedback plus pagination metadata."""

    items: list[FeedbackResponse]
    pagination: Pagination
