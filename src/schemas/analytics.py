"""Analytics schemas."""

from pydantic import BaseModel


class RatingSummary(BaseModel):
    """Aggregate rating statistics over all feedback."""

    average_rating: float
    total_feedback: int
    min_rating: int | None
    max_rating: int | None


class DailyFeedback(BaseModel):
    """Feedback volume and average rating for one UTC calendar day."""

    date: str  # YYYY-MM-DD
    count: int
    average_rating: float
