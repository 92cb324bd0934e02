"""Aggregate statistics over all feedback."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from src.errors import InvalidError
from src.models.feedback import Feedback
from src.schemas.analytics import DailyFeedback, RatingSummary
from src.services.access import DateBound, EffectiveFilter, lower_bound, upper_bound
from src.services.feedback import apply_filter

TWO_PLACES = Decimal("0.01")


def round_rating(value: Any) -> float:
    """Round an average to two places, halves away from zero.

    Goes through the decimal string so 4.125 rounds to 4.13 rather than
    following the binary float representation.
    """
    if value is None:
        return 0.0
    return float(Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def _format_day(value: Any) -> str:
    # SQLite returns the date() result as text, PostgreSQL as a date
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class AnalyticsService:
    """Read-only analytics. Callers are responsible for restricting access."""

    def __init__(self, db: Session):
        self.db = db

    def average_rating(self) -> RatingSummary:
        """Average, minimum and maximum rating across every feedback record."""
        average, total, minimum, maximum = self.db.query(
            func.avg(Feedback.rating),
            func.count(Feedback.id),
            func.min(Feedback.rating),
            func.max(Feedback.rating),
        ).one()

        if not total:
            return RatingSummary(
                average_rating=0, total_feedback=0, min_rating=None, max_rating=None
            )
        return RatingSummary(
            average_rating=round_rating(average),
            total_feedback=total,
            min_rating=minimum,
            max_rating=maximum,
        )

    def feedback_per_day(
        self, start_date: DateBound | None = None, end_date: DateBound | None = None
    ) -> list[DailyFeedback]:
        """Feedback count and average rating per UTC day, oldest day first."""
        for field, value in (("start_date", start_date), ("end_date", end_date)):
            if value is not None and not isinstance(value, date):
                raise InvalidError(f"{field} must be a date or datetime")

        day = func.date(Feedback.created_at).label("day")
        query = self.db.query(day, func.count(Feedback.id), func.avg(Feedback.rating))
        query = apply_filter(
            query,
            EffectiveFilter(
                creator_id=None,
                rating=None,
                source=None,
                created_from=lower_bound(start_date),
                created_to=upper_bound(end_date),
            ),
        )
        rows = query.group_by(day).order_by(day).all()

        return [
            DailyFeedback(date=_format_day(value), count=count, average_rating=round_rating(avg))
            for value, count, avg in rows
        ]
