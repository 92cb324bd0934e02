"""Row-level visibility policy for feedback queries.

Everything here is pure: no session, no settings. ``scope_filter`` turns the
caller's identity and requested filters into the filter the store query is
built from. A ``USER`` is always narrowed to their own records before any
other filter is considered; an ``ADMIN`` is not narrowed at all.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from typing import Any

from src.errors import ForbiddenError, InvalidError
from src.models.enums import RATING_MAX, RATING_MIN, FeedbackSource, Role

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

DateBound = date | datetime


@dataclass(frozen=True)
class FeedbackFilters:
    """Filters and paging a caller asks for when listing feedback."""

    rating: int | None = None
    source: FeedbackSource | None = None
    start_date: DateBound | None = None
    end_date: DateBound | None = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class EffectiveFilter:
    """The filter actually applied to the store, after scoping."""

    creator_id: int | None
    rating: int | None
    source: FeedbackSource | None
    created_from: datetime | None
    created_to: datetime | None


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def lower_bound(value: DateBound | None) -> datetime | None:
    """Inclusive lower bound; a bare date starts at midnight UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    return datetime.combine(value, time.min, tzinfo=UTC)


def upper_bound(value: DateBound | None) -> datetime | None:
    """Inclusive upper bound; a bare date covers the whole day."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    return datetime.combine(value, time.max, tzinfo=UTC)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_filters(filters: FeedbackFilters) -> None:
    """Reject filters outside their documented bounds."""
    errors = []
    if not _is_int(filters.page) or filters.page < 1:
        errors.append({"field": "page", "message": "Page must be a positive integer"})
    if not _is_int(filters.limit) or not 1 <= filters.limit <= MAX_LIMIT:
        errors.append({"field": "limit", "message": f"Limit must be between 1 and {MAX_LIMIT}"})
    if filters.rating is not None and (
        not _is_int(filters.rating) or not RATING_MIN <= filters.rating <= RATING_MAX
    ):
        errors.append(
            {"field": "rating", "message": f"Rating must be between {RATING_MIN} and {RATING_MAX}"}
        )
    if filters.source is not None:
        try:
            FeedbackSource(filters.source)
        except ValueError:
            errors.append({"field": "source", "message": "Source is not a known channel"})
    for field in ("start_date", "end_date"):
        value = getattr(filters, field)
        if value is not None and not isinstance(value, date):
            errors.append({"field": field, "message": f"{field} must be a date or datetime"})
    if errors:
        raise InvalidError("Validation error", details=errors)


def scope_filter(role: Role | str, user_id: int, requested: FeedbackFilters) -> EffectiveFilter:
    """Narrow the requested filters to what ``role`` is allowed to see."""
    try:
        role = Role(role)
    except ValueError:
        raise ForbiddenError() from None

    if role == Role.USER:
        creator_id = user_id
    elif role.sees_all_feedback():
        creator_id = None
    else:
        raise ForbiddenError()

    return EffectiveFilter(
        creator_id=creator_id,
        rating=requested.rating,
        source=FeedbackSource(requested.source) if requested.source is not None else None,
        created_from=lower_bound(requested.start_date),
        created_to=upper_bound(requested.end_date),
    )
