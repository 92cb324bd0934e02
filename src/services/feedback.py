"""Feedback submission and role-scoped retrieval."""

import logging
import math
from typing import Any

from sqlalchemy.orm import Query, Session, joinedload

from src.errors import InvalidError, NotFoundError
from src.models.enums import (
    COMMENT_MAX_LENGTH,
    COMMENT_MIN_LENGTH,
    RATING_MAX,
    RATING_MIN,
    FeedbackSource,
    Role,
)
from src.models.feedback import Feedback
from src.models.user import User
from src.schemas.feedback import FeedbackPage, FeedbackResponse, Pagination
from src.services.access import EffectiveFilter, FeedbackFilters, scope_filter, validate_filters

logger = logging.getLogger(__name__)


def apply_filter(query: Query, effective: EffectiveFilter) -> Query:
    """Translate an effective filter into WHERE clauses on a Feedback query."""
    if effective.creator_id is not None:
        query = query.filter(Feedback.created_by == effective.creator_id)
    if effective.rating is not None:
        query = query.filter(Feedback.rating == effective.rating)
    if effective.source is not None:
        query = query.filter(Feedback.source == effective.source.value)
    if effective.created_from is not None:
        query = query.filter(Feedback.created_at >= effective.created_from)
    if effective.created_to is not None:
        query = query.filter(Feedback.created_at <= effective.created_to)
    return query


def validate_submission(rating: Any, comment: Any, source: Any) -> tuple[int, str, FeedbackSource]:
    """Check a submission against the Feedback invariants.

    Returns the rating, the trimmed comment and the parsed source.
    """
    errors = []
    if isinstance(rating, bool) or not isinstance(rating, int):
        errors.append({"field": "rating", "message": "Rating must be an integer"})
    elif not RATING_MIN <= rating <= RATING_MAX:
        errors.append(
            {"field": "rating", "message": f"Rating must be between {RATING_MIN} and {RATING_MAX}"}
        )

    trimmed = comment.strip() if isinstance(comment, str) else ""
    if not COMMENT_MIN_LENGTH <= len(trimmed) <= COMMENT_MAX_LENGTH:
        errors.append(
            {
                "field": "comment",
                "message": (
                    f"Comment must be between {COMMENT_MIN_LENGTH} and "
                    f"{COMMENT_MAX_LENGTH} characters"
                ),
            }
        )

    parsed_source = None
    try:
        parsed_source = FeedbackSource(source)
    except ValueError:
        allowed = ", ".join(s.value for s in FeedbackSource)
        errors.append({"field": "source", "message": f"Source must be one of: {allowed}"})

    if errors:
        raise InvalidError("Validation error", details=errors)
    return rating, trimmed, parsed_source


class FeedbackService:
    """Service for creating and listing feedback."""

    def __init__(self, db: Session):
        self.db = db

    def submit(self, user_id: int, rating: int, comment: str, source: str) -> FeedbackResponse:
        """Persist a feedback record authored by ``user_id``."""
        rating, comment, parsed_source = validate_submission(rating, comment, source)

        if self.db.get(User, user_id) is None:
            raise NotFoundError("User not found")

        feedback = Feedback(
            rating=rating,
            comment=comment,
            source=parsed_source.value,
            created_by=user_id,
        )
        self.db.add(feedback)
        self.db.commit()
        self.db.refresh(feedback)

        logger.info(f"User {user_id} submitted feedback {feedback.id} (rating {rating})")
        return FeedbackResponse.from_model(feedback)

    def list(self, user_id: int, role: Role | str, filters: FeedbackFilters) -> FeedbackPage:
        """List feedback visible to the caller, most recent first.

        Users only ever see their own records; admins see everything. The
        remaining filters narrow the result further, and ``total`` counts every
        matching record, not just the returned page.
        """
        validate_filters(filters)
        effective = scope_filter(role, user_id, filters)

        query = apply_filter(self.db.query(Feedback), effective)
        total = query.count()
        rows = []
        # Offsets past the end may not fit the store's integer type
        if filters.offset < total:
            rows = (
                query.options(joinedload(Feedback.creator))
                .order_by(Feedback.created_at.desc(), Feedback.id.desc())
                .offset(filters.offset)
                .limit(filters.limit)
                .all()
            )

        return FeedbackPage(
            items=[FeedbackResponse.from_model(row) for row in rows],
            pagination=Pagination(
                page=filters.page,
                limit=filters.limit,
                total=total,
                pages=math.ceil(total / filters.limit),
            ),
        )
