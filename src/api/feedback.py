"""Feedback API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_identity, get_feedback_service, parse_date_param
from src.models.enums import RATING_MAX, RATING_MIN, FeedbackSource
from src.schemas.auth import TokenPayload
from src.schemas.common import ApiResponse
from src.schemas.feedback import FeedbackCreate, FeedbackPage, FeedbackResponse
from src.services.access import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, FeedbackFilters
from src.services.feedback import FeedbackService

router = APIRouter(prefix="/api/v1/feedback", tags=["feedback"])


@router.post(
    "",
    response_model=ApiResponse[FeedbackResponse],
    status_code=status.HTTP_201_CREATED,
)
def submit_feedback(
    feedback_data: FeedbackCreate,
    identity: Annotated[TokenPayload, Depends(get_current_identity)],
    feedback_service: Annotated[FeedbackService, Depends(get_feedback_service)],
):
    """Submit feedback as the current user."""
    feedback = feedback_service.submit(
        identity.user_id,
        feedback_data.rating,
        feedback_data.comment,
        feedback_data.source.value,
    )
    return ApiResponse(message="Feedback submitted successfully", data=feedback)


@router.get("", response_model=ApiResponse[FeedbackPage])
def list_feedback(
    identity: Annotated[TokenPayload, Depends(get_current_identity)],
    feedback_service: Annotated[FeedbackService, Depends(get_feedback_service)],
    page: int = Query(default=DEFAULT_PAGE, ge=1),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    rating: int | None = Query(default=None, ge=RATING_MIN, le=RATING_MAX),
    source: FeedbackSource | None = Query(default=None),
    start_date: str | None = Query(default=None, description="ISO 8601 date or datetime"),
    end_date: str | None = Query(default=None, description="ISO 8601 date or datetime"),
):
    """List feedback. Admins see all feedback, users only their own."""
    filters = FeedbackFilters(
        rating=rating,
        source=source,
        start_date=parse_date_param(start_date, "start_date"),
        end_date=parse_date_param(end_date, "end_date"),
        page=page,
        limit=limit,
    )
    result = feedback_service.list(identity.user_id, identity.role, filters)
    return ApiResponse(message="Feedback retrieved successfully", data=result)
