"""Analytics API endpoints (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_analytics_service, parse_date_param, require_admin
from src.schemas.analytics import DailyFeedback, RatingSummary
from src.schemas.auth import TokenPayload
from src.schemas.common import ApiResponse
from src.services.analytics import AnalyticsService

router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])


@router.get("/average-rating", response_model=ApiResponse[RatingSummary])
def get_average_rating(
    _admin: Annotated[TokenPayload, Depends(require_admin)],
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
):
    """Average, min and max rating plus total feedback count."""
    result = analytics_service.average_rating()
    return ApiResponse(message="Average rating retrieved successfully", data=result)


@router.get("/feedback-per-day", response_model=ApiResponse[list[DailyFeedback]])
def get_feedback_per_day(
    _admin: Annotated[TokenPayload, Depends(require_admin)],
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
    start_date: str | None = Query(default=None, description="ISO 8601 date or datetime"),
    end_date: str | None = Query(default=None, description="ISO 8601 date or datetime"),
):
    """Daily feedback counts and average ratings, oldest day first."""
    result = analytics_service.feedback_per_day(
        parse_date_param(start_date, "start_date"),
        parse_date_param(end_date, "end_date"),
    )
    return ApiResponse(message="Feedback per day retrieved successfully", data=result)
