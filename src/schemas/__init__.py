"""Pydantic schemas for API requests and responses."""

from src.schemas.analytics import DailyFeedback, RatingSummary
from src.schemas.auth import AuthResponse, TokenPayload, UserLogin, UserRegister, UserResponse
from src.schemas.common import ApiResponse, ErrorResponse, FieldError
from src.schemas.feedback import (
    CreatorResponse,
    FeedbackCreate,
    FeedbackPage,
    FeedbackResponse,
    Pagination,
)

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "FieldError",
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "TokenPayload",
    "FeedbackCreate",
    "CreatorResponse",
    "FeedbackResponse",
    "Pagination",
    "FeedbackPage",
    "RatingSummary",
    "DailyFeedback",
]
