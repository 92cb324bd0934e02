"""FastAPI dependencies for authentication, configuration and services."""

from collections.abc import Callable
from datetime import date, datetime
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import get_db
from src.errors import ForbiddenError, InvalidError, UnauthorizedError
from src.models.enums import Role
from src.schemas.auth import TokenPayload
from src.services.analytics import AnalyticsService
from src.services.auth import AuthService, build_password_context
from src.services.feedback import FeedbackService
from src.services.tokens import TokenService

# auto_error=False so a missing header goes through our own 401 path
security = HTTPBearer(auto_error=False)


def get_token_service(settings: Annotated[Settings, Depends(get_settings)]) -> TokenService:
    """Token service built from the JWT settings."""
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiration_minutes=settings.jwt_expiration_minutes,
    )


@lru_cache
def get_password_context() -> CryptContext:
    """Shared bcrypt context."""
    return build_password_context(get_settings().bcrypt_rounds)


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    pwd_context: Annotated[CryptContext, Depends(get_password_context)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, tokens, pwd_context)


def get_feedback_service(
    db: Annotated[Session, Depends(get_db)],
) -> FeedbackService:
    """Get feedback service with dependencies."""
    return FeedbackService(db)


def get_analytics_service(
    db: Annotated[Session, Depends(get_db)],
) -> AnalyticsService:
    """Get analytics service with dependencies."""
    return AnalyticsService(db)


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenPayload:
    """Get the caller's user id and role from the bearer token."""
    if credentials is None:
        raise UnauthorizedError("Authorization header is missing")
    return tokens.verify_token(credentials.credentials)


def require_role(*roles: Role) -> Callable[..., TokenPayload]:
    """Dependency factory that only lets the given roles through."""

    def checker(
        identity: Annotated[TokenPayload, Depends(get_current_identity)],
    ) -> TokenPayload:
        if identity.role not in roles:
            raise ForbiddenError()
        return identity

    return checker


require_admin = require_role(Role.ADMIN)


def parse_date_param(value: str | None, field: str) -> date | datetime | None:
    """Parse an ISO 8601 date (YYYY-MM-DD) or datetime query parameter."""
    if value is None or value == "":
        return None
    try:
        if len(value) == 10:
            return date.fromisoformat(value)
        return datetime.fromisoformat(value)
    except ValueError:
        raise InvalidError(
            "Validation error",
            details=[{"field": field, "message": f"{field} must be a valid ISO 8601 date"}],
        ) from None
