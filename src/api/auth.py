"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_auth_service, get_current_identity
from src.schemas.auth import AuthResponse, TokenPayload, UserLogin, UserRegister, UserResponse
from src.schemas.common import ApiResponse
from src.services.auth import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    user = auth_service.register(user_data.name, user_data.email, user_data.password)
    return ApiResponse(message="User registered successfully", data=user)


@router.post("/login", response_model=ApiResponse[AuthResponse])
def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    result = auth_service.login(credentials.email, credentials.password)
    return ApiResponse(message="Login successful", data=result)


@router.get("/me", response_model=ApiResponse[UserResponse])
def get_me(
    identity: Annotated[TokenPayload, Depends(get_current_identity)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Get current user information."""
    user = auth_service.get_user(identity.user_id)
    return ApiResponse(message="Current user retrieved successfully", data=user)
