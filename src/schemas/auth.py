"""Authentication schemas."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, model_validator

from src.models.enums import NAME_MAX_LENGTH, NAME_MIN_LENGTH, Role

UserName = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH
    ),
]


class UserRegister(BaseModel):
    """User registration request."""

    name: UserName
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    password_confirm: str = Field(..., max_length=128)

    @model_validator(mode="after")
    def passwords_match(self) -> "UserRegister":
        """Reject registrations whose confirmation differs from the password."""
        if self.password != self.password_confirm:
            raise ValueError("Passwords do not match")
        return self


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(BaseModel):
    """User information response. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse


class TokenPayload(BaseModel):
    """Identity recovered from a verified access token."""

    user_id: int
    role: Role
