"""Response envelope shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class FieldError(BaseModel):
    """A single field-level validation problem."""

    field: str
    message: str


class ApiResponse(BaseModel, Generic[DataT]):
    """Successful response wrapper."""

    success: bool = True
    message: str
    data: DataT | None = None


class ErrorResponse(BaseModel):
    """Failure response body."""

    success: bool = False
    message: str
    errors: list[FieldError] | None = None
