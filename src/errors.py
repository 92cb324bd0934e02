"""Service error hierarchy.

Services raise these; the exception handlers registered in ``src.main`` are the
only place they are turned into HTTP responses.
"""

from typing import Any


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, details: list[dict[str, Any]] | None = None):
        self.message = message or self.default_message
        self.details = details or []
        super().__init__(self.message)


class InvalidError(ServiceError):
    """Input is malformed or out of range."""

    status_code = 400
    default_message = "Validation error"


class UnauthorizedError(ServiceError):
    """Credential is missing, wrong or no longer valid."""

    status_code = 401
    default_message = "Authentication failed"


class TokenExpiredError(UnauthorizedError):
    default_message = "Token has expired"


class TokenInvalidError(UnauthorizedError):
    default_message = "Invalid token"


class ForbiddenError(ServiceError):
    """Authenticated but the role does not allow the operation."""

    status_code = 403
    default_message = "Insufficient permissions"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"


class ConflictError(ServiceError):
    """A uniqueness constraint would be violated."""

    status_code = 409
    default_message = "Conflict"


class InternalError(ServiceError):
    status_code = 500
    default_message = "Internal server error"


class ConfigurationError(InternalError):
    """Raised when configuration is invalid or missing required values."""

    default_message = "Invalid configuration"
