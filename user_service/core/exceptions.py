"""
Global exception handling for the application.
Standardizes error responses for the user service so callers can branch on
the cause: missing user, bad input, or storage failure.
"""

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class UserNotFoundError(EntityNotFoundException):
    """No row in ``users`` matches the identifier."""
    def __init__(self, user_id: int, operation: str):
        super().__init__(
            f"user with id {user_id} not found",
            {"operation": operation, "user_id": user_id},
        )
        self.user_id = user_id


class InvalidRoleError(AppError):
    """Role text outside the known set.

    Raised with 422 when the text came from the caller and with 500 when it
    was read back from storage, since then the row itself is corrupt.
    """
    def __init__(
        self,
        role: Any,
        status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(f"invalid role: {role}", status_code, {"role": str(role), **(details or {})})
        self.role = role


class StorageError(AppError):
    """Base for failures of the backing store."""
    def __init__(
        self,
        message: str,
        operation: str,
        user_id: Optional[int] = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ):
        details: Dict[str, Any] = {"operation": operation}
        if user_id is not None:
            details["user_id"] = user_id
        super().__init__(message, status_code, details)
        self.operation = operation
        self.user_id = user_id


class StorageUnavailableError(StorageError):
    """No connection to the backing store could be obtained."""
    def __init__(self, operation: str, user_id: Optional[int] = None):
        super().__init__(
            f"failed to connect to database during {operation}",
            operation,
            user_id,
            status.HTTP_503_SERVICE_UNAVAILABLE,
        )


class ReadFailedError(StorageError):
    """A read statement failed for a reason other than a missing row."""
    def __init__(self, operation: str, user_id: Optional[int] = None):
        super().__init__(f"failed to {operation} user", operation, user_id)


class WriteFailedError(StorageError):
    """A write statement failed; integrity violations map to 409."""
    def __init__(self, operation: str, user_id: Optional[int] = None, conflict: bool = False):
        super().__init__(
            f"failed to {operation} user",
            operation,
            user_id,
            status.HTTP_409_CONFLICT if conflict else status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        self.conflict = conflict


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally.

    Unexpected exceptions were already logged by RequestLoggingMiddleware;
    this only renders the envelope.
    """

    if isinstance(exc, AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": exc.__class__.__name__,
                    "message": exc.message,
                    "details": exc.details,
                    "path": request.url.path,
                }
            },
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "InternalServerError",
                "message": "An unexpected error occurred. Please try again later.",
                "path": request.url.path,
            }
        },
    )
