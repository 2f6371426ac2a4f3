"""
Global exception handlers and custom exception classes.
"""
import enum
import logging
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

# Set up logging
logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    """Machine-readable error categories returned in every error body."""
    DUPLICATE_IDENTITY = "duplicate_identity"
    VALIDATION_FAILED = "validation_failed"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_TOKEN = "invalid_token"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONCURRENCY_CONFLICT = "concurrency_conflict"
    STORE_ERROR = "store_error"


class AppException(Exception):
    """
    Base exception class for application-specific exceptions.

    Services raise subclasses of this; the registered handler turns them into
    a JSON response carrying the status code, message and error kind.
    """
    def __init__(
        self,
        status_code: int,
        detail: str,
        kind: ErrorKind,
        extra: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.kind = kind
        self.extra = extra or {}
        self.headers = headers


class NotFoundException(AppException):
    """Exception raised when a resource does not exist."""
    def __init__(self, detail: str = "Resource not found", extra: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_404_NOT_FOUND, detail, ErrorKind.NOT_FOUND, extra)


class IdMismatchException(AppException):
    """Exception raised when a body id does not match the id in the path."""
    def __init__(self, detail: str = "Update failed: id in body does not match id in path",
                 extra: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, ErrorKind.VALIDATION_FAILED, extra)


class ConcurrencyConflictException(AppException):
    """Exception raised when a record changed between read and write."""
    def __init__(self, detail: str = "Record was modified by another request; re-fetch and retry",
                 extra: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_409_CONFLICT, detail, ErrorKind.CONCURRENCY_CONFLICT, extra)


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    logger.warning(f"Application error on {request.method} {request.url.path}: {exc.detail}")
    content = {"detail": exc.detail, "error": exc.kind.value}
    content.update(jsonable_encoder(exc.extra))
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=exc.headers
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: Standardized error response with validation details
    """
    logger.error(f"Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation error",
            "errors": jsonable_encoder(exc.errors())
        }
    )


async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    """
    Handler for database errors nothing else caught.

    The raw error text is only returned when the application is configured
    with ``expose_store_errors``; it is always logged.
    """
    logger.error(f"Database error on {request.method} {request.url.path}: {str(exc)}")
    if request.app.state.settings.expose_store_errors:
        detail = str(exc)
    else:
        detail = "The request could not be completed"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail, "error": ErrorKind.STORE_ERROR.value}
    )


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)
