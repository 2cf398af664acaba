"""
Error Handling

API error types, consistent error payloads, and exception handlers.
Server errors are logged in full with a short error ID; the client only
sees a generic message plus that ID.
"""

import logging
import uuid
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base error rendered as {"error": message, "category": category}."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    category = "server_error"

    def __init__(self, message: str, error_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_id = error_id


class ValidationError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    category = "client_error"


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    category = "not_found"


class ServerError(APIError):
    pass


def log_and_sanitize_error(error: Exception, context: str) -> str:
    """
    Log full error details server-side and return an error ID for the client.

    Args:
        error: The exception that occurred
        context: Description of what operation failed (e.g., "Failed to read posts")

    Returns:
        Short error ID to correlate the client response with the log entry
    """
    error_id = str(uuid.uuid4())[:8]

    logger.error(
        f"{context} [{error_id}]: {type(error).__name__}: {str(error)}",
        exc_info=error,
    )

    return error_id


def server_error(error: Exception, message: str) -> ServerError:
    """Log error and build the ServerError to raise in its place."""
    return ServerError(message, error_id=log_and_sanitize_error(error, message))


def error_response(
    message: str,
    category: str,
    status_code: int,
    error_id: Optional[str] = None,
) -> JSONResponse:
    """Consistent error payloads across the API."""
    content = {"error": message, "category": category}
    if error_id:
        content["errorId"] = error_id
    return JSONResponse(status_code=status_code, content=content)


def setup_error_handlers(app: FastAPI, not_found_message: str = "Not found") -> None:
    """Register handlers that render APIError and framework errors as JSON."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        return error_response(
            message=exc.message,
            category=exc.category,
            status_code=exc.status_code,
            error_id=exc.error_id,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        # A malformed path parameter means the resource cannot exist
        if any(tuple(err.get("loc", ()))[:1] == ("path",) for err in errors):
            return error_response(
                message=not_found_message,
                category=NotFoundError.category,
                status_code=NotFoundError.status_code,
            )

        first = errors[0] if errors else {}
        # JSON decode errors put a character offset where the field name goes
        field = ".".join(part for part in tuple(first.get("loc", ()))[1:] if isinstance(part, str))
        message = first.get("msg", "Invalid request")
        if field:
            message = f"{field}: {message}"
        return error_response(
            message=message,
            category=ValidationError.category,
            status_code=ValidationError.status_code,
        )

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception):
        error_id = log_and_sanitize_error(exc, f"Unexpected error on {request.url.path}")
        return error_response(
            message="An unexpected server error occurred. Please try again later.",
            category="server_error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_id=error_id,
        )
