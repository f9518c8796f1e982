"""
Error handling middleware.

Standardizes all API error responses to include:
- error: human-readable description
- errorCode: machine-readable identifier
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from folio.application.dto.responses import ErrorResponse
from folio.config import get_logger
from folio.core.exceptions import (
    AnalyticsError,
    ConfigurationError,
    ContentNotFoundError,
    FolioError,
    InvalidParametersError,
    RateLimitExceededError,
    SearchError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; first match wins
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    InvalidParametersError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    RateLimitExceededError: status.HTTP_429_TOO_MANY_REQUESTS,
    ContentNotFoundError: status.HTTP_404_NOT_FOUND,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    SearchError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AnalyticsError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "INVALID_SEARCH_PARAMETERS": (
        "Use q (1-200 characters), category (all, projects, blogs, images or tags), "
        "a positive page and a limit of at most 50."
    ),
    "INVALID_PARAMETERS": "Check the request body fields and types.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "RATE_LIMITED": "Wait for the number of seconds in Retry-After before retrying.",
    "CONTENT_NOT_FOUND": "Check the project or blog ID.",
    "SEARCH_FAILED": "Search could not complete. Retry shortly.",
    "CLICK_TRACKING_FAILED": "The click was not recorded. It is safe to retry.",
    "ANALYTICS_FAILED": "Analytics could not be loaded. Check server logs.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found.",
    405: "Check the HTTP method for this endpoint.",
    429: "Slow down and retry later.",
    500: "An internal error occurred. Check server logs.",
    503: "The service is temporarily unavailable. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def validation_issues(errors: list[Any]) -> list[dict[str, Any]]:
    """Flatten pydantic error dicts into field/message/type issues."""
    issues = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        issues.append({
            "field": ".".join(loc) or None,
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        })
    return issues


def error_response(
    request: Request,
    status_code: int,
    message: str,
    error_code: str,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render the standard error body."""
    body = ErrorResponse(
        error=message,
        error_code=error_code,
        hint=_get_hint(error_code, status_code),
        details=details or None,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions that escaped the exception handlers into
    standardized JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return self._handle_exception(request, e)

    def _handle_exception(
        self,
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Convert exception to standardized JSON response."""
        if isinstance(exc, FolioError):
            return folio_error_response(request, exc)

        request_id = getattr(request.state, "request_id", None)

        logger.error(
            "unhandled_exception",
            request_id=request_id,
            path=request.url.path,
            error_type=exc.__class__.__name__,
            error=str(exc),
            traceback=traceback.format_exc(),
        )

        return error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred. Please try again.",
            "INTERNAL_ERROR",
        )


def folio_error_response(request: Request, exc: FolioError) -> JSONResponse:
    """Convert a domain exception to its HTTP response."""
    status_code = _status_for(exc)
    request_id = getattr(request.state, "request_id", None)

    if status_code >= 500:
        logger.error(
            "request_error",
            request_id=request_id,
            path=request.url.path,
            **exc.to_dict(),
            traceback=traceback.format_exc(),
        )
        # Internal details stay in the logs
        details = None
    else:
        logger.warning(
            "request_rejected",
            request_id=request_id,
            path=request.url.path,
            status=status_code,
            error_code=exc.code,
        )
        details = exc.details

    headers = None
    if isinstance(exc, RateLimitExceededError):
        headers = exc.headers()
        details = None

    return error_response(
        request,
        status_code,
        exc.message,
        exc.code,
        details=details,
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(FolioError)
    async def folio_exception_handler(
        request: Request,
        exc: FolioError,
    ) -> JSONResponse:
        """Handle domain exceptions."""
        return folio_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        return error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Invalid parameters",
            "INVALID_PARAMETERS",
            details=validation_issues(list(exc.errors())),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)
        return error_response(
            request,
            exc.status_code,
            str(exc.detail) if exc.detail else "An error occurred",
            error_code,
            headers=getattr(exc, "headers", None),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTP status."""
    return {
        400: "BAD_REQUEST",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        429: "RATE_LIMITED",
    }.get(status_code, "HTTP_ERROR")
