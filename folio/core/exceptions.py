"""
Domain exceptions for the Folio application.

Provides specific exception types for different error scenarios.
"""

import math
from typing import Any


class FolioError(Exception):
    """Base exception for all Folio errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details if details is not None else {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.message,
            "error_code": self.code,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(FolioError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ContentNotFoundError(StorageError):
    """Project or blog not found."""

    def __init__(self, content_type: str, content_id: str):
        super().__init__(
            f"{content_type.capitalize()} not found: {content_id}",
            code="CONTENT_NOT_FOUND",
            details={"content_type": content_type, "content_id": content_id},
        )


# Search Exceptions
class SearchError(FolioError):
    """Search pipeline failed."""

    def __init__(
        self,
        message: str = "An error occurred while searching. Please try again.",
        reason: str | None = None,
    ):
        super().__init__(
            message,
            code="SEARCH_FAILED",
            details={"reason": reason} if reason else {},
        )


# Analytics Exceptions
class AnalyticsError(FolioError):
    """Analytics read or write failed."""

    pass


# Validation Exceptions
class ValidationError(FolioError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class InvalidParametersError(FolioError):
    """Request parameters failed schema validation."""

    def __init__(
        self,
        issues: list[dict[str, Any]],
        message: str = "Invalid parameters",
    ):
        super().__init__(message, code="INVALID_PARAMETERS", details=issues)
        self.issues = issues


class InvalidSearchParametersError(InvalidParametersError):
    """Search query parameters failed schema validation."""

    def __init__(self, issues: list[dict[str, Any]]):
        super().__init__(issues, message="Invalid search parameters")
        self.code = "INVALID_SEARCH_PARAMETERS"


# Rate limiting
class RateLimitExceededError(FolioError):
    """Client exceeded its request budget for the current window."""

    def __init__(self, limit: int, reset_at_ms: float, now_ms: float):
        retry_after = max(0, math.ceil((reset_at_ms - now_ms) / 1000))
        super().__init__(
            "Too many requests. Please try again later.",
            code="RATE_LIMITED",
            details={"retry_after": retry_after},
        )
        self.limit = limit
        self.reset_at_ms = reset_at_ms
        self.retry_after = retry_after

    def headers(self) -> dict[str, str]:
        """Headers advertising the limit and when to retry."""
        return {
            "Retry-After": str(self.retry_after),
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": str(int(self.reset_at_ms)),
        }


class ConfigurationError(FolioError):
    """Configuration error."""

    pass
