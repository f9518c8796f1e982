"""API middleware."""

from folio.api.middleware.error_handler import ErrorHandlerMiddleware
from folio.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
