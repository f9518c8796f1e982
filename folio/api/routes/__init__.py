"""API route modules."""

from folio.api.routes.analytics import router as analytics_router
from folio.api.routes.health import router as health_router
from folio.api.routes.search import router as search_router

__all__ = [
    "health_router",
    "search_router",
    "analytics_router",
]
