"""Abstract interfaces implemented by the infrastructure layer."""

from folio.core.interfaces.rate_limit import IRateLimitStore
from folio.core.interfaces.storage import IAnalyticsStore, IContentStore

__all__ = [
    "IContentStore",
    "IAnalyticsStore",
    "IRateLimitStore",
]
