"""SQLite storage implementations."""

from folio.infrastructure.storage.sqlite.analytics_store import SQLiteAnalyticsStore
from folio.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from folio.infrastructure.storage.sqlite.content_store import SQLiteContentStore

# Aliases used by the application lifespan
get_connection_pool = get_pool
close_connection_pool = close_pool

# Singleton instances
_content_store: SQLiteContentStore | None = None
_analytics_store: SQLiteAnalyticsStore | None = None


def get_content_store() -> SQLiteContentStore:
    """Get singleton content store instance."""
    global _content_store
    if _content_store is None:
        _content_store = SQLiteContentStore()
    return _content_store


def get_analytics_store() -> SQLiteAnalyticsStore:
    """Get singleton analytics store instance."""
    global _analytics_store
    if _analytics_store is None:
        _analytics_store = SQLiteAnalyticsStore()
    return _analytics_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "get_connection_pool",
    "close_connection_pool",
    # Store classes
    "SQLiteContentStore",
    "SQLiteAnalyticsStore",
    # Factory functions
    "get_content_store",
    "get_analytics_store",
]
