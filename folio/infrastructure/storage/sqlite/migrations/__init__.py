"""Database migrations module."""

from folio.infrastructure.storage.sqlite.migrations.migrator import (
    AppliedMigration,
    Migration,
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)

__all__ = [
    "AppliedMigration",
    "Migration",
    "discover_migrations",
    "get_migration_status",
    "initialize_database",
    "verify_schema_integrity",
]
