"""
Versioned schema migrations.

Migration files are named ``vNNN_name.sql`` and live next to this module.
Each one runs inside a single transaction together with its
``schema_migrations`` row, so a failing file leaves no partial schema.
An existing database is backed up first and restored if anything fails.
"""

import hashlib
import re
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

import aiosqlite

from folio.config import get_logger, get_settings
from folio.core.exceptions import DatabaseError

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_FILENAME = re.compile(r"v(\d+)_(\w+)\.sql")

REQUIRED_TABLES = (
    "projects",
    "blogs",
    "images",
    "tags",
    "project_tags",
    "blog_tags",
    "search_history",
    "search_analytics",
    "schema_migrations",
)

_MIGRATIONS_TABLE = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT NOT NULL,
    applied_at TEXT DEFAULT (datetime('now')),
    execution_time_ms INTEGER
)
"""


@dataclass(frozen=True)
class Migration:
    """A schema migration file."""

    version: str
    name: str
    sql: str
    checksum: str

    @classmethod
    def load(cls, path: Path) -> "Migration":
        match = _FILENAME.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        sql = path.read_text(encoding="utf-8")
        return cls(
            version=match.group(1),
            name=match.group(2),
            sql=sql,
            checksum=hashlib.sha256(sql.encode()).hexdigest()[:16],
        )

    def script(self) -> str:
        """The migration and its bookkeeping row as one transaction."""
        # version, name and checksum are restricted to word characters
        return (
            "BEGIN IMMEDIATE;\n"
            f"{self.sql}\n;\n"
            "INSERT INTO schema_migrations (version, name, checksum) "
            f"VALUES ('{self.version}', '{self.name}', '{self.checksum}');\n"
            "COMMIT;"
        )


@dataclass(frozen=True)
class AppliedMigration:
    version: str
    name: str
    execution_time_ms: int


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """Migration files in version order; badly named files are skipped."""
    migrations = []
    for path in sorted(directory.glob("v*.sql")):
        try:
            migrations.append(Migration.load(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def _applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    cursor = await conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'schema_migrations'"
    )
    if await cursor.fetchone() is None:
        return {}
    cursor = await conn.execute("SELECT version, checksum FROM schema_migrations ORDER BY version")
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def _apply(conn: aiosqlite.Connection, migration: Migration) -> AppliedMigration:
    logger.info("applying_migration", version=migration.version, name=migration.name)
    start = time.perf_counter()

    try:
        await conn.executescript(migration.script())
    except aiosqlite.Error as e:
        if conn.in_transaction:
            await conn.execute("ROLLBACK")
        logger.error("migration_failed", version=migration.version, error=str(e))
        raise DatabaseError(f"migration v{migration.version}_{migration.name}", str(e)) from e

    elapsed = int((time.perf_counter() - start) * 1000)
    await conn.execute(
        "UPDATE schema_migrations SET execution_time_ms = ? WHERE version = ?",
        (elapsed, migration.version),
    )
    logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed)
    return AppliedMigration(migration.version, migration.name, elapsed)


async def _backup(conn: aiosqlite.Connection, db_path: Path) -> Path:
    stamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S_%f")
    backup_path = db_path.with_name(f"{db_path.stem}.backup_{stamp}{db_path.suffix}")
    async with aiosqlite.connect(backup_path) as target:
        await conn.backup(target)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


async def _restore(conn: aiosqlite.Connection, backup_path: Path) -> None:
    async with aiosqlite.connect(backup_path) as source:
        await source.backup(conn)
    logger.warning("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
    directory: Path = MIGRATIONS_DIR,
) -> list[AppliedMigration]:
    """
    Apply all pending migrations.

    Args:
        db_path: Database file (default from settings)
        create_backup_before: Back up an already migrated database first
        directory: Where migration files are discovered

    Returns:
        The migrations applied by this call, in order

    Raises:
        DatabaseError: If a migration fails; the database is left as it was
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    migrations = discover_migrations(directory)

    logger.info("initializing_database", db_path=str(db_path), available=len(migrations))

    applied: list[AppliedMigration] = []
    async with aiosqlite.connect(db_path, isolation_level=None) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")

        done = await _applied_checksums(conn)
        for migration in migrations:
            if migration.version in done and done[migration.version] != migration.checksum:
                logger.warning("migration_checksum_changed", version=migration.version)
        pending = [m for m in migrations if m.version not in done]
        if not pending:
            return applied

        await conn.execute(_MIGRATIONS_TABLE)
        backup_path = await _backup(conn, db_path) if create_backup_before and done else None

        try:
            for migration in pending:
                applied.append(await _apply(conn, migration))
        except DatabaseError:
            # The backup file is kept for inspection
            if backup_path is not None:
                await _restore(conn, backup_path)
            raise

        if backup_path is not None:
            backup_path.unlink()

    return applied


async def get_migration_status(
    db_path: Path | None = None,
    directory: Path = MIGRATIONS_DIR,
) -> dict:
    """Applied and pending migration versions for a database."""
    db_path = db_path or get_settings().storage.db_path
    available = [m.version for m in discover_migrations(directory)]

    done: dict[str, str] = {}
    if db_path.exists():
        async with aiosqlite.connect(db_path) as conn:
            done = await _applied_checksums(conn)

    return {
        "exists": db_path.exists(),
        "current_version": max(done) if done else None,
        "applied_migrations": sorted(done),
        "pending_migrations": [v for v in available if v not in done],
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """Foreign key, page integrity and required-table checks."""
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA foreign_key_check")
        violations = len(await cursor.fetchall())

        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = (await cursor.fetchone())[0]

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {row[0] for row in await cursor.fetchall()}

    missing = [t for t in REQUIRED_TABLES if t not in tables]
    return [
        {"check": "foreign_keys", "status": "PASS" if not violations else "FAIL", "violations": violations},
        {"check": "integrity", "status": "PASS" if integrity == "ok" else "FAIL", "result": integrity},
        {"check": "required_tables", "status": "PASS" if not missing else "FAIL", "missing": missing},
    ]
