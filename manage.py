#!/usr/bin/env python3
"""
Folio management CLI.

Usage:
    python manage.py migrate     Apply pending database migrations
    python manage.py status      Show migration status and schema checks
    python manage.py seed        Insert sample content
    python manage.py serve       Start the API server
"""

import argparse
import asyncio
import sys

from folio.config import configure_logging, get_settings


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations."""
    from folio.core.exceptions import DatabaseError
    from folio.infrastructure.storage.sqlite.migrations import initialize_database

    try:
        applied = asyncio.run(initialize_database(create_backup_before=not args.no_backup))
    except DatabaseError as e:
        print(f"Migration failed: {e.message}")
        sys.exit(1)

    if not applied:
        print("Database is up to date.")
        return

    for migration in applied:
        print(f"  v{migration.version} {migration.name}: ok [{migration.execution_time_ms}ms]")


def cmd_status(args: argparse.Namespace) -> None:
    """Print migration status and integrity checks."""
    from folio.infrastructure.storage.sqlite.migrations import (
        get_migration_status,
        verify_schema_integrity,
    )

    status = asyncio.run(get_migration_status())
    print(f"Database:  {get_settings().storage.db_path}")

    if not status["exists"]:
        print("Database does not exist. Run 'migrate' first.")
        return

    print(f"Version:   {status['current_version'] or 'none'}")
    print(f"Applied:   {', '.join(status['applied_migrations']) or 'none'}")
    print(f"Pending:   {', '.join(status['pending_migrations']) or 'none'}")

    checks = asyncio.run(verify_schema_integrity())
    failed = False
    for check in checks:
        print(f"  {check['check']}: {check['status']}")
        failed = failed or check["status"] != "PASS"

    if failed:
        sys.exit(1)


async def _seed() -> dict[str, int]:
    from folio.infrastructure.storage.sqlite import close_pool
    from folio.infrastructure.storage.sqlite.migrations import initialize_database
    from folio.infrastructure.storage.sqlite.seed import seed_sample_content

    await initialize_database()
    try:
        return await seed_sample_content()
    finally:
        await close_pool()


def cmd_seed(args: argparse.Namespace) -> None:
    """Insert sample content."""
    created = asyncio.run(_seed())
    print(", ".join(f"{count} {kind}" for kind, count in created.items()) + " created.")


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    print(f"Starting server on {args.host}:{args.port}...")
    uvicorn.run(
        "folio.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


def main() -> None:
    configure_logging()
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Folio management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument(
        "--no-backup", action="store_true", help="Skip the pre-migration backup"
    )
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.set_defaults(func=cmd_status)

    # seed
    p_seed = sub.add_parser("seed", help="Insert sample content")
    p_seed.set_defaults(func=cmd_seed)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument(
        "--host", default=settings.api.host, help=f"Bind host (default: {settings.api.host})"
    )
    p_serve.add_argument(
        "--port", type=int, default=settings.api.port, help=f"Bind port (default: {settings.api.port})"
    )
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
