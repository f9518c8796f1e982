"""Column conversions shared by the SQLite stores."""

import re
from datetime import UTC, datetime


def to_db_time(value: datetime) -> str:
    """Serialize a datetime as an ISO 8601 UTC string."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def from_db_time(value: str | None) -> datetime | None:
    """Parse a stored timestamp; naive values are taken as UTC."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def slugify(text: str) -> str:
    """Lower-case, hyphen-separated slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower())
    return slug.strip("-")


def placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))
