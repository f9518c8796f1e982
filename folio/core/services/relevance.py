"""
Relevance scoring for search candidates.

Scores are additive integers used only to order results within one
response. Title matches are tiered: only the best of equality, prefix
and substring counts.
"""

from datetime import UTC, datetime, timedelta

from folio.core.entities.search import Candidate, ScoringView, scoring_view

TITLE_EXACT_SCORE = 100
TITLE_PREFIX_SCORE = 80
TITLE_CONTAINS_SCORE = 60
DESCRIPTION_SCORE = 40
CONTENT_SCORE = 20
TAG_SCORE = 50
FEATURED_SCORE = 25
RECENT_SCORE = 15

RECENT_WINDOW = timedelta(days=30)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def title_score(title: str, query: str) -> int:
    """Tiered title match for a lower-cased query."""
    title = title.lower()
    if title == query:
        return TITLE_EXACT_SCORE
    if title.startswith(query):
        return TITLE_PREFIX_SCORE
    if query in title:
        return TITLE_CONTAINS_SCORE
    return 0


def score_view(view: ScoringView, query: str, now: datetime | None = None) -> int:
    """Score a projected candidate against a lower-cased query."""
    now = _as_utc(now) if now else datetime.now(UTC)
    query = query.lower()

    total = title_score(view.title, query)

    if view.description and query in view.description.lower():
        total += DESCRIPTION_SCORE

    if view.content and query in view.content.lower():
        total += CONTENT_SCORE

    if any(query in name.lower() for name in view.tag_names):
        total += TAG_SCORE

    if view.featured:
        total += FEATURED_SCORE

    if _as_utc(view.created_at) >= now - RECENT_WINDOW:
        total += RECENT_SCORE

    return total


def score(candidate: Candidate, query: str, now: datetime | None = None) -> int:
    """Relevance of a candidate for a lower-cased query."""
    return score_view(scoring_view(candidate), query, now)
