"""Core domain entities."""

from folio.core.entities.analytics import (
    SearchAnalyticsAggregate,
    SearchHistoryRecord,
    SearchTrendPoint,
    ViewedContent,
)
from folio.core.entities.content import Blog, Image, Project, Tag, TagRef
from folio.core.entities.rate_limit import RateLimitEntry
from folio.core.entities.search import (
    CATEGORY_ORDER,
    Candidate,
    ScoredCandidate,
    ScoringView,
    SearchCategory,
    SearchResultPage,
    candidate_category,
    scoring_view,
)

__all__ = [
    # Content entities
    "Project",
    "Blog",
    "Image",
    "Tag",
    "TagRef",
    # Search entities
    "SearchCategory",
    "CATEGORY_ORDER",
    "Candidate",
    "ScoringView",
    "ScoredCandidate",
    "SearchResultPage",
    "scoring_view",
    "candidate_category",
    # Rate limiting
    "RateLimitEntry",
    # Analytics entities
    "SearchHistoryRecord",
    "SearchAnalyticsAggregate",
    "ViewedContent",
    "SearchTrendPoint",
]
