"""
Search domain entities.

A search candidate is one of the content entities. Scoring works on a
uniform view projected from the candidate, and scores travel on a
wrapper so that entities are never mutated.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from folio.core.entities.content import Blog, Image, Project, Tag


class SearchCategory(str, Enum):
    """Category filter accepted by the search endpoint."""

    ALL = "all"
    PROJECTS = "projects"
    BLOGS = "blogs"
    IMAGES = "images"
    TAGS = "tags"


# Emission order of the fan-out; ties in score keep this order.
CATEGORY_ORDER: tuple[SearchCategory, ...] = (
    SearchCategory.PROJECTS,
    SearchCategory.BLOGS,
    SearchCategory.IMAGES,
    SearchCategory.TAGS,
)


Candidate = Project | Blog | Image | Tag


@dataclass(frozen=True)
class ScoringView:
    """Uniform fields the relevance scorer reads."""

    title: str
    created_at: datetime
    description: str | None = None
    content: str | None = None
    tag_names: tuple[str, ...] = ()
    featured: bool = False


def scoring_view(candidate: Candidate) -> ScoringView:
    """Project any candidate onto the uniform scoring view."""
    if isinstance(candidate, Project):
        return ScoringView(
            title=candidate.title,
            description=candidate.description,
            content=candidate.content,
            tag_names=tuple(t.name for t in candidate.tags),
            featured=candidate.featured,
            created_at=candidate.created_at,
        )
    if isinstance(candidate, Blog):
        return ScoringView(
            title=candidate.title,
            description=candidate.excerpt,
            content=candidate.content,
            tag_names=tuple(t.name for t in candidate.tags),
            featured=candidate.featured,
            created_at=candidate.created_at,
        )
    if isinstance(candidate, Image):
        return ScoringView(
            title=candidate.alt or "",
            description=candidate.caption,
            created_at=candidate.created_at,
        )
    if isinstance(candidate, Tag):
        return ScoringView(title=candidate.name, created_at=candidate.created_at)
    raise TypeError(f"Unsupported search candidate: {type(candidate).__name__}")


def candidate_category(candidate: Candidate) -> SearchCategory:
    """Result bucket a candidate belongs to."""
    if isinstance(candidate, Project):
        return SearchCategory.PROJECTS
    if isinstance(candidate, Blog):
        return SearchCategory.BLOGS
    if isinstance(candidate, Image):
        return SearchCategory.IMAGES
    if isinstance(candidate, Tag):
        return SearchCategory.TAGS
    raise TypeError(f"Unsupported search candidate: {type(candidate).__name__}")


@dataclass
class ScoredCandidate:
    """Candidate with its relevance score for one query."""

    candidate: Candidate
    score: int


@dataclass
class SearchResultPage:
    """One page of ranked results, bucketed by category."""

    query: str
    category: SearchCategory
    page: int
    limit: int
    total: int
    total_pages: int
    projects: list[Project] = field(default_factory=list)
    blogs: list[Blog] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)

    @property
    def returned(self) -> int:
        return len(self.projects) + len(self.blogs) + len(self.images) + len(self.tags)
