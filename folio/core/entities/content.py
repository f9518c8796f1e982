"""
Content domain entities.

Projects, blog articles, gallery images and the tags that link them.
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


def _new_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TagRef(BaseModel):
    """Tag name attached to a project or blog."""

    name: str
    slug: str | None = None


class Tag(BaseModel):
    """Taxonomy tag shared by projects and blogs."""

    id: str = Field(default_factory=_new_id)
    name: str
    slug: str
    created_at: datetime = Field(default_factory=_utcnow)


class Project(BaseModel):
    """
    Portfolio project.

    Only published projects are visible to search.
    """

    id: str = Field(default_factory=_new_id)
    title: str
    slug: str
    description: str | None = None
    content: str | None = None
    tech_stack: list[str] = Field(default_factory=list)

    featured: bool = False
    published: bool = False
    views: int = 0

    tags: list[TagRef] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def url(self) -> str:
        return f"/projects/{self.slug}"


class Blog(BaseModel):
    """
    Blog article.

    Only published articles are visible to search.
    """

    id: str = Field(default_factory=_new_id)
    title: str
    slug: str
    excerpt: str | None = None
    content: str | None = None

    featured: bool = False
    published: bool = False
    views: int = 0
    read_time: int | None = None  # minutes

    tags: list[TagRef] = Field(default_factory=list)

    published_at: datetime | None = None
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def url(self) -> str:
        return f"/blogs/{self.slug}"


class Image(BaseModel):
    """Gallery image."""

    id: str = Field(default_factory=_new_id)
    url: str
    alt: str | None = None
    caption: str | None = None
    width: int | None = None
    height: int | None = None
    visible: bool = True

    created_at: datetime = Field(default_factory=_utcnow)
