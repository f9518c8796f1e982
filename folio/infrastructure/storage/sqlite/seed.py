"""
Sample portfolio content for local development.
"""

from datetime import UTC, datetime, timedelta

import aiosqlite

from folio.config import get_logger
from folio.core.entities import Blog, Image, Project, TagRef
from folio.infrastructure.storage.sqlite.content_store import SQLiteContentStore

logger = get_logger(__name__)


def sample_content(now: datetime | None = None) -> tuple[list[Project], list[Blog], list[Image]]:
    """Build a small, searchable content set relative to ``now``."""
    now = now or datetime.now(UTC)

    projects = [
        Project(
            title="Portfolio Site",
            slug="portfolio-site",
            description="Personal site built with React and a headless CMS",
            content="Server-rendered React pages with image optimization and search.",
            tech_stack=["React", "TypeScript", "PostgreSQL"],
            featured=True,
            published=True,
            tags=[TagRef(name="React"), TagRef(name="Web")],
            created_at=now - timedelta(days=3),
        ),
        Project(
            title="Design System",
            slug="design-system",
            description="Component library with accessible React primitives",
            content="Tokens, themes and documentation for a shared UI kit.",
            tech_stack=["React", "Storybook"],
            published=True,
            tags=[TagRef(name="React"), TagRef(name="Design")],
            created_at=now - timedelta(days=90),
        ),
        Project(
            title="Data Pipeline",
            slug="data-pipeline",
            description="Nightly ETL jobs for analytics dashboards",
            tech_stack=["Python", "Airflow"],
            published=False,
            tags=[TagRef(name="Data")],
            created_at=now - timedelta(days=10),
        ),
    ]

    blogs = [
        Blog(
            title="React Server Components in Practice",
            slug="react-server-components",
            excerpt="What changed when the portfolio moved to server components",
            content="Streaming, caching and the pitfalls of client boundaries.",
            featured=True,
            published=True,
            read_time=8,
            tags=[TagRef(name="React")],
            published_at=now - timedelta(days=5),
            created_at=now - timedelta(days=6),
        ),
        Blog(
            title="Lighthouse Scores Without Tears",
            slug="lighthouse-scores",
            excerpt="Image and script budgets that kept the site fast",
            content="Core web vitals, lazy loading and font strategies.",
            published=True,
            read_time=6,
            tags=[TagRef(name="Performance"), TagRef(name="Web")],
            published_at=now - timedelta(days=60),
            created_at=now - timedelta(days=61),
        ),
    ]

    images = [
        Image(
            id="seed-react-conf",
            url="/images/gallery/react-conf.jpg",
            alt="React conference stage",
            caption="Talk on server components",
            width=1600,
            height=900,
            created_at=now - timedelta(days=2),
        ),
        Image(
            id="seed-studio",
            url="/images/gallery/studio.jpg",
            alt="Studio desk",
            caption="Where the design system was drawn",
            width=1200,
            height=800,
            created_at=now - timedelta(days=40),
        ),
    ]

    return projects, blogs, images


async def seed_sample_content(store: SQLiteContentStore | None = None) -> dict[str, int]:
    """
    Insert the sample content, skipping rows that already exist.

    Returns:
        Number of rows created per content type
    """
    store = store or SQLiteContentStore()
    projects, blogs, images = sample_content()
    created = {"projects": 0, "blogs": 0, "images": 0}

    for project in projects:
        try:
            await store.create_project(project)
            created["projects"] += 1
        except aiosqlite.IntegrityError:
            logger.debug("seed_project_exists", slug=project.slug)

    for blog in blogs:
        try:
            await store.create_blog(blog)
            created["blogs"] += 1
        except aiosqlite.IntegrityError:
            logger.debug("seed_blog_exists", slug=blog.slug)

    for image in images:
        try:
            await store.create_image(image)
            created["images"] += 1
        except aiosqlite.IntegrityError:
            logger.debug("seed_image_exists", image_id=image.id)

    logger.info("sample_content_seeded", **created)
    return created
