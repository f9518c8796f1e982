"""Tests for SQLiteContentStore against a migrated database."""

from datetime import UTC, datetime, timedelta

import aiosqlite
import pytest

from folio.core.entities import Blog, Image, Project, Tag, TagRef
from folio.core.exceptions import ContentNotFoundError
from folio.infrastructure.storage.sqlite import get_connection

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def _project(slug: str, days_old: int = 1, **kwargs) -> Project:
    kwargs.setdefault("title", slug.replace("-", " ").title())
    kwargs.setdefault("published", True)
    return Project(slug=slug, created_at=NOW - timedelta(days=days_old), **kwargs)


class TestSearchProjects:
    """Tests for search_projects()."""

    @pytest.mark.asyncio
    async def test_matches_title_case_insensitive(self, content_store):
        await content_store.create_project(_project("react-dashboard", title="React Dashboard"))

        results = await content_store.search_projects("REACT", 10)

        assert [p.slug for p in results] == ["react-dashboard"]

    @pytest.mark.asyncio
    async def test_matches_non_ascii_title_in_other_case(self, content_store):
        await content_store.create_project(_project("uber-design", title="Über Design"))

        assert [p.slug for p in await content_store.search_projects("über", 10)] == ["uber-design"]
        assert [p.slug for p in await content_store.search_projects("ÜBER", 10)] == ["uber-design"]

    @pytest.mark.asyncio
    async def test_matches_description_and_content(self, content_store):
        await content_store.create_project(_project("a", description="built with Svelte"))
        await content_store.create_project(_project("b", content="svelte stores everywhere"))
        await content_store.create_project(_project("c", description="nothing here"))

        results = await content_store.search_projects("svelte", 10)

        assert {p.slug for p in results} == {"a", "b"}

    @pytest.mark.asyncio
    async def test_matches_tech_stack_exactly(self, content_store):
        await content_store.create_project(_project("api", tech_stack=["FastAPI", "Go"]))

        assert len(await content_store.search_projects("Go", 10)) == 1
        assert await content_store.search_projects("go", 10) == []

    @pytest.mark.asyncio
    async def test_matches_tag_names(self, content_store):
        await content_store.create_project(
            _project("site", tags=[TagRef(name="Accessibility")])
        )

        results = await content_store.search_projects("access", 10)

        assert len(results) == 1
        assert results[0].tags[0].name == "Accessibility"
        assert results[0].tags[0].slug == "accessibility"

    @pytest.mark.asyncio
    async def test_excludes_unpublished(self, content_store):
        await content_store.create_project(_project("draft", title="React Draft", published=False))

        assert await content_store.search_projects("react", 10) == []

    @pytest.mark.asyncio
    async def test_newest_first_with_limit(self, content_store):
        for days in (30, 1, 10):
            await content_store.create_project(_project(f"react-{days}", days_old=days))

        results = await content_store.search_projects("react", 2)

        assert [p.slug for p in results] == ["react-1", "react-10"]

    @pytest.mark.asyncio
    async def test_roundtrips_fields(self, content_store):
        created = _project(
            "full",
            title="Full",
            description="desc",
            content="body",
            tech_stack=["Python"],
            featured=True,
            views=4,
        )
        await content_store.create_project(created)

        (loaded,) = await content_store.search_projects("full", 10)

        assert loaded.id == created.id
        assert loaded.tech_stack == ["Python"]
        assert loaded.featured is True
        assert loaded.views == 4
        assert loaded.created_at == created.created_at


class TestSearchOtherContent:
    """Tests for blog, image and tag search."""

    @pytest.mark.asyncio
    async def test_blog_excerpt_and_tags(self, content_store):
        await content_store.create_blog(
            Blog(title="One", slug="one", excerpt="about rust", published=True)
        )
        await content_store.create_blog(
            Blog(title="Two", slug="two", published=True, tags=[TagRef(name="Rust")])
        )
        await content_store.create_blog(
            Blog(title="Rust draft", slug="three", published=False)
        )

        results = await content_store.search_blogs("rust", 10)

        assert {b.slug for b in results} == {"one", "two"}

    @pytest.mark.asyncio
    async def test_blog_published_at_roundtrip(self, content_store):
        published_at = NOW - timedelta(days=3)
        await content_store.create_blog(
            Blog(title="Hooks", slug="hooks", published=True, published_at=published_at, read_time=5)
        )

        (blog,) = await content_store.search_blogs("hooks", 10)

        assert blog.published_at == published_at
        assert blog.read_time == 5
        assert blog.url == "/blogs/hooks"

    @pytest.mark.asyncio
    async def test_images_alt_caption_visible(self, content_store):
        await content_store.create_image(Image(url="/a.png", alt="Mountain view"))
        await content_store.create_image(Image(url="/b.png", caption="mountain hut"))
        await content_store.create_image(Image(url="/c.png", alt="Mountain hidden", visible=False))

        results = await content_store.search_images("mountain", 10)

        assert {i.url for i in results} == {"/a.png", "/b.png"}

    @pytest.mark.asyncio
    async def test_tags_by_name_or_slug(self, content_store):
        await content_store.create_tag(Tag(name="Machine Learning", slug="ml"))
        await content_store.create_tag(Tag(name="Design", slug="design"))

        assert [t.slug for t in await content_store.search_tags("learning", 10)] == ["ml"]
        assert [t.name for t in await content_store.search_tags("ml", 10)] == ["Machine Learning"]

    @pytest.mark.asyncio
    async def test_query_is_not_a_pattern(self, content_store):
        """Wildcard characters match literally."""
        await content_store.create_tag(Tag(name="100% coverage", slug="coverage"))
        await content_store.create_tag(Tag(name="snake_case", slug="snake"))

        assert len(await content_store.search_tags("%", 10)) == 1
        assert [t.slug for t in await content_store.search_tags("_", 10)] == ["snake"]


class TestTagLinking:
    """Tests for tag creation while linking content."""

    @pytest.mark.asyncio
    async def test_reuses_existing_tag(self, content_store):
        await content_store.create_project(_project("a", tags=[TagRef(name="Web")]))
        await content_store.create_blog(
            Blog(title="b", slug="b", published=True, tags=[TagRef(name="Web")])
        )

        tags = await content_store.search_tags("web", 10)

        assert len(tags) == 1

    @pytest.mark.asyncio
    async def test_duplicate_slug_rejected(self, content_store):
        await content_store.create_project(_project("same"))

        with pytest.raises(aiosqlite.IntegrityError):
            await content_store.create_project(_project("same"))


class TestViews:
    """Tests for view counters."""

    @pytest.mark.asyncio
    async def test_increment_project_views(self, content_store):
        project = await content_store.create_project(_project("p", views=2))

        await content_store.increment_project_views(project.id)
        await content_store.increment_project_views(project.id)

        async with get_connection() as conn:
            cursor = await conn.execute("SELECT views FROM projects WHERE id = ?", (project.id,))
            assert (await cursor.fetchone())["views"] == 4

    @pytest.mark.asyncio
    async def test_increment_missing_raises(self, content_store):
        with pytest.raises(ContentNotFoundError):
            await content_store.increment_blog_views("missing")

    @pytest.mark.asyncio
    async def test_top_viewed_published_only(self, content_store):
        await content_store.create_project(_project("low", views=1))
        await content_store.create_project(_project("high", views=50))
        await content_store.create_project(_project("hidden", views=99, published=False))

        top = await content_store.top_viewed_projects(5)

        assert [v.slug for v in top] == ["high", "low"]
        assert top[0].views == 50

    @pytest.mark.asyncio
    async def test_top_viewed_blogs_limit(self, content_store):
        for i in range(3):
            await content_store.create_blog(
                Blog(title=f"b{i}", slug=f"b{i}", published=True, views=i)
            )

        top = await content_store.top_viewed_blogs(2)

        assert [v.slug for v in top] == ["b2", "b1"]
