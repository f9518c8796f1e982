"""
SQLite implementation of content storage.

Handles projects, blogs, images and tags. Search queries match the
query text as a case-insensitive substring and return newest rows first.
"""

import json

import aiosqlite

from folio.config import get_logger
from folio.core.entities import Blog, Image, Project, Tag, TagRef, ViewedContent
from folio.core.exceptions import ContentNotFoundError
from folio.core.interfaces import IContentStore
from folio.infrastructure.storage.sqlite.connection import (
    database_operation,
    get_connection,
    get_transaction,
)
from folio.infrastructure.storage.sqlite.rows import (
    from_db_time,
    placeholders,
    slugify,
    to_db_time,
)

logger = get_logger(__name__)


# ?1 is the query text, ?2 the row limit.
_SEARCH_PROJECTS = """
    SELECT p.* FROM projects p
    WHERE p.published = 1 AND (
        instr(fold_case(p.title), fold_case(?1)) > 0
        OR instr(fold_case(coalesce(p.description, '')), fold_case(?1)) > 0
        OR instr(fold_case(coalesce(p.content, '')), fold_case(?1)) > 0
        OR EXISTS (
            SELECT 1 FROM json_each(p.tech_stack_json) WHERE json_each.value = ?1
        )
        OR EXISTS (
            SELECT 1 FROM project_tags pt JOIN tags t ON t.id = pt.tag_id
            WHERE pt.project_id = p.id AND instr(fold_case(t.name), fold_case(?1)) > 0
        )
    )
    ORDER BY p.created_at DESC, p.id
    LIMIT ?2
"""

_SEARCH_BLOGS = """
    SELECT b.* FROM blogs b
    WHERE b.published = 1 AND (
        instr(fold_case(b.title), fold_case(?1)) > 0
        OR instr(fold_case(coalesce(b.excerpt, '')), fold_case(?1)) > 0
        OR instr(fold_case(coalesce(b.content, '')), fold_case(?1)) > 0
        OR EXISTS (
            SELECT 1 FROM blog_tags bt JOIN tags t ON t.id = bt.tag_id
            WHERE bt.blog_id = b.id AND instr(fold_case(t.name), fold_case(?1)) > 0
        )
    )
    ORDER BY b.created_at DESC, b.id
    LIMIT ?2
"""

_SEARCH_IMAGES = """
    SELECT * FROM images
    WHERE visible = 1 AND (
        instr(fold_case(coalesce(alt, '')), fold_case(?1)) > 0
        OR instr(fold_case(coalesce(caption, '')), fold_case(?1)) > 0
    )
    ORDER BY created_at DESC, id
    LIMIT ?2
"""

_SEARCH_TAGS = """
    SELECT * FROM tags
    WHERE instr(fold_case(name), fold_case(?1)) > 0
        OR instr(fold_case(slug), fold_case(?1)) > 0
    ORDER BY created_at DESC, id
    LIMIT ?2
"""


class SQLiteContentStore(IContentStore):
    """SQLite implementation of content storage."""

    # Search operations

    @database_operation
    async def search_projects(self, query: str, limit: int) -> list[Project]:
        async with get_connection() as conn:
            cursor = await conn.execute(_SEARCH_PROJECTS, (query, limit))
            rows = await cursor.fetchall()
            tags = await self._load_tags(
                conn, "project_tags", "project_id", [row["id"] for row in rows]
            )
            return [self._row_to_project(row, tags.get(row["id"], [])) for row in rows]

    @database_operation
    async def search_blogs(self, query: str, limit: int) -> list[Blog]:
        async with get_connection() as conn:
            cursor = await conn.execute(_SEARCH_BLOGS, (query, limit))
            rows = await cursor.fetchall()
            tags = await self._load_tags(
                conn, "blog_tags", "blog_id", [row["id"] for row in rows]
            )
            return [self._row_to_blog(row, tags.get(row["id"], [])) for row in rows]

    @database_operation
    async def search_images(self, query: str, limit: int) -> list[Image]:
        async with get_connection() as conn:
            cursor = await conn.execute(_SEARCH_IMAGES, (query, limit))
            rows = await cursor.fetchall()
            return [self._row_to_image(row) for row in rows]

    @database_operation
    async def search_tags(self, query: str, limit: int) -> list[Tag]:
        async with get_connection() as conn:
            cursor = await conn.execute(_SEARCH_TAGS, (query, limit))
            rows = await cursor.fetchall()
            return [self._row_to_tag(row) for row in rows]

    # View counters

    @database_operation
    async def increment_project_views(self, project_id: str) -> None:
        await self._increment_views("projects", "project", project_id)

    @database_operation
    async def increment_blog_views(self, blog_id: str) -> None:
        await self._increment_views("blogs", "blog", blog_id)

    async def _increment_views(self, table: str, content_type: str, content_id: str) -> None:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                f"UPDATE {table} SET views = views + 1 WHERE id = ?",
                (content_id,),
            )
            if cursor.rowcount == 0:
                raise ContentNotFoundError(content_type, content_id)

    @database_operation
    async def top_viewed_projects(self, limit: int = 5) -> list[ViewedContent]:
        return await self._top_viewed("projects", limit)

    @database_operation
    async def top_viewed_blogs(self, limit: int = 5) -> list[ViewedContent]:
        return await self._top_viewed("blogs", limit)

    async def _top_viewed(self, table: str, limit: int) -> list[ViewedContent]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT id, title, slug, views FROM {table}
                WHERE published = 1
                ORDER BY views DESC, id
                LIMIT ?
                """,
                (limit,),
            )
            rows = await cursor.fetchall()
            return [
                ViewedContent(id=r["id"], title=r["title"], slug=r["slug"], views=r["views"])
                for r in rows
            ]

    # Write operations (seeding and administration)

    async def create_tag(self, tag: Tag) -> Tag:
        """Create a tag."""
        async with get_transaction() as conn:
            await conn.execute(
                "INSERT INTO tags (id, name, slug, created_at) VALUES (?, ?, ?, ?)",
                (tag.id, tag.name, tag.slug, to_db_time(tag.created_at)),
            )
        return tag

    async def create_project(self, project: Project) -> Project:
        """Create a project and link its tags, creating missing tags."""
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO projects (
                    id, title, slug, description, content, tech_stack_json,
                    featured, published, views, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    project.id,
                    project.title,
                    project.slug,
                    project.description,
                    project.content,
                    json.dumps(project.tech_stack),
                    int(project.featured),
                    int(project.published),
                    project.views,
                    to_db_time(project.created_at),
                ),
            )
            await self._link_tags(conn, "project_tags", "project_id", project.id, project.tags)
        logger.info("project_created", project_id=project.id, slug=project.slug)
        return project

    async def create_blog(self, blog: Blog) -> Blog:
        """Create a blog and link its tags, creating missing tags."""
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO blogs (
                    id, title, slug, excerpt, content, featured, published,
                    views, read_time, published_at, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    blog.id,
                    blog.title,
                    blog.slug,
                    blog.excerpt,
                    blog.content,
                    int(blog.featured),
                    int(blog.published),
                    blog.views,
                    blog.read_time,
                    to_db_time(blog.published_at) if blog.published_at else None,
                    to_db_time(blog.created_at),
                ),
            )
            await self._link_tags(conn, "blog_tags", "blog_id", blog.id, blog.tags)
        logger.info("blog_created", blog_id=blog.id, slug=blog.slug)
        return blog

    async def create_image(self, image: Image) -> Image:
        """Create a gallery image."""
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO images (id, url, alt, caption, width, height, visible, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    image.id,
                    image.url,
                    image.alt,
                    image.caption,
                    image.width,
                    image.height,
                    int(image.visible),
                    to_db_time(image.created_at),
                ),
            )
        return image

    async def _link_tags(
        self,
        conn: aiosqlite.Connection,
        table: str,
        owner_column: str,
        owner_id: str,
        tags: list[TagRef],
    ) -> None:
        for ref in tags:
            slug = ref.slug or slugify(ref.name)
            cursor = await conn.execute("SELECT id FROM tags WHERE name = ?", (ref.name,))
            row = await cursor.fetchone()
            if row is None:
                tag = Tag(name=ref.name, slug=slug)
                await conn.execute(
                    "INSERT INTO tags (id, name, slug, created_at) VALUES (?, ?, ?, ?)",
                    (tag.id, tag.name, tag.slug, to_db_time(tag.created_at)),
                )
                tag_id = tag.id
            else:
                tag_id = row["id"]

            await conn.execute(
                f"INSERT OR IGNORE INTO {table} ({owner_column}, tag_id) VALUES (?, ?)",
                (owner_id, tag_id),
            )

    async def _load_tags(
        self,
        conn: aiosqlite.Connection,
        table: str,
        owner_column: str,
        owner_ids: list[str],
    ) -> dict[str, list[TagRef]]:
        if not owner_ids:
            return {}

        cursor = await conn.execute(
            f"""
            SELECT j.{owner_column} AS owner_id, t.name, t.slug
            FROM {table} j JOIN tags t ON t.id = j.tag_id
            WHERE j.{owner_column} IN ({placeholders(len(owner_ids))})
            ORDER BY t.name
            """,
            owner_ids,
        )
        tags: dict[str, list[TagRef]] = {}
        for row in await cursor.fetchall():
            tags.setdefault(row["owner_id"], []).append(
                TagRef(name=row["name"], slug=row["slug"])
            )
        return tags

    # Row conversion

    def _row_to_project(self, row: aiosqlite.Row, tags: list[TagRef]) -> Project:
        return Project(
            id=row["id"],
            title=row["title"],
            slug=row["slug"],
            description=row["description"],
            content=row["content"],
            tech_stack=json.loads(row["tech_stack_json"] or "[]"),
            featured=bool(row["featured"]),
            published=bool(row["published"]),
            views=row["views"],
            tags=tags,
            created_at=from_db_time(row["created_at"]),
        )

    def _row_to_blog(self, row: aiosqlite.Row, tags: list[TagRef]) -> Blog:
        return Blog(
            id=row["id"],
            title=row["title"],
            slug=row["slug"],
            excerpt=row["excerpt"],
            content=row["content"],
            featured=bool(row["featured"]),
            published=bool(row["published"]),
            views=row["views"],
            read_time=row["read_time"],
            tags=tags,
            published_at=from_db_time(row["published_at"]),
            created_at=from_db_time(row["created_at"]),
        )

    def _row_to_image(self, row: aiosqlite.Row) -> Image:
        return Image(
            id=row["id"],
            url=row["url"],
            alt=row["alt"],
            caption=row["caption"],
            width=row["width"],
            height=row["height"],
            visible=bool(row["visible"]),
            created_at=from_db_time(row["created_at"]),
        )

    def _row_to_tag(self, row: aiosqlite.Row) -> Tag:
        return Tag(
            id=row["id"],
            name=row["name"],
            slug=row["slug"],
            created_at=from_db_time(row["created_at"]),
        )
