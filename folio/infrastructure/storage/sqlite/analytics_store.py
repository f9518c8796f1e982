"""
SQLite implementation of search analytics storage.

search_history is append-only. search_analytics holds one rollup row per
exact query; its average is recomputed from history on every upsert.
"""

from datetime import UTC, date, datetime

import aiosqlite

from folio.config import get_logger
from folio.core.entities import (
    SearchAnalyticsAggregate,
    SearchHistoryRecord,
    SearchTrendPoint,
)
from folio.core.interfaces import IAnalyticsStore
from folio.infrastructure.storage.sqlite.connection import (
    database_operation,
    get_connection,
    get_transaction,
)
from folio.infrastructure.storage.sqlite.rows import from_db_time, to_db_time

logger = get_logger(__name__)


class SQLiteAnalyticsStore(IAnalyticsStore):
    """SQLite implementation of search analytics storage."""

    @database_operation
    async def add_history(self, query: str, results: int) -> SearchHistoryRecord:
        record = SearchHistoryRecord(query=query, results=results)
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO search_history (query, results, clicked_result, searched_at)
                VALUES (?, ?, NULL, ?)
                """,
                (record.query, record.results, to_db_time(record.searched_at)),
            )
            record.id = cursor.lastrowid
        return record

    @database_operation
    async def upsert_aggregate(
        self,
        query: str,
        results: int,
        searched_at: datetime,
    ) -> SearchAnalyticsAggregate:
        async with get_transaction() as conn:
            avg_results = await self._average_results(conn, query, fallback=results)
            await conn.execute(
                """
                INSERT INTO search_analytics (
                    query, search_count, click_count, last_searched, avg_results
                ) VALUES (?, 1, 0, ?, ?)
                ON CONFLICT(query) DO UPDATE SET
                    search_count = search_count + 1,
                    last_searched = excluded.last_searched,
                    avg_results = excluded.avg_results
                """,
                (query, to_db_time(searched_at), avg_results),
            )
            aggregate = await self._fetch_aggregate(conn, query)

        logger.debug(
            "search_aggregate_upserted",
            query=query,
            search_count=aggregate.search_count,
        )
        return aggregate

    async def _average_results(
        self,
        conn: aiosqlite.Connection,
        query: str,
        fallback: float,
    ) -> float:
        cursor = await conn.execute(
            "SELECT AVG(results) FROM search_history WHERE query = ?",
            (query,),
        )
        row = await cursor.fetchone()
        if row is None or row[0] is None:
            return float(fallback)
        return float(row[0])

    @database_operation
    async def get_aggregate(self, query: str) -> SearchAnalyticsAggregate | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM search_analytics WHERE query = ?", (query,)
            )
            row = await cursor.fetchone()
            return self._row_to_aggregate(row) if row else None

    @database_operation
    async def record_click(self, query: str, clicked_result: str) -> SearchAnalyticsAggregate:
        now = to_db_time(datetime.now(UTC))
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO search_analytics (
                    query, search_count, click_count, last_searched, avg_results
                ) VALUES (?, 0, 1, ?, 0)
                ON CONFLICT(query) DO UPDATE SET click_count = click_count + 1
                """,
                (query, now),
            )
            cursor = await conn.execute(
                """
                UPDATE search_history SET clicked_result = ?
                WHERE query = ? AND clicked_result IS NULL
                """,
                (clicked_result, query),
            )
            updated = cursor.rowcount
            aggregate = await self._fetch_aggregate(conn, query)

        logger.debug(
            "search_click_recorded",
            query=query,
            click_count=aggregate.click_count,
            history_rows=updated,
        )
        return aggregate

    # Summaries

    @database_operation
    async def count_searches(self, since: datetime | None = None) -> int:
        sql = "SELECT COUNT(*) FROM search_history"
        params: tuple = ()
        if since is not None:
            sql += " WHERE searched_at >= ?"
            params = (to_db_time(since),)
        return await self._scalar(sql, params)

    @database_operation
    async def count_unique_queries(self) -> int:
        return await self._scalar("SELECT COUNT(*) FROM search_analytics")

    @database_operation
    async def total_clicks(self) -> int:
        return await self._scalar("SELECT COALESCE(SUM(click_count), 0) FROM search_analytics")

    @database_operation
    async def top_searches(self, limit: int = 15) -> list[SearchAnalyticsAggregate]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM search_analytics
                ORDER BY search_count DESC, last_searched DESC, query
                LIMIT ?
                """,
                (limit,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_aggregate(row) for row in rows]

    @database_operation
    async def zero_result_searches(
        self,
        limit: int = 10,
        since: datetime | None = None,
    ) -> list[SearchHistoryRecord]:
        where = "results = 0"
        params: list = []
        if since is not None:
            where += " AND searched_at >= ?"
            params.append(to_db_time(since))
        params.append(limit)

        # Latest record per distinct query
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT h.* FROM search_history h
                JOIN (
                    SELECT query, MAX(id) AS last_id FROM search_history
                    WHERE {where}
                    GROUP BY query
                ) latest ON latest.last_id = h.id
                ORDER BY h.searched_at DESC, h.id DESC
                LIMIT ?
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [self._row_to_history(row) for row in rows]

    @database_operation
    async def recent_searches(
        self,
        limit: int = 20,
        since: datetime | None = None,
    ) -> list[SearchHistoryRecord]:
        sql = "SELECT * FROM search_history"
        params: list = []
        if since is not None:
            sql += " WHERE searched_at >= ?"
            params.append(to_db_time(since))
        sql += " ORDER BY searched_at DESC, id DESC LIMIT ?"
        params.append(limit)

        async with get_connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            return [self._row_to_history(row) for row in rows]

    @database_operation
    async def daily_search_counts(self, since: datetime) -> list[SearchTrendPoint]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT substr(searched_at, 1, 10) AS day, COUNT(*) AS count
                FROM search_history
                WHERE searched_at >= ?
                GROUP BY day
                ORDER BY day
                """,
                (to_db_time(since),),
            )
            rows = await cursor.fetchall()
            return [
                SearchTrendPoint(day=date.fromisoformat(row["day"]), count=row["count"])
                for row in rows
            ]

    async def _scalar(self, sql: str, params: tuple = ()) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute(sql, params)
            row = await cursor.fetchone()
            return int(row[0]) if row and row[0] is not None else 0

    async def _fetch_aggregate(
        self, conn: aiosqlite.Connection, query: str
    ) -> SearchAnalyticsAggregate:
        cursor = await conn.execute(
            "SELECT * FROM search_analytics WHERE query = ?", (query,)
        )
        row = await cursor.fetchone()
        return self._row_to_aggregate(row)

    # Row conversion

    def _row_to_history(self, row: aiosqlite.Row) -> SearchHistoryRecord:
        return SearchHistoryRecord(
            id=row["id"],
            query=row["query"],
            results=row["results"],
            clicked_result=row["clicked_result"],
            searched_at=from_db_time(row["searched_at"]),
        )

    def _row_to_aggregate(self, row: aiosqlite.Row) -> SearchAnalyticsAggregate:
        return SearchAnalyticsAggregate(
            query=row["query"],
            search_count=row["search_count"],
            click_count=row["click_count"],
            last_searched=from_db_time(row["last_searched"]),
            avg_results=row["avg_results"],
        )
