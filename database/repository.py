"""
Supabase repository

Row-level storage operations used by the services. The Supabase client is
synchronous, so every call runs on a worker thread; this lets a count
query and a page query run at the same time.

"Not found" is reported as None / False. Any storage failure is logged
and raised as InternalError.
"""
import asyncio
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, List, Optional

from loguru import logger
from supabase import Client

from app.errors import InternalError
from .supabase_client import get_supabase_client


PLAYERS = "players"
TESTS = "tests"
TEST_RESULTS = "test_results"

BATCH_SIZE = 1000  # PostgREST max rows per request
RANGE_NOT_SATISFIABLE = "PGRST103"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SupabaseRepository:
    """Supabase-backed storage"""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    async def _run(self, description: str, operation: Callable[[], Any]) -> Any:
        try:
            return await asyncio.to_thread(operation)
        except Exception as e:
            logger.error(f"{description} failed: {e}")
            raise InternalError(description) from e

    @staticmethod
    def _filtered(query, filters):
        if filters is not None:
            query = filters.apply(query)
        return query

    # ==================== Reads ====================

    async def count(self, table: str, filters=None) -> int:
        def operation():
            query = self.client.table(table).select("id", count="exact")
            response = self._filtered(query, filters).execute()
            return response.count or 0

        return await self._run(f"{table} count", operation)

    async def fetch(
        self,
        table: str,
        filters=None,
        offset: int = 0,
        limit: int = 10,
        select: str = "*",
        order_by: str = "created_at",
        descending: bool = True
    ) -> List[Dict[str, Any]]:
        """One page of rows"""
        def operation():
            query = self._filtered(self.client.table(table).select(select), filters)
            try:
                # id breaks created_at ties (bulk inserts share one timestamp)
                response = query.order(order_by, desc=descending).order("id").range(
                    offset, offset + limit - 1
                ).execute()
            except Exception as e:
                # offset past the last row: empty page, not an error
                if getattr(e, "code", None) == RANGE_NOT_SATISFIABLE:
                    return []
                raise
            return response.data or []

        return await self._run(f"{table} fetch", operation)

    async def fetch_all(
        self,
        table: str,
        filters=None,
        select: str = "*",
        order_by: str = "created_at",
        descending: bool = True
    ) -> List[Dict[str, Any]]:
        """Every matching row, read in batches"""
        rows: List[Dict[str, Any]] = []
        offset = 0

        while True:
            batch = await self.fetch(
                table, filters, offset, BATCH_SIZE, select, order_by, descending
            )
            rows.extend(batch)
            if len(batch) < BATCH_SIZE:
                break
            offset += BATCH_SIZE

        return rows

    async def get(self, table: str, row_id: str, select: str = "*") -> Optional[Dict[str, Any]]:
        def operation():
            response = self.client.table(table).select(select).eq(
                "id", str(row_id)
            ).limit(1).execute()
            return response.data[0] if response.data else None

        return await self._run(f"{table} get", operation)

    async def get_many(self, table: str, ids: Iterable[str], select: str = "id") -> List[Dict[str, Any]]:
        id_list = [str(i) for i in ids]
        if not id_list:
            return []

        def operation():
            response = self.client.table(table).select(select).in_("id", id_list).execute()
            return response.data or []

        return await self._run(f"{table} get_many", operation)

    # ==================== Writes ====================

    async def insert(self, table: str, data: Dict[str, Any]) -> Dict[str, Any]:
        def operation():
            response = self.client.table(table).insert(data).execute()
            if not response.data:
                raise RuntimeError("insert returned no rows")
            return response.data[0]

        return await self._run(f"{table} insert", operation)

    async def insert_many(self, table: str, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        def operation():
            response = self.client.table(table).insert(rows).execute()
            return response.data or []

        return await self._run(f"{table} insert_many", operation)

    async def update(self, table: str, row_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        payload = {**data, "updated_at": utc_now_iso()}

        def operation():
            response = self.client.table(table).update(payload).eq("id", str(row_id)).execute()
            return response.data[0] if response.data else None

        return await self._run(f"{table} update", operation)

    async def delete(self, table: str, row_id: str) -> bool:
        def operation():
            response = self.client.table(table).delete().eq("id", str(row_id)).execute()
            return len(response.data or []) > 0

        return await self._run(f"{table} delete", operation)

    # ==================== Health ====================

    async def ping(self) -> bool:
        def operation():
            self.client.table(PLAYERS).select("id").limit(1).execute()
            return True

        return await self._run("ping", operation)


@lru_cache()
def get_repository() -> SupabaseRepository:
    return SupabaseRepository()
