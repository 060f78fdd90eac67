"""
Shared service plumbing

List pipeline, shared by every entity:

1. pushable filters go to storage
2. rows get derived fields
3. post filters (derived fields) run

With no post filters the count and the page are fetched from storage
concurrently. With post filters the whole candidate set is read, filtered,
then paginated in memory so totalItems matches what the caller can page
through.
"""
from typing import Any, Callable, Dict, Optional

from loguru import logger

from database.repository import SupabaseRepository, get_repository

from .config import Settings, get_settings
from .enrichment import Enricher
from .errors import NotFoundError
from .filters import FilterSet
from .models import PageQuery
from .pagination import (
    PageRequest,
    build_page_envelope,
    fetch_page,
    paginate_in_memory,
)


class EntityService:
    table: str = ""
    entity: str = ""
    list_select: str = "*"

    def __init__(
        self,
        repo: Optional[SupabaseRepository] = None,
        settings: Optional[Settings] = None,
        enricher: Optional[Enricher] = None
    ):
        self.settings = settings or get_settings()
        self.repo = repo if repo is not None else get_repository()
        self.enricher = enricher or Enricher.from_settings(self.settings)

    def page_request(self, query: PageQuery) -> PageRequest:
        return PageRequest.build(
            query.page,
            query.limit,
            default_limit=self.settings.default_page_limit,
            max_limit=self.settings.max_page_limit,
        )

    async def list_page(
        self,
        filters: FilterSet,
        page: PageRequest,
        enrich: Callable[[Dict[str, Any]], Dict[str, Any]]
    ) -> Dict[str, Any]:
        logger.debug(f"{self.table} list page={page.page} limit={page.limit} filters={filters.describe()}")

        if filters.has_post:
            rows = await self.repo.fetch_all(self.table, filters, select=self.list_select)
            items = [item for item in map(enrich, rows) if filters.post_matches(item)]
            return paginate_in_memory(items, page)

        total_items, rows = await fetch_page(
            lambda: self.repo.count(self.table, filters),
            lambda: self.repo.fetch(
                self.table, filters, page.offset, page.limit, select=self.list_select
            ),
        )
        return build_page_envelope([enrich(row) for row in rows], page, total_items)

    async def get_or_404(self, row_id, select: str = "*") -> Dict[str, Any]:
        row = await self.repo.get(self.table, str(row_id), select=select)
        if row is None:
            raise NotFoundError(self.entity, row_id)
        return row

    async def update_row(self, row_id, data: Dict[str, Any]) -> Dict[str, Any]:
        """Existence check, then partial update"""
        existing = await self.get_or_404(row_id)
        if not data:
            return existing

        updated = await self.repo.update(self.table, str(row_id), data)
        if updated is None:
            raise NotFoundError(self.entity, row_id)

        logger.info(f"{self.entity} updated: {row_id} ({', '.join(sorted(data))})")
        return updated

    async def delete(self, row_id) -> None:
        await self.get_or_404(row_id, select="id")
        await self.repo.delete(self.table, str(row_id))
        logger.info(f"{self.entity} deleted: {row_id}")
