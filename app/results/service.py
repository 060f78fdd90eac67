"""
Result Service

Test results: four sub-scores per player per test.
Totals, averages, category and balance analysis are derived on read.
Referenced player and test must exist before anything is written.
"""
import asyncio
from functools import lru_cache
from typing import Any, Dict, List, Optional

from loguru import logger

from database.repository import PLAYERS, TESTS, TEST_RESULTS

from ..errors import NotFoundError
from ..filters import compose_result_filters
from ..models import ResultBulkCreate, ResultCreate, ResultQuery, ResultUpdate
from ..service_base import EntityService

RESULT_SELECT = "*, player:players(*), test:tests(*)"


class ResultService(EntityService):
    """Test result service"""

    table = TEST_RESULTS
    entity = "Result"
    list_select = RESULT_SELECT

    # =============================================
    # Queries
    # =============================================

    async def find_all(self, query: ResultQuery) -> Dict[str, Any]:
        """
        Result list
        - player / test / created date go to storage
        - total score range is checked after aggregation
        """
        filters = compose_result_filters(query)
        return await self.list_page(filters, self.page_request(query), self.enricher.result)

    async def find_by_id(self, result_id) -> Dict[str, Any]:
        row = await self.get_or_404(result_id, select=RESULT_SELECT)
        return self.enricher.result(row)

    # =============================================
    # Reference checks
    # =============================================

    async def _require_references(
        self,
        player_id: Optional[str],
        test_id: Optional[str]
    ) -> Dict[str, Optional[Dict[str, Any]]]:
        """Fetch player and test together; raise if either is missing"""
        async def lookup(table: str, row_id: Optional[str]):
            if row_id is None:
                return None
            return await self.repo.get(table, row_id)

        player, test = await asyncio.gather(
            lookup(PLAYERS, player_id),
            lookup(TESTS, test_id),
        )

        if player_id is not None and player is None:
            raise NotFoundError("Player", player_id)
        if test_id is not None and test is None:
            raise NotFoundError("Test", test_id)

        return {"player": player, "test": test}

    async def _require_many(self, table: str, entity: str, ids: List[str]) -> None:
        found = {row["id"] for row in await self.repo.get_many(table, ids)}
        missing = sorted(set(ids) - found)
        if missing:
            raise NotFoundError(entity, ", ".join(missing))

    # =============================================
    # Mutations
    # =============================================

    async def create(self, payload: ResultCreate) -> Dict[str, Any]:
        data = payload.to_row()
        related = await self._require_references(data["player_id"], data["test_id"])

        row = await self.repo.insert(TEST_RESULTS, data)
        logger.info(f"Result created: {row.get('id')} (player {data['player_id']}, test {data['test_id']})")

        return self.enricher.result({**row, **related})

    async def create_bulk(self, payload: ResultBulkCreate) -> Dict[str, Any]:
        """
        Batch insert.
        Every referenced player and test is checked with one IN query each.
        """
        rows = [item.to_row() for item in payload.results]
        player_ids = sorted({r["player_id"] for r in rows})
        test_ids = sorted({r["test_id"] for r in rows})

        await asyncio.gather(
            self._require_many(PLAYERS, "Player", player_ids),
            self._require_many(TESTS, "Test", test_ids),
        )

        inserted = await self.repo.insert_many(TEST_RESULTS, rows)
        logger.info(f"Bulk results created: {len(inserted)}")

        return {
            "message": f"Successfully created {len(inserted)} results",
            "results": [self.enricher.result(row) for row in inserted],
        }

    async def update(self, result_id, payload: ResultUpdate) -> Dict[str, Any]:
        data = payload.to_row()
        await self.get_or_404(result_id, select="id")
        if "player_id" in data or "test_id" in data:
            await self._require_references(data.get("player_id"), data.get("test_id"))

        row = await self.update_row(result_id, data)
        return self.enricher.result(row)


@lru_cache()
def get_result_service() -> ResultService:
    return ResultService()
