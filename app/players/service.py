"""
Player Service

Player listing / detail / CRUD.
Every player is returned with age and age group computed for today.
"""
from functools import lru_cache
from typing import Any, Dict

from loguru import logger

from database.repository import PLAYERS, TEST_RESULTS

from ..filters import Equals, FilterSet, compose_player_filters
from ..models import PlayerCreate, PlayerQuery, PlayerUpdate
from ..service_base import EntityService


class PlayerService(EntityService):
    """Player data service"""

    table = PLAYERS
    entity = "Player"

    # =============================================
    # Queries
    # =============================================

    async def find_all(self, query: PlayerQuery) -> Dict[str, Any]:
        """
        Player list
        - name substring, gender, preferred hand go to storage
        - age group is filtered after age is computed
        """
        filters = compose_player_filters(query)
        return await self.list_page(filters, self.page_request(query), self.enricher.player)

    async def find_by_id(self, player_id) -> Dict[str, Any]:
        """
        Player detail with all test results, newest first.
        Each result is aggregated on its own.
        """
        player = await self.get_or_404(player_id)

        results = await self.repo.fetch_all(
            TEST_RESULTS,
            FilterSet((Equals("player_id", str(player_id)),)),
            select="*, test:tests(*)",
        )

        return {
            **self.enricher.player(player),
            "test_results": [self.enricher.result(row) for row in results],
        }

    # =============================================
    # Mutations
    # =============================================

    async def create(self, payload: PlayerCreate) -> Dict[str, Any]:
        row = await self.repo.insert(PLAYERS, payload.to_row())
        logger.info(f"Player created: {row.get('id')}")
        return self.enricher.player(row)

    async def update(self, player_id, payload: PlayerUpdate) -> Dict[str, Any]:
        row = await self.update_row(player_id, payload.to_row())
        return self.enricher.player(row)


@lru_cache()
def get_player_service() -> PlayerService:
    return PlayerService()
