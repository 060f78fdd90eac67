"""
Test (assessment) Service

Physical tests: playing / recovery intervals and the date conducted.
Total time, formatted time and status are derived on read.
"""
from functools import lru_cache
from typing import Any, Dict

from loguru import logger

from database.repository import TESTS, TEST_RESULTS

from ..filters import Equals, FilterSet, compose_assessment_filters
from ..models import AssessmentCreate, AssessmentQuery, AssessmentUpdate
from ..service_base import EntityService


class AssessmentService(EntityService):
    """Test data service"""

    table = TESTS
    entity = "Test"

    async def find_all(self, query: AssessmentQuery) -> Dict[str, Any]:
        filters = compose_assessment_filters(query)
        return await self.list_page(filters, self.page_request(query), self.enricher.assessment)

    async def find_by_id(self, test_id) -> Dict[str, Any]:
        """Test detail with every result recorded for it, newest first"""
        test = await self.get_or_404(test_id)

        results = await self.repo.fetch_all(
            TEST_RESULTS,
            FilterSet((Equals("test_id", str(test_id)),)),
            select="*, player:players(*)",
        )

        return {
            **self.enricher.assessment(test),
            "test_results": [self.enricher.result(row) for row in results],
        }

    async def create(self, payload: AssessmentCreate) -> Dict[str, Any]:
        row = await self.repo.insert(TESTS, payload.to_row())
        logger.info(f"Test created: {row.get('id')} ({row.get('name')})")
        return self.enricher.assessment(row)

    async def update(self, test_id, payload: AssessmentUpdate) -> Dict[str, Any]:
        row = await self.update_row(test_id, payload.to_row())
        return self.enricher.assessment(row)


@lru_cache()
def get_assessment_service() -> AssessmentService:
    return AssessmentService()
