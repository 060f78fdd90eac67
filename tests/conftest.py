"""
Pytest configuration and fixtures for Speedball Tracker tests
"""

import copy
import re
import sys
import uuid
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import Settings
from app.enrichment import Enricher
from database.repository import PLAYERS, TESTS, TEST_RESULTS


FIXED_TODAY = date(2024, 6, 1)

EMBED_PATTERN = re.compile(r"(\w+):(\w+)\(")


class InMemoryRepository:
    """
    Dict-backed stand-in for SupabaseRepository.

    Same coroutine interface; filters are evaluated with FilterSet.matches,
    rows are ordered newest first and "alias:table(*)" selects embed the
    related row through "<alias>_id".
    """

    def __init__(self):
        self.tables = {PLAYERS: {}, TESTS: {}, TEST_RESULTS: {}}
        self.calls = []
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def _embed(self, row, select):
        row = copy.deepcopy(row)
        for alias, table in EMBED_PATTERN.findall(select or ""):
            related = self.tables[table].get(row.get(f"{alias}_id"))
            row[alias] = copy.deepcopy(related)
        return row

    def _matching(self, table, filters, order_by="created_at", descending=True):
        rows = [
            r for r in self.tables[table].values()
            if filters is None or filters.matches(r)
        ]
        rows = sorted(rows, key=lambda r: r["id"])
        return sorted(rows, key=lambda r: r.get(order_by) or "", reverse=descending)

    # Reads

    async def count(self, table, filters=None):
        self.calls.append(("count", table))
        return len(self._matching(table, filters))

    async def fetch(self, table, filters=None, offset=0, limit=10, select="*",
                    order_by="created_at", descending=True):
        self.calls.append(("fetch", table))
        rows = self._matching(table, filters, order_by, descending)[offset:offset + limit]
        return [self._embed(r, select) for r in rows]

    async def fetch_all(self, table, filters=None, select="*",
                        order_by="created_at", descending=True):
        self.calls.append(("fetch_all", table))
        return [self._embed(r, select) for r in self._matching(table, filters, order_by, descending)]

    async def get(self, table, row_id, select="*"):
        self.calls.append(("get", table))
        row = self.tables[table].get(str(row_id))
        return self._embed(row, select) if row is not None else None

    async def get_many(self, table, ids, select="id"):
        self.calls.append(("get_many", table))
        return [copy.deepcopy(self.tables[table][i]) for i in map(str, ids) if i in self.tables[table]]

    # Writes

    async def insert(self, table, data):
        self.calls.append(("insert", table))
        return copy.deepcopy(self.seed(table, data))

    async def insert_many(self, table, rows):
        self.calls.append(("insert_many", table))
        return [copy.deepcopy(self.seed(table, r)) for r in rows]

    async def update(self, table, row_id, data):
        self.calls.append(("update", table))
        row = self.tables[table].get(str(row_id))
        if row is None:
            return None
        row.update(data)
        row["updated_at"] = self._tick()
        return copy.deepcopy(row)

    async def delete(self, table, row_id):
        self.calls.append(("delete", table))
        removed = self.tables[table].pop(str(row_id), None) is not None
        # ON DELETE CASCADE
        if removed and table in (PLAYERS, TESTS):
            fk = "player_id" if table == PLAYERS else "test_id"
            results = self.tables[TEST_RESULTS]
            for rid in [k for k, r in results.items() if r.get(fk) == str(row_id)]:
                del results[rid]
        return removed

    async def ping(self):
        return True

    # Test helpers

    def seed(self, table, data):
        now = self._tick()
        row = {"created_at": now, "updated_at": now, **data}
        row["id"] = str(row.get("id") or uuid.uuid4())
        self.tables[table][row["id"]] = row
        return row

    def writes(self):
        return [c for c in self.calls if c[0] in ("insert", "insert_many", "update", "delete")]


@pytest.fixture
def settings():
    return Settings(supabase_url="", supabase_key="", environment="development")


@pytest.fixture
def enricher(settings):
    """Enricher pinned to 2024-06-01"""
    return Enricher.from_settings(settings, today=lambda: FIXED_TODAY)


@pytest.fixture
def repo():
    return InMemoryRepository()


@pytest.fixture
def player_service(repo, settings, enricher):
    from app.players import PlayerService
    return PlayerService(repo=repo, settings=settings, enricher=enricher)


@pytest.fixture
def assessment_service(repo, settings, enricher):
    from app.assessments import AssessmentService
    return AssessmentService(repo=repo, settings=settings, enricher=enricher)


@pytest.fixture
def result_service(repo, settings, enricher):
    from app.results import ResultService
    return ResultService(repo=repo, settings=settings, enricher=enricher)


@pytest.fixture
def sample_player(repo):
    """U-11 under the default convention on FIXED_TODAY (age 9)"""
    return repo.seed(PLAYERS, {
        "name": "Omar Hassan",
        "date_of_birth": "2015-06-01",
        "gender": "male",
        "preferred_hand": "right",
    })


@pytest.fixture
def sample_test(repo):
    return repo.seed(TESTS, {
        "name": "Spring assessment",
        "playing_time": 60,
        "recovery_time": 30,
        "date_conducted": "2024-05-20",
        "description": None,
    })


@pytest.fixture
def sample_result(repo, sample_player, sample_test):
    return repo.seed(TEST_RESULTS, {
        "player_id": sample_player["id"],
        "test_id": sample_test["id"],
        "left_hand_score": 10,
        "right_hand_score": 8,
        "forehand_score": 7,
        "backhand_score": 5,
    })
