"""
HTTP API tests (FastAPI TestClient, in-memory repository)
"""
import uuid

import pytest
from fastapi.testclient import TestClient

from app.assessments import get_assessment_service
from app.players import get_player_service
from app.results import get_result_service
from app.server import API_PREFIX, create_app
from database.repository import get_repository


class BrokenRepository:
    """Every storage call fails"""

    def __getattr__(self, name):
        async def fail(*args, **kwargs):
            raise RuntimeError("connection refused")
        return fail


@pytest.fixture
def app(repo, player_service, assessment_service, result_service):
    app = create_app()
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_player_service] = lambda: player_service
    app.dependency_overrides[get_assessment_service] = lambda: assessment_service
    app.dependency_overrides[get_result_service] = lambda: result_service
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def url(path: str) -> str:
    return f"{API_PREFIX}{path}"


# =============================================================================
# Players
# =============================================================================

class TestPlayersApi:
    """/players"""

    def test_create_camel_case(self, client):
        response = client.post(url("/players"), json={
            "name": "Nour Ali",
            "dateOfBirth": "2012-06-01",
            "gender": "female",
            "preferredHand": "left",
        })

        assert response.status_code == 201
        body = response.json()
        assert body["dateOfBirth"] == "2012-06-01"
        assert body["preferredHand"] == "left"
        assert body["ageGroup"] == "U-13"
        assert "date_of_birth" not in body

    def test_create_validation(self, client, repo):
        response = client.post(url("/players"), json={
            "name": "",
            "dateOfBirth": "2999-01-01",
            "gender": "other",
        })

        assert response.status_code == 422
        body = response.json()
        assert body["message"] == "Validation failed"
        fields = {e["field"] for e in body["errors"]}
        assert {"name", "dateOfBirth", "gender", "preferredHand"} <= fields
        assert repo.writes() == []

    def test_list_envelope(self, client, sample_player):
        response = client.get(url("/players"), params={"ageGroup": "u-11"})

        assert response.status_code == 200
        body = response.json()
        assert body["totalItems"] == 1
        assert body["totalPages"] == 1
        assert body["page"] == 1
        assert body["limit"] == 10
        assert body["items"][0]["age"] == 9

    def test_list_invalid_age_group(self, client):
        response = client.get(url("/players"), params={"ageGroup": "U-99"})
        assert response.status_code == 422
        assert response.json()["message"] == "Validation failed"

    def test_list_invalid_page(self, client):
        response = client.get(url("/players"), params={"page": 0})
        assert response.status_code == 422

    def test_detail(self, client, sample_player, sample_result):
        response = client.get(url(f"/players/{sample_player['id']}"))

        assert response.status_code == 200
        results = response.json()["testResults"]
        assert results[0]["totalScore"] == 30
        assert results[0]["scoreDistribution"]["handTotal"] == 18
        assert results[0]["test"]["formattedTotalTime"] == "1m 30s"

    def test_not_found(self, client):
        response = client.get(url(f"/players/{uuid.uuid4()}"))
        assert response.status_code == 404
        assert response.json() == {"message": "Player not found"}

    def test_malformed_id(self, client):
        response = client.get(url("/players/not-a-uuid"))
        assert response.status_code == 422

    def test_patch(self, client, sample_player):
        response = client.patch(url(f"/players/{sample_player['id']}"), json={"preferredHand": "both"})
        assert response.status_code == 200
        assert response.json()["preferredHand"] == "both"

    def test_patch_empty_body(self, client, sample_player):
        response = client.patch(url(f"/players/{sample_player['id']}"), json={})
        assert response.status_code == 422

    def test_patch_null_name(self, client, repo, sample_player):
        response = client.patch(url(f"/players/{sample_player['id']}"), json={"name": None})

        assert response.status_code == 422
        assert response.json()["errors"][0]["message"].endswith("name cannot be null")
        assert repo.tables["players"][sample_player["id"]]["name"] == "Omar Hassan"
        assert repo.writes() == []

    def test_create_birth_date_too_old(self, client, repo):
        response = client.post(url("/players"), json={
            "name": "Old Timer",
            "dateOfBirth": "1800-01-01",
            "gender": "male",
            "preferredHand": "right",
        })

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "dateOfBirth"
        assert repo.writes() == []

    def test_delete(self, client, repo, sample_player):
        response = client.delete(url(f"/players/{sample_player['id']}"))
        assert response.status_code == 204
        assert client.get(url(f"/players/{sample_player['id']}")).status_code == 404


# =============================================================================
# Tests / Results
# =============================================================================

class TestAssessmentsApi:
    """/tests"""

    def test_create_requires_durations(self, client):
        response = client.post(url("/tests"), json={"name": "No times", "dateConducted": "2024-05-01"})
        assert response.status_code == 422

    def test_create_with_preset(self, client):
        response = client.post(url("/tests"), json={
            "name": "Preset", "testType": "60_30", "dateConducted": "2024-05-01",
        })
        assert response.status_code == 201
        body = response.json()
        assert body["playingTime"] == 60
        assert body["totalTime"] == 90
        assert body["status"] == "completed"

    def test_date_range_order(self, client):
        response = client.get(url("/tests"), params={"dateFrom": "2024-02-01", "dateTo": "2024-01-01"})
        assert response.status_code == 422

    def test_patch_strips_name(self, client, sample_test):
        response = client.patch(url(f"/tests/{sample_test['id']}"), json={"name": "  Autumn  "})
        assert response.status_code == 200
        assert response.json()["name"] == "Autumn"


class TestResultsApi:
    """/results"""

    def test_create(self, client, sample_player, sample_test):
        response = client.post(url("/results"), json={
            "playerId": sample_player["id"],
            "testId": sample_test["id"],
            "leftHandScore": 10,
            "rightHandScore": 8,
            "forehandScore": 7,
            "backhandScore": 5,
        })

        assert response.status_code == 201
        body = response.json()
        assert body["totalScore"] == 30
        assert body["averageScore"] == 7.5
        assert body["performanceCategory"] == "below_average"
        assert body["analysis"]["handBalance"]["dominant"] == "left_hand"
        assert body["player"]["ageGroup"] == "U-11"

    def test_create_unknown_test(self, client, repo, sample_player):
        response = client.post(url("/results"), json={
            "playerId": sample_player["id"],
            "testId": str(uuid.uuid4()),
            "leftHandScore": 1,
            "rightHandScore": 1,
            "forehandScore": 1,
            "backhandScore": 1,
        })

        assert response.status_code == 404
        assert response.json() == {"message": "Test not found"}
        assert repo.writes() == []

    def test_negative_score(self, client, sample_player, sample_test):
        response = client.post(url("/results"), json={
            "playerId": sample_player["id"],
            "testId": sample_test["id"],
            "leftHandScore": -1,
            "rightHandScore": 1,
            "forehandScore": 1,
            "backhandScore": 1,
        })
        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "leftHandScore"

    def test_bulk(self, client, sample_player, sample_test):
        item = {
            "playerId": sample_player["id"],
            "testId": sample_test["id"],
            "leftHandScore": 1,
            "rightHandScore": 2,
            "forehandScore": 3,
            "backhandScore": 4,
        }
        response = client.post(url("/results/bulk"), json={"results": [item, item]})

        assert response.status_code == 201
        assert response.json()["message"] == "Successfully created 2 results"

    def test_score_range_query(self, client, sample_result):
        response = client.get(url("/results"), params={"minScore": 31})
        assert response.status_code == 200
        assert response.json()["totalItems"] == 0

    def test_score_range_order(self, client):
        response = client.get(url("/results"), params={"minScore": 50, "maxScore": 10})
        assert response.status_code == 422

    def test_patch_null_score(self, client, repo, sample_result):
        response = client.patch(url(f"/results/{sample_result['id']}"), json={"leftHandScore": None})

        assert response.status_code == 422
        assert "leftHandScore cannot be null" in response.json()["errors"][0]["message"]
        assert repo.writes() == []


# =============================================================================
# Errors / Health
# =============================================================================

class TestInfrastructure:
    """Health check and 500 handling"""

    def test_health(self, client):
        response = client.get(url("/health"))
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"

    def test_health_unavailable(self, app):
        app.dependency_overrides[get_repository] = lambda: BrokenRepository()
        response = TestClient(app).get(url("/health"))

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_internal_error_hides_details(self, app, settings, enricher):
        from app.players import PlayerService

        broken = PlayerService(repo=BrokenRepository(), settings=settings, enricher=enricher)
        app.dependency_overrides[get_player_service] = lambda: broken
        response = TestClient(app, raise_server_exceptions=False).get(url("/players"))

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
