"""
Request model validation tests
"""
import pytest
from datetime import date
from uuid import uuid4

from pydantic import ValidationError

from analytics.age import MAX_AGE, calculate_age
from app.models import (
    AssessmentUpdate,
    PlayerCreate,
    PlayerUpdate,
    ResultUpdate,
)


def player_payload(**overrides):
    return {
        "name": "Nour Ali",
        "dateOfBirth": "2012-06-01",
        "gender": "female",
        "preferredHand": "left",
        **overrides,
    }


class TestBirthDate:
    """Birth date bounds: not in the future, not older than MAX_AGE"""

    def test_oldest_allowed(self):
        born = date(date.today().year - MAX_AGE, 1, 1)
        player = PlayerCreate.model_validate(player_payload(dateOfBirth=born.isoformat()))
        assert calculate_age(player.date_of_birth) == MAX_AGE

    def test_one_year_too_old(self):
        born = date(date.today().year - MAX_AGE - 1, 1, 1)
        with pytest.raises(ValidationError):
            PlayerCreate.model_validate(player_payload(dateOfBirth=born.isoformat()))

    def test_ancient_date_rejected(self):
        with pytest.raises(ValidationError) as exc:
            PlayerCreate.model_validate(player_payload(dateOfBirth="1800-01-01"))
        assert "130 years" in str(exc.value)

    def test_future_rejected(self):
        with pytest.raises(ValidationError):
            PlayerCreate.model_validate(player_payload(dateOfBirth="2999-01-01"))

    def test_update_checks_bounds(self):
        with pytest.raises(ValidationError):
            PlayerUpdate.model_validate({"dateOfBirth": "1800-01-01"})


class TestPartialUpdates:
    """Explicit null is only allowed on nullable columns"""

    @pytest.mark.parametrize("model,payload", [
        (PlayerUpdate, {"name": None}),
        (PlayerUpdate, {"gender": None}),
        (PlayerUpdate, {"name": "Nour", "dateOfBirth": None}),
        (AssessmentUpdate, {"playingTime": None}),
        (AssessmentUpdate, {"testType": None}),
        (ResultUpdate, {"leftHandScore": None}),
        (ResultUpdate, {"playerId": None}),
    ])
    def test_null_rejected(self, model, payload):
        with pytest.raises(ValidationError) as exc:
            model.model_validate(payload)
        assert "cannot be null" in str(exc.value)

    def test_null_description_clears_it(self):
        update = AssessmentUpdate.model_validate({"description": None})
        assert update.to_row() == {"description": None}

    def test_empty_body_rejected(self):
        with pytest.raises(ValidationError):
            ResultUpdate.model_validate({})

    def test_only_sent_fields(self):
        pid = uuid4()
        update = ResultUpdate.model_validate({"playerId": str(pid), "backhandScore": 4})
        assert update.to_row() == {"player_id": str(pid), "backhand_score": 4}

    def test_assessment_name_stripped(self):
        update = AssessmentUpdate.model_validate({"name": "  Autumn  "})
        assert update.to_row() == {"name": "Autumn"}

    def test_assessment_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            AssessmentUpdate.model_validate({"name": "   "})
