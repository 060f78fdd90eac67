"""
Speedball Models

Pydantic request / response models.
JSON uses camelCase, Python attributes stay snake_case.
"""
from datetime import date, datetime
from enum import Enum
from typing import Generic, List, Optional, Tuple, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from analytics.age import MAX_AGE, AgeGroup, calculate_age
from analytics.timing import TestStatus, TestType, durations_for_type


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================
# Enums
# =============================================

class Gender(str, Enum):
    male = "male"
    female = "female"


class PreferredHand(str, Enum):
    left = "left"
    right = "right"
    both = "both"


def _valid_birth_date(v: Optional[date]) -> Optional[date]:
    if v is None:
        return v
    if v > date.today():
        raise ValueError("Date of birth cannot be in the future")
    if calculate_age(v) > MAX_AGE:
        raise ValueError(f"Date of birth cannot be more than {MAX_AGE} years ago")
    return v


def _require_changes(model: BaseModel, nullable: Tuple[str, ...] = ()) -> BaseModel:
    """Partial updates: at least one field, and no explicit null on a required column"""
    if not model.model_fields_set:
        raise ValueError("At least one field must be provided")
    for name in sorted(model.model_fields_set):
        if getattr(model, name) is None and name not in nullable:
            raise ValueError(f"{to_camel(name)} cannot be null")
    return model



# =============================================
# Player Requests
# =============================================

class PlayerCreate(ApiModel):
    """New player"""
    name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date
    gender: Gender
    preferred_hand: PreferredHand

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v):
        return _valid_birth_date(v)

    def to_row(self) -> dict:
        return {
            "name": self.name,
            "date_of_birth": self.date_of_birth.isoformat(),
            "gender": self.gender.value,
            "preferred_hand": self.preferred_hand.value,
        }


class PlayerUpdate(ApiModel):
    """Partial player update"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    preferred_hand: Optional[PreferredHand] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v):
        return _valid_birth_date(v)

    @model_validator(mode="after")
    def check_not_empty(self):
        return _require_changes(self)

    def to_row(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True)


# =============================================
# Test (assessment) Requests
# =============================================

class AssessmentCreate(ApiModel):
    """
    New test.

    Either both durations or a preset test_type must be given; a preset
    fills in whichever duration is missing.
    """
    name: str = Field(..., min_length=1, max_length=255)
    playing_time: Optional[int] = Field(None, gt=0, le=3600)
    recovery_time: Optional[int] = Field(None, gt=0, le=3600)
    test_type: Optional[TestType] = None
    date_conducted: date
    description: Optional[str] = Field(None, max_length=2000)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def resolve_durations(self):
        if self.test_type is not None:
            playing, recovery = durations_for_type(self.test_type)
            if self.playing_time is None:
                self.playing_time = playing
            if self.recovery_time is None:
                self.recovery_time = recovery
        if self.playing_time is None or self.recovery_time is None:
            raise ValueError("playingTime and recoveryTime are required unless testType is given")
        return self

    def to_row(self) -> dict:
        return {
            "name": self.name,
            "playing_time": self.playing_time,
            "recovery_time": self.recovery_time,
            "date_conducted": self.date_conducted.isoformat(),
            "description": self.description,
        }


class AssessmentUpdate(ApiModel):
    """Partial test update"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    playing_time: Optional[int] = Field(None, gt=0, le=3600)
    recovery_time: Optional[int] = Field(None, gt=0, le=3600)
    test_type: Optional[TestType] = None
    date_conducted: Optional[date] = None
    description: Optional[str] = Field(None, max_length=2000)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_not_empty(self):
        # description is the only nullable column
        return _require_changes(self, nullable=("description",))

    def to_row(self) -> dict:
        data = self.model_dump(mode="json", exclude_unset=True)
        test_type = data.pop("test_type", None)
        if test_type is not None:
            playing, recovery = durations_for_type(test_type)
            data.setdefault("playing_time", playing)
            data.setdefault("recovery_time", recovery)
        return data


# =============================================
# Result Requests
# =============================================

class ResultCreate(ApiModel):
    """New test result"""
    player_id: UUID
    test_id: UUID
    left_hand_score: int = Field(..., ge=0)
    right_hand_score: int = Field(..., ge=0)
    forehand_score: int = Field(..., ge=0)
    backhand_score: int = Field(..., ge=0)

    def to_row(self) -> dict:
        data = self.model_dump()
        data["player_id"] = str(self.player_id)
        data["test_id"] = str(self.test_id)
        return data


class ResultUpdate(ApiModel):
    """Partial result update"""
    player_id: Optional[UUID] = None
    test_id: Optional[UUID] = None
    left_hand_score: Optional[int] = Field(None, ge=0)
    right_hand_score: Optional[int] = Field(None, ge=0)
    forehand_score: Optional[int] = Field(None, ge=0)
    backhand_score: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_not_empty(self):
        return _require_changes(self)

    def to_row(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        for key in ("player_id", "test_id"):
            if key in data:
                data[key] = str(data[key])
        return data


class ResultBulkCreate(ApiModel):
    results: List[ResultCreate] = Field(..., min_length=1, max_length=100)


# =============================================
# List Queries
# =============================================

class PageQuery(ApiModel):
    page: int = Field(1, ge=1)
    limit: Optional[int] = Field(None, ge=1)


class PlayerQuery(PageQuery):
    q: Optional[str] = Field(None, max_length=100)
    gender: Optional[Gender] = None
    preferred_hand: Optional[PreferredHand] = None
    age_group: Optional[AgeGroup] = None

    @field_validator("q", mode="before")
    @classmethod
    def strip_q(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("age_group", mode="before")
    @classmethod
    def normalize_age_group(cls, v):
        # "mini" / "u-11" are accepted as well
        if isinstance(v, str):
            for group in AgeGroup:
                if group.value.lower() == v.strip().lower():
                    return group
        return v


class AssessmentQuery(PageQuery):
    q: Optional[str] = Field(None, max_length=100)
    playing_time: Optional[int] = Field(None, gt=0)
    recovery_time: Optional[int] = Field(None, gt=0)
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @field_validator("q", mode="before")
    @classmethod
    def strip_q(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v

    @model_validator(mode="after")
    def check_dates(self):
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("dateFrom must not be after dateTo")
        return self


class ResultQuery(PageQuery):
    player_id: Optional[UUID] = None
    test_id: Optional[UUID] = None
    min_score: Optional[int] = Field(None, ge=0)
    max_score: Optional[int] = Field(None, ge=0)
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @model_validator(mode="after")
    def check_ranges(self):
        if self.min_score is not None and self.max_score is not None and self.min_score > self.max_score:
            raise ValueError("minScore must not be greater than maxScore")
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("dateFrom must not be after dateTo")
        return self


# =============================================
# Responses
# =============================================

T = TypeVar("T")


class PageEnvelope(ApiModel, Generic[T]):
    items: List[T]
    page: int
    limit: int
    total_items: int
    total_pages: int


class PlayerOut(ApiModel):
    id: str
    name: str
    date_of_birth: date
    gender: Gender
    preferred_hand: Optional[PreferredHand] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    age: int
    age_group: AgeGroup


class AssessmentOut(ApiModel):
    id: str
    name: str
    playing_time: int
    recovery_time: int
    date_conducted: date
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    total_time: int
    formatted_total_time: str
    status: TestStatus


class ScoreDistributionOut(ApiModel):
    left_hand: int
    right_hand: int
    forehand: int
    backhand: int
    hand_total: int
    stroke_total: int
    hand_share: float
    stroke_share: float


class PairBalanceOut(ApiModel):
    dominant: str
    difference: int
    ratio: Optional[float] = None
    is_balanced: bool


class AnalysisOut(ApiModel):
    hand_balance: PairBalanceOut
    stroke_balance: PairBalanceOut
    strongest_area: str
    weakest_area: str
    is_balanced: bool
    summary: str


class ResultOut(ApiModel):
    id: str
    player_id: str
    test_id: str
    left_hand_score: int
    right_hand_score: int
    forehand_score: int
    backhand_score: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    total_score: int
    average_score: float
    highest_score: int
    lowest_score: int
    performance_category: str
    score_distribution: ScoreDistributionOut
    analysis: AnalysisOut
    player: Optional[PlayerOut] = None
    test: Optional[AssessmentOut] = None


class PlayerDetailOut(PlayerOut):
    test_results: List[ResultOut] = []


class AssessmentDetailOut(AssessmentOut):
    test_results: List[ResultOut] = []


class BulkCreateOut(ApiModel):
    message: str
    results: List[ResultOut]
