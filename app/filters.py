"""
Query filter composition

List queries are built from optional parameters and split into two groups:

- pushable: Equals / Contains / Range predicates the storage layer can
  evaluate (Supabase eq / ilike / gte / lte)
- post: checks on derived fields (age group, total score) that only
  exist after the row has been through the analytics functions

All present predicates are conjunctive. When a FilterSet carries post
filters, the services filter the full candidate set first and paginate
afterwards, so page sizes and totalItems reflect every filter.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union
from uuid import UUID

from analytics.age import to_date
from analytics.scores import is_in_score_range

from .models import AssessmentQuery, PlayerQuery, ResultQuery


def _plain(value: Any) -> Any:
    """Enum / UUID / date -> value the storage layer understands"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def escape_like(text: str) -> str:
    """
    Make LIKE metacharacters literal.

    PostgREST rewrites every "*" to "%" and has no escape for it, so a "*"
    in the search text is sent as "_" and matches any one character.
    """
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.replace("*", "_")


# =============================================
# Storage-pushable predicates
# =============================================

@dataclass(frozen=True)
class Equals:
    field: str
    value: Any

    def apply(self, query):
        return query.eq(self.field, _plain(self.value))

    def matches(self, row: Mapping[str, Any]) -> bool:
        return _plain(row.get(self.field)) == _plain(self.value)


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match"""
    field: str
    text: str

    def apply(self, query):
        return query.ilike(self.field, f"%{escape_like(self.text)}%")

    def matches(self, row: Mapping[str, Any]) -> bool:
        value = row.get(self.field)
        if value is None:
            return False
        return self.text.lower() in str(value).lower()


@dataclass(frozen=True)
class Range:
    """
    Inclusive range, either bound optional.

    With whole_days the bounds are dates compared against a timestamp
    column: the upper bound covers the whole day.
    """
    field: str
    lower: Any = None
    upper: Any = None
    whole_days: bool = False

    def apply(self, query):
        if self.lower is not None:
            query = query.gte(self.field, _plain(self.lower))
        if self.upper is not None:
            if self.whole_days:
                query = query.lt(self.field, _plain(self.upper + timedelta(days=1)))
            else:
                query = query.lte(self.field, _plain(self.upper))
        return query

    def _coerce(self, value: Any) -> Any:
        bound = self.lower if self.lower is not None else self.upper
        if isinstance(bound, date) and not isinstance(bound, datetime):
            return to_date(value)
        return value

    def matches(self, row: Mapping[str, Any]) -> bool:
        value = row.get(self.field)
        if value is None:
            return False
        value = self._coerce(value)
        if self.lower is not None and value < self.lower:
            return False
        if self.upper is not None and value > self.upper:
            return False
        return True


Predicate = Union[Equals, Contains, Range]


# =============================================
# Post-computation predicates
# =============================================

@dataclass(frozen=True)
class PostFilter:
    """Check against a row that already carries derived fields"""
    name: str
    check: Callable[[Mapping[str, Any]], bool]

    def matches(self, row: Mapping[str, Any]) -> bool:
        return self.check(row)


@dataclass(frozen=True)
class FilterSet:
    pushable: Tuple[Predicate, ...] = ()
    post: Tuple[PostFilter, ...] = ()

    @property
    def has_post(self) -> bool:
        return len(self.post) > 0

    def apply(self, query):
        """Chain every pushable predicate onto a query builder"""
        for predicate in self.pushable:
            query = predicate.apply(query)
        return query

    def matches(self, row: Mapping[str, Any]) -> bool:
        return all(p.matches(row) for p in self.pushable)

    def post_matches(self, row: Mapping[str, Any]) -> bool:
        return all(p.matches(row) for p in self.post)

    def describe(self) -> Dict[str, Any]:
        """Short form for logging"""
        return {
            "pushable": [type(p).__name__ + ":" + p.field for p in self.pushable],
            "post": [p.name for p in self.post],
        }


# =============================================
# Per-entity composition
# =============================================

def age_group_filter(age_group) -> PostFilter:
    wanted = _plain(age_group)
    return PostFilter(
        name=f"age_group={wanted}",
        check=lambda row: _plain(row.get("age_group")) == wanted,
    )


def score_range_filter(min_score: Optional[int], max_score: Optional[int]) -> PostFilter:
    return PostFilter(
        name=f"total_score in [{min_score}, {max_score}]",
        check=lambda row: is_in_score_range(row.get("total_score", 0), min_score, max_score),
    )


def compose_player_filters(query: PlayerQuery) -> FilterSet:
    pushable = []
    post = []

    if query.q:
        pushable.append(Contains("name", query.q))
    if query.gender:
        pushable.append(Equals("gender", query.gender))
    if query.preferred_hand:
        pushable.append(Equals("preferred_hand", query.preferred_hand))
    if query.age_group:
        post.append(age_group_filter(query.age_group))

    return FilterSet(tuple(pushable), tuple(post))


def compose_assessment_filters(query: AssessmentQuery) -> FilterSet:
    pushable = []

    if query.q:
        pushable.append(Contains("name", query.q))
    if query.playing_time is not None:
        pushable.append(Equals("playing_time", query.playing_time))
    if query.recovery_time is not None:
        pushable.append(Equals("recovery_time", query.recovery_time))
    if query.date_from or query.date_to:
        pushable.append(Range("date_conducted", query.date_from, query.date_to))

    return FilterSet(tuple(pushable))


def compose_result_filters(query: ResultQuery) -> FilterSet:
    pushable = []
    post = []

    if query.player_id:
        pushable.append(Equals("player_id", query.player_id))
    if query.test_id:
        pushable.append(Equals("test_id", query.test_id))
    if query.date_from or query.date_to:
        pushable.append(Range("created_at", query.date_from, query.date_to, whole_days=True))
    if query.min_score is not None or query.max_score is not None:
        post.append(score_range_filter(query.min_score, query.max_score))

    return FilterSet(tuple(pushable), tuple(post))
