"""
Speedball analytics

Derived fields computed on every read:
- age / age group from date of birth
- score aggregation (total, average, highest, lowest, distribution)
- performance category and balance analysis
- test timing (total time, status)
"""
from .age import (
    AgeGroup,
    AgeGroupPolicy,
    AGE_GROUP_BOUNDS,
    AGE_GROUP_ORDER,
    DEFAULT_AGE_GROUP_POLICY,
    MAX_AGE,
    calculate_age,
    age_group_for_age,
    get_age_group,
)
from .scores import (
    ScoreSet,
    ScoreSummary,
    aggregate_scores,
    calculate_total_score,
    calculate_average_score,
    get_highest_score,
    get_lowest_score,
    get_score_distribution,
    is_in_score_range,
)
from .performance import (
    PerformanceThresholds,
    DEFAULT_THRESHOLDS,
    get_performance_category,
    analyze_performance,
)
from .timing import (
    TestType,
    TestStatus,
    durations_for_type,
    calculate_total_time,
    format_total_time,
    get_test_status,
)

__all__ = [
    "AgeGroup",
    "AgeGroupPolicy",
    "AGE_GROUP_BOUNDS",
    "AGE_GROUP_ORDER",
    "DEFAULT_AGE_GROUP_POLICY",
    "MAX_AGE",
    "calculate_age",
    "age_group_for_age",
    "get_age_group",
    "ScoreSet",
    "ScoreSummary",
    "aggregate_scores",
    "calculate_total_score",
    "calculate_average_score",
    "get_highest_score",
    "get_lowest_score",
    "get_score_distribution",
    "is_in_score_range",
    "PerformanceThresholds",
    "DEFAULT_THRESHOLDS",
    "get_performance_category",
    "analyze_performance",
    "TestType",
    "TestStatus",
    "durations_for_type",
    "calculate_total_time",
    "format_total_time",
    "get_test_status",
]
