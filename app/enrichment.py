"""
Derived fields

Attaches computed fields to raw storage rows. Nothing computed here is
cached or written back: age and categories always reflect "now" and the
current scores.
"""
from datetime import date
from typing import Any, Callable, Dict, Optional

from analytics.age import AgeGroupPolicy, age_group_for_age, calculate_age
from analytics.performance import PerformanceThresholds, analyze_performance, get_performance_category
from analytics.scores import ScoreSet, aggregate_scores
from analytics.timing import calculate_total_time, format_total_time, get_test_status

from .config import Settings


class Enricher:
    """Row -> row + derived fields"""

    def __init__(
        self,
        age_policy: Optional[AgeGroupPolicy] = None,
        thresholds: Optional[PerformanceThresholds] = None,
        today: Callable[[], date] = date.today
    ):
        self.age_policy = age_policy or AgeGroupPolicy()
        self.thresholds = thresholds or PerformanceThresholds()
        self.today = today

    @classmethod
    def from_settings(cls, settings: Settings, today: Callable[[], date] = date.today) -> "Enricher":
        return cls(settings.age_group_policy(), settings.performance_thresholds(), today)

    def player(self, row: Dict[str, Any]) -> Dict[str, Any]:
        age = calculate_age(row["date_of_birth"], self.today())
        return {
            **row,
            "age": age,
            "age_group": age_group_for_age(age, self.age_policy),
        }

    def assessment(self, row: Dict[str, Any]) -> Dict[str, Any]:
        total_time = calculate_total_time(row["playing_time"], row["recovery_time"])
        return {
            **row,
            "total_time": total_time,
            "formatted_total_time": format_total_time(total_time),
            "status": get_test_status(row["date_conducted"], self.today()),
        }

    def result(self, row: Dict[str, Any]) -> Dict[str, Any]:
        scores = ScoreSet.from_row(row)
        summary = aggregate_scores(scores)

        enriched = {
            **row,
            **summary.to_dict(),
            "performance_category": get_performance_category(summary.total_score, self.thresholds),
            "analysis": analyze_performance(scores, self.thresholds),
        }

        # embedded relations (left joins may come back empty)
        if isinstance(row.get("player"), dict):
            enriched["player"] = self.player(row["player"])
        if isinstance(row.get("test"), dict):
            enriched["test"] = self.assessment(row["test"])

        return enriched
