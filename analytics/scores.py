"""
Score aggregation

A test result carries four sub-scores:
- left hand / right hand
- forehand / backhand

Everything here is derived on read and never stored.
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class ScoreSet:
    """The four sub-scores of one test result"""
    left_hand: int
    right_hand: int
    forehand: int
    backhand: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ScoreSet":
        """Build from a test_results row"""
        return cls(
            left_hand=int(row.get("left_hand_score") or 0),
            right_hand=int(row.get("right_hand_score") or 0),
            forehand=int(row.get("forehand_score") or 0),
            backhand=int(row.get("backhand_score") or 0),
        )

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class ScoreSummary:
    """Aggregated metrics for one result"""
    total_score: int
    average_score: float
    highest_score: int
    lowest_score: int
    score_distribution: Dict[str, Any]

    def to_dict(self):
        return asdict(self)


def calculate_total_score(scores: ScoreSet) -> int:
    return scores.left_hand + scores.right_hand + scores.forehand + scores.backhand


def calculate_average_score(scores: ScoreSet) -> float:
    """Total / 4, rounded to 2 decimals (exact for integer sub-scores)"""
    return round(calculate_total_score(scores) / 4, 2)


def get_highest_score(scores: ScoreSet) -> int:
    return max(scores.left_hand, scores.right_hand, scores.forehand, scores.backhand)


def get_lowest_score(scores: ScoreSet) -> int:
    return min(scores.left_hand, scores.right_hand, scores.forehand, scores.backhand)


def _share(part: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(part / total * 100, 1)


def get_score_distribution(scores: ScoreSet) -> Dict[str, Any]:
    """
    Sub-scores plus hand/stroke pair totals.

    hand_share and stroke_share are percentages of the total score.
    """
    total = calculate_total_score(scores)
    hand_total = scores.left_hand + scores.right_hand
    stroke_total = scores.forehand + scores.backhand

    return {
        "left_hand": scores.left_hand,
        "right_hand": scores.right_hand,
        "forehand": scores.forehand,
        "backhand": scores.backhand,
        "hand_total": hand_total,
        "stroke_total": stroke_total,
        "hand_share": _share(hand_total, total),
        "stroke_share": _share(stroke_total, total),
    }


def aggregate_scores(scores: ScoreSet) -> ScoreSummary:
    return ScoreSummary(
        total_score=calculate_total_score(scores),
        average_score=calculate_average_score(scores),
        highest_score=get_highest_score(scores),
        lowest_score=get_lowest_score(scores),
        score_distribution=get_score_distribution(scores),
    )


def is_in_score_range(
    total_score: int,
    min_score: Optional[int] = None,
    max_score: Optional[int] = None
) -> bool:
    """Inclusive range check, None = unbounded"""
    if min_score is not None and total_score < min_score:
        return False
    if max_score is not None and total_score > max_score:
        return False
    return True
