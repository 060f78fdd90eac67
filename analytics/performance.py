"""
Performance analysis

- Performance category from the total score (threshold ladder)
- Hand balance (left vs right) and stroke balance (forehand vs backhand)
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

from .scores import ScoreSet, calculate_total_score


# =====================================================
# Configuration
# =====================================================

BELOW_AVERAGE = "below_average"

# (minimum total, label), checked top-down
DEFAULT_PERFORMANCE_LADDER: Tuple[Tuple[int, str], ...] = (
    (200, "excellent"),
    (150, "good"),
    (100, "average"),
)


@dataclass(frozen=True)
class PerformanceThresholds:
    """
    Category ladder and balance tolerance.

    A pair of sub-scores is balanced when the gap is at most
    ``balance_tolerance`` of the stronger side.
    """
    ladder: Tuple[Tuple[int, str], ...] = DEFAULT_PERFORMANCE_LADDER
    fallback: str = BELOW_AVERAGE
    balance_tolerance: float = 0.10


DEFAULT_THRESHOLDS = PerformanceThresholds()

AREA_LABELS = {
    "left_hand": "left hand",
    "right_hand": "right hand",
    "forehand": "forehand",
    "backhand": "backhand",
}


@dataclass
class PairBalance:
    """Comparison of two sub-scores"""
    dominant: str  # one of the two side names, or "balanced"
    difference: int
    ratio: Optional[float]  # stronger / weaker, None when weaker side is 0
    is_balanced: bool

    def to_dict(self):
        return asdict(self)


# =====================================================
# Category
# =====================================================

def get_performance_category(
    total_score: int,
    thresholds: Optional[PerformanceThresholds] = None
) -> str:
    thresholds = thresholds or DEFAULT_THRESHOLDS
    for minimum, label in sorted(thresholds.ladder, key=lambda t: t[0], reverse=True):
        if total_score >= minimum:
            return label
    return thresholds.fallback


# =====================================================
# Balance analysis
# =====================================================

def compare_pair(
    first_name: str,
    first: int,
    second_name: str,
    second: int,
    tolerance: float
) -> PairBalance:
    """Which side of a pair dominates, and by how much"""
    difference = abs(first - second)
    stronger = max(first, second)
    weaker = min(first, second)

    ratio = round(stronger / weaker, 2) if weaker > 0 else None
    is_balanced = difference <= tolerance * stronger

    if is_balanced:
        dominant = "balanced"
    elif first > second:
        dominant = first_name
    else:
        dominant = second_name

    return PairBalance(
        dominant=dominant,
        difference=difference,
        ratio=ratio,
        is_balanced=is_balanced,
    )


def _describe(pair: PairBalance, subject: str) -> str:
    if pair.is_balanced:
        return f"{subject.capitalize()} scores are balanced."
    if pair.ratio is None:
        return f"Only the {pair.dominant.replace('_', ' ')} scored in {subject}."
    return (
        f"{pair.dominant.replace('_', ' ').capitalize()} leads {subject} "
        f"by {pair.difference} ({pair.ratio}x)."
    )


def analyze_performance(
    scores: ScoreSet,
    thresholds: Optional[PerformanceThresholds] = None
) -> Dict[str, Any]:
    """
    Structured balance report for one result.

    Returns hand_balance, stroke_balance, strongest_area, weakest_area,
    is_balanced and a one-line summary.
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    tolerance = thresholds.balance_tolerance

    hand = compare_pair("left_hand", scores.left_hand, "right_hand", scores.right_hand, tolerance)
    stroke = compare_pair("forehand", scores.forehand, "backhand", scores.backhand, tolerance)

    areas = scores.as_dict()
    # ties resolve to the first area in field order
    strongest = max(areas, key=lambda k: areas[k])
    weakest = min(areas, key=lambda k: areas[k])

    if calculate_total_score(scores) == 0:
        summary = "No points scored."
    else:
        summary = " ".join([
            _describe(hand, "hand"),
            _describe(stroke, "stroke"),
            f"Strongest area: {AREA_LABELS[strongest]}, weakest: {AREA_LABELS[weakest]}.",
        ])

    return {
        "hand_balance": hand.to_dict(),
        "stroke_balance": stroke.to_dict(),
        "strongest_area": strongest,
        "weakest_area": weakest,
        "is_balanced": hand.is_balanced and stroke.is_balanced,
        "summary": summary,
    }
