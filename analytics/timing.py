"""
Test timing helpers

Tests are run as playing/recovery intervals (seconds). Three presets
exist in the federation's protocol: 60/30, 30/30, 30/60.
"""
from datetime import date
from enum import Enum
from typing import Dict, Optional, Tuple

from .age import DateLike, to_date


class TestType(str, Enum):
    """Preset interval (playing_recovery, seconds)"""
    __test__ = False  # not a pytest class

    PLAY_60_REST_30 = "60_30"
    PLAY_30_REST_30 = "30_30"
    PLAY_30_REST_60 = "30_60"


TEST_TYPE_DURATIONS: Dict[TestType, Tuple[int, int]] = {
    TestType.PLAY_60_REST_30: (60, 30),
    TestType.PLAY_30_REST_30: (30, 30),
    TestType.PLAY_30_REST_60: (30, 60),
}


class TestStatus(str, Enum):
    __test__ = False

    UPCOMING = "upcoming"
    TODAY = "today"
    COMPLETED = "completed"


def durations_for_type(test_type: TestType) -> Tuple[int, int]:
    """(playing_time, recovery_time) for a preset"""
    return TEST_TYPE_DURATIONS[TestType(test_type)]


def calculate_total_time(playing_time: int, recovery_time: int) -> int:
    return playing_time + recovery_time


def format_total_time(total_seconds: int) -> str:
    """90 -> '1m 30s', 60 -> '1m', 45 -> '45s'"""
    minutes, seconds = divmod(max(total_seconds, 0), 60)
    if minutes and seconds:
        return f"{minutes}m {seconds}s"
    if minutes:
        return f"{minutes}m"
    return f"{seconds}s"


def get_test_status(date_conducted: DateLike, reference_date: Optional[DateLike] = None) -> TestStatus:
    conducted = to_date(date_conducted)
    today = to_date(reference_date) if reference_date is not None else date.today()

    if conducted > today:
        return TestStatus.UPCOMING
    if conducted == today:
        return TestStatus.TODAY
    return TestStatus.COMPLETED
