"""
Age classification

Age (full years) and age-group bracket from a date of birth.
Brackets follow the federation's youth categories:
Mini, U-09, U-11, U-13, U-15, U-17, U-19, U-21, Seniors
"""
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple, Union


DateLike = Union[date, datetime, str]


class AgeGroup(str, Enum):
    """Age bracket"""
    MINI = "Mini"
    U09 = "U-09"
    U11 = "U-11"
    U13 = "U-13"
    U15 = "U-15"
    U17 = "U-17"
    U19 = "U-19"
    U21 = "U-21"
    SENIORS = "Seniors"


# Upper bound of each bracket, ascending. Anything past the last bound is Seniors.
AGE_GROUP_BOUNDS: Tuple[Tuple[int, AgeGroup], ...] = (
    (7, AgeGroup.MINI),
    (9, AgeGroup.U09),
    (11, AgeGroup.U11),
    (13, AgeGroup.U13),
    (15, AgeGroup.U15),
    (17, AgeGroup.U17),
    (19, AgeGroup.U19),
    (21, AgeGroup.U21),
)

AGE_GROUP_ORDER = [g for _, g in AGE_GROUP_BOUNDS] + [AgeGroup.SENIORS]

# Oldest plausible age; birth dates further back are rejected on input
MAX_AGE = 130


@dataclass(frozen=True)
class AgeGroupPolicy:
    """
    Bracket table and boundary convention.

    With the default exclusive convention a player is in a bracket while
    ``age < bound``, so a 9 year old is U-11. With ``inclusive_upper_bound``
    the check becomes ``age <= bound`` and the same player is U-09.
    """
    bounds: Tuple[Tuple[int, AgeGroup], ...] = AGE_GROUP_BOUNDS
    inclusive_upper_bound: bool = False
    fallback: AgeGroup = AgeGroup.SENIORS

    def contains(self, age: int, bound: int) -> bool:
        if self.inclusive_upper_bound:
            return age <= bound
        return age < bound


DEFAULT_AGE_GROUP_POLICY = AgeGroupPolicy()


def to_date(value: DateLike) -> date:
    """date, datetime or ISO string -> date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def calculate_age(date_of_birth: DateLike, reference_date: Optional[DateLike] = None) -> int:
    """
    Full years between the birth date and the reference date (today by default).

    One year is taken off when the birthday has not yet come round in the
    reference year. A birth date after the reference date gives 0.
    """
    birth = to_date(date_of_birth)
    today = to_date(reference_date) if reference_date is not None else date.today()

    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1

    return max(age, 0)


def age_group_for_age(age: int, policy: Optional[AgeGroupPolicy] = None) -> AgeGroup:
    """Step function age -> bracket. First matching bound wins."""
    policy = policy or DEFAULT_AGE_GROUP_POLICY
    for bound, group in policy.bounds:
        if policy.contains(age, bound):
            return group
    return policy.fallback


def get_age_group(
    date_of_birth: DateLike,
    reference_date: Optional[DateLike] = None,
    policy: Optional[AgeGroupPolicy] = None
) -> AgeGroup:
    """Bracket for a birth date"""
    return age_group_for_age(calculate_age(date_of_birth, reference_date), policy)
