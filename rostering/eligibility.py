"""
Eligibility rules for placing a candidate on a shift, with staged relaxation.
Double-booking and morning-after-night are safety rules and are never relaxed.
"""

from enum import IntEnum
from typing import Iterable, List

from rostering.models import ShiftKind
from rostering.state import EmployeeRecord

ALREADY_TODAY = "already on other shift today"
MORNING_AFTER_NIGHT = "morning after night"
HARD_CEILING = "hard ceiling (others under target)"


class RelaxLevel(IntEnum):
    """Escalation order used by the hard-fill pass."""
    NONE = 0
    IGNORE_WEEKLY_CAP = 1
    IGNORE_WEEKLY_CAP_AND_STREAK = 2

    @property
    def ignores_weekly_cap(self) -> bool:
        return self >= RelaxLevel.IGNORE_WEEKLY_CAP

    @property
    def ignores_streak(self) -> bool:
        return self >= RelaxLevel.IGNORE_WEEKLY_CAP_AND_STREAK


RELAX_ORDER = (RelaxLevel.NONE, RelaxLevel.IGNORE_WEEKLY_CAP, RelaxLevel.IGNORE_WEEKLY_CAP_AND_STREAK)


def streak_reason(max_streak: int) -> str:
    return f">{max_streak}-day streak"


def weekly_cap_reason(weekly_cap: int) -> str:
    return f"weekly cap {weekly_cap}"


class EligibilityRules:
    """Evaluates constraint violations for one run's settings."""

    def __init__(self, weekly_cap: int, max_streak: int, no_morning_after_night: bool):
        self.weekly_cap = weekly_cap
        self.max_streak = max_streak
        self.no_morning_after_night = no_morning_after_night

    def reasons(self, rec: EmployeeRecord, shift: ShiftKind, day_num: int,
                picked_today: Iterable[str], relax: RelaxLevel = RelaxLevel.NONE) -> List[str]:
        reasons = []
        if rec.id in picked_today:
            reasons.append(ALREADY_TODAY)
        if not relax.ignores_streak and rec.current_streak(day_num) >= self.max_streak:
            reasons.append(streak_reason(self.max_streak))
        if self.no_morning_after_night:
            # A hard-fill night may land before an already-filled morning.
            if shift is ShiftKind.DAY and rec.worked_night(day_num - 1):
                reasons.append(MORNING_AFTER_NIGHT)
            elif shift is ShiftKind.NIGHT and rec.worked_day_shift(day_num + 1):
                reasons.append(MORNING_AFTER_NIGHT)
        if not relax.ignores_weekly_cap and rec.window_count(day_num, 7) >= self.weekly_cap:
            reasons.append(weekly_cap_reason(self.weekly_cap))
        return reasons

    def eligible(self, rec: EmployeeRecord, shift: ShiftKind, day_num: int,
                 picked_today: Iterable[str], relax: RelaxLevel = RelaxLevel.NONE) -> bool:
        return not self.reasons(rec, shift, day_num, picked_today, relax)
