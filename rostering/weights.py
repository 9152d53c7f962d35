"""
Weighting model for the strict pass. All factors are multiplied together;
a zero from any factor removes the candidate from the draw.
"""

import math
from typing import Callable

from rostering.models import Preference, ShiftKind
from rostering.state import EmployeeRecord, SchedulingState


def preference_weight(rec: EmployeeRecord, shift: ShiftKind) -> float:
    pref = rec.employee.preference
    if pref is Preference.NEITHER:
        return 0.8
    if shift is ShiftKind.DAY:
        return 1.0 if pref is Preference.DAY else 0.0
    return 1.0 if pref is Preference.NIGHT else 0.0


def desired_bias(rec: EmployeeRecord) -> float:
    desired = rec.desired
    if desired == 0:
        return 0.9
    remain = max(0, desired - rec.assigned)
    if remain > 0:
        return 1.6 + min(1.2, remain / max(2, desired * 0.5))
    return 0.5 if rec.assigned == desired else 0.25


def fairness(rec: EmployeeRecord) -> float:
    return 1 / (1 + rec.assigned)


def rest_bias(rec: EmployeeRecord, day_num: int) -> float:
    return 0.5 if (day_num - 1) in rec.worked_days else 1.0


def spread_bias(rec: EmployeeRecord, day_num: int, state: SchedulingState, enabled: bool) -> float:
    if not enabled or rec.desired == 0:
        return 1.0
    target_per_week = rec.desired / max(1, state.weeks_in_month)
    current = rec.week_counts[state.week_of(day_num)]
    if current < math.floor(target_per_week):
        return 1.2
    if current > math.ceil(target_per_week):
        return 0.7
    return 1.0


def streak_bias(rec: EmployeeRecord, day_num: int, max_streak: int) -> float:
    # The 1.3 "finish the block" bonus (remaining <= 2, streak >= 1) is shadowed
    # by the two branches below whenever max_streak >= 1.
    streak = rec.current_streak(day_num)
    if streak == 0:
        return 1.2
    if streak < max_streak:
        return 1.1
    return 0.0


def hits_hard_ceiling(rec: EmployeeRecord, under_target_exists: bool) -> bool:
    return under_target_exists and rec.assigned >= rec.desired


class WeightModel:
    """Scores eligible candidates; owns no randomness beyond the draw it is handed."""

    def __init__(self, state: SchedulingState, max_streak: int, spread_enabled: bool,
                 draw: Callable[[], float]):
        self.state = state
        self.max_streak = max_streak
        self.spread_enabled = spread_enabled
        self.draw = draw

    def weight(self, rec: EmployeeRecord, shift: ShiftKind, day_num: int, under_target_exists: bool) -> float:
        if hits_hard_ceiling(rec, under_target_exists):
            return 0.0
        jitter = 0.95 + self.draw() * 0.1
        w = (preference_weight(rec, shift)
             * desired_bias(rec)
             * fairness(rec)
             * rest_bias(rec, day_num)
             * spread_bias(rec, day_num, self.state, self.spread_enabled)
             * streak_bias(rec, day_num, self.max_streak)
             * jitter)
        return max(0.0, w)
