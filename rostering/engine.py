"""
Month roster generator: a weighted strict pass followed by an optional
hard-fill pass that relaxes the weekly cap and streak limits to close gaps.
"""

import math
from collections import Counter
from typing import Callable, List, Optional, Sequence, Tuple

from rostering.models import (
    AssignmentRow,
    Employee,
    RunMetadata,
    ScheduleResult,
    ScheduleSettings,
    ShiftKind,
)
from rostering.eligibility import (
    EligibilityRules,
    HARD_CEILING,
    RELAX_ORDER,
    RelaxLevel,
)
from rostering.precheck import demand_supply_precheck
from rostering.rng import LcgRandom
from rostering.state import EmployeeRecord, SchedulingState
from rostering.utils import month_dates
from rostering.weights import WeightModel, hits_hard_ceiling, preference_weight

HARD_FILL_EXHAUSTED = "Hard fill: no candidate even with weekly cap and streak relaxed"


def hard_fill_note(filled: int) -> str:
    return f"Hard fill: filled {filled} seat(s)"


def random_pick_weighted(items: Sequence, weights: Sequence[float], draw: Callable[[], float]):
    """Cumulative-subtraction weighted pick; None when nothing carries weight."""
    total = sum(weights)
    if not math.isfinite(total) or total <= 0:
        return None
    r = draw() * total
    for item, w in zip(items, weights):
        r -= w
        if r <= 0:
            return item
    return items[-1]


class ScheduleGenerator:
    """Generates one month of day/night assignments.

    A generator instance is good for exactly one run: it creates its own
    SchedulingState and consumes its own random source.
    """

    def __init__(self, employees: List[Employee], settings: ScheduleSettings,
                 rng: Optional[LcgRandom] = None, verbose: bool = False):
        self.employees = employees
        self.settings = settings
        self.rng = rng if rng is not None else LcgRandom(settings.seed)
        self.verbose = verbose

        self.state = SchedulingState(employees, settings.year, settings.month)
        self.primaries: List[EmployeeRecord] = [r for r in self.state.records if not r.employee.is_reserve]
        self.reserves: List[EmployeeRecord] = [r for r in self.state.records if r.employee.is_reserve]
        self.rules = EligibilityRules(
            weekly_cap=settings.weekly_cap,
            max_streak=settings.max_consecutive_days,
            no_morning_after_night=settings.no_morning_after_night,
        )
        self.weights = WeightModel(
            self.state,
            max_streak=settings.max_consecutive_days,
            spread_enabled=settings.spread_enabled,
            draw=self.rng.random,
        )
        self.meta: RunMetadata = demand_supply_precheck(employees, settings)
        self.meta.seed = self.rng.initial_seed

    def _slots(self, shift: ShiftKind) -> int:
        if shift is ShiftKind.DAY:
            return max(0, self.settings.day_slots)
        return max(0, self.settings.night_slots)

    def _allowed_pool(self) -> List[EmployeeRecord]:
        if self.meta.allow_reserves_in_normal:
            return self.primaries + self.reserves
        return self.primaries

    def _under_target_exists(self, pool: List[EmployeeRecord], shift: ShiftKind, day_num: int,
                             picked_today: List[str]) -> bool:
        return any(r.under_target and self.rules.eligible(r, shift, day_num, picked_today) for r in pool)

    def generate(self) -> ScheduleResult:
        if self.verbose:
            print(f"Generating {self.settings.year}-{self.settings.month + 1:02d} for "
                  f"{len(self.primaries)} primaries + {len(self.reserves)} reserves (seed {self.meta.seed})")
            print(f"Demand {self.meta.total_demand} shifts, primaries desire {self.meta.sum_desired_primaries}; "
                  f"reserves in strict pass: {self.meta.allow_reserves_in_normal}")

        days = self._strict_pass()
        if self.verbose:
            print(f"Strict pass left {self._open_seats(days)} open seats")

        if self.settings.hard_fill:
            self._hard_fill_pass(days)
            if self.verbose:
                print(f"Hard fill left {self._open_seats(days)} open seats")

        return ScheduleResult(days=days, meta=self.meta)

    @staticmethod
    def _open_seats(days: List[AssignmentRow]) -> int:
        return sum(row.day_missing + row.night_missing for row in days)

    # ---- PASS 1: strict fill ----

    def _strict_pass(self) -> List[AssignmentRow]:
        rows = []
        for day_num, day in enumerate(month_dates(self.state.year, self.state.month0), start=1):
            date = day.isoformat()
            day_picks, day_missing, day_issues = self._pick_shift(day_num, ShiftKind.DAY, [])
            night_picks, night_missing, night_issues = self._pick_shift(day_num, ShiftKind.NIGHT, day_picks)
            rows.append(AssignmentRow(
                date=date,
                day_ids=day_picks,
                night_ids=night_picks,
                day_missing=day_missing,
                night_missing=night_missing,
                day_issues=day_issues,
                night_issues=night_issues,
            ))
        return rows

    def _pick_shift(self, day_num: int, shift: ShiftKind,
                    already_today: List[str]) -> Tuple[List[str], int, List[str]]:
        needed = self._slots(shift)
        picks: List[str] = []
        picked_today = list(already_today)
        allowed = self._allowed_pool()

        def try_pool(pool: List[EmployeeRecord]) -> None:
            available = [r for r in pool if self.rules.eligible(r, shift, day_num, picked_today)]
            while len(picks) < needed and available:
                under_exists = self._under_target_exists(allowed, shift, day_num, picked_today)
                weights = [self.weights.weight(r, shift, day_num, under_exists) for r in available]
                picked = random_pick_weighted(available, weights, self.rng.random)
                if picked is None:
                    break
                available = [r for r in available if r is not picked]
                if hits_hard_ceiling(picked, under_exists):
                    continue
                picks.append(picked.id)
                picked_today.append(picked.id)
                self.state.commit(picked, day_num, shift)

        try_pool(self.primaries)
        if self.meta.allow_reserves_in_normal and len(picks) < needed:
            try_pool(self.reserves)

        issues = []
        if len(picks) < needed:
            summary = self._shortage_summary(allowed, shift, day_num, picked_today)
            if summary:
                issues.append(f"Insufficient eligible staff: {summary}")
        return picks, max(0, needed - len(picks)), issues

    def _shortage_summary(self, pool: List[EmployeeRecord], shift: ShiftKind, day_num: int,
                          picked_today: List[str]) -> str:
        under_exists = self._under_target_exists(pool, shift, day_num, picked_today)
        counts: Counter = Counter()
        for rec in pool:
            reasons = self.rules.reasons(rec, shift, day_num, picked_today)
            if hits_hard_ceiling(rec, under_exists):
                reasons.append(HARD_CEILING)
            if not reasons and preference_weight(rec, shift) == 0:
                reasons.append(f"prefers {shift.other.value} shift")
            counts.update(reasons)
        return ", ".join(f"{reason} ({n})" for reason, n in counts.items())

    # ---- PASS 2: hard fill ----

    def _hard_fill_pass(self, days: List[AssignmentRow]) -> None:
        for day_num, row in enumerate(days, start=1):
            for shift in (ShiftKind.DAY, ShiftKind.NIGHT):
                filled_here = 0
                while getattr(row, shift.missing_field) > 0:
                    filled = self._fill_slot(row, day_num, shift)
                    setattr(row, shift.missing_field, max(0, self._slots(shift) - len(row.ids_for(shift))))
                    if not filled:
                        issues = row.issues_for(shift)
                        if HARD_FILL_EXHAUSTED not in issues:
                            issues.append(HARD_FILL_EXHAUSTED)
                        break
                    filled_here += 1
                if filled_here and row.missing_for(shift) == 0:
                    # Strict-pass shortage text no longer describes a full shift.
                    setattr(row, shift.issues_field, [hard_fill_note(filled_here)])

    def _fill_slot(self, row: AssignmentRow, day_num: int, shift: ShiftKind) -> bool:
        """Fill one seat: under-target staff through every relaxation stage, then anyone."""
        pool = self.primaries + self.reserves
        under = [r for r in pool if r.under_target]
        for tier in (under, pool):
            for relax in RELAX_ORDER:
                chosen = self._hard_fill_candidate(tier, row, day_num, shift, relax)
                if chosen is not None:
                    self.state.commit(chosen, day_num, shift)
                    row.ids_for(shift).append(chosen.id)
                    if self.verbose:
                        print(f"  hard fill {row.date} {shift.value}: {chosen.employee.name} ({relax.name})")
                    return True
        return False

    def _hard_fill_candidate(self, tier: List[EmployeeRecord], row: AssignmentRow, day_num: int,
                             shift: ShiftKind, relax: RelaxLevel) -> Optional[EmployeeRecord]:
        taken = row.day_ids + row.night_ids
        candidates = [
            r for r in tier
            if r.id not in taken and self.rules.eligible(r, shift, day_num, taken, relax)
        ]
        if not candidates:
            return None
        # Neediest first, then least assigned; primaries ahead of reserves on a tie.
        return min(candidates, key=lambda r: (-r.remaining, r.assigned, r.employee.is_reserve, r.index))


def generate_schedule(employees: List[Employee], settings: ScheduleSettings,
                      rng: Optional[LcgRandom] = None, verbose: bool = False) -> ScheduleResult:
    """Run one generation over a fresh state."""
    return ScheduleGenerator(employees, settings, rng=rng, verbose=verbose).generate()
