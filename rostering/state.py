"""
Per-run scheduling state: one record per employee, indexed by roster position.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from rostering.models import Employee, ShiftKind
from rostering.utils import first_weekday, weeks_in_month, week_index, days_in_month


@dataclass
class EmployeeRecord:
    """Mutable counters for one employee during a generation run."""
    index: int
    employee: Employee
    assigned: int = 0
    streak: int = 0
    last_worked: Optional[int] = None  # day number within the month
    last_night: Optional[int] = None
    week_counts: List[int] = field(default_factory=list)
    worked_days: Set[int] = field(default_factory=set)
    night_days: Set[int] = field(default_factory=set)

    @property
    def id(self) -> str:
        return self.employee.id

    @property
    def desired(self) -> int:
        return max(0, self.employee.desired_shifts)

    @property
    def remaining(self) -> int:
        return self.desired - self.assigned

    @property
    def under_target(self) -> bool:
        return self.assigned < self.desired

    def current_streak(self, day_num: int) -> int:
        """Consecutive days worked immediately before `day_num`."""
        run = 0
        d = day_num - 1
        while d in self.worked_days:
            run += 1
            d -= 1
        return run

    def worked_night(self, day_num: int) -> bool:
        return day_num in self.night_days

    def worked_day_shift(self, day_num: int) -> bool:
        return day_num in self.worked_days and day_num not in self.night_days

    def window_count(self, day_num: int, window: int = 7) -> int:
        """Days worked in the trailing window `day_num-window .. day_num-1`."""
        return sum(1 for d in range(max(1, day_num - window), day_num) if d in self.worked_days)


class SchedulingState:
    """Record store threaded through the strict and hard-fill passes."""

    def __init__(self, employees: List[Employee], year: int, month0: int):
        self.year = year
        self.month0 = month0
        self.days_in_month = days_in_month(year, month0)
        self.first_weekday = first_weekday(year, month0)
        self.weeks_in_month = weeks_in_month(year, month0)
        self.records: List[EmployeeRecord] = [
            EmployeeRecord(index=i, employee=e, week_counts=[0] * self.weeks_in_month)
            for i, e in enumerate(employees)
        ]
        self.by_id: Dict[str, EmployeeRecord] = {r.id: r for r in self.records}

    def week_of(self, day_num: int) -> int:
        return week_index(self.first_weekday, day_num)

    def record(self, employee_id: str) -> EmployeeRecord:
        return self.by_id[employee_id]

    def commit(self, rec: EmployeeRecord, day_num: int, shift: ShiftKind) -> None:
        """Apply one assignment to the employee's counters.

        The strict pass commits in calendar order, so the streak simply grows
        on a one-day gap and restarts at 1 otherwise. The hard-fill pass may
        commit into an earlier day; then the latest worked day stays the
        anchor and the streak is re-measured back from it.
        """
        rec.worked_days.add(day_num)
        if shift is ShiftKind.NIGHT:
            rec.night_days.add(day_num)
        if rec.last_worked is None:
            rec.streak = 1
            rec.last_worked = day_num
        elif day_num > rec.last_worked:
            rec.streak = rec.streak + 1 if day_num - rec.last_worked == 1 else 1
            rec.last_worked = day_num
        else:
            rec.streak = rec.current_streak(rec.last_worked + 1)
        if shift is ShiftKind.NIGHT and (rec.last_night is None or day_num > rec.last_night):
            rec.last_night = day_num
        rec.assigned += 1
        rec.week_counts[self.week_of(day_num)] += 1

    def snapshot(self) -> Dict[str, Dict]:
        """Plain-dict view of the counters, keyed by employee id."""
        return {
            r.id: {
                "assigned": r.assigned,
                "streak": r.streak,
                "last_worked": r.last_worked,
                "last_night": r.last_night,
                "week_counts": list(r.week_counts),
                "worked_days": sorted(r.worked_days),
            }
            for r in self.records
        }
