from pydantic import BaseModel, field_validator
from typing import List, Optional
from enum import Enum


class Preference(str, Enum):
    DAY = "Day"
    NIGHT = "Night"
    NEITHER = "Neither"


class ShiftKind(str, Enum):
    DAY = "day"
    NIGHT = "night"

    @property
    def ids_field(self) -> str:
        return "day_ids" if self is ShiftKind.DAY else "night_ids"

    @property
    def missing_field(self) -> str:
        return "day_missing" if self is ShiftKind.DAY else "night_missing"

    @property
    def issues_field(self) -> str:
        return "day_issues" if self is ShiftKind.DAY else "night_issues"

    @property
    def other(self) -> "ShiftKind":
        return ShiftKind.NIGHT if self is ShiftKind.DAY else ShiftKind.DAY


def _non_negative_int(value) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


class Employee(BaseModel):
    id: str
    name: str
    preference: Preference = Preference.NEITHER
    desired_shifts: int = 0
    is_reserve: bool = False
    color: Optional[str] = None  # display only

    @field_validator("desired_shifts", mode="before")
    @classmethod
    def _clamp_desired(cls, v):
        return _non_negative_int(v)


class ScheduleSettings(BaseModel):
    year: int
    month: int  # 0=Jan .. 11=Dec
    day_slots: int = 1
    night_slots: int = 1
    no_morning_after_night: bool = True
    weekly_cap: int = 5
    max_consecutive_days: int = 5
    spread_enabled: bool = True
    use_reserves_auto: bool = False
    hard_fill: bool = False
    seed: Optional[int] = None  # None = draw a fresh seed per run

    @field_validator("day_slots", "night_slots", mode="before")
    @classmethod
    def _clamp_slots(cls, v):
        return _non_negative_int(v)

    @field_validator("year", mode="before")
    @classmethod
    def _clamp_year(cls, v):
        return min(9999, max(1, _non_negative_int(v)))

    @field_validator("month", mode="before")
    @classmethod
    def _clamp_month(cls, v):
        return min(11, _non_negative_int(v))

    @field_validator("weekly_cap", mode="before")
    @classmethod
    def _clamp_weekly_cap(cls, v):
        return max(1, _non_negative_int(v))

    @field_validator("max_consecutive_days", mode="before")
    @classmethod
    def _clamp_max_consecutive(cls, v):
        return min(7, max(1, _non_negative_int(v)))

    @field_validator("seed", mode="before")
    @classmethod
    def _wrap_seed(cls, v):
        if v is None:
            return None
        return int(v) % 4294967296


class AssignmentRow(BaseModel):
    date: str  # YYYY-MM-DD
    day_ids: List[str] = []
    night_ids: List[str] = []
    day_missing: int = 0
    night_missing: int = 0
    day_issues: List[str] = []
    night_issues: List[str] = []

    def ids_for(self, shift: ShiftKind) -> List[str]:
        return getattr(self, shift.ids_field)

    def missing_for(self, shift: ShiftKind) -> int:
        return getattr(self, shift.missing_field)

    def issues_for(self, shift: ShiftKind) -> List[str]:
        return getattr(self, shift.issues_field)


class RunMetadata(BaseModel):
    total_demand: int = 0
    sum_desired_primaries: int = 0
    allow_reserves_in_normal: bool = False
    seed: Optional[int] = None


class ScheduleResult(BaseModel):
    days: List[AssignmentRow] = []
    meta: RunMetadata = RunMetadata()

    def row_for(self, date: str) -> Optional[AssignmentRow]:
        for row in self.days:
            if row.date == date:
                return row
        return None


class ScheduleRequest(BaseModel):
    employees: List[Employee]
    settings: ScheduleSettings


class EmptyRosterError(ValueError):
    """Raised when a run is requested without any named employee."""


def validate_roster(employees: List[Employee]) -> List[Employee]:
    """Drop blank-named employees; fail if nobody is left."""
    named = [e for e in employees if e.name.strip()]
    if not named:
        raise EmptyRosterError("Please add at least one employee with a name.")
    return named
