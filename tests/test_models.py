import pytest
from pydantic import ValidationError
from rostering.models import Employee, EmptyRosterError, ScheduleSettings, ShiftKind, validate_roster


def test_settings_defaults():
    s = ScheduleSettings(year=2025, month=0)
    assert s.weekly_cap == 5
    assert s.max_consecutive_days == 5
    assert s.spread_enabled is True
    assert s.use_reserves_auto is False
    assert s.seed is None


def test_numeric_inputs_are_clamped():
    s = ScheduleSettings(year=2025, month=14, day_slots=-2, night_slots="3", weekly_cap=0,
                         max_consecutive_days=12, seed=-1)
    assert s.month == 11
    assert s.day_slots == 0
    assert s.night_slots == 3
    assert s.weekly_cap == 1
    assert s.max_consecutive_days == 7
    assert s.seed == 4294967295
    assert Employee(id="a", name="A", desired_shifts=-4).desired_shifts == 0


def test_unknown_preference_is_rejected():
    with pytest.raises(ValidationError):
        Employee(id="a", name="A", preference="Evening")


def test_validate_roster_drops_blank_names():
    employees = [Employee(id="a", name="  "), Employee(id="b", name="Bea")]
    assert [e.id for e in validate_roster(employees)] == ["b"]
    with pytest.raises(EmptyRosterError):
        validate_roster([Employee(id="a", name="")])


def test_shift_kind_field_names():
    assert ShiftKind.DAY.other is ShiftKind.NIGHT
    assert ShiftKind.NIGHT.ids_field == "night_ids"
    assert ShiftKind.DAY.missing_field == "day_missing"


def test_year_is_clamped_to_calendar_range():
    assert ScheduleSettings(year=0, month=0).year == 1
    assert ScheduleSettings(year=10000, month=0).year == 9999
    assert ScheduleSettings(year=2025, month=0).year == 2025
