import pytest
from rostering.models import Employee, Preference, ShiftKind
from rostering.state import EmployeeRecord, SchedulingState
from rostering.weights import (
    WeightModel,
    desired_bias,
    fairness,
    hits_hard_ceiling,
    preference_weight,
    rest_bias,
    spread_bias,
    streak_bias,
)


def record(preference=Preference.NEITHER, desired=10, assigned=0):
    emp = Employee(id="x", name="X", preference=preference, desired_shifts=desired)
    return EmployeeRecord(index=0, employee=emp, assigned=assigned, week_counts=[0] * 5)


def test_preference_weight():
    assert preference_weight(record(Preference.DAY), ShiftKind.DAY) == 1.0
    assert preference_weight(record(Preference.DAY), ShiftKind.NIGHT) == 0.0
    assert preference_weight(record(Preference.NIGHT), ShiftKind.NIGHT) == 1.0
    assert preference_weight(record(Preference.NIGHT), ShiftKind.DAY) == 0.0
    assert preference_weight(record(Preference.NEITHER), ShiftKind.DAY) == 0.8


def test_desired_bias_rewards_remaining_need():
    assert desired_bias(record(desired=0)) == 0.9
    assert desired_bias(record(desired=10, assigned=0)) == pytest.approx(2.8)
    assert desired_bias(record(desired=10, assigned=8)) == pytest.approx(2.0)
    assert desired_bias(record(desired=10, assigned=10)) == 0.5
    assert desired_bias(record(desired=10, assigned=11)) == 0.25


def test_fairness_and_rest():
    assert fairness(record(assigned=0)) == 1.0
    assert fairness(record(assigned=3)) == 0.25
    rec = record()
    rec.worked_days.add(4)
    assert rest_bias(rec, 5) == 0.5
    assert rest_bias(rec, 6) == 1.0


def test_spread_bias_against_weekly_target():
    state = SchedulingState([Employee(id="x", name="X", desired_shifts=10)], 2025, 0)
    rec = state.record("x")  # target 10 / 5 weeks = 2 per week
    assert spread_bias(rec, 1, state, enabled=True) == 1.2
    rec.week_counts[0] = 2
    assert spread_bias(rec, 1, state, enabled=True) == 1.0
    rec.week_counts[0] = 3
    assert spread_bias(rec, 1, state, enabled=True) == 0.7
    assert spread_bias(rec, 1, state, enabled=False) == 1.0
    assert spread_bias(record(desired=0), 1, state, enabled=True) == 1.0


def test_streak_bias():
    rec = record()
    assert streak_bias(rec, 10, max_streak=5) == 1.2
    rec.worked_days.update({8, 9})
    assert streak_bias(rec, 10, max_streak=5) == 1.1
    rec.worked_days.update({5, 6, 7})
    assert streak_bias(rec, 10, max_streak=5) == 0.0


def test_hard_ceiling_zeroes_weight():
    state = SchedulingState([Employee(id="x", name="X", desired_shifts=2)], 2025, 0)
    rec = state.record("x")
    rec.assigned = 2
    model = WeightModel(state, max_streak=5, spread_enabled=True, draw=lambda: 0.5)
    assert hits_hard_ceiling(rec, True)
    assert model.weight(rec, ShiftKind.DAY, 3, under_target_exists=True) == 0.0
    assert model.weight(rec, ShiftKind.DAY, 3, under_target_exists=False) > 0.0


def test_weight_combines_all_factors():
    state = SchedulingState([Employee(id="x", name="X", desired_shifts=10)], 2025, 0)
    model = WeightModel(state, max_streak=5, spread_enabled=True, draw=lambda: 0.5)
    # 0.8 pref * 2.8 desired * 1 fairness * 1 rest * 1.2 spread * 1.2 streak * 1.0 jitter
    assert model.weight(state.record("x"), ShiftKind.DAY, 1, True) == pytest.approx(3.2256)
