from rostering.models import AssignmentRow, Employee, RunMetadata, ScheduleResult, ShiftKind
from rostering.output_formatter import (
    employee_counters,
    generate_enhanced_output,
    roster_table,
    shortfall_message,
)
from rostering.overrides import assign_manual

EMPLOYEES = [
    Employee(id="a", name="Alice", desired_shifts=2),
    Employee(id="b", name="Ben", desired_shifts=1, is_reserve=True),
]


def sample_result(**meta):
    return ScheduleResult(
        days=[
            AssignmentRow(date="2025-01-01", day_ids=["a"], night_missing=1,
                          night_issues=["Insufficient eligible staff: already on other shift today (1)"]),
            AssignmentRow(date="2025-01-02", night_ids=["a"], day_missing=1),
        ],
        meta=RunMetadata(**meta),
    )


def test_roster_table_uses_names():
    df = roster_table(sample_result(), EMPLOYEES)
    assert list(df.index) == ["2025-01-01", "2025-01-02"]
    assert df.loc["2025-01-01", "Day Shift"] == "Alice"
    assert df.loc["2025-01-01", "Night Shift"] == "Unassigned"
    assert df.loc["2025-01-01", "Night Missing"] == 1
    assert "already on other shift" in df.loc["2025-01-01", "Night Issues"]


def test_counters_include_manual_edits():
    result = sample_result()
    assign_manual(result, "2025-01-02", ShiftKind.DAY, "b")
    df = employee_counters(result, EMPLOYEES).set_index("id")
    assert df.loc["a", "day"] == 1
    assert df.loc["a", "night"] == 1
    assert df.loc["a", "delta"] == 0
    assert df.loc["b", "total"] == 1
    assert bool(df.loc["b", "reserve"]) is True


def test_shortfall_message():
    assert shortfall_message(sample_result(total_demand=62, sum_desired_primaries=62)) is None
    assert shortfall_message(sample_result(total_demand=0)) is None
    msg = shortfall_message(sample_result(total_demand=62, sum_desired_primaries=30))
    assert "62" in msg and "30" in msg
    assert msg.endswith("(Auto-reserves are OFF.)")


def test_enhanced_output_bundle():
    out = generate_enhanced_output(sample_result(total_demand=4, sum_desired_primaries=2), EMPLOYEES)
    assert out["open_seats"] == 2
    assert len(out["roster_table"]) == 2
    assert out["shortfall_message"] is not None
