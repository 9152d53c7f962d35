"""
Manual edits on a generated schedule. These only touch the output table:
streak and fairness counters are not recomputed.
"""

from typing import List

from rostering.models import Employee, ScheduleResult, ShiftKind


def assign_manual(result: ScheduleResult, date: str, shift: ShiftKind, employee_id: str) -> bool:
    """Put an employee on a shift; no-op if they already work that date."""
    row = result.row_for(date)
    if row is None:
        return False
    shift = ShiftKind(shift)
    if employee_id in row.ids_for(shift.other) or employee_id in row.ids_for(shift):
        return False
    row.ids_for(shift).append(employee_id)
    setattr(row, shift.missing_field, max(0, row.missing_for(shift) - 1))
    return True


def remove_manual(result: ScheduleResult, date: str, shift: ShiftKind, employee_id: str) -> bool:
    row = result.row_for(date)
    if row is None:
        return False
    shift = ShiftKind(shift)
    ids = row.ids_for(shift)
    if employee_id not in ids:
        return False
    ids.remove(employee_id)
    setattr(row, shift.missing_field, row.missing_for(shift) + 1)
    return True


def auto_fill_with_reserve(result: ScheduleResult, date: str, shift: ShiftKind,
                           employees: List[Employee]) -> bool:
    """Assign the first reserve on the roster to the given shift."""
    reserves = [e for e in employees if e.is_reserve]
    if not reserves:
        return False
    return assign_manual(result, date, shift, reserves[0].id)
