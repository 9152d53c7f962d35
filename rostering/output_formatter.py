"""
Tabular views of a generated month: the daily roster, per-person counters
and the demand-vs-supply banner.
"""

import pandas as pd
from typing import Dict, List, Optional
from rostering.models import Employee, ScheduleResult


def generate_enhanced_output(result: ScheduleResult, employees: List[Employee]) -> Dict:
    """Bundle the roster table, counters and shortfall banner for display."""
    return {
        "roster_table": roster_table(result, employees),
        "employee_counters": employee_counters(result, employees),
        "shortfall_message": shortfall_message(result),
        "open_seats": sum(r.day_missing + r.night_missing for r in result.days),
    }


def roster_table(result: ScheduleResult, employees: List[Employee]) -> pd.DataFrame:
    """One row per date with names instead of ids."""
    names = {e.id: e.name for e in employees}

    def label(ids: List[str]) -> str:
        return ", ".join(names.get(i, i) for i in ids) or "Unassigned"

    rows = []
    for r in result.days:
        rows.append({
            "Date": r.date,
            "Day Shift": label(r.day_ids),
            "Night Shift": label(r.night_ids),
            "Day Missing": r.day_missing,
            "Night Missing": r.night_missing,
            "Day Issues": "; ".join(r.day_issues),
            "Night Issues": "; ".join(r.night_issues),
        })
    columns = ["Date", "Day Shift", "Night Shift", "Day Missing", "Night Missing", "Day Issues", "Night Issues"]
    return pd.DataFrame(rows, columns=columns).set_index("Date")


def counter_rows(result: ScheduleResult, employees: List[Employee]) -> List[Dict]:
    """Per-person day/night/total counts read from the table, so manual edits count too."""
    counts = {e.id: {"day": 0, "night": 0} for e in employees}
    for r in result.days:
        for i in r.day_ids:
            if i in counts:
                counts[i]["day"] += 1
        for i in r.night_ids:
            if i in counts:
                counts[i]["night"] += 1

    rows = []
    for e in employees:
        c = counts[e.id]
        total = c["day"] + c["night"]
        rows.append({
            "id": e.id,
            "name": e.name,
            "desired": e.desired_shifts,
            "day": c["day"],
            "night": c["night"],
            "total": total,
            "delta": total - e.desired_shifts,
            "reserve": e.is_reserve,
        })
    return rows


def employee_counters(result: ScheduleResult, employees: List[Employee]) -> pd.DataFrame:
    rows = counter_rows(result, employees)
    columns = ["id", "name", "desired", "day", "night", "total", "delta", "reserve"]
    return pd.DataFrame(rows, columns=columns)


def shortfall_message(result: ScheduleResult) -> Optional[str]:
    """Explain blanks when the primaries want fewer shifts than the month needs."""
    meta = result.meta
    need, want = meta.total_demand, meta.sum_desired_primaries
    if not need or want >= need:
        return None
    msg = (f"Total demand this month is {need} shifts, but primaries' desired sum is {want}. "
           "Normal generation leaves blanks by design. Use manual assign or enable hard fill to override.")
    if not meta.allow_reserves_in_normal:
        msg += " (Auto-reserves are OFF.)"
    return msg
