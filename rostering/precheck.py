from typing import List

from rostering.models import Employee, RunMetadata, ScheduleSettings
from rostering.utils import days_in_month


def demand_supply_precheck(employees: List[Employee], settings: ScheduleSettings) -> RunMetadata:
    """Compare month-wide demand with the primaries' desired shifts.

    Reserves only join the strict pass when auto-reserves is on and the
    primaries alone already want at least as many shifts as there are seats.
    """
    total_demand = days_in_month(settings.year, settings.month) * (
        max(0, settings.day_slots) + max(0, settings.night_slots)
    )
    sum_desired = sum(max(0, e.desired_shifts) for e in employees if not e.is_reserve)
    return RunMetadata(
        total_demand=total_demand,
        sum_desired_primaries=sum_desired,
        allow_reserves_in_normal=settings.use_reserves_auto and sum_desired >= total_demand,
        seed=settings.seed,
    )
