import sys
import os
import yaml
import pandas as pd

# Ensure repository root on sys.path BEFORE importing local packages
repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from rostering.engine import generate_schedule
from rostering.models import Employee, EmptyRosterError, ScheduleSettings, validate_roster
from rostering.output_formatter import generate_enhanced_output


def parse_bool(value) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "y")


def load_settings(path: str) -> ScheduleSettings:
    with open(path) as f:
        cfg = yaml.safe_load(f) or {}
    return ScheduleSettings.model_validate(cfg)


def load_employees(path: str):
    df = pd.read_csv(path, dtype={"id": str})
    employees = []
    for _, r in df.iterrows():
        employees.append(Employee(
            id=str(r["id"]).strip(),
            name="" if pd.isna(r.get("name")) else str(r["name"]),
            preference=(r.get("preference") if isinstance(r.get("preference"), str) else "Neither"),
            desired_shifts=0 if pd.isna(r.get("desired_shifts")) else int(r["desired_shifts"]),
            is_reserve=parse_bool(r.get("is_reserve", False)),
            color=r.get("color") if isinstance(r.get("color"), str) else None,
        ))
    return employees


def main():
    config_path = sys.argv[1] if len(sys.argv) > 1 else "data/sample_config.yml"
    employees_path = sys.argv[2] if len(sys.argv) > 2 else "data/sample_employees.csv"
    if not os.path.exists(config_path):
        raise SystemExit(f"Config not found: {config_path}")
    if not os.path.exists(employees_path):
        raise SystemExit(f"Employees CSV not found: {employees_path}")

    settings = load_settings(config_path)
    try:
        employees = validate_roster(load_employees(employees_path))
    except EmptyRosterError as e:
        raise SystemExit(str(e))

    result = generate_schedule(employees, settings, verbose=True)
    out = generate_enhanced_output(result, employees)

    print("\n=== Roster ===")
    print(out["roster_table"].to_string())
    print("\n=== Per-person counters ===")
    print(out["employee_counters"].to_string(index=False))
    if out["shortfall_message"]:
        print(f"\nWARNING: {out['shortfall_message']}")
    print(f"\nOpen seats: {out['open_seats']}  |  seed: {result.meta.seed}")


if __name__ == "__main__":
    main()
