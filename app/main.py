from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import List, Optional
from rostering.engine import generate_schedule
from rostering.models import EmptyRosterError, ScheduleRequest, ScheduleResult, validate_roster
from rostering.output_formatter import counter_rows, shortfall_message

app = FastAPI(title="Monthly Shift Scheduler")


class CounterRow(BaseModel):
    id: str
    name: str
    desired: int
    day: int
    night: int
    total: int
    delta: int
    reserve: bool


class GenerateResponse(BaseModel):
    success: bool
    message: str
    schedule: ScheduleResult
    counters: List[CounterRow] = []
    shortfall: Optional[str] = None


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/generate", response_model=GenerateResponse)
def generate(req: ScheduleRequest):
    """Generate one month. Each request is an independent run."""
    try:
        employees = validate_roster(req.employees)
    except EmptyRosterError as e:
        raise HTTPException(status_code=422, detail={"success": False, "message": str(e)})

    result = generate_schedule(employees, req.settings)
    open_seats = sum(r.day_missing + r.night_missing for r in result.days)
    counters = counter_rows(result, employees)
    return GenerateResponse(
        success=True,
        message=f"Generated {len(result.days)} days, {open_seats} open seats",
        schedule=result,
        counters=counters,
        shortfall=shortfall_message(result),
    )
