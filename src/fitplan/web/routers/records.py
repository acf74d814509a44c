"""Workout record routes."""

from datetime import date

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...services import RecordService

router = APIRouter(prefix="/records", tags=["records"])


class RecordIn(BaseModel):
    user_id: int
    exercise_id: int
    completed_sets: int
    completed_reps: int = 0
    notes: str = ""


def get_record_service(request: Request) -> RecordService:
    """Get the shared record service from app state."""
    return request.app.state.record_service


@router.post("")
async def record_workout(request: Request, body: RecordIn):
    """Record completed sets for today.

    Posting the same set count twice on one day removes the record, in
    which case ``record`` is null.
    """
    record = await get_record_service(request).record_workout(
        body.user_id,
        body.exercise_id,
        body.completed_sets,
        completed_reps=body.completed_reps,
        notes=body.notes,
    )
    return {"record": {"id": record.id, **record.to_dict()} if record else None}


@router.get("")
async def monthly_records(
    request: Request, user_id: int, year: int | None = None, month: int | None = None
):
    """List a user's records for one month (default: this month)."""
    today = date.today()
    year = year or today.year
    month = month or today.month
    records = await get_record_service(request).monthly_records(user_id, year, month)
    return {
        "year": year,
        "month": month,
        "records": [{"id": r.id, **r.to_dict()} for r in records],
    }
