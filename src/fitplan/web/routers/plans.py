"""Workout plan routes."""

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...services import PlanService
from .profile import PreferencesIn

router = APIRouter(prefix="/plans", tags=["plans"])


class GenerateIn(BaseModel):
    user_id: int
    name: str | None = None
    description: str | None = None
    frequency: int | None = None
    preferences: PreferencesIn | None = None


class RegenerateIn(BaseModel):
    user_id: int
    preferences: PreferencesIn | None = None


class FrequencyIn(BaseModel):
    frequency: int


def get_plan_service(request: Request) -> PlanService:
    """Get the shared plan service from app state."""
    return request.app.state.plan_service


@router.get("/current")
async def current_plan(request: Request, user_id: int):
    """Get a user's current plan."""
    plan = await get_plan_service(request).get_current_plan(user_id)
    if plan is None:
        return JSONResponse(status_code=404, content={"error": "No plan for this user"})
    return {"id": plan.id, **plan.to_dict()}


@router.post("", status_code=201)
async def generate_plan(request: Request, body: GenerateIn):
    """Generate and store a new plan."""
    plan = await get_plan_service(request).create_plan(
        body.user_id,
        name=body.name,
        description=body.description,
        frequency=body.frequency,
        preferences=body.preferences.to_preferences() if body.preferences else None,
    )
    return {"id": plan.id, **plan.to_dict()}


@router.post("/regenerate")
async def regenerate_plan(request: Request, body: RegenerateIn):
    """Replace a user's current plan with a freshly generated one."""
    plan = await get_plan_service(request).regenerate_plan(
        body.user_id,
        body.preferences.to_preferences() if body.preferences else None,
    )
    return {"id": plan.id, **plan.to_dict()}


@router.delete("/{plan_id}")
async def delete_plan(request: Request, plan_id: int):
    """Delete a plan with its exercises and records."""
    await get_plan_service(request).delete_plan(plan_id)
    return {"status": "deleted", "plan_id": plan_id}


@router.patch("/{plan_id}/frequency")
async def update_frequency(request: Request, plan_id: int, body: FrequencyIn):
    """Change a plan's training days per week."""
    await get_plan_service(request).update_frequency(plan_id, body.frequency)
    return {"plan_id": plan_id, "frequency": body.frequency}


@router.post("/{plan_id}/exercises", status_code=201)
async def add_exercise(request: Request, plan_id: int, body: dict = Body(...)):
    """Add a user-defined exercise to a plan.

    The body is passed to the custom exercise validator as-is so that
    out-of-range values are reported with its messages.
    """
    exercise = await get_plan_service(request).add_custom_exercise(plan_id, body)
    return {"id": exercise.id, "plan_id": plan_id, **exercise.to_dict()}
