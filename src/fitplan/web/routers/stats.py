"""Workout statistics routes."""

from fastapi import APIRouter, Request

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/{user_id}")
async def workout_stats(request: Request, user_id: int):
    """Completion, streak and training-time statistics for a user."""
    metrics = await request.app.state.record_service.workout_stats(user_id)
    return metrics.to_dict()
