"""Profile routes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...db.repositories import UserProfileRepository
from ...models.exercises import FocusArea
from ...models.user_profile import (
    DifficultyPreference,
    FitnessGoal,
    Gender,
    TrainingPreferences,
    UserProfile,
)

router = APIRouter(prefix="/profile", tags=["profile"])


class PreferencesIn(BaseModel):
    difficulty: DifficultyPreference | None = None
    focus_areas: list[FocusArea] = Field(default_factory=list)
    time_per_session: int | None = Field(default=None, ge=1)

    def to_preferences(self) -> TrainingPreferences:
        return TrainingPreferences(
            difficulty=self.difficulty,
            focus_areas=list(self.focus_areas),
            time_per_session=self.time_per_session,
        )


class ProfileIn(BaseModel):
    id: int | None = None
    name: str = Field(min_length=1)
    age: int | None = Field(default=None, ge=0)
    gender: Gender | None = None
    height: float | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)
    fitness_goal: FitnessGoal | None = None
    training_preferences: PreferencesIn | None = None


def _profile_json(profile: UserProfile) -> dict:
    return {
        "id": profile.id,
        **profile.to_dict(),
        "bmi": profile.bmi,
        "bmi_category": profile.bmi_category,
        "created_at": profile.created_at.isoformat() if profile.created_at else None,
        "updated_at": profile.updated_at.isoformat() if profile.updated_at else None,
    }


@router.get("")
async def get_profile(request: Request, user_id: int | None = None):
    """Get a profile by ID, or the most recent one."""
    repo = UserProfileRepository(request.app.state.db_path)
    profile = await repo.get(user_id) if user_id else await repo.get_latest()
    if profile is None:
        return JSONResponse(status_code=404, content={"error": "Profile not found"})
    return _profile_json(profile)


@router.post("")
async def save_profile(request: Request, body: ProfileIn):
    """Create a profile, or update it when an ID is given."""
    repo = UserProfileRepository(request.app.state.db_path)

    profile = UserProfile(
        id=body.id,
        name=body.name,
        age=body.age,
        gender=body.gender,
        height=body.height,
        weight=body.weight,
        fitness_goal=body.fitness_goal,
        training_preferences=(
            body.training_preferences.to_preferences() if body.training_preferences else None
        ),
    )

    if profile.id is not None:
        if await repo.get(profile.id) is None:
            return JSONResponse(status_code=404, content={"error": "Profile not found"})
        await repo.update(profile)
    else:
        profile.id = await repo.create(profile)

    return _profile_json(await repo.get(profile.id))
