"""Plan lifecycle: generate, regenerate, edit and delete workout plans."""

import asyncio
import logging
import random
from contextlib import asynccontextmanager
from pathlib import Path

from ..config import get_settings
from ..db.repositories import (
    ExerciseRepository,
    UserProfileRepository,
    WorkoutPlanRepository,
)
from ..errors import PersistenceError, ValidationError
from ..generators.plan_generator import assemble_plan
from ..models.exercises import GeneratedExercise
from ..models.plan import WorkoutPlan
from ..models.user_profile import (
    ExperienceLevel,
    FitnessGoal,
    TrainingPreferences,
    UserProfile,
)
from .custom_exercise import format_custom_exercise

logger = logging.getLogger(__name__)

MIN_FREQUENCY = 1
MAX_FREQUENCY = 7
INVALID_FREQUENCY = "Training frequency must be between 1 and 7 days"

PLAN_NAMES = {
    FitnessGoal.MUSCLE_GAIN: "Muscle Gain Plan",
    FitnessGoal.FAT_LOSS: "Fat Loss Plan",
}


def validate_frequency(frequency: int) -> None:
    """Raise ValidationError unless frequency is 1-7 days per week."""
    if not isinstance(frequency, int) or not MIN_FREQUENCY <= frequency <= MAX_FREQUENCY:
        raise ValidationError(INVALID_FREQUENCY, details={"frequency": frequency})


def default_plan_name(profile: UserProfile) -> str:
    return PLAN_NAMES.get(profile.fitness_goal, "Workout Plan")


def default_plan_description(profile: UserProfile) -> str:
    if profile.fitness_goal is None:
        return "Workout plan tailored to your training preferences"
    return f"{profile.fitness_goal.label} plan tailored to your training preferences"


class PlanService:
    """Creates and maintains each user's current workout plan.

    Each user has one active plan. Creating or regenerating a plan
    replaces it, serialized per user so two replacements never interleave.
    The locks only cover calls through one PlanService instance in one
    process; across processes the single replace transaction is what keeps
    a user at one plan.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        rng: random.Random | None = None,
        experience: ExperienceLevel = ExperienceLevel.INTERMEDIATE,
    ):
        self.profiles = UserProfileRepository(db_path)
        self.exercises = ExerciseRepository(db_path)
        self.plans = WorkoutPlanRepository(db_path)
        self.rng = rng
        self.experience = experience
        # user_id -> (lock, number of callers holding or waiting on it)
        self._user_locks: dict[int, tuple[asyncio.Lock, int]] = {}

    @asynccontextmanager
    async def _user_lock(self, user_id: int):
        """Serialize plan replacement for one user; drop the lock once idle."""
        lock, users = self._user_locks.get(user_id, (asyncio.Lock(), 0))
        self._user_locks[user_id] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._user_locks[user_id]
            if users == 1:
                del self._user_locks[user_id]
            else:
                self._user_locks[user_id] = (lock, users - 1)

    async def _get_profile(self, user_id: int) -> UserProfile:
        profile = await self.profiles.get(user_id)
        if profile is None:
            raise PersistenceError("User profile not found", details={"user_id": user_id})
        return profile

    async def _generate(
        self, profile: UserProfile, preferences: TrainingPreferences | None
    ) -> list[GeneratedExercise]:
        catalog = await self.exercises.list_all()
        exercises = assemble_plan(
            profile, catalog, preferences, rng=self.rng, experience=self.experience
        )
        if not exercises:
            raise ValidationError(
                "Plan generation produced no exercises", details={"user_id": profile.id}
            )
        return exercises

    async def _save(
        self,
        profile: UserProfile,
        exercises: list[GeneratedExercise],
        frequency: int,
        preferences: TrainingPreferences | None,
        name: str | None = None,
        description: str | None = None,
    ) -> WorkoutPlan:
        plan = WorkoutPlan(
            user_id=profile.id,
            name=name or default_plan_name(profile),
            description=description or default_plan_description(profile),
            frequency=frequency,
            preferences=preferences,
        )
        await self.plans.replace_for_user(plan, exercises)
        plan.exercises = exercises
        self._log_plan(plan)
        return plan

    async def create_plan(
        self,
        user_id: int,
        name: str | None = None,
        description: str | None = None,
        frequency: int | None = None,
        preferences: TrainingPreferences | None = None,
    ) -> WorkoutPlan:
        """Generate and store a new plan for a user.

        A user has one active plan, so an existing plan is replaced. If
        generation or the write fails, the existing plan is kept.

        Raises:
            ValidationError: Bad frequency, incomplete profile, empty generation
            DomainEmptyError: The catalog has no usable exercises
            PersistenceError: Missing profile or failed write
        """
        if frequency is None:
            frequency = get_settings().default_frequency
        validate_frequency(frequency)

        async with self._user_lock(user_id):
            profile = await self._get_profile(user_id)
            if preferences is None:
                preferences = profile.training_preferences
            exercises = await self._generate(profile, preferences)
            return await self._save(
                profile, exercises, frequency, preferences, name, description
            )

    async def regenerate_plan(
        self, user_id: int, preferences: TrainingPreferences | None = None
    ) -> WorkoutPlan:
        """Replace the user's current plan, keeping its frequency.

        The new exercises are generated first and the old plan is swapped
        out in one transaction, so a failed generation or write leaves the
        current plan and its records in place.
        """
        async with self._user_lock(user_id):
            profile = await self._get_profile(user_id)
            if preferences is None:
                preferences = profile.training_preferences

            current = await self.plans.get_current_for_user(user_id)
            frequency = current.frequency if current else get_settings().default_frequency

            exercises = await self._generate(profile, preferences)
            return await self._save(profile, exercises, frequency, preferences)

    async def get_current_plan(self, user_id: int) -> WorkoutPlan | None:
        """Get the user's active plan."""
        return await self.plans.get_current_for_user(user_id)

    async def delete_plan(self, plan_id: int) -> None:
        """Delete a plan with its exercises and records."""
        if not await self.plans.delete(plan_id):
            raise PersistenceError("Workout plan not found", details={"plan_id": plan_id})
        logger.info("Deleted plan %s", plan_id)

    async def update_frequency(self, plan_id: int, frequency: int) -> None:
        """Change how many days per week a plan is trained."""
        validate_frequency(frequency)
        await self.plans.update_frequency(plan_id, frequency)
        logger.info("Plan %s frequency set to %d/week", plan_id, frequency)

    async def add_custom_exercise(self, plan_id: int, data: dict) -> GeneratedExercise:
        """Validate a user-submitted exercise and append it to a plan."""
        exercise = format_custom_exercise(data)
        await self.plans.add_exercise(plan_id, exercise)
        logger.info("Added custom exercise %r to plan %s", exercise.name, plan_id)
        return exercise

    def _log_plan(self, plan: WorkoutPlan) -> None:
        logger.info(
            "Created plan %s (%s, %d/week) with %d exercises",
            plan.id,
            plan.name,
            plan.frequency,
            len(plan.exercises),
        )
        for exercise in plan.exercises:
            logger.debug(
                "  %s [%s] %s",
                exercise.name,
                exercise.exercise_type.value,
                exercise.display_params,
            )
