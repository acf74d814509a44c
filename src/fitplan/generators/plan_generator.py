"""Plan assembly: turn a profile and catalog into plan exercises."""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass

from ..errors import MISSING_PROFILE_FIELDS, ValidationError
from ..models.exercises import (
    ExerciseCategory,
    ExerciseTemplate,
    ExerciseType,
    GeneratedExercise,
)
from ..models.user_profile import (
    ExperienceLevel,
    FitnessGoal,
    TrainingPreferences,
    UserProfile,
)
from .difficulty import resolve_difficulty
from .exercise_pool import filter_candidates, shuffled
from .training_params import get_training_params

logger = logging.getLogger(__name__)

WARMUP_NOTE_PREFIX = "Warm-up: "


@dataclass(frozen=True)
class Slot:
    """How many exercises of a category fill a given plan role."""

    category: ExerciseCategory
    exercise_type: ExerciseType
    count: int


# Plan shape per goal. Slots are filled in order from the ranked candidates.
PLAN_SLOTS: dict[FitnessGoal, list[Slot]] = {
    FitnessGoal.MUSCLE_GAIN: [
        Slot(ExerciseCategory.CARDIO, ExerciseType.WARMUP, 1),
        Slot(ExerciseCategory.STRENGTH, ExerciseType.STRENGTH, 4),
    ],
    FitnessGoal.FAT_LOSS: [
        Slot(ExerciseCategory.CARDIO, ExerciseType.CARDIO, 3),
        Slot(ExerciseCategory.STRENGTH, ExerciseType.STRENGTH, 2),
    ],
}


def _build_exercise(
    template: ExerciseTemplate,
    slot: Slot,
    goal: FitnessGoal,
    difficulty: int,
    session_minutes: int | None,
    experience: ExperienceLevel,
) -> GeneratedExercise:
    params = get_training_params(
        slot.category, goal, difficulty, session_minutes, experience
    )
    notes = template.notes
    if slot.exercise_type is ExerciseType.WARMUP:
        notes = WARMUP_NOTE_PREFIX + (template.notes or template.description)

    return GeneratedExercise(
        name=template.name,
        exercise_type=slot.exercise_type,
        category=slot.category,
        sets=params.sets,
        reps=params.reps,
        rest_time=params.rest_time,
        difficulty=template.difficulty,
        target_muscles=list(template.target_muscles),
        equipment=list(template.equipment),
        notes=notes,
    )


def assemble_plan(
    profile: UserProfile,
    catalog: Sequence[ExerciseTemplate],
    preferences: TrainingPreferences | None = None,
    rng: random.Random | None = None,
    experience: ExperienceLevel = ExperienceLevel.INTERMEDIATE,
) -> list[GeneratedExercise]:
    """Generate the exercises for a new plan.

    Muscle gain plans get one cardio warm-up and up to four strength
    exercises; fat loss plans get up to three cardio and two strength
    exercises. Smaller pools yield fewer exercises rather than an error,
    and a category with no candidates is left out.

    Args:
        profile: User profile; age and fitness_goal are required
        catalog: Snapshot of the exercise catalog
        preferences: Training preferences, defaults to the profile's own
        rng: Random source for shuffling (module random if None)
        experience: Experience tier for the parameter table

    Returns:
        Plan exercises in randomized order

    Raises:
        ValidationError: If the profile lacks age or fitness goal
        DomainEmptyError: If the catalog has no usable exercise
    """
    if profile.age is None or not profile.fitness_goal:
        raise ValidationError(
            MISSING_PROFILE_FIELDS,
            details={"age": profile.age, "fitness_goal": profile.fitness_goal},
        )

    goal = FitnessGoal(profile.fitness_goal)
    if preferences is None:
        preferences = profile.training_preferences

    difficulty = resolve_difficulty(profile.age, preferences)
    focus_areas = preferences.focus_areas if preferences else None
    session_minutes = preferences.time_per_session if preferences else None

    logger.info(
        "Generating %s plan for user %s at difficulty %d",
        goal.value,
        profile.id,
        difficulty,
    )

    candidates = filter_candidates(catalog, difficulty, focus_areas, rng)
    by_category: dict[ExerciseCategory, list[ExerciseTemplate]] = {
        category: [c for c in candidates if c.category == category]
        for category in ExerciseCategory
    }

    exercises: list[GeneratedExercise] = []
    for slot in PLAN_SLOTS[goal]:
        pool = by_category[slot.category]
        selected = pool[: slot.count]
        if len(selected) < slot.count:
            logger.debug(
                "Only %d of %d %s candidates for %s slot",
                len(selected),
                slot.count,
                slot.category.value,
                slot.exercise_type.value,
            )
        # Consume so a later slot of the same category never repeats an exercise
        by_category[slot.category] = pool[slot.count :]
        exercises.extend(
            _build_exercise(t, slot, goal, difficulty, session_minutes, experience)
            for t in selected
        )

    logger.info("Generated %d exercises for user %s", len(exercises), profile.id)
    return shuffled(exercises, rng)
