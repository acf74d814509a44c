"""Validation and normalization of user-submitted exercises."""

import logging

from ..errors import ValidationError
from ..models.exercises import ExerciseCategory, ExerciseType, GeneratedExercise

logger = logging.getLogger(__name__)

SETS_RANGE = (1, 6)
REPS_RANGE = (1, 50)
REST_RANGE = (30, 180)
DIFFICULTY_RANGE = (1, 3)

EXERCISE_NAME_REQUIRED = "Exercise name must not be empty"
TARGET_MUSCLES_REQUIRED = "Select at least one target muscle group"
INVALID_SETS = "Sets must be between 1 and 6"
INVALID_REPS = "Reps per set must be between 1 and 50"
INVALID_REST = "Rest time must be between 30 and 180 seconds"
INVALID_DIFFICULTY = "Difficulty must be level 1, 2 or 3"
INVALID_EXERCISE_TYPE = "Exercise type must be warmup, strength or cardio"


def _in_range(value, bounds: tuple[int, int]) -> bool:
    low, high = bounds
    return isinstance(value, int) and not isinstance(value, bool) and low <= value <= high


def _is_muscle_list(value) -> bool:
    return (
        isinstance(value, list | tuple)
        and len(value) > 0
        and all(isinstance(m, str) and m.strip() for m in value)
    )


def validate_custom_exercise(data: dict) -> None:
    """Validate a custom exercise submission.

    Raises:
        ValidationError: With a message naming the first violated constraint
    """
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(EXERCISE_NAME_REQUIRED, details={"field": "name"})

    if not _is_muscle_list(data.get("target_muscles")):
        raise ValidationError(TARGET_MUSCLES_REQUIRED, details={"field": "target_muscles"})

    if not _in_range(data.get("sets"), SETS_RANGE):
        raise ValidationError(INVALID_SETS, details={"field": "sets"})

    if not _in_range(data.get("reps"), REPS_RANGE):
        raise ValidationError(INVALID_REPS, details={"field": "reps"})

    if not _in_range(data.get("rest_time"), REST_RANGE):
        raise ValidationError(INVALID_REST, details={"field": "rest_time"})

    if not _in_range(data.get("difficulty"), DIFFICULTY_RANGE):
        raise ValidationError(INVALID_DIFFICULTY, details={"field": "difficulty"})

    logger.debug("Custom exercise %r passed validation", name.strip())


def format_custom_exercise(data: dict) -> GeneratedExercise:
    """Validate a custom exercise and turn it into a plan exercise.

    The exercise type defaults to strength. The category defaults to the
    one matching the type, with warm-ups counting as cardio.
    """
    validate_custom_exercise(data)

    try:
        exercise_type = ExerciseType(data.get("exercise_type") or ExerciseType.STRENGTH)
    except ValueError:
        raise ValidationError(
            INVALID_EXERCISE_TYPE, details={"field": "exercise_type"}
        ) from None

    category = data.get("category")
    if category:
        try:
            category = ExerciseCategory(category)
        except ValueError:
            raise ValidationError(
                f"Unknown exercise category: {category!r}", details={"field": "category"}
            ) from None
    elif exercise_type is ExerciseType.STRENGTH:
        category = ExerciseCategory.STRENGTH
    else:
        category = ExerciseCategory.CARDIO

    return GeneratedExercise(
        name=data["name"].strip(),
        exercise_type=exercise_type,
        category=category,
        sets=data["sets"],
        reps=data["reps"],
        rest_time=data["rest_time"],
        difficulty=data["difficulty"],
        target_muscles=[m.strip() for m in data["target_muscles"]],
        equipment=list(data.get("equipment") or []),
        notes=(data.get("notes") or "").strip(),
    )
