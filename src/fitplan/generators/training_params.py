"""Training parameter table and session-length scaling.

Base sets, reps and rest come from a static table keyed by goal, the role
an exercise category plays under that goal, difficulty tier and experience
tier. The same category maps to different tables depending on the goal:
strength is the primary work for muscle gain but only support work for
fat loss, and cardio is the warm-up for muscle gain but primary work for
fat loss.
"""

from dataclasses import dataclass
from enum import Enum

from ..errors import ValidationError
from ..models.exercises import ExerciseCategory, ExerciseType
from ..models.user_profile import ExperienceLevel, FitnessGoal
from ..utils.numbers import round_half_up

# Session length the base table is calibrated for
REFERENCE_SESSION_MINUTES = 45
MAX_SCALED_SETS = 6
MIN_SCALED_REST = 30

VALID_DIFFICULTIES = (1, 2, 3)


class TrainingRole(str, Enum):
    """Role an exercise category plays within a goal."""

    PRIMARY = "primary"
    WARMUP = "warmup"
    SUPPORT = "support"


@dataclass(frozen=True)
class TrainingParams:
    """Concrete set/rep/rest prescription."""

    sets: int
    reps: int
    rest_time: int  # seconds


def _p(sets: int, reps: int, rest: int) -> TrainingParams:
    return TrainingParams(sets=sets, reps=reps, rest_time=rest)


B = ExperienceLevel.BEGINNER
I = ExperienceLevel.INTERMEDIATE  # noqa: E741
A = ExperienceLevel.ADVANCED

ROLE_TABLE: dict[tuple[FitnessGoal, ExerciseCategory], TrainingRole] = {
    (FitnessGoal.MUSCLE_GAIN, ExerciseCategory.STRENGTH): TrainingRole.PRIMARY,
    (FitnessGoal.MUSCLE_GAIN, ExerciseCategory.CARDIO): TrainingRole.WARMUP,
    (FitnessGoal.FAT_LOSS, ExerciseCategory.CARDIO): TrainingRole.PRIMARY,
    (FitnessGoal.FAT_LOSS, ExerciseCategory.STRENGTH): TrainingRole.SUPPORT,
}

# Primary work: difficulty -> experience -> params
PRIMARY_PARAMS: dict[FitnessGoal, dict[int, dict[ExperienceLevel, TrainingParams]]] = {
    FitnessGoal.MUSCLE_GAIN: {
        3: {B: _p(3, 8, 120), I: _p(4, 10, 90), A: _p(5, 12, 60)},
        2: {B: _p(3, 6, 120), I: _p(3, 8, 90), A: _p(4, 10, 90)},
        1: {B: _p(2, 6, 120), I: _p(3, 6, 120), A: _p(3, 8, 90)},
    },
    FitnessGoal.FAT_LOSS: {
        3: {B: _p(3, 30, 45), I: _p(4, 30, 30), A: _p(5, 30, 20)},
        2: {B: _p(3, 25, 60), I: _p(3, 30, 45), A: _p(4, 30, 30)},
        1: {B: _p(2, 20, 90), I: _p(3, 20, 60), A: _p(3, 25, 45)},
    },
}

# Warm-up and support work: experience -> params, same at every difficulty
SECONDARY_PARAMS: dict[FitnessGoal, dict[ExperienceLevel, TrainingParams]] = {
    FitnessGoal.MUSCLE_GAIN: {B: _p(2, 20, 60), I: _p(2, 25, 45), A: _p(2, 30, 30)},
    FitnessGoal.FAT_LOSS: {B: _p(2, 12, 60), I: _p(3, 15, 45), A: _p(3, 15, 30)},
}


def _as_category(exercise_type) -> ExerciseCategory:
    """Map an exercise type or category to its catalog category."""
    try:
        value = exercise_type.value if isinstance(exercise_type, Enum) else exercise_type
        if value == ExerciseType.WARMUP.value:
            return ExerciseCategory.CARDIO
        return ExerciseCategory(value)
    except ValueError:
        raise ValidationError(f"Unknown exercise type: {exercise_type!r}") from None


def get_role(exercise_type, goal: FitnessGoal) -> TrainingRole:
    """Look up the role an exercise category plays under a goal."""
    category = _as_category(exercise_type)
    try:
        return ROLE_TABLE[(FitnessGoal(goal), category)]
    except ValueError:
        raise ValidationError(f"Unknown fitness goal: {goal!r}") from None


def scale_for_session(params: TrainingParams, session_minutes: float) -> TrainingParams:
    """Scale sets and rest to a session length relative to the reference.

    Sets are capped at 6 (and never drop below 1), rest is floored at 30
    seconds, reps are unchanged.
    """
    factor = session_minutes / REFERENCE_SESSION_MINUTES
    sets = min(MAX_SCALED_SETS, round_half_up(params.sets * factor))
    rest = max(MIN_SCALED_REST, round_half_up(params.rest_time * factor))
    return TrainingParams(sets=max(1, sets), reps=params.reps, rest_time=rest)


def get_training_params(
    exercise_type,
    goal: FitnessGoal,
    difficulty: int,
    session_minutes: float | None = None,
    experience: ExperienceLevel = ExperienceLevel.INTERMEDIATE,
) -> TrainingParams:
    """Get the set/rep/rest prescription for an exercise.

    Args:
        exercise_type: "strength" or "cardio" (a warm-up counts as cardio)
        goal: The user's fitness goal
        difficulty: Difficulty tier, 1-3
        session_minutes: Optional session length to scale against 45 minutes
        experience: Experience tier within the difficulty

    Returns:
        TrainingParams for the exercise

    Raises:
        ValidationError: If any argument is outside its domain
    """
    if difficulty not in VALID_DIFFICULTIES or isinstance(difficulty, bool):
        raise ValidationError(f"Difficulty must be 1, 2 or 3, got {difficulty!r}")
    try:
        experience = ExperienceLevel(experience)
    except ValueError:
        raise ValidationError(f"Unknown experience level: {experience!r}") from None

    role = get_role(exercise_type, goal)
    goal = FitnessGoal(goal)

    if role is TrainingRole.PRIMARY:
        params = PRIMARY_PARAMS[goal][difficulty][experience]
    else:
        params = SECONDARY_PARAMS[goal][experience]

    if session_minutes:
        if session_minutes < 0:
            raise ValidationError("Session length must be positive")
        params = scale_for_session(params, session_minutes)

    return params
