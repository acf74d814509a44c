"""Training metrics: per-exercise numbers, streaks and plan statistics.

Metric functions feed display code, so the per-exercise calculator never
raises on bad input. An exercise whose parameters fail validation gets an
all-zero TrainingData and a logged warning.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta

from ..models.exercises import ExerciseType, GeneratedExercise
from ..models.progress import StreakStats, TrainingData, WorkoutMetrics, WorkoutRecord
from ..utils.numbers import clamp, round_half_up, round_tenth

logger = logging.getLogger(__name__)

SECONDS_PER_REP = 3
DEFAULT_BODY_WEIGHT = 70.0  # kg

# Per difficulty tier: (max sets, max reps)
DIFFICULTY_LIMITS: dict[int, tuple[int, int]] = {
    1: (4, 12),
    2: (5, 15),
    3: (6, 20),
}

INTENSITY_MULTIPLIERS: dict[ExerciseType, float] = {
    ExerciseType.CARDIO: 1.2,
    ExerciseType.STRENGTH: 1.1,
    ExerciseType.WARMUP: 1.0,
}

BASE_MET: dict[ExerciseType, float] = {
    ExerciseType.CARDIO: 5.0,
    ExerciseType.STRENGTH: 3.5,
    ExerciseType.WARMUP: 2.5,
}


def calculate_completion_rate(total: int, completed: int) -> int:
    """Percentage of total completed, clamped to 0-100."""
    if total <= 0:
        return 0
    return clamp(round_half_up(completed / total * 100), 0, 100)


def calculate_training_volume(sets: int, reps: int, weight: float = 0) -> float:
    """Total volume; bodyweight work counts weight as 1."""
    return max(0, sets * reps * (weight or 1))


def calculate_training_duration(
    sets: int, reps: int, rest_time: int, seconds_per_rep: int = SECONDS_PER_REP
) -> int:
    """Estimated seconds for the given sets, with no rest after the last one."""
    sets = max(0, sets)
    return sets * reps * seconds_per_rep + max(0, sets - 1) * rest_time


def estimate_training_intensity(
    exercise_type: ExerciseType, difficulty: int, completion_rate: float
) -> float:
    """Intensity score scaled by difficulty, exercise type and completion."""
    multiplier = INTENSITY_MULTIPLIERS[ExerciseType(exercise_type)]
    completion = clamp(completion_rate / 100, 0, 1)
    return round_tenth(difficulty * 2 * multiplier * completion)


def estimate_calories_burned(
    exercise_type: ExerciseType,
    duration: int,
    intensity: float,
    weight: float | None = None,
) -> int:
    """Calories from MET x body weight (kg) x hours, with MET scaled by intensity."""
    if not weight:
        weight = DEFAULT_BODY_WEIGHT
    met = BASE_MET[ExerciseType(exercise_type)] * (intensity / 5)
    return round_half_up(met * weight * (duration / 3600))


def validate_training_params(sets: int, reps: int, rest_time: int, difficulty: int) -> bool:
    """Check parameters against basic bounds and the difficulty ceilings."""
    if sets <= 0 or reps <= 0 or rest_time < 0:
        logger.warning(
            "Invalid training parameters: sets=%s reps=%s rest_time=%s",
            sets,
            reps,
            rest_time,
        )
        return False

    limits = DIFFICULTY_LIMITS.get(difficulty)
    if limits is None:
        logger.warning("Invalid difficulty %r", difficulty)
        return False

    max_sets, max_reps = limits
    if sets > max_sets or reps > max_reps:
        logger.warning(
            "Training parameters exceed difficulty %d limits: "
            "sets=%d (max %d) reps=%d (max %d)",
            difficulty,
            sets,
            max_sets,
            reps,
            max_reps,
        )
        return False

    return True


def calculate_training_data(
    exercise: GeneratedExercise,
    completed_sets: int,
    user_weight: float | None = None,
) -> TrainingData:
    """Compute duration, intensity and calories for a completed exercise.

    Args:
        exercise: Anything with exercise_type, difficulty, sets, reps, rest_time
        completed_sets: Sets the user finished
        user_weight: Body weight in kg (70 if unknown)

    Returns:
        TrainingData, all zero when the exercise parameters are invalid
    """
    if not validate_training_params(
        exercise.sets, exercise.reps, exercise.rest_time, exercise.difficulty
    ):
        return TrainingData()

    try:
        exercise_type = ExerciseType(exercise.exercise_type)
    except ValueError:
        logger.warning("Unknown exercise type %r", exercise.exercise_type)
        return TrainingData()

    completion_rate = calculate_completion_rate(exercise.sets, completed_sets)
    duration = calculate_training_duration(
        completed_sets, exercise.reps, exercise.rest_time
    )
    intensity = estimate_training_intensity(
        exercise_type, exercise.difficulty, completion_rate
    )
    calories = estimate_calories_burned(exercise_type, duration, intensity, user_weight)

    logger.debug(
        "Training data for %s: duration=%ds intensity=%.1f calories=%d",
        getattr(exercise, "name", exercise_type.value),
        duration,
        intensity,
        calories,
    )
    return TrainingData(duration=duration, intensity=intensity, calories_burned=calories)


def _as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(value).date()


def calculate_streaks(
    dates: Iterable[date | datetime | str], today: date | None = None
) -> StreakStats:
    """Compute current and best consecutive-day streaks.

    The current streak is the running streak at the latest training day,
    counted only if that day is today or yesterday; otherwise it is 0.
    """
    if today is None:
        today = date.today()

    days = sorted({_as_date(d) for d in dates})
    running = 0
    best = 0
    current = 0
    previous: date | None = None

    for day in days:
        if previous is not None and day - previous == timedelta(days=1):
            running += 1
        else:
            running = 1
        best = max(best, running)
        if (today - day).days <= 1:
            current = running
        previous = day

    return StreakStats(streak=current, best_streak=best)


def calculate_workout_metrics(
    exercises: Sequence[GeneratedExercise],
    records: Sequence[WorkoutRecord],
    today: date | None = None,
) -> WorkoutMetrics:
    """Aggregate plan statistics from the plan's exercises and records.

    Completion rate counts records that finished all planned sets, against
    every plan exercise on every day that has at least one record.
    """
    total_time = sum(
        calculate_training_duration(e.sets, e.reps, e.rest_time) for e in exercises
    )

    record_days = {_as_date(r.date) for r in records}
    sets_by_id = {e.id: e.sets for e in exercises if e.id is not None}
    completed = sum(
        1
        for r in records
        if r.exercise_id in sets_by_id and r.completed_sets == sets_by_id[r.exercise_id]
    )
    completion_rate = calculate_completion_rate(
        len(exercises) * len(record_days), completed
    )

    streaks = calculate_streaks(record_days, today)

    return WorkoutMetrics(
        total_time=total_time,
        completion_rate=completion_rate,
        streak=streaks.streak,
        best_streak=streaks.best_streak,
        total_workouts=len(record_days),
    )
