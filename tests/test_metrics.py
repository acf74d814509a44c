"""Tests for training metrics."""

from datetime import date, datetime

import pytest

from fitplan.models.exercises import ExerciseCategory, ExerciseType, GeneratedExercise
from fitplan.models.progress import StreakStats, TrainingData, WorkoutRecord
from fitplan.services.metrics import (
    calculate_completion_rate,
    calculate_streaks,
    calculate_training_data,
    calculate_training_duration,
    calculate_training_volume,
    calculate_workout_metrics,
    estimate_calories_burned,
    estimate_training_intensity,
    validate_training_params,
)

TODAY = date(2024, 5, 10)


def _exercise(exercise_type=ExerciseType.STRENGTH, sets=3, reps=8, rest_time=90, difficulty=2, id=None):
    category = (
        ExerciseCategory.STRENGTH
        if exercise_type is ExerciseType.STRENGTH
        else ExerciseCategory.CARDIO
    )
    return GeneratedExercise(
        name="Test",
        exercise_type=exercise_type,
        category=category,
        sets=sets,
        reps=reps,
        rest_time=rest_time,
        difficulty=difficulty,
        id=id,
    )


def _record(exercise_id, completed_sets, day):
    return WorkoutRecord(
        user_id=1,
        exercise_id=exercise_id,
        completed_sets=completed_sets,
        completed_reps=0,
        date=datetime.combine(day, datetime.min.time()),
    )


class TestBasicCalculations:
    """Tests for the arithmetic helpers."""

    @pytest.mark.parametrize(
        "total,completed,expected",
        [(0, 3, 0), (4, 2, 50), (3, 1, 33), (3, 2, 67), (3, 5, 100), (3, -1, 0)],
    )
    def test_completion_rate(self, total, completed, expected):
        assert calculate_completion_rate(total, completed) == expected

    def test_training_volume(self):
        """Bodyweight work counts the weight as 1."""
        assert calculate_training_volume(3, 10) == 30
        assert calculate_training_volume(3, 10, 20) == 600

    def test_training_duration(self):
        """No rest after the last set."""
        assert calculate_training_duration(3, 10, 60) == 210
        assert calculate_training_duration(1, 10, 60) == 30
        assert calculate_training_duration(0, 10, 60) == 0

    def test_intensity(self):
        assert estimate_training_intensity(ExerciseType.STRENGTH, 2, 100) == 4.4
        assert estimate_training_intensity(ExerciseType.CARDIO, 3, 50) == 3.6
        assert estimate_training_intensity(ExerciseType.WARMUP, 1, 100) == 2.0
        assert estimate_training_intensity(ExerciseType.STRENGTH, 2, 0) == 0

    def test_calories(self):
        """MET 3.5 at intensity 5 for one hour at 70kg."""
        assert estimate_calories_burned(ExerciseType.STRENGTH, 3600, 5, 70) == 245

    def test_calories_default_weight(self):
        assert estimate_calories_burned(ExerciseType.STRENGTH, 3600, 5) == 245
        assert estimate_calories_burned(ExerciseType.STRENGTH, 3600, 5, 0) == 245


class TestValidateTrainingParams:
    """Tests for the difficulty ceilings."""

    def test_within_limits(self):
        assert validate_training_params(4, 12, 60, 1)
        assert validate_training_params(6, 20, 0, 3)

    def test_over_limits(self):
        assert not validate_training_params(5, 12, 60, 1)
        assert not validate_training_params(4, 13, 60, 1)

    def test_bad_values(self):
        assert not validate_training_params(0, 10, 60, 1)
        assert not validate_training_params(3, 10, -1, 1)
        assert not validate_training_params(3, 10, 60, 4)


class TestCalculateTrainingData:
    """Tests for calculate_training_data."""

    def test_full_completion(self):
        """3x8 with 90s rest at difficulty 2 for an 80kg user."""
        data = calculate_training_data(_exercise(), 3, 80)

        assert data == TrainingData(duration=252, intensity=4.4, calories_burned=17)

    def test_partial_completion(self):
        data = calculate_training_data(_exercise(), 1, 80)

        assert data.duration == 24
        assert data.intensity == 1.5

    def test_invalid_params_degrade_to_zero(self, caplog):
        """Fat-loss cardio at 30 reps exceeds every ceiling."""
        cardio = _exercise(ExerciseType.CARDIO, sets=4, reps=30, rest_time=30, difficulty=3)

        data = calculate_training_data(cardio, 4, 80)

        assert data.is_zero
        assert "exceed" in caplog.text

    def test_sets_over_ceiling_degrade_to_zero(self):
        """Seven sets exceed the difficulty-1 ceiling of four."""
        exercise = _exercise(sets=7, reps=10, rest_time=60, difficulty=1)
        assert calculate_training_data(exercise, 7) == TrainingData(0, 0, 0)

    def test_warmup_degrades_to_zero(self):
        warmup = _exercise(ExerciseType.WARMUP, sets=2, reps=25, rest_time=45, difficulty=1)
        assert calculate_training_data(warmup, 2).is_zero


class TestStreaks:
    """Tests for calculate_streaks."""

    def test_running_streak_through_today(self):
        days = [date(2024, 5, 8), date(2024, 5, 9), date(2024, 5, 10)]
        assert calculate_streaks(days, TODAY) == StreakStats(streak=3, best_streak=3)

    def test_streak_ending_yesterday_counts(self):
        days = [date(2024, 5, d) for d in (1, 2, 3, 4, 9)]
        assert calculate_streaks(days, TODAY) == StreakStats(streak=1, best_streak=4)

    def test_stale_streak_is_zero(self):
        days = [date(2024, 5, 1), date(2024, 5, 2)]
        assert calculate_streaks(days, TODAY) == StreakStats(streak=0, best_streak=2)

    def test_same_day_counted_once(self):
        days = [datetime(2024, 5, 10, 8), datetime(2024, 5, 10, 19), "2024-05-09T07:00:00"]
        assert calculate_streaks(days, TODAY) == StreakStats(streak=2, best_streak=2)

    def test_gap_breaks_streak(self):
        """Days D, D+1, D+5 with D+5 three days ago: best 2, current 0."""
        days = [date(2024, 5, 2), date(2024, 5, 3), date(2024, 5, 7)]
        assert calculate_streaks(days, TODAY) == StreakStats(streak=0, best_streak=2)

        assert calculate_streaks(days, date(2024, 5, 7)) == StreakStats(streak=1, best_streak=2)

    def test_no_records(self):
        assert calculate_streaks([], TODAY) == StreakStats()


class TestWorkoutMetrics:
    """Tests for calculate_workout_metrics."""

    def test_aggregate(self):
        """Completion counts fully finished exercises over active days."""
        exercises = [
            _exercise(sets=3, reps=10, rest_time=60, id=1),
            _exercise(sets=3, reps=10, rest_time=60, id=2),
        ]
        records = [
            _record(1, 3, date(2024, 5, 9)),
            _record(2, 2, date(2024, 5, 9)),
            _record(1, 3, date(2024, 5, 10)),
        ]

        metrics = calculate_workout_metrics(exercises, records, TODAY)

        assert metrics.total_time == 420
        assert metrics.completion_rate == 50
        assert metrics.streak == 2
        assert metrics.best_streak == 2
        assert metrics.total_workouts == 2

    def test_no_records(self):
        metrics = calculate_workout_metrics([_exercise(id=1)], [], TODAY)

        assert metrics.completion_rate == 0
        assert metrics.total_workouts == 0
        assert metrics.total_time == 252
