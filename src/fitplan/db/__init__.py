"""Database layer for fitplan."""

from .engine import get_db_path, init_db, seed_exercises
from .repositories import (
    ExerciseRepository,
    UserProfileRepository,
    WorkoutPlanRepository,
    WorkoutRecordRepository,
)

__all__ = [
    "ExerciseRepository",
    "get_db_path",
    "init_db",
    "seed_exercises",
    "UserProfileRepository",
    "WorkoutPlanRepository",
    "WorkoutRecordRepository",
]
