"""Data models for fitplan."""

from .exercises import (
    COMMON_EXERCISES,
    ExerciseCategory,
    ExerciseTemplate,
    ExerciseType,
    FocusArea,
    GeneratedExercise,
    MuscleGroup,
)
from .plan import WorkoutPlan
from .progress import StreakStats, TrainingData, WorkoutMetrics, WorkoutRecord
from .user_profile import (
    DifficultyPreference,
    ExperienceLevel,
    FitnessGoal,
    Gender,
    TrainingPreferences,
    UserProfile,
)

__all__ = [
    "COMMON_EXERCISES",
    "DifficultyPreference",
    "ExerciseCategory",
    "ExerciseTemplate",
    "ExerciseType",
    "ExperienceLevel",
    "FitnessGoal",
    "FocusArea",
    "Gender",
    "GeneratedExercise",
    "MuscleGroup",
    "StreakStats",
    "TrainingData",
    "TrainingPreferences",
    "UserProfile",
    "WorkoutMetrics",
    "WorkoutPlan",
    "WorkoutRecord",
]
