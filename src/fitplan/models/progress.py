"""Workout completion records and derived metrics."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TrainingData:
    """Derived numbers for one completed exercise."""

    duration: int = 0  # seconds
    intensity: float = 0.0
    calories_burned: int = 0

    @property
    def is_zero(self) -> bool:
        return self.duration == 0 and self.intensity == 0 and self.calories_burned == 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "duration": self.duration,
            "intensity": self.intensity,
            "calories_burned": self.calories_burned,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "TrainingData | None":
        """Create from dictionary."""
        if not data:
            return None
        return cls(
            duration=data.get("duration", 0),
            intensity=data.get("intensity", 0.0),
            calories_burned=data.get("calories_burned", 0),
        )


@dataclass
class WorkoutRecord:
    """A user's progress on one plan exercise for one calendar day."""

    user_id: int
    exercise_id: int
    completed_sets: int
    completed_reps: int
    date: datetime
    training_data: TrainingData | None = None
    notes: str = ""
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "exercise_id": self.exercise_id,
            "completed_sets": self.completed_sets,
            "completed_reps": self.completed_reps,
            "date": self.date.isoformat(),
            "training_data": self.training_data.to_dict() if self.training_data else None,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "WorkoutRecord":
        """Create from dictionary."""
        return cls(
            id=id,
            user_id=data["user_id"],
            exercise_id=data["exercise_id"],
            completed_sets=data["completed_sets"],
            completed_reps=data.get("completed_reps", 0),
            date=datetime.fromisoformat(data["date"]),
            training_data=TrainingData.from_dict(data.get("training_data")),
            notes=data.get("notes") or "",
        )


@dataclass
class StreakStats:
    """Consecutive-day training streaks."""

    streak: int = 0
    best_streak: int = 0


@dataclass
class WorkoutMetrics:
    """Aggregate statistics over a plan and its records."""

    total_time: int = 0  # seconds for one full session
    completion_rate: int = 0
    streak: int = 0
    best_streak: int = 0
    total_workouts: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total_time": self.total_time,
            "completion_rate": self.completion_rate,
            "streak": self.streak,
            "best_streak": self.best_streak,
            "total_workouts": self.total_workouts,
        }
