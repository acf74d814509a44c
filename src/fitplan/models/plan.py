"""Workout plan data model."""

from dataclasses import dataclass, field
from datetime import datetime

from .exercises import ExerciseType, GeneratedExercise
from .user_profile import TrainingPreferences


@dataclass
class WorkoutPlan:
    """A user's workout plan and its exercises."""

    user_id: int
    name: str
    description: str = ""
    frequency: int = 3  # Training days per week
    preferences: TrainingPreferences | None = None
    exercises: list[GeneratedExercise] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None
    last_generated: datetime | None = None

    def exercises_of_type(self, exercise_type: ExerciseType) -> list[GeneratedExercise]:
        """Get exercises playing the given role, in plan order."""
        return [e for e in self.exercises if e.exercise_type == exercise_type]

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "frequency": self.frequency,
            "preferences": self.preferences.to_dict() if self.preferences else None,
            "exercises": [e.to_dict() | {"id": e.id} for e in self.exercises],
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "last_generated": (
                self.last_generated.isoformat() if self.last_generated else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "WorkoutPlan":
        """Create from dictionary."""
        created_at = None
        if data.get("created_at"):
            created_at = datetime.fromisoformat(data["created_at"])

        last_generated = None
        if data.get("last_generated"):
            last_generated = datetime.fromisoformat(data["last_generated"])

        return cls(
            id=id,
            user_id=data["user_id"],
            name=data["name"],
            description=data.get("description", ""),
            frequency=data.get("frequency", 3),
            preferences=TrainingPreferences.from_dict(data.get("preferences")),
            exercises=[
                GeneratedExercise.from_dict(e, id=e.get("id"), plan_id=id)
                for e in data.get("exercises", [])
            ],
            created_at=created_at,
            last_generated=last_generated,
        )

    def get_summary(self) -> str:
        """Generate a human-readable summary grouped by exercise role."""
        lines = [f"# {self.name}"]
        if self.description:
            lines.append(self.description)
        lines.append(f"Frequency: {self.frequency}/week")
        lines.append("")

        titles = {
            ExerciseType.WARMUP: "Warm-up",
            ExerciseType.STRENGTH: "Strength",
            ExerciseType.CARDIO: "Cardio",
        }
        for exercise_type, title in titles.items():
            group = self.exercises_of_type(exercise_type)
            if not group:
                continue
            lines.append(f"## {title}")
            for exercise in group:
                lines.append(f"  - {exercise.name}: {exercise.display_params}")
            lines.append("")

        return "\n".join(lines).rstrip() + "\n"
