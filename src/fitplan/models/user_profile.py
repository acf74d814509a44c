"""User profile data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .exercises import FocusArea


class Gender(str, Enum):
    """Self-reported gender."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class FitnessGoal(str, Enum):
    """Primary fitness goal driving plan shape."""

    MUSCLE_GAIN = "MUSCLE_GAIN"
    FAT_LOSS = "FAT_LOSS"

    @property
    def label(self) -> str:
        return "Muscle gain" if self is FitnessGoal.MUSCLE_GAIN else "Fat loss"


class ExperienceLevel(str, Enum):
    """Training experience tier used by the parameter table."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class DifficultyPreference(str, Enum):
    """Explicit difficulty chosen by the user."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass
class TrainingPreferences:
    """Optional preferences applied to plan generation."""

    difficulty: DifficultyPreference | None = None
    focus_areas: list[FocusArea] = field(default_factory=list)
    time_per_session: int | None = None  # Minutes

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "difficulty": self.difficulty.value if self.difficulty else None,
            "focus_areas": [fa.value for fa in self.focus_areas],
            "time_per_session": self.time_per_session,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "TrainingPreferences | None":
        """Create from dictionary, returning None for empty input."""
        if not data:
            return None
        difficulty = data.get("difficulty")
        return cls(
            difficulty=DifficultyPreference(difficulty) if difficulty else None,
            focus_areas=[FocusArea(fa) for fa in data.get("focus_areas") or []],
            time_per_session=data.get("time_per_session"),
        )


@dataclass
class UserProfile:
    """User fitness profile."""

    name: str
    age: int | None = None
    gender: Gender | None = None
    height: float | None = None  # in cm
    weight: float | None = None  # in kg
    fitness_goal: FitnessGoal | None = None
    training_preferences: TrainingPreferences | None = None
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def bmi(self) -> float | None:
        """Body mass index rounded to one decimal, if height and weight are known."""
        if not self.height or not self.weight:
            return None
        height_m = self.height / 100
        return round(self.weight / (height_m * height_m), 1)

    @property
    def bmi_category(self) -> str | None:
        """WHO weight category for the BMI."""
        bmi = self.bmi
        if bmi is None:
            return None
        if bmi < 18.5:
            return "Underweight"
        if bmi < 25:
            return "Normal weight"
        if bmi < 30:
            return "Overweight"
        return "Obese"

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "age": self.age,
            "gender": self.gender.value if self.gender else None,
            "height": self.height,
            "weight": self.weight,
            "fitness_goal": self.fitness_goal.value if self.fitness_goal else None,
            "training_preferences": (
                self.training_preferences.to_dict() if self.training_preferences else None
            ),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "UserProfile":
        """Create from dictionary."""
        gender = data.get("gender")
        goal = data.get("fitness_goal")
        return cls(
            id=id,
            name=data["name"],
            age=data.get("age"),
            gender=Gender(gender) if gender else None,
            height=data.get("height"),
            weight=data.get("weight"),
            fitness_goal=FitnessGoal(goal) if goal else None,
            training_preferences=TrainingPreferences.from_dict(
                data.get("training_preferences")
            ),
            created_at=created_at,
            updated_at=updated_at,
        )

    def get_summary(self) -> str:
        """Generate a short human-readable summary."""
        summary = f"User: {self.name}\n"
        if self.age is not None:
            summary += f"Age: {self.age}\n"
        if self.gender:
            summary += f"Gender: {self.gender.value}\n"
        if self.fitness_goal:
            summary += f"Goal: {self.fitness_goal.label}\n"
        if self.height:
            summary += f"Height: {self.height}cm\n"
        if self.weight:
            summary += f"Weight: {self.weight}kg\n"
        if self.bmi is not None:
            summary += f"BMI: {self.bmi} ({self.bmi_category})\n"

        prefs = self.training_preferences
        if prefs:
            if prefs.difficulty:
                summary += f"Preferred difficulty: {prefs.difficulty.value}\n"
            if prefs.focus_areas:
                summary += f"Focus areas: {', '.join(fa.value for fa in prefs.focus_areas)}\n"
            if prefs.time_per_session:
                summary += f"Session length: {prefs.time_per_session} min\n"

        return summary
