"""Difficulty tier resolution."""

from ..models.user_profile import DifficultyPreference, TrainingPreferences

DIFFICULTY_BY_PREFERENCE: dict[DifficultyPreference, int] = {
    DifficultyPreference.EASY: 1,
    DifficultyPreference.MEDIUM: 2,
    DifficultyPreference.HARD: 3,
}


def resolve_difficulty(age: int, preferences: TrainingPreferences | None = None) -> int:
    """Derive the difficulty tier (1-3) for plan generation.

    An explicit difficulty preference always wins. Otherwise younger
    users get harder tiers: under 25 -> 3, under 40 -> 2, else 1.
    """
    if preferences is not None and preferences.difficulty is not None:
        return DIFFICULTY_BY_PREFERENCE[DifficultyPreference(preferences.difficulty)]

    if age < 25:
        return 3
    if age < 40:
        return 2
    return 1
