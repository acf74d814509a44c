"""Manual user profile input via interactive questionnaire."""

import questionary
from questionary import Style

from ...models.exercises import FocusArea
from ...models.user_profile import (
    DifficultyPreference,
    FitnessGoal,
    Gender,
    TrainingPreferences,
    UserProfile,
)

# Custom style for questionnaire
custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("separator", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def parse_int(value: str | None) -> int | None:
    """Parse an integer answer, returning None for blank or invalid input."""
    try:
        return int(value) if value else None
    except ValueError:
        return None


def parse_float(value: str | None) -> float | None:
    """Parse a numeric answer, returning None for blank or invalid input."""
    try:
        return float(value) if value else None
    except ValueError:
        return None


class ManualInputClient:
    """Interactive questionnaire for collecting a user profile."""

    async def collect_profile(self, existing: UserProfile | None = None) -> UserProfile:
        """Run the questionnaire, using an existing profile for defaults."""
        print("\n=== Fitness Profile ===\n")

        name = await questionary.text(
            "What's your name?",
            default=existing.name if existing else "",
            style=custom_style,
        ).ask_async()

        age_str = await questionary.text(
            "Your age:",
            default=str(existing.age) if existing and existing.age is not None else "",
            validate=lambda v: v.isdigit() or "Enter a whole number",
            style=custom_style,
        ).ask_async()

        gender = await questionary.select(
            "Gender:",
            choices=[
                questionary.Choice("Male", Gender.MALE),
                questionary.Choice("Female", Gender.FEMALE),
                questionary.Choice("Other / prefer not to say", Gender.OTHER),
            ],
            style=custom_style,
        ).ask_async()

        height_str = await questionary.text(
            "Height in cm (optional):",
            default=str(existing.height) if existing and existing.height else "",
            style=custom_style,
        ).ask_async()

        weight_str = await questionary.text(
            "Body weight in kg (optional, used for calorie estimates):",
            default=str(existing.weight) if existing and existing.weight else "",
            style=custom_style,
        ).ask_async()

        goal = await questionary.select(
            "What's your primary goal?",
            choices=[
                questionary.Choice("Build muscle", FitnessGoal.MUSCLE_GAIN),
                questionary.Choice("Lose fat", FitnessGoal.FAT_LOSS),
            ],
            style=custom_style,
        ).ask_async()

        preferences = None
        set_preferences = await questionary.confirm(
            "Would you like to set training preferences? (optional)",
            default=False,
            style=custom_style,
        ).ask_async()

        if set_preferences:
            preferences = await self._collect_preferences()

        return UserProfile(
            id=existing.id if existing else None,
            name=name or "User",
            age=parse_int(age_str),
            gender=gender,
            height=parse_float(height_str),
            weight=parse_float(weight_str),
            fitness_goal=goal,
            training_preferences=preferences,
        )

    async def _collect_preferences(self) -> TrainingPreferences:
        """Collect difficulty, focus areas and session length."""
        difficulty = await questionary.select(
            "Preferred difficulty:",
            choices=[
                questionary.Choice("Decide from my age", "auto"),
                questionary.Choice("Easy", DifficultyPreference.EASY),
                questionary.Choice("Medium", DifficultyPreference.MEDIUM),
                questionary.Choice("Hard", DifficultyPreference.HARD),
            ],
            style=custom_style,
        ).ask_async()

        focus_areas = await questionary.checkbox(
            "Focus areas (select any):",
            choices=[questionary.Choice(fa.value.title(), fa) for fa in FocusArea],
            style=custom_style,
        ).ask_async()

        time_per_session = await questionary.select(
            "How long are your typical training sessions?",
            choices=[
                questionary.Choice("Default (45 minutes)", 0),
                questionary.Choice("30 minutes", 30),
                questionary.Choice("60 minutes", 60),
                questionary.Choice("75 minutes", 75),
                questionary.Choice("90 minutes", 90),
            ],
            style=custom_style,
        ).ask_async()

        # questionary replaces a None choice value with its title
        return TrainingPreferences(
            difficulty=None if difficulty == "auto" else difficulty,
            focus_areas=focus_areas or [],
            time_per_session=time_per_session or None,
        )
