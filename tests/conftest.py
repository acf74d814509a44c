"""Pytest configuration and fixtures."""

import asyncio
import random
import tempfile
from pathlib import Path

import pytest

from fitplan.config import get_settings
from fitplan.db import init_db, seed_exercises
from fitplan.models.exercises import ExerciseCategory, ExerciseTemplate
from fitplan.models.user_profile import FitnessGoal, Gender, UserProfile


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def seeded_db(temp_db_path):
    """A temporary database with schema and the built-in exercise library."""

    async def setup():
        await init_db(temp_db_path)
        await seed_exercises(temp_db_path)

    asyncio.run(setup())
    return temp_db_path


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point settings at an empty data directory for CLI runs."""
    monkeypatch.setenv("FITPLAN_DATA_DIR", str(tmp_path))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def rng():
    """Seeded random source for reproducible shuffles."""
    return random.Random(42)


@pytest.fixture
def sample_user_profile():
    """Create a sample user profile for testing."""
    return UserProfile(
        name="Test User",
        age=30,
        gender=Gender.FEMALE,
        height=170,
        weight=65,
        fitness_goal=FitnessGoal.MUSCLE_GAIN,
    )


@pytest.fixture
def small_catalog():
    """A hand-built catalog spanning both categories and all tiers."""
    strength = ExerciseCategory.STRENGTH
    cardio = ExerciseCategory.CARDIO
    return [
        ExerciseTemplate("Push-up", strength, 1, ["chest", "triceps"]),
        ExerciseTemplate("Goblet Squat", strength, 2, ["quads", "glutes"]),
        ExerciseTemplate("Dumbbell Row", strength, 1, ["back", "lats"]),
        ExerciseTemplate("Plank", strength, 1, ["abs"]),
        ExerciseTemplate("Lateral Raise", strength, 1, ["shoulders"]),
        ExerciseTemplate("Back Squat", strength, 3, ["quads", "glutes"]),
        ExerciseTemplate("Jumping Jacks", cardio, 1, ["full_body"], description="Arms up, feet out."),
        ExerciseTemplate("Brisk Walk", cardio, 1, ["quads", "calves"]),
        ExerciseTemplate("Burpees", cardio, 3, ["full_body", "chest"]),
    ]
