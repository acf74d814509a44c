"""Database engine setup and initialization."""

import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from ..config import get_settings

logger = logging.getLogger(__name__)

DB_FILENAME = "fitplan.db"


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_settings().data_dir
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DB_FILENAME


@asynccontextmanager
async def connect(db_path: Path):
    """Open a connection with foreign keys and row access by name."""
    async with aiosqlite.connect(db_path) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        yield db


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with connect(db_path) as db:
        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_profiles (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                age INTEGER,
                gender TEXT,
                height REAL,
                weight REAL,
                fitness_goal TEXT,
                training_preferences TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Exercise catalog (read-only to plan generation)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercise_library (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT UNIQUE NOT NULL,
                category TEXT NOT NULL,
                difficulty INTEGER NOT NULL DEFAULT 1,
                target_muscles TEXT NOT NULL DEFAULT '[]',
                equipment TEXT NOT NULL DEFAULT '[]',
                description TEXT DEFAULT '',
                notes TEXT DEFAULT ''
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_plans (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                description TEXT DEFAULT '',
                frequency INTEGER NOT NULL DEFAULT 3
                    CHECK (frequency BETWEEN 1 AND 7),
                preferences TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                last_generated TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES user_profiles(id) ON DELETE CASCADE
            )
        """)

        # Generated exercises, owned by their plan
        await db.execute("""
            CREATE TABLE IF NOT EXISTS plan_exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                plan_id INTEGER NOT NULL,
                position INTEGER NOT NULL DEFAULT 0,
                name TEXT NOT NULL,
                exercise_type TEXT NOT NULL,
                category TEXT NOT NULL,
                sets INTEGER NOT NULL CHECK (sets > 0),
                reps INTEGER NOT NULL CHECK (reps > 0),
                rest_time INTEGER NOT NULL CHECK (rest_time >= 0),
                difficulty INTEGER NOT NULL,
                target_muscles TEXT NOT NULL DEFAULT '[]',
                equipment TEXT NOT NULL DEFAULT '[]',
                notes TEXT DEFAULT '',
                FOREIGN KEY (plan_id) REFERENCES workout_plans(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_records (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                exercise_id INTEGER NOT NULL,
                completed_sets INTEGER NOT NULL,
                completed_reps INTEGER NOT NULL DEFAULT 0,
                date TIMESTAMP NOT NULL,
                training_data TEXT,
                notes TEXT DEFAULT '',
                FOREIGN KEY (user_id) REFERENCES user_profiles(id) ON DELETE CASCADE,
                FOREIGN KEY (exercise_id) REFERENCES plan_exercises(id) ON DELETE CASCADE
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_plans_user
            ON workout_plans(user_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_plan_exercises_plan
            ON plan_exercises(plan_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_records_user_date
            ON workout_records(user_id, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercise_library_difficulty
            ON exercise_library(difficulty)
        """)

        await db.commit()

    logger.info("Database initialized at %s", db_path)


async def seed_exercises(db_path: Path | None = None) -> int:
    """Seed the exercise library with the built-in catalog.

    Returns:
        Number of exercises inserted (existing names are left untouched)
    """
    from ..models.exercises import COMMON_EXERCISES

    if db_path is None:
        db_path = get_db_path()

    count = 0
    async with connect(db_path) as db:
        for exercise in COMMON_EXERCISES:
            data = exercise.to_dict()
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO exercise_library
                (name, category, difficulty, target_muscles, equipment, description, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["name"],
                    data["category"],
                    data["difficulty"],
                    json.dumps(data["target_muscles"]),
                    json.dumps(data["equipment"]),
                    data["description"],
                    data["notes"],
                ),
            )
            count += cursor.rowcount

        await db.commit()

    logger.info("Seeded %d exercises", count)
    return count
