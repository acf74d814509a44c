"""Data access layer for fitplan."""

import json
import logging
from datetime import date, datetime, time, timedelta
from pathlib import Path

import aiosqlite

from ..errors import PersistenceError
from ..models.exercises import ExerciseTemplate, GeneratedExercise
from ..models.plan import WorkoutPlan
from ..models.progress import TrainingData, WorkoutRecord
from ..models.user_profile import TrainingPreferences, UserProfile
from .engine import connect, get_db_path

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class UserProfileRepository:
    """Repository for user profiles."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, profile: UserProfile) -> int:
        """Create a new user profile."""
        data = profile.to_dict()
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO user_profiles
                (name, age, gender, height, weight, fitness_goal, training_preferences)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["name"],
                    data["age"],
                    data["gender"],
                    data["height"],
                    data["weight"],
                    data["fitness_goal"],
                    json.dumps(data["training_preferences"]),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, profile_id: int) -> UserProfile | None:
        """Get a user profile by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM user_profiles WHERE id = ?", (profile_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def get_latest(self) -> UserProfile | None:
        """Get the most recently created/updated profile."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM user_profiles ORDER BY updated_at DESC, id DESC LIMIT 1"
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def update(self, profile: UserProfile) -> None:
        """Update an existing profile."""
        if profile.id is None:
            raise ValueError("Profile must have an ID to update")

        data = profile.to_dict()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE user_profiles SET
                    name = ?, age = ?, gender = ?, height = ?, weight = ?,
                    fitness_goal = ?, training_preferences = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    data["name"],
                    data["age"],
                    data["gender"],
                    data["height"],
                    data["weight"],
                    data["fitness_goal"],
                    json.dumps(data["training_preferences"]),
                    profile.id,
                ),
            )
            await db.commit()

    def _row_to_profile(self, row: aiosqlite.Row) -> UserProfile:
        """Convert a database row to a UserProfile."""
        data = {
            "name": row["name"],
            "age": row["age"],
            "gender": row["gender"],
            "height": row["height"],
            "weight": row["weight"],
            "fitness_goal": row["fitness_goal"],
            "training_preferences": json.loads(row["training_preferences"] or "null"),
        }
        return UserProfile.from_dict(
            data,
            id=row["id"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class ExerciseRepository:
    """Repository for the exercise catalog."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def list_all(self) -> list[ExerciseTemplate]:
        """List the whole catalog."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM exercise_library ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_template(row) for row in rows]

    def _row_to_template(self, row: aiosqlite.Row) -> ExerciseTemplate:
        """Convert a database row to an ExerciseTemplate."""
        data = {
            "name": row["name"],
            "category": row["category"],
            "difficulty": row["difficulty"],
            "target_muscles": json.loads(row["target_muscles"] or "[]"),
            "equipment": json.loads(row["equipment"] or "[]"),
            "description": row["description"],
            "notes": row["notes"],
        }
        return ExerciseTemplate.from_dict(data, id=row["id"])


class WorkoutPlanRepository:
    """Repository for workout plans and their exercises.

    A plan and its exercises are written in one transaction, so a plan
    row never exists without the exercises it was generated with.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def replace_for_user(
        self, plan: WorkoutPlan, exercises: list[GeneratedExercise]
    ) -> int:
        """Replace the user's plan with a new plan and its exercises.

        The delete and every insert share one transaction. Old exercises
        and their records cascade with the old plan, and any failure rolls
        the whole replacement back so the previous plan stays in place.

        Raises:
            PersistenceError: If the delete or any insert fails
        """
        data = plan.to_dict()
        last_generated = plan.last_generated or datetime.now()
        async with connect(self.db_path) as db:
            try:
                cursor = await db.execute(
                    "DELETE FROM workout_plans WHERE user_id = ?", (plan.user_id,)
                )
                replaced = cursor.rowcount
                cursor = await db.execute(
                    """
                    INSERT INTO workout_plans
                    (user_id, name, description, frequency, preferences, last_generated)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        data["user_id"],
                        data["name"],
                        data["description"],
                        data["frequency"],
                        json.dumps(data["preferences"]),
                        last_generated.isoformat(),
                    ),
                )
                plan_id = cursor.lastrowid
                for position, exercise in enumerate(exercises):
                    await self._insert_exercise(db, plan_id, exercise, position)
                await db.commit()
            except aiosqlite.Error as e:
                await db.rollback()
                logger.error("Rolled back plan replacement for user %s: %s", plan.user_id, e)
                raise PersistenceError(
                    "Failed to save workout plan", details={"user_id": plan.user_id}
                ) from e

        if replaced:
            logger.info("Replaced %d plan(s) for user %s", replaced, plan.user_id)
        plan.id = plan_id
        plan.last_generated = last_generated
        return plan_id

    async def get(self, plan_id: int) -> WorkoutPlan | None:
        """Get a plan with its exercises."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM workout_plans WHERE id = ?", (plan_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return await self._load_plan(db, row)

    async def get_current_for_user(self, user_id: int) -> WorkoutPlan | None:
        """Get the user's most recent plan."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM workout_plans WHERE user_id = ?
                ORDER BY created_at DESC, id DESC LIMIT 1
                """,
                (user_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return await self._load_plan(db, row)

    async def update_frequency(self, plan_id: int, frequency: int) -> None:
        """Change a plan's training days per week."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "UPDATE workout_plans SET frequency = ? WHERE id = ?",
                (frequency, plan_id),
            )
            await db.commit()
            if cursor.rowcount == 0:
                raise PersistenceError(
                    "Workout plan not found", details={"plan_id": plan_id}
                )

    async def delete(self, plan_id: int) -> bool:
        """Delete a plan; its exercises and their records cascade."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM workout_plans WHERE id = ?", (plan_id,))
            await db.commit()
            return cursor.rowcount > 0

    async def get_exercise(self, exercise_id: int) -> GeneratedExercise | None:
        """Get one plan exercise by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM plan_exercises WHERE id = ?", (exercise_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    async def add_exercise(self, plan_id: int, exercise: GeneratedExercise) -> int:
        """Append an exercise to an existing plan."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT COALESCE(MAX(position), -1) + 1 FROM plan_exercises WHERE plan_id = ?",
                (plan_id,),
            )
            (position,) = await cursor.fetchone()
            try:
                exercise_id = await self._insert_exercise(db, plan_id, exercise, position)
            except aiosqlite.IntegrityError as e:
                raise PersistenceError(
                    "Workout plan not found", details={"plan_id": plan_id}
                ) from e
            await db.commit()
            return exercise_id

    async def _insert_exercise(
        self,
        db: aiosqlite.Connection,
        plan_id: int,
        exercise: GeneratedExercise,
        position: int,
    ) -> int:
        data = exercise.to_dict()
        cursor = await db.execute(
            """
            INSERT INTO plan_exercises
            (plan_id, position, name, exercise_type, category, sets, reps, rest_time,
             difficulty, target_muscles, equipment, notes)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                plan_id,
                position,
                data["name"],
                data["exercise_type"],
                data["category"],
                data["sets"],
                data["reps"],
                data["rest_time"],
                data["difficulty"],
                json.dumps(data["target_muscles"]),
                json.dumps(data["equipment"]),
                data["notes"],
            ),
        )
        exercise.id = cursor.lastrowid
        exercise.plan_id = plan_id
        return cursor.lastrowid

    async def _load_plan(self, db: aiosqlite.Connection, row: aiosqlite.Row) -> WorkoutPlan:
        cursor = await db.execute(
            "SELECT * FROM plan_exercises WHERE plan_id = ? ORDER BY position, id",
            (row["id"],),
        )
        exercise_rows = await cursor.fetchall()
        return WorkoutPlan(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            description=row["description"] or "",
            frequency=row["frequency"],
            preferences=TrainingPreferences.from_dict(
                json.loads(row["preferences"] or "null")
            ),
            exercises=[self._row_to_exercise(r) for r in exercise_rows],
            created_at=_parse_timestamp(row["created_at"]),
            last_generated=_parse_timestamp(row["last_generated"]),
        )

    def _row_to_exercise(self, row: aiosqlite.Row) -> GeneratedExercise:
        """Convert a database row to a GeneratedExercise."""
        data = {
            "name": row["name"],
            "exercise_type": row["exercise_type"],
            "category": row["category"],
            "sets": row["sets"],
            "reps": row["reps"],
            "rest_time": row["rest_time"],
            "difficulty": row["difficulty"],
            "target_muscles": json.loads(row["target_muscles"] or "[]"),
            "equipment": json.loads(row["equipment"] or "[]"),
            "notes": row["notes"] or "",
        }
        return GeneratedExercise.from_dict(data, id=row["id"], plan_id=row["plan_id"])


class WorkoutRecordRepository:
    """Repository for workout completion records."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get_for_day(
        self, user_id: int, exercise_id: int, day: date
    ) -> WorkoutRecord | None:
        """Get the record for an exercise on a calendar day, if any."""
        start = datetime.combine(day, time.min)
        end = start + timedelta(days=1)
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM workout_records
                WHERE user_id = ? AND exercise_id = ? AND date >= ? AND date < ?
                ORDER BY id LIMIT 1
                """,
                (user_id, exercise_id, start.isoformat(), end.isoformat()),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    async def list_for_user(
        self, user_id: int, start: datetime | None = None, end: datetime | None = None
    ) -> list[WorkoutRecord]:
        """List a user's records in [start, end), oldest first."""
        query = "SELECT * FROM workout_records WHERE user_id = ?"
        params: list = [user_id]
        if start is not None:
            query += " AND date >= ?"
            params.append(start.isoformat())
        if end is not None:
            query += " AND date < ?"
            params.append(end.isoformat())
        query += " ORDER BY date, id"

        async with connect(self.db_path) as db:
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def create(self, record: WorkoutRecord) -> int:
        """Create a new record."""
        data = record.to_dict()
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_records
                (user_id, exercise_id, completed_sets, completed_reps, date,
                 training_data, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["user_id"],
                    data["exercise_id"],
                    data["completed_sets"],
                    data["completed_reps"],
                    data["date"],
                    json.dumps(data["training_data"]),
                    data["notes"],
                ),
            )
            await db.commit()
            record.id = cursor.lastrowid
            return cursor.lastrowid

    async def update(self, record: WorkoutRecord) -> None:
        """Update an existing record in place."""
        if record.id is None:
            raise ValueError("Record must have an ID to update")

        data = record.to_dict()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE workout_records SET
                    completed_sets = ?, completed_reps = ?, date = ?,
                    training_data = ?, notes = ?
                WHERE id = ?
                """,
                (
                    data["completed_sets"],
                    data["completed_reps"],
                    data["date"],
                    json.dumps(data["training_data"]),
                    data["notes"],
                    record.id,
                ),
            )
            await db.commit()

    async def delete(self, record_id: int) -> None:
        """Delete a record."""
        async with connect(self.db_path) as db:
            await db.execute("DELETE FROM workout_records WHERE id = ?", (record_id,))
            await db.commit()

    def _row_to_record(self, row: aiosqlite.Row) -> WorkoutRecord:
        """Convert a database row to a WorkoutRecord."""
        return WorkoutRecord(
            id=row["id"],
            user_id=row["user_id"],
            exercise_id=row["exercise_id"],
            completed_sets=row["completed_sets"],
            completed_reps=row["completed_reps"],
            date=datetime.fromisoformat(row["date"]),
            training_data=TrainingData.from_dict(json.loads(row["training_data"] or "null")),
            notes=row["notes"] or "",
        )
