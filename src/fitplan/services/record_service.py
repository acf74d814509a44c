"""Workout completion recording and statistics."""

import logging
from datetime import date, datetime
from pathlib import Path

from ..config import get_settings
from ..db.repositories import (
    UserProfileRepository,
    WorkoutPlanRepository,
    WorkoutRecordRepository,
)
from ..errors import PersistenceError, ValidationError
from ..models.progress import WorkoutMetrics, WorkoutRecord
from .metrics import calculate_training_data, calculate_workout_metrics

logger = logging.getLogger(__name__)


class RecordService:
    """Records progress against plan exercises.

    There is at most one record per user, exercise and calendar day.
    Submitting the same completed-set count again removes that day's
    record, so the action works as a toggle; a different count updates
    the record in place.
    """

    def __init__(self, db_path: Path | None = None):
        self.profiles = UserProfileRepository(db_path)
        self.plans = WorkoutPlanRepository(db_path)
        self.records = WorkoutRecordRepository(db_path)

    async def record_workout(
        self,
        user_id: int,
        exercise_id: int,
        completed_sets: int,
        completed_reps: int = 0,
        notes: str = "",
        when: datetime | None = None,
    ) -> WorkoutRecord | None:
        """Create, update or toggle off today's record for an exercise.

        Returns:
            The stored record, or None if it was removed or nothing was stored

        Raises:
            ValidationError: Negative set or rep counts
            PersistenceError: Unknown exercise or profile
        """
        if completed_sets < 0 or completed_reps < 0:
            raise ValidationError(
                "Completed sets and reps must not be negative",
                details={"completed_sets": completed_sets, "completed_reps": completed_reps},
            )
        if when is None:
            when = datetime.now()

        exercise = await self.plans.get_exercise(exercise_id)
        if exercise is None:
            raise PersistenceError("Exercise not found", details={"exercise_id": exercise_id})

        profile = await self.profiles.get(user_id)
        if profile is None:
            raise PersistenceError("User profile not found", details={"user_id": user_id})

        weight = profile.weight or get_settings().default_body_weight
        training_data = calculate_training_data(exercise, completed_sets, weight)

        existing = await self.records.get_for_day(user_id, exercise_id, when.date())

        if existing is not None:
            if existing.completed_sets == completed_sets:
                await self.records.delete(existing.id)
                logger.info("Removed record %s (toggle)", existing.id)
                return None

            existing.completed_sets = completed_sets
            existing.completed_reps = completed_reps
            existing.training_data = training_data
            existing.notes = notes
            existing.date = when
            await self.records.update(existing)
            logger.info("Updated record %s: %d sets", existing.id, completed_sets)
            return existing

        if completed_sets == 0:
            return None

        record = WorkoutRecord(
            user_id=user_id,
            exercise_id=exercise_id,
            completed_sets=completed_sets,
            completed_reps=completed_reps,
            date=when,
            training_data=training_data,
            notes=notes,
        )
        await self.records.create(record)
        logger.info("Created record %s for exercise %s", record.id, exercise_id)
        return record

    async def monthly_records(self, user_id: int, year: int, month: int) -> list[WorkoutRecord]:
        """Get a user's records for one calendar month."""
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12", details={"month": month})
        start = datetime(year, month, 1)
        end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
        return await self.records.list_for_user(user_id, start, end)

    async def workout_stats(self, user_id: int, today: date | None = None) -> WorkoutMetrics:
        """Aggregate statistics for the user's current plan."""
        plan = await self.plans.get_current_for_user(user_id)
        if plan is None:
            return WorkoutMetrics()

        exercise_ids = {e.id for e in plan.exercises}
        records = [
            r for r in await self.records.list_for_user(user_id) if r.exercise_id in exercise_ids
        ]
        return calculate_workout_metrics(plan.exercises, records, today)
