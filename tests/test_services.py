"""Tests for the repositories and the plan/record services."""

import asyncio
import random
from datetime import datetime

import aiosqlite
import pytest

from fitplan.db import (
    ExerciseRepository,
    UserProfileRepository,
    WorkoutPlanRepository,
    WorkoutRecordRepository,
    seed_exercises,
)
from fitplan.db.engine import connect
from fitplan.errors import PersistenceError, ValidationError
from fitplan.models.exercises import COMMON_EXERCISES, ExerciseCategory, ExerciseType, GeneratedExercise
from fitplan.models.plan import WorkoutPlan
from fitplan.models.user_profile import FitnessGoal, UserProfile
from fitplan.services import PlanService, RecordService
from fitplan.services.plan_service import INVALID_FREQUENCY


def _create_profile(db_path, **kwargs) -> int:
    params = dict(name="Test User", age=30, weight=80, fitness_goal=FitnessGoal.MUSCLE_GAIN)
    params.update(kwargs)
    return asyncio.run(UserProfileRepository(db_path).create(UserProfile(**params)))


@pytest.fixture
def user_id(seeded_db):
    return _create_profile(seeded_db)


@pytest.fixture
def plan_service(seeded_db):
    return PlanService(seeded_db, rng=random.Random(42))


@pytest.fixture
def plan(plan_service, user_id):
    return asyncio.run(plan_service.create_plan(user_id))


def _plan_ids(db_path, user_id) -> list[int]:
    async def fetch():
        async with connect(db_path) as db:
            cursor = await db.execute(
                "SELECT id FROM workout_plans WHERE user_id = ? ORDER BY id", (user_id,)
            )
            return [row["id"] for row in await cursor.fetchall()]

    return asyncio.run(fetch())


def _failing_insert(monkeypatch):
    async def fail(self, db, plan_id, exercise, position):
        raise aiosqlite.OperationalError("disk I/O error")

    monkeypatch.setattr(WorkoutPlanRepository, "_insert_exercise", fail)


class TestRepositories:
    """Tests for the aiosqlite repositories."""

    def test_seed_is_idempotent(self, seeded_db):
        assert asyncio.run(seed_exercises(seeded_db)) == 0
        catalog = asyncio.run(ExerciseRepository(seeded_db).list_all())
        assert len(catalog) == len(COMMON_EXERCISES)

    def test_catalog_roundtrip(self, seeded_db):
        catalog = asyncio.run(ExerciseRepository(seeded_db).list_all())
        template = next(t for t in catalog if t.name == "Goblet Squat")

        assert template.category is ExerciseCategory.STRENGTH
        assert "quads" in template.target_muscles
        assert all(t.is_valid for t in catalog)

    def test_profile_roundtrip(self, seeded_db, user_id):
        repo = UserProfileRepository(seeded_db)
        profile = asyncio.run(repo.get(user_id))

        assert profile.fitness_goal is FitnessGoal.MUSCLE_GAIN
        assert profile.created_at is not None

        profile.age = 41
        asyncio.run(repo.update(profile))
        assert asyncio.run(repo.get(user_id)).age == 41
        assert asyncio.run(repo.get_latest()).id == user_id

    def test_plan_insert_rolls_back(self, seeded_db, user_id):
        """A failing exercise insert leaves no plan behind."""
        repo = WorkoutPlanRepository(seeded_db)
        bad = GeneratedExercise(
            name="Broken",
            exercise_type=ExerciseType.STRENGTH,
            category=ExerciseCategory.STRENGTH,
            sets=0,
            reps=8,
            rest_time=60,
            difficulty=1,
        )

        with pytest.raises(PersistenceError):
            asyncio.run(repo.replace_for_user(WorkoutPlan(user_id=user_id, name="Plan"), [bad]))

        assert _plan_ids(seeded_db, user_id) == []

    def test_replace_removes_old_plan(self, seeded_db, user_id, plan):
        repo = WorkoutPlanRepository(seeded_db)
        new_id = asyncio.run(
            repo.replace_for_user(WorkoutPlan(user_id=user_id, name="Next"), plan.exercises[:1])
        )

        assert _plan_ids(seeded_db, user_id) == [new_id]
        assert len(asyncio.run(repo.get(new_id)).exercises) == 1

    def test_failed_replace_keeps_old_plan_and_records(self, seeded_db, user_id, plan, monkeypatch):
        """A write failure during replacement rolls back the delete too."""
        exercise = _strength_exercise(plan)
        asyncio.run(RecordService(seeded_db).record_workout(user_id, exercise.id, 2))
        _failing_insert(monkeypatch)

        with pytest.raises(PersistenceError):
            asyncio.run(
                WorkoutPlanRepository(seeded_db).replace_for_user(
                    WorkoutPlan(user_id=user_id, name="Next"), plan.exercises
                )
            )

        assert _plan_ids(seeded_db, user_id) == [plan.id]
        records = asyncio.run(WorkoutRecordRepository(seeded_db).list_for_user(user_id))
        assert [r.exercise_id for r in records] == [exercise.id]


class TestPlanService:
    """Tests for PlanService."""

    def test_create_plan(self, seeded_db, plan_service, user_id):
        plan = asyncio.run(plan_service.create_plan(user_id))

        assert plan.id is not None
        assert plan.name == "Muscle Gain Plan"
        assert plan.frequency == 3
        assert len(plan.exercises) == 5
        assert all(e.id is not None for e in plan.exercises)

        stored = asyncio.run(plan_service.get_current_plan(user_id))
        assert [e.name for e in stored.exercises] == [e.name for e in plan.exercises]
        assert stored.last_generated is not None

    def test_create_plan_replaces_existing(self, seeded_db, plan_service, user_id, plan):
        """A user keeps a single active plan."""
        new = asyncio.run(plan_service.create_plan(user_id, frequency=2))

        plan_ids = _plan_ids(seeded_db, user_id)
        assert plan_ids == [new.id]
        assert new.id != plan.id

    def test_create_plan_with_options(self, plan_service, user_id):
        plan = asyncio.run(
            plan_service.create_plan(user_id, name="Summer", description="Beach", frequency=5)
        )
        assert (plan.name, plan.description, plan.frequency) == ("Summer", "Beach", 5)

    def test_create_plan_bad_frequency(self, plan_service, user_id):
        with pytest.raises(ValidationError) as exc_info:
            asyncio.run(plan_service.create_plan(user_id, frequency=8))
        assert exc_info.value.message == INVALID_FREQUENCY

    def test_create_plan_incomplete_profile(self, seeded_db, plan_service):
        user_id = _create_profile(seeded_db, age=None)
        with pytest.raises(ValidationError):
            asyncio.run(plan_service.create_plan(user_id))

    def test_create_plan_unknown_user(self, plan_service):
        with pytest.raises(PersistenceError):
            asyncio.run(plan_service.create_plan(999))

    def test_regenerate_keeps_frequency(self, seeded_db, plan_service, user_id):
        old = asyncio.run(plan_service.create_plan(user_id, frequency=5))
        new = asyncio.run(plan_service.regenerate_plan(user_id))

        assert new.id != old.id
        assert new.frequency == 5
        assert asyncio.run(WorkoutPlanRepository(seeded_db).get(old.id)) is None

    def test_regenerate_failure_keeps_current_plan(self, seeded_db, plan_service, user_id, plan):
        profiles = UserProfileRepository(seeded_db)
        profile = asyncio.run(profiles.get(user_id))
        profile.age = None
        asyncio.run(profiles.update(profile))

        with pytest.raises(ValidationError):
            asyncio.run(plan_service.regenerate_plan(user_id))

        assert asyncio.run(plan_service.get_current_plan(user_id)).id == plan.id

    def test_regenerate_write_failure_keeps_current_plan(self, seeded_db, plan_service, user_id, plan, monkeypatch):
        """A failed insert during regeneration keeps the old plan and its history."""
        exercise = _strength_exercise(plan)
        asyncio.run(RecordService(seeded_db).record_workout(user_id, exercise.id, 2))
        _failing_insert(monkeypatch)

        with pytest.raises(PersistenceError):
            asyncio.run(plan_service.regenerate_plan(user_id))

        current = asyncio.run(plan_service.get_current_plan(user_id))
        assert current.id == plan.id
        assert [e.id for e in current.exercises] == [e.id for e in plan.exercises]
        records = asyncio.run(WorkoutRecordRepository(seeded_db).list_for_user(user_id))
        assert len(records) == 1

    def test_create_write_failure_keeps_current_plan(self, seeded_db, plan_service, user_id, plan, monkeypatch):
        _failing_insert(monkeypatch)

        with pytest.raises(PersistenceError):
            asyncio.run(plan_service.create_plan(user_id, frequency=4))

        assert _plan_ids(seeded_db, user_id) == [plan.id]
        assert plan_service._user_locks == {}

    def test_concurrent_regenerations_leave_one_plan(self, seeded_db, plan_service, user_id, plan):
        async def regenerate_twice():
            return await asyncio.gather(
                plan_service.regenerate_plan(user_id),
                plan_service.regenerate_plan(user_id),
            )

        asyncio.run(regenerate_twice())

        plan_ids = _plan_ids(seeded_db, user_id)
        assert len(plan_ids) == 1
        assert plan_service._user_locks == {}

    def test_delete_plan(self, plan_service, user_id, plan):
        asyncio.run(plan_service.delete_plan(plan.id))
        assert asyncio.run(plan_service.get_current_plan(user_id)) is None

        with pytest.raises(PersistenceError):
            asyncio.run(plan_service.delete_plan(plan.id))

    def test_update_frequency(self, plan_service, user_id, plan):
        asyncio.run(plan_service.update_frequency(plan.id, 6))
        assert asyncio.run(plan_service.get_current_plan(user_id)).frequency == 6

        with pytest.raises(ValidationError):
            asyncio.run(plan_service.update_frequency(plan.id, 0))
        with pytest.raises(PersistenceError):
            asyncio.run(plan_service.update_frequency(999, 4))

    def test_add_custom_exercise(self, plan_service, user_id, plan):
        data = {
            "name": "Farmer Carry",
            "target_muscles": ["forearms"],
            "sets": 3,
            "reps": 1,
            "rest_time": 90,
            "difficulty": 1,
        }
        exercise = asyncio.run(plan_service.add_custom_exercise(plan.id, data))

        stored = asyncio.run(plan_service.get_current_plan(user_id))
        assert stored.exercises[-1].id == exercise.id
        assert stored.exercises[-1].name == "Farmer Carry"

    def test_add_custom_exercise_invalid(self, plan_service, plan):
        with pytest.raises(ValidationError):
            asyncio.run(plan_service.add_custom_exercise(plan.id, {"name": ""}))

    def test_add_custom_exercise_unknown_plan(self, plan_service):
        data = {"name": "Carry", "target_muscles": ["traps"], "sets": 3, "reps": 5,
                "rest_time": 60, "difficulty": 1}
        with pytest.raises(PersistenceError):
            asyncio.run(plan_service.add_custom_exercise(999, data))


def _strength_exercise(plan):
    return next(e for e in plan.exercises if e.exercise_type is ExerciseType.STRENGTH)


class TestRecordService:
    """Tests for RecordService."""

    def test_record_toggle(self, seeded_db, user_id, plan):
        """Create, update in place, then remove by repeating the same count."""
        service = RecordService(seeded_db)
        exercise = _strength_exercise(plan)

        created = asyncio.run(service.record_workout(user_id, exercise.id, 2))
        assert created.id is not None
        assert not created.training_data.is_zero

        updated = asyncio.run(service.record_workout(user_id, exercise.id, 3))
        assert updated.id == created.id
        assert updated.completed_sets == 3

        removed = asyncio.run(service.record_workout(user_id, exercise.id, 3))
        assert removed is None
        records = WorkoutRecordRepository(seeded_db)
        assert asyncio.run(records.list_for_user(user_id)) == []

    def test_zero_sets_without_record_is_noop(self, seeded_db, user_id, plan):
        service = RecordService(seeded_db)
        assert asyncio.run(service.record_workout(user_id, plan.exercises[0].id, 0)) is None
        assert asyncio.run(WorkoutRecordRepository(seeded_db).list_for_user(user_id)) == []

    def test_warmup_record_has_zero_training_data(self, seeded_db, user_id, plan):
        warmup = next(e for e in plan.exercises if e.exercise_type is ExerciseType.WARMUP)
        record = asyncio.run(RecordService(seeded_db).record_workout(user_id, warmup.id, 2))
        assert record.training_data.is_zero

    def test_record_validation(self, seeded_db, user_id, plan):
        service = RecordService(seeded_db)
        with pytest.raises(ValidationError):
            asyncio.run(service.record_workout(user_id, plan.exercises[0].id, -1))
        with pytest.raises(PersistenceError):
            asyncio.run(service.record_workout(user_id, 999, 2))

    def test_monthly_records(self, seeded_db, user_id, plan):
        service = RecordService(seeded_db)
        exercise = _strength_exercise(plan)
        asyncio.run(service.record_workout(user_id, exercise.id, 3, when=datetime(2024, 3, 15, 10)))
        asyncio.run(service.record_workout(user_id, exercise.id, 2, when=datetime(2024, 4, 1, 9)))

        march = asyncio.run(service.monthly_records(user_id, 2024, 3))
        assert [r.completed_sets for r in march] == [3]

        with pytest.raises(ValidationError):
            asyncio.run(service.monthly_records(user_id, 2024, 13))

    def test_records_cascade_with_plan(self, seeded_db, plan_service, user_id, plan):
        service = RecordService(seeded_db)
        asyncio.run(service.record_workout(user_id, _strength_exercise(plan).id, 3))

        asyncio.run(plan_service.delete_plan(plan.id))

        assert asyncio.run(WorkoutRecordRepository(seeded_db).list_for_user(user_id)) == []

    def test_workout_stats(self, seeded_db, user_id, plan):
        service = RecordService(seeded_db)
        for exercise in plan.exercises:
            asyncio.run(service.record_workout(user_id, exercise.id, exercise.sets))

        metrics = asyncio.run(service.workout_stats(user_id))

        assert metrics.completion_rate == 100
        assert metrics.streak == 1
        assert metrics.total_workouts == 1
        assert metrics.total_time > 0

    def test_workout_stats_without_plan(self, seeded_db, user_id):
        metrics = asyncio.run(RecordService(seeded_db).workout_stats(user_id))
        assert metrics.total_workouts == 0
