"""Workout recording commands."""

from datetime import date, datetime

import click

from ..errors import WorkoutError
from ..services import PlanService, RecordService
from ..services.metrics import calculate_training_volume
from ..utils.exercise_utils import find_matching_exercise
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_duration,
    format_table,
    resolve_profile,
)


@click.command()
@click.argument("exercise")
@click.argument("completed_sets", type=int)
@click.option("--reps", "completed_reps", type=int, default=0, help="Reps completed in total")
@click.option("--notes", default="", help="Notes for this session")
@click.option(
    "--date",
    "when",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Day to record (default: today)",
)
@click.option("--user-id", "-u", type=int, help="Profile ID (default: most recent)")
@click.pass_context
@async_command
async def record(
    ctx: click.Context,
    exercise: str,
    completed_sets: int,
    completed_reps: int,
    notes: str,
    when: datetime | None,
    user_id: int | None,
):
    """Record completed sets for an exercise in your current plan.

    EXERCISE is a plan exercise ID or name. Recording the same number of
    sets twice on one day removes the entry again.

    Examples:

        fitplan record 12 3

        fitplan record "goblet squat" 4 --reps 40
    """
    ensure_initialized(ctx)
    profile = await resolve_profile(ctx, user_id)

    current = await PlanService().get_current_plan(profile.id)
    if current is None:
        echo_error("No plan yet. Generate one with 'fitplan plan generate'")
        ctx.exit(1)

    if exercise.isdigit():
        target = next((e for e in current.exercises if e.id == int(exercise)), None)
    else:
        target = find_matching_exercise(exercise, current.exercises)
    if target is None:
        echo_error(f"No exercise matching '{exercise}' in your current plan")
        ctx.exit(1)

    if when is not None:
        when = datetime.combine(when.date(), datetime.now().time())

    try:
        stored = await RecordService().record_workout(
            profile.id,
            target.id,
            completed_sets,
            completed_reps=completed_reps,
            notes=notes,
            when=when,
        )
    except WorkoutError as e:
        echo_error(e.message)
        ctx.exit(1)

    if stored is None:
        echo_info(f"No record kept for {target.name}")
        return

    echo_success(f"Recorded {completed_sets}/{target.sets} sets of {target.name}")
    data = stored.training_data
    if data is None or data.is_zero:
        echo_info("Training data not estimated for these parameters")
    else:
        click.echo(
            f"  Duration: {format_duration(data.duration)}  "
            f"Intensity: {data.intensity}  Calories: {data.calories_burned}"
        )


def _volume(completed_sets: int, exercise) -> str:
    if exercise is None:
        return "-"
    return str(calculate_training_volume(completed_sets, exercise.reps))


@click.command()
@click.option("--month", "-m", help="Month as YYYY-MM (default: current month)")
@click.option("--user-id", "-u", type=int, help="Profile ID (default: most recent)")
@click.pass_context
@async_command
async def history(ctx: click.Context, month: str | None, user_id: int | None):
    """List recorded workouts for a month."""
    ensure_initialized(ctx)
    profile = await resolve_profile(ctx, user_id)

    if month:
        try:
            parsed = datetime.strptime(month, "%Y-%m")
        except ValueError:
            echo_error(f"Invalid month '{month}', expected YYYY-MM")
            ctx.exit(1)
        year, month_number = parsed.year, parsed.month
    else:
        today = date.today()
        year, month_number = today.year, today.month

    records = await RecordService().monthly_records(profile.id, year, month_number)
    if not records:
        echo_info(f"No workouts recorded in {year}-{month_number:02d}")
        return

    current = await PlanService().get_current_plan(profile.id)
    exercises = {e.id: e for e in current.exercises} if current else {}

    rows = []
    for r in records:
        data = r.training_data
        exercise = exercises.get(r.exercise_id)
        rows.append([
            r.date.strftime("%Y-%m-%d"),
            exercise.name if exercise else f"#{r.exercise_id}",
            str(r.completed_sets),
            _volume(r.completed_sets, exercise),
            format_duration(data.duration) if data else "-",
            str(data.calories_burned) if data else "-",
        ])

    click.echo()
    click.echo(format_table(["Date", "Exercise", "Sets", "Reps", "Time", "kcal"], rows))
    click.echo()
    click.echo(f"Total: {len(records)} record(s)")
