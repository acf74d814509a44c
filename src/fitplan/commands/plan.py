"""Workout plan commands."""

import json

import click

from ..errors import WorkoutError, error_message
from ..models.exercises import ExerciseType, MuscleGroup
from ..services import PlanService
from .base import (
    async_command,
    build_preferences,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    preference_options,
    resolve_profile,
)

user_option = click.option(
    "--user-id", "-u", type=int, help="Profile ID (default: most recent)"
)


def _exercise_rows(plan) -> list[list[str]]:
    return [
        [
            str(e.id),
            e.name,
            e.exercise_type.value,
            str(e.sets),
            str(e.reps),
            f"{e.rest_time}s",
            str(e.difficulty),
        ]
        for e in plan.exercises
    ]


def _print_plan(plan) -> None:
    click.echo()
    click.echo(click.style(plan.name, bold=True))
    if plan.description:
        click.echo(plan.description)
    click.echo(f"Frequency: {plan.frequency}/week")
    click.echo()
    click.echo(
        format_table(["ID", "Exercise", "Type", "Sets", "Reps", "Rest", "Lvl"], _exercise_rows(plan))
    )


@click.group()
@click.pass_context
def plan(ctx):
    """Generate and manage your workout plan.

    Each profile has one current plan. Generating again adds a new
    plan; 'regenerate' replaces the current one.
    """
    ensure_initialized(ctx)


@plan.command()
@user_option
@click.option("--name", "-n", help="Plan name (default: based on your goal)")
@click.option("--description", help="Plan description")
@click.option("--frequency", type=int, help="Training days per week (1-7)")
@preference_options
@click.pass_context
@async_command
async def generate(
    ctx: click.Context,
    user_id: int | None,
    name: str | None,
    description: str | None,
    frequency: int | None,
    difficulty: str | None,
    focus: tuple[str, ...],
    session_minutes: int | None,
):
    """Generate a new workout plan from your profile.

    Examples:

        fitplan plan generate

        fitplan plan generate --focus legs --focus core -t 30
    """
    profile = await resolve_profile(ctx, user_id)
    preferences = build_preferences(difficulty, focus, session_minutes)

    echo_info(f"Generating plan for {profile.name}...")
    try:
        new_plan = await PlanService().create_plan(
            profile.id,
            name=name,
            description=description,
            frequency=frequency,
            preferences=preferences,
        )
    except WorkoutError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Plan created (ID: {new_plan.id})")
    _print_plan(new_plan)


@plan.command()
@user_option
@preference_options
@click.pass_context
@async_command
async def regenerate(
    ctx: click.Context,
    user_id: int | None,
    difficulty: str | None,
    focus: tuple[str, ...],
    session_minutes: int | None,
):
    """Replace the current plan with a freshly generated one.

    Recorded progress on the old plan is removed with it.
    """
    profile = await resolve_profile(ctx, user_id)
    preferences = build_preferences(difficulty, focus, session_minutes)

    try:
        new_plan = await PlanService().regenerate_plan(profile.id, preferences)
    except WorkoutError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Plan regenerated (ID: {new_plan.id})")
    _print_plan(new_plan)


@plan.command()
@user_option
@click.pass_context
@async_command
async def show(ctx: click.Context, user_id: int | None):
    """Show the current plan."""
    profile = await resolve_profile(ctx, user_id)

    current = await PlanService().get_current_plan(profile.id)
    if current is None:
        echo_info("No plan yet. Generate one with 'fitplan plan generate'")
        return

    _print_plan(current)


@plan.command()
@click.argument("plan_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx: click.Context, plan_id: int, yes: bool):
    """Delete a plan along with its recorded progress."""
    if not yes and not click.confirm(f"Delete plan {plan_id} and its records?"):
        echo_info("Cancelled")
        return

    try:
        await PlanService().delete_plan(plan_id)
    except WorkoutError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Deleted plan {plan_id}")


@plan.command()
@click.argument("plan_id", type=int)
@click.argument("days", type=int)
@click.pass_context
@async_command
async def frequency(ctx: click.Context, plan_id: int, days: int):
    """Set how many days per week a plan is trained."""
    try:
        await PlanService().update_frequency(plan_id, days)
    except WorkoutError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Plan {plan_id} set to {days}/week")


@plan.command("add-exercise")
@click.argument("plan_id", type=int)
@click.argument("name")
@click.option(
    "--muscle",
    "-m",
    "muscles",
    multiple=True,
    type=click.Choice([m.value for m in MuscleGroup]),
    help="Target muscle group (repeatable)",
)
@click.option("--sets", type=int, default=3, show_default=True)
@click.option("--reps", type=int, default=10, show_default=True)
@click.option("--rest", "rest_time", type=int, default=60, show_default=True, help="Rest in seconds")
@click.option("--difficulty", "-d", type=int, default=1, show_default=True)
@click.option(
    "--type",
    "exercise_type",
    type=click.Choice([t.value for t in ExerciseType]),
    default=ExerciseType.STRENGTH.value,
    show_default=True,
)
@click.option("--notes", default="", help="Form cues or other notes")
@click.pass_context
@async_command
async def add_exercise(
    ctx: click.Context,
    plan_id: int,
    name: str,
    muscles: tuple[str, ...],
    sets: int,
    reps: int,
    rest_time: int,
    difficulty: int,
    exercise_type: str,
    notes: str,
):
    """Add your own exercise to a plan.

    Example:

        fitplan plan add-exercise 1 "Farmer Carry" -m forearms -m traps --sets 3 --reps 1
    """
    data = {
        "name": name,
        "target_muscles": list(muscles),
        "sets": sets,
        "reps": reps,
        "rest_time": rest_time,
        "difficulty": difficulty,
        "exercise_type": exercise_type,
        "notes": notes,
    }

    try:
        exercise = await PlanService().add_custom_exercise(plan_id, data)
    except WorkoutError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Added {exercise.name} (ID: {exercise.id}) to plan {plan_id}")


@plan.command()
@user_option
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--clipboard", "-c", is_flag=True, help="Copy to clipboard instead of printing")
@click.option("--output", "-o", type=click.Path(), help="Write to file instead of stdout")
@click.pass_context
@async_command
async def export(
    ctx: click.Context,
    user_id: int | None,
    format: str,
    clipboard: bool,
    output: str | None,
):
    """Export the current plan as text or JSON.

    Examples:

        fitplan plan export --clipboard

        fitplan plan export --format json -o plan.json
    """
    profile = await resolve_profile(ctx, user_id)

    current = await PlanService().get_current_plan(profile.id)
    if current is None:
        echo_error("No plan to export. Generate one with 'fitplan plan generate'")
        ctx.exit(1)

    if format == "json":
        content = json.dumps({"id": current.id, **current.to_dict()}, indent=2)
    else:
        content = current.get_summary()

    if clipboard:
        import pyperclip

        try:
            pyperclip.copy(content)
        except pyperclip.PyperclipException as e:
            echo_warning(
                f"Clipboard unavailable: {error_message(e, 'no copy mechanism found')}"
            )
            click.echo(content)
            return
        echo_success("Copied to clipboard!")

    elif output:
        with open(output, "w") as f:
            f.write(content)
        echo_success(f"Exported to {output}")

    else:
        click.echo(content)
