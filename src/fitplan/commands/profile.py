"""User profile commands."""

import click

from ..db import UserProfileRepository
from ..models.user_profile import FitnessGoal, Gender, UserProfile
from .base import (
    async_command,
    build_preferences,
    echo_info,
    echo_success,
    ensure_initialized,
    preference_options,
    resolve_profile,
)


@click.group()
def profile():
    """Manage your fitness profile."""
    pass


@profile.command("setup")
@click.option("--user-id", "-u", type=int, help="Edit an existing profile")
@click.pass_context
@async_command
async def setup(ctx: click.Context, user_id: int | None):
    """Create or edit a profile with an interactive questionnaire."""
    ensure_initialized(ctx)

    from ..clients.manual import ManualInputClient

    repo = UserProfileRepository()
    existing = await repo.get(user_id) if user_id else None

    client = ManualInputClient()
    collected = await client.collect_profile(existing)

    if collected.id is not None:
        await repo.update(collected)
        echo_success(f"Profile {collected.id} updated")
    else:
        profile_id = await repo.create(collected)
        echo_success(f"Profile created (ID: {profile_id})")

    click.echo()
    click.echo(collected.get_summary())


@profile.command("set")
@click.option("--user-id", "-u", type=int, help="Profile to update (default: create new)")
@click.option("--name", "-n", help="Display name")
@click.option("--age", type=click.IntRange(0, 120))
@click.option("--gender", type=click.Choice([g.value for g in Gender]))
@click.option("--height", type=click.FloatRange(50, 260), help="Height in cm")
@click.option("--weight", type=click.FloatRange(20, 400), help="Body weight in kg")
@click.option("--goal", type=click.Choice([g.value for g in FitnessGoal]))
@preference_options
@click.pass_context
@async_command
async def set_profile(
    ctx: click.Context,
    user_id: int | None,
    name: str | None,
    age: int | None,
    gender: str | None,
    height: float | None,
    weight: float | None,
    goal: str | None,
    difficulty: str | None,
    focus: tuple[str, ...],
    session_minutes: int | None,
):
    """Create or update a profile from options.

    Examples:

        fitplan profile set --name Sam --age 31 --goal MUSCLE_GAIN --weight 78

        fitplan profile set -u 1 --focus legs --focus core
    """
    ensure_initialized(ctx)
    repo = UserProfileRepository()

    if user_id:
        current = await resolve_profile(ctx, user_id)
    else:
        current = UserProfile(name=name or "User")

    if name:
        current.name = name
    if age is not None:
        current.age = age
    if gender:
        current.gender = Gender(gender)
    if height is not None:
        current.height = height
    if weight is not None:
        current.weight = weight
    if goal:
        current.fitness_goal = FitnessGoal(goal)

    preferences = build_preferences(difficulty, focus, session_minutes)
    if preferences is not None:
        current.training_preferences = preferences

    if current.id is not None:
        await repo.update(current)
        echo_success(f"Profile {current.id} updated")
    else:
        profile_id = await repo.create(current)
        echo_success(f"Profile created (ID: {profile_id})")

    click.echo()
    click.echo(current.get_summary())


@profile.command("show")
@click.option("--user-id", "-u", type=int, help="Profile ID (default: most recent)")
@click.pass_context
@async_command
async def show(ctx: click.Context, user_id: int | None):
    """Show a profile."""
    ensure_initialized(ctx)
    current = await resolve_profile(ctx, user_id)

    echo_info(f"Profile ID {current.id}")
    click.echo(current.get_summary())
