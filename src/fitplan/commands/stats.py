"""Workout statistics command."""

import click

from ..services import RecordService
from .base import async_command, echo_info, ensure_initialized, format_duration, resolve_profile


@click.command()
@click.option("--user-id", "-u", type=int, help="Profile ID (default: most recent)")
@click.pass_context
@async_command
async def stats(ctx: click.Context, user_id: int | None):
    """Show completion, streak and training-time statistics."""
    ensure_initialized(ctx)
    profile = await resolve_profile(ctx, user_id)

    metrics = await RecordService().workout_stats(profile.id)
    if metrics.total_workouts == 0:
        echo_info("No workouts recorded for your current plan yet")

    click.echo()
    click.echo(f"Total training time: {format_duration(metrics.total_time)}")
    click.echo(f"Completion rate:     {metrics.completion_rate}%")
    click.echo(f"Current streak:      {metrics.streak} day(s)")
    click.echo(f"Best streak:         {metrics.best_streak} day(s)")
    click.echo(f"Workouts recorded:   {metrics.total_workouts}")
