"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..db import UserProfileRepository, get_db_path
from ..models.exercises import FocusArea
from ..models.user_profile import DifficultyPreference, TrainingPreferences


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'fitplan init' first."
        )
        ctx.exit(1)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message, err=True)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_duration(seconds: int) -> str:
    """Format seconds as '12m 30s'."""
    minutes, secs = divmod(int(seconds), 60)
    if minutes and secs:
        return f"{minutes}m {secs}s"
    if minutes:
        return f"{minutes}m"
    return f"{secs}s"


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row))
        )

    return "\n".join(line.rstrip() for line in lines)


async def resolve_profile(ctx: click.Context, user_id: int | None):
    """Get the profile a command acts on: by ID, or the most recent one."""
    repo = UserProfileRepository()
    profile = await repo.get(user_id) if user_id else await repo.get_latest()
    if profile is None:
        if user_id:
            echo_error(f"Profile ID {user_id} not found")
        else:
            echo_error("No profile found. Run 'fitplan profile setup' first.")
        ctx.exit(1)
    return profile


def preference_options(f):
    """Attach --difficulty/--focus/--session-minutes options to a command."""
    f = click.option(
        "--session-minutes",
        "-t",
        type=click.IntRange(10, 180),
        help="Session length in minutes (scales sets and rest)",
    )(f)
    f = click.option(
        "--focus",
        "-f",
        multiple=True,
        type=click.Choice([fa.value for fa in FocusArea]),
        help="Focus area to rank first (repeatable)",
    )(f)
    f = click.option(
        "--difficulty",
        "-d",
        type=click.Choice([d.value for d in DifficultyPreference]),
        help="Override the age-based difficulty",
    )(f)
    return f


def build_preferences(difficulty: str | None, focus: tuple[str, ...], session_minutes: int | None):
    """Build TrainingPreferences from CLI options, or None if none were given."""
    if not difficulty and not focus and not session_minutes:
        return None
    return TrainingPreferences(
        difficulty=DifficultyPreference(difficulty) if difficulty else None,
        focus_areas=[FocusArea(fa) for fa in focus],
        time_per_session=session_minutes,
    )
