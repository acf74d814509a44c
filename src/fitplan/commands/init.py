"""Initialize project command."""

import click

from ..config import get_settings
from ..db import get_db_path, init_db, seed_exercises
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the fitplan database.

    This creates the data directory and initializes the SQLite database
    with the required schema and the built-in exercise library.
    """
    data_dir = get_settings().data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing fitplan in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    count = await seed_exercises(db_path)
    echo_success(f"Exercise library populated ({count} new exercises)")

    click.echo()
    click.echo("fitplan is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Create your profile:")
    click.echo("     fitplan profile setup")
    click.echo()
    click.echo("  2. Generate a plan:")
    click.echo("     fitplan plan generate")
