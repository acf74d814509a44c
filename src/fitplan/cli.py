"""CLI entry point for fitplan."""

import click

from . import __version__
from .commands import history, init, plan, profile, record, serve, stats
from .config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="fitplan")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override FITPLAN_LOG_LEVEL",
)
def main(log_level: str | None):
    """fitplan: workout plan generator and progress tracker.

    Builds a plan from your age, goal and preferences, then tracks
    completed sets, streaks and estimated training load.

    Example usage:

        # Initialize the project
        fitplan init

        # Create your profile
        fitplan profile setup

        # Generate and view a plan
        fitplan plan generate
        fitplan plan show

        # Record sets and check progress
        fitplan record "push-up" 3
        fitplan stats
    """
    configure_logging(log_level)


# Register commands
main.add_command(init)
main.add_command(profile)
main.add_command(plan)
main.add_command(record)
main.add_command(history)
main.add_command(stats)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
