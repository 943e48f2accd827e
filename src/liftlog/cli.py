"""CLI entry point for liftlog."""

import click

from . import __version__
from .commands import exercises, history, init, log_set, routines, serve, stats
from .config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="liftlog")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """liftlog: workout logging and fitness analytics.

    Log sets, track personal records, and see streaks, weekly frequency,
    training split, trends and consistency from your history.

    Example usage:

        # Initialize the database
        liftlog init

        # Log a set
        liftlog log "Bench Press" -w 60 -r 8 --rpe 8

        # See your stats
        liftlog stats
    """
    configure_logging("DEBUG" if verbose else None)


# Register commands
main.add_command(init)
main.add_command(exercises)
main.add_command(routines)
main.add_command(log_set)
main.add_command(history)
main.add_command(stats)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
