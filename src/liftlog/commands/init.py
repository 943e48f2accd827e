"""Initialize project command."""

import click

from ..db import get_db_path, init_db, seed_exercises
from .base import async_command, echo_info, echo_success, get_data_dir


@click.command()
@click.option("--no-seed", is_flag=True, help="Do not add the starter exercises")
@async_command
async def init(no_seed: bool):
    """Initialize the liftlog database.

    Creates the data directory and the SQLite schema, then fills the
    exercise catalog with a starter set of exercises.
    """
    data_dir = get_data_dir()
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing liftlog in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    if not no_seed:
        added = await seed_exercises(db_path)
        echo_success(f"Exercise catalog populated ({added} new exercises)")

    click.echo()
    click.echo("liftlog is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Log a set:")
    click.echo('     liftlog log "Bench Press" --weight 60 --reps 8 --rpe 8')
    click.echo()
    click.echo("  2. See your stats:")
    click.echo("     liftlog stats")
