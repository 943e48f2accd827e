"""Exercise catalog commands."""

import click

from ..models.exercises import ExerciseCategory
from ..services.catalog import CatalogService
from ..services.pr_tracker import PRTracker
from ..utils.exercise_utils import group_by_category
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_number,
    format_table,
)

CATEGORY_CHOICE = click.Choice(
    [c.value for c in ExerciseCategory if c != ExerciseCategory.UNKNOWN],
    case_sensitive=False,
)


@click.group()
def exercises():
    """Manage the exercise catalog."""
    pass


@exercises.command("list")
@click.pass_context
@async_command
async def list_exercises(ctx: click.Context):
    """List exercises by category with their personal records."""
    ensure_initialized(ctx)

    catalog = await CatalogService().list_exercises()
    if not catalog:
        echo_info("No exercises yet. Add one with 'liftlog exercises add'.")
        return

    for category, items in group_by_category(catalog).items():
        if not items:
            continue
        click.echo()
        click.echo(click.style(category.value, bold=True))
        rows = [[str(e.id), e.name, format_number(e.personal_record)] for e in items]
        click.echo(format_table(["ID", "Name", "PR"], rows))


@exercises.command("add")
@click.argument("name")
@click.option("-c", "--category", type=CATEGORY_CHOICE, default=ExerciseCategory.UPPER_BODY.value, show_default=True)
@click.pass_context
@async_command
async def add(ctx: click.Context, name: str, category: str):
    """Add an exercise to the catalog."""
    ensure_initialized(ctx)

    exercise = await CatalogService().create_exercise(name, category)
    if exercise is None:
        echo_error(f"Could not add '{name}' (does it already exist?)")
        ctx.exit(1)
    echo_success(f"Added {exercise.name} ({exercise.category.value}) with ID {exercise.id}")


@exercises.command("edit")
@click.argument("exercise_id", type=int)
@click.option("--name", help="New name")
@click.option("-c", "--category", type=CATEGORY_CHOICE, help="New category")
@click.pass_context
@async_command
async def edit(ctx: click.Context, exercise_id: int, name: str | None, category: str | None):
    """Rename or re-categorize an exercise."""
    ensure_initialized(ctx)

    if name is None and category is None:
        echo_error("Nothing to change. Pass --name and/or --category.")
        ctx.exit(1)

    updated = await CatalogService().update_exercise(exercise_id, name=name, category=category)
    if updated is None:
        echo_error(f"Could not update exercise {exercise_id} (is the name already taken?)")
        ctx.exit(1)
    if not updated:
        echo_error(f"Exercise {exercise_id} not found.")
        ctx.exit(1)
    echo_success(f"Updated exercise {exercise_id}")


@exercises.command("remove")
@click.argument("exercise_id", type=int)
@click.confirmation_option(prompt="Remove this exercise from the catalog?")
@click.pass_context
@async_command
async def remove(ctx: click.Context, exercise_id: int):
    """Remove an exercise from the catalog. Logged sets are kept."""
    ensure_initialized(ctx)

    if not await CatalogService().delete_exercise(exercise_id):
        echo_error(f"Exercise {exercise_id} not found.")
        ctx.exit(1)
    echo_success(f"Removed exercise {exercise_id}")


@exercises.command("reconcile")
@click.argument("exercise_id", type=int)
@click.pass_context
@async_command
async def reconcile(ctx: click.Context, exercise_id: int):
    """Raise a stale PR to the heaviest weight in the history.

    The PR never goes down, even after heavy sets were edited or deleted.
    """
    ensure_initialized(ctx)

    record = await PRTracker().reconcile(exercise_id)
    if record is None:
        echo_error(f"Exercise {exercise_id} not found.")
        ctx.exit(1)
    echo_success(f"Personal record for exercise {exercise_id}: {format_number(record)}")
