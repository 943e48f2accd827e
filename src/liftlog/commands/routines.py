"""Routine (workout group) commands."""

import click

from ..services.catalog import CatalogService
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_number,
    format_table,
)


@click.group()
def routines():
    """Organize exercises into routines with default sets, reps and weights."""
    pass


@routines.command("list")
@click.pass_context
@async_command
async def list_routines(ctx: click.Context):
    """List all routines."""
    ensure_initialized(ctx)

    groups = await CatalogService().list_groups()
    if not groups:
        echo_info("No routines yet. Create one with 'liftlog routines create'.")
        return
    click.echo(format_table(["ID", "Name"], [[str(g.id), g.name] for g in groups]))


@routines.command("show")
@click.argument("group_id", type=int)
@click.pass_context
@async_command
async def show(ctx: click.Context, group_id: int):
    """Show a routine's exercises and their defaults."""
    ensure_initialized(ctx)

    items = await CatalogService().get_routine_exercises(group_id)
    if not items:
        echo_info(f"Routine {group_id} has no exercises.")
        return

    rows = [
        [
            str(item.exercise_id),
            item.name,
            str(item.default_sets),
            item.default_reps if item.default_reps is not None else "-",
            format_number(item.default_weight),
            item.notes or "",
        ]
        for item in items
    ]
    click.echo(format_table(["ID", "Exercise", "Sets", "Reps", "Weight", "Notes"], rows))


@routines.command("create")
@click.argument("name")
@click.pass_context
@async_command
async def create(ctx: click.Context, name: str):
    """Create a routine."""
    ensure_initialized(ctx)

    group = await CatalogService().create_group(name)
    if group is None:
        echo_error("Could not create routine.")
        ctx.exit(1)
    echo_success(f"Created routine {group.name} with ID {group.id}")


@routines.command("delete")
@click.argument("group_id", type=int)
@click.confirmation_option(prompt="Delete this routine?")
@click.pass_context
@async_command
async def delete(ctx: click.Context, group_id: int):
    """Delete a routine. Its exercises stay in the catalog."""
    ensure_initialized(ctx)

    if not await CatalogService().delete_group(group_id):
        echo_error(f"Routine {group_id} not found.")
        ctx.exit(1)
    echo_success(f"Deleted routine {group_id}")


@routines.command("add")
@click.argument("group_id", type=int)
@click.argument("exercise_id", type=int)
@click.option("--sets", "default_sets", type=click.IntRange(min=1))
@click.option("--reps", "default_reps", type=click.IntRange(min=0))
@click.option("-w", "--weight", "default_weight", type=click.FloatRange(min=0))
@click.option("-d", "--duration", "default_duration_mins", type=click.FloatRange(min=0))
@click.option("-n", "--notes")
@click.pass_context
@async_command
async def add(ctx: click.Context, group_id: int, exercise_id: int, **defaults):
    """Attach an exercise to a routine, optionally with defaults."""
    ensure_initialized(ctx)

    catalog = CatalogService()
    added = await catalog.add_exercise_to_routine(group_id, exercise_id)
    if added is None:
        echo_error("Could not add exercise to routine (already attached?)")
        ctx.exit(1)
    if not added:
        echo_error(f"Routine {group_id} or exercise {exercise_id} not found.")
        ctx.exit(1)

    changes = {key: value for key, value in defaults.items() if value is not None}
    if changes:
        await catalog.update_routine_exercise(group_id, exercise_id, **changes)
    echo_success(f"Added exercise {exercise_id} to routine {group_id}")


@routines.command("remove")
@click.argument("group_id", type=int)
@click.argument("exercise_id", type=int)
@click.pass_context
@async_command
async def remove(ctx: click.Context, group_id: int, exercise_id: int):
    """Detach an exercise from a routine."""
    ensure_initialized(ctx)

    if not await CatalogService().remove_exercise_from_routine(group_id, exercise_id):
        echo_error(f"Exercise {exercise_id} is not in routine {group_id}.")
        ctx.exit(1)
    echo_success(f"Removed exercise {exercise_id} from routine {group_id}")
