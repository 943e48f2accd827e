"""Set logging command."""

from datetime import datetime

import click

from ..models.exercises import Exercise
from ..models.workout import SetInput
from ..services.catalog import CatalogService
from ..services.history import HistoryService
from ..services.set_logger import SetLogger
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_number,
)


async def resolve_exercise(catalog: CatalogService, ref: str) -> Exercise | None:
    """Look an exercise up by ID or by (approximate) name."""
    if ref.isdigit():
        return await catalog.get_exercise(int(ref))
    return await catalog.find_exercise(ref)


@click.command("log")
@click.argument("exercise")
@click.option("-w", "--weight", type=click.FloatRange(min=0), help="Weight lifted")
@click.option("-r", "--reps", type=click.IntRange(min=0), help="Repetitions")
@click.option("--rpe", type=click.FloatRange(1, 10), help="Rate of perceived exertion (1-10)")
@click.option("-d", "--duration", "duration_mins", type=click.FloatRange(min=0), help="Duration in minutes")
@click.option("-n", "--notes", help="Free-form notes")
@click.option("-s", "--set", "set_number", type=click.IntRange(min=1), default=1, show_default=True, help="Set number within the session")
@click.option("--at", "performed_at", type=click.DateTime(), help="When the set was performed (default: now)")
@click.pass_context
@async_command
async def log_set(
    ctx: click.Context,
    exercise: str,
    weight: float | None,
    reps: int | None,
    rpe: float | None,
    duration_mins: float | None,
    notes: str | None,
    set_number: int,
    performed_at: datetime | None,
):
    """Log one performed set of EXERCISE (name or ID).

    Examples:

        liftlog log "Bench Press" -w 60 -r 8 --rpe 8

        liftlog log 3 -w 100 -r 5 --set 2

        liftlog log Running -d 30
    """
    ensure_initialized(ctx)

    catalog = CatalogService()
    target = await resolve_exercise(catalog, exercise)
    if target is None:
        echo_error(f"Exercise '{exercise}' not found. See 'liftlog exercises list'.")
        ctx.exit(1)
    if not exercise.isdigit() and target.name.lower() != exercise.strip().lower():
        echo_warning(f"Matched '{exercise}' to {target.name}")

    previous = await HistoryService().get_previous_log(target.id, set_number)
    if previous:
        echo_info(
            f"Last time (set {set_number}): {format_number(previous.weight)} x "
            f"{previous.reps if previous.reps is not None else '-'}"
        )

    try:
        entry = SetInput(
            exercise_id=target.id,
            weight=weight,
            reps=reps,
            rpe=rpe,
            duration_mins=duration_mins,
            notes=notes,
            set_number=set_number,
            performed_at=performed_at,
        )
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    result = await SetLogger().log_set(entry)
    if not result:
        echo_error("Could not log set. Nothing was saved.")
        ctx.exit(1)

    echo_success(
        f"Logged {target.name} set {set_number}: "
        f"{format_number(weight)} x {reps if reps is not None else '-'}"
    )
    if result.new_pr:
        click.echo(click.style(f"New personal record: {format_number(weight)}!", fg="yellow", bold=True))
