"""Workout history commands."""

from datetime import datetime

import click

from ..services.history import HistoryService
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
def history():
    """Browse and correct logged sets."""
    pass


@history.command("list")
@click.option("-l", "--limit", type=click.IntRange(min=1), help="Number of sets to show")
@click.option("--offset", type=click.IntRange(min=0), default=0)
@click.pass_context
@async_command
async def list_history(ctx: click.Context, limit: int | None, offset: int):
    """List recent sets, newest first."""
    ensure_initialized(ctx)

    service = HistoryService()
    logs = await service.get_history(limit, offset)
    if not logs:
        echo_info("No sets logged yet.")
        return

    rows = [
        [
            str(log.id),
            log.date.astimezone(service.tz).strftime("%Y-%m-%d %H:%M"),
            log.exercise_name or "Unknown Exercise",
            str(log.set_number),
            format_number(log.weight),
            log.reps if log.reps is not None else "-",
            format_number(log.rpe),
            "PR" if log.is_pr else "",
        ]
        for log in logs
    ]
    click.echo(format_table(["ID", "Date", "Exercise", "Set", "Weight", "Reps", "RPE", ""], rows))


@history.command("sessions")
@click.option("-l", "--limit", type=click.IntRange(min=1), help="Number of sets to group")
@click.pass_context
@async_command
async def sessions(ctx: click.Context, limit: int | None):
    """Show recent sets grouped by training day."""
    ensure_initialized(ctx)

    grouped = await HistoryService().get_sessions(limit)
    if not grouped:
        echo_info("No sets logged yet.")
        return

    for session in grouped:
        categories = ", ".join(sorted(session.categories)) or "-"
        click.echo()
        click.echo(
            click.style(f"{session.date:%a, %b %d %Y}", bold=True)
            + f"  {session.total_sets} sets  [{categories}]"
        )
        for name, logs in session.exercises.items():
            sets = ", ".join(
                f"{format_number(log.weight)}x{log.reps if log.reps is not None else '-'}"
                + ("*" if log.is_pr else "")
                for log in sorted(logs, key=lambda log: log.set_number)
            )
            click.echo(f"  {name}: {sets}")


@history.command("edit")
@click.argument("log_id", type=int)
@click.option("-w", "--weight", type=click.FloatRange(min=0))
@click.option("-r", "--reps", type=click.IntRange(min=0))
@click.option("--rpe", type=click.FloatRange(1, 10))
@click.option("-d", "--duration", "duration_mins", type=click.FloatRange(min=0))
@click.option("-n", "--notes")
@click.option("-s", "--set", "set_number", type=click.IntRange(min=1))
@click.pass_context
@async_command
async def edit(ctx: click.Context, log_id: int, **fields):
    """Correct a logged set.

    Only the given fields change. The set's PR flag is kept as it was
    when the set was logged.
    """
    ensure_initialized(ctx)

    changes = {key: value for key, value in fields.items() if value is not None}
    if not changes:
        echo_error("Nothing to change. Pass at least one option.")
        ctx.exit(1)

    if not await HistoryService().update_log(log_id, **changes):
        echo_error(f"Set {log_id} not found.")
        ctx.exit(1)
    echo_success(f"Updated set {log_id}")


@history.command("delete")
@click.argument("log_id", type=int)
@click.pass_context
@async_command
async def delete(ctx: click.Context, log_id: int):
    """Delete a logged set."""
    ensure_initialized(ctx)

    if not await HistoryService().delete_log(log_id):
        echo_error(f"Set {log_id} not found.")
        ctx.exit(1)
    echo_success(f"Deleted set {log_id}")


@history.command("delete-day")
@click.argument("day", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@async_command
async def delete_day(ctx: click.Context, day: datetime, yes: bool):
    """Delete every set logged on DAY (YYYY-MM-DD)."""
    ensure_initialized(ctx)

    if not yes and not click.confirm(f"Delete all sets from {day:%Y-%m-%d}?"):
        return

    if not await HistoryService().delete_session(day.date()):
        echo_error("Could not delete session.")
        ctx.exit(1)
    echo_success(f"Deleted session {day:%Y-%m-%d}")
