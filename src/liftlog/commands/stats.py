"""Fitness statistics command."""

import json
from datetime import datetime

import click

from ..services.stats import StatsService
from .base import async_command, ensure_initialized, format_number, format_table

HEATMAP_GLYPHS = ".:-=#"


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the raw report as JSON")
@click.option("--now", type=click.DateTime(), help="Reference time (default: now)")
@click.option(
    "--split-days",
    type=click.IntRange(min=0),
    help="Training split window in days (0 = all history)",
)
@click.pass_context
@async_command
async def stats(ctx: click.Context, as_json: bool, now: datetime | None, split_days: int | None):
    """Show streak, weekly frequency, PRs, split, trend and consistency."""
    ensure_initialized(ctx)

    report = await StatsService(split_window_days=split_days).get_fitness_stats(now)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    click.echo()
    click.echo(click.style("Fitness Stats", bold=True))
    click.echo("=" * 50)
    click.echo(f"Workout days: {report.total_workouts}")
    click.echo(f"Current streak: {report.streak} day{'s' if report.streak != 1 else ''}")
    click.echo(f"Avg RPE (7 days): {format_number(report.weekly_avg_rpe)}")

    click.echo()
    click.echo(click.style("This Week:", bold=True))
    click.echo(
        "  "
        + "  ".join(
            click.style(day.day, fg="green") if day.count else day.day
            for day in report.weekly_frequency
        )
    )

    click.echo()
    click.echo(click.style("Recent PRs:", bold=True))
    if report.recent_prs:
        rows = [
            [pr.exercise, format_number(pr.weight), pr.date.isoformat()]
            for pr in report.recent_prs
        ]
        click.echo(format_table(["Exercise", "Weight", "Date"], rows))
    else:
        click.echo("  No PRs yet.")

    click.echo()
    click.echo(click.style("Training Split:", bold=True))
    total = sum(entry.value for entry in report.training_split)
    for entry in report.training_split:
        click.echo(f"  {entry.name:<12} {entry.value:>4} sets ({entry.value / total:.0%})")
    if not report.training_split:
        click.echo("  No data yet.")

    click.echo()
    click.echo(click.style("12-Week Trend (sets):", bold=True))
    rows = [
        [w.week, w.upper_body, w.lower_body, w.cardio, w.functional]
        for w in report.trend
    ]
    click.echo(format_table(["Week", "Upper", "Lower", "Cardio", "Functional"], rows))

    click.echo()
    click.echo(click.style("Consistency (90 days):", bold=True))
    levels = {cell.date: cell.level for cell in report.consistency}
    if levels:
        first = min(levels)
        last = max(levels)
        span = (last - first).days + 1
        cells = [
            HEATMAP_GLYPHS[levels.get(first.fromordinal(first.toordinal() + i), 0)]
            for i in range(span)
        ]
        click.echo(f"  {first.isoformat()} " + "".join(cells) + f" {last.isoformat()}")
    else:
        click.echo("  No activity yet.")
