"""Fitness statistics derived from the full set history.

``compute_fitness_stats`` is a pure function of the logs and a reference
"now": one pass fills the accumulators, then the fixed-width windows (7
days, 12 weeks) are materialized with zeros where nothing was logged.
"""

import logging
import math
from collections import Counter
from datetime import date, datetime, timedelta, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Iterable

from ..config import get_settings
from ..db.engine import get_db_path
from ..db.repositories import WorkoutLogRepository
from ..exceptions import StoreError
from ..models.exercises import ExerciseCategory
from ..models.stats import (
    ConsistencyDay,
    DayFrequency,
    FitnessStats,
    RecentPR,
    SplitEntry,
    TrendWeek,
)
from ..models.workout import WorkoutLog
from ..utils.calendar import (
    calendar_day,
    day_name,
    day_window,
    parse_timestamp,
    resolve_timezone,
    week_start,
)

logger = logging.getLogger(__name__)

WEEK_DAYS = 7
TREND_WEEKS = 12
HEATMAP_DAYS = 90
RECENT_PR_LIMIT = 5
SETS_PER_LEVEL = 3
MAX_LEVEL = 4
DEFAULT_SPLIT_WINDOW_DAYS = 30


def consistency_level(count: int) -> int:
    """Heatmap intensity: 1 per started block of three sets, capped at 4."""
    return min(math.ceil(count / SETS_PER_LEVEL), MAX_LEVEL)


def compute_streak(days: Iterable[date], today: date) -> int:
    """Consecutive training days ending today or yesterday.

    Returns 0 if the most recent training day is older than yesterday.
    """
    ordered = sorted(set(days), reverse=True)
    if not ordered or ordered[0] not in (today, today - timedelta(days=1)):
        return 0

    streak = 1
    for newer, older in zip(ordered, ordered[1:]):
        if newer - older != timedelta(days=1):
            break
        streak += 1
    return streak


def round_one_decimal(value: float) -> float:
    # Half away from zero; round() would give banker's rounding
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_fitness_stats(
    logs: Iterable[WorkoutLog],
    now: datetime,
    *,
    tz: str | tzinfo | None = None,
    split_window_days: int | None = DEFAULT_SPLIT_WINDOW_DAYS,
) -> FitnessStats:
    """Build the dashboard report from every logged set.

    Args:
        logs: Sets joined with their exercise name and category, any order
        now: Reference instant; naive values are wall time in ``tz``
        tz: Zone defining calendar days (default device local)
        split_window_days: Days of history counted in the training split;
            None or 0 counts the entire history

    Returns:
        The FitnessStats report. ``weekly_frequency`` always has 7 entries
        and ``trend`` always has 12, oldest first.
    """
    tz = resolve_timezone(tz)
    today = calendar_day(now, tz)

    week_days = day_window(today, WEEK_DAYS)
    heatmap_floor = today - timedelta(days=HEATMAP_DAYS)
    split_floor = (
        today - timedelta(days=split_window_days - 1) if split_window_days else None
    )

    this_monday = week_start(today)
    trend = {
        monday: TrendWeek(week_start=monday)
        for monday in (
            this_monday - timedelta(weeks=offset)
            for offset in range(TREND_WEEKS - 1, -1, -1)
        )
    }

    unique_days: set[date] = set()
    rpe_values: list[float] = []
    recent_prs: list[RecentPR] = []
    pr_exercises: set[str] = set()
    split: Counter[ExerciseCategory] = Counter()
    heatmap: dict[date, ConsistencyDay] = {}

    # Newest first; ties keep the caller's order
    ordered = sorted(logs, key=lambda log: parse_timestamp(log.date, tz), reverse=True)

    for log in ordered:
        day = calendar_day(log.date, tz)
        category = ExerciseCategory.parse(log.category)
        unique_days.add(day)

        if week_days[0] <= day <= today and log.rpe is not None:
            rpe_values.append(log.rpe)

        if (
            log.is_pr
            and log.weight is not None
            and log.exercise_name
            and log.exercise_name not in pr_exercises
            and len(recent_prs) < RECENT_PR_LIMIT
        ):
            recent_prs.append(
                RecentPR(exercise=log.exercise_name, weight=log.weight, date=day)
            )
            pr_exercises.add(log.exercise_name)

        if split_floor is None or split_floor <= day <= today:
            split[category] += 1

        if heatmap_floor <= day <= today:
            week = trend.get(week_start(day))
            if week is not None:
                week.add(category)

            cell = heatmap.setdefault(
                day, ConsistencyDay(date=day, count=0, categories=[], level=0)
            )
            cell.count += 1
            if category.value not in cell.categories:
                cell.categories.append(category.value)

    consistency = []
    for day in sorted(heatmap):
        cell = heatmap[day]
        cell.categories.sort()
        cell.level = consistency_level(cell.count)
        consistency.append(cell)

    return FitnessStats(
        weekly_frequency=[
            DayFrequency(day=day_name(d), date=d, count=1 if d in unique_days else 0)
            for d in week_days
        ],
        recent_prs=recent_prs,
        total_workouts=len(unique_days),
        streak=compute_streak(unique_days, today),
        weekly_avg_rpe=(
            round_one_decimal(sum(rpe_values) / len(rpe_values)) if rpe_values else 0
        ),
        training_split=[
            SplitEntry(category=category, value=split[category])
            for category in ExerciseCategory
            if split[category] > 0
        ],
        trend=list(trend.values()),
        consistency=consistency,
    )


class StatsService:
    """Reads the set history and computes the fitness report."""

    def __init__(
        self,
        db_path: Path | None = None,
        timezone_name: str | None = None,
        split_window_days: int | None = None,
    ):
        """Initialize the stats service.

        Args:
            db_path: SQLite database to read (default from settings)
            timezone_name: Calendar-day zone (default from settings)
            split_window_days: Training split window; None uses the
                configured value, 0 means the whole history
        """
        settings = get_settings()
        self.db_path = db_path or get_db_path()
        self.tz = resolve_timezone(timezone_name or settings.timezone)
        if split_window_days is None:
            split_window_days = settings.split_window_days
        self.split_window_days = split_window_days
        self.logs = WorkoutLogRepository(self.db_path)

    async def get_fitness_stats(self, now: datetime | None = None) -> FitnessStats:
        """Compute the report over every stored set.

        Returns an empty report if the history cannot be read.
        """
        try:
            logs = await self.logs.list_with_exercise()
        except StoreError as e:
            logger.error("Error fetching stats: %s", e)
            return FitnessStats.empty()

        return compute_fitness_stats(
            logs,
            now or datetime.now(self.tz),
            tz=self.tz,
            split_window_days=self.split_window_days,
        )
