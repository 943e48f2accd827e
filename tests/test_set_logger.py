"""Tests for set logging and personal-record tracking."""

import asyncio
from datetime import datetime, timedelta, timezone

import aiosqlite
import pytest

from liftlog.db import ExerciseRepository, WorkoutLogRepository, init_db
from liftlog.models.exercises import Exercise, ExerciseCategory
from liftlog.models.workout import SetInput
from liftlog.services.pr_tracker import PRTracker
from liftlog.services.set_logger import SetLogger
from liftlog.services.stats import StatsService

NOW = datetime(2026, 10, 21, 12, 0, tzinfo=timezone.utc)


async def setup_bench(db_path) -> int:
    """Create the schema and a Bench Press exercise with PR 0."""
    await init_db(db_path)
    return await ExerciseRepository(db_path).create(
        Exercise(name="Bench Press", category=ExerciseCategory.UPPER_BODY)
    )


async def current_pr(db_path, exercise_id: int) -> float:
    return await PRTracker(db_path).current(exercise_id)


class TestLogSet:
    """Tests for SetLogger.log_set."""

    @pytest.mark.asyncio
    async def test_first_weighted_set_is_a_pr(self, temp_db_path):
        bench = await setup_bench(temp_db_path)
        logger = SetLogger(temp_db_path, "UTC")

        result = await logger.log_set(SetInput(exercise_id=bench, weight=50, reps=5), now=NOW)

        assert result
        assert result.new_pr is True
        assert result.log.id is not None
        assert result.log.is_pr is True
        assert await current_pr(temp_db_path, bench) == 50

    @pytest.mark.asyncio
    async def test_lighter_and_equal_sets_are_not_prs(self, temp_db_path):
        bench = await setup_bench(temp_db_path)
        logger = SetLogger(temp_db_path, "UTC")

        first = await logger.log_set(SetInput(exercise_id=bench, weight=50), now=NOW)
        lighter = await logger.log_set(SetInput(exercise_id=bench, weight=40), now=NOW)
        tie = await logger.log_set(SetInput(exercise_id=bench, weight=50), now=NOW)

        assert [first.new_pr, lighter.new_pr, tie.new_pr] == [True, False, False]
        assert lighter.log.is_pr is False
        assert tie.log.is_pr is False
        assert await current_pr(temp_db_path, bench) == 50

    @pytest.mark.asyncio
    async def test_watermark_follows_running_maximum(self, temp_db_path):
        bench = await setup_bench(temp_db_path)
        logger = SetLogger(temp_db_path, "UTC")

        flags = []
        for weight in [40, 45, 45, 30, 60, 55, 61]:
            result = await logger.log_set(SetInput(exercise_id=bench, weight=weight), now=NOW)
            flags.append(result.new_pr)

        assert flags == [True, True, False, False, True, False, True]
        assert await current_pr(temp_db_path, bench) == 61

    @pytest.mark.asyncio
    async def test_unweighted_set_is_never_a_pr(self, temp_db_path):
        bench = await setup_bench(temp_db_path)
        logger = SetLogger(temp_db_path, "UTC")

        result = await logger.log_set(
            SetInput(exercise_id=bench, duration_mins=20), now=NOW
        )

        assert result
        assert result.new_pr is False
        assert await current_pr(temp_db_path, bench) == 0

    @pytest.mark.asyncio
    async def test_missing_exercise_counts_pr_as_zero(self, temp_db_path):
        await setup_bench(temp_db_path)
        logger = SetLogger(temp_db_path, "UTC")

        result = await logger.log_set(SetInput(exercise_id=999, weight=20), now=NOW)

        assert result
        assert result.new_pr is True
        assert await ExerciseRepository(temp_db_path).get(999) is None

    @pytest.mark.asyncio
    async def test_timestamp_stored_in_utc(self, temp_db_path):
        bench = await setup_bench(temp_db_path)
        logger = SetLogger(temp_db_path, "America/New_York")

        # Naive values are wall time in the configured zone (EDT, UTC-4)
        entry = SetInput(exercise_id=bench, weight=50, performed_at=datetime(2026, 10, 20, 22, 0))
        result = await logger.log_set(entry)

        stored = await WorkoutLogRepository(temp_db_path).get(result.log.id)
        assert stored.date == datetime(2026, 10, 21, 2, 0, tzinfo=timezone.utc)
        assert stored.date.utcoffset() == timedelta(0)

    @pytest.mark.asyncio
    async def test_stored_fields_round_trip(self, temp_db_path):
        bench = await setup_bench(temp_db_path)
        logger = SetLogger(temp_db_path, "UTC")

        entry = SetInput(
            exercise_id=bench, weight=60, reps=8, rpe=8.5, notes="paused", set_number=2
        )
        result = await logger.log_set(entry, now=NOW)
        stored = await WorkoutLogRepository(temp_db_path).get(result.log.id)

        assert stored.exercise_name == "Bench Press"
        assert stored.category == ExerciseCategory.UPPER_BODY
        assert (stored.weight, stored.reps, stored.rpe) == (60, 8, 8.5)
        assert stored.notes == "paused"
        assert stored.set_number == 2
        assert stored.is_pr is True


class TestConcurrency:
    """Concurrent loggers must agree on a single PR winner."""

    @pytest.mark.asyncio
    async def test_concurrent_sets_keep_the_maximum(self, temp_db_path):
        bench = await setup_bench(temp_db_path)
        weights = [50, 70, 60, 70, 65, 40]

        results = await asyncio.gather(
            *(
                SetLogger(temp_db_path, "UTC").log_set(
                    SetInput(exercise_id=bench, weight=weight), now=NOW
                )
                for weight in weights
            )
        )

        assert all(results)
        assert await current_pr(temp_db_path, bench) == 70
        # Exactly one of the two 70s can have beaten the watermark
        seventies = [r for r in results if r.log.weight == 70]
        assert sum(r.new_pr for r in seventies) == 1


class TestAtomicity:
    """A failed insert leaves the watermark untouched."""

    @pytest.mark.asyncio
    async def test_failed_insert_rolls_back_pr(self, temp_db_path):
        bench = await setup_bench(temp_db_path)
        logger = SetLogger(temp_db_path, "UTC")
        await logger.log_set(SetInput(exercise_id=bench, weight=50), now=NOW)

        async with aiosqlite.connect(temp_db_path) as db:
            await db.execute("DROP TABLE workout_logs")
            await db.commit()

        result = await logger.log_set(SetInput(exercise_id=bench, weight=80), now=NOW)

        assert not result
        assert result.log is None
        assert result.new_pr is False
        assert await current_pr(temp_db_path, bench) == 50

    @pytest.mark.asyncio
    async def test_unreadable_store(self, temp_db_path):
        # No schema at all
        logger = SetLogger(temp_db_path, "UTC")

        result = await logger.log_set(SetInput(exercise_id=1, weight=50), now=NOW)

        assert not result


class TestReconcile:
    """Tests for PRTracker.reconcile."""

    @pytest.mark.asyncio
    async def test_raises_stale_watermark(self, temp_db_path):
        bench = await setup_bench(temp_db_path)
        await SetLogger(temp_db_path, "UTC").log_set(
            SetInput(exercise_id=bench, weight=50), now=NOW
        )
        # Simulate a watermark that fell behind the log
        async with aiosqlite.connect(temp_db_path) as db:
            await db.execute("UPDATE exercises SET personal_record = 10")
            await db.commit()

        assert await PRTracker(temp_db_path).reconcile(bench) == 50

    @pytest.mark.asyncio
    async def test_never_lowers(self, temp_db_path):
        bench = await setup_bench(temp_db_path)
        logger = SetLogger(temp_db_path, "UTC")
        result = await logger.log_set(SetInput(exercise_id=bench, weight=90), now=NOW)
        await WorkoutLogRepository(temp_db_path).delete(result.log.id)

        assert await PRTracker(temp_db_path).reconcile(bench) == 90

    @pytest.mark.asyncio
    async def test_missing_exercise(self, temp_db_path):
        await setup_bench(temp_db_path)
        assert await PRTracker(temp_db_path).reconcile(999) is None


class TestStatsFromStore:
    """StatsService reads the stored history."""

    @pytest.mark.asyncio
    async def test_logged_sets_show_up_in_stats(self, temp_db_path):
        bench = await setup_bench(temp_db_path)
        squat = await ExerciseRepository(temp_db_path).create(
            Exercise(name="Squat", category=ExerciseCategory.LOWER_BODY)
        )
        logger = SetLogger(temp_db_path, "UTC")
        yesterday = NOW - timedelta(days=1)

        await logger.log_set(SetInput(exercise_id=bench, weight=60, rpe=8, performed_at=yesterday))
        await logger.log_set(SetInput(exercise_id=bench, weight=55, rpe=7, performed_at=NOW))
        await logger.log_set(SetInput(exercise_id=squat, weight=100, rpe=9, performed_at=NOW))

        stats = await StatsService(temp_db_path, "UTC").get_fitness_stats(NOW)

        assert stats.total_workouts == 2
        assert stats.streak == 2
        assert [(pr.exercise, pr.weight) for pr in stats.recent_prs] == [
            ("Squat", 100),
            ("Bench Press", 60),
        ]
        assert stats.weekly_avg_rpe == 8
        assert [(s.name, s.value) for s in stats.training_split] == [
            ("Upper Body", 2),
            ("Lower Body", 1),
        ]

    @pytest.mark.asyncio
    async def test_unreadable_store_gives_empty_report(self, temp_db_path):
        stats = await StatsService(temp_db_path, "UTC").get_fitness_stats(NOW)

        assert stats.total_workouts == 0
        assert stats.weekly_frequency == []
        assert stats.trend == []
