"""Tests for history browsing and corrections."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from liftlog.db import ExerciseRepository, WorkoutLogRepository, init_db
from liftlog.models.exercises import Exercise, ExerciseCategory
from liftlog.models.workout import SetInput, WorkoutLog
from liftlog.services.history import UNKNOWN_EXERCISE, HistoryService, group_sessions
from liftlog.services.set_logger import SetLogger

NOW = datetime(2026, 10, 21, 12, 0, tzinfo=timezone.utc)


async def seed_history(db_path) -> dict[str, int]:
    """Two days of bench and squat sets. Returns exercise IDs by name."""
    await init_db(db_path)
    repo = ExerciseRepository(db_path)
    ids = {
        "Bench Press": await repo.create(Exercise(name="Bench Press")),
        "Squat": await repo.create(
            Exercise(name="Squat", category=ExerciseCategory.LOWER_BODY)
        ),
    }
    logger = SetLogger(db_path, "UTC")
    yesterday = NOW - timedelta(days=1)
    for set_number, weight in enumerate([60, 62.5], start=1):
        await logger.log_set(
            SetInput(exercise_id=ids["Bench Press"], weight=weight, reps=5,
                     set_number=set_number, performed_at=yesterday)
        )
    for set_number, weight in enumerate([55, 57.5, 57.5], start=1):
        await logger.log_set(
            SetInput(exercise_id=ids["Bench Press"], weight=weight, reps=8,
                     set_number=set_number, performed_at=NOW)
        )
    await logger.log_set(
        SetInput(exercise_id=ids["Squat"], weight=100, reps=5, performed_at=NOW)
    )
    return ids


class TestGroupSessions:
    """Tests for group_sessions."""

    def test_groups_by_day_newest_first(self):
        logs = [
            WorkoutLog(exercise_id=1, date=NOW - timedelta(days=2), exercise_name="Squat",
                       category=ExerciseCategory.LOWER_BODY),
            WorkoutLog(exercise_id=2, date=NOW, exercise_name="Running",
                       category=ExerciseCategory.CARDIO),
            WorkoutLog(exercise_id=2, date=NOW, exercise_name="Running",
                       category=ExerciseCategory.CARDIO, set_number=2),
        ]
        sessions = group_sessions(logs, timezone.utc)

        assert [s.date for s in sessions] == [date(2026, 10, 21), date(2026, 10, 19)]
        assert sessions[0].total_sets == 2
        assert list(sessions[0].exercises) == ["Running"]
        assert sessions[0].categories == {"Cardio"}

    def test_orphaned_logs(self):
        logs = [WorkoutLog(exercise_id=9, date=NOW)]
        session = group_sessions(logs, timezone.utc)[0]

        assert list(session.exercises) == [UNKNOWN_EXERCISE]
        assert session.categories == set()

    def test_zone_decides_the_day(self):
        logs = [WorkoutLog(exercise_id=1, date=NOW.replace(hour=2), exercise_name="Squat")]
        sessions = group_sessions(logs, ZoneInfo("America/New_York"))

        assert sessions[0].date == date(2026, 10, 20)


class TestHistoryService:
    """Tests for HistoryService against a real database."""

    @pytest.mark.asyncio
    async def test_history_newest_first_and_paged(self, temp_db_path):
        await seed_history(temp_db_path)
        service = HistoryService(temp_db_path, "UTC")

        page = await service.get_history(limit=4)
        assert len(page) == 4
        assert all(log.date.date() == date(2026, 10, 21) for log in page)
        assert [log.set_number for log in page[:3]] == [1, 2, 3]

        rest = await service.get_history(limit=4, offset=4)
        assert len(rest) == 2
        assert all(log.date.date() == date(2026, 10, 20) for log in rest)

    @pytest.mark.asyncio
    async def test_sessions(self, temp_db_path):
        await seed_history(temp_db_path)
        sessions = await HistoryService(temp_db_path, "UTC").get_sessions()

        assert [s.date for s in sessions] == [date(2026, 10, 21), date(2026, 10, 20)]
        assert sessions[0].total_sets == 4
        assert sessions[0].categories == {"Upper Body", "Lower Body"}
        assert len(sessions[0].exercises["Bench Press"]) == 3

    @pytest.mark.asyncio
    async def test_previous_log(self, temp_db_path):
        ids = await seed_history(temp_db_path)
        service = HistoryService(temp_db_path, "UTC")

        previous = await service.get_previous_log(ids["Bench Press"], 2)
        assert previous.weight == 57.5
        assert previous.reps == 8

        assert await service.get_previous_log(ids["Squat"], 4) is None

    @pytest.mark.asyncio
    async def test_previous_log_unreadable_store(self, temp_db_path):
        service = HistoryService(temp_db_path, "UTC")
        assert await service.get_previous_log(1, 1) is None

    @pytest.mark.asyncio
    async def test_update_keeps_pr_flag(self, temp_db_path):
        ids = await seed_history(temp_db_path)
        service = HistoryService(temp_db_path, "UTC")
        squat = (await service.get_previous_log(ids["Squat"], 1))

        assert await service.update_log(squat.id, weight=90, notes="belt") is True

        stored = await WorkoutLogRepository(temp_db_path).get(squat.id)
        assert stored.weight == 90
        assert stored.notes == "belt"
        assert stored.is_pr is True
        # The watermark is not recomputed after edits
        assert (await ExerciseRepository(temp_db_path).get(ids["Squat"])).personal_record == 100

    @pytest.mark.asyncio
    async def test_update_validates(self, temp_db_path):
        await seed_history(temp_db_path)
        service = HistoryService(temp_db_path, "UTC")

        with pytest.raises(ValueError):
            await service.update_log(1, rpe=11)
        with pytest.raises(ValueError):
            await service.update_log(1, is_pr=False)
        with pytest.raises(ValueError):
            await service.update_log(1, set_number=None)

    @pytest.mark.asyncio
    async def test_update_missing_log(self, temp_db_path):
        await seed_history(temp_db_path)
        assert await HistoryService(temp_db_path, "UTC").update_log(999, reps=3) is False

    @pytest.mark.asyncio
    async def test_delete_log(self, temp_db_path):
        await seed_history(temp_db_path)
        service = HistoryService(temp_db_path, "UTC")
        log = (await service.get_history(limit=1))[0]

        assert await service.delete_log(log.id) is True
        assert await service.delete_log(log.id) is False
        assert len(await service.get_history()) == 5

    @pytest.mark.asyncio
    async def test_delete_session(self, temp_db_path):
        await seed_history(temp_db_path)
        service = HistoryService(temp_db_path, "UTC")

        assert await service.delete_session(date(2026, 10, 21)) is True

        remaining = await service.get_history()
        assert len(remaining) == 2
        assert all(log.date.date() == date(2026, 10, 20) for log in remaining)

    @pytest.mark.asyncio
    async def test_delete_empty_session(self, temp_db_path):
        await seed_history(temp_db_path)
        service = HistoryService(temp_db_path, "UTC")

        assert await service.delete_session("2026-01-01") is True
        assert len(await service.get_history()) == 6
