"""Pytest configuration and fixtures."""

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from liftlog.config import get_settings
from liftlog.models.exercises import ExerciseCategory
from liftlog.models.workout import WorkoutLog

# A Wednesday
NOW = datetime(2026, 10, 21, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a throwaway data dir with UTC calendar days."""
    monkeypatch.setenv("LIFTLOG_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("LIFTLOG_TIMEZONE", "UTC")
    monkeypatch.delenv("LIFTLOG_SPLIT_WINDOW_DAYS", raising=False)
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def make_log():
    """Factory for joined logs dated relative to NOW."""

    def _make(
        exercise: str | None = "Bench Press",
        days_ago: int = 0,
        weight: float | None = None,
        is_pr: bool = False,
        rpe: float | None = None,
        category: ExerciseCategory | str | None = ExerciseCategory.UPPER_BODY,
        hour: int = 10,
    ) -> WorkoutLog:
        date = NOW.replace(hour=hour) - timedelta(days=days_ago)
        return WorkoutLog(
            exercise_id=1,
            date=date,
            weight=weight,
            rpe=rpe,
            is_pr=is_pr,
            exercise_name=exercise,
            category=category,
        )

    return _make
