"""Browsing and correcting the set history."""

import logging
from datetime import date, datetime
from pathlib import Path

from ..config import get_settings
from ..db.engine import get_db_path
from ..db.repositories import WorkoutLogRepository
from ..exceptions import StoreError
from ..models.history import WorkoutSession
from ..models.workout import WorkoutLog, validate_set_fields
from ..utils.calendar import calendar_day, day_bounds, resolve_timezone

logger = logging.getLogger(__name__)

UNKNOWN_EXERCISE = "Unknown Exercise"


def group_sessions(logs: list[WorkoutLog], tz) -> list[WorkoutSession]:
    """Group sets into one session per calendar day, newest day first."""
    sessions: dict[date, WorkoutSession] = {}
    for log in logs:
        day = calendar_day(log.date, tz)
        session = sessions.setdefault(day, WorkoutSession(date=day))
        name = log.exercise_name or UNKNOWN_EXERCISE
        session.exercises.setdefault(name, []).append(log)
        session.total_sets += 1
        if log.exercise_name:
            session.categories.add(log.category.value)

    return [sessions[day] for day in sorted(sessions, reverse=True)]


class HistoryService:
    """Paged history, previous-set lookup and user corrections.

    Edits are last-write-wins: two clients saving the same set at once are
    not coordinated, which is fine for human-paced editing only.
    """

    def __init__(self, db_path: Path | None = None, timezone_name: str | None = None):
        settings = get_settings()
        self.db_path = db_path or get_db_path()
        self.tz = resolve_timezone(timezone_name or settings.timezone)
        self.page_size = settings.history_page_size
        self.logs = WorkoutLogRepository(self.db_path)

    async def get_history(self, limit: int | None = None, offset: int = 0) -> list[WorkoutLog]:
        """A page of sets, newest first. Empty on store failure."""
        try:
            return await self.logs.history(limit or self.page_size, offset)
        except StoreError as e:
            logger.error("Error fetching workout history: %s", e)
            return []

    async def get_sessions(
        self, limit: int | None = None, offset: int = 0
    ) -> list[WorkoutSession]:
        """A page of history grouped into per-day sessions."""
        return group_sessions(await self.get_history(limit, offset), self.tz)

    async def get_previous_log(self, exercise_id: int, set_number: int) -> WorkoutLog | None:
        """Last time this exercise's set number was performed, if ever."""
        try:
            return await self.logs.get_previous(exercise_id, set_number)
        except StoreError as e:
            logger.debug("Error fetching previous log: %s", e)
            return None

    async def update_log(self, log_id: int, **changes) -> bool:
        """Correct a stored set. The PR flag and watermark are left alone."""
        if "set_number" in changes and changes["set_number"] is None:
            raise ValueError("Set number cannot be cleared")
        validate_set_fields(
            weight=changes.get("weight"),
            reps=changes.get("reps"),
            rpe=changes.get("rpe"),
            duration_mins=changes.get("duration_mins"),
            set_number=changes.get("set_number"),
        )
        try:
            return await self.logs.update(log_id, changes)
        except StoreError as e:
            logger.error("Error updating workout log %s: %s", log_id, e)
            return False

    async def delete_log(self, log_id: int) -> bool:
        """Delete one set."""
        try:
            return await self.logs.delete(log_id)
        except StoreError as e:
            logger.error("Error deleting workout log %s: %s", log_id, e)
            return False

    async def delete_session(self, day: date | datetime | str) -> bool:
        """Delete every set logged on a calendar day."""
        start, end = day_bounds(calendar_day(day, self.tz), self.tz)
        try:
            deleted = await self.logs.delete_between(start, end)
        except StoreError as e:
            logger.error("Error deleting workout session %s: %s", day, e)
            return False
        logger.info("Deleted %d sets from session %s", deleted, day)
        return True
