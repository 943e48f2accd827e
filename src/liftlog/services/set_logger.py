"""Recording performed sets."""

import logging
from datetime import datetime, timezone
from pathlib import Path

import aiosqlite

from ..config import get_settings
from ..db.engine import get_db_path, transaction
from ..db.repositories import WorkoutLogRepository
from ..exceptions import StoreError
from ..models.workout import LogSetResult, SetInput, WorkoutLog
from ..utils.calendar import parse_timestamp, resolve_timezone
from .pr_tracker import PRTracker

logger = logging.getLogger(__name__)


class SetLogger:
    """Validates and stores sets, flagging new personal records.

    The PR decision, the watermark update and the log insert share one
    write transaction: concurrent callers are serialized by the database
    lock, and a failed insert leaves the watermark untouched.
    """

    def __init__(self, db_path: Path | None = None, timezone_name: str | None = None):
        """Initialize the set logger.

        Args:
            db_path: SQLite database to write to (default from settings)
            timezone_name: Zone for naive ``performed_at`` values
                (default from settings, else device local)
        """
        self.db_path = db_path or get_db_path()
        self.tz = resolve_timezone(timezone_name or get_settings().timezone)
        self.logs = WorkoutLogRepository(self.db_path)
        self.prs = PRTracker(self.db_path)

    async def log_set(self, entry: SetInput, now: datetime | None = None) -> LogSetResult:
        """Record one performed set.

        Args:
            entry: The validated set
            now: Timestamp used when ``entry.performed_at`` is not set

        Returns:
            The stored log and whether it set a new PR. On any store failure
            nothing is written and ``LogSetResult(None, False)`` is returned.
        """
        performed_at = entry.performed_at or now or datetime.now(self.tz)
        performed_at = parse_timestamp(performed_at, self.tz).astimezone(timezone.utc)

        try:
            async with transaction(self.db_path) as db:
                new_pr = await self.prs.check_and_raise(db, entry.exercise_id, entry.weight)
                log = await self.logs.insert(
                    db,
                    WorkoutLog(
                        exercise_id=entry.exercise_id,
                        date=performed_at,
                        weight=entry.weight,
                        reps=entry.reps,
                        rpe=entry.rpe,
                        duration_mins=entry.duration_mins,
                        notes=entry.notes,
                        set_number=entry.set_number,
                        is_pr=new_pr,
                    ),
                )
        except (StoreError, aiosqlite.Error) as e:
            logger.error("Error logging set for exercise %s: %s", entry.exercise_id, e)
            return LogSetResult(log=None, new_pr=False)

        if new_pr:
            logger.info(
                "New personal record for exercise %s: %s", entry.exercise_id, entry.weight
            )
        return LogSetResult(log=log, new_pr=new_pr)
