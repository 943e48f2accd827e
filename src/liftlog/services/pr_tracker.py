"""Personal-record watermark bookkeeping."""

import logging
from pathlib import Path

import aiosqlite

from ..db.repositories import ExerciseRepository

logger = logging.getLogger(__name__)


class PRTracker:
    """Owns each exercise's ``personal_record`` watermark.

    Only SetLogger talks to this class. The watermark never goes down.
    """

    def __init__(self, db_path: Path | None = None):
        self.exercises = ExerciseRepository(db_path)

    async def current(self, exercise_id: int) -> float:
        """Current watermark; 0 when the exercise does not exist."""
        record = await self.exercises.get_personal_record(exercise_id)
        return record if record is not None else 0

    async def check_and_raise(
        self, db: aiosqlite.Connection, exercise_id: int, weight: float | None
    ) -> bool:
        """Decide whether ``weight`` is a new PR and record it if so.

        Must run inside the transaction that inserts the set. A tie with the
        current watermark is not a PR. A missing exercise counts as a
        watermark of 0; there is no row to raise, so that is only logged.

        Returns:
            True if the set is a new personal record
        """
        current = await self.exercises.get_personal_record(exercise_id, db=db)
        if current is None:
            logger.warning(
                "Exercise %s not found; treating its personal record as 0", exercise_id
            )
            return (weight or 0) > 0

        if weight is None:
            return False
        return await self.exercises.raise_personal_record(db, exercise_id, weight)

    async def reconcile(self, exercise_id: int) -> float | None:
        """Raise a stale watermark to the heaviest weight ever logged."""
        before = await self.exercises.get_personal_record(exercise_id)
        after = await self.exercises.reconcile_personal_record(exercise_id)
        if before is not None and after is not None and after > before:
            logger.info(
                "Personal record for exercise %s raised from %s to %s",
                exercise_id,
                before,
                after,
            )
        return after
