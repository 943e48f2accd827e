"""Data access layer for liftlog.

Every method opens its own connection unless it takes ``db``, in which case
it runs on the caller's connection (and transaction). SQLite errors are
re-raised as ``StoreReadError`` / ``StoreWriteError``.
"""

from datetime import datetime, timezone
from functools import wraps
from pathlib import Path

import aiosqlite

from ..exceptions import StoreReadError, StoreWriteError
from ..models.exercises import Exercise, ExerciseCategory, RoutineExercise, WorkoutGroup
from ..models.workout import WorkoutLog
from .engine import get_db_path

LOG_COLUMNS = (
    "weight",
    "reps",
    "rpe",
    "duration_mins",
    "notes",
    "set_number",
)

ROUTINE_COLUMNS = {
    "default_sets": "sets",
    "default_reps": "reps",
    "default_weight": "weight",
    "default_duration_mins": "duration_mins",
    "notes": "notes",
    "sort_order": "sort_order",
}

JOINED_LOG_SELECT = """
    SELECT wl.*, e.name AS exercise_name, e.category AS exercise_category
    FROM workout_logs wl
    LEFT JOIN exercises e ON e.id = wl.exercise_id
"""


def _reads(f):
    """Translate sqlite errors raised by a read into StoreReadError."""

    @wraps(f)
    async def wrapper(*args, **kwargs):
        try:
            return await f(*args, **kwargs)
        except aiosqlite.Error as e:
            raise StoreReadError(f"{f.__name__} failed: {e}", f.__name__) from e

    return wrapper


def _writes(f):
    """Translate sqlite errors raised by a write into StoreWriteError."""

    @wraps(f)
    async def wrapper(*args, **kwargs):
        try:
            return await f(*args, **kwargs)
        except aiosqlite.Error as e:
            raise StoreWriteError(f"{f.__name__} failed: {e}", f.__name__) from e

    return wrapper


class ExerciseRepository:
    """Repository for the master exercise catalog."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    @_reads
    async def get(self, exercise_id: int) -> Exercise | None:
        """Get an exercise by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE id = ?", (exercise_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    @_reads
    async def get_by_name(self, name: str) -> Exercise | None:
        """Get an exercise by exact name (case-insensitive)."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE name = ? COLLATE NOCASE", (name,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    @_reads
    async def list_all(self) -> list[Exercise]:
        """List all exercises."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM exercises ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    @_reads
    async def get_personal_record(
        self, exercise_id: int, db: aiosqlite.Connection | None = None
    ) -> float | None:
        """Current PR watermark, or None if the exercise does not exist."""
        if db is not None:
            return await self._select_personal_record(db, exercise_id)
        async with aiosqlite.connect(self.db_path) as db:
            return await self._select_personal_record(db, exercise_id)

    async def _select_personal_record(
        self, db: aiosqlite.Connection, exercise_id: int
    ) -> float | None:
        cursor = await db.execute(
            "SELECT personal_record FROM exercises WHERE id = ?", (exercise_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return row[0] or 0

    @_writes
    async def raise_personal_record(
        self, db: aiosqlite.Connection, exercise_id: int, weight: float
    ) -> bool:
        """Move the PR watermark up to ``weight`` if it is strictly higher.

        The comparison happens inside the UPDATE, so two writers can never
        both lower each other's result. Returns True if the row changed.
        """
        cursor = await db.execute(
            """
            UPDATE exercises SET personal_record = ?
            WHERE id = ? AND personal_record < ?
            """,
            (weight, exercise_id, weight),
        )
        return cursor.rowcount == 1

    @_writes
    async def reconcile_personal_record(self, exercise_id: int) -> float | None:
        """Raise a stale watermark to the heaviest logged weight.

        Never lowers it. Returns the resulting watermark, or None if the
        exercise does not exist.
        """
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE exercises SET personal_record = MAX(
                    personal_record,
                    COALESCE(
                        (SELECT MAX(weight) FROM workout_logs WHERE exercise_id = ?),
                        0
                    )
                )
                WHERE id = ?
                """,
                (exercise_id, exercise_id),
            )
            await db.commit()
            return await self._select_personal_record(db, exercise_id)

    @_writes
    async def create(self, exercise: Exercise) -> int:
        """Add a new exercise."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO exercises (name, category, personal_record)
                VALUES (?, ?, ?)
                """,
                (exercise.name.strip(), exercise.category.value, exercise.personal_record),
            )
            await db.commit()
            return cursor.lastrowid

    @_writes
    async def update(
        self,
        exercise_id: int,
        name: str | None = None,
        category: ExerciseCategory | None = None,
    ) -> bool:
        """Rename or re-categorize an exercise. The PR is not editable here."""
        fields, values = [], []
        if name is not None:
            if not name.strip():
                raise ValueError("Exercise name cannot be empty")
            fields.append("name = ?")
            values.append(name.strip())
        if category is not None:
            fields.append("category = ?")
            values.append(ExerciseCategory.parse(category).value)
        if not fields:
            return False

        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                f"UPDATE exercises SET {', '.join(fields)} WHERE id = ?",
                (*values, exercise_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    @_writes
    async def delete(self, exercise_id: int) -> bool:
        """Delete an exercise from the catalog."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "DELETE FROM workout_group_exercises WHERE exercise_id = ?",
                (exercise_id,),
            )
            cursor = await db.execute(
                "DELETE FROM exercises WHERE id = ?", (exercise_id,)
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_exercise(self, row: aiosqlite.Row) -> Exercise:
        """Convert a database row to an Exercise."""
        return Exercise(
            id=row["id"],
            name=row["name"],
            category=ExerciseCategory.parse(row["category"]),
            personal_record=row["personal_record"] or 0,
        )


class WorkoutLogRepository:
    """Repository for logged sets."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    @_writes
    async def insert(self, db: aiosqlite.Connection, log: WorkoutLog) -> WorkoutLog:
        """Insert a set on the caller's connection and return it with its ID.

        The timestamp is stored in UTC so that range queries on the text
        column order correctly.
        """
        cursor = await db.execute(
            """
            INSERT INTO workout_logs
            (exercise_id, date, weight, reps, rpe, duration_mins, notes, set_number, is_pr)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                log.exercise_id,
                log.date.astimezone(timezone.utc).isoformat(timespec="microseconds"),
                log.weight,
                log.reps,
                log.rpe,
                log.duration_mins,
                log.notes,
                log.set_number,
                int(log.is_pr),
            ),
        )
        log.id = cursor.lastrowid
        return log

    @_reads
    async def get(self, log_id: int) -> WorkoutLog | None:
        """Get one set, joined with its exercise."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                JOINED_LOG_SELECT + " WHERE wl.id = ?", (log_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_log(row)

    @_reads
    async def list_with_exercise(self) -> list[WorkoutLog]:
        """All sets joined with their exercise, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                JOINED_LOG_SELECT + " ORDER BY wl.date DESC, wl.id DESC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    @_reads
    async def history(self, limit: int = 50, offset: int = 0) -> list[WorkoutLog]:
        """A page of sets, newest first, grouped by exercise within a time."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                JOINED_LOG_SELECT
                + """
                ORDER BY wl.date DESC, wl.exercise_id, wl.set_number
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    @_reads
    async def get_previous(self, exercise_id: int, set_number: int) -> WorkoutLog | None:
        """Most recent set with this exercise and set number."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                JOINED_LOG_SELECT
                + """
                WHERE wl.exercise_id = ? AND wl.set_number = ?
                ORDER BY wl.date DESC, wl.id DESC
                LIMIT 1
                """,
                (exercise_id, set_number),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_log(row)

    @_writes
    async def update(self, log_id: int, changes: dict) -> bool:
        """Apply user corrections to a set. ``is_pr`` is not editable."""
        unknown = set(changes) - set(LOG_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if not changes:
            return False

        columns = list(changes)
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                f"UPDATE workout_logs SET {', '.join(f'{c} = ?' for c in columns)} WHERE id = ?",
                (*(changes[c] for c in columns), log_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    @_writes
    async def delete(self, log_id: int) -> bool:
        """Delete one set."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM workout_logs WHERE id = ?", (log_id,)
            )
            await db.commit()
            return cursor.rowcount > 0

    @_writes
    async def delete_between(self, start: str, end: str) -> int:
        """Delete sets with ``start <= date < end`` (storage format bounds)."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM workout_logs WHERE date >= ? AND date < ?",
                (start, end),
            )
            await db.commit()
            return cursor.rowcount

    def _row_to_log(self, row: aiosqlite.Row) -> WorkoutLog:
        """Convert a joined database row to a WorkoutLog."""
        return WorkoutLog(
            id=row["id"],
            exercise_id=row["exercise_id"],
            date=datetime.fromisoformat(row["date"]),
            weight=row["weight"],
            reps=row["reps"],
            rpe=row["rpe"],
            duration_mins=row["duration_mins"],
            notes=row["notes"],
            set_number=row["set_number"],
            is_pr=bool(row["is_pr"]),
            exercise_name=row["exercise_name"],
            category=ExerciseCategory.parse(row["exercise_category"]),
        )


class RoutineRepository:
    """Repository for routines (workout groups) and their exercises."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    @_reads
    async def list_groups(self) -> list[WorkoutGroup]:
        """List all routines by name."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM workout_groups ORDER BY name")
            rows = await cursor.fetchall()
            return [WorkoutGroup(id=row["id"], name=row["name"]) for row in rows]

    @_writes
    async def create_group(self, name: str) -> int:
        """Create a new routine."""
        if not name or not name.strip():
            raise ValueError("Routine name cannot be empty")
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "INSERT INTO workout_groups (name) VALUES (?)", (name.strip(),)
            )
            await db.commit()
            return cursor.lastrowid

    @_writes
    async def delete_group(self, group_id: int) -> bool:
        """Delete a routine and detach its exercises."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "DELETE FROM workout_group_exercises WHERE group_id = ?", (group_id,)
            )
            cursor = await db.execute(
                "DELETE FROM workout_groups WHERE id = ?", (group_id,)
            )
            await db.commit()
            return cursor.rowcount > 0

    @_writes
    async def add_exercise(self, group_id: int, exercise_id: int) -> bool:
        """Attach a catalog exercise to the end of a routine.

        Returns False if the routine or the exercise does not exist.
        """
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_group_exercises (group_id, exercise_id, sort_order)
                SELECT ?, ?, (
                    SELECT COALESCE(MAX(sort_order) + 1, 0)
                    FROM workout_group_exercises WHERE group_id = ?
                )
                WHERE EXISTS (SELECT 1 FROM workout_groups WHERE id = ?)
                  AND EXISTS (SELECT 1 FROM exercises WHERE id = ?)
                """,
                (group_id, exercise_id, group_id, group_id, exercise_id),
            )
            await db.commit()
            return cursor.rowcount == 1

    @_writes
    async def remove_exercise(self, group_id: int, exercise_id: int) -> bool:
        """Detach an exercise from a routine."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM workout_group_exercises WHERE group_id = ? AND exercise_id = ?",
                (group_id, exercise_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    @_reads
    async def get_routine_exercises(self, group_id: int) -> list[RoutineExercise]:
        """Exercises of a routine in their routine order."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT e.id, e.name, e.category, e.personal_record,
                       g.group_id, g.sets, g.reps, g.weight, g.duration_mins,
                       g.notes, g.sort_order
                FROM workout_group_exercises g
                JOIN exercises e ON e.id = g.exercise_id
                WHERE g.group_id = ?
                ORDER BY g.sort_order, e.name
                """,
                (group_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_routine_exercise(row) for row in rows]

    @_writes
    async def update_routine_exercise(
        self, group_id: int, exercise_id: int, changes: dict
    ) -> bool:
        """Update routine defaults (keys are RoutineExercise field names)."""
        unknown = set(changes) - set(ROUTINE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if not changes:
            return False

        fields = list(changes)
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                f"""
                UPDATE workout_group_exercises
                SET {', '.join(f'{ROUTINE_COLUMNS[f]} = ?' for f in fields)}
                WHERE group_id = ? AND exercise_id = ?
                """,
                (*(changes[f] for f in fields), group_id, exercise_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_routine_exercise(self, row: aiosqlite.Row) -> RoutineExercise:
        """Convert a joined database row to a RoutineExercise."""
        exercise = Exercise(
            id=row["id"],
            name=row["name"],
            category=ExerciseCategory.parse(row["category"]),
            personal_record=row["personal_record"] or 0,
        )
        return RoutineExercise(
            exercise=exercise,
            group_id=row["group_id"],
            default_sets=row["sets"],
            default_reps=row["reps"],
            default_weight=row["weight"],
            default_duration_mins=row["duration_mins"],
            notes=row["notes"],
            sort_order=row["sort_order"],
        )
