"""Database engine setup and initialization."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from ..config import get_settings

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    settings = get_settings()
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / settings.db_name


@asynccontextmanager
async def transaction(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection holding the database write lock until exit.

    Commits when the block finishes and rolls back if it raises. Concurrent
    writers wait on the lock (sqlite busy timeout) instead of interleaving.
    """
    async with aiosqlite.connect(db_path, isolation_level=None) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("BEGIN IMMEDIATE")
        try:
            yield db
        except BaseException:
            await db.execute("ROLLBACK")
            raise
        else:
            await db.execute("COMMIT")


async def _run_migrations(db: aiosqlite.Connection) -> None:
    """Run database migrations for schema updates."""
    # Older databases predate RPE and duration tracking
    cursor = await db.execute("PRAGMA table_info(workout_logs)")
    columns = await cursor.fetchall()
    log_columns = {col[1] for col in columns}

    for col in ["rpe", "duration_mins"]:
        if col not in log_columns:
            logger.info("Adding workout_logs.%s column", col)
            await db.execute(f"ALTER TABLE workout_logs ADD COLUMN {col} REAL")

    cursor = await db.execute("PRAGMA table_info(exercises)")
    columns = await cursor.fetchall()
    column_names = {col[1] for col in columns}

    if "category" not in column_names:
        logger.info("Adding exercises.category column")
        await db.execute(
            "ALTER TABLE exercises ADD COLUMN category TEXT DEFAULT 'Upper Body'"
        )

    await db.commit()


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Master exercise catalog
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT UNIQUE NOT NULL,
                category TEXT NOT NULL DEFAULT 'Upper Body',
                personal_record REAL NOT NULL DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # One row per logged set
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                exercise_id INTEGER NOT NULL,
                date TEXT NOT NULL,
                weight REAL,
                reps INTEGER,
                rpe REAL,
                duration_mins REAL,
                notes TEXT,
                set_number INTEGER NOT NULL DEFAULT 1,
                is_pr INTEGER NOT NULL DEFAULT 0,
                FOREIGN KEY (exercise_id) REFERENCES exercises(id)
            )
        """)

        # Routines
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_groups (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Exercises attached to a routine, with routine defaults. Foreign keys
        # are not enforced; the repositories remove links on delete.
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_group_exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                group_id INTEGER NOT NULL,
                exercise_id INTEGER NOT NULL,
                sets INTEGER DEFAULT 3,
                reps INTEGER DEFAULT 10,
                weight REAL,
                duration_mins REAL,
                notes TEXT,
                sort_order INTEGER DEFAULT 0,
                UNIQUE (group_id, exercise_id),
                FOREIGN KEY (group_id) REFERENCES workout_groups(id),
                FOREIGN KEY (exercise_id) REFERENCES exercises(id)
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_logs_date
            ON workout_logs(date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_logs_exercise_set
            ON workout_logs(exercise_id, set_number, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_group_exercises_group
            ON workout_group_exercises(group_id, sort_order)
        """)

        await db.commit()

        # Run migrations for existing databases
        await _run_migrations(db)


async def seed_exercises(db_path: Path | None = None) -> int:
    """Seed the catalog with starter exercises. Returns rows added."""
    from ..models.exercises import STARTER_EXERCISES

    if db_path is None:
        db_path = get_db_path()

    added = 0
    async with aiosqlite.connect(db_path) as db:
        for exercise in STARTER_EXERCISES:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO exercises (name, category, personal_record)
                VALUES (?, ?, 0)
                """,
                (exercise.name, exercise.category.value),
            )
            added += cursor.rowcount

        await db.commit()
    return added
