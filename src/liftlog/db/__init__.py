"""Database layer for liftlog."""

from .engine import get_db_path, init_db, seed_exercises, transaction
from .repositories import (
    ExerciseRepository,
    RoutineRepository,
    WorkoutLogRepository,
)

__all__ = [
    "ExerciseRepository",
    "get_db_path",
    "init_db",
    "RoutineRepository",
    "seed_exercises",
    "transaction",
    "WorkoutLogRepository",
]
