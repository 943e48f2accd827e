"""Data models for liftlog."""

from .exercises import (
    Exercise,
    ExerciseCategory,
    RoutineExercise,
    STARTER_EXERCISES,
    WorkoutGroup,
)
from .history import WorkoutSession
from .stats import (
    ConsistencyDay,
    DayFrequency,
    FitnessStats,
    RecentPR,
    SplitEntry,
    TrendWeek,
)
from .workout import LogSetResult, SetInput, WorkoutLog

__all__ = [
    "ConsistencyDay",
    "DayFrequency",
    "Exercise",
    "ExerciseCategory",
    "FitnessStats",
    "LogSetResult",
    "RecentPR",
    "RoutineExercise",
    "SetInput",
    "SplitEntry",
    "STARTER_EXERCISES",
    "TrendWeek",
    "WorkoutGroup",
    "WorkoutLog",
    "WorkoutSession",
]
