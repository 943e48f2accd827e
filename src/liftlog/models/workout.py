"""Workout set models."""

from dataclasses import dataclass, field
from datetime import datetime

from .exercises import ExerciseCategory, RoutineExercise

RPE_MIN = 1
RPE_MAX = 10


def _check_non_negative(name: str, value: float | None) -> None:
    if value is not None and value < 0:
        raise ValueError(f"{name} cannot be negative")


def validate_set_fields(
    weight: float | None = None,
    reps: int | None = None,
    rpe: float | None = None,
    duration_mins: float | None = None,
    set_number: int | None = None,
) -> None:
    """Validate the user-editable fields of a set.

    Raises:
        ValueError: if any present value is out of range
    """
    _check_non_negative("Weight", weight)
    _check_non_negative("Reps", reps)
    _check_non_negative("Duration", duration_mins)
    if rpe is not None and not RPE_MIN <= rpe <= RPE_MAX:
        raise ValueError(f"RPE must be between {RPE_MIN} and {RPE_MAX}")
    if set_number is not None and set_number < 1:
        raise ValueError("Set number must be at least 1")


@dataclass
class SetInput:
    """One performed set as entered by the user, before it is stored."""

    exercise_id: int
    weight: float | None = None
    reps: int | None = None
    rpe: float | None = None
    duration_mins: float | None = None
    notes: str | None = None
    set_number: int = 1
    performed_at: datetime | None = None

    def __post_init__(self):
        if self.exercise_id is None:
            raise ValueError("Set must reference an exercise")
        validate_set_fields(
            weight=self.weight,
            reps=self.reps,
            rpe=self.rpe,
            duration_mins=self.duration_mins,
            set_number=self.set_number,
        )
        if self.notes is not None and not self.notes.strip():
            self.notes = None

    @classmethod
    def from_routine_exercise(
        cls, routine_exercise: RoutineExercise, set_number: int = 1, **overrides
    ) -> "SetInput":
        """Build a set prefilled with a routine's defaults."""
        values = {
            "weight": routine_exercise.default_weight,
            "reps": routine_exercise.default_reps,
            "duration_mins": routine_exercise.default_duration_mins,
        }
        values.update(overrides)
        return cls(
            exercise_id=routine_exercise.exercise_id,
            set_number=set_number,
            **values,
        )


@dataclass
class WorkoutLog:
    """A stored set.

    ``is_pr`` records whether the set beat the exercise's personal record at
    the moment it was logged. It is never recomputed afterwards.
    ``exercise_name`` and ``category`` are filled when the row was read
    joined with its exercise.
    """

    exercise_id: int
    date: datetime
    set_number: int = 1
    weight: float | None = None
    reps: int | None = None
    rpe: float | None = None
    duration_mins: float | None = None
    notes: str | None = None
    is_pr: bool = False
    id: int | None = None
    exercise_name: str | None = None
    category: ExerciseCategory = field(default=ExerciseCategory.UNKNOWN)

    def __post_init__(self):
        self.category = ExerciseCategory.parse(self.category)

    def to_dict(self) -> dict:
        """Convert to dictionary for the API."""
        return {
            "id": self.id,
            "exercise_id": self.exercise_id,
            "date": self.date.isoformat(),
            "weight": self.weight,
            "reps": self.reps,
            "rpe": self.rpe,
            "duration_mins": self.duration_mins,
            "notes": self.notes,
            "set_number": self.set_number,
            "is_pr": self.is_pr,
            "exercise": {
                "name": self.exercise_name,
                "category": self.category.value,
            },
        }


@dataclass
class LogSetResult:
    """Outcome of logging a set. Falsy when nothing was stored."""

    log: WorkoutLog | None
    new_pr: bool = False

    def __bool__(self) -> bool:
        return self.log is not None

    def to_dict(self) -> dict:
        return {
            "log": self.log.to_dict() if self.log else None,
            "new_pr": self.new_pr,
        }
