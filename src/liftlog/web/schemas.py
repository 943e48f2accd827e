"""Request bodies for the JSON API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..models.exercises import ExerciseCategory


def _known_category(v):
    """Accept any spelling ExerciseCategory.parse understands, except unknown ones."""
    if v is None:
        return v
    category = ExerciseCategory.parse(v)
    if category == ExerciseCategory.UNKNOWN:
        raise ValueError(f"Unknown category: {v}")
    return category


class SetPayload(BaseModel):
    """A performed set to log."""

    exercise_id: int
    weight: Optional[float] = Field(default=None, ge=0)
    reps: Optional[int] = Field(default=None, ge=0)
    rpe: Optional[float] = Field(default=None, ge=1, le=10)
    duration_mins: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    set_number: int = Field(default=1, ge=1)
    performed_at: Optional[datetime] = None


class LogUpdatePayload(BaseModel):
    """User correction of a stored set; only sent fields change."""

    weight: Optional[float] = Field(default=None, ge=0)
    reps: Optional[int] = Field(default=None, ge=0)
    rpe: Optional[float] = Field(default=None, ge=1, le=10)
    duration_mins: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    set_number: Optional[int] = Field(default=None, ge=1)

    @field_validator("set_number")
    @classmethod
    def set_number_not_null(cls, v: Optional[int]) -> int:
        if v is None:
            raise ValueError("set_number cannot be null")
        return v


class ExercisePayload(BaseModel):
    name: str = Field(min_length=1)
    category: ExerciseCategory = ExerciseCategory.UPPER_BODY

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, v):
        return _known_category(v)


class ExerciseUpdatePayload(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[ExerciseCategory] = None

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, v):
        return _known_category(v)


class RoutinePayload(BaseModel):
    name: str = Field(min_length=1)


class RoutineExercisePayload(BaseModel):
    exercise_id: int


class RoutineDefaultsPayload(BaseModel):
    """Routine defaults for an attached exercise; only sent fields change."""

    default_sets: Optional[int] = Field(default=None, ge=1)
    default_reps: Optional[int] = Field(default=None, ge=0)
    default_weight: Optional[float] = Field(default=None, ge=0)
    default_duration_mins: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    sort_order: Optional[int] = None
