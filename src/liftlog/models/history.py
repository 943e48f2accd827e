"""Workout history grouping model."""

from dataclasses import dataclass, field
from datetime import date

from .workout import WorkoutLog


@dataclass
class WorkoutSession:
    """All sets logged on one calendar day, grouped by exercise name."""

    date: date
    exercises: dict[str, list[WorkoutLog]] = field(default_factory=dict)
    total_sets: int = 0
    categories: set[str] = field(default_factory=set)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "exercises": {
                name: [log.to_dict() for log in logs]
                for name, logs in self.exercises.items()
            },
            "total_sets": self.total_sets,
            "categories": sorted(self.categories),
        }
