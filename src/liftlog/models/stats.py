"""Fitness statistics report models."""

from dataclasses import dataclass, field
from datetime import date

from ..utils.calendar import week_label
from .exercises import ExerciseCategory


@dataclass
class DayFrequency:
    """Whether anything was logged on one day of the last week."""

    day: str
    date: date
    count: int

    def to_dict(self) -> dict:
        return {"day": self.day, "date": self.date.isoformat(), "count": self.count}


@dataclass
class RecentPR:
    exercise: str
    weight: float
    date: date

    def to_dict(self) -> dict:
        return {
            "exercise": self.exercise,
            "weight": self.weight,
            "date": self.date.isoformat(),
        }


@dataclass
class SplitEntry:
    """Number of sets logged in one category."""

    category: ExerciseCategory
    value: int

    @property
    def name(self) -> str:
        return self.category.value

    @property
    def color(self) -> str:
        return self.category.color

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value, "color": self.color}


@dataclass
class TrendWeek:
    """Sets per category within one Monday-aligned week."""

    week_start: date
    upper_body: int = 0
    lower_body: int = 0
    cardio: int = 0
    functional: int = 0
    unknown: int = 0

    @property
    def week(self) -> str:
        return week_label(self.week_start)

    def add(self, category: ExerciseCategory) -> None:
        """Count one set in ``category``."""
        attr = category.name.lower()
        setattr(self, attr, getattr(self, attr) + 1)

    def count(self, category: ExerciseCategory) -> int:
        return getattr(self, category.name.lower())

    def to_dict(self) -> dict:
        return {
            "week": self.week,
            "week_start": self.week_start.isoformat(),
            "upper_body": self.upper_body,
            "lower_body": self.lower_body,
            "cardio": self.cardio,
            "functional": self.functional,
            "unknown": self.unknown,
        }


@dataclass
class ConsistencyDay:
    """One heatmap cell: activity volume on a calendar day."""

    date: date
    count: int
    categories: list[str]
    level: int

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "count": self.count,
            "categories": list(self.categories),
            "level": self.level,
        }


@dataclass
class FitnessStats:
    """Everything the fitness dashboard shows, derived from the set history."""

    weekly_frequency: list[DayFrequency] = field(default_factory=list)
    recent_prs: list[RecentPR] = field(default_factory=list)
    total_workouts: int = 0
    streak: int = 0
    weekly_avg_rpe: float = 0
    training_split: list[SplitEntry] = field(default_factory=list)
    trend: list[TrendWeek] = field(default_factory=list)
    consistency: list[ConsistencyDay] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "FitnessStats":
        """Report returned when the history could not be read."""
        return cls()

    def to_dict(self) -> dict:
        """Convert to dictionary for the API."""
        return {
            "weekly_frequency": [d.to_dict() for d in self.weekly_frequency],
            "recent_prs": [pr.to_dict() for pr in self.recent_prs],
            "total_workouts": self.total_workouts,
            "streak": self.streak,
            "weekly_avg_rpe": self.weekly_avg_rpe,
            "training_split": [s.to_dict() for s in self.training_split],
            "trend": [w.to_dict() for w in self.trend],
            "consistency": [c.to_dict() for c in self.consistency],
        }
