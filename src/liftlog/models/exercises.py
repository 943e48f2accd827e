"""Exercise catalog and routine definitions."""

from dataclasses import dataclass, field
from enum import Enum


class ExerciseCategory(str, Enum):
    """Training category of an exercise.

    ``UNKNOWN`` collects rows whose stored category is missing or not one of
    the known values, so they still show up in statistics.
    """

    UPPER_BODY = "Upper Body"
    LOWER_BODY = "Lower Body"
    CARDIO = "Cardio"
    FUNCTIONAL = "Functional"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: "str | ExerciseCategory | None") -> "ExerciseCategory":
        """Parse a stored category, mapping anything unrecognized to UNKNOWN."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.UNKNOWN
        normalized = str(value).strip().lower().replace("_", " ")
        for category in cls:
            if category.value.lower() == normalized or category.value.lower().replace(" ", "") == normalized:
                return category
        return cls.UNKNOWN

    @property
    def color(self) -> str:
        """Chart color for this category."""
        return CATEGORY_COLORS[self]


CATEGORY_COLORS = {
    ExerciseCategory.UPPER_BODY: "#3B82F6",
    ExerciseCategory.LOWER_BODY: "#EF4444",
    ExerciseCategory.CARDIO: "#10B981",
    ExerciseCategory.FUNCTIONAL: "#F59E0B",
    ExerciseCategory.UNKNOWN: "#6B7280",
}


@dataclass
class Exercise:
    """An exercise in the master catalog.

    ``personal_record`` is the heaviest weight ever logged for the exercise
    and only ever moves up.
    """

    name: str
    category: ExerciseCategory = ExerciseCategory.UPPER_BODY
    personal_record: float = 0
    id: int | None = None

    def __post_init__(self):
        self.category = ExerciseCategory.parse(self.category)
        if not self.name or not self.name.strip():
            raise ValueError("Exercise name cannot be empty")
        if self.personal_record is None:
            self.personal_record = 0
        if self.personal_record < 0:
            raise ValueError("Personal record cannot be negative")

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "personal_record": self.personal_record,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=id if id is not None else data.get("id"),
            name=data["name"],
            category=ExerciseCategory.parse(data.get("category")),
            personal_record=data.get("personal_record") or 0,
        )


@dataclass
class WorkoutGroup:
    """A named routine (e.g. "Push Day") grouping catalog exercises."""

    name: str
    id: int | None = None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass
class RoutineExercise:
    """A catalog exercise attached to a routine, with routine defaults."""

    exercise: Exercise
    group_id: int
    default_sets: int = 3
    default_reps: int | None = 10
    default_weight: float | None = None
    default_duration_mins: float | None = None
    notes: str | None = None
    sort_order: int = 0

    @property
    def exercise_id(self) -> int | None:
        return self.exercise.id

    @property
    def name(self) -> str:
        return self.exercise.name

    def to_dict(self) -> dict:
        """Flatten the exercise and its routine defaults."""
        return {
            **self.exercise.to_dict(),
            "group_id": self.group_id,
            "default_sets": self.default_sets,
            "default_reps": self.default_reps,
            "default_weight": self.default_weight,
            "default_duration_mins": self.default_duration_mins,
            "notes": self.notes,
            "sort_order": self.sort_order,
        }


@dataclass
class StarterExercise:
    """Seed entry for a fresh catalog."""

    name: str
    category: ExerciseCategory
    aliases: list[str] = field(default_factory=list)


# Seeded by ``liftlog init``
STARTER_EXERCISES: list[StarterExercise] = [
    # Upper body
    StarterExercise("Bench Press", ExerciseCategory.UPPER_BODY, ["Flat Bench", "BB Bench"]),
    StarterExercise("Incline Dumbbell Press", ExerciseCategory.UPPER_BODY, ["Incline DB Press"]),
    StarterExercise("Overhead Press", ExerciseCategory.UPPER_BODY, ["OHP", "Military Press"]),
    StarterExercise("Barbell Row", ExerciseCategory.UPPER_BODY, ["BB Row", "Bent Over Row"]),
    StarterExercise("Pull Up", ExerciseCategory.UPPER_BODY, ["Pull-up", "Chin Up"]),
    StarterExercise("Lat Pulldown", ExerciseCategory.UPPER_BODY),
    StarterExercise("Dumbbell Curl", ExerciseCategory.UPPER_BODY, ["DB Curl"]),
    StarterExercise("Tricep Pushdown", ExerciseCategory.UPPER_BODY),
    # Lower body
    StarterExercise("Squat", ExerciseCategory.LOWER_BODY, ["Back Squat", "BB Squat"]),
    StarterExercise("Deadlift", ExerciseCategory.LOWER_BODY, ["Conventional Deadlift"]),
    StarterExercise("Romanian Deadlift", ExerciseCategory.LOWER_BODY, ["RDL"]),
    StarterExercise("Leg Press", ExerciseCategory.LOWER_BODY),
    StarterExercise("Bulgarian Split Squat", ExerciseCategory.LOWER_BODY, ["BSS"]),
    StarterExercise("Calf Raise", ExerciseCategory.LOWER_BODY),
    # Cardio
    StarterExercise("Running", ExerciseCategory.CARDIO, ["Run", "Jog"]),
    StarterExercise("Rowing Machine", ExerciseCategory.CARDIO, ["Erg", "Row Erg"]),
    StarterExercise("Cycling", ExerciseCategory.CARDIO, ["Bike"]),
    # Functional
    StarterExercise("Kettlebell Swing", ExerciseCategory.FUNCTIONAL, ["KB Swing"]),
    StarterExercise("Farmer's Carry", ExerciseCategory.FUNCTIONAL, ["Farmers Walk"]),
    StarterExercise("Burpee", ExerciseCategory.FUNCTIONAL),
    StarterExercise("Plank", ExerciseCategory.FUNCTIONAL),
]
