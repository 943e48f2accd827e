"""Tests for data models."""

from datetime import date, datetime, timezone

import pytest

from liftlog.models.exercises import (
    STARTER_EXERCISES,
    Exercise,
    ExerciseCategory,
    RoutineExercise,
)
from liftlog.models.history import WorkoutSession
from liftlog.models.stats import FitnessStats, SplitEntry, TrendWeek
from liftlog.models.workout import LogSetResult, SetInput, WorkoutLog


class TestExerciseCategory:
    """Tests for ExerciseCategory parsing."""

    def test_parse_known_values(self):
        """Test display names and compact forms both parse."""
        assert ExerciseCategory.parse("Upper Body") == ExerciseCategory.UPPER_BODY
        assert ExerciseCategory.parse("lower body") == ExerciseCategory.LOWER_BODY
        assert ExerciseCategory.parse("UpperBody") == ExerciseCategory.UPPER_BODY
        assert ExerciseCategory.parse("lower_body") == ExerciseCategory.LOWER_BODY
        assert ExerciseCategory.parse("Cardio") == ExerciseCategory.CARDIO

    def test_parse_unknown_values(self):
        """Test unrecognized and missing values map to UNKNOWN."""
        assert ExerciseCategory.parse("Yoga") == ExerciseCategory.UNKNOWN
        assert ExerciseCategory.parse("") == ExerciseCategory.UNKNOWN
        assert ExerciseCategory.parse(None) == ExerciseCategory.UNKNOWN

    def test_every_category_has_a_color(self):
        for category in ExerciseCategory:
            assert category.color.startswith("#")


class TestExercise:
    """Tests for Exercise model."""

    def test_exercise_to_dict(self):
        """Test exercise serialization."""
        exercise = Exercise(
            name="Bench Press",
            category=ExerciseCategory.UPPER_BODY,
            personal_record=80,
            id=3,
        )
        data = exercise.to_dict()

        assert data == {
            "id": 3,
            "name": "Bench Press",
            "category": "Upper Body",
            "personal_record": 80,
        }

    def test_exercise_from_dict(self):
        """Test exercise deserialization."""
        exercise = Exercise.from_dict({"name": "Squat", "category": "Lower Body"}, id=7)

        assert exercise.id == 7
        assert exercise.category == ExerciseCategory.LOWER_BODY
        assert exercise.personal_record == 0

    def test_rejects_empty_name(self):
        with pytest.raises(ValueError):
            Exercise(name="  ")

    def test_rejects_negative_record(self):
        with pytest.raises(ValueError):
            Exercise(name="Squat", personal_record=-1)

    def test_starter_exercises_populated(self):
        """Test that the starter catalog covers every known category."""
        names = [e.name for e in STARTER_EXERCISES]
        assert "Bench Press" in names
        assert "Squat" in names
        assert "Deadlift" in names
        assert len(names) == len(set(names))

        categories = {e.category for e in STARTER_EXERCISES}
        assert categories == set(ExerciseCategory) - {ExerciseCategory.UNKNOWN}


class TestSetInput:
    """Tests for SetInput validation."""

    def test_valid_set(self):
        entry = SetInput(exercise_id=1, weight=60, reps=8, rpe=8, notes="  ")

        assert entry.set_number == 1
        assert entry.notes is None

    @pytest.mark.parametrize(
        "fields",
        [
            {"weight": -5},
            {"reps": -1},
            {"rpe": 0},
            {"rpe": 10.5},
            {"duration_mins": -2},
            {"set_number": 0},
        ],
    )
    def test_rejects_out_of_range(self, fields):
        with pytest.raises(ValueError):
            SetInput(exercise_id=1, **fields)

    def test_requires_exercise(self):
        with pytest.raises(ValueError):
            SetInput(exercise_id=None)

    def test_from_routine_exercise(self):
        """Test prefilling a set from routine defaults."""
        routine_exercise = RoutineExercise(
            exercise=Exercise(name="Squat", category=ExerciseCategory.LOWER_BODY, id=4),
            group_id=1,
            default_reps=5,
            default_weight=100,
        )

        entry = SetInput.from_routine_exercise(routine_exercise, set_number=2, reps=3)

        assert entry.exercise_id == 4
        assert entry.set_number == 2
        assert entry.weight == 100
        assert entry.reps == 3


class TestWorkoutLog:
    """Tests for WorkoutLog model."""

    def test_to_dict_nests_exercise(self):
        log = WorkoutLog(
            id=12,
            exercise_id=1,
            date=datetime(2026, 10, 21, 10, 0, tzinfo=timezone.utc),
            weight=60,
            reps=8,
            is_pr=True,
            exercise_name="Bench Press",
            category="Upper Body",
        )
        data = log.to_dict()

        assert data["date"] == "2026-10-21T10:00:00+00:00"
        assert data["is_pr"] is True
        assert data["exercise"] == {"name": "Bench Press", "category": "Upper Body"}

    def test_category_defaults_to_unknown(self):
        log = WorkoutLog(exercise_id=1, date=datetime(2026, 10, 21))
        assert log.category == ExerciseCategory.UNKNOWN

    def test_log_set_result_truthiness(self):
        assert not LogSetResult(log=None)
        assert LogSetResult(log=None).to_dict() == {"log": None, "new_pr": False}

        log = WorkoutLog(exercise_id=1, date=datetime(2026, 10, 21))
        assert LogSetResult(log=log, new_pr=True)


class TestStatsModels:
    """Tests for the stats report models."""

    def test_trend_week_add_and_label(self):
        week = TrendWeek(week_start=date(2026, 1, 5))
        week.add(ExerciseCategory.CARDIO)
        week.add(ExerciseCategory.CARDIO)
        week.add(ExerciseCategory.UNKNOWN)

        assert week.week == "Jan 5"
        assert week.cardio == 2
        assert week.count(ExerciseCategory.UNKNOWN) == 1
        assert week.to_dict()["week"] == "Jan 5"

    def test_split_entry_to_dict(self):
        entry = SplitEntry(category=ExerciseCategory.FUNCTIONAL, value=4)
        assert entry.to_dict() == {"name": "Functional", "value": 4, "color": "#F59E0B"}

    def test_empty_report(self):
        data = FitnessStats.empty().to_dict()

        assert data["total_workouts"] == 0
        assert data["weekly_frequency"] == []
        assert data["trend"] == []
        assert data["weekly_avg_rpe"] == 0

    def test_session_to_dict(self):
        session = WorkoutSession(
            date=date(2026, 10, 21), total_sets=0, categories={"Cardio", "Functional"}
        )
        data = session.to_dict()

        assert data["date"] == "2026-10-21"
        assert data["categories"] == ["Cardio", "Functional"]
