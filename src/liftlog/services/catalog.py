"""Exercise catalog and routine management."""

import logging
from pathlib import Path

from ..db.engine import get_db_path
from ..db.repositories import ExerciseRepository, RoutineRepository
from ..exceptions import StoreError
from ..models.exercises import (
    Exercise,
    ExerciseCategory,
    RoutineExercise,
    STARTER_EXERCISES,
    WorkoutGroup,
)
from ..utils.exercise_utils import find_matching_exercise

logger = logging.getLogger(__name__)


class CatalogService:
    """Create, edit and organize exercises and routines.

    Store failures are logged and reported as ``None``/``False``/``[]``.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()
        self.exercises = ExerciseRepository(self.db_path)
        self.routines = RoutineRepository(self.db_path)

    async def list_exercises(self) -> list[Exercise]:
        try:
            return await self.exercises.list_all()
        except StoreError as e:
            logger.error("Error fetching exercise library: %s", e)
            return []

    async def get_exercise(self, exercise_id: int) -> Exercise | None:
        """Look an exercise up by ID. None if missing or unreadable."""
        try:
            return await self.exercises.get(exercise_id)
        except StoreError as e:
            logger.error("Error looking up exercise %s: %s", exercise_id, e)
            return None

    async def find_exercise(self, query: str) -> Exercise | None:
        """Resolve a user-typed name (abbreviations and typos allowed)."""
        try:
            exact = await self.exercises.get_by_name(query)
        except StoreError as e:
            logger.error("Error looking up exercise %r: %s", query, e)
            return None
        if exact:
            return exact
        return find_matching_exercise(
            query, await self.list_exercises(), aliases=_starter_aliases()
        )

    async def create_exercise(
        self, name: str, category: ExerciseCategory | str = ExerciseCategory.UPPER_BODY
    ) -> Exercise | None:
        """Add an exercise with a personal record of 0."""
        exercise = Exercise(name=name.strip(), category=ExerciseCategory.parse(category))
        try:
            exercise.id = await self.exercises.create(exercise)
        except StoreError as e:
            logger.error("Error creating exercise %r: %s", name, e)
            return None
        return exercise

    async def update_exercise(
        self,
        exercise_id: int,
        name: str | None = None,
        category: ExerciseCategory | str | None = None,
    ) -> bool | None:
        """Rename and/or re-categorize an exercise.

        Returns False if the exercise does not exist and None if the store
        rejected the change (e.g. the new name is already taken).
        """
        try:
            return await self.exercises.update(exercise_id, name=name, category=category)
        except StoreError as e:
            logger.error("Error updating exercise %s: %s", exercise_id, e)
            return None

    async def delete_exercise(self, exercise_id: int) -> bool:
        try:
            return await self.exercises.delete(exercise_id)
        except StoreError as e:
            logger.error("Error deleting exercise %s: %s", exercise_id, e)
            return False

    async def list_groups(self) -> list[WorkoutGroup]:
        try:
            return await self.routines.list_groups()
        except StoreError as e:
            logger.error("Error fetching workout groups: %s", e)
            return []

    async def create_group(self, name: str) -> WorkoutGroup | None:
        try:
            group_id = await self.routines.create_group(name)
        except StoreError as e:
            logger.error("Error creating workout group %r: %s", name, e)
            return None
        return WorkoutGroup(id=group_id, name=name.strip())

    async def delete_group(self, group_id: int) -> bool:
        try:
            return await self.routines.delete_group(group_id)
        except StoreError as e:
            logger.error("Error deleting workout group %s: %s", group_id, e)
            return False

    async def add_exercise_to_routine(self, group_id: int, exercise_id: int) -> bool | None:
        """Attach an exercise to a routine.

        Returns False if the routine or exercise does not exist and None if
        the store rejected the link (e.g. it is already attached).
        """
        try:
            return await self.routines.add_exercise(group_id, exercise_id)
        except StoreError as e:
            logger.error("Error linking exercise to routine: %s", e)
            return None

    async def remove_exercise_from_routine(self, group_id: int, exercise_id: int) -> bool:
        try:
            return await self.routines.remove_exercise(group_id, exercise_id)
        except StoreError as e:
            logger.error("Error removing exercise from routine: %s", e)
            return False

    async def get_routine_exercises(self, group_id: int) -> list[RoutineExercise]:
        try:
            return await self.routines.get_routine_exercises(group_id)
        except StoreError as e:
            logger.error("Error fetching routine exercises: %s", e)
            return []

    async def update_routine_exercise(
        self, group_id: int, exercise_id: int, **changes
    ) -> bool:
        """Update routine defaults such as ``default_weight`` or ``sort_order``."""
        try:
            return await self.routines.update_routine_exercise(group_id, exercise_id, changes)
        except StoreError as e:
            logger.error("Error updating routine exercise: %s", e)
            return False


def _starter_aliases() -> dict[str, list[str]]:
    return {starter.name: starter.aliases for starter in STARTER_EXERCISES}
