"""Exercise catalog and routine routes."""

from fastapi import APIRouter, HTTPException, Request

from ...services.catalog import CatalogService
from ..schemas import (
    ExercisePayload,
    ExerciseUpdatePayload,
    RoutineDefaultsPayload,
    RoutineExercisePayload,
    RoutinePayload,
)

router = APIRouter(prefix="/fitness", tags=["catalog"])


def get_catalog(request: Request) -> CatalogService:
    """Catalog service bound to the app's database."""
    return CatalogService(request.app.state.db_path)


@router.get("/exercises")
async def list_exercises(request: Request):
    exercises = await get_catalog(request).list_exercises()
    return [exercise.to_dict() for exercise in exercises]


@router.post("/exercises", status_code=201)
async def create_exercise(request: Request, payload: ExercisePayload):
    exercise = await get_catalog(request).create_exercise(payload.name, payload.category)
    if exercise is None:
        raise HTTPException(status_code=409, detail=f"Could not create exercise {payload.name!r}")
    return exercise.to_dict()


@router.patch("/exercises/{exercise_id}")
async def update_exercise(request: Request, exercise_id: int, payload: ExerciseUpdatePayload):
    """Rename or re-categorize an exercise."""
    if payload.name is None and payload.category is None:
        raise HTTPException(status_code=422, detail="No fields to update")
    try:
        updated = await get_catalog(request).update_exercise(
            exercise_id, name=payload.name, category=payload.category
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=409, detail=f"Could not rename exercise to {payload.name!r}")
    if not updated:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return {"status": "updated", "id": exercise_id}


@router.delete("/exercises/{exercise_id}")
async def delete_exercise(request: Request, exercise_id: int):
    if not await get_catalog(request).delete_exercise(exercise_id):
        raise HTTPException(status_code=404, detail="Exercise not found")
    return {"status": "deleted", "id": exercise_id}


@router.get("/routines")
async def list_routines(request: Request):
    groups = await get_catalog(request).list_groups()
    return [group.to_dict() for group in groups]


@router.post("/routines", status_code=201)
async def create_routine(request: Request, payload: RoutinePayload):
    try:
        group = await get_catalog(request).create_group(payload.name)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if group is None:
        raise HTTPException(status_code=503, detail="Could not create routine")
    return group.to_dict()


@router.delete("/routines/{group_id}")
async def delete_routine(request: Request, group_id: int):
    if not await get_catalog(request).delete_group(group_id):
        raise HTTPException(status_code=404, detail="Routine not found")
    return {"status": "deleted", "id": group_id}


@router.get("/routines/{group_id}/exercises")
async def routine_exercises(request: Request, group_id: int):
    """Exercises of a routine with their defaults, in routine order."""
    exercises = await get_catalog(request).get_routine_exercises(group_id)
    return [exercise.to_dict() for exercise in exercises]


@router.post("/routines/{group_id}/exercises", status_code=201)
async def attach_exercise(request: Request, group_id: int, payload: RoutineExercisePayload):
    added = await get_catalog(request).add_exercise_to_routine(group_id, payload.exercise_id)
    if added is None:
        raise HTTPException(status_code=409, detail="Exercise is already in this routine")
    if not added:
        raise HTTPException(status_code=404, detail="Routine or exercise not found")
    return {"status": "added", "group_id": group_id, "exercise_id": payload.exercise_id}


@router.patch("/routines/{group_id}/exercises/{exercise_id}")
async def update_routine_exercise(
    request: Request, group_id: int, exercise_id: int, payload: RoutineDefaultsPayload
):
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=422, detail="No fields to update")
    if not await get_catalog(request).update_routine_exercise(group_id, exercise_id, **changes):
        raise HTTPException(status_code=404, detail="Routine exercise not found")
    return {"status": "updated", "group_id": group_id, "exercise_id": exercise_id}


@router.delete("/routines/{group_id}/exercises/{exercise_id}")
async def detach_exercise(request: Request, group_id: int, exercise_id: int):
    if not await get_catalog(request).remove_exercise_from_routine(group_id, exercise_id):
        raise HTTPException(status_code=404, detail="Routine exercise not found")
    return {"status": "removed", "group_id": group_id, "exercise_id": exercise_id}
