"""Set logging, statistics and history routes."""

from datetime import date, datetime

from fastapi import APIRouter, HTTPException, Query, Request

from ...models.workout import SetInput
from ...services.history import HistoryService
from ...services.set_logger import SetLogger
from ...services.stats import StatsService
from ..schemas import LogUpdatePayload, SetPayload

router = APIRouter(prefix="/fitness", tags=["fitness"])


def get_db_path(request: Request):
    """Get the database path from app state."""
    return request.app.state.db_path


@router.post("/sets", status_code=201)
async def log_set(request: Request, payload: SetPayload):
    """Log one performed set and report whether it is a new PR."""
    try:
        entry = SetInput(**payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    result = await SetLogger(get_db_path(request)).log_set(entry)
    if not result:
        raise HTTPException(status_code=503, detail="Could not log set")
    return result.to_dict()


@router.get("/stats")
async def fitness_stats(request: Request, now: datetime | None = None):
    """Dashboard statistics over the whole history."""
    stats = await StatsService(get_db_path(request)).get_fitness_stats(now)
    return stats.to_dict()


@router.get("/history")
async def history(
    request: Request,
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
):
    """Recent sets, newest first."""
    logs = await HistoryService(get_db_path(request)).get_history(limit, offset)
    return [log.to_dict() for log in logs]


@router.get("/history/sessions")
async def history_sessions(
    request: Request,
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
):
    """Recent sets grouped by training day."""
    sessions = await HistoryService(get_db_path(request)).get_sessions(limit, offset)
    return [session.to_dict() for session in sessions]


@router.get("/exercises/{exercise_id}/previous")
async def previous_log(request: Request, exercise_id: int, set_number: int = Query(1, ge=1)):
    """What was done last time for this exercise and set number."""
    log = await HistoryService(get_db_path(request)).get_previous_log(exercise_id, set_number)
    return {"log": log.to_dict() if log else None}


@router.patch("/logs/{log_id}")
async def update_log(request: Request, log_id: int, payload: LogUpdatePayload):
    """Correct a logged set."""
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=422, detail="No fields to update")
    try:
        updated = await HistoryService(get_db_path(request)).update_log(log_id, **changes)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if not updated:
        raise HTTPException(status_code=404, detail="Workout log not found")
    return {"status": "updated", "id": log_id}


@router.delete("/logs/{log_id}")
async def delete_log(request: Request, log_id: int):
    """Delete a logged set."""
    if not await HistoryService(get_db_path(request)).delete_log(log_id):
        raise HTTPException(status_code=404, detail="Workout log not found")
    return {"status": "deleted", "id": log_id}


@router.delete("/sessions/{day}")
async def delete_session(request: Request, day: date):
    """Delete every set logged on a day."""
    if not await HistoryService(get_db_path(request)).delete_session(day):
        raise HTTPException(status_code=503, detail="Could not delete session")
    return {"status": "deleted", "date": day.isoformat()}
