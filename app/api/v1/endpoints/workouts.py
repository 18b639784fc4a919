"""Workout history CRUD endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.field_maps import WORKOUT_FIELDS, to_columns
from app.db.session import get_db
from app.models.workout import WorkoutHistory
from app.schemas.base import DeleteResult
from app.schemas.workout import WorkoutCreate, WorkoutRead, WorkoutUpdate

router = APIRouter()


async def load_history(db: AsyncSession) -> list[WorkoutRead]:
    """Full history as schemas, newest first (input for the statistics engine)."""
    result = await db.execute(select(WorkoutHistory).order_by(WorkoutHistory.date.desc()))
    return [WorkoutRead.model_validate(w) for w in result.scalars().all()]


async def _get_or_404(db: AsyncSession, workout_id: str) -> WorkoutHistory:
    workout = await db.get(WorkoutHistory, workout_id)
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.get("", response_model=list[WorkoutRead])
async def list_workouts(
    db: AsyncSession = Depends(get_db),
    skip: int = 0,
    limit: int | None = None,
):
    """List workout history, newest first, with exercises and sets. Unbounded unless limit is given."""
    query = select(WorkoutHistory).order_by(WorkoutHistory.date.desc()).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


@router.post("", response_model=WorkoutRead, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    db: AsyncSession = Depends(get_db),
):
    """Save a finished workout. Keeps the client's id when one is sent."""
    data = payload.model_dump(by_alias=True)
    workout_id = data.pop("id", None) or str(uuid.uuid4())
    if await db.get(WorkoutHistory, workout_id) is not None:
        raise HTTPException(status_code=409, detail="Workout already exists")
    workout = WorkoutHistory(id=workout_id, **to_columns(data, WORKOUT_FIELDS))
    db.add(workout)
    await db.flush()
    await db.refresh(workout)
    return workout


@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get one workout with all exercises and sets."""
    return await _get_or_404(db, workout_id)


@router.patch("/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: str,
    payload: WorkoutUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Partial update (name, date, exercises, duration, completed). Nulls are ignored."""
    workout = await _get_or_404(db, workout_id)
    changes = to_columns(payload.model_dump(by_alias=True, exclude_unset=True, exclude_none=True), WORKOUT_FIELDS)
    for column, value in changes.items():
        setattr(workout, column, value)
    await db.flush()
    await db.refresh(workout)
    return workout


@router.delete("/{workout_id}", response_model=DeleteResult)
async def delete_workout(
    workout_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete a workout from history."""
    workout = await _get_or_404(db, workout_id)
    await db.delete(workout)
    return DeleteResult(success=True, id=workout_id)
