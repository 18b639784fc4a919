"""Workout routine CRUD endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.field_maps import ROUTINE_FIELDS, to_columns
from app.db.session import get_db
from app.models.routine import Routine
from app.schemas.base import DeleteResult
from app.schemas.routine import RoutineCreate, RoutineRead, RoutineUpdate

router = APIRouter()


async def _get_or_404(db: AsyncSession, routine_id: str) -> Routine:
    routine = await db.get(Routine, routine_id)
    if not routine:
        raise HTTPException(status_code=404, detail="Routine not found")
    return routine


@router.get("", response_model=list[RoutineRead])
async def list_routines(
    db: AsyncSession = Depends(get_db),
    skip: int = 0,
    limit: int = 100,
):
    """List routines, newest first."""
    result = await db.execute(
        select(Routine).order_by(Routine.created_at.desc()).offset(skip).limit(limit)
    )
    return list(result.scalars().all())


@router.post("", response_model=RoutineRead, status_code=201)
async def create_routine(
    payload: RoutineCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a routine. Planned exercises are stored in the order given."""
    routine = Routine(**to_columns(payload.model_dump(by_alias=True), ROUTINE_FIELDS))
    db.add(routine)
    await db.flush()
    await db.refresh(routine)
    return routine


@router.get("/{routine_id}", response_model=RoutineRead)
async def get_routine(
    routine_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a routine with its planned exercises."""
    return await _get_or_404(db, routine_id)


@router.patch("/{routine_id}", response_model=RoutineRead)
async def update_routine(
    routine_id: str,
    payload: RoutineUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Partial update. Only mapped fields are accepted, nulls are ignored; updated_at is refreshed."""
    routine = await _get_or_404(db, routine_id)
    changes = to_columns(payload.model_dump(by_alias=True, exclude_unset=True, exclude_none=True), ROUTINE_FIELDS)
    for column, value in changes.items():
        setattr(routine, column, value)
    await db.flush()
    await db.refresh(routine)
    return routine


@router.delete("/{routine_id}", response_model=DeleteResult)
async def delete_routine(
    routine_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete a routine."""
    routine = await _get_or_404(db, routine_id)
    await db.delete(routine)
    return DeleteResult(success=True, id=routine_id)
