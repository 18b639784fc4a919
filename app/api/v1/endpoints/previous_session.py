"""Previous session context - what you did last time for an exercise."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.endpoints.workouts import load_history
from app.db.session import get_db
from app.schemas.stats import PreviousPerformance
from app.services.statistics import previous_performance

router = APIRouter()


@router.get("/{exercise_id}", response_model=PreviousPerformance | None)
async def get_previous_session(
    exercise_id: str,
    exclude_workout_id: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Sets for this exercise from the most recent workout that included it, and
    the last completed set. Pass exclude_workout_id to skip a given workout.
    Returns null when the exercise was never done.
    """
    return previous_performance(await load_history(db), exercise_id, exclude_workout_id)
