"""Streak calculation endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.models.workout import WorkoutHistory
from app.schemas.stats import StreakStats
from app.services.statistics import compute_streaks

router = APIRouter()


@router.get("", response_model=StreakStats)
async def get_streak(db: AsyncSession = Depends(get_db)):
    """
    Returns current workout streak (consecutive days with at least 1 workout),
    longest ever streak, and the date of the last workout.
    """
    result = await db.execute(select(WorkoutHistory.date))
    return compute_streaks(result.scalars().all())
