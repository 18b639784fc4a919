"""Progress statistics and chart series for a period (week / month / all)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.endpoints.workouts import load_history
from app.core.constants import RECENT_WORKOUTS_CHART_LIMIT
from app.core.enums import StatsPeriod
from app.db.session import get_db
from app.schemas.stats import ProgressStats, SeriesPoint
from app.services import statistics

router = APIRouter()


@router.get("", response_model=ProgressStats)
async def get_progress_stats(
    period: StatsPeriod = StatsPeriod.WEEK,
    db: AsyncSession = Depends(get_db),
):
    """Totals and average duration for the period; streaks over the whole history."""
    return statistics.summarize(await load_history(db), period)


@router.get("/duration-series", response_model=list[SeriesPoint])
async def get_duration_series(
    period: StatsPeriod = StatsPeriod.WEEK,
    db: AsyncSession = Depends(get_db),
):
    """Minutes trained per day for the duration chart."""
    return statistics.duration_series(await load_history(db), period)


@router.get("/exercise-counts", response_model=list[SeriesPoint])
async def get_exercise_counts(
    limit: int = Query(RECENT_WORKOUTS_CHART_LIMIT, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """Exercises per workout for the most recent workouts, oldest first."""
    return statistics.exercise_counts(await load_history(db), limit)


@router.get("/rest-presets", response_model=list[SeriesPoint])
async def get_rest_presets():
    """Rest timer quick picks (seconds with their display label)."""
    return statistics.rest_presets()
