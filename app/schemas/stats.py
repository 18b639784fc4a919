"""Progress statistics schemas."""

from datetime import date, datetime

from app.core.enums import StatsPeriod
from app.schemas.base import CamelModel
from app.schemas.workout import WorkoutSetRead


class StreakStats(CamelModel):
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: date | None = None


class ProgressStats(CamelModel):
    period: StatsPeriod
    total_workouts: int = 0
    total_duration: int = 0  # minutes
    average_duration: int = 0  # minutes, rounded
    current_streak: int = 0
    max_streak: int = 0


class PreviousPerformance(CamelModel):
    """What was done last time for an exercise, for in-session comparison."""

    workout_id: str
    date: datetime
    sets: list[WorkoutSetRead]
    last_set: WorkoutSetRead | None = None


class SeriesPoint(CamelModel):
    label: str
    value: int
