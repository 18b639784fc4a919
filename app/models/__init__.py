"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.exercise import Exercise
from app.models.routine import Routine
from app.models.workout import WorkoutHistory

__all__ = [
    "Exercise",
    "Routine",
    "WorkoutHistory",
]
