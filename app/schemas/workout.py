"""Workout, WorkoutExercise and WorkoutSet schemas.

The same models back the HTTP API and the client-side session store. The
store treats them as values: every mutation builds a new instance with
model_copy instead of assigning in place.
"""

from datetime import datetime, timezone

from pydantic import Field, field_validator

from app.core.config import get_settings
from app.schemas.base import CamelModel, StrictCamelModel


def ensure_aware(value: datetime) -> datetime:
    """Naive timestamps (e.g. read back from SQLite) are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _default_rest_seconds() -> int:
    return get_settings().default_rest_seconds


class WorkoutSetRead(CamelModel):
    id: str
    weight: float = Field(default=0, ge=0)
    reps: int = Field(default=0, ge=0)
    completed: bool = False
    rest_time: int = Field(default_factory=_default_rest_seconds, ge=0)  # seconds


class WorkoutSetUpdate(StrictCamelModel):
    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    completed: bool | None = None
    rest_time: int | None = Field(None, ge=0)


class WorkoutExerciseRead(CamelModel):
    id: str
    exercise_id: str
    sets: list[WorkoutSetRead] = []
    notes: str | None = None


class WorkoutBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    date: datetime
    exercises: list[WorkoutExerciseRead] = []
    duration: int = Field(default=0, ge=0)  # minutes
    completed: bool = False

    @field_validator("date")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return ensure_aware(v)


class WorkoutCreate(WorkoutBase):
    """History entry to persist. id is optional; the client usually supplies its own."""

    id: str | None = None
    completed: bool = True


class WorkoutUpdate(StrictCamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    date: datetime | None = None
    exercises: list[WorkoutExerciseRead] | None = None
    duration: int | None = Field(None, ge=0)
    completed: bool | None = None

    @field_validator("date")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        return ensure_aware(v) if v is not None else None


class WorkoutRead(WorkoutBase):
    id: str
