"""Workout routine schemas (templates used to start a workout)."""

from datetime import datetime

from pydantic import Field, field_validator

from app.core.config import get_settings
from app.core.enums import Difficulty
from app.schemas.base import CamelModel, StrictCamelModel


def _default_rest_seconds() -> int:
    return get_settings().default_rest_seconds


class RoutineExercise(CamelModel):
    """Planned exercise: set/rep counts, not actual sets."""

    exercise_id: str
    name: str
    sets: int = Field(default=3, ge=0)
    reps: int = Field(default=10, ge=0)
    rest_time: int = Field(default_factory=_default_rest_seconds, ge=0)
    notes: str | None = None


def _dedupe(groups: list[str]) -> list[str]:
    return list(dict.fromkeys(groups))


class RoutineBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    difficulty: Difficulty = Difficulty.BEGINNER
    category: str = ""
    estimated_duration: int = Field(default=0, ge=0)  # minutes
    target_muscle_groups: list[str] = []
    exercises: list[RoutineExercise] = []
    is_custom: bool = False

    @field_validator("target_muscle_groups")
    @classmethod
    def unique_groups(cls, v: list[str]) -> list[str]:
        return _dedupe(v)


class RoutineCreate(RoutineBase):
    pass


class RoutineUpdate(StrictCamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    difficulty: Difficulty | None = None
    category: str | None = None
    estimated_duration: int | None = Field(None, ge=0)
    target_muscle_groups: list[str] | None = None
    exercises: list[RoutineExercise] | None = None
    is_custom: bool | None = None

    @field_validator("target_muscle_groups")
    @classmethod
    def unique_groups(cls, v: list[str] | None) -> list[str] | None:
        return _dedupe(v) if v is not None else None


class RoutineRead(RoutineBase):
    id: str
    created_at: datetime
    updated_at: datetime
