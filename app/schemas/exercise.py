"""Exercise schemas."""

from pydantic import Field

from app.schemas.base import CamelModel


class ExerciseBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    muscle_group: str = Field(..., min_length=1, max_length=100)
    category: str | None = None
    description: str | None = None
    target_muscles: list[str] = []


class ExerciseCreate(ExerciseBase):
    id: str = Field(..., min_length=1, max_length=100)


class ExerciseRead(ExerciseBase):
    id: str
