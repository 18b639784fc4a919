"""Request field -> column mapping for partial updates.

Each table is declared statically and checked against the ORM table when this
module is imported, so a renamed column fails at startup instead of producing
a bad UPDATE. Fields missing from a table are rejected.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.db.base import Base
from app.models.routine import Routine
from app.models.workout import WorkoutHistory


class UnknownFieldError(ValueError):
    """Update payload carried a field with no column mapping."""

    def __init__(self, fields: list[str]):
        super().__init__(f"Unknown field(s): {', '.join(sorted(fields))}")
        self.fields = fields


ROUTINE_FIELDS: Mapping[str, str] = {
    "name": "name",
    "description": "description",
    "difficulty": "difficulty",
    "category": "category",
    "estimatedDuration": "estimated_duration",
    "targetMuscleGroups": "target_muscle_groups",
    "exercises": "exercises",
    "isCustom": "is_custom",
}

WORKOUT_FIELDS: Mapping[str, str] = {
    "name": "name",
    "date": "date",
    "exercises": "exercises",
    "duration": "duration",
    "completed": "completed",
}


def check_field_map(model: type[Base], mapping: Mapping[str, str]) -> None:
    """Raise if any mapped column does not exist on the model's table."""
    columns = set(model.__table__.columns.keys())
    missing = [col for col in mapping.values() if col not in columns]
    if missing:
        raise RuntimeError(f"{model.__tablename__}: field map points at missing column(s) {missing}")


def to_columns(payload: Mapping[str, Any], mapping: Mapping[str, str]) -> dict[str, Any]:
    """Translate camelCase request keys to column names; reject anything unmapped."""
    unknown = [key for key in payload if key not in mapping]
    if unknown:
        raise UnknownFieldError(unknown)
    return {mapping[key]: value for key, value in payload.items()}


check_field_map(Routine, ROUTINE_FIELDS)
check_field_map(WorkoutHistory, WORKOUT_FIELDS)
