"""Workout routine - a template used to start a workout."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.enums import Difficulty
from app.db.base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Routine(Base):
    """Saved routine. Planned exercises are stored as a JSON list in routine order."""

    __tablename__ = "routines"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, default="")
    difficulty: Mapped[Difficulty] = mapped_column(Enum(Difficulty), default=Difficulty.BEGINNER, nullable=False)
    category: Mapped[str] = mapped_column(String(100), default="")
    estimated_duration: Mapped[int] = mapped_column(Integer, default=0)  # minutes
    target_muscle_groups: Mapped[list[str]] = mapped_column(JSON, default=list)
    exercises: Mapped[list[dict]] = mapped_column(JSON, default=list)  # RoutineExercise dicts
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, onupdate=_now)
