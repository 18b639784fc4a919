"""Workout history model - completed sessions, never edited by the live session."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class WorkoutHistory(Base):
    """A finished workout. Exercises and their sets are kept as the JSON shape the client sent."""

    __tablename__ = "workout_history"
    __table_args__ = (Index("ix_workout_history_date", "date"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, nullable=False)
    exercises: Mapped[list[dict]] = mapped_column(JSON, default=list)
    duration: Mapped[int] = mapped_column(Integer, default=0)  # minutes
    completed: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, onupdate=_now)
