"""Shared enums for models and API."""

from enum import Enum


class Difficulty(str, Enum):
    """Routine difficulty level."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class StatsPeriod(str, Enum):
    """Time window for progress statistics."""

    WEEK = "week"  # Current calendar week (Monday start)
    MONTH = "month"  # Current calendar month
    ALL = "all"  # No filtering


class TimerState(str, Enum):
    """Rest timer lifecycle."""

    IDLE = "idle"
    RUNNING = "running"
