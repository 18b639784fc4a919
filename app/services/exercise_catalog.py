"""Exercise list for pickers, grouped by muscle group."""

from __future__ import annotations

import logging

from app.clients.gateway import WorkoutGateway
from app.core.errors import NotFound, PersistenceFailure
from app.schemas.exercise import ExerciseRead

logger = logging.getLogger(__name__)


class ExerciseCatalog:
    def __init__(self, gateway: WorkoutGateway):
        self.gateway = gateway
        self.exercises: list[ExerciseRead] = []
        self.by_muscle_group: dict[str, list[ExerciseRead]] = {}
        self.is_loading = False

    async def fetch_exercises(self) -> list[ExerciseRead]:
        self.is_loading = True
        try:
            exercises = await self.gateway.list_exercises()
        except (NotFound, PersistenceFailure) as e:
            logger.warning("Error fetching exercises: %s", e)
        else:
            grouped: dict[str, list[ExerciseRead]] = {}
            for exercise in exercises:
                grouped.setdefault(exercise.muscle_group, []).append(exercise)
            self.exercises = exercises
            self.by_muscle_group = grouped
        finally:
            self.is_loading = False
        return self.exercises

    def get(self, exercise_id: str) -> ExerciseRead | None:
        return next((e for e in self.exercises if e.id == exercise_id), None)
