"""Client-side routine cache backed by the persistence gateway.

The cache is refreshed with fetch_routines (call it whenever a routine view
opens). Failed calls are logged and leave the cache as it was; the user
re-triggers the action to retry.
"""

from __future__ import annotations

import logging
from typing import Any

from app.clients.gateway import WorkoutGateway
from app.core.errors import NotFound, PersistenceFailure
from app.schemas.routine import RoutineCreate, RoutineRead, RoutineUpdate

logger = logging.getLogger(__name__)


class RoutineStore:
    def __init__(self, gateway: WorkoutGateway):
        self.gateway = gateway
        self.routines: list[RoutineRead] = []
        self.selected_routine: RoutineRead | None = None
        self.is_loading = False

    async def fetch_routines(self) -> list[RoutineRead]:
        self.is_loading = True
        try:
            self.routines = await self.gateway.list_routines()
        except (NotFound, PersistenceFailure) as e:
            logger.warning("Error fetching routines: %s", e)
        finally:
            self.is_loading = False
        return self.routines

    async def add_routine(self, data: RoutineCreate | dict[str, Any]) -> RoutineRead | None:
        try:
            routine = await self.gateway.create_routine(data)
        except (NotFound, PersistenceFailure) as e:
            logger.warning("Error adding routine: %s", e)
            return None
        self.routines = [*self.routines, routine]
        return routine

    async def update_routine(self, routine_id: str, updates: RoutineUpdate | dict[str, Any]) -> RoutineRead | None:
        try:
            updated = await self.gateway.update_routine(routine_id, updates)
        except (NotFound, PersistenceFailure) as e:
            logger.warning("Error updating routine %s: %s", routine_id, e)
            return None
        self.routines = [updated if r.id == routine_id else r for r in self.routines]
        if self.selected_routine is not None and self.selected_routine.id == routine_id:
            self.selected_routine = updated
        return updated

    async def delete_routine(self, routine_id: str) -> bool:
        try:
            await self.gateway.delete_routine(routine_id)
        except (NotFound, PersistenceFailure) as e:
            logger.warning("Error deleting routine %s: %s", routine_id, e)
            return False
        self.routines = [r for r in self.routines if r.id != routine_id]
        if self.selected_routine is not None and self.selected_routine.id == routine_id:
            self.selected_routine = None
        return True

    def select_routine(self, routine_id: str) -> RoutineRead | None:
        self.selected_routine = next((r for r in self.routines if r.id == routine_id), None)
        return self.selected_routine
