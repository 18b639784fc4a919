"""
HTTP client for the workout persistence service.

The session store and the routine/exercise caches talk to the service only
through this class. Every non-success outcome is raised as NotFound (404) or
PersistenceFailure (anything else, including connection errors and timeouts);
callers decide the fallback.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from app.core.config import get_settings
from app.core.errors import NotFound, PersistenceFailure
from app.schemas.base import DeleteResult
from app.schemas.exercise import ExerciseRead
from app.schemas.routine import RoutineCreate, RoutineRead, RoutineUpdate
from app.schemas.workout import WorkoutCreate, WorkoutRead, WorkoutUpdate

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _payload(model: BaseModel, partial: bool = False) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_unset=partial, exclude_none=not partial)


class WorkoutGateway:
    """CRUD over /exercises, /routines and /workouts."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            base_url: Service root including the API prefix (default: settings.api_base_url)
            timeout: Request timeout in seconds (default: settings.gateway_timeout)
            transport: Optional httpx transport (tests pass an ASGITransport)
        """
        settings = get_settings()
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout if timeout is not None else settings.gateway_timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> WorkoutGateway:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        if self._client.is_closed:
            logger.error("Persistence client closed: %s %s", method, path)
            raise PersistenceFailure(f"{method} {path}: client is closed")
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.error("Persistence service timeout: %s %s", method, path)
            raise PersistenceFailure(f"{method} {path} timed out") from e
        except httpx.HTTPError as e:
            logger.error("Persistence service unavailable: %s", e)
            raise PersistenceFailure(f"Persistence service is not available at {self._base_url}") from e

        if response.status_code == 404:
            raise NotFound(f"{method} {path}: not found")
        if response.is_error:
            logger.error("Persistence service error: %s - %s", response.status_code, response.text)
            raise PersistenceFailure(f"{method} {path} failed: {response.text}", response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise PersistenceFailure(f"{method} {path}: invalid JSON response", response.status_code) from e

    @staticmethod
    def _parse(model: type[M], data: Any) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise PersistenceFailure(f"Unexpected {model.__name__} payload: {e}") from e

    def _parse_list(self, model: type[M], data: Any) -> list[M]:
        if not isinstance(data, list):
            raise PersistenceFailure(f"Expected a list of {model.__name__}")
        return [self._parse(model, item) for item in data]

    # Exercises

    async def list_exercises(self) -> list[ExerciseRead]:
        return self._parse_list(ExerciseRead, await self._request("GET", "/exercises"))

    # Routines

    async def list_routines(self) -> list[RoutineRead]:
        return self._parse_list(RoutineRead, await self._request("GET", "/routines"))

    async def get_routine(self, routine_id: str) -> RoutineRead:
        return self._parse(RoutineRead, await self._request("GET", f"/routines/{routine_id}"))

    async def create_routine(self, data: RoutineCreate | dict[str, Any]) -> RoutineRead:
        payload = _payload(RoutineCreate.model_validate(data))
        return self._parse(RoutineRead, await self._request("POST", "/routines", json=payload))

    async def update_routine(self, routine_id: str, partial: RoutineUpdate | dict[str, Any]) -> RoutineRead:
        payload = _payload(RoutineUpdate.model_validate(partial), partial=True)
        return self._parse(RoutineRead, await self._request("PATCH", f"/routines/{routine_id}", json=payload))

    async def delete_routine(self, routine_id: str) -> DeleteResult:
        return self._parse(DeleteResult, await self._request("DELETE", f"/routines/{routine_id}"))

    # Workout history

    async def list_workouts(self) -> list[WorkoutRead]:
        return self._parse_list(WorkoutRead, await self._request("GET", "/workouts"))

    async def get_workout(self, workout_id: str) -> WorkoutRead:
        return self._parse(WorkoutRead, await self._request("GET", f"/workouts/{workout_id}"))

    async def create_workout(self, data: WorkoutCreate | WorkoutRead | dict[str, Any]) -> WorkoutRead:
        if isinstance(data, BaseModel):
            data = data.model_dump()
        payload = _payload(WorkoutCreate.model_validate(data))
        return self._parse(WorkoutRead, await self._request("POST", "/workouts", json=payload))

    async def update_workout(self, workout_id: str, partial: WorkoutUpdate | dict[str, Any]) -> WorkoutRead:
        payload = _payload(WorkoutUpdate.model_validate(partial), partial=True)
        return self._parse(WorkoutRead, await self._request("PATCH", f"/workouts/{workout_id}", json=payload))

    async def delete_workout(self, workout_id: str) -> DeleteResult:
        return self._parse(DeleteResult, await self._request("DELETE", f"/workouts/{workout_id}"))
