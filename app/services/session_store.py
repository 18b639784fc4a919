"""Live workout session: the in-progress workout, its rest timer and the local history cache.

One store instance per session/view; nothing is global. Mutations are
synchronous and replace the whole current workout (copy-on-write), so a
caller holding an earlier WorkoutRead never sees it change. Only the
persistence calls await:

* complete_workout is local-first: history is updated before the gateway
  call, and a failed save is logged, not raised.
* delete_workout is remote-first: history changes only after the gateway
  confirms the delete.

Precondition failures (no current workout, workout already running) are
InvalidState internally and turn into logged no-ops at the public boundary.
"""

from __future__ import annotations

import functools
import logging
import math
import uuid
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any

from app.clients.gateway import WorkoutGateway
from app.core.config import get_settings
from app.core.constants import SECONDS_PER_MINUTE
from app.core.enums import StatsPeriod
from app.core.errors import InvalidState, NotFound, PersistenceFailure
from app.schemas.routine import RoutineRead
from app.schemas.stats import PreviousPerformance, ProgressStats
from app.schemas.workout import (
    WorkoutExerciseRead,
    WorkoutRead,
    WorkoutSetRead,
    WorkoutSetUpdate,
)
from app.services import statistics
from app.services.rest_timer import ActiveTimer, RestTimer

logger = logging.getLogger(__name__)


def noop_on_invalid_state(method: Callable[..., Any]) -> Callable[..., Any]:
    """Turn InvalidState into a no-op that returns the unchanged current workout."""

    @functools.wraps(method)
    def wrapper(self: WorkoutSessionStore, *args: Any, **kwargs: Any) -> Any:
        try:
            return method(self, *args, **kwargs)
        except InvalidState as e:
            logger.warning("%s ignored: %s", method.__name__, e)
            return self.current_workout

    return wrapper


def _uuid() -> str:
    return str(uuid.uuid4())


class WorkoutSessionStore:
    def __init__(
        self,
        gateway: WorkoutGateway | None = None,
        timer: RestTimer | None = None,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
        default_rest_time: int | None = None,
    ):
        settings = get_settings()
        self.gateway = gateway
        self.timer = timer or RestTimer(tick_seconds=settings.rest_timer_tick_seconds)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._new_id = id_factory or _uuid
        self.default_rest_time = (
            default_rest_time if default_rest_time is not None else settings.default_rest_seconds
        )
        self.current_workout: WorkoutRead | None = None
        self.history: list[WorkoutRead] = []
        self.is_loading = False

    def close(self) -> None:
        """Tear down the rest timer (no countdown task survives the store)."""
        self.timer.stop()

    # Preconditions

    def _require_current(self) -> WorkoutRead:
        if self.current_workout is None:
            raise InvalidState("no workout in progress")
        return self.current_workout

    def _require_idle(self) -> None:
        if self.current_workout is not None:
            raise InvalidState(f"workout {self.current_workout.id} already in progress")

    def _new_set(self, weight: float = 0, reps: int = 0, rest_time: int | None = None) -> WorkoutSetRead:
        return WorkoutSetRead(
            id=self._new_id(),
            weight=weight,
            reps=reps,
            completed=False,
            rest_time=self.default_rest_time if rest_time is None else rest_time,
        )

    def _replace_exercises(self, exercises: list[WorkoutExerciseRead]) -> WorkoutRead:
        self.current_workout = self._require_current().model_copy(update={"exercises": exercises})
        return self.current_workout

    def _map_exercise(
        self,
        exercise_id: str,
        change: Callable[[WorkoutExerciseRead], WorkoutExerciseRead],
    ) -> WorkoutRead:
        workout = self._require_current()
        return self._replace_exercises(
            [change(e) if e.id == exercise_id else e for e in workout.exercises]
        )

    def _find_set(self, exercise_id: str, set_id: str) -> WorkoutSetRead | None:
        if self.current_workout is None:
            return None
        for exercise in self.current_workout.exercises:
            if exercise.id == exercise_id:
                return next((s for s in exercise.sets if s.id == set_id), None)
        return None

    def _stop_timer_if(self, predicate: Callable[[ActiveTimer], bool]) -> None:
        active = self.timer.active
        if active is not None and predicate(active):
            self.timer.stop()

    # Starting

    @noop_on_invalid_state
    def start_workout(self, name: str) -> WorkoutRead:
        self._require_idle()
        self.current_workout = WorkoutRead(
            id=self._new_id(),
            name=name,
            date=self._clock(),
            exercises=[],
            duration=0,
            completed=False,
        )
        logger.info("Workout started: %s (%s)", name, self.current_workout.id)
        return self.current_workout

    @noop_on_invalid_state
    def start_workout_from_routine(self, routine: RoutineRead) -> WorkoutRead:
        """Instantiate the routine's plan: `sets` fresh rows per exercise, in routine order."""
        self._require_idle()
        exercises = [
            WorkoutExerciseRead(
                id=self._new_id(),
                exercise_id=planned.exercise_id,
                notes=planned.notes,
                sets=[self._new_set(reps=planned.reps, rest_time=planned.rest_time) for _ in range(planned.sets)],
            )
            for planned in routine.exercises
        ]
        self.current_workout = WorkoutRead(
            id=self._new_id(),
            name=routine.name,
            date=self._clock(),
            exercises=exercises,
            duration=0,
            completed=False,
        )
        logger.info("Workout started from routine %s (%s)", routine.id, self.current_workout.id)
        return self.current_workout

    @noop_on_invalid_state
    def discard_workout(self) -> None:
        """Abandon the current workout without saving it."""
        workout = self._require_current()
        self.timer.stop()
        self.current_workout = None
        logger.info("Workout discarded: %s", workout.id)

    # Exercises

    @noop_on_invalid_state
    def add_exercise(
        self,
        exercise_id: str,
        initial_sets: int | Iterable[WorkoutSetRead] | None = None,
        notes: str | None = None,
    ) -> WorkoutRead:
        """
        Append an exercise entry with a fresh id.
        initial_sets: None for one default set, a count of default sets, or sets to copy.
        """
        workout = self._require_current()
        if initial_sets is None:
            sets = [self._new_set()]
        elif isinstance(initial_sets, int):
            sets = [self._new_set() for _ in range(max(initial_sets, 0))]
        else:
            sets = [s.model_copy(update={"id": self._new_id()}) for s in initial_sets]
        entry = WorkoutExerciseRead(id=self._new_id(), exercise_id=exercise_id, sets=sets, notes=notes)
        return self._replace_exercises([*workout.exercises, entry])

    @noop_on_invalid_state
    def remove_exercise(self, exercise_id: str) -> WorkoutRead:
        workout = self._require_current()
        self._stop_timer_if(lambda t: t.exercise_id == exercise_id)
        return self._replace_exercises([e for e in workout.exercises if e.id != exercise_id])

    # Sets

    @noop_on_invalid_state
    def add_set(self, exercise_id: str) -> WorkoutRead:
        """Append a set copying the last set's weight/reps/rest time."""

        def append(exercise: WorkoutExerciseRead) -> WorkoutExerciseRead:
            last = exercise.sets[-1] if exercise.sets else None
            new = (
                self._new_set(last.weight, last.reps, last.rest_time)
                if last is not None
                else self._new_set()
            )
            return exercise.model_copy(update={"sets": [*exercise.sets, new]})

        return self._map_exercise(exercise_id, append)

    @noop_on_invalid_state
    def remove_set(self, exercise_id: str, index: int) -> WorkoutRead:
        """Remove by position; an out-of-range index changes nothing."""
        workout = self._require_current()
        target = next((e for e in workout.exercises if e.id == exercise_id), None)
        if target is None or not 0 <= index < len(target.sets):
            return workout
        removed = target.sets[index]
        self._stop_timer_if(lambda t: t.set_id == removed.id)
        return self._map_exercise(
            exercise_id,
            lambda e: e.model_copy(update={"sets": [s for i, s in enumerate(e.sets) if i != index]}),
        )

    @noop_on_invalid_state
    def update_set(
        self,
        exercise_id: str,
        set_id: str,
        updates: WorkoutSetUpdate | dict[str, Any] | None = None,
        **fields: Any,
    ) -> WorkoutRead:
        """Merge weight/reps/completed/rest_time into one set. Unknown fields fail validation."""
        workout = self._require_current()
        if not isinstance(updates, WorkoutSetUpdate):
            updates = WorkoutSetUpdate.model_validate({**(updates or {}), **fields})
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        if self._find_set(exercise_id, set_id) is None:
            return workout

        def merge(exercise: WorkoutExerciseRead) -> WorkoutExerciseRead:
            return exercise.model_copy(
                update={"sets": [s.model_copy(update=changes) if s.id == set_id else s for s in exercise.sets]}
            )

        return self._map_exercise(exercise_id, merge)

    @noop_on_invalid_state
    def update_exercise_rest_time(self, exercise_id: str, rest_time: int) -> WorkoutRead:
        """Apply one rest time to every set of the exercise."""
        rest_time = max(int(rest_time), 0)
        return self._map_exercise(
            exercise_id,
            lambda e: e.model_copy(update={"sets": [s.model_copy(update={"rest_time": rest_time}) for s in e.sets]}),
        )

    @noop_on_invalid_state
    def complete_set(self, exercise_id: str, set_id: str) -> WorkoutRead:
        """Mark the set done and start its rest timer."""
        workout = self._require_current()
        target = self._find_set(exercise_id, set_id)
        if target is None:
            return workout
        updated = self.update_set(exercise_id, set_id, completed=True)
        self.timer.start(exercise_id, set_id, target.rest_time)
        return updated

    @noop_on_invalid_state
    def undo_set(self, exercise_id: str, set_id: str) -> WorkoutRead:
        """Un-complete the set and cancel a rest timer started by it."""
        updated = self.update_set(exercise_id, set_id, completed=False)
        self._stop_timer_if(lambda t: t.set_id == set_id)
        return updated

    # Timer

    @property
    def active_timer(self) -> ActiveTimer | None:
        return self.timer.active

    def start_timer(self, exercise_id: str, set_id: str, duration: int) -> ActiveTimer | None:
        return self.timer.start(exercise_id, set_id, duration)

    def stop_timer(self) -> None:
        self.timer.stop()

    # History

    async def complete_workout(self) -> WorkoutRead | None:
        """Finish the workout, prepend it to history, then try to save it."""
        workout = self.current_workout
        if workout is None:
            logger.warning("complete_workout ignored: no workout in progress")
            return None
        elapsed = (self._clock() - workout.date).total_seconds()
        completed = workout.model_copy(
            update={
                "completed": True,
                "duration": max(math.floor(elapsed / SECONDS_PER_MINUTE), 0),
            }
        )
        self.timer.stop()
        self.current_workout = None
        self.history = [completed, *self.history]
        logger.info("Workout completed: %s (%s min)", completed.id, completed.duration)

        if self.gateway is not None:
            try:
                await self.gateway.create_workout(completed)
            except (NotFound, PersistenceFailure) as e:
                logger.warning("Workout %s kept locally; save failed: %s", completed.id, e)
        return completed

    async def delete_workout(self, workout_id: str) -> bool:
        """Remove a history entry once the service has deleted it. Returns False if nothing changed."""
        if self.gateway is not None:
            try:
                await self.gateway.delete_workout(workout_id)
            except (NotFound, PersistenceFailure) as e:
                logger.warning("Workout %s not deleted: %s", workout_id, e)
                return False
        before = len(self.history)
        self.history = [w for w in self.history if w.id != workout_id]
        if self.gateway is None:
            return len(self.history) < before
        return True

    async def fetch_history(self) -> list[WorkoutRead]:
        """Refetch history from the service; on failure keep the cached list."""
        if self.gateway is None:
            return self.history
        self.is_loading = True
        try:
            workouts = await self.gateway.list_workouts()
        except (NotFound, PersistenceFailure) as e:
            logger.warning("Workout history fetch failed: %s", e)
        else:
            self.history = sorted(workouts, key=lambda w: w.date, reverse=True)
        finally:
            self.is_loading = False
        return self.history

    # Derived views

    def previous_performance(self, exercise_id: str) -> PreviousPerformance | None:
        return statistics.previous_performance(self.history, exercise_id)

    def stats(self, period: StatsPeriod = StatsPeriod.WEEK, now: datetime | None = None) -> ProgressStats:
        return statistics.summarize(self.history, period, now=now or self._clock())
