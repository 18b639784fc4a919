"""Rest timer: one countdown at a time, started when a set is completed.

Idle -> Running -> (expired | stopped) -> Idle. Starting a new timer replaces
the running one. Inside an asyncio loop the countdown runs as a single task
ticking every ``tick_seconds``; outside a loop the owner drives it with
``tick()``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from app.core.enums import TimerState

logger = logging.getLogger(__name__)

ExpireCallback = Callable[["ActiveTimer"], Any]


@dataclass(frozen=True)
class ActiveTimer:
    exercise_id: str
    set_id: str
    remaining_time: int  # seconds
    duration: int  # seconds at start, for progress display

    @property
    def progress(self) -> float:
        """Fraction of rest remaining (1.0 at start, 0.0 at expiry)."""
        if self.duration <= 0:
            return 0.0
        return self.remaining_time / self.duration


class RestTimer:
    def __init__(self, on_expire: ExpireCallback | None = None, tick_seconds: float = 1.0):
        self._on_expire = on_expire
        self._tick_seconds = tick_seconds
        self._active: ActiveTimer | None = None
        self._task: asyncio.Task | None = None

    @property
    def active(self) -> ActiveTimer | None:
        return self._active

    @property
    def state(self) -> TimerState:
        return TimerState.RUNNING if self._active is not None else TimerState.IDLE

    def start(self, exercise_id: str, set_id: str, duration: int) -> ActiveTimer | None:
        """Start (or restart) the countdown. Returns None if it expired immediately."""
        self._cancel_task()
        duration = max(int(duration), 0)
        self._active = ActiveTimer(exercise_id, set_id, duration, duration)
        logger.debug("Rest timer started: set=%s duration=%ss", set_id, duration)
        if duration == 0:
            self._expire()
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            self._task = loop.create_task(self._run())
        return self._active

    def tick(self) -> ActiveTimer | None:
        """Advance the countdown by one second."""
        if self._active is None:
            return None
        remaining = self._active.remaining_time - 1
        if remaining <= 0:
            self._expire()
            return None
        self._active = replace(self._active, remaining_time=remaining)
        return self._active

    def stop(self) -> None:
        """Cancel the countdown. Safe to call when idle."""
        self._cancel_task()
        if self._active is not None:
            logger.debug("Rest timer stopped: set=%s", self._active.set_id)
        self._active = None

    async def _run(self) -> None:
        me = asyncio.current_task()
        while self._active is not None and self._task is me:
            await asyncio.sleep(self._tick_seconds)
            if self._task is not me:
                break
            self.tick()

    def _cancel_task(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        # A tick inside _run may end in stop(); never cancel the running task from within.
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if task is not current:
            task.cancel()

    def _expire(self) -> None:
        timer = self._active
        self._active = None
        self._task = None
        if timer is None:
            return
        logger.info("Rest timer finished: exercise=%s set=%s", timer.exercise_id, timer.set_id)
        if self._on_expire is None:
            return
        try:
            self._on_expire(timer)
        except Exception:
            logger.warning("Rest timer notification failed", exc_info=True)
