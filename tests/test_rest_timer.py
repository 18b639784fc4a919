"""
Unit tests for app/services/rest_timer.py

Manual ticking is used outside an event loop; the async tests run the real
countdown task with a very short tick.
"""

import asyncio

import pytest

from app.core.enums import TimerState
from app.services.rest_timer import ActiveTimer, RestTimer


class Recorder:
    def __init__(self):
        self.expired: list[ActiveTimer] = []

    def __call__(self, timer: ActiveTimer) -> None:
        self.expired.append(timer)


@pytest.fixture
def recorder():
    return Recorder()


# ---------------------------------------------------------------------------
# Manual ticking
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestManualTicks:
    def test_starts_idle(self):
        timer = RestTimer()
        assert timer.active is None
        assert timer.state == TimerState.IDLE
        assert timer.tick() is None

    def test_start_sets_remaining_and_state(self):
        timer = RestTimer()
        active = timer.start("ex-1", "set-1", 90)

        assert active == ActiveTimer("ex-1", "set-1", 90, 90)
        assert timer.state == TimerState.RUNNING
        assert active.progress == 1.0

    def test_tick_decrements_by_one_second(self):
        timer = RestTimer()
        timer.start("ex-1", "set-1", 60)

        for _ in range(15):
            timer.tick()

        assert timer.active.remaining_time == 45
        assert timer.active.progress == 0.75

    def test_expiry_notifies_once_and_goes_idle(self, recorder):
        timer = RestTimer(on_expire=recorder)
        timer.start("ex-1", "set-1", 3)

        timer.tick()
        timer.tick()
        assert recorder.expired == []
        timer.tick()

        assert timer.active is None
        assert timer.state == TimerState.IDLE
        assert [t.set_id for t in recorder.expired] == ["set-1"]

        timer.tick()
        assert len(recorder.expired) == 1

    def test_zero_duration_expires_immediately(self, recorder):
        timer = RestTimer(on_expire=recorder)

        assert timer.start("ex-1", "set-1", 0) is None

        assert timer.active is None
        assert len(recorder.expired) == 1

    def test_negative_duration_treated_as_zero(self, recorder):
        timer = RestTimer(on_expire=recorder)
        assert timer.start("ex-1", "set-1", -10) is None
        assert recorder.expired[0].duration == 0

    def test_restart_replaces_running_timer(self, recorder):
        timer = RestTimer(on_expire=recorder)
        timer.start("ex-1", "set-1", 90)
        timer.tick()

        timer.start("ex-1", "set-2", 30)

        assert timer.active.set_id == "set-2"
        assert timer.active.remaining_time == 30
        assert recorder.expired == []

    def test_stop_is_idempotent(self, recorder):
        timer = RestTimer(on_expire=recorder)
        timer.start("ex-1", "set-1", 90)

        timer.stop()
        timer.stop()

        assert timer.active is None
        assert recorder.expired == []

    def test_failing_callback_does_not_propagate(self):
        def boom(_timer):
            raise RuntimeError("notification channel closed")

        timer = RestTimer(on_expire=boom)
        timer.start("ex-1", "set-1", 1)

        assert timer.tick() is None
        assert timer.active is None


@pytest.mark.unit
class TestActiveTimer:
    def test_progress_of_zero_duration(self):
        assert ActiveTimer("e", "s", 0, 0).progress == 0.0

    def test_progress_halfway(self):
        assert ActiveTimer("e", "s", 45, 90).progress == 0.5


# ---------------------------------------------------------------------------
# Countdown task
# ---------------------------------------------------------------------------


class TestCountdownTask:
    async def test_countdown_expires_on_its_own(self, recorder):
        timer = RestTimer(on_expire=recorder, tick_seconds=0.01)
        timer.start("ex-1", "set-1", 3)

        await asyncio.sleep(0.3)

        assert timer.active is None
        assert len(recorder.expired) == 1

    async def test_countdown_decrements_while_running(self):
        timer = RestTimer(tick_seconds=0.01)
        timer.start("ex-1", "set-1", 1000)

        await asyncio.sleep(0.1)

        assert 0 < timer.active.remaining_time < 1000
        timer.stop()

    async def test_stop_cancels_countdown(self, recorder):
        timer = RestTimer(on_expire=recorder, tick_seconds=0.01)
        timer.start("ex-1", "set-1", 3)

        timer.stop()
        await asyncio.sleep(0.1)

        assert recorder.expired == []
        assert timer.active is None

    async def test_restart_runs_a_single_countdown(self, recorder):
        timer = RestTimer(on_expire=recorder, tick_seconds=0.01)
        timer.start("ex-1", "set-1", 50)
        timer.start("ex-1", "set-2", 2)

        await asyncio.sleep(0.3)

        assert [t.set_id for t in recorder.expired] == ["set-2"]

    async def test_callback_may_start_next_timer(self):
        expired: list[str] = []

        def chain(done: ActiveTimer) -> None:
            expired.append(done.set_id)
            if done.set_id == "set-1":
                timer.start("ex-1", "set-2", 2)

        timer = RestTimer(on_expire=chain, tick_seconds=0.01)
        timer.start("ex-1", "set-1", 2)

        await asyncio.sleep(0.3)

        assert expired == ["set-1", "set-2"]
        assert timer.active is None
