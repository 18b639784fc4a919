"""
Unit tests for app/services/session_store.py

Tests cover:
- Starting a workout (blank and from a routine) and the already-running guard
- Exercise and set editing, copy-on-write snapshots
- Set completion driving the rest timer
- complete_workout / delete_workout / fetch_history persistence policies
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from app.clients.gateway import WorkoutGateway
from app.core.enums import StatsPeriod
from app.core.errors import NotFound, PersistenceFailure
from app.schemas.base import DeleteResult
from app.services.rest_timer import RestTimer
from app.services.session_store import WorkoutSessionStore
from tests.fakes import make_exercise, make_workout


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store(clock, ids):
    s = WorkoutSessionStore(timer=RestTimer(), clock=clock, id_factory=ids)
    yield s
    s.close()


@pytest.fixture
def gateway_mock():
    return AsyncMock(spec=WorkoutGateway)


@pytest.fixture
def synced_store(clock, ids, gateway_mock):
    s = WorkoutSessionStore(gateway=gateway_mock, timer=RestTimer(), clock=clock, id_factory=ids)
    yield s
    s.close()


def _leg_day(store: WorkoutSessionStore, sets: int = 3):
    store.start_workout("Leg Day")
    workout = store.add_exercise("squats", initial_sets=sets)
    return workout.exercises[0]


def _set_count(store: WorkoutSessionStore, exercise_id: str) -> int:
    entry = next(e for e in store.current_workout.exercises if e.id == exercise_id)
    return len(entry.sets)


# ---------------------------------------------------------------------------
# Starting / discarding
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestStartWorkout:
    def test_start_creates_empty_in_progress_workout(self, store, clock):
        workout = store.start_workout("Morning Session")

        assert store.current_workout is workout
        assert workout.name == "Morning Session"
        assert workout.date == clock.now
        assert workout.exercises == []
        assert workout.duration == 0
        assert workout.completed is False

    def test_start_while_running_is_ignored(self, store):
        first = store.start_workout("First")
        result = store.start_workout("Second")

        assert result is first
        assert store.current_workout.name == "First"

    def test_start_from_routine_instantiates_planned_sets(self, store, push_routine):
        workout = store.start_workout_from_routine(push_routine)

        assert workout.name == "Push Day"
        assert [e.exercise_id for e in workout.exercises] == [
            "bench-press",
            "overhead-press",
            "tricep-pushdowns",
        ]
        assert sum(len(e.sets) for e in workout.exercises) == sum(p.sets for p in push_routine.exercises)

        bench = workout.exercises[0]
        assert len(bench.sets) == 4
        assert all(s.reps == 8 and s.rest_time == 120 for s in bench.sets)
        assert all(s.weight == 0 and not s.completed for s in bench.sets)
        assert workout.exercises[2].notes == "slow"

    def test_routine_sets_get_unique_ids(self, store, push_routine):
        workout = store.start_workout_from_routine(push_routine)
        set_ids = [s.id for e in workout.exercises for s in e.sets]
        entry_ids = [e.id for e in workout.exercises]

        assert len(set(set_ids + entry_ids + [workout.id])) == len(set_ids) + len(entry_ids) + 1

    def test_start_from_routine_while_running_is_ignored(self, store, push_routine):
        first = store.start_workout("Already going")
        assert store.start_workout_from_routine(push_routine) is first

    def test_discard_clears_workout_and_timer(self, store):
        entry = _leg_day(store)
        store.complete_set(entry.id, entry.sets[0].id)
        assert store.active_timer is not None

        store.discard_workout()

        assert store.current_workout is None
        assert store.active_timer is None
        assert store.history == []


# ---------------------------------------------------------------------------
# Exercises and sets
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestExerciseEditing:
    def test_add_exercise_defaults_to_one_set(self, store):
        store.start_workout("W")
        workout = store.add_exercise("bench-press")

        entry = workout.exercises[0]
        assert entry.exercise_id == "bench-press"
        assert len(entry.sets) == 1
        assert entry.sets[0].rest_time == 90
        assert entry.sets[0].completed is False

    def test_add_exercise_with_set_count_and_notes(self, store):
        store.start_workout("W")
        workout = store.add_exercise("deadlift", initial_sets=5, notes="belt")

        assert len(workout.exercises[0].sets) == 5
        assert workout.exercises[0].notes == "belt"

    def test_add_exercise_copies_given_sets_with_fresh_ids(self, store):
        entry = _leg_day(store, sets=2)
        copied = store.add_exercise("squats", initial_sets=entry.sets).exercises[1]

        assert len(copied.sets) == 2
        assert {s.id for s in copied.sets}.isdisjoint({s.id for s in entry.sets})

    def test_same_exercise_twice_gets_distinct_entries(self, store):
        store.start_workout("W")
        store.add_exercise("squats")
        workout = store.add_exercise("squats")

        assert len(workout.exercises) == 2
        assert workout.exercises[0].id != workout.exercises[1].id

    def test_remove_exercise(self, store):
        store.start_workout("W")
        store.add_exercise("squats")
        workout = store.add_exercise("lunges")

        workout = store.remove_exercise(workout.exercises[0].id)

        assert [e.exercise_id for e in workout.exercises] == ["lunges"]

    def test_remove_unknown_exercise_changes_nothing(self, store):
        entry = _leg_day(store)
        workout = store.remove_exercise("missing")
        assert [e.id for e in workout.exercises] == [entry.id]


@pytest.mark.unit
class TestSetEditing:
    def test_add_set_copies_last_set(self, store):
        entry = _leg_day(store, sets=1)
        store.update_set(entry.id, entry.sets[0].id, weight=100, reps=5, completed=True)

        workout = store.add_set(entry.id)

        new = workout.exercises[0].sets[-1]
        assert (new.weight, new.reps, new.rest_time) == (100, 5, 90)
        assert new.completed is False
        assert new.id != entry.sets[0].id

    def test_add_set_to_empty_exercise_uses_defaults(self, store):
        store.start_workout("W")
        entry = store.add_exercise("planks", initial_sets=0).exercises[0]

        workout = store.add_set(entry.id)

        new = workout.exercises[0].sets[0]
        assert (new.weight, new.reps, new.rest_time) == (0, 0, 90)

    def test_set_count_tracks_adds_and_removes(self, store):
        entry = _leg_day(store, sets=3)
        expected = 3
        for op in ["add", "add", "remove", "add", "remove", "remove", "remove", "remove", "add"]:
            if op == "add":
                store.add_set(entry.id)
                expected += 1
            else:
                store.remove_set(entry.id, 0)
                expected = max(expected - 1, 0)
            assert _set_count(store, entry.id) == expected

    def test_remove_set_out_of_range_is_noop(self, store):
        entry = _leg_day(store, sets=2)
        before = store.current_workout

        assert store.remove_set(entry.id, 5) is before
        assert store.remove_set(entry.id, -1) is before
        assert _set_count(store, entry.id) == 2

    def test_remove_set_by_index(self, store):
        entry = _leg_day(store, sets=3)
        workout = store.remove_set(entry.id, 1)

        assert [s.id for s in workout.exercises[0].sets] == [entry.sets[0].id, entry.sets[2].id]

    def test_update_set_merges_only_given_fields(self, store):
        entry = _leg_day(store)
        target = entry.sets[1]

        workout = store.update_set(entry.id, target.id, {"weight": 62.5})

        updated = workout.exercises[0].sets[1]
        assert updated.weight == 62.5
        assert updated.reps == target.reps
        assert updated.rest_time == target.rest_time
        assert workout.exercises[0].sets[0] == entry.sets[0]

    def test_update_set_accepts_camel_case_keys(self, store):
        entry = _leg_day(store)
        workout = store.update_set(entry.id, entry.sets[0].id, {"restTime": 45})
        assert workout.exercises[0].sets[0].rest_time == 45

    def test_update_set_rejects_unknown_fields(self, store):
        entry = _leg_day(store)
        with pytest.raises(ValidationError):
            store.update_set(entry.id, entry.sets[0].id, tempo="3-1-1")

    def test_update_set_rejects_negative_weight(self, store):
        entry = _leg_day(store)
        with pytest.raises(ValidationError):
            store.update_set(entry.id, entry.sets[0].id, weight=-5)

    def test_update_unknown_set_changes_nothing(self, store):
        entry = _leg_day(store)
        before = store.current_workout
        assert store.update_set(entry.id, "nope", weight=10) is before

    def test_mutations_do_not_touch_earlier_snapshots(self, store):
        entry = _leg_day(store)
        snapshot = store.current_workout

        store.update_set(entry.id, entry.sets[0].id, weight=80)
        store.add_set(entry.id)

        assert snapshot.exercises[0].sets[0].weight == 0
        assert len(snapshot.exercises[0].sets) == 3
        assert store.current_workout is not snapshot

    def test_update_exercise_rest_time_applies_to_every_set(self, store):
        entry = _leg_day(store)
        other = store.add_exercise("lunges", initial_sets=2).exercises[1]

        workout = store.update_exercise_rest_time(entry.id, 120)

        assert [s.rest_time for s in workout.exercises[0].sets] == [120, 120, 120]
        assert [s.rest_time for s in workout.exercises[1].sets] == [s.rest_time for s in other.sets]

    def test_negative_rest_time_clamps_to_zero(self, store):
        entry = _leg_day(store)
        workout = store.update_exercise_rest_time(entry.id, -30)
        assert {s.rest_time for s in workout.exercises[0].sets} == {0}


@pytest.mark.unit
class TestNoWorkoutInProgress:
    @pytest.mark.parametrize(
        "call",
        [
            lambda s: s.add_exercise("squats"),
            lambda s: s.remove_exercise("e"),
            lambda s: s.add_set("e"),
            lambda s: s.remove_set("e", 0),
            lambda s: s.update_set("e", "s", weight=1),
            lambda s: s.update_exercise_rest_time("e", 60),
            lambda s: s.complete_set("e", "s"),
            lambda s: s.undo_set("e", "s"),
            lambda s: s.discard_workout(),
        ],
    )
    def test_mutation_without_workout_is_noop(self, store, call):
        assert call(store) is None
        assert store.current_workout is None
        assert store.active_timer is None


# ---------------------------------------------------------------------------
# Completion and the rest timer
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestSetCompletion:
    def test_complete_set_starts_rest_timer(self, store):
        entry = _leg_day(store)
        first = entry.sets[0]

        workout = store.complete_set(entry.id, first.id)

        assert workout.exercises[0].sets[0].completed is True
        timer = store.active_timer
        assert timer.exercise_id == entry.id
        assert timer.set_id == first.id
        assert timer.remaining_time == 90

    def test_undo_set_clears_completion_and_timer(self, store):
        entry = _leg_day(store)
        first = entry.sets[0]
        store.complete_set(entry.id, first.id)

        workout = store.undo_set(entry.id, first.id)

        assert workout.exercises[0].sets[0].completed is False
        assert store.active_timer is None

    def test_undo_other_set_keeps_timer(self, store):
        entry = _leg_day(store)
        store.complete_set(entry.id, entry.sets[0].id)
        store.complete_set(entry.id, entry.sets[1].id)

        store.undo_set(entry.id, entry.sets[0].id)

        assert store.active_timer.set_id == entry.sets[1].id

    def test_timer_uses_set_rest_time(self, store):
        entry = _leg_day(store)
        store.update_set(entry.id, entry.sets[2].id, rest_time=60)

        store.complete_set(entry.id, entry.sets[2].id)

        assert store.active_timer.remaining_time == 60
        assert store.active_timer.duration == 60

    def test_zero_rest_time_expires_immediately(self, store):
        entry = _leg_day(store)
        store.update_exercise_rest_time(entry.id, 0)

        workout = store.complete_set(entry.id, entry.sets[0].id)

        assert workout.exercises[0].sets[0].completed is True
        assert store.active_timer is None

    def test_new_completion_replaces_timer(self, store):
        entry = _leg_day(store)
        store.complete_set(entry.id, entry.sets[0].id)
        store.timer.tick()

        store.complete_set(entry.id, entry.sets[1].id)

        assert store.active_timer.set_id == entry.sets[1].id
        assert store.active_timer.remaining_time == 90

    def test_removing_timed_set_stops_timer(self, store):
        entry = _leg_day(store)
        store.complete_set(entry.id, entry.sets[0].id)

        store.remove_set(entry.id, 0)

        assert store.active_timer is None

    def test_removing_timed_exercise_stops_timer(self, store):
        entry = _leg_day(store)
        store.complete_set(entry.id, entry.sets[0].id)

        store.remove_exercise(entry.id)

        assert store.active_timer is None

    def test_timer_counts_down_to_idle(self, store):
        entry = _leg_day(store)
        store.complete_set(entry.id, entry.sets[0].id)

        for _ in range(89):
            store.timer.tick()
        assert store.active_timer.remaining_time == 1
        store.timer.tick()

        assert store.active_timer is None
        assert store.current_workout.exercises[0].sets[0].completed is True

    def test_complete_unknown_set_does_not_start_timer(self, store):
        entry = _leg_day(store)
        store.complete_set(entry.id, "missing")
        assert store.active_timer is None

    def test_manual_timer_controls(self, store):
        store.start_timer("e", "s", 30)
        assert store.active_timer.remaining_time == 30
        store.stop_timer()
        store.stop_timer()
        assert store.active_timer is None


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


class TestCompleteWorkout:
    async def test_duration_is_floored_minutes(self, store, clock):
        _leg_day(store)
        clock.advance(minutes=45, seconds=59)

        finished = await store.complete_workout()

        assert finished.duration == 45
        assert finished.completed is True
        assert store.current_workout is None
        assert store.history[0] is finished

    async def test_clock_going_backwards_gives_zero_duration(self, store, clock):
        store.start_workout("W")
        clock.advance(minutes=-5)

        finished = await store.complete_workout()

        assert finished.duration == 0

    async def test_completed_workout_is_prepended(self, store, clock):
        store.history = [make_workout("old", clock.now - timedelta(days=2))]
        store.start_workout("New")

        await store.complete_workout()

        assert [w.name for w in store.history] == ["New", "Workout"]

    async def test_completion_stops_timer(self, store):
        entry = _leg_day(store)
        store.complete_set(entry.id, entry.sets[0].id)

        await store.complete_workout()

        assert store.active_timer is None

    async def test_without_workout_returns_none(self, store):
        assert await store.complete_workout() is None
        assert store.history == []

    async def test_saves_through_gateway(self, synced_store, gateway_mock, clock):
        synced_store.start_workout("Leg Day")
        clock.advance(minutes=30)

        finished = await synced_store.complete_workout()

        gateway_mock.create_workout.assert_awaited_once_with(finished)

    async def test_save_failure_keeps_local_history(self, synced_store, gateway_mock):
        gateway_mock.create_workout.side_effect = PersistenceFailure("service down")
        synced_store.start_workout("Leg Day")

        finished = await synced_store.complete_workout()

        assert finished is not None
        assert synced_store.history == [finished]
        assert synced_store.current_workout is None


class TestDeleteWorkout:
    async def test_delete_after_service_confirms(self, synced_store, gateway_mock, clock):
        gateway_mock.delete_workout.return_value = DeleteResult(id="a")
        synced_store.history = [make_workout("a", clock.now), make_workout("b", clock.now)]

        assert await synced_store.delete_workout("a") is True

        assert [w.id for w in synced_store.history] == ["b"]

    async def test_service_failure_keeps_history(self, synced_store, gateway_mock, clock):
        gateway_mock.delete_workout.side_effect = PersistenceFailure("boom", 500)
        synced_store.history = [make_workout("a", clock.now)]

        assert await synced_store.delete_workout("a") is False

        assert [w.id for w in synced_store.history] == ["a"]

    async def test_not_found_keeps_history(self, synced_store, gateway_mock, clock):
        gateway_mock.delete_workout.side_effect = NotFound("gone")
        synced_store.history = [make_workout("a", clock.now)]

        assert await synced_store.delete_workout("a") is False
        assert len(synced_store.history) == 1

    async def test_local_only_delete(self, store, clock):
        store.history = [make_workout("a", clock.now)]

        assert await store.delete_workout("missing") is False
        assert await store.delete_workout("a") is True
        assert store.history == []


class TestFetchHistory:
    async def test_fetch_sorts_newest_first(self, synced_store, gateway_mock, clock):
        gateway_mock.list_workouts.return_value = [
            make_workout("old", clock.now - timedelta(days=3)),
            make_workout("new", clock.now),
            make_workout("mid", clock.now - timedelta(days=1)),
        ]

        history = await synced_store.fetch_history()

        assert [w.id for w in history] == ["new", "mid", "old"]
        assert synced_store.is_loading is False

    async def test_fetch_failure_keeps_cache(self, synced_store, gateway_mock, clock):
        cached = [make_workout("cached", clock.now)]
        synced_store.history = cached
        gateway_mock.list_workouts.side_effect = PersistenceFailure("offline")

        history = await synced_store.fetch_history()

        assert history == cached
        assert synced_store.is_loading is False

    async def test_fetch_without_gateway_returns_cache(self, store):
        assert await store.fetch_history() == []


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestDerivedViews:
    def test_previous_performance_from_history(self, store, clock):
        store.history = [
            make_workout(
                "w2",
                clock.now - timedelta(days=1),
                exercises=[make_exercise("e2", "squats", [(100, 5, True), (105, 3, False)])],
            ),
            make_workout(
                "w1",
                clock.now - timedelta(days=4),
                exercises=[make_exercise("e1", "squats", [(90, 5, True)])],
            ),
        ]

        previous = store.previous_performance("squats")

        assert previous.workout_id == "w2"
        assert len(previous.sets) == 2
        assert previous.last_set.weight == 100

    def test_stats_use_store_clock(self, store, clock):
        day = datetime(2024, 4, 1, 9, 0, tzinfo=timezone.utc)
        store.history = [
            make_workout("a", day, duration=30),
            make_workout("b", day + timedelta(hours=6), duration=20),
        ]

        stats = store.stats(StatsPeriod.WEEK)

        assert stats.total_workouts == 2
        assert stats.total_duration == 50
        assert stats.average_duration == 25
        assert stats.current_streak == 1
        assert stats.max_streak == 1
