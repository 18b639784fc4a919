"""Progress statistics over workout history.

Pure functions: period filtering, totals/averages, streaks, "last time" lookup
for an exercise and the per-day series behind the progress charts. Timestamps
are bucketed into calendar days in the configured stats timezone.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

from app.core.config import get_settings
from app.core.constants import (
    ALL_CHART_WEEKS,
    MONTH_CHART_WEEKS,
    RECENT_WORKOUTS_CHART_LIMIT,
    REST_TIME_PRESETS,
)
from app.core.enums import StatsPeriod
from app.schemas.stats import PreviousPerformance, ProgressStats, SeriesPoint, StreakStats
from app.schemas.workout import WorkoutRead, ensure_aware


def stats_timezone() -> tzinfo:
    name = get_settings().stats_timezone
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def local_day(moment: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of a timestamp in the stats timezone (naive values are UTC)."""
    return ensure_aware(moment).astimezone(tz or stats_timezone()).date()


def _today(now: datetime | None, tz: tzinfo | None) -> date:
    return local_day(now or datetime.now(timezone.utc), tz)


def period_bounds(period: StatsPeriod, today: date) -> tuple[date, date] | None:
    """Inclusive first/last day of the period containing today; None for ALL."""
    if period == StatsPeriod.WEEK:
        start = today - timedelta(days=today.weekday())  # Monday
        return start, start + timedelta(days=6)
    if period == StatsPeriod.MONTH:
        start = today.replace(day=1)
        next_month = (start + timedelta(days=32)).replace(day=1)
        return start, next_month - timedelta(days=1)
    return None


def filter_by_period(
    workouts: Iterable[WorkoutRead],
    period: StatsPeriod,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> list[WorkoutRead]:
    tz = tz or stats_timezone()
    bounds = period_bounds(period, _today(now, tz))
    if bounds is None:
        return list(workouts)
    start, end = bounds
    return [w for w in workouts if start <= local_day(w.date, tz) <= end]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_streaks(
    timestamps: Iterable[datetime],
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> StreakStats:
    """
    Consecutive-day streaks over the distinct days of the given workout timestamps.
    Several workouts on one day count as one day. The current streak only
    counts if the latest workout day is today or yesterday.
    """
    tz = tz or stats_timezone()
    days = sorted({local_day(t, tz) for t in timestamps})
    if not days:
        return StreakStats()

    longest = 0
    run = 0
    prev: date | None = None
    for day in days:
        if prev is not None and day - prev == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        prev = day

    last = days[-1]
    current = run if last >= _today(now, tz) - timedelta(days=1) else 0
    return StreakStats(current_streak=current, longest_streak=longest, last_workout_date=last)


def summarize(
    workouts: Sequence[WorkoutRead],
    period: StatsPeriod = StatsPeriod.WEEK,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> ProgressStats:
    """Totals for the selected period; streaks always use the full history."""
    tz = tz or stats_timezone()
    in_period = filter_by_period(workouts, period, now, tz)
    total = len(in_period)
    total_duration = sum(w.duration for w in in_period)
    streaks = compute_streaks((w.date for w in workouts), now, tz)
    return ProgressStats(
        period=period,
        total_workouts=total,
        total_duration=total_duration,
        average_duration=_round_half_up(total_duration / total) if total else 0,
        current_streak=streaks.current_streak,
        max_streak=streaks.longest_streak,
    )


def previous_performance(
    history: Iterable[WorkoutRead],
    exercise_id: str,
    exclude_workout_id: str | None = None,
) -> PreviousPerformance | None:
    """Sets from the most recent workout that included this exercise, plus its last completed set."""
    for workout in sorted(history, key=lambda w: ensure_aware(w.date), reverse=True):
        if exclude_workout_id is not None and workout.id == exclude_workout_id:
            continue
        entry = next((e for e in workout.exercises if e.exercise_id == exercise_id), None)
        if entry is None:
            continue
        done = [s for s in entry.sets if s.completed]
        return PreviousPerformance(
            workout_id=workout.id,
            date=workout.date,
            sets=entry.sets,
            last_set=done[-1] if done else None,
        )
    return None


def completed_set_count(workout: WorkoutRead) -> int:
    return sum(1 for e in workout.exercises for s in e.sets if s.completed)


def format_rest_time(seconds: int) -> str:
    """90 -> "1:30"."""
    minutes, rest = divmod(max(int(seconds), 0), 60)
    return f"{minutes}:{rest:02d}"


def rest_presets() -> list[SeriesPoint]:
    """Quick-pick rest durations for the timer, labelled "m:ss"."""
    return [SeriesPoint(label=format_rest_time(s), value=s) for s in REST_TIME_PRESETS]


def _short_date(day: date) -> str:
    return f"{day:%b} {day.day}"


def duration_series(
    workouts: Iterable[WorkoutRead],
    period: StatsPeriod,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> list[SeriesPoint]:
    """Minutes trained per day: this week so far, the last 4 weeks, or the last 12 weeks."""
    tz = tz or stats_timezone()
    today = _today(now, tz)
    if period == StatsPeriod.WEEK:
        start = today - timedelta(days=today.weekday())
    elif period == StatsPeriod.MONTH:
        start = today - timedelta(weeks=MONTH_CHART_WEEKS)
    else:
        start = today - timedelta(weeks=ALL_CHART_WEEKS)

    per_day: dict[date, int] = defaultdict(int)
    for w in workouts:
        per_day[local_day(w.date, tz)] += w.duration

    points = []
    day = start
    while day <= today:
        label = f"{day:%a}" if period == StatsPeriod.WEEK else _short_date(day)
        points.append(SeriesPoint(label=label, value=per_day.get(day, 0)))
        day += timedelta(days=1)
    return points


def exercise_counts(
    workouts: Iterable[WorkoutRead],
    limit: int = RECENT_WORKOUTS_CHART_LIMIT,
    tz: tzinfo | None = None,
) -> list[SeriesPoint]:
    """Exercises per workout for the most recent workouts, oldest first."""
    tz = tz or stats_timezone()
    recent = sorted(workouts, key=lambda w: ensure_aware(w.date), reverse=True)[:limit]
    return [
        SeriesPoint(label=_short_date(local_day(w.date, tz)), value=len(w.exercises))
        for w in reversed(recent)
    ]
