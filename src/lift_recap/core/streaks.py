"""
Training streaks over the full workout history.

A streak is a run of consecutive calendar days with at least one workout.
Both figures describe the whole history, independent of the recap window.
"""

from datetime import date, datetime, timedelta
from typing import Iterable

from .models import StreakInfo, WorkoutLogEntry


def training_days(workouts: Iterable[WorkoutLogEntry]) -> list[date]:
    """Distinct calendar days with a workout, ascending."""
    return sorted({w.day for w in workouts})


def _day_start(day: date) -> datetime:
    return datetime(day.year, day.month, day.day)


def longest_streak(
    workouts: Iterable[WorkoutLogEntry],
    now: datetime | None = None,
) -> StreakInfo:
    """
    Longest run of consecutive training days.

    The earliest run wins when two runs have the same length.  With no
    workouts the streak is 0 and both endpoints are ``now``.

    Args:
        workouts: Full workout history (any order)
        now: Moment used for the degenerate endpoints (default: wall clock)

    Returns:
        StreakInfo with the run length and its first/last day at midnight
    """
    days = training_days(workouts)
    if not days:
        if now is None:
            now = datetime.now()
        return StreakInfo(days=0, start_date=now, end_date=now)

    best = run = 1
    best_start = best_end = run_start = days[0]

    for prev, curr in zip(days, days[1:]):
        if (curr - prev).days == 1:
            run += 1
            if run > best:
                best = run
                best_start, best_end = run_start, curr
        else:
            run = 1
            run_start = curr

    return StreakInfo(
        days=best,
        start_date=_day_start(best_start),
        end_date=_day_start(best_end),
    )


def current_streak(
    workouts: Iterable[WorkoutLogEntry],
    now: datetime | None = None,
) -> int:
    """
    Consecutive training days ending today or yesterday.

    If the most recent workout is older than yesterday the streak has
    lapsed and is 0.  Otherwise counting starts at today (when trained
    today) or yesterday and walks back until the first missing day.
    """
    days = set(training_days(workouts))
    if not days:
        return 0

    if now is None:
        now = datetime.now()
    today = now.date()
    yesterday = today - timedelta(days=1)

    latest = max(days)
    if latest != today and latest != yesterday:
        return 0

    check = today if latest == today else yesterday
    streak = 0
    while check in days:
        streak += 1
        check -= timedelta(days=1)
    return streak
