"""
Recap assembly.

build_recap_stats() is the pure pipeline: resolve the period, filter the
workout and lift history to it, aggregate, and combine streaks, records,
distribution and best day into one RecapStats.

calculate_recap_stats() is the data-source entry point.  ``source`` is any
object with the HistoryStore read methods:

    get_workout_history() -> list[WorkoutLogEntry]
    get_user_profile() -> UserProfile
    get_custom_exercise_catalog() -> list[CustomExercise]

Exceptions raised by the source propagate unchanged.
"""

from datetime import datetime
from typing import Iterable, Sequence

from .aggregation import aggregate_workouts, filter_lifts, filter_workouts
from .metrics import (
    average_workouts_per_period,
    best_day,
    muscle_distribution,
    top_exercises,
    total_days_in_period,
)
from .models import CustomExercise, LiftRecord, RecapStats, WorkoutLogEntry
from .periods import resolve_period
from .records import detect_prs, strength_progress
from .streaks import current_streak, longest_streak
from .units import round_half_up


def build_recap_stats(
    period: str,
    reference_date: datetime,
    workouts: Sequence[WorkoutLogEntry],
    primary_lifts: Sequence[LiftRecord],
    secondary_lifts: Sequence[LiftRecord],
    custom_exercises: Sequence[CustomExercise],
    unit: str,
    now: datetime | None = None,
) -> RecapStats:
    """
    Compute the recap for the period containing reference_date.

    Streaks are computed from the full workout history; every other figure
    is limited to the period.

    Args:
        period: "week", "month" or "year"
        reference_date: Any moment inside the wanted period
        workouts: Full workout history
        primary_lifts: Primary lift pool
        secondary_lifts: Secondary lift pool
        custom_exercises: User exercise catalog
        unit: Preferred weight unit for every figure
        now: Moment for relative labels and the current streak (default: wall clock)

    Returns:
        RecapStats
    """
    if now is None:
        now = datetime.now()

    resolved = resolve_period(period, reference_date, now)

    period_workouts = filter_workouts(workouts, resolved.range)
    period_lifts = filter_lifts([*primary_lifts, *secondary_lifts], resolved.range)

    agg = aggregate_workouts(period_workouts, unit, custom_exercises)
    prs_achieved, top_pr = detect_prs(period_lifts, unit, custom_exercises)

    return RecapStats(
        period=resolved.period,
        period_label=resolved.label,
        period_subtitle=resolved.subtitle,
        start_date=resolved.start,
        end_date=resolved.end,
        total_workouts=agg.total_workouts,
        total_volume=round_half_up(agg.total_volume),
        total_sets=agg.total_sets,
        total_reps=agg.total_reps,
        longest_streak=longest_streak(workouts, now),
        current_streak=current_streak(workouts, now),
        top_exercises=tuple(top_exercises(agg.exercises, unit, custom_exercises)),
        prs_achieved=prs_achieved,
        top_pr=top_pr,
        strength_progress=tuple(strength_progress(period_lifts, unit, custom_exercises)),
        muscle_group_distribution=tuple(muscle_distribution(agg.muscle_hits)),
        best_day=best_day(agg.daily),
        average_workouts_per_period=average_workouts_per_period(period, agg.total_workouts),
        days_active=agg.days_active,
        total_days_in_period=total_days_in_period(resolved.range),
        unit=unit,  # type: ignore[arg-type]
    )


def calculate_recap_stats(
    source,
    period: str,
    reference_date: datetime | None = None,
    now: datetime | None = None,
) -> RecapStats:
    """
    Read history, profile and custom catalog from source and build the recap.

    Args:
        source: Object providing the HistoryStore read methods
        period: "week", "month" or "year"
        reference_date: Moment inside the wanted period (default: now)
        now: Moment for relative labels and the current streak (default: wall clock)

    Returns:
        RecapStats in the profile's preferred unit
    """
    if now is None:
        now = datetime.now()
    if reference_date is None:
        reference_date = now

    profile = source.get_user_profile()
    workouts = source.get_workout_history()
    custom_exercises = source.get_custom_exercise_catalog()

    return build_recap_stats(
        period,
        reference_date,
        workouts,
        profile.lifts,
        profile.secondary_lifts,
        custom_exercises,
        profile.weight_unit_preference,
        now,
    )


def calculate_yearly_stats(source, year: int, now: datetime | None = None) -> RecapStats:
    """Year recap for a calendar year."""
    return calculate_recap_stats(source, "year", datetime(year, 1, 1), now)


def get_available_years(
    workouts: Iterable[WorkoutLogEntry],
    now: datetime | None = None,
) -> list[int]:
    """Years with at least one workout plus the current year, newest first."""
    if now is None:
        now = datetime.now()
    years = {w.created_at.year for w in workouts}
    years.add(now.year)
    return sorted(years, reverse=True)
