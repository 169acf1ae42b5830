"""
Pure metric computation functions over aggregated period counters.

All functions are pure and typed for testability.
"""

from datetime import date
from typing import Mapping, Sequence

from .aggregation import DayTally, ExerciseTally
from .config import AVERAGE_DECIMALS, AVERAGE_DIVISORS, TOP_EXERCISES_LIMIT
from .exercises.registry import exercise_name
from .models import (
    BestDay,
    CustomExercise,
    DateRange,
    MuscleDistribution,
    TopExercise,
    check_period,
)
from .units import round_half_up


def top_exercises(
    exercises: Mapping[str, ExerciseTally],
    unit: str,
    custom_exercises: Sequence[CustomExercise] = (),
    limit: int = TOP_EXERCISES_LIMIT,
) -> list[TopExercise]:
    """
    Most frequently performed exercises.

    Sorted by occurrence count, descending; equal counts keep first-seen
    order.  Best weight is rounded to a whole number.

    Args:
        exercises: Per-exercise tallies in first-seen order
        unit: Unit the best weights are expressed in
        custom_exercises: User catalog for display names
        limit: Maximum number of entries

    Returns:
        Up to ``limit`` TopExercise entries
    """
    ranked = sorted(exercises.items(), key=lambda item: item[1].count, reverse=True)
    return [
        TopExercise(
            id=exercise_id,
            name=exercise_name(exercise_id, custom_exercises),
            count=tally.count,
            best_weight=round_half_up(tally.best_weight),
            unit=unit,  # type: ignore[arg-type]
        )
        for exercise_id, tally in ranked[:limit]
    ]


def muscle_distribution(muscle_hits: Mapping[str, int]) -> list[MuscleDistribution]:
    """
    Share of exercise occurrences credited to each muscle group.

    percentage = round(100 * count / total_hits), sorted descending.
    Returns an empty list when there are no hits.
    """
    total_hits = sum(muscle_hits.values())
    if total_hits == 0:
        return []

    shares = [
        MuscleDistribution(
            group=group,
            percentage=round_half_up(count / total_hits * 100),
            count=count,
        )
        for group, count in muscle_hits.items()
    ]
    return sorted(shares, key=lambda m: m.percentage, reverse=True)


def day_name(day: date) -> str:
    """English weekday name, e.g. "Monday"."""
    return ("Monday", "Tuesday", "Wednesday", "Thursday",
            "Friday", "Saturday", "Sunday")[day.weekday()]


def best_day(daily: Mapping[date, DayTally]) -> BestDay | None:
    """
    The day with the strictly greatest volume.

    The first day reaching the maximum wins ties.  Days with zero volume
    never qualify, so a period without weighted sets has no best day.
    """
    best: BestDay | None = None
    max_volume = 0.0

    for day, tally in daily.items():
        if tally.volume > max_volume:
            max_volume = tally.volume
            best = BestDay(
                date=day,
                day_name=day_name(day),
                workout_count=tally.workouts,
                volume=round_half_up(tally.volume),
            )

    return best


def total_days_in_period(date_range: DateRange) -> int:
    """Inclusive number of calendar days covered by the range."""
    return (date_range.end.date() - date_range.start.date()).days + 1


def average_workouts_per_period(period: str, total_workouts: int) -> float:
    """
    Average training frequency for the recap.

    week: workouts per day (/7); month: per week (/4); year: per week (/52).
    Rounded to one decimal place.
    """
    check_period(period)
    divisor = AVERAGE_DIVISORS[period]
    if divisor <= 0:
        return 0.0
    return round(total_workouts / divisor, AVERAGE_DECIMALS)
