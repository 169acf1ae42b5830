"""
Single-pass aggregation of the workouts inside a recap period.

Produces the raw counters the rest of the engine works from: volume, sets
and reps, per-exercise occurrence counts and best weights, per-muscle hit
counts, and per-day workout/volume buckets.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Sequence

from .exercises.registry import lookup_exercise
from .models import CustomExercise, DateRange, LiftRecord, WorkoutLogEntry
from .units import convert_weight


@dataclass
class ExerciseTally:
    """Occurrences of one exercise and its heaviest completed set (preferred unit)."""

    count: int = 0
    best_weight: float = 0.0


@dataclass
class DayTally:
    """Workouts and volume logged on one calendar day."""

    first_seen: datetime
    workouts: int = 0
    volume: float = 0.0


@dataclass
class PeriodAggregate:
    """
    Raw counters for one period.

    Dict fields keep insertion order (first occurrence first); later steps
    rely on that for stable tie-breaking.
    """

    total_workouts: int = 0
    total_volume: float = 0.0
    total_sets: int = 0
    total_reps: int = 0
    exercises: dict[str, ExerciseTally] = field(default_factory=dict)
    muscle_hits: dict[str, int] = field(default_factory=dict)
    daily: dict[date, DayTally] = field(default_factory=dict)

    @property
    def days_active(self) -> int:
        return len(self.daily)


def filter_workouts(
    workouts: Iterable[WorkoutLogEntry], date_range: DateRange
) -> list[WorkoutLogEntry]:
    """Workouts whose created_at falls inside the inclusive range."""
    return [w for w in workouts if w.created_at in date_range]


def filter_lifts(
    lifts: Iterable[LiftRecord], date_range: DateRange
) -> list[LiftRecord]:
    """Lift records whose recorded_at falls inside the inclusive range."""
    return [lift for lift in lifts if lift.recorded_at in date_range]


def aggregate_workouts(
    workouts: Sequence[WorkoutLogEntry],
    unit: str,
    custom_exercises: Sequence[CustomExercise] = (),
) -> PeriodAggregate:
    """
    Aggregate period-filtered workouts in one pass.

    Only completed sets are counted.  Each set's weight is converted to
    ``unit`` before it contributes to volume or best weight.  Muscle hits
    are credited once per exercise occurrence, not per set.  Best weight is
    a period-wide maximum.

    Args:
        workouts: Workouts already filtered to the period
        unit: Preferred weight unit
        custom_exercises: User catalog consulted after the built-ins

    Returns:
        PeriodAggregate
    """
    agg = PeriodAggregate(total_workouts=len(workouts))

    for workout in workouts:
        day = agg.daily.get(workout.day)
        if day is None:
            day = agg.daily[workout.day] = DayTally(first_seen=workout.created_at)
        day.workouts += 1

        for exercise in workout.exercises:
            tally = agg.exercises.setdefault(exercise.exercise_id, ExerciseTally())
            tally.count += 1

            info = lookup_exercise(exercise.exercise_id, custom_exercises)
            if info is not None:
                for muscle in info.primary_muscles:
                    agg.muscle_hits[muscle] = agg.muscle_hits.get(muscle, 0) + 1

            for s in exercise.sets:
                if not s.completed:
                    continue
                agg.total_sets += 1
                agg.total_reps += s.reps

                weight = convert_weight(s.weight, s.unit, unit)
                set_volume = weight * s.reps
                agg.total_volume += set_volume
                day.volume += set_volume

                if weight > tally.best_weight:
                    tally.best_weight = weight

    return agg
