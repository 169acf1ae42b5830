"""
Data models for lift-recap.

Input records (workouts, sets, lift records, custom exercises) and the
immutable result types produced by the recap engine.  Every input record
carries an explicit weight unit; legacy data without one is resolved to the
default unit by the serializers before it reaches these classes.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

WeightUnit = Literal["lbs", "kg"]
RecapPeriod = Literal["week", "month", "year"]
MuscleGroup = Literal[
    "chest", "back", "shoulders", "arms", "legs", "glutes", "core", "full-body"
]

WEIGHT_UNITS: tuple[str, ...] = ("lbs", "kg")
RECAP_PERIODS: tuple[str, ...] = ("week", "month", "year")
MUSCLE_GROUPS: tuple[str, ...] = (
    "chest", "back", "shoulders", "arms", "legs", "glutes", "core", "full-body"
)


def _check_unit(unit: str) -> None:
    if unit not in WEIGHT_UNITS:
        raise ValueError(f"Invalid unit: {unit!r}. Must be 'lbs' or 'kg'")


def check_period(period: str) -> None:
    """Raise ValueError unless period is week, month or year."""
    if period not in RECAP_PERIODS:
        raise ValueError(
            f"Invalid period: {period!r}. Must be one of {RECAP_PERIODS}"
        )


# =============================================================================
# INPUT RECORDS
# =============================================================================


@dataclass(frozen=True)
class CompletedSet:
    """
    One logged set of an exercise.

    Only sets with completed=True contribute to any recap counter.
    """

    weight: float
    reps: int
    unit: WeightUnit
    completed: bool = True

    def __post_init__(self) -> None:
        """Validate set data."""
        if self.weight < 0:
            raise ValueError("weight must be non-negative")
        if self.reps < 0:
            raise ValueError("reps must be non-negative")
        _check_unit(self.unit)


@dataclass(frozen=True)
class ExerciseLog:
    """An exercise performed in a workout with its ordered sets."""

    exercise_id: str
    sets: tuple[CompletedSet, ...] = ()


@dataclass(frozen=True)
class WorkoutLogEntry:
    """
    A finished workout.

    Created when a session ends and never mutated afterwards.
    """

    id: str
    title: str
    created_at: datetime
    exercises: tuple[ExerciseLog, ...] = ()

    @property
    def day(self) -> date:
        """Calendar day the workout belongs to."""
        return self.created_at.date()


@dataclass(frozen=True)
class LiftRecord:
    """
    A best-effort strength entry for one exercise.

    exercise_id names the lift (e.g. "bench-press-barbell"), not the record.
    """

    exercise_id: str
    weight: float
    reps: int
    unit: WeightUnit
    recorded_at: datetime
    parent_id: str = ""

    def __post_init__(self) -> None:
        """Validate lift data."""
        if self.weight < 0:
            raise ValueError("weight must be non-negative")
        if self.reps < 0:
            raise ValueError("reps must be non-negative")
        _check_unit(self.unit)


@dataclass(frozen=True)
class CustomExercise:
    """A user-defined exercise, looked up after the built-in catalog."""

    id: str
    name: str
    primary_muscles: tuple[str, ...] = ()
    category: str = "compound"
    equipment: str = ""
    created_at: datetime | None = None


@dataclass(frozen=True)
class ExerciseInfo:
    """Display name and primary muscles resolved for an exercise id."""

    id: str
    name: str
    primary_muscles: tuple[str, ...] = ()


@dataclass
class UserProfile:
    """
    The profile fields the recap engine reads.

    Two independent lift pools are kept; both are concatenated before analysis.
    """

    weight_unit_preference: WeightUnit = "lbs"
    lifts: list[LiftRecord] = field(default_factory=list)
    secondary_lifts: list[LiftRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate profile data."""
        _check_unit(self.weight_unit_preference)


# =============================================================================
# RESULT TYPES
# =============================================================================


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive range: end is the last millisecond of the final day.

    Membership covers the whole final day, including sub-millisecond
    moments after ``end``.
    """

    start: datetime
    end: datetime

    def __contains__(self, moment: datetime) -> bool:
        return self.start <= moment and moment.date() <= self.end.date()


@dataclass(frozen=True)
class PeriodRange:
    """A resolved recap window with its display label and subtitle."""

    period: RecapPeriod
    range: DateRange
    label: str
    subtitle: str

    @property
    def start(self) -> datetime:
        return self.range.start

    @property
    def end(self) -> datetime:
        return self.range.end


@dataclass(frozen=True)
class StreakInfo:
    """Longest run of consecutive training days and where it begins and ends."""

    days: int
    start_date: datetime
    end_date: datetime


@dataclass(frozen=True)
class TopExercise:
    id: str
    name: str
    count: int
    best_weight: int
    unit: WeightUnit


@dataclass(frozen=True)
class TopPR:
    exercise: str
    exercise_id: str
    improvement: int
    new_max: int
    unit: WeightUnit


@dataclass(frozen=True)
class StrengthProgress:
    exercise: str
    exercise_id: str
    start_max: int
    end_max: int
    improvement: int
    unit: WeightUnit


@dataclass(frozen=True)
class MuscleDistribution:
    group: str
    percentage: int
    count: int


@dataclass(frozen=True)
class BestDay:
    date: date
    day_name: str
    workout_count: int
    volume: int


@dataclass(frozen=True)
class RecapStats:
    """
    The recap for one period.

    Every weight figure is expressed in ``unit``.  The value is a pure
    function of its inputs; computing it twice yields an equal object.
    """

    period: RecapPeriod
    period_label: str
    period_subtitle: str
    start_date: datetime
    end_date: datetime
    total_workouts: int
    total_volume: int
    total_sets: int
    total_reps: int
    longest_streak: StreakInfo
    current_streak: int
    top_exercises: tuple[TopExercise, ...]
    prs_achieved: int
    top_pr: TopPR | None
    strength_progress: tuple[StrengthProgress, ...]
    muscle_group_distribution: tuple[MuscleDistribution, ...]
    best_day: BestDay | None
    average_workouts_per_period: float
    days_active: int
    total_days_in_period: int
    unit: WeightUnit
