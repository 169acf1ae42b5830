"""
Integration tests for the recap pipeline.

Builds a realistic week of training with lifts in both pools, then checks
the assembled RecapStats end to end, including unit consistency,
idempotence and the data-source entry points.
"""

from datetime import date, datetime

import pytest

from lift_recap import (
    calculate_recap_stats,
    calculate_yearly_stats,
    convert_weight,
    get_available_years,
)
from lift_recap.core.models import (
    CompletedSet,
    CustomExercise,
    ExerciseLog,
    LiftRecord,
    UserProfile,
    WorkoutLogEntry,
)
from lift_recap.core.recap import build_recap_stats

NOW = datetime(2025, 3, 12, 18, 0)


def _set(weight: float, reps: int, unit: str = "lbs") -> CompletedSet:
    return CompletedSet(weight=weight, reps=reps, unit=unit)


def _workout(when: datetime, *exercises) -> WorkoutLogEntry:
    return WorkoutLogEntry(
        id=f"w-{when:%Y%m%d%H%M}",
        title="Workout",
        created_at=when,
        exercises=tuple(ExerciseLog(exercise_id=i, sets=tuple(s)) for i, s in exercises),
    )


def _lift(exercise_id: str, weight: float, when: datetime, unit: str = "lbs") -> LiftRecord:
    return LiftRecord(exercise_id=exercise_id, weight=weight, reps=1, unit=unit, recorded_at=when)


@pytest.fixture
def history() -> list[WorkoutLogEntry]:
    return [
        _workout(datetime(2025, 3, 3, 9), ("bench-press-barbell", [_set(135, 10)])),
        _workout(datetime(2025, 3, 9, 10), ("squat-barbell", [_set(225, 5)])),
        _workout(
            datetime(2025, 3, 10, 9),
            ("bench-press-barbell", [_set(135, 10), _set(145, 8)]),
        ),
        _workout(datetime(2025, 3, 11, 9), ("deadlift-barbell", [_set(100, 5, unit="kg")])),
        _workout(
            datetime(2025, 3, 12, 7),
            ("bench-press-barbell", [_set(150, 3)]),
            ("pull-up-bodyweight", [_set(0, 10)]),
        ),
    ]


@pytest.fixture
def primary_lifts() -> list[LiftRecord]:
    return [
        _lift("bench-press-barbell", 135, datetime(2025, 3, 2, 12)),
        _lift("bench-press-barbell", 145, datetime(2025, 3, 10, 12)),
        _lift("bench-press-barbell", 155, datetime(2025, 3, 12, 12)),
    ]


@pytest.fixture
def secondary_lifts() -> list[LiftRecord]:
    return [
        _lift("squat-barbell", 225, datetime(2025, 3, 9, 12)),
        _lift("squat-barbell", 235, datetime(2025, 3, 11, 12)),
    ]


def _week(history, primary, secondary, unit="lbs", custom=()):
    return build_recap_stats("week", NOW, history, primary, secondary, list(custom), unit, now=NOW)


class FakeSource:
    """In-memory stand-in exposing the HistoryStore read methods."""

    def __init__(self, workouts, profile, custom=()):
        self.workouts = workouts
        self.profile = profile
        self.custom = list(custom)

    def get_workout_history(self):
        return self.workouts

    def get_user_profile(self):
        return self.profile

    def get_custom_exercise_catalog(self):
        return self.custom


class TestWeekRecap:
    def test_period_header(self, history, primary_lifts, secondary_lifts):
        stats = _week(history, primary_lifts, secondary_lifts)
        assert stats.period == "week"
        assert stats.period_label == "This Week"
        assert stats.period_subtitle == "Mar 9 - Mar 15"
        assert stats.start_date == datetime(2025, 3, 9)
        assert stats.total_days_in_period == 7
        assert stats.unit == "lbs"

    def test_totals_exclude_other_weeks(self, history, primary_lifts, secondary_lifts):
        stats = _week(history, primary_lifts, secondary_lifts)
        assert stats.total_workouts == 4
        assert stats.total_sets == 6
        assert stats.total_reps == 41
        # 225*5 + 135*10 + 145*8 + 220.5*5 + 150*3
        assert stats.total_volume == 5188
        assert stats.days_active == 4
        assert stats.average_workouts_per_period == pytest.approx(0.6)

    def test_streaks_use_full_history(self, history, primary_lifts, secondary_lifts):
        stats = _week(history, primary_lifts, secondary_lifts)
        assert stats.longest_streak.days == 4
        assert stats.longest_streak.start_date == datetime(2025, 3, 9)
        assert stats.longest_streak.end_date == datetime(2025, 3, 12)
        assert stats.current_streak == 4

    def test_top_exercises(self, history, primary_lifts, secondary_lifts):
        stats = _week(history, primary_lifts, secondary_lifts)
        ids = [t.id for t in stats.top_exercises]
        assert ids == ["bench-press-barbell", "squat-barbell", "deadlift-barbell", "pull-up-bodyweight"]
        bench = stats.top_exercises[0]
        assert bench.count == 2
        assert bench.best_weight == 150
        assert bench.name == "Bench Press (Barbell)"

    def test_prs_from_both_pools_within_period(self, history, primary_lifts, secondary_lifts):
        stats = _week(history, primary_lifts, secondary_lifts)
        # The Mar 2 bench record is outside the week, so 145 is the baseline.
        assert stats.prs_achieved == 2
        assert stats.top_pr.exercise_id == "bench-press-barbell"
        assert stats.top_pr.improvement == 10
        assert stats.top_pr.new_max == 155

    def test_strength_progress(self, history, primary_lifts, secondary_lifts):
        stats = _week(history, primary_lifts, secondary_lifts)
        assert [(p.exercise_id, p.start_max, p.end_max) for p in stats.strength_progress] == [
            ("bench-press-barbell", 145, 155),
            ("squat-barbell", 225, 235),
        ]

    def test_muscle_distribution(self, history, primary_lifts, secondary_lifts):
        stats = _week(history, primary_lifts, secondary_lifts)
        shares = {m.group: m.percentage for m in stats.muscle_group_distribution}
        assert shares == {"legs": 22, "glutes": 22, "chest": 22, "back": 22, "arms": 11}
        assert abs(sum(shares.values()) - 100) <= 1

    def test_best_day(self, history, primary_lifts, secondary_lifts):
        stats = _week(history, primary_lifts, secondary_lifts)
        assert stats.best_day.date == date(2025, 3, 10)
        assert stats.best_day.day_name == "Monday"
        assert stats.best_day.volume == 2510

    def test_idempotent_with_fixed_now(self, history, primary_lifts, secondary_lifts):
        assert _week(history, primary_lifts, secondary_lifts) == _week(
            history, primary_lifts, secondary_lifts
        )


class TestUnitConsistency:
    def test_kg_recap_matches_converted_lbs_recap(self, history, primary_lifts, secondary_lifts):
        lbs = _week(history, primary_lifts, secondary_lifts, unit="lbs")
        kg = _week(history, primary_lifts, secondary_lifts, unit="kg")

        assert kg.unit == "kg"
        assert kg.total_workouts == lbs.total_workouts
        assert kg.prs_achieved == lbs.prs_achieved
        assert abs(kg.total_volume - convert_weight(lbs.total_volume, "lbs", "kg")) <= 1
        assert abs(kg.best_day.volume - convert_weight(lbs.best_day.volume, "lbs", "kg")) <= 1
        assert abs(kg.top_pr.improvement - convert_weight(10, "lbs", "kg")) <= 1
        assert kg.top_exercises[0].best_weight == 68


class TestEdgeCases:
    def test_empty_week(self):
        stats = build_recap_stats("week", NOW, [], [], [], [], "lbs", now=NOW)
        assert stats.total_workouts == 0
        assert stats.total_volume == 0
        assert stats.days_active == 0
        assert stats.total_days_in_period == 7
        assert stats.average_workouts_per_period == 0.0
        assert stats.best_day is None
        assert stats.top_pr is None
        assert stats.prs_achieved == 0
        assert stats.top_exercises == ()
        assert stats.strength_progress == ()
        assert stats.muscle_group_distribution == ()
        assert stats.longest_streak.days == 0
        assert stats.longest_streak.start_date == NOW
        assert stats.current_streak == 0

    def test_past_week_keeps_current_streak(self, history):
        stats = build_recap_stats("week", datetime(2025, 3, 4), history, [], [], [], "lbs", now=NOW)
        assert stats.period_label == "Last Week"
        assert stats.total_workouts == 1
        assert stats.current_streak == 4

    def test_unknown_exercise_falls_back_to_id(self):
        workouts = [_workout(datetime(2025, 3, 10, 9), ("sled-push", [_set(90, 20)]))]
        stats = build_recap_stats("week", NOW, workouts, [], [], [], "lbs", now=NOW)
        assert stats.top_exercises[0].name == "sled-push"
        assert stats.muscle_group_distribution == ()
        assert stats.best_day.volume == 1800

    def test_custom_exercise_supplies_name_and_muscles(self):
        custom = [CustomExercise(id="sled-push", name="Sled Push", primary_muscles=("legs", "full-body"))]
        workouts = [_workout(datetime(2025, 3, 10, 9), ("sled-push", [_set(90, 20)]))]
        stats = build_recap_stats("week", NOW, workouts, [], [], custom, "lbs", now=NOW)
        assert stats.top_exercises[0].name == "Sled Push"
        assert [m.percentage for m in stats.muscle_group_distribution] == [50, 50]

    def test_builtin_wins_over_custom_with_same_id(self):
        custom = [CustomExercise(id="squat-barbell", name="My Squat", primary_muscles=("core",))]
        workouts = [_workout(datetime(2025, 3, 10, 9), ("squat-barbell", [_set(225, 5)]))]
        stats = build_recap_stats("week", NOW, workouts, [], [], custom, "lbs", now=NOW)
        assert stats.top_exercises[0].name == "Squat (Barbell)"
        assert {m.group for m in stats.muscle_group_distribution} == {"legs", "glutes"}

    def test_invalid_period_raises(self):
        with pytest.raises(ValueError):
            build_recap_stats("fortnight", NOW, [], [], [], [], "lbs", now=NOW)


class TestDataSourceEntryPoints:
    def test_uses_profile_unit_and_lift_pools(self, history, primary_lifts, secondary_lifts):
        profile = UserProfile("kg", list(primary_lifts), list(secondary_lifts))
        stats = calculate_recap_stats(FakeSource(history, profile), "week", NOW, now=NOW)
        assert stats.unit == "kg"
        assert stats.prs_achieved == 2

    def test_reference_date_defaults_to_now(self, history):
        stats = calculate_recap_stats(FakeSource(history, UserProfile()), "month", now=NOW)
        assert stats.period_label == "This Month"
        assert stats.total_workouts == 5

    def test_source_errors_propagate(self):
        class Broken(FakeSource):
            def get_workout_history(self):
                raise OSError("disk gone")

        with pytest.raises(OSError, match="disk gone"):
            calculate_recap_stats(Broken([], UserProfile()), "week", now=NOW)

    def test_yearly_stats(self, history):
        stats = calculate_yearly_stats(FakeSource(history, UserProfile()), 2024, now=NOW)
        assert stats.period == "year"
        assert stats.period_label == "2024"
        assert stats.start_date == datetime(2024, 1, 1)
        assert stats.total_workouts == 0
        assert stats.total_days_in_period == 366

    def test_available_years(self):
        workouts = [
            _workout(datetime(2023, 5, 1, 9)),
            _workout(datetime(2021, 1, 2, 9)),
            _workout(datetime(2023, 7, 1, 9)),
        ]
        assert get_available_years(workouts, now=NOW) == [2025, 2023, 2021]
        assert get_available_years([], now=NOW) == [2025]
