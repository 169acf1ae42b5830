"""
Tests for the JSON storage layer, serializers, exercise registry and settings.
"""

import json
from datetime import datetime
from pathlib import Path

import pytest

from lift_recap.core.engine.config_loader import load_settings
from lift_recap.core.exercises.loader import load_exercises_from_yaml
from lift_recap.core.exercises.registry import (
    EXERCISE_REGISTRY,
    exercise_name,
    lookup_exercise,
)
from lift_recap.core.models import (
    CompletedSet,
    CustomExercise,
    ExerciseLog,
    LiftRecord,
    WorkoutLogEntry,
)
from lift_recap.core.recap import calculate_recap_stats
from lift_recap.io.history_store import HistoryStore, get_default_data_dir
from lift_recap.io.serializers import (
    ValidationError,
    dict_to_completed_set,
    dict_to_lift_record,
    dict_to_user_profile,
    json_line_to_workout,
    parse_exercise_entry,
    parse_sets_string,
    parse_timestamp,
    recap_stats_to_dict,
)

NOW = datetime(2025, 3, 12, 18, 0)


@pytest.fixture
def store(tmp_path: Path) -> HistoryStore:
    s = HistoryStore(tmp_path / "data")
    s.init("lbs")
    return s


def _workout(workout_id: str, when: datetime, weight: float = 135) -> WorkoutLogEntry:
    return WorkoutLogEntry(
        id=workout_id,
        title="Push",
        created_at=when,
        exercises=(
            ExerciseLog(
                exercise_id="bench-press-barbell",
                sets=(CompletedSet(weight, 10, "lbs"), CompletedSet(weight, 8, "lbs", completed=False)),
            ),
        ),
    )


class TestHistoryStore:
    def test_init_creates_files(self, tmp_path):
        s = HistoryStore(tmp_path / "fresh")
        assert not s.exists()
        s.init("kg")
        assert s.exists()
        assert s.get_workout_history() == []
        assert s.get_user_profile().weight_unit_preference == "kg"
        assert s.get_custom_exercise_catalog() == []

    def test_init_keeps_existing_profile(self, store):
        store.set_weight_unit("kg")
        store.init("lbs")
        assert store.get_user_profile().weight_unit_preference == "kg"

    def test_init_rejects_unknown_unit(self, tmp_path):
        with pytest.raises(ValidationError):
            HistoryStore(tmp_path / "x").init("stone")

    def test_workouts_round_trip_in_order(self, store):
        later = _workout("b", datetime(2025, 3, 11, 9, 30))
        earlier = _workout("a", datetime(2025, 3, 10, 9, 30))
        store.append_workout(later)
        store.append_workout(earlier)

        loaded = store.get_workout_history()
        assert [w.id for w in loaded] == ["a", "b"]
        assert loaded[0] == earlier
        assert loaded[0].exercises[0].sets[1].completed is False

    def test_missing_history_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            HistoryStore(tmp_path / "nowhere").get_workout_history()

    def test_missing_profile_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            HistoryStore(tmp_path / "nowhere").get_user_profile()

    def test_bad_line_reports_line_number(self, store):
        good = json.dumps({"id": "a", "title": "t", "created_at": "2025-03-10T09:00:00", "exercises": []})
        store.workouts_path.write_text(good + "\n{not json\n", encoding="utf-8")
        with pytest.raises(ValidationError, match="line 2"):
            store.get_workout_history()

    def test_non_numeric_weight_reports_line_number(self, store):
        bad = json.dumps({
            "id": "a",
            "created_at": "2025-03-10T09:00:00",
            "exercises": [{"id": "squat-barbell", "completed_sets": [{"weight": "heavy", "reps": 5}]}],
        })
        store.workouts_path.write_text(bad + "\n", encoding="utf-8")
        with pytest.raises(ValidationError, match="line 1"):
            store.get_workout_history()

    def test_blank_lines_ignored(self, store):
        line = json.dumps({"id": "a", "created_at": "2025-03-10T09:00:00"})
        store.workouts_path.write_text(f"\n{line}\n\n", encoding="utf-8")
        assert len(store.get_workout_history()) == 1

    def test_lift_pools(self, store):
        primary = LiftRecord("squat-barbell", 225, 5, "lbs", datetime(2025, 3, 9, 12))
        secondary = LiftRecord("squat-barbell", 100, 5, "kg", datetime(2025, 3, 10, 12))
        store.add_lift(primary)
        store.add_lift(secondary, secondary=True)

        profile = store.get_user_profile()
        assert profile.lifts == [primary]
        assert profile.secondary_lifts == [secondary]

    def test_custom_exercise_replaced_by_id(self, store):
        store.add_custom_exercise(CustomExercise("sled-push", "Sled Push", ("legs",)))
        store.add_custom_exercise(CustomExercise("sled-push", "Heavy Sled Push", ("legs", "core")))
        catalog = store.get_custom_exercise_catalog()
        assert len(catalog) == 1
        assert catalog[0].name == "Heavy Sled Push"
        assert catalog[0].primary_muscles == ("legs", "core")

    def test_recap_from_store(self, store):
        store.append_workout(_workout("a", datetime(2025, 3, 10, 9)))
        store.append_workout(_workout("b", datetime(2025, 3, 11, 9), weight=145))
        store.add_lift(LiftRecord("bench-press-barbell", 135, 1, "lbs", datetime(2025, 3, 10, 12)))
        store.add_lift(LiftRecord("bench-press-barbell", 150, 1, "lbs", datetime(2025, 3, 11, 12)))

        stats = calculate_recap_stats(store, "week", NOW, now=NOW)
        assert stats.total_workouts == 2
        assert stats.total_sets == 2
        assert stats.total_volume == 2800
        assert stats.prs_achieved == 1
        assert stats.top_pr.improvement == 15
        assert stats.current_streak == 2


class TestSerializers:
    def test_legacy_set_without_unit_defaults_to_lbs(self):
        s = dict_to_completed_set({"weight": 135, "reps": 5, "completed": True})
        assert s.unit == "lbs"

    def test_set_without_completed_flag_is_not_completed(self):
        assert dict_to_completed_set({"weight": 135, "reps": 5}).completed is False

    def test_invalid_unit_rejected(self):
        with pytest.raises(ValidationError):
            dict_to_completed_set({"weight": 135, "reps": 5, "unit": "stone"})

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            dict_to_completed_set({"weight": -5, "reps": 5})

    @pytest.mark.parametrize("field, value", [("weight", "heavy"), ("reps", "lots"), ("reps", [5])])
    def test_non_numeric_field_rejected(self, field, value):
        data = {"weight": 135, "reps": 5, field: value}
        with pytest.raises(ValidationError, match=field):
            dict_to_completed_set(data)

    def test_lift_reps_default_to_one_when_missing_or_null(self):
        base = {"id": "squat-barbell", "weight": 225, "date_recorded": "2025-03-10T12:00:00"}
        assert dict_to_lift_record(base).reps == 1
        assert dict_to_lift_record({**base, "reps": None}).reps == 1
        assert dict_to_lift_record({**base, "reps": 0}).reps == 0

    def test_camel_case_workout_keys(self):
        line = json.dumps({
            "id": "w1",
            "title": "Legs",
            "createdAt": "2025-03-10T09:00:00.000",
            "exercises": [{"id": "squat-barbell", "completedSets": [{"weight": 225, "reps": 5, "completed": True}]}],
        })
        w = json_line_to_workout(line)
        assert w.created_at == datetime(2025, 3, 10, 9)
        assert w.exercises[0].sets[0].unit == "lbs"

    def test_camel_case_profile_keys(self):
        profile = dict_to_user_profile({
            "weightUnitPreference": "kg",
            "lifts": [],
            "secondaryLifts": [{"id": "squat-barbell", "weight": 100, "reps": 3, "dateRecorded": "2025-03-10T12:00:00"}],
        })
        assert profile.weight_unit_preference == "kg"
        assert profile.secondary_lifts[0].unit == "lbs"
        assert profile.secondary_lifts[0].recorded_at == datetime(2025, 3, 10, 12)

    def test_missing_profile_unit_defaults_to_lbs(self):
        assert dict_to_user_profile({}).weight_unit_preference == "lbs"

    def test_utc_timestamp_becomes_naive_local(self):
        moment = parse_timestamp("2025-03-10T12:00:00Z")
        assert moment.tzinfo is None

    @pytest.mark.parametrize("value", ["", "yesterday", None, 42])
    def test_bad_timestamp(self, value):
        with pytest.raises(ValidationError):
            parse_timestamp(value)

    def test_recap_dict_is_json_serialisable(self):
        stats = calculate_recap_stats(_EmptySource(), "week", NOW, now=NOW)
        data = recap_stats_to_dict(stats)
        text = json.dumps(data)
        assert data["start_date"] == "2025-03-09T00:00:00.000"
        assert data["best_day"] is None
        assert '"top_exercises": []' in text


class _EmptySource:
    def get_workout_history(self):
        return []

    def get_user_profile(self):
        return dict_to_user_profile({})

    def get_custom_exercise_catalog(self):
        return []


class TestSetsParsing:
    def test_weighted_and_skipped_sets(self):
        sets = parse_sets_string("135x10, 145x8, 155x5!", "lbs")
        assert [(s.weight, s.reps, s.completed) for s in sets] == [
            (135, 10, True),
            (145, 8, True),
            (155, 5, False),
        ]
        assert all(s.unit == "lbs" for s in sets)

    def test_bare_reps_are_unweighted(self):
        sets = parse_sets_string("12,10", "kg")
        assert [(s.weight, s.reps, s.unit) for s in sets] == [(0.0, 12, "kg"), (0.0, 10, "kg")]

    def test_decimal_weight(self):
        assert parse_sets_string("62.5x5", "kg")[0].weight == 62.5

    @pytest.mark.parametrize("bad", ["", "abc", "135x", "x10", "135x10x2"])
    def test_invalid_sets(self, bad):
        with pytest.raises(ValidationError):
            parse_sets_string(bad, "lbs")

    def test_exercise_entry(self):
        entry = parse_exercise_entry("squat-barbell=225x5,225x5", "lbs")
        assert entry.exercise_id == "squat-barbell"
        assert len(entry.sets) == 2

    @pytest.mark.parametrize("bad", ["squat-barbell", "=225x5", "squat-barbell="])
    def test_invalid_exercise_entry(self, bad):
        with pytest.raises(ValidationError):
            parse_exercise_entry(bad, "lbs")


class TestExerciseRegistry:
    def test_builtin_lookup(self):
        info = lookup_exercise("deadlift-barbell")
        assert info.name == "Deadlift (Barbell)"
        assert info.primary_muscles == ("back", "legs", "glutes")

    def test_custom_lookup_and_unknown(self):
        custom = [CustomExercise("sled-push", "Sled Push", ("legs",))]
        assert lookup_exercise("sled-push", custom).name == "Sled Push"
        assert lookup_exercise("sled-push") is None
        assert exercise_name("sled-push") == "sled-push"

    def test_every_builtin_has_known_muscles(self):
        assert "bench-press-barbell" in EXERCISE_REGISTRY
        for definition in EXERCISE_REGISTRY.values():
            assert definition.primary_muscles

    def test_user_override_and_new_exercise(self, tmp_path, monkeypatch):
        user_dir = tmp_path / ".lift-recap" / "exercises"
        user_dir.mkdir(parents=True)
        (user_dir / "squat-barbell.yaml").write_text('display_name: "Back Squat"\n', encoding="utf-8")
        (user_dir / "sled-push.yaml").write_text(
            'exercise_id: sled-push\ndisplay_name: "Sled Push"\nprimary_muscles: [legs]\n',
            encoding="utf-8",
        )
        monkeypatch.setenv("HOME", str(tmp_path))

        loaded = load_exercises_from_yaml()
        assert loaded["squat-barbell"].display_name == "Back Squat"
        assert loaded["squat-barbell"].primary_muscles == ("legs", "glutes")
        assert loaded["sled-push"].primary_muscles == ("legs",)

    def test_invalid_user_exercise_is_skipped_with_warning(self, tmp_path, monkeypatch):
        user_dir = tmp_path / ".lift-recap" / "exercises"
        user_dir.mkdir(parents=True)
        (user_dir / "bad-move.yaml").write_text(
            'exercise_id: bad-move\ndisplay_name: "Bad"\nprimary_muscles: [wings]\n',
            encoding="utf-8",
        )
        monkeypatch.setenv("HOME", str(tmp_path))

        with pytest.warns(UserWarning, match="bad-move"):
            loaded = load_exercises_from_yaml()
        assert "bad-move" not in loaded


class TestSettings:
    def test_bundled_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        settings = load_settings()
        assert settings["default_unit"] == "lbs"
        assert get_default_data_dir() == Path.home() / ".lift-recap"

    def test_user_override(self, tmp_path, monkeypatch):
        (tmp_path / ".lift-recap").mkdir()
        custom_dir = tmp_path / "elsewhere"
        (tmp_path / ".lift-recap" / "settings.yaml").write_text(
            f"data_dir: {custom_dir}\ndefault_unit: kg\n", encoding="utf-8"
        )
        monkeypatch.setenv("HOME", str(tmp_path))

        assert load_settings()["default_unit"] == "kg"
        assert get_default_data_dir() == custom_dir
