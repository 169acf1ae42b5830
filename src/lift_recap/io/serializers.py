"""
JSON serialization for workout, lift and profile records.

Handles conversion between dataclasses and JSON-compatible dicts.
Legacy records without a ``unit`` field are resolved to the default unit
here, so the core only ever sees explicit units.
"""

import json
import re
from dataclasses import asdict
from datetime import date, datetime
from typing import Any

from ..core.config import DEFAULT_WEIGHT_UNIT
from ..core.models import (
    MUSCLE_GROUPS,
    WEIGHT_UNITS,
    CompletedSet,
    CustomExercise,
    ExerciseLog,
    LiftRecord,
    RecapStats,
    UserProfile,
    WeightUnit,
    WorkoutLogEntry,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_unit(unit: Any) -> WeightUnit:
    """
    Resolve a stored unit, defaulting missing values to the default unit.

    Raises:
        ValidationError: If a unit is present but is neither "lbs" nor "kg"
    """
    if unit is None:
        return DEFAULT_WEIGHT_UNIT  # type: ignore[return-value]
    if unit not in WEIGHT_UNITS:
        raise ValidationError(f"Invalid unit: {unit!r}. Must be 'lbs' or 'kg'")
    return unit


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is non-negative.

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def parse_number(data: dict[str, Any], key: str, default, cast):
    """
    Read a numeric field; a missing or null value yields default.

    Raises:
        ValidationError: If the value cannot be converted with cast
    """
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be a number, got {value!r}")
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{key} must be a number, got {value!r}") from e


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a stored timestamp into a naive local datetime.

    Accepts ISO 8601 strings, including a trailing "Z" or an explicit
    offset; aware values are converted to local time.

    Raises:
        ValidationError: If the value is missing or not ISO 8601
    """
    if isinstance(value, datetime):
        moment = value
    else:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"Invalid timestamp: {value!r}")
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValidationError(f"Invalid timestamp: {value!r}") from e

    if moment.tzinfo is not None:
        moment = moment.astimezone().replace(tzinfo=None)
    return moment


def format_timestamp(moment: datetime) -> str:
    """ISO 8601 with millisecond precision."""
    return moment.isoformat(timespec="milliseconds")


# =============================================================================
# WORKOUTS
# =============================================================================


def completed_set_to_dict(s: CompletedSet) -> dict[str, Any]:
    return {
        "weight": s.weight,
        "reps": s.reps,
        "unit": s.unit,
        "completed": s.completed,
    }


def dict_to_completed_set(data: dict[str, Any]) -> CompletedSet:
    """
    Convert dict to CompletedSet.

    Missing ``completed`` means the set was not completed.

    Raises:
        ValidationError: If data is invalid
    """
    weight = parse_number(data, "weight", 0.0, float)
    reps = parse_number(data, "reps", 0, int)
    validate_non_negative(weight, "weight")
    validate_non_negative(reps, "reps")

    return CompletedSet(
        weight=weight,
        reps=reps,
        unit=validate_unit(data.get("unit")),
        completed=bool(data.get("completed", False)),
    )


def workout_to_dict(workout: WorkoutLogEntry) -> dict[str, Any]:
    return {
        "id": workout.id,
        "title": workout.title,
        "created_at": format_timestamp(workout.created_at),
        "exercises": [
            {
                "id": e.exercise_id,
                "completed_sets": [completed_set_to_dict(s) for s in e.sets],
            }
            for e in workout.exercises
        ],
    }


def dict_to_workout(data: dict[str, Any]) -> WorkoutLogEntry:
    """
    Convert dict to WorkoutLogEntry.

    Accepts ``createdAt`` / ``completedSets`` as written by older clients.

    Raises:
        ValidationError: If data is invalid
    """
    if "id" not in data:
        raise ValidationError("workout is missing 'id'")

    created_at = parse_timestamp(data.get("created_at", data.get("createdAt")))

    exercises = []
    for raw in data.get("exercises", []):
        if "id" not in raw:
            raise ValidationError("exercise is missing 'id'")
        raw_sets = raw.get("completed_sets", raw.get("completedSets", []))
        exercises.append(
            ExerciseLog(
                exercise_id=str(raw["id"]),
                sets=tuple(dict_to_completed_set(s) for s in raw_sets),
            )
        )

    return WorkoutLogEntry(
        id=str(data["id"]),
        title=str(data.get("title", "")),
        created_at=created_at,
        exercises=tuple(exercises),
    )


def workout_to_json_line(workout: WorkoutLogEntry) -> str:
    """Serialize a workout to a single JSON line (no trailing newline)."""
    return json.dumps(workout_to_dict(workout), separators=(",", ":"))


def json_line_to_workout(line: str) -> WorkoutLogEntry:
    """
    Deserialize a JSON line to a WorkoutLogEntry.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError("workout line must be a JSON object")
    return dict_to_workout(data)


# =============================================================================
# LIFTS AND PROFILE
# =============================================================================


def lift_record_to_dict(lift: LiftRecord) -> dict[str, Any]:
    return {
        "id": lift.exercise_id,
        "parent_id": lift.parent_id,
        "weight": lift.weight,
        "reps": lift.reps,
        "unit": lift.unit,
        "date_recorded": format_timestamp(lift.recorded_at),
    }


def dict_to_lift_record(data: dict[str, Any]) -> LiftRecord:
    """
    Convert dict to LiftRecord.

    Raises:
        ValidationError: If data is invalid
    """
    if "id" not in data:
        raise ValidationError("lift is missing 'id'")
    weight = parse_number(data, "weight", 0.0, float)
    reps = parse_number(data, "reps", 1, int)
    validate_non_negative(weight, "weight")
    validate_non_negative(reps, "reps")

    return LiftRecord(
        exercise_id=str(data["id"]),
        weight=weight,
        reps=reps,
        unit=validate_unit(data.get("unit")),
        recorded_at=parse_timestamp(data.get("date_recorded", data.get("dateRecorded"))),
        parent_id=str(data.get("parent_id", data.get("parentId", "")) or ""),
    )


def user_profile_to_dict(profile: UserProfile) -> dict[str, Any]:
    return {
        "weight_unit_preference": profile.weight_unit_preference,
        "lifts": [lift_record_to_dict(x) for x in profile.lifts],
        "secondary_lifts": [lift_record_to_dict(x) for x in profile.secondary_lifts],
    }


def dict_to_user_profile(data: dict[str, Any]) -> UserProfile:
    """
    Convert dict to UserProfile.

    Raises:
        ValidationError: If data is invalid
    """
    unit = data.get("weight_unit_preference", data.get("weightUnitPreference"))
    return UserProfile(
        weight_unit_preference=validate_unit(unit),
        lifts=[dict_to_lift_record(x) for x in data.get("lifts", [])],
        secondary_lifts=[
            dict_to_lift_record(x)
            for x in data.get("secondary_lifts", data.get("secondaryLifts", []))
        ],
    )


def custom_exercise_to_dict(exercise: CustomExercise) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": exercise.id,
        "name": exercise.name,
        "primary_muscles": list(exercise.primary_muscles),
        "category": exercise.category,
        "equipment": exercise.equipment,
    }
    if exercise.created_at is not None:
        d["created_at"] = format_timestamp(exercise.created_at)
    return d


def dict_to_custom_exercise(data: dict[str, Any]) -> CustomExercise:
    """
    Convert dict to CustomExercise.

    Raises:
        ValidationError: If id or name is missing or a muscle group is unknown
    """
    if not data.get("id") or not data.get("name"):
        raise ValidationError("custom exercise needs 'id' and 'name'")

    muscles = tuple(data.get("primary_muscles", data.get("primaryMuscles", [])))
    unknown = [m for m in muscles if m not in MUSCLE_GROUPS]
    if unknown:
        raise ValidationError(f"Unknown muscle groups: {unknown}")

    raw_created = data.get("created_at", data.get("createdAt"))
    return CustomExercise(
        id=str(data["id"]),
        name=str(data["name"]),
        primary_muscles=muscles,
        category=str(data.get("category", "compound")),
        equipment=str(data.get("equipment", "")),
        created_at=parse_timestamp(raw_created) if raw_created else None,
    )


# =============================================================================
# RECAP OUTPUT
# =============================================================================


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def recap_stats_to_dict(stats: RecapStats) -> dict[str, Any]:
    """Convert RecapStats to a JSON-compatible dict with ISO dates."""
    return _jsonable(asdict(stats))


# =============================================================================
# CLI INPUT
# =============================================================================


_SET_RE = re.compile(r"^(?:(\d+(?:\.\d+)?)\s*[xX×]\s*)?(\d+)(!?)$")


def parse_sets_string(sets_str: str, unit: str) -> tuple[CompletedSet, ...]:
    """
    Parse a comma-separated sets string.

    Each set is ``WEIGHTxREPS`` (e.g. "135x10") or bare ``REPS`` for an
    unweighted set.  A trailing "!" marks a set that was not completed.

    Examples:
        "135x10, 145x8"   → two completed sets
        "225x5, 225x3!"   → second set not completed
        "12, 10"          → two bodyweight sets

    Raises:
        ValidationError: If format is invalid
    """
    if not sets_str or not sets_str.strip():
        raise ValidationError("Sets string cannot be empty")

    unit = validate_unit(unit)
    sets: list[CompletedSet] = []
    for part in (p.strip() for p in sets_str.split(",")):
        if not part:
            continue
        m = _SET_RE.match(part.replace(" ", ""))
        if m is None:
            raise ValidationError(
                f"Invalid set format: '{part}'. Use WEIGHTxREPS (e.g. 135x10), "
                "bare REPS, and a trailing '!' for a skipped set."
            )
        weight = float(m.group(1)) if m.group(1) else 0.0
        sets.append(
            CompletedSet(
                weight=weight,
                reps=int(m.group(2)),
                unit=unit,
                completed=not m.group(3),
            )
        )

    if not sets:
        raise ValidationError("No valid sets found in sets string")
    return tuple(sets)


def parse_exercise_entry(entry: str, unit: str) -> ExerciseLog:
    """
    Parse ``EXERCISE_ID=SETS`` into an ExerciseLog.

    Raises:
        ValidationError: If the id or sets are missing or malformed
    """
    exercise_id, sep, sets_str = entry.partition("=")
    exercise_id = exercise_id.strip()
    if not sep or not exercise_id:
        raise ValidationError(
            f"Invalid exercise entry: '{entry}'. Expected ID=SETS, "
            "e.g. bench-press-barbell=135x10,145x8"
        )
    return ExerciseLog(exercise_id=exercise_id, sets=parse_sets_string(sets_str, unit))
