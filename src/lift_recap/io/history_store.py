"""
File-based storage for workouts, lifts and custom exercises.

Handles reading, writing, and managing the data directory.  The read
methods are the accessors the recap engine consumes.
"""

import json
import uuid
from pathlib import Path

from ..core.config import DEFAULT_WEIGHT_UNIT
from ..core.models import CustomExercise, LiftRecord, UserProfile, WorkoutLogEntry
from .serializers import (
    ValidationError,
    custom_exercise_to_dict,
    dict_to_custom_exercise,
    dict_to_user_profile,
    json_line_to_workout,
    user_profile_to_dict,
    validate_unit,
    workout_to_json_line,
)


class HistoryStore:
    """
    Manages a lift-recap data directory.

    Layout:
    - workouts.jsonl: one workout per line
    - profile.json: preferred unit plus the primary and secondary lift pools
    - custom_exercises.json: list of user-defined exercises
    """

    def __init__(self, data_dir: str | Path):
        """
        Initialize the store.

        Args:
            data_dir: Directory holding the data files
        """
        self.data_dir = Path(data_dir)
        self.workouts_path = self.data_dir / "workouts.jsonl"
        self.profile_path = self.data_dir / "profile.json"
        self.custom_exercises_path = self.data_dir / "custom_exercises.json"

    def exists(self) -> bool:
        """Check if the store has been initialised."""
        return self.workouts_path.exists() and self.profile_path.exists()

    def init(self, unit: str = DEFAULT_WEIGHT_UNIT) -> None:
        """
        Create the data directory and empty files if they don't exist.

        An existing profile is left untouched.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)

        if not self.workouts_path.exists():
            self.workouts_path.touch()

        if not self.profile_path.exists():
            self.save_profile(UserProfile(weight_unit_preference=validate_unit(unit)))

        if not self.custom_exercises_path.exists():
            self._write_json(self.custom_exercises_path, [])

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_workout_history(self) -> list[WorkoutLogEntry]:
        """
        Load all workouts.

        Returns:
            Workouts sorted by created_at

        Raises:
            FileNotFoundError: If the workouts file doesn't exist
            ValidationError: If a line cannot be parsed
        """
        if not self.workouts_path.exists():
            raise FileNotFoundError(
                f"Workout history not found: {self.workouts_path}. Run 'init' first."
            )

        workouts: list[WorkoutLogEntry] = []
        with open(self.workouts_path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                if not line.strip():
                    continue
                try:
                    workouts.append(json_line_to_workout(line))
                except ValidationError as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.workouts_path}: {e}"
                    ) from e

        workouts.sort(key=lambda w: w.created_at)
        return workouts

    def get_user_profile(self) -> UserProfile:
        """
        Load the profile with both lift pools.

        Raises:
            FileNotFoundError: If profile.json doesn't exist
            ValidationError: If the profile is invalid
        """
        data = self._read_json(self.profile_path)
        if not isinstance(data, dict):
            raise ValidationError(f"{self.profile_path} must contain a JSON object")
        return dict_to_user_profile(data)

    def get_custom_exercise_catalog(self) -> list[CustomExercise]:
        """
        Load the user's custom exercises; an absent file means none.

        Raises:
            ValidationError: If the file is invalid
        """
        if not self.custom_exercises_path.exists():
            return []
        data = self._read_json(self.custom_exercises_path)
        if not isinstance(data, list):
            raise ValidationError(f"{self.custom_exercises_path} must contain a JSON list")
        return [dict_to_custom_exercise(d) for d in data]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save_profile(self, profile: UserProfile) -> None:
        """Write profile.json."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._write_json(self.profile_path, user_profile_to_dict(profile))

    def set_weight_unit(self, unit: str) -> None:
        """Change the preferred unit; stored records keep their own units."""
        profile = self.get_user_profile()
        profile.weight_unit_preference = validate_unit(unit)
        self.save_profile(profile)

    def add_lift(self, lift: LiftRecord, secondary: bool = False) -> None:
        """Append a lift record to the primary or secondary pool."""
        profile = self.get_user_profile()
        if secondary:
            profile.secondary_lifts.append(lift)
        else:
            profile.lifts.append(lift)
        self.save_profile(profile)

    def append_workout(self, workout: WorkoutLogEntry) -> None:
        """
        Add a workout, keeping the file in chronological order.

        Raises:
            FileNotFoundError: If the workouts file doesn't exist
        """
        workouts = self.get_workout_history()
        workouts.append(workout)
        workouts.sort(key=lambda w: w.created_at)

        with open(self.workouts_path, "w", encoding="utf-8") as f:
            for w in workouts:
                f.write(workout_to_json_line(w) + "\n")

    def add_custom_exercise(self, exercise: CustomExercise) -> None:
        """
        Add or replace a custom exercise by id.

        Raises:
            ValidationError: If the existing catalog is invalid
        """
        catalog = [c for c in self.get_custom_exercise_catalog() if c.id != exercise.id]
        catalog.append(exercise)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._write_json(
            self.custom_exercises_path,
            [custom_exercise_to_dict(c) for c in catalog],
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _read_json(self, path: Path):
        if not path.exists():
            raise FileNotFoundError(f"{path.name} not found: {path}. Run 'init' first.")
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {path}: {e}") from e

    @staticmethod
    def _write_json(path: Path, data) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)


def new_record_id() -> str:
    """Random identifier for a new workout."""
    return uuid.uuid4().hex


def get_default_data_dir() -> Path:
    """
    Data directory from settings, falling back to ~/.lift-recap.

    Returns:
        Default data directory
    """
    from ..core.engine.config_loader import load_settings

    configured = load_settings().get("data_dir")
    if configured:
        return Path(str(configured)).expanduser()
    return Path.home() / ".lift-recap"


def get_default_store() -> HistoryStore:
    """HistoryStore at the default data directory."""
    return HistoryStore(get_default_data_dir())
