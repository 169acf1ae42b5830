"""
YAML → ExerciseDefinition loader.

Loads exercise definitions from individual YAML files in the bundled
``src/lift_recap/exercises/`` directory.  Each file (e.g. squat-barbell.yaml)
contains a flat definition matching the ExerciseDefinition schema.

User overrides: place matching files in ``~/.lift-recap/exercises/``.
A user file is deep-merged over the bundled definition, so only changed
keys need to be listed.  A user file whose stem does not match any bundled
file is treated as a new exercise and added to the registry.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path

import yaml

from ..models import MUSCLE_GROUPS
from .base import ExerciseDefinition

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset(
    {
        "exercise_id",
        "display_name",
        "primary_muscles",
    }
)


def exercise_from_dict(d: dict) -> ExerciseDefinition:
    """Convert a raw dict (from YAML) to an ExerciseDefinition.

    Raises ValueError if a required field is absent or a muscle group is unknown.
    """
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"ExerciseDefinition missing fields: {sorted(missing)}")

    muscles = tuple(str(m) for m in d["primary_muscles"] or ())
    unknown = [m for m in muscles if m not in MUSCLE_GROUPS]
    if unknown:
        raise ValueError(f"unknown muscle groups: {unknown}")

    return ExerciseDefinition(
        exercise_id=str(d["exercise_id"]),
        display_name=str(d["display_name"]),
        primary_muscles=muscles,
        category=str(d.get("category", "compound")),
        equipment=str(d.get("equipment", "")),
    )


def _load_yaml_file(path: Path) -> dict:
    """Load a YAML file; warn and return {} if it cannot be read or parsed."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"lift-recap: cannot read {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _get_bundled_exercises_dir() -> Path | None:
    """Return path to the bundled exercises/ data directory, or None if not found."""
    # loader.py lives at src/lift_recap/core/exercises/loader.py
    # three levels up → src/lift_recap/
    candidate = Path(__file__).parent.parent.parent / "exercises"
    return candidate if candidate.is_dir() else None


def _get_user_exercises_dir() -> Path | None:
    """Return ~/.lift-recap/exercises/ if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".lift-recap" / "exercises"
    return p if p.is_dir() else None


def _load_one(path: Path, override: Path | None) -> ExerciseDefinition | None:
    raw = _load_yaml_file(path)
    if override is not None and override.exists():
        user_raw = _load_yaml_file(override)
        if user_raw:
            raw = _deep_merge(raw, user_raw)
    if not raw:
        return None
    try:
        return exercise_from_dict(raw)
    except ValueError as exc:
        warnings.warn(
            f"lift-recap: skipping exercise '{path.stem}': {exc}",
            stacklevel=3,
        )
        return None


def load_exercises_from_yaml() -> dict[str, ExerciseDefinition]:
    """Return {exercise_id: ExerciseDefinition} loaded from per-exercise YAML files.

    Loads each ``<exercise_id>.yaml`` from the bundled exercises/ directory,
    deep-merging a same-named file from ``~/.lift-recap/exercises/`` over it.
    User-only files (no bundled counterpart) are loaded as new exercises.
    Invalid files are skipped with a warning.
    """
    bundled_dir = _get_bundled_exercises_dir()
    user_dir = _get_user_exercises_dir()

    result: dict[str, ExerciseDefinition] = {}

    stems: dict[str, Path] = {}
    if bundled_dir is not None:
        for p in sorted(bundled_dir.glob("*.yaml")):
            stems[p.stem] = p

    user_only: list[Path] = []
    if user_dir is not None:
        for p in sorted(user_dir.glob("*.yaml")):
            if p.stem not in stems:
                user_only.append(p)

    for stem, bundled_path in stems.items():
        override = user_dir / f"{stem}.yaml" if user_dir is not None else None
        ex = _load_one(bundled_path, override)
        if ex is not None:
            result[ex.exercise_id] = ex

    for p in user_only:
        ex = _load_one(p, None)
        if ex is not None:
            result[ex.exercise_id] = ex

    return result
