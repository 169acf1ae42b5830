"""
Exercise registry.

Built-in exercises are loaded from the bundled YAML files at import time.
If none can be loaded a RuntimeError is raised: the engine cannot name
exercises or credit muscle groups without a catalog.

Use lookup_exercise() to resolve an id against the built-ins and a
caller-supplied list of custom exercises.
"""

from typing import Iterable

from ..models import CustomExercise, ExerciseInfo
from .base import ExerciseDefinition


def _build_registry() -> dict[str, ExerciseDefinition]:
    from .loader import load_exercises_from_yaml

    loaded = load_exercises_from_yaml()
    if not loaded:
        raise RuntimeError(
            "lift-recap: no exercise definitions could be loaded from YAML. "
            "Check that src/lift_recap/exercises/*.yaml files are present and valid."
        )
    return loaded


EXERCISE_REGISTRY: dict[str, ExerciseDefinition] = _build_registry()


def lookup_exercise(
    exercise_id: str,
    custom_exercises: Iterable[CustomExercise] = (),
) -> ExerciseInfo | None:
    """
    Resolve an exercise id to its name and primary muscles.

    Built-in exercises win over custom ones with the same id.

    Args:
        exercise_id: Id as logged in a workout or lift record
        custom_exercises: The user's custom exercise catalog

    Returns:
        ExerciseInfo, or None if the id is in neither catalog
    """
    builtin = EXERCISE_REGISTRY.get(exercise_id)
    if builtin is not None:
        return ExerciseInfo(
            id=builtin.exercise_id,
            name=builtin.display_name,
            primary_muscles=builtin.primary_muscles,
        )

    for custom in custom_exercises:
        if custom.id == exercise_id:
            return ExerciseInfo(
                id=custom.id,
                name=custom.name,
                primary_muscles=tuple(custom.primary_muscles),
            )

    return None


def exercise_name(
    exercise_id: str,
    custom_exercises: Iterable[CustomExercise] = (),
) -> str:
    """Display name for an id, falling back to the raw id when unknown."""
    info = lookup_exercise(exercise_id, custom_exercises)
    return info.name if info is not None else exercise_id
