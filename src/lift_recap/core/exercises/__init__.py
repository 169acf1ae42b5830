"""
Exercise catalog for lift-recap.

Built-in exercises are loaded from YAML; custom exercises are supplied by
the caller and consulted after the built-ins.
"""

from .base import ExerciseDefinition
from .registry import EXERCISE_REGISTRY, exercise_name, lookup_exercise

__all__ = [
    "ExerciseDefinition",
    "EXERCISE_REGISTRY",
    "exercise_name",
    "lookup_exercise",
]
