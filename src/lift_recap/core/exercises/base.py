"""
Base type for the built-in exercise catalog.

ExerciseDefinition holds the display metadata the recap engine needs:
the name shown in results and the primary muscles credited per occurrence.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExerciseDefinition:
    """One built-in exercise."""

    exercise_id: str                     # e.g. "bench-press-barbell"
    display_name: str                    # e.g. "Bench Press (Barbell)"
    primary_muscles: tuple[str, ...]     # e.g. ("chest",)
    category: str = "compound"           # compound | isolation | cardio | flexibility
    equipment: str = ""                  # barbell, dumbbell, machine, ...
