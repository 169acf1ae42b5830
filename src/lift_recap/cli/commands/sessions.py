"""Logging commands: log-workout, log-lift."""

from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.models import LiftRecord, WorkoutLogEntry
from ...io.history_store import new_record_id
from ...io.serializers import ValidationError, parse_exercise_entry, parse_timestamp, validate_unit
from .. import views
from ..app import DataDirOption, app, require_store


def _parse_when(value: str | None) -> datetime:
    if value is None:
        return datetime.now().replace(microsecond=0)
    try:
        return parse_timestamp(value)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def _resolve_unit(store, unit: str | None) -> str:
    if unit is None:
        return store.get_user_profile().weight_unit_preference
    return validate_unit(unit)


@app.command("log-workout")
def log_workout(
    exercise: Annotated[
        list[str],
        typer.Option(
            "--exercise", "-x",
            help="ID=SETS, e.g. bench-press-barbell=135x10,145x8 (repeatable; '!' marks a skipped set)",
        ),
    ],
    title: Annotated[
        str,
        typer.Option("--title", "-t", help="Workout title"),
    ] = "Workout",
    when: Annotated[
        Optional[str],
        typer.Option("--date", help="When the workout finished (ISO date or datetime, default now)"),
    ] = None,
    unit: Annotated[
        Optional[str],
        typer.Option("--unit", "-u", help="Unit of the logged weights (default: preferred unit)"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Log a completed workout.
    """
    store = require_store(data_dir)
    created_at = _parse_when(when)

    try:
        set_unit = _resolve_unit(store, unit)
        exercises = tuple(parse_exercise_entry(e, set_unit) for e in exercise)
        workout = WorkoutLogEntry(
            id=new_record_id(),
            title=title,
            created_at=created_at,
            exercises=exercises,
        )
        store.append_workout(workout)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    n_sets = sum(1 for e in exercises for s in e.sets if s.completed)
    views.print_success(
        f"Logged '{title}' on {created_at.date().isoformat()}: "
        f"{len(exercises)} exercise(s), {n_sets} completed set(s)."
    )


@app.command("log-lift")
def log_lift(
    exercise: Annotated[
        str,
        typer.Option("--exercise", "-x", help="Exercise ID, e.g. squat-barbell"),
    ],
    weight: Annotated[
        float,
        typer.Option("--weight", "-w", help="Weight lifted"),
    ],
    reps: Annotated[
        int,
        typer.Option("--reps", "-r", help="Reps performed"),
    ] = 1,
    when: Annotated[
        Optional[str],
        typer.Option("--date", help="When the lift was recorded (default now)"),
    ] = None,
    unit: Annotated[
        Optional[str],
        typer.Option("--unit", "-u", help="Unit of the weight (default: preferred unit)"),
    ] = None,
    secondary: Annotated[
        bool,
        typer.Option("--secondary", help="Store in the secondary lift pool"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Record a lift for PR tracking.
    """
    store = require_store(data_dir)
    recorded_at = _parse_when(when)

    try:
        lift_unit = _resolve_unit(store, unit)
        lift = LiftRecord(
            exercise_id=exercise,
            weight=weight,
            reps=reps,
            unit=lift_unit,  # type: ignore[arg-type]
            recorded_at=recorded_at,
        )
        store.add_lift(lift, secondary=secondary)
    except (ValueError, FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    pool = "secondary" if secondary else "primary"
    views.print_success(f"Recorded {exercise} {weight:g} {lift_unit} x {reps} ({pool}).")
