"""Profile management commands: init, set-unit, add-exercise, exercises."""

from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.engine.config_loader import load_settings
from ...core.exercises.registry import EXERCISE_REGISTRY
from ...core.models import MUSCLE_GROUPS, CustomExercise
from ...io.serializers import ValidationError, validate_unit
from .. import views
from ..app import DataDirOption, app, get_store, require_store


@app.command()
def init(
    unit: Annotated[
        Optional[str],
        typer.Option("--unit", "-u", help="Preferred weight unit: lbs or kg"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Create the profile and empty history.
    """
    if unit is None:
        unit = str(load_settings().get("default_unit", "lbs"))

    store = get_store(data_dir)
    try:
        store.init(unit)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Initialised {store.data_dir} (unit: {unit}).")


@app.command("set-unit")
def set_unit(
    unit: Annotated[str, typer.Argument(help="lbs or kg")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Change the preferred weight unit used in recaps.
    """
    store = require_store(data_dir)
    try:
        store.set_weight_unit(validate_unit(unit))
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Preferred unit set to {unit}.")


@app.command("add-exercise")
def add_exercise(
    exercise_id: Annotated[
        str,
        typer.Option("--id", help="Exercise ID, e.g. cable-fly-cables"),
    ],
    name: Annotated[
        str,
        typer.Option("--name", "-n", help="Display name, e.g. 'Cable Fly (Cables)'"),
    ],
    muscle: Annotated[
        list[str],
        typer.Option("--muscle", "-m", help=f"Primary muscle (repeatable): {', '.join(MUSCLE_GROUPS)}"),
    ],
    category: Annotated[
        str,
        typer.Option("--category", help="compound, isolation, cardio or flexibility"),
    ] = "compound",
    equipment: Annotated[
        str,
        typer.Option("--equipment", help="Equipment used"),
    ] = "",
    data_dir: DataDirOption = None,
) -> None:
    """
    Register a custom exercise.
    """
    unknown = [m for m in muscle if m not in MUSCLE_GROUPS]
    if unknown:
        views.print_error(f"Unknown muscle group(s): {', '.join(unknown)}")
        raise typer.Exit(1)

    if exercise_id in EXERCISE_REGISTRY:
        views.print_warning(
            f"'{exercise_id}' is a built-in exercise; the built-in definition takes precedence."
        )

    store = require_store(data_dir)
    try:
        store.add_custom_exercise(
            CustomExercise(
                id=exercise_id,
                name=name,
                primary_muscles=tuple(muscle),
                category=category,
                equipment=equipment,
                created_at=datetime.now().replace(microsecond=0),
            )
        )
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Added custom exercise {exercise_id}.")


@app.command()
def exercises(data_dir: DataDirOption = None) -> None:
    """
    List built-in and custom exercises.
    """
    custom: list[CustomExercise] = []
    store = get_store(data_dir)
    if store.exists():
        try:
            custom = store.get_custom_exercise_catalog()
        except ValidationError as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    views.print_exercises(list(EXERCISE_REGISTRY.values()), custom)
