"""Analysis commands: recap, years."""

import json
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.models import RECAP_PERIODS
from ...core.periods import can_go_next, get_next_period, get_previous_period
from ...core.recap import calculate_recap_stats, get_available_years
from ...io.serializers import ValidationError, recap_stats_to_dict
from .. import views
from ..app import DataDirOption, JsonOption, app, require_store


def parse_date_option(value: str | None, now: datetime) -> datetime:
    """Parse a --date value (YYYY-MM-DD); None means now."""
    if value is None:
        return now
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        views.print_error(f"Invalid date: {value}. Expected YYYY-MM-DD")
        raise typer.Exit(1)


def step_reference_date(period: str, reference: datetime, offset: int, now: datetime) -> datetime:
    """
    Move reference by offset whole periods.

    Stepping forward stops with an error once the current period is reached.
    """
    for _ in range(abs(offset)):
        if offset < 0:
            reference = get_previous_period(period, reference)
        elif can_go_next(period, reference, now):
            reference = get_next_period(period, reference)
        else:
            views.print_error(f"Cannot go past the current {period}.")
            raise typer.Exit(1)
    return reference


@app.command()
def recap(
    period: Annotated[
        str,
        typer.Option("--period", "-P", help="Recap period: week, month or year"),
    ] = "week",
    date: Annotated[
        Optional[str],
        typer.Option("--date", help="Any date inside the period (YYYY-MM-DD, default today)"),
    ] = None,
    offset: Annotated[
        int,
        typer.Option("--offset", "-o", help="Whole periods to step from --date (-1 = previous)"),
    ] = 0,
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the recap for a week, month or year.
    """
    if period not in RECAP_PERIODS:
        views.print_error(f"Invalid period: {period}. Must be one of {', '.join(RECAP_PERIODS)}")
        raise typer.Exit(1)

    store = require_store(data_dir)
    now = datetime.now()
    reference = step_reference_date(period, parse_date_option(date, now), offset, now)

    try:
        stats = calculate_recap_stats(store, period, reference, now)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(recap_stats_to_dict(stats), indent=2))
        return

    views.print_recap(stats)
    if can_go_next(period, reference, now):
        views.print_info("Use --offset 1 to step to the next period.")


@app.command()
def years(
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    List the years with recap data.
    """
    store = require_store(data_dir)

    try:
        workouts = store.get_workout_history()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    available = get_available_years(workouts)

    if json_out:
        print(json.dumps({"years": available}, indent=2))
        return

    views.print_years(available)
