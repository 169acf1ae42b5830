"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of recap data.
"""

from rich.console import Console
from rich.table import Table

from ..core.exercises.base import ExerciseDefinition
from ..core.models import CustomExercise, RecapStats

console = Console()

_BAR_WIDTH = 30


def _fmt_number(value: int | float) -> str:
    return f"{value:,}"


def format_summary(stats: RecapStats) -> str:
    """
    Format the headline figures of a recap as a text block.

    Args:
        stats: Recap to display

    Returns:
        Formatted string with Rich markup
    """
    unit = stats.unit
    avg_label = "per day" if stats.period == "week" else "per week"
    lines = [
        f"[bold cyan]{stats.period_label}[/bold cyan]  [dim]{stats.period_subtitle}[/dim]",
        "",
        f"- Workouts:      {stats.total_workouts}"
        f"  ({stats.average_workouts_per_period} {avg_label})",
        f"- Days active:   {stats.days_active} / {stats.total_days_in_period}",
        f"- Volume:        {_fmt_number(stats.total_volume)} {unit}",
        f"- Sets / reps:   {stats.total_sets} / {stats.total_reps}",
        f"- Longest streak: {stats.longest_streak.days} days",
        f"- Current streak: {stats.current_streak} days",
        f"- PRs:           {stats.prs_achieved}",
    ]

    if stats.top_pr is not None:
        pr = stats.top_pr
        lines.append(
            f"- Top PR:        {pr.exercise} +{pr.improvement} {unit}"
            f" (now {pr.new_max} {unit})"
        )

    if stats.best_day is not None:
        bd = stats.best_day
        lines.append(
            f"- Best day:      {bd.day_name} {bd.date.isoformat()}"
            f"  {_fmt_number(bd.volume)} {unit} in {bd.workout_count} workout(s)"
        )

    return "\n".join(lines)


def format_top_exercises_table(stats: RecapStats) -> Table:
    """Rich table of the most frequent exercises."""
    table = Table(title="Top Exercises")
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Exercise", style="cyan")
    table.add_column("Times", justify="right")
    table.add_column(f"Best ({stats.unit})", justify="right", style="bold")

    for i, ex in enumerate(stats.top_exercises, 1):
        table.add_row(
            str(i),
            ex.name,
            str(ex.count),
            str(ex.best_weight) if ex.best_weight > 0 else "-",
        )
    return table


def format_strength_table(stats: RecapStats) -> Table:
    """Rich table of first-to-last lift changes."""
    table = Table(title="Strength Progress")
    table.add_column("Exercise", style="cyan")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Change", justify="right", style="bold")

    for p in stats.strength_progress:
        colour = "green" if p.improvement > 0 else "red"
        table.add_row(
            p.exercise,
            f"{p.start_max} {p.unit}",
            f"{p.end_max} {p.unit}",
            f"[{colour}]{p.improvement:+d} {p.unit}[/{colour}]",
        )
    return table


def format_muscle_distribution(stats: RecapStats) -> str:
    """Horizontal bar per muscle group."""
    lines = ["[bold]Muscle focus[/bold]"]
    for m in stats.muscle_group_distribution:
        bar = "█" * max(1, round(m.percentage / 100 * _BAR_WIDTH))
        lines.append(f"  {m.group:<10} {bar} {m.percentage}%")
    return "\n".join(lines)


def print_recap(stats: RecapStats) -> None:
    """
    Print a full recap to the console.

    Args:
        stats: Recap to display
    """
    console.print()
    console.print(format_summary(stats))
    console.print()

    if stats.total_workouts == 0 and not stats.strength_progress:
        console.print("[yellow]No workouts logged in this period.[/yellow]")
        return

    if stats.top_exercises:
        console.print(format_top_exercises_table(stats))
    if stats.strength_progress:
        console.print(format_strength_table(stats))
    if stats.muscle_group_distribution:
        console.print()
        console.print(format_muscle_distribution(stats))
    console.print()


def print_years(years: list[int]) -> None:
    """Print the years a recap can be shown for."""
    for year in years:
        console.print(f"  {year}")


def print_exercises(
    builtins: list[ExerciseDefinition],
    custom: list[CustomExercise],
) -> None:
    """Print built-in and custom exercises in one table."""
    table = Table(title="Exercises")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Muscles", style="green")
    table.add_column("Source", style="dim")

    for ex in builtins:
        table.add_row(ex.exercise_id, ex.display_name, ", ".join(ex.primary_muscles), "built-in")
    for c in custom:
        table.add_row(c.id, c.name, ", ".join(c.primary_muscles), "custom")

    console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
