"""
CLI entry point using Typer.

Provides commands for recaps and the data behind them:
- init: Create profile and history
- log-workout / log-lift: Record training
- add-exercise / exercises: Manage the exercise catalog
- set-unit: Change the preferred unit
- recap: Show a weekly, monthly or yearly recap
- years: List years with data
"""

import typer

from . import views
from .app import app
from .commands import analysis, profile, sessions  # noqa: F401  (registers commands)


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    """
    Training recaps. Run without a command for interactive mode.
    """
    if ctx.invoked_subcommand is not None:
        return

    views.console.print()
    views.console.print("[bold cyan]lift-recap[/bold cyan]: training recaps")
    views.console.print()

    menu = {
        "1": ("week",  "This week's recap"),
        "2": ("month", "This month's recap"),
        "3": ("year",  "This year's recap"),
        "4": ("years", "Years with data"),
        "0": ("quit",  "Quit"),
    }

    for key, (_, desc) in menu.items():
        views.console.print(f"  \\[{key}] {desc}")

    views.console.print()
    choice = views.console.input("Choose [1]: ").strip() or "1"

    if choice == "0":
        raise typer.Exit(0)

    chosen = menu.get(choice)
    if chosen is None:
        views.print_error(f"Unknown choice: {choice}")
        raise typer.Exit(1)

    if chosen[0] == "years":
        ctx.invoke(analysis.years)
    else:
        ctx.invoke(analysis.recap, period=chosen[0])


if __name__ == "__main__":
    app()
