"""Shared Typer app object, shared option types, and store utility."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..io.history_store import HistoryStore, get_default_data_dir

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-d", help="Directory holding workouts.jsonl and profile.json"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="lift-recap",
    help="Weekly, monthly and yearly recaps of your workouts and lifts.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_store(data_dir: Path | None) -> HistoryStore:
    """Get store from path or the default data directory."""
    if data_dir is None:
        data_dir = get_default_data_dir()
    return HistoryStore(data_dir)


def require_store(data_dir: Path | None) -> HistoryStore:
    """Get an initialised store or exit with an error."""
    from . import views

    store = get_store(data_dir)
    if not store.exists():
        views.print_error(f"No data found in {store.data_dir}")
        views.print_info("Run 'init' first to create the profile and history.")
        raise typer.Exit(1)
    return store
