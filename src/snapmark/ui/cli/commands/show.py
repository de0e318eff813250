"""List the entries recorded in a snapshot document."""

from __future__ import annotations

import typer

from snapmark.core.exceptions import SnapshotParseError
from snapmark.core.serializer import natural_sort_key

from .._options import DebugOption, SnapshotPathArgument, VerboseOption
from ..state import emit_error, set_cli_state
from ..utils import read_snapshot


def show(
    ctx: typer.Context,
    snapshot: SnapshotPathArgument,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Print a table of the tests and entries stored in SNAPSHOT."""
    from rich import box
    from rich.table import Table

    state = set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)

    try:
        document = read_snapshot(snapshot)
    except SnapshotParseError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    table = Table(
        title=snapshot.name,
        box=box.SQUARE,
        show_edge=True,
        header_style="bold cyan",
    )
    table.add_column("Test", style="magenta")
    table.add_column("Entry", style="green")
    table.add_column("Language")
    table.add_column("Lines", justify="right")

    entries = sorted(
        document.entries.values(),
        key=lambda entry: (entry.test_name, natural_sort_key(entry.entry_name)),
    )
    if not entries:
        table.add_row("-", "-", "-", "No entries recorded")
    for entry in entries:
        table.add_row(
            entry.test_name,
            entry.entry_name,
            entry.language or "-",
            str(len(entry.value.splitlines())),
        )

    state.console.print(table)
