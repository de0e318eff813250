"""Validate the structure of snapshot documents."""

from __future__ import annotations

import typer

from snapmark.core.exceptions import SnapshotParseError

from .._options import DebugOption, SnapshotPathsArgument, VerboseOption
from ..state import emit_error, emit_warning, render_message, set_cli_state
from ..utils import collect_snapshot_files, read_snapshot


def check(
    ctx: typer.Context,
    snapshots: SnapshotPathsArgument,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Parse every snapshot and report structural errors."""
    state = set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)

    files = collect_snapshot_files(snapshots)
    if not files:
        emit_warning("No snapshot documents found.")
        return

    failures = 0
    for path in files:
        try:
            document = read_snapshot(path)
        except SnapshotParseError as exc:
            failures += 1
            emit_error(str(exc), exception=exc)
            continue
        if state.verbosity >= 1:
            render_message("info", f"{path}: {len(document.entries)} entries")

    if failures:
        raise typer.Exit(code=1)
    render_message("info", f"Checked {len(files)} snapshot document(s).")
