"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


SnapshotPathArgument = Annotated[
    Path,
    typer.Argument(
        metavar="SNAPSHOT",
        help="Snapshot document (.test.md) to inspect.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

SnapshotPathsArgument = Annotated[
    list[Path],
    typer.Argument(
        metavar="SNAPSHOT...",
        help="Snapshot documents (.test.md) or directories searched recursively.",
        exists=True,
        file_okay=True,
        dir_okay=True,
        readable=True,
        resolve_path=True,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase diagnostic detail (repeatable).",
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks on unexpected errors.",
    ),
]
