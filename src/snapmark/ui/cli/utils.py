"""Helpers shared by CLI commands."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from snapmark.adapters.markdown import parse_snapshot
from snapmark.core.config import SNAPSHOT_EXT
from snapmark.core.entries import SnapshotDocument, reduce_entries


def read_snapshot(path: Path) -> SnapshotDocument:
    """Parse the snapshot file at ``path`` without marking entries as used."""
    parsed = parse_snapshot(path, path.read_text(encoding="utf-8"))
    return SnapshotDocument(raw=parsed.input, entries=reduce_entries(parsed))


def collect_snapshot_files(paths: Iterable[Path]) -> list[Path]:
    """Expand directories into the snapshot documents they contain."""
    files: set[Path] = set()
    for path in paths:
        if path.is_dir():
            files.update(candidate for candidate in path.rglob(f"*{SNAPSHOT_EXT}"))
        else:
            files.add(path)
    return sorted(files)


__all__ = ["collect_snapshot_files", "read_snapshot"]
