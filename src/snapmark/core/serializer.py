"""Render snapshot entries back into canonical Markdown."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path
import re

from .config import DEFAULT_UPDATE_COMMAND
from .entries import IMPLICIT_ENTRY_NAME, SnapshotEntry


_DIGITS = re.compile(r"(\d+)")


def natural_sort_key(value: str) -> tuple[list[int | str], str]:
    """Sort key ordering embedded numbers by value ("2" before "10")."""
    parts: list[int | str] = []
    for index, chunk in enumerate(_DIGITS.split(value)):
        # re.split with a capture group alternates text and digit chunks.
        parts.append(int(chunk) if index % 2 else chunk.lower())
    return parts, value


def build_snapshot(
    *,
    absolute: Path,
    relative: Path,
    entries: Iterable[SnapshotEntry],
    update_command: str = DEFAULT_UPDATE_COMMAND,
) -> str:
    """Return the Markdown document holding every used entry.

    The output only depends on the set of entries, never on their order.
    """
    lines: list[str] = []

    def push_newline() -> None:
        if lines and lines[-1] != "":
            lines.append("")

    command = update_command.format(path=relative.as_posix())
    lines.append(f"# `{absolute.name}`")
    push_newline()
    lines.append(
        f"**DO NOT MODIFY**. This file has been autogenerated. Run `{command}` to update."
    )
    push_newline()

    by_test: defaultdict[str, dict[str, SnapshotEntry]] = defaultdict(dict)
    for entry in entries:
        if entry.used:
            by_test[entry.test_name][entry.entry_name] = entry

    for test_name in sorted(by_test):
        test_entries = by_test[test_name]
        lines.append(f"## `{test_name}`")
        push_newline()

        entry_names = sorted(test_entries, key=natural_sort_key)
        skip_heading = entry_names == [IMPLICIT_ENTRY_NAME]
        for entry_name in entry_names:
            entry = test_entries[entry_name]
            if not skip_heading:
                lines.append(f"### `{entry_name}`")
                push_newline()
            # TODO: escape values containing a line made of triple backticks.
            lines.append("```" + (entry.language or ""))
            lines.append(entry.value)
            lines.append("```")
            push_newline()

    return "\n".join(lines)


__all__ = ["build_snapshot", "natural_sort_key"]
