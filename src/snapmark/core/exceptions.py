"""Custom exception hierarchy for snapshot loading and matching."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class SnapshotErrorKind(str, Enum):
    """Structural problems detected while reading a snapshot document."""

    EXPECTED_CODE_BLOCK_AFTER_HEADING = "EXPECTED_CODE_BLOCK_AFTER_HEADING"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    SnapshotErrorKind.EXPECTED_CODE_BLOCK_AFTER_HEADING: (
        "Expected a code block after this heading"
    ),
}


class SnapshotError(RuntimeError):
    """Base exception for snapshot failures."""


class SnapshotParseError(SnapshotError):
    """Raised when a snapshot document does not have the expected structure."""

    def __init__(
        self,
        kind: SnapshotErrorKind,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.kind = kind
        self.path = path
        self.line = line
        self.column = column
        super().__init__(f"{self.location}: {kind.description}")

    @property
    def location(self) -> str:
        parts = [str(self.path) if self.path is not None else "<snapshot>"]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)


class InlineSnapshotLocationError(SnapshotError):
    """Raised when an inline snapshot update has no complete call site."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "InlineSnapshotLocationError",
    "SnapshotError",
    "SnapshotErrorKind",
    "SnapshotParseError",
    "exception_hint",
    "exception_messages",
]
