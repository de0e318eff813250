"""Decide whether an inline snapshot matches, needs rewriting, or failed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import inspect
import logging
from typing import Any

from .config import SnapshotOptions
from .diagnostics import INLINE_SNAPSHOT_UPDATE, DiagnosticEmitter, LoggingEmitter
from .exceptions import InlineSnapshotLocationError
from .formatting import MISSING, _Missing, format_value


logger = logging.getLogger(__name__)


InlineLiteral = bool | int | float | str | None


class MatchStatus(str, Enum):
    MATCH = "MATCH"
    UPDATE = "UPDATE"
    NO_MATCH = "NO_MATCH"


@dataclass(frozen=True, slots=True)
class CallSite:
    """Source position of an inline snapshot assertion."""

    line: int | None
    column: int | None

    @classmethod
    def from_frame_info(cls, info: inspect.Traceback) -> CallSite:
        """Build a call site from ``inspect.getframeinfo`` output."""
        positions = getattr(info, "positions", None)
        column = getattr(positions, "col_offset", None)
        return cls(line=info.lineno, column=column)


@dataclass(frozen=True, slots=True)
class InlineSnapshotUpdate:
    """Rewrite request for the literal found at ``line``/``column``."""

    line: int
    column: int
    snapshot: InlineLiteral


@dataclass(frozen=True, slots=True)
class MatchResult:
    status: MatchStatus
    received_format: str | None = None
    expected_format: str | None = None


class InlineSnapshotMatcher:
    """Compare formatted values against inline literals."""

    def __init__(
        self,
        *,
        options: SnapshotOptions | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.options = options or SnapshotOptions()
        self.emitter = emitter or LoggingEmitter()

    def match(
        self,
        call_site: CallSite,
        received: Any,
        expected: InlineLiteral | _Missing = MISSING,
    ) -> MatchResult:
        received_format = format_value(received)
        expected_format = format_value(expected)

        if received_format == expected_format:
            return MatchResult(MatchStatus.MATCH)

        if not (self.options.update_snapshots or expected is MISSING):
            return MatchResult(
                MatchStatus.NO_MATCH,
                received_format=received_format,
                expected_format=expected_format,
            )

        if call_site.line is None or call_site.column is None:
            raise InlineSnapshotLocationError("Call site has no line or column")

        if self.options.freeze_snapshots:
            logger.debug(
                "Frozen snapshots: skipping inline update at %s:%s",
                call_site.line,
                call_site.column,
            )
            return MatchResult(MatchStatus.UPDATE)

        # Subclasses such as enum members are written back as their formatted text.
        snapshot: InlineLiteral = received_format
        if received is None or type(received) in (str, int, float, bool):
            snapshot = received

        update = InlineSnapshotUpdate(
            line=call_site.line, column=call_site.column, snapshot=snapshot
        )
        self.emitter.event(INLINE_SNAPSHOT_UPDATE, {"update": update})
        return MatchResult(MatchStatus.UPDATE)


__all__ = [
    "CallSite",
    "InlineLiteral",
    "InlineSnapshotMatcher",
    "InlineSnapshotUpdate",
    "MatchResult",
    "MatchStatus",
]
