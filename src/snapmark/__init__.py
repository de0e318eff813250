"""Markdown snapshot reconciliation for test runners."""

from __future__ import annotations

from snapmark.adapters.markdown import CodeBlock, Heading, ParsedSnapshot, parse_snapshot
from snapmark.core.config import SNAPSHOT_EXT, SnapshotOptions
from snapmark.core.diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    RecordingEmitter,
)
from snapmark.core.entries import (
    SnapshotDocument,
    SnapshotEntry,
    build_entries_key,
    reduce_entries,
)
from snapmark.core.exceptions import (
    InlineSnapshotLocationError,
    SnapshotError,
    SnapshotErrorKind,
    SnapshotParseError,
)
from snapmark.core.formatting import MISSING, format_value
from snapmark.core.locks import PathLocker
from snapmark.core.matcher import (
    CallSite,
    InlineSnapshotMatcher,
    InlineSnapshotUpdate,
    MatchResult,
    MatchStatus,
)
from snapmark.core.serializer import build_snapshot, natural_sort_key
from snapmark.core.store import SnapshotStore
from snapmark.version import get_version


__version__ = get_version()

__all__ = [
    "MISSING",
    "SNAPSHOT_EXT",
    "CallSite",
    "CodeBlock",
    "DiagnosticEmitter",
    "Heading",
    "InlineSnapshotLocationError",
    "InlineSnapshotMatcher",
    "InlineSnapshotUpdate",
    "LoggingEmitter",
    "MatchResult",
    "MatchStatus",
    "ParsedSnapshot",
    "PathLocker",
    "RecordingEmitter",
    "SnapshotDocument",
    "SnapshotEntry",
    "SnapshotError",
    "SnapshotErrorKind",
    "SnapshotOptions",
    "SnapshotParseError",
    "SnapshotStore",
    "__version__",
    "build_entries_key",
    "build_snapshot",
    "format_value",
    "natural_sort_key",
    "parse_snapshot",
    "reduce_entries",
]
