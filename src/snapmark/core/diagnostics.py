"""Diagnostic abstractions used to notify the test runner host."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


SNAPSHOT_DISCOVERY = "snapshot_discovery"
SNAPSHOT_ENTRY = "snapshot_entry"
INLINE_SNAPSHOT_UPDATE = "inline_snapshot_update"


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """One-way channel carrying snapshot events to the test runner host."""

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class LoggingEmitter:
    """Emitter that forwards events to the standard logging module."""

    def __init__(self, *, logger_obj: logging.Logger | None = None) -> None:
        self._logger = logger_obj or logger

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


class RecordingEmitter:
    """Emitter keeping every event so a host can act on them after the run."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))

    def payloads(self, name: str) -> list[dict[str, Any]]:
        """Return the payloads recorded for ``name`` in emission order."""
        return [payload for event_name, payload in self.events if event_name == name]


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for snapshot events."""
    data = dict(payload)

    if name == SNAPSHOT_DISCOVERY:
        return f"Discovered snapshot: {data.get('path') or '<unknown>'}"

    if name == SNAPSHOT_ENTRY:
        entry = data.get("entry")
        test_name = getattr(entry, "test_name", "<unknown>")
        entry_name = getattr(entry, "entry_name", "<unknown>")
        return f"Snapshot entry '{test_name}' / '{entry_name}' in {data.get('path')}"

    if name == INLINE_SNAPSHOT_UPDATE:
        update = data.get("update")
        line = getattr(update, "line", "?")
        column = getattr(update, "column", "?")
        return f"Inline snapshot update requested at {line}:{column}"

    return None


__all__ = [
    "INLINE_SNAPSHOT_UPDATE",
    "SNAPSHOT_DISCOVERY",
    "SNAPSHOT_ENTRY",
    "DiagnosticEmitter",
    "LoggingEmitter",
    "RecordingEmitter",
    "format_event_message",
]
