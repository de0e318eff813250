"""Lazily loaded snapshot documents and the lookup surface used by tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterator, Mapping
import logging
from pathlib import Path
from types import MappingProxyType

from snapmark.adapters.markdown import ParsedSnapshot, parse_snapshot

from .config import SNAPSHOT_EXT, SnapshotOptions
from .diagnostics import SNAPSHOT_DISCOVERY, SNAPSHOT_ENTRY, DiagnosticEmitter, LoggingEmitter
from .entries import SnapshotDocument, SnapshotEntry, reduce_entries
from .locks import PathLocker
from .serializer import build_snapshot


logger = logging.getLogger(__name__)


SnapshotParser = Callable[[Path, str], ParsedSnapshot]


class SnapshotStore:
    """Snapshot documents for one test file, keyed by resolved path.

    Documents are parsed on first access and kept for the rest of the run.
    Concurrent first accesses to the same path share a single parse.
    """

    def __init__(
        self,
        test_path: Path,
        *,
        options: SnapshotOptions | None = None,
        emitter: DiagnosticEmitter | None = None,
        locker: PathLocker | None = None,
        parser: SnapshotParser | None = None,
    ) -> None:
        self.test_path = Path(test_path).resolve()
        self.options = options or SnapshotOptions()
        self.emitter = emitter or LoggingEmitter()
        self.default_snapshot_path = self.test_path.parent / f"{self.test_path.stem}{SNAPSHOT_EXT}"
        self._locker = locker or PathLocker()
        self._parser = parser or parse_snapshot
        self._snapshots: dict[Path, SnapshotDocument] = {}

    @property
    def snapshots(self) -> Mapping[Path, SnapshotDocument]:
        return MappingProxyType(self._snapshots)

    def normalize_snapshot_path(self, filename: str | None) -> Path:
        """Resolve a snapshot name against the directory of the test file."""
        if filename is None:
            return self.default_snapshot_path

        path = (self.test_path.parent / filename).resolve()
        if path.name.endswith(SNAPSHOT_EXT):
            return path
        return path.with_name(path.name + SNAPSHOT_EXT)

    async def init(self) -> None:
        await self.load(self.default_snapshot_path)

    def get_raw_snapshot(self, path: Path) -> str:
        return self._snapshots[path].raw

    async def load(self, path: Path) -> SnapshotDocument | None:
        """Return the document stored at ``path``, parsing it on first use."""
        if not await asyncio.to_thread(path.exists):
            return None

        async def _load() -> SnapshotDocument:
            cached = self._snapshots.get(path)
            if cached is not None:
                return cached

            content = await asyncio.to_thread(path.read_text, encoding="utf-8")
            parsed = self._parser(path, content)
            document = SnapshotDocument(raw=parsed.input, entries=reduce_entries(parsed))
            self._snapshots[path] = document
            logger.debug("Loaded snapshot %s (%d entries)", path, len(document.entries))
            self.emitter.event(SNAPSHOT_DISCOVERY, {"path": path})
            return document

        return await self._locker.wrap_lock(path, _load)

    async def get(
        self,
        test_name: str,
        entry_name: str,
        filename: str | None = None,
    ) -> str | None:
        """Return the recorded value for an entry, marking it as used."""
        path = self.normalize_snapshot_path(filename)
        document = self._snapshots.get(path)
        if document is None:
            document = await self.load(path)
        if document is None:
            return None

        # Pretend nothing was recorded so every test writes its output again.
        if self.options.update_snapshots:
            return None

        entry = document.get_entry(test_name, entry_name)
        if entry is None:
            return None

        if not entry.used:
            entry.used = True
            self.emitter.event(SNAPSHOT_ENTRY, {"path": path, "entry": entry})
        return entry.value

    def set(
        self,
        test_name: str,
        entry_name: str,
        value: str,
        *,
        language: str | None = None,
        filename: str | None = None,
    ) -> None:
        """Record ``value`` for an entry, replacing any loaded value."""
        path = self.normalize_snapshot_path(filename)
        document = self._snapshots.get(path)
        if document is None:
            logger.debug("Creating snapshot %s", path)
            document = SnapshotDocument()
            self._snapshots[path] = document

        entry = SnapshotEntry(
            test_name=test_name,
            entry_name=entry_name,
            language=language,
            value=value,
            used=True,
        )
        self.emitter.event(SNAPSHOT_ENTRY, {"path": path, "entry": entry})
        document.put_entry(entry)

    def render(self, path: Path) -> str:
        """Return the canonical text of the cached document at ``path``."""
        document = self._snapshots[path]
        return build_snapshot(
            absolute=path,
            relative=self.options.relative_to_root(self.test_path),
            entries=document.entries.values(),
            update_command=self.options.update_command,
        )

    def iter_changed(self) -> Iterator[tuple[Path, str]]:
        """Yield documents whose canonical text differs from what was loaded."""
        for path in sorted(self._snapshots):
            text = self.render(path)
            if text != self._snapshots[path].raw:
                yield path, text


__all__ = ["SnapshotParser", "SnapshotStore"]
