"""Per-path exclusive locks for cooperative asyncio tasks."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar


T = TypeVar("T")


class PathLocker:
    """Serialise coroutines working on the same path.

    Locks are created on first use and forgotten once no task holds or waits
    on them, so long runs touching many files do not accumulate locks.
    """

    def __init__(self) -> None:
        self._locks: dict[Path, asyncio.Lock] = {}
        self._waiters: dict[Path, int] = {}

    async def wrap_lock(self, path: Path, callback: Callable[[], Awaitable[T]]) -> T:
        """Await ``callback()`` while holding the lock for ``path``."""
        lock = self._locks.setdefault(path, asyncio.Lock())
        self._waiters[path] = self._waiters.get(path, 0) + 1
        try:
            async with lock:
                return await callback()
        finally:
            remaining = self._waiters[path] - 1
            if remaining:
                self._waiters[path] = remaining
            else:
                del self._waiters[path]
                del self._locks[path]


__all__ = ["PathLocker"]
