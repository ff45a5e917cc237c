"""Discrepancies recorded by the check interpreter.

A discrepancy is a difference between the state a program would produce and
what is on disk. They are values, not exceptions: recording one never stops
a program.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, Union

from genfs.paths import FsPath

__all__ = ["DirectoryMissing", "Discrepancy", "DiscrepancyLog", "WriteMismatch"]


@dataclass(frozen=True)
class DirectoryMissing:
    """A directory the program creates does not exist."""

    path: FsPath

    @property
    def message(self) -> str:
        return f"directory {self.path} expected but missing"


@dataclass(frozen=True)
class WriteMismatch:
    """A file the program writes is absent or has different content.

    Attributes:
        path: File that was checked.
        current: Decoded content found on disk, or None if the file is absent.
        expected: Content the program would have written.
        compressed: True if the file is stored gzip-compressed.
    """

    path: FsPath
    current: str | None
    expected: str
    compressed: bool = False

    @property
    def message(self) -> str:
        kind = "compressed file" if self.compressed else "file"
        state = "exist." if self.current is None else "match."
        return f"{kind} {self.path} does not {state}"


Discrepancy = Union[DirectoryMissing, WriteMismatch]


@dataclass
class DiscrepancyLog:
    """Append-only, thread-safe record of discrepancies in recording order."""

    _items: list[Discrepancy] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def append(self, discrepancy: Discrepancy) -> None:
        with self._lock:
            self._items.append(discrepancy)

    def snapshot(self) -> list[Discrepancy]:
        """Copy of everything recorded so far."""
        with self._lock:
            return list(self._items)

    def drain(self) -> list[Discrepancy]:
        """Return everything recorded so far and clear the log."""
        with self._lock:
            items, self._items = self._items, []
        return items

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def sorted(self) -> list[Discrepancy]:
        """Snapshot ordered by path; ties keep recording order."""
        return sorted(self.snapshot(), key=lambda d: d.path)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


DiscrepancyCallback = Callable[[Discrepancy], object]
