"""Operations: the closed set of file-system intents a program can express.

Each operation is a frozen dataclass. Interpreters dispatch on the concrete
type; adding a new kind means teaching every interpreter about it.

Result types:
    Exists -> bool
    MakeDirs -> bool (True when the directory was, or would be, created)
    RemoveRecursive -> None
    WriteFile -> None
    ReadFile -> str | None
    Fail -> never returns
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from genfs.paths import FsPath

__all__ = [
    "Deferred",
    "Exists",
    "Fail",
    "MakeDirs",
    "Operation",
    "ReadFile",
    "RemoveRecursive",
    "WriteFile",
]

T = TypeVar("T")

_PENDING = object()


class Deferred(Generic[T]):
    """Lazily evaluated value whose producer runs at most once.

    Write contents are wrapped in a ``Deferred`` so they are only computed
    when an interpreter needs the bytes.
    """

    __slots__ = ("_lock", "_producer", "_value")

    def __init__(self, producer: Callable[[], T]) -> None:
        self._producer: Callable[[], T] | None = producer
        self._value: object = _PENDING
        self._lock = threading.Lock()

    @classmethod
    def now(cls, value: T) -> Deferred[T]:
        """Wrap an already computed value."""
        deferred: Deferred[T] = cls(lambda: value)
        deferred._value = value
        deferred._producer = None
        return deferred

    @property
    def evaluated(self) -> bool:
        return self._value is not _PENDING

    def value(self) -> T:
        """Return the value, running the producer on first use."""
        if self._value is _PENDING:
            with self._lock:
                if self._value is _PENDING:
                    assert self._producer is not None
                    self._value = self._producer()
                    # release whatever the producer closed over
                    self._producer = None
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self._value is _PENDING:
            return "Deferred(<pending>)"
        return f"Deferred({self._value!r})"


@dataclass(frozen=True)
class Exists:
    """Does an entry exist at ``path``."""

    path: FsPath


@dataclass(frozen=True)
class MakeDirs:
    """Create ``path`` and any missing parents."""

    path: FsPath


@dataclass(frozen=True)
class RemoveRecursive:
    """Delete ``path`` and everything under it."""

    path: FsPath
    remove_hidden: bool = True


@dataclass(frozen=True)
class WriteFile:
    """Replace the file at ``path`` with UTF-8 text, optionally gzip-compressed."""

    path: FsPath
    content: Deferred[str]
    compressed: bool = False


@dataclass(frozen=True)
class ReadFile:
    """Read UTF-8 text from ``path``; absent files read as ``None``."""

    path: FsPath


@dataclass(frozen=True)
class Fail:
    """Abort the program with ``error``."""

    error: BaseException


Operation = Union[Exists, MakeDirs, RemoveRecursive, WriteFile, ReadFile, Fail]
