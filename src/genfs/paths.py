"""Separator-independent relative paths.

An ``FsPath`` is an ordered tuple of non-empty segments. Interpreters resolve
it against their own root directory, so the same path value means the same
file whichever backend runs the program.

Examples:
    >>> p = path_from_string("out/gen/deps.json")
    >>> p.parent().child("BUILD").parts
    ('out', 'gen', 'BUILD')
    >>> p.extension()
    'json'
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Final, Iterable

from genfs.errors import InvalidPathOperation

__all__ = ["FsPath", "ROOT", "path_from_string"]

_SEPARATORS = re.compile(
    "|".join(re.escape(s) for s in (os.sep, os.altsep) if s)
)


@dataclass(frozen=True, order=True)
class FsPath:
    """Immutable path made of segments, ordered lexicographically by segment."""

    parts: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        parts = tuple(self.parts)
        for segment in parts:
            if not isinstance(segment, str) or not segment:
                raise InvalidPathOperation(f"Invalid path segment: {segment!r}")
        object.__setattr__(self, "parts", parts)

    @classmethod
    def of(cls, *segments: str) -> FsPath:
        """Build a path from individual segments."""
        return cls(segments)

    @property
    def is_root(self) -> bool:
        return not self.parts

    @property
    def name(self) -> str:
        """Final segment of the path.

        Raises:
            InvalidPathOperation: If this is the root path.
        """
        if not self.parts:
            raise InvalidPathOperation("The root path has no name")
        return self.parts[-1]

    def child(self, segment: str) -> FsPath:
        return FsPath(self.parts + (segment,))

    def parent(self) -> FsPath:
        """Drop the final segment. A single-segment path yields ``ROOT``.

        Raises:
            InvalidPathOperation: If this is the root path.
        """
        if not self.parts:
            raise InvalidPathOperation("The root path has no parent")
        return FsPath(self.parts[:-1])

    def sibling(self, segment: str) -> FsPath:
        """Replace the final segment.

        Raises:
            InvalidPathOperation: If this is the root path.
        """
        if not self.parts:
            raise InvalidPathOperation("The root path has no sibling")
        return FsPath(self.parts[:-1] + (segment,))

    def as_string(self) -> str:
        """Join segments with the platform path separator."""
        return os.sep.join(self.parts)

    def extension(self) -> str:
        """Text after the first ``.`` of the name, or the whole name without one.

        Trailing dots are not separators, so ``"a."`` has extension ``"a."``.
        """
        name = self.name
        pieces = name.split(".")
        while pieces and not pieces[-1]:
            pieces.pop()
        if len(pieces) <= 1:
            return name
        return ".".join(pieces[1:])

    def __str__(self) -> str:
        return self.as_string()


ROOT: Final[FsPath] = FsPath()


def path_from_string(value: str) -> FsPath:
    """Split a separator-delimited string into an ``FsPath``.

    Leading, trailing and repeated separators are ignored.
    """
    return FsPath(_non_empty(_SEPARATORS.split(value)))


def _non_empty(segments: Iterable[str]) -> tuple[str, ...]:
    return tuple(s for s in segments if s)
