"""Error kinds raised while building or running file-system programs.

Discrepancies found in check mode are not errors; see ``genfs.discrepancy``.
Everything here aborts the enclosing program immediately.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from genfs.ops import Operation
    from genfs.paths import FsPath

__all__ = [
    "GenfsError",
    "HiddenFileEncountered",
    "IOFailure",
    "InjectedFailure",
    "InvalidPathOperation",
    "ReadOnlyViolation",
]


class GenfsError(Exception):
    """Base class for genfs errors."""

    pass


class InvalidPathOperation(GenfsError, ValueError):
    """A path derivation that has no meaning, such as the parent of the root."""

    pass


class ReadOnlyViolation(GenfsError):
    """A mutating operation reached the read-only interpreter."""

    def __init__(self, operation: Operation) -> None:
        self.operation = operation
        super().__init__(f"invalid op = {operation!r} in read-only mode")


class HiddenFileEncountered(GenfsError):
    """Recursive removal found a hidden entry while hidden entries were protected."""

    def __init__(self, path: FsPath, entry: str) -> None:
        self.path = path
        self.entry = entry
        super().__init__(
            f"Encountered hidden file {entry} under {path}, "
            "and should not remove hidden files/folders. Aborting."
        )


class InjectedFailure(GenfsError):
    """Failure injected into a program by ``genfs.program.fail``."""

    pass


class IOFailure(GenfsError):
    """An OS or decoding error during a real read, write, mkdir or removal."""

    def __init__(self, action: str, target: object, cause: Exception) -> None:
        self.action = action
        self.cause = cause
        super().__init__(f"{action} failed for {target}: {cause}")
