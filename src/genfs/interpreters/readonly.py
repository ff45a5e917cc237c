"""Read-only interpreter: inspects a real directory tree, never mutates it."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from genfs.errors import IOFailure, ReadOnlyViolation
from genfs.ops import Exists, Fail, Operation, ReadFile
from genfs.paths import FsPath
from genfs.program import ProgramRunner

logger = logging.getLogger(__name__)

CHARSET = "utf-8"


def decode_text(raw: bytes) -> str:
    # lossy, so stale bytes on disk still compare as text
    return raw.decode(CHARSET, errors="replace")


class ReadOnlyInterpreter(ProgramRunner):
    """Handles ``Exists``, ``ReadFile`` and ``Fail`` against ``root``.

    Any other operation raises ``ReadOnlyViolation``.
    """

    def __init__(self, root: Path | str) -> None:
        """Initialize the interpreter.

        Args:
            root: Absolute directory that program paths are resolved against.

        Raises:
            ValueError: If root is not absolute.
        """
        root = Path(root)
        if not root.is_absolute():
            raise ValueError(f"Absolute path required, found: {root}")
        self.root = root

    def resolve(self, path: FsPath) -> Path:
        return self.root.joinpath(*path.parts)

    def handle(self, op: Operation) -> Any:
        if isinstance(op, Exists):
            return self.exists(op.path)
        if isinstance(op, ReadFile):
            return self.read(op.path)
        if isinstance(op, Fail):
            raise op.error
        raise ReadOnlyViolation(op)

    def exists(self, path: FsPath) -> bool:
        """Check whether anything exists at ``path``.

        Raises:
            IOFailure: If the entry cannot be inspected.
        """
        target = self.resolve(path)
        try:
            return target.exists()
        except OSError as e:
            raise IOFailure("stat", target, e) from e

    def read(self, path: FsPath) -> str | None:
        """Read the file at ``path`` as UTF-8, or None if nothing is there.

        Invalid UTF-8 sequences are replaced rather than raised.
        """
        raw = self.read_raw(path)
        return None if raw is None else decode_text(raw)

    def read_raw(self, path: FsPath) -> bytes | None:
        """Read the bytes at ``path``, or None if nothing is there.

        Raises:
            IOFailure: If the entry exists but cannot be read.
        """
        if not self.exists(path):
            return None
        target = self.resolve(path)
        try:
            return target.read_bytes()
        except OSError as e:
            raise IOFailure("read", target, e) from e
