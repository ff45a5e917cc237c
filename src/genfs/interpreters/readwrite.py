"""Read-write interpreter: performs real directory creation, removal and writes."""

from __future__ import annotations

import gzip
import logging
import os
import shutil
from pathlib import Path
from typing import Any

from genfs.errors import HiddenFileEncountered, IOFailure
from genfs.interpreters.readonly import CHARSET, ReadOnlyInterpreter
from genfs.ops import MakeDirs, Operation, RemoveRecursive, WriteFile
from genfs.paths import FsPath
from genfs.program import ProgramRunner

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."


def _raise(error: OSError) -> None:
    raise error


def find_hidden(target: Path) -> str | None:
    """Return the first hidden entry at or under ``target``, relative to it.

    A directory target's own name is not checked, only its contents.
    """
    if not target.is_dir() or target.is_symlink():
        return target.name if target.name.startswith(HIDDEN_PREFIX) else None
    for dirpath, dirnames, filenames in os.walk(target, onerror=_raise):
        for name in sorted(dirnames + filenames):
            if name.startswith(HIDDEN_PREFIX):
                return str(Path(dirpath, name).relative_to(target))
    return None


def gzip_bytes(raw: bytes) -> bytes:
    # fixed mtime keeps regenerated output byte-identical
    return gzip.compress(raw, mtime=0)


class ReadWriteInterpreter(ProgramRunner):
    """Executes every operation against the real file system under ``root``.

    Reads and failures are delegated to an embedded ``ReadOnlyInterpreter``.

    Note:
        Removal is not atomic. Hidden entries are found by a scan that runs
        before anything is deleted, but an OS error midway through deletion
        leaves the subtree partially removed.
    """

    def __init__(self, root: Path | str) -> None:
        self.reader = ReadOnlyInterpreter(root)
        self.root = self.reader.root

    def resolve(self, path: FsPath) -> Path:
        return self.reader.resolve(path)

    def handle(self, op: Operation) -> Any:
        if isinstance(op, MakeDirs):
            return self.make_dirs(op.path)
        if isinstance(op, RemoveRecursive):
            return self.remove(op.path, op.remove_hidden)
        if isinstance(op, WriteFile):
            return self.write(op.path, op.content.value(), op.compressed)
        return self.reader.handle(op)

    def make_dirs(self, path: FsPath) -> bool:
        """Create ``path`` with any missing parents.

        Returns:
            True if created, False if something already existed there.
        """
        if self.reader.exists(path):
            return False
        target = self.resolve(path)
        logger.debug("Creating directory %s", target)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IOFailure("mkdir", target, e) from e
        return True

    def remove(self, path: FsPath, remove_hidden: bool = True) -> None:
        """Delete ``path`` and everything under it.

        Args:
            path: File or directory to remove.
            remove_hidden: If False, refuse to delete anything when a hidden
                entry is present.

        Raises:
            HiddenFileEncountered: If a hidden entry is found and remove_hidden is False.
            IOFailure: If the path is missing or deletion fails.
        """
        target = self.resolve(path)
        try:
            if not target.exists() and not target.is_symlink():
                raise FileNotFoundError(f"No such file or directory: '{target}'")
            if not remove_hidden:
                hidden = find_hidden(target)
                if hidden is not None:
                    raise HiddenFileEncountered(path, hidden)
            logger.debug("Removing %s", target)
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as e:
            raise IOFailure("remove", target, e) from e

    def write(self, path: FsPath, content: str, compressed: bool = False) -> None:
        """Replace the file at ``path`` with ``content`` encoded as UTF-8."""
        target = self.resolve(path)
        data = content.encode(CHARSET)
        if compressed:
            data = gzip_bytes(data)
        logger.debug("Writing %d bytes to %s", len(data), target)
        try:
            target.write_bytes(data)
        except OSError as e:
            raise IOFailure("write", target, e) from e
