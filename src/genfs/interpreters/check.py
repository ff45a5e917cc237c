"""Check interpreter: verifies generated output without touching it.

Directory creation and writes become assertions against what is already on
disk. Every mismatch is recorded in a ``DiscrepancyLog`` and the program keeps
going, so one run reports all stale output at once.
"""

from __future__ import annotations

import gzip
import logging
import zlib
from pathlib import Path
from typing import Any

from genfs.discrepancy import (
    DirectoryMissing,
    Discrepancy,
    DiscrepancyCallback,
    DiscrepancyLog,
    WriteMismatch,
)
from genfs.errors import IOFailure
from genfs.interpreters.readonly import ReadOnlyInterpreter, decode_text
from genfs.ops import MakeDirs, Operation, RemoveRecursive, WriteFile
from genfs.paths import FsPath
from genfs.program import ProgramRunner

logger = logging.getLogger(__name__)


class CheckInterpreter(ProgramRunner):
    """Runs a program in check mode against ``root``.

    Removal is a no-op. Reads, existence checks and failures behave exactly
    as in the read-only interpreter.
    """

    def __init__(self, root: Path | str, log: DiscrepancyLog | None = None) -> None:
        self.reader = ReadOnlyInterpreter(root)
        self.root = self.reader.root
        self.log = log if log is not None else DiscrepancyLog()

    def resolve(self, path: FsPath) -> Path:
        return self.reader.resolve(path)

    def handle(self, op: Operation) -> Any:
        if isinstance(op, MakeDirs):
            return self.check_dirs(op.path)
        if isinstance(op, RemoveRecursive):
            return None
        if isinstance(op, WriteFile):
            return self.check_write(op.path, op.content.value(), op.compressed)
        return self.reader.handle(op)

    def check_dirs(self, path: FsPath) -> bool:
        """Record ``DirectoryMissing`` unless ``path`` exists.

        Returns:
            True when the directory would have been created.
        """
        if self.reader.exists(path):
            return False
        self._record(DirectoryMissing(path))
        return True

    def check_write(self, path: FsPath, expected: str, compressed: bool = False) -> None:
        """Compare the file at ``path`` with ``expected``, recording any mismatch.

        Raises:
            IOFailure: If the file exists but cannot be read or gunzipped.
        """
        raw = self.reader.read_raw(path)
        if raw is None:
            self._record(WriteMismatch(path, None, expected, compressed))
            return
        if compressed:
            try:
                raw = gzip.decompress(raw)
            except (OSError, EOFError, zlib.error) as e:
                raise IOFailure("decompress", self.resolve(path), e) from e
        found = decode_text(raw)
        if found != expected:
            self._record(WriteMismatch(path, found, expected, compressed))

    def _record(self, discrepancy: Discrepancy) -> None:
        logger.debug("Check failed: %s", discrepancy.message)
        self.log.append(discrepancy)

    def discrepancies(self) -> list[Discrepancy]:
        """Snapshot of everything recorded so far, in recording order."""
        return self.log.snapshot()

    def report_and_count(self, reporter: DiscrepancyCallback) -> int:
        """Report every discrepancy in path order and return how many there were.

        Reads accumulated state, so call it only after the program has finished.

        Args:
            reporter: Called once per discrepancy; its return value is ignored.

        Returns:
            Number of discrepancies recorded.
        """
        ordered = self.log.sorted()
        for discrepancy in ordered:
            reporter(discrepancy)
        if ordered:
            logger.info("Check found %d discrepancies under %s", len(ordered), self.root)
        return len(ordered)
