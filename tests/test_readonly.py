"""Tests for the read-only interpreter."""

from __future__ import annotations

from pathlib import Path

import pytest

from genfs.errors import InjectedFailure, IOFailure, ReadOnlyViolation
from genfs.interpreters import ReadOnlyInterpreter
from genfs.ops import MakeDirs
from genfs.paths import ROOT, FsPath
from genfs.program import (
    exists,
    fail,
    make_dirs,
    read_text,
    remove_recursive,
    write_compressed_text,
    write_text,
)
from genfs.protocols import Interpreter


class TestReadOnlyInterpreter:
    """Tests for ReadOnlyInterpreter."""

    def test_requires_absolute_root(self) -> None:
        """Test relative roots are rejected at construction."""
        with pytest.raises(ValueError, match="Absolute path required"):
            ReadOnlyInterpreter("relative/root")

    def test_accepts_string_root(self, root: Path) -> None:
        """Test string roots are converted to paths."""
        assert ReadOnlyInterpreter(str(root)).root == root

    def test_satisfies_interpreter_protocol(self, reader: ReadOnlyInterpreter) -> None:
        """Test structural conformance to Interpreter."""
        assert isinstance(reader, Interpreter)

    def test_resolve_joins_segments_onto_root(
        self, reader: ReadOnlyInterpreter, root: Path
    ) -> None:
        """Test paths resolve under the root."""
        assert reader.resolve(FsPath.of("a", "b.txt")) == root / "a" / "b.txt"
        assert reader.resolve(ROOT) == root

    def test_exists(self, reader: ReadOnlyInterpreter, root: Path) -> None:
        """Test existence of files and directories."""
        (root / "file.txt").write_text("x")
        (root / "dir").mkdir()

        assert reader.run(exists(FsPath.of("file.txt"))) is True
        assert reader.run(exists(FsPath.of("dir"))) is True
        assert reader.run(exists(FsPath.of("missing"))) is False

    def test_read_text(self, reader: ReadOnlyInterpreter, root: Path) -> None:
        """Test reading decodes UTF-8."""
        (root / "file.txt").write_bytes("naïve ✓\n".encode("utf-8"))

        assert reader.run(read_text(FsPath.of("file.txt"))) == "naïve ✓\n"

    def test_read_missing_is_none(self, reader: ReadOnlyInterpreter) -> None:
        """Test absent files read as None."""
        assert reader.run(read_text(FsPath.of("missing.txt"))) is None

    def test_read_invalid_utf8_is_lossy(self, reader: ReadOnlyInterpreter, root: Path) -> None:
        """Test invalid UTF-8 is replaced instead of raising."""
        (root / "a.txt").write_bytes(b"caf\xe9")

        assert reader.run(read_text(FsPath.of("a.txt"))) == "caf\ufffd"

    def test_stat_failure_raises_io_failure(
        self, reader: ReadOnlyInterpreter, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test OS errors while probing existence are wrapped."""

        def denied(self: Path, *args: object, **kwargs: object) -> bool:
            raise PermissionError("denied")

        monkeypatch.setattr(Path, "exists", denied)

        with pytest.raises(IOFailure, match="stat failed"):
            reader.run(exists(FsPath.of("a.txt")))
        with pytest.raises(IOFailure, match="stat failed"):
            reader.run(read_text(FsPath.of("a.txt")))

    def test_read_directory_raises_io_failure(
        self, reader: ReadOnlyInterpreter, root: Path
    ) -> None:
        """Test OS errors are wrapped."""
        (root / "dir").mkdir()

        with pytest.raises(IOFailure) as exc_info:
            reader.run(read_text(FsPath.of("dir")))

        assert isinstance(exc_info.value.cause, OSError)

    def test_fail_propagates_verbatim(self, reader: ReadOnlyInterpreter) -> None:
        """Test injected errors are raised as-is."""
        error = KeyError("original")

        with pytest.raises(KeyError) as exc_info:
            reader.run(fail(error))

        assert exc_info.value is error

    def test_fail_with_message(self, reader: ReadOnlyInterpreter) -> None:
        """Test string failures surface as InjectedFailure."""
        with pytest.raises(InjectedFailure, match="stop here"):
            reader.run(fail("stop here"))

    @pytest.mark.parametrize(
        "program",
        [
            make_dirs(FsPath.of("d")),
            remove_recursive(FsPath.of("d")),
            write_text(FsPath.of("f.txt"), "x"),
            write_compressed_text(FsPath.of("f.gz"), "x"),
        ],
    )
    def test_mutations_are_rejected(
        self, reader: ReadOnlyInterpreter, root: Path, program
    ) -> None:
        """Test every mutating operation raises ReadOnlyViolation."""
        with pytest.raises(ReadOnlyViolation, match="read-only mode"):
            reader.run(program)

        assert list(root.iterdir()) == []

    def test_violation_identifies_operation(self, reader: ReadOnlyInterpreter) -> None:
        """Test the error carries the offending operation."""
        with pytest.raises(ReadOnlyViolation) as exc_info:
            reader.run(make_dirs(FsPath.of("d")))

        assert exc_info.value.operation == MakeDirs(FsPath.of("d"))

    def test_rejected_write_never_evaluates_content(
        self, reader: ReadOnlyInterpreter
    ) -> None:
        """Test content producers are not run for rejected writes."""
        calls: list[int] = []

        with pytest.raises(ReadOnlyViolation):
            reader.run(write_text(FsPath.of("f.txt"), lambda: calls.append(1) or "x"))

        assert calls == []
