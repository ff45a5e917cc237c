"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from genfs.interpreters import CheckInterpreter, ReadOnlyInterpreter, ReadWriteInterpreter
from genfs.paths import FsPath, path_from_string
from genfs.program import Program, make_dirs, sequence, write_compressed_text, write_text


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """Create an empty output root."""
    out = tmp_path / "root"
    out.mkdir()
    return out


@pytest.fixture
def reader(root: Path) -> ReadOnlyInterpreter:
    return ReadOnlyInterpreter(root)


@pytest.fixture
def writer(root: Path) -> ReadWriteInterpreter:
    return ReadWriteInterpreter(root)


@pytest.fixture
def checker(root: Path) -> CheckInterpreter:
    return CheckInterpreter(root)


# ============================================================================
# Program Fixtures
# ============================================================================


@pytest.fixture
def generated_files() -> dict[FsPath, str]:
    """Paths and contents written by ``generation_program``."""
    return {
        path_from_string("out/a.txt"): "hello",
        path_from_string("out/nested/b.txt"): "line one\nline two\n",
        path_from_string("out/unicode.txt"): "café ✓",
    }


@pytest.fixture
def generation_program(generated_files: dict[FsPath, str]) -> Program[None]:
    """Program that creates directories and writes every generated file."""
    steps: list[Program[object]] = []
    for path, content in generated_files.items():
        steps.append(make_dirs(path.parent()))
        steps.append(write_text(path, content))
    steps.append(write_compressed_text(path_from_string("out/data.json.gz"), '{"k": 1}'))
    return sequence(steps).map(lambda _: None)


@pytest.fixture
def mock_reporter() -> MagicMock:
    """Reporter double recording every call."""
    return MagicMock()
