"""Interpreters that give a program real or simulated meaning."""

from __future__ import annotations

from pathlib import Path

from .check import CheckInterpreter
from .readonly import ReadOnlyInterpreter
from .readwrite import ReadWriteInterpreter

__all__ = [
    "CheckInterpreter",
    "MODES",
    "ReadOnlyInterpreter",
    "ReadWriteInterpreter",
    "get_interpreter",
]


MODES: dict[str, type[ReadOnlyInterpreter | ReadWriteInterpreter | CheckInterpreter]] = {
    "write": ReadWriteInterpreter,
    "check": CheckInterpreter,
    "read-only": ReadOnlyInterpreter,
}


def get_interpreter(
    mode: str, root: Path | str
) -> ReadOnlyInterpreter | ReadWriteInterpreter | CheckInterpreter:
    """Get an interpreter instance by mode name.

    Args:
        mode: Mode name (write, check, read-only).
        root: Absolute root directory.

    Returns:
        Interpreter rooted at ``root``.

    Raises:
        ValueError: If mode is not supported or root is not absolute.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode}. Supported: {list(MODES.keys())}")
    return MODES[mode](root)
