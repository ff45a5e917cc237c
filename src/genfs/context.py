"""Application context for dependency injection.

Separates building the interpreter and reporter from the CLI commands that
use them, so tests can hand commands their own doubles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from genfs.interpreters import get_interpreter
from genfs.protocols import Interpreter
from genfs.reporting import ConsoleReporter


@dataclass
class AppContext:
    """Container for the dependencies of one CLI invocation."""

    interpreter: Interpreter
    reporter: ConsoleReporter = field(default_factory=ConsoleReporter)
    mode: str = "write"


def create_context(root: Path, mode: str = "write") -> AppContext:
    """Factory for application dependencies.

    Args:
        root: Output root; made absolute against the working directory.
        mode: Interpreter mode (write, check, read-only).

    Returns:
        Configured AppContext.

    Raises:
        ValueError: If mode is unknown.
    """
    interpreter = get_interpreter(mode, root.resolve())
    return AppContext(interpreter=interpreter, reporter=ConsoleReporter(), mode=mode)
