"""Protocol definitions for interpreters and reporters.

Interpreters and reporters are matched structurally (duck typing), so test
doubles do not need to inherit from anything.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from genfs.discrepancy import Discrepancy
    from genfs.ops import Operation
    from genfs.paths import FsPath
    from genfs.program import Program

T = TypeVar("T")


@runtime_checkable
class Interpreter(Protocol):
    """Gives meaning to the operations of a program.

    Implementations resolve paths against a single absolute root.
    """

    root: Path

    def resolve(self, path: FsPath) -> Path:
        """Map a program path onto the real file system.

        Args:
            path: Path relative to the interpreter root.

        Returns:
            Absolute path under the root.
        """
        ...

    def handle(self, op: Operation) -> Any:
        """Execute one operation.

        Args:
            op: The operation to execute.

        Returns:
            The operation's result.

        Raises:
            GenfsError: If the operation fails or is not permitted.
        """
        ...

    def run(self, program: Program[T]) -> T:
        """Execute a whole program in order.

        Args:
            program: Program to execute.

        Returns:
            The program's final value.
        """
        ...


@runtime_checkable
class DiscrepancyReporter(Protocol):
    """Callback invoked once per discrepancy by ``CheckInterpreter.report_and_count``."""

    def __call__(self, discrepancy: Discrepancy) -> object:
        """Report a single discrepancy. The return value is ignored."""
        ...
