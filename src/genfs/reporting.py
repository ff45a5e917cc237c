"""Rich console output for check results and CLI messages."""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from genfs.discrepancy import Discrepancy, WriteMismatch

if TYPE_CHECKING:
    from genfs.paths import FsPath


def render_diff(mismatch: WriteMismatch) -> str:
    """Unified diff from the content on disk to the expected content."""
    name = str(mismatch.path)
    current = mismatch.current or ""
    lines = difflib.unified_diff(
        current.splitlines(keepends=True),
        mismatch.expected.splitlines(keepends=True),
        fromfile=f"{name} (on disk)" if mismatch.current is not None else "/dev/null",
        tofile=f"{name} (expected)",
    )
    return "".join(line if line.endswith("\n") else line + "\n" for line in lines)


class ConsoleReporter:
    """Prints discrepancies and status messages to a rich console.

    Instances are callable, so one can be passed straight to
    ``CheckInterpreter.report_and_count``.
    """

    def __init__(self, console: Console | None = None, show_diff: bool = True) -> None:
        self.console = console or Console()
        self.show_diff = show_diff

    def __call__(self, discrepancy: Discrepancy) -> None:
        self.report(discrepancy)

    def report(self, discrepancy: Discrepancy) -> None:
        """Print one discrepancy.

        Args:
            discrepancy: The recorded discrepancy.
        """
        self.console.print(f"[red]✗[/red] {escape(discrepancy.message)}")
        if isinstance(discrepancy, WriteMismatch) and self.show_diff:
            diff = render_diff(discrepancy)
            if diff:
                self.console.print(Syntax(diff, "diff", theme="ansi_dark"))

    def show_success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def show_error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def show_status(self, paths: list[FsPath], present: list[bool]) -> None:
        """Display which declared files exist.

        Args:
            paths: Declared file paths.
            present: Existence flag for each path, in the same order.
        """
        if not paths:
            self.console.print("[yellow]No files declared[/yellow]")
            return

        table = Table(title="Generated Files")
        table.add_column("Path", style="cyan")
        table.add_column("Status")
        for path, found in zip(paths, present):
            status = "[green]present[/green]" if found else "[red]missing[/red]"
            table.add_row(escape(str(path)), status)
        self.console.print(table)
