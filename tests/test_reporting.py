"""Tests for rich console reporting."""

from __future__ import annotations

from io import StringIO

import pytest
from rich.console import Console

from genfs.discrepancy import DirectoryMissing, WriteMismatch
from genfs.paths import FsPath
from genfs.protocols import DiscrepancyReporter
from genfs.reporting import ConsoleReporter, render_diff


@pytest.fixture
def output() -> StringIO:
    return StringIO()


@pytest.fixture
def reporter(output: StringIO) -> ConsoleReporter:
    console = Console(file=output, force_terminal=False, color_system=None, width=120)
    return ConsoleReporter(console=console)


class TestRenderDiff:
    """Tests for unified diffs of mismatched content."""

    def test_diff_shows_changed_lines(self) -> None:
        """Test removed and added lines appear in the diff."""
        diff = render_diff(WriteMismatch(FsPath.of("a.txt"), "one\ntwo\n", "one\nthree\n"))

        assert "-two" in diff
        assert "+three" in diff
        assert "a.txt (on disk)" in diff
        assert "a.txt (expected)" in diff

    def test_absent_file_diffs_from_dev_null(self) -> None:
        """Test absent files diff against /dev/null."""
        diff = render_diff(WriteMismatch(FsPath.of("a.txt"), None, "new\n"))

        assert "/dev/null" in diff
        assert "+new" in diff

    def test_missing_trailing_newline(self) -> None:
        """Test every diff line ends with a newline."""
        diff = render_diff(WriteMismatch(FsPath.of("a"), "hellx", "hello"))

        assert diff.endswith("\n")
        assert "-hellx\n" in diff
        assert "+hello\n" in diff


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_is_a_discrepancy_reporter(self, reporter: ConsoleReporter) -> None:
        """Test structural conformance to the reporter protocol."""
        assert isinstance(reporter, DiscrepancyReporter)

    def test_reports_directory_missing(
        self, reporter: ConsoleReporter, output: StringIO
    ) -> None:
        """Test missing directories print their message."""
        reporter(DirectoryMissing(FsPath.of("gen")))

        assert "directory gen expected but missing" in output.getvalue()

    def test_reports_mismatch_with_diff(
        self, reporter: ConsoleReporter, output: StringIO
    ) -> None:
        """Test mismatches print their message and diff."""
        reporter(WriteMismatch(FsPath.of("a.txt"), "hellx", "hello"))

        text = output.getvalue()
        assert "file a.txt does not match." in text
        assert "+hello" in text

    def test_diff_can_be_disabled(self, output: StringIO) -> None:
        """Test show_diff=False prints only the message."""
        console = Console(file=output, force_terminal=False, color_system=None)
        reporter = ConsoleReporter(console=console, show_diff=False)

        reporter(WriteMismatch(FsPath.of("a.txt"), "hellx", "hello"))

        assert "+hello" not in output.getvalue()

    def test_messages_escape_markup(self, reporter: ConsoleReporter, output: StringIO) -> None:
        """Test paths containing brackets print literally."""
        reporter.show_error("bad [red]path[/red]")

        assert "bad [red]path[/red]" in output.getvalue()

    def test_show_status(self, reporter: ConsoleReporter, output: StringIO) -> None:
        """Test the status table lists each path."""
        reporter.show_status([FsPath.of("a.txt"), FsPath.of("b.txt")], [True, False])

        text = output.getvalue()
        assert "a.txt" in text
        assert "present" in text
        assert "missing" in text

    def test_show_status_empty(self, reporter: ConsoleReporter, output: StringIO) -> None:
        """Test an empty manifest prints a notice."""
        reporter.show_status([], [])

        assert "No files declared" in output.getvalue()
