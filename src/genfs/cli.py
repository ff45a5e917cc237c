"""CLI commands using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from genfs import __version__
from genfs.context import AppContext, create_context
from genfs.errors import GenfsError
from genfs.interpreters import CheckInterpreter
from genfs.manifest import DEFAULT_MANIFEST, Manifest

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="genfs",
    help="Generate files from a manifest, or check that they are up to date",
    no_args_is_help=True,
)

# Exit codes
EXIT_STALE = 1
EXIT_ERROR = 2


def configure_logging(verbose: bool) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"genfs v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Generate files from a manifest, or check that they are up to date."""
    pass


def _load_manifest(ctx: AppContext, manifest: Path) -> Manifest:
    try:
        return Manifest.from_file(manifest)
    except (FileNotFoundError, ValueError) as e:
        ctx.reporter.show_error(str(e))
        raise typer.Exit(EXIT_ERROR) from e


def _context_for(root: Path, mode: str) -> AppContext:
    try:
        return create_context(root, mode)
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(EXIT_ERROR) from e


@app.command("apply")
def apply(
    manifest: Annotated[
        Path, typer.Argument(help="Manifest file")
    ] = Path(DEFAULT_MANIFEST),
    root: Annotated[
        Path, typer.Option("--root", "-r", help="Directory generated paths are relative to")
    ] = Path("."),
    check: Annotated[
        bool, typer.Option("--check", "-c", help="Verify output instead of writing it")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    _context=None,
) -> None:
    """Write the manifest's files, or verify them with --check."""
    configure_logging(verbose)
    ctx: AppContext = _context or _context_for(root, "check" if check else "write")
    loaded = _load_manifest(ctx, manifest)

    try:
        ctx.interpreter.run(loaded.to_program())
    except (GenfsError, OSError) as e:
        logger.debug("Program failed", exc_info=True)
        ctx.reporter.show_error(str(e))
        raise typer.Exit(EXIT_ERROR) from e

    if not isinstance(ctx.interpreter, CheckInterpreter):
        ctx.reporter.show_success(f"Wrote {len(loaded.files)} file(s) under {ctx.interpreter.root}")
        return

    count = ctx.interpreter.report_and_count(ctx.reporter)
    if count:
        ctx.reporter.show_error(f"{count} generated path(s) out of date")
        raise typer.Exit(EXIT_STALE)
    ctx.reporter.show_success("Generated output is up to date")


@app.command("status")
def status(
    manifest: Annotated[
        Path, typer.Argument(help="Manifest file")
    ] = Path(DEFAULT_MANIFEST),
    root: Annotated[
        Path, typer.Option("--root", "-r", help="Directory generated paths are relative to")
    ] = Path("."),
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    _context=None,
) -> None:
    """Show which of the manifest's files exist, without changing anything."""
    configure_logging(verbose)
    ctx: AppContext = _context or _context_for(root, "read-only")
    loaded = _load_manifest(ctx, manifest)

    try:
        present = ctx.interpreter.run(loaded.status_program())
    except GenfsError as e:
        ctx.reporter.show_error(str(e))
        raise typer.Exit(EXIT_ERROR) from e
    ctx.reporter.show_status([f.fs_path for f in loaded.files], present)


if __name__ == "__main__":
    app()
