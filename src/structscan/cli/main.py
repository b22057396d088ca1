"""structscan CLI application."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from rich import print as rprint

import structscan as structscan_pkg


class OutputFormat(StrEnum):
    """Output format for CLI commands."""

    human = "human"
    json = "json"
    jsonl = "jsonl"


app = typer.Typer(
    name="structscan",
    help="Heuristic structural inventory of Python source.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        rprint(f"structscan {structscan_pkg.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log progress to stderr."),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Also append log lines to this file."),
    ] = None,
) -> None:
    """structscan — types, members, imports, call sites and roles of Python files."""
    from dotenv import load_dotenv

    from structscan.log import setup_logging

    load_dotenv()
    setup_logging("DEBUG" if verbose else None, log_file)
    ctx.obj = {"verbose": verbose, "log_file": log_file}


def _apply_workspace_logging(ctx: typer.Context, root: Path) -> None:
    """Re-configure logging from the workspace settings.

    --verbose and --log-file still win over the settings' log_level/log_file.
    """
    from structscan.log import setup_logging
    from structscan.settings import load_settings

    if not root.is_dir():
        return

    options = ctx.obj or {}
    root = root.resolve()
    settings = load_settings(root)
    level = "DEBUG" if options.get("verbose") else settings.log_level
    log_file = options.get("log_file")
    if log_file is None and settings.log_file:
        log_file = root / settings.log_file
    setup_logging(level, log_file)


@app.command("file")
def file(
    path: Annotated[Path, typer.Argument(help="Python source file")],
    base: Annotated[
        Path | None,
        typer.Option("--base", "-b", help="Base directory for the relative path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.human,
) -> None:
    """Analyze a single Python file."""
    from structscan.analysis.cli import file_command

    exit_code = file_command(path, base=base, format=format.value)
    raise typer.Exit(exit_code)


@app.command("analyze")
def analyze(
    ctx: typer.Context,
    project_root: Annotated[
        Path | None,
        typer.Argument(help="Project root directory (defaults to the current directory)"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.human,
    write_index: Annotated[
        bool,
        typer.Option("--write-index", help="Write the index and JSON cache to the output dir"),
    ] = False,
) -> None:
    """Analyze every Python file in a project."""
    from structscan.analysis.cli import analyze_command

    root = project_root if project_root else Path.cwd()
    _apply_workspace_logging(ctx, root)
    exit_code = analyze_command(root, format=format.value, write_index=write_index)
    raise typer.Exit(exit_code)
