"""CLI commands for structural analysis."""

from __future__ import annotations

import json
from pathlib import Path

from rich import print as rprint
from rich.table import Table

from structscan.analysis.analyzer import Analyzer, SourceReadError
from structscan.analysis.index import save_cache, save_index
from structscan.analysis.models import FileAnalysis, TypeKind
from structscan.analysis.scanner import analyze_project
from structscan.settings import SettingsStore


def _error(message: str, format: str) -> int:
    if format == "human":
        rprint(f"[red]Error:[/red] {message}")
    else:
        print(json.dumps({"error": message}))
    return 1


def _print_file_human(analysis: FileAnalysis) -> None:
    rprint(f"\n[cyan]{analysis.relative_path}[/cyan] — [bold]{analysis.classification}[/bold]")
    rprint(f"{analysis.size_bytes:,} bytes, ~{analysis.estimated_tokens:,} tokens")
    if analysis.dependencies:
        rprint(f"Depends on: {', '.join(analysis.dependencies)}")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Owner")
    table.add_column("Member")
    table.add_column("Lines", justify="right")
    table.add_column("Flags")
    for code_type in analysis.types:
        owner = code_type.name
        if code_type.kind == TypeKind.CLASS and code_type.base_type:
            owner += f"({code_type.base_type})"
        if not code_type.members:
            table.add_row(owner, "", f"{code_type.start_line}-{code_type.end_line}", "")
        for member in code_type.members:
            flags = [
                flag
                for flag, enabled in (
                    ("async", member.is_async),
                    ("static", member.is_static),
                    ("private", member.visibility == "private"),
                )
                if enabled
            ]
            table.add_row(
                owner,
                member.signature,
                f"{member.start_line}-{member.end_line}",
                ", ".join(flags),
            )
    if analysis.types:
        rprint(table)


def file_command(path: Path, base: Path | None = None, format: str = "human") -> int:
    """Analyze a single file and print the result.

    Args:
        path: Python source file
        base: Base directory for the relative path (defaults to the file's parent)
        format: Output format (human, json, jsonl)

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    analyzer = Analyzer()
    file_path = str(path.resolve())
    base_path = str((base or path.parent).resolve())

    try:
        analysis = analyzer.analyze(file_path, base_path)
    except SourceReadError as e:
        return _error(str(e), format)

    call_sites = analyzer.call_graph.sites

    if format == "json":
        print(
            json.dumps(
                {
                    "analysis": analysis.model_dump(mode="json"),
                    "call_sites": [site.model_dump(mode="json") for site in call_sites],
                },
                indent=2,
            )
        )
    elif format == "jsonl":
        print(json.dumps({"type": "file", **analysis.model_dump(mode="json")}))
        for site in call_sites:
            print(json.dumps({"type": "call_site", **site.model_dump(mode="json")}))
    else:  # human
        _print_file_human(analysis)
        rprint(f"\n{len(call_sites)} call sites\n")

    return 0


def analyze_command(root: Path, format: str = "human", write_index: bool = False) -> int:
    """Analyze every Python file under ``root``.

    With ``write_index``, writes the rendered index and JSON cache to the
    destinations configured in the workspace settings.

    Args:
        root: Project root directory
        format: Output format (human, json, jsonl)
        write_index: Whether to write index and cache files

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    if not root.is_dir():
        return _error(f"Project root does not exist: {root}", format)

    root = root.resolve()
    store = SettingsStore()
    settings = store.load(root)

    try:
        project = analyze_project(root)

        index_file = cache_file = None
        if write_index:
            index_file = save_index(project, settings.index_path(root))
            cache_file = save_cache(project, settings.cache_path(root))

        if format == "json":
            output: dict[str, object] = project.model_dump(mode="json")
            if write_index:
                output["index_file"] = str(index_file)
                output["cache_file"] = str(cache_file)
            print(json.dumps(output, indent=2))

        elif format == "jsonl":
            for analysis in project.files:
                print(json.dumps({"type": "file", **analysis.model_dump(mode="json")}))
            for skipped in project.skipped:
                print(json.dumps({"type": "skipped", **skipped.model_dump(mode="json")}))
            summary: dict[str, object] = {
                "type": "summary",
                "root": project.root,
                "total_files": len(project.files),
                "total_call_sites": len(project.call_sites),
            }
            if write_index:
                summary["index_file"] = str(index_file)
                summary["cache_file"] = str(cache_file)
            print(json.dumps(summary))

        else:  # human
            table = Table(show_header=True, header_style="bold")
            table.add_column("File")
            table.add_column("Role")
            table.add_column("Types", justify="right")
            table.add_column("Members", justify="right")
            for analysis in project.files:
                table.add_row(
                    analysis.relative_path,
                    analysis.classification.value,
                    str(sum(1 for t in analysis.types if t.kind == TypeKind.CLASS)),
                    str(sum(len(t.members) for t in analysis.types)),
                )
            rprint(table)
            rprint(
                f"\n[green]✓[/green] Analyzed {len(project.files)} files, "
                f"{len(project.call_sites)} call sites"
            )
            if project.skipped:
                rprint(f"[yellow]Skipped {len(project.skipped)} unreadable files[/yellow]")
            if write_index:
                rprint(f"Index written to [dim]{index_file}[/dim]")
                rprint(f"Cache saved to [dim]{cache_file}[/dim]\n")

        return 0

    except Exception as e:
        return _error(str(e), format)
