"""Index rendering — text overview of an analyzed project, plus JSON cache."""

import json
from collections import Counter
from pathlib import Path

from structscan.analysis.models import (
    FileAnalysis,
    ProjectAnalysis,
    TypeKind,
    Visibility,
)

# Key members listed per file in the file index.
MAX_KEY_MEMBERS = 5
# Dependencies listed per file in the dependency map.
MAX_DEPENDENCIES = 10


def type_hierarchy(project: ProjectAnalysis) -> dict[str, list[str]]:
    """Class name -> base names, for every class declared in the project."""
    hierarchy: dict[str, list[str]] = {}
    for analysis in project.files:
        for code_type in analysis.types:
            if code_type.kind != TypeKind.CLASS:
                continue
            bases = [code_type.base_type] if code_type.base_type else []
            hierarchy[code_type.name] = bases + code_type.interfaces
    return hierarchy


def dependency_map(project: ProjectAnalysis) -> dict[str, list[str]]:
    """Relative path -> imported modules, for files that import anything."""
    return {a.relative_path: a.imports for a in project.files if a.imports}


def key_members(analysis: FileAnalysis) -> str:
    """Comma-separated public member names, capped at MAX_KEY_MEMBERS."""
    names = [
        member.name
        for code_type in analysis.types
        for member in code_type.members
        if member.visibility == Visibility.PUBLIC
    ]
    shown = ", ".join(names[:MAX_KEY_MEMBERS])
    if len(names) > MAX_KEY_MEMBERS:
        shown += ", ..."
    return shown


def render_index(project: ProjectAnalysis, title: str | None = None) -> str:
    """Render a project overview: summary, type hierarchy, dependencies, file index.

    Args:
        project: Analyzed project
        title: Heading (defaults to the root directory name)

    Returns:
        Markdown text
    """
    title = title or Path(project.root).name or project.root
    total_tokens = sum(a.estimated_tokens for a in project.files)
    roles = Counter(a.classification.value for a in project.files)

    lines = [
        f"# {title}",
        "",
        f"Generated: {project.analyzed_at:%Y-%m-%d %H:%M} UTC",
        f"Files: {len(project.files)}",
        f"Estimated tokens: {total_tokens:,}",
        f"Call sites: {len(project.call_sites)}",
    ]
    if roles:
        lines.append(
            "Roles: " + ", ".join(f"{role} {count}" for role, count in sorted(roles.items()))
        )

    hierarchy = type_hierarchy(project)
    if hierarchy:
        lines += ["", "## Type hierarchy", ""]
        for name in sorted(hierarchy):
            bases = hierarchy[name]
            lines.append(f"- {name}" + (f" : {', '.join(bases)}" if bases else ""))

    dependencies = dependency_map(project)
    if dependencies:
        lines += ["", "## Dependency map", ""]
        for path in sorted(dependencies):
            modules = dependencies[path]
            shown = ", ".join(modules[:MAX_DEPENDENCIES])
            if len(modules) > MAX_DEPENDENCIES:
                shown += ", ..."
            lines.append(f"- {path} → {shown}")

    lines += [
        "",
        "## Files",
        "",
        "| File | Role | Types | Key members |",
        "|------|------|-------|-------------|",
    ]
    for analysis in sorted(project.files, key=lambda a: a.relative_path):
        type_names = ", ".join(t.name for t in analysis.types if t.kind == TypeKind.CLASS)
        lines.append(
            f"| {analysis.relative_path} | {analysis.classification} "
            f"| {type_names} | {key_members(analysis)} |"
        )

    if project.skipped:
        lines += ["", "## Skipped", ""]
        for skipped in project.skipped:
            lines.append(f"- {skipped.path}: {skipped.error}")

    return "\n".join(lines) + "\n"


def save_index(project: ProjectAnalysis, path: Path) -> Path:
    """Write the rendered index to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_index(project), encoding="utf-8")
    return path


def save_cache(project: ProjectAnalysis, path: Path) -> Path:
    """Write the full project analysis as JSON to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(project.model_dump(mode="json"), indent=2), encoding="utf-8")
    return path
