"""Project scanner — discover Python files and analyze each of them.

Uses `git ls-files` inside a git work tree and falls back to os.walk with
an ignore list elsewhere.
"""

import logging
import os
import subprocess
from datetime import UTC, datetime
from pathlib import Path

from structscan.analysis.analyzer import Analyzer, SourceReadError
from structscan.analysis.models import FileAnalysis, ProjectAnalysis, SkippedFile

logger = logging.getLogger(__name__)

# Common directories to ignore in non-git projects
IGNORE_DIRS = {
    "__pycache__",
    "node_modules",
    ".git",
    ".venv",
    "venv",
    "dist",
    "build",
    ".structscan",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    "__pypackages__",
    ".egg-info",
}

PYTHON_SUFFIXES = {".py", ".pyi"}


def is_python_file(path: Path) -> bool:
    return path.suffix.lower() in PYTHON_SUFFIXES


def _is_git_repo(root: Path) -> bool:
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--git-dir"],
            cwd=root,
            capture_output=True,
            check=False,
        )
    except (subprocess.SubprocessError, FileNotFoundError):  # pragma: no cover
        return False
    return result.returncode == 0


def discover_files(root: Path) -> list[Path]:
    """Discover Python source files under ``root``, sorted by path.

    Args:
        root: Project root directory

    Returns:
        Paths of all discovered Python files
    """
    paths: list[Path] = []

    if _is_git_repo(root):
        result = subprocess.run(
            ["git", "ls-files"],
            cwd=root,
            capture_output=True,
            text=True,
            check=True,
        )
        for name in result.stdout.splitlines():
            path = root / name
            if name and path.is_file() and is_python_file(path):
                paths.append(path)
    else:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = [
                d for d in dirnames if d not in IGNORE_DIRS and not d.endswith(".egg-info")
            ]
            for filename in filenames:
                path = Path(dirpath) / filename
                if is_python_file(path):
                    paths.append(path)

    return sorted(paths)


def analyze_project(root: Path, analyzer: Analyzer | None = None) -> ProjectAnalysis:
    """Analyze every Python file under ``root``.

    Unreadable files are recorded in ``skipped`` instead of aborting the scan.

    Args:
        root: Project root directory
        analyzer: Analyzer to use (a fresh one when None)

    Returns:
        ProjectAnalysis with per-file results and the merged call sites
    """
    analyzer = analyzer if analyzer is not None else Analyzer()
    base_path = str(root)

    files: list[FileAnalysis] = []
    skipped: list[SkippedFile] = []

    for path in discover_files(root):
        try:
            files.append(analyzer.analyze(str(path), base_path))
        except SourceReadError as e:
            logger.warning("Skipping %s: %s", e.path, e.reason)
            skipped.append(SkippedFile(path=e.path, error=e.reason))

    logger.info("Analyzed %d files under %s (%d skipped)", len(files), root, len(skipped))

    return ProjectAnalysis(
        root=base_path,
        files=files,
        call_sites=analyzer.call_graph.sites,
        skipped=skipped,
        analyzed_at=datetime.now(UTC),
    )
