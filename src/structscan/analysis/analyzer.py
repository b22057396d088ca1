"""Analyzer — orchestrates structural extraction for one file.

Analysis of a file is pure: call sites come back in a FileReport next to
the FileAnalysis. `Analyzer` is the stateful wrapper that reads files and
merges each report's call sites into its CallGraph.
"""

import logging
import re
from pathlib import Path

from structscan.analysis.calls import CallGraph
from structscan.analysis.classifier import classify
from structscan.analysis.declarations import extract_module_type, extract_types
from structscan.analysis.imports import dependency_roots, extract_imports
from structscan.analysis.lines import LineIndex
from structscan.analysis.models import FileAnalysis, FileReport

logger = logging.getLogger(__name__)

_SEPARATORS = "\\/"


class SourceReadError(Exception):
    """Raised when a source file cannot be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


def relative_path(file_path: str, base_path: str) -> str:
    """``file_path`` with the ``base_path`` prefix and leading separators removed."""
    if base_path and file_path.startswith(base_path):
        return file_path[len(base_path) :].lstrip(_SEPARATORS)
    return file_path.lstrip(_SEPARATORS)


def file_name_of(path: str) -> str:
    """Last path component, accepting either separator."""
    parts = [part for part in re.split(r"[\\/]+", path) if part]
    return parts[-1] if parts else ""


def read_source(file_path: str | Path) -> str:
    """Read a source file as UTF-8.

    Raises:
        SourceReadError: If the file is missing, unreadable or not UTF-8
    """
    try:
        return Path(file_path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SourceReadError(str(file_path), f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise SourceReadError(str(file_path), e.strerror or str(e)) from e


def analyze_source(file_path: str, base_path: str, content: str) -> FileReport:
    """Analyze decoded source text.

    Never fails on unexpected structure: anything the heuristics cannot
    recognize is left out of the result.

    Args:
        file_path: Absolute path of the file
        base_path: Root the relative path is computed against
        content: Decoded source text

    Returns:
        FileReport with the FileAnalysis and the call sites found in it
    """
    index = LineIndex(content)
    file_name = file_name_of(file_path)
    size_bytes = len(content.encode("utf-8"))

    imports = extract_imports(content)
    types, call_sites = extract_types(index, file_path)

    module_type, module_sites = extract_module_type(index, file_name, file_path)
    if module_type is not None:
        types.insert(0, module_type)
        call_sites = module_sites + call_sites

    analysis = FileAnalysis(
        file_path=file_path,
        relative_path=relative_path(file_path, base_path),
        file_name=file_name,
        size_bytes=size_bytes,
        estimated_tokens=size_bytes // 4,
        types=types,
        imports=imports,
        dependencies=dependency_roots(imports),
    )
    analysis = analysis.model_copy(update={"classification": classify(analysis)})

    logger.debug(
        "Analyzed %s: %d types, %d imports, %d call sites, classified %s",
        analysis.relative_path,
        len(types),
        len(imports),
        len(call_sites),
        analysis.classification,
    )
    return FileReport(analysis=analysis, call_sites=call_sites)


class Analyzer:
    """Analyzes files one at a time, aggregating their call sites."""

    def __init__(self, call_graph: CallGraph | None = None) -> None:
        self.call_graph = call_graph if call_graph is not None else CallGraph()

    def analyze(self, file_path: str, base_path: str, content: str | None = None) -> FileAnalysis:
        """Analyze one file and merge its call sites into the call graph.

        Args:
            file_path: Absolute path of the file
            base_path: Root the relative path is computed against
            content: Decoded source; read from ``file_path`` when None

        Returns:
            FileAnalysis for the file

        Raises:
            SourceReadError: If ``content`` is None and the file cannot be read
        """
        report = self.report(file_path, base_path, content)
        self.call_graph.merge(report.call_sites)
        return report.analysis

    def report(self, file_path: str, base_path: str, content: str | None = None) -> FileReport:
        """Analyze one file without touching the call graph."""
        if content is None:
            content = read_source(file_path)
        return analyze_source(file_path, base_path, content)
