"""structscan analysis — heuristic structural extraction for Python files."""

from structscan.analysis.analyzer import (
    Analyzer,
    SourceReadError,
    analyze_source,
    read_source,
)
from structscan.analysis.calls import CallGraph, extract_call_sites
from structscan.analysis.classifier import CLASSIFICATION_RULES, classify
from structscan.analysis.docstrings import extract_docstring
from structscan.analysis.imports import dependency_roots, extract_imports
from structscan.analysis.index import render_index, save_cache, save_index
from structscan.analysis.lines import LineIndex, find_block_end, indentation_width
from structscan.analysis.models import (
    CallSite,
    CodeMemberInfo,
    CodeTypeInfo,
    FileAnalysis,
    FileClassification,
    FileReport,
    MemberKind,
    ProjectAnalysis,
    SkippedFile,
    TypeKind,
    Visibility,
)
from structscan.analysis.scanner import analyze_project, discover_files

__all__ = [
    "CLASSIFICATION_RULES",
    "Analyzer",
    "CallGraph",
    "CallSite",
    "CodeMemberInfo",
    "CodeTypeInfo",
    "FileAnalysis",
    "FileClassification",
    "FileReport",
    "LineIndex",
    "MemberKind",
    "ProjectAnalysis",
    "SkippedFile",
    "SourceReadError",
    "TypeKind",
    "Visibility",
    "analyze_project",
    "analyze_source",
    "classify",
    "dependency_roots",
    "discover_files",
    "extract_call_sites",
    "extract_docstring",
    "extract_imports",
    "find_block_end",
    "indentation_width",
    "read_source",
    "render_index",
    "save_cache",
    "save_index",
]
