"""File classifier — architectural role from naming, path and inheritance.

Rules are an ordered table of (label, predicate); the first predicate that
holds decides the label. Every comparison is case-insensitive, and paths
may use either separator.
"""

import re
from collections.abc import Callable

from structscan.analysis.models import FileAnalysis, FileClassification

Predicate = Callable[[FileAnalysis], bool]

CONFIG_FILE_NAMES = frozenset(
    {
        "settings.py",
        "config.py",
        "conf.py",
        "configuration.py",
        "setup.py",
        "manage.py",
        "wsgi.py",
        "asgi.py",
    }
)

# Substrings of a base type name, checked in order for each declared type.
BASE_TYPE_HINTS: tuple[tuple[str, FileClassification], ...] = (
    ("view", FileClassification.VIEW),
    ("model", FileClassification.MODEL),
    ("schema", FileClassification.MODEL),
    ("testcase", FileClassification.TEST),
)


def path_segments(path: str) -> list[str]:
    """Lower-cased directory segments of ``path`` (file name excluded)."""
    parts = [part for part in re.split(r"[\\/]+", path.lower()) if part]
    return parts[:-1]


def _name(analysis: FileAnalysis) -> str:
    return analysis.file_name.lower()


def _in_directory(analysis: FileAnalysis, *directories: str) -> bool:
    segments = path_segments(analysis.relative_path or analysis.file_path)
    return any(directory in segments for directory in directories)


def _named(analysis: FileAnalysis, names: tuple[str, ...], suffixes: tuple[str, ...] = ()) -> bool:
    name = _name(analysis)
    return name in names or name.endswith(suffixes)


def is_test(analysis: FileAnalysis) -> bool:
    name = _name(analysis)
    return (
        name.startswith("test_")
        or name.endswith(("_test.py", "_tests.py"))
        or name == "conftest.py"
        or _in_directory(analysis, "tests", "test")
    )


def is_view(analysis: FileAnalysis) -> bool:
    return _named(analysis, ("views.py",), ("_view.py", "_views.py")) or _in_directory(
        analysis, "views"
    )


def is_model(analysis: FileAnalysis) -> bool:
    return _named(analysis, ("models.py",), ("_model.py", "_models.py")) or _in_directory(
        analysis, "models"
    )


def is_serializer_or_form(analysis: FileAnalysis) -> bool:
    return _named(
        analysis,
        ("serializers.py", "forms.py"),
        ("_serializer.py", "_serializers.py", "_form.py", "_forms.py"),
    )


def is_routing(analysis: FileAnalysis) -> bool:
    return _named(
        analysis,
        ("urls.py", "routes.py", "routers.py", "admin.py"),
        ("_routes.py", "_urls.py"),
    )


def is_service(analysis: FileAnalysis) -> bool:
    return "service" in _name(analysis) or _in_directory(analysis, "services")


def is_repository(analysis: FileAnalysis) -> bool:
    name = _name(analysis)
    return (
        "repository" in name
        or "repositories" in name
        or name.endswith("_repo.py")
        or _in_directory(analysis, "repositories")
    )


def is_config(analysis: FileAnalysis) -> bool:
    return _name(analysis) in CONFIG_FILE_NAMES


CLASSIFICATION_RULES: tuple[tuple[FileClassification, Predicate], ...] = (
    (FileClassification.TEST, is_test),
    (FileClassification.VIEW, is_view),
    (FileClassification.MODEL, is_model),
    (FileClassification.MODEL, is_serializer_or_form),
    (FileClassification.CONTROLLER, is_routing),
    (FileClassification.SERVICE, is_service),
    (FileClassification.REPOSITORY, is_repository),
    (FileClassification.CONFIG, is_config),
)


def classify_by_base_types(analysis: FileAnalysis) -> FileClassification:
    """Classify from the base types of declared classes."""
    for code_type in analysis.types:
        if not code_type.base_type:
            continue
        base = code_type.base_type.lower()
        for hint, label in BASE_TYPE_HINTS:
            if hint in base:
                return label
    return FileClassification.UNKNOWN


def classify(analysis: FileAnalysis) -> FileClassification:
    """Assign a single role label to an analyzed file.

    Args:
        analysis: Assembled analysis (classification field is ignored)

    Returns:
        First matching rule's label, the base-type label, or UNKNOWN
    """
    for label, predicate in CLASSIFICATION_RULES:
        if predicate(analysis):
            return label
    return classify_by_base_types(analysis)
