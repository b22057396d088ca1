"""Tests for analysis.index — project index rendering and cache."""

import json
from datetime import UTC, datetime
from pathlib import Path

from structscan.analysis.analyzer import analyze_source
from structscan.analysis.index import (
    dependency_map,
    key_members,
    render_index,
    save_cache,
    save_index,
    type_hierarchy,
)
from structscan.analysis.models import ProjectAnalysis, SkippedFile


def _project(skipped: list[SkippedFile] | None = None) -> ProjectAnalysis:
    service = analyze_source(
        "/repo/app/user_service.py",
        "/repo",
        "import logging\n\n\nclass UserService(Base, Mixin):\n"
        "    def create(self):\n        pass\n\n    def _hidden(self):\n        pass\n",
    )
    models = analyze_source(
        "/repo/app/models.py",
        "/repo",
        "class User(Model):\n    pass\n\n\ndef helper():\n    pass\n",
    )
    return ProjectAnalysis(
        root="/repo",
        files=[service.analysis, models.analysis],
        call_sites=service.call_sites + models.call_sites,
        skipped=skipped or [],
        analyzed_at=datetime(2025, 3, 1, 9, 30, tzinfo=UTC),
    )


class TestIndexParts:
    def test_type_hierarchy_excludes_module_containers(self):
        assert type_hierarchy(_project()) == {
            "UserService": ["Base", "Mixin"],
            "User": ["Model"],
        }

    def test_dependency_map_skips_files_without_imports(self):
        assert dependency_map(_project()) == {"app/user_service.py": ["logging"]}

    def test_key_members_public_only(self):
        service = _project().files[0]
        assert key_members(service) == "create"

    def test_key_members_capped(self):
        source = "".join(f"def f{i}():\n    pass\n" for i in range(7))
        analysis = analyze_source("/r/many.py", "/r", source).analysis
        assert key_members(analysis) == "f0, f1, f2, f3, f4, ..."


class TestRenderIndex:
    def test_sections(self):
        text = render_index(_project())

        assert text.startswith("# repo\n")
        assert "Generated: 2025-03-01 09:30 UTC" in text
        assert "Files: 2" in text
        assert "## Type hierarchy" in text
        assert "- UserService : Base, Mixin" in text
        assert "## Dependency map" in text
        assert "- app/user_service.py → logging" in text
        assert "| app/models.py | model | User | helper |" in text
        assert "| app/user_service.py | service | UserService | create |" in text
        assert "## Skipped" not in text

    def test_skipped_section(self):
        text = render_index(_project([SkippedFile(path="/repo/bad.py", error="not valid UTF-8")]))
        assert "## Skipped" in text
        assert "- /repo/bad.py: not valid UTF-8" in text

    def test_custom_title(self):
        assert render_index(_project(), title="Demo").startswith("# Demo\n")


class TestSave:
    def test_save_index(self, tmp_path: Path):
        path = save_index(_project(), tmp_path / "out" / "INDEX.md")
        assert path.read_text(encoding="utf-8").startswith("# repo")

    def test_save_cache_is_json(self, tmp_path: Path):
        path = save_cache(_project(), tmp_path / "out" / "analysis.json")
        data = json.loads(path.read_text(encoding="utf-8"))

        assert data["root"] == "/repo"
        assert len(data["files"]) == 2
        assert data["files"][0]["classification"] == "service"
        assert "body" not in data["files"][0]["types"][0]["members"][0]
