"""Tests for workspace settings — load/save and change notification."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from structscan.settings import (
    SettingsStore,
    WorkspaceSettings,
    load_settings,
    save_settings,
    settings_path,
)

# ===== WorkspaceSettings =====


def test_defaults() -> None:
    settings = WorkspaceSettings()
    assert settings.version == "1.0"
    assert settings.output_dir == ".structscan"
    assert settings.index_file == "INDEX.md"
    assert settings.log_file is None


def test_output_paths(tmp_path: Path) -> None:
    settings = WorkspaceSettings(output_dir="out")
    assert settings.index_path(tmp_path) == tmp_path / "out" / "INDEX.md"
    assert settings.cache_path(tmp_path) == tmp_path / "out" / "analysis.json"


def test_settings_are_frozen() -> None:
    settings = WorkspaceSettings()
    with pytest.raises(ValidationError):
        settings.output_dir = "elsewhere"  # type: ignore[misc]


def test_invalid_log_level_rejected() -> None:
    with pytest.raises(ValidationError):
        WorkspaceSettings(log_level="LOUD")


# ===== load/save =====


def test_load_missing_returns_defaults(tmp_path: Path) -> None:
    assert load_settings(tmp_path) == WorkspaceSettings()


def test_save_then_load(tmp_path: Path) -> None:
    path = save_settings(WorkspaceSettings(index_file="MAP.md"), tmp_path)

    assert path == settings_path(tmp_path)
    assert json.loads(path.read_text())["index_file"] == "MAP.md"
    assert load_settings(tmp_path).index_file == "MAP.md"


def test_load_corrupt_returns_defaults(tmp_path: Path) -> None:
    settings_path(tmp_path).parent.mkdir()
    settings_path(tmp_path).write_text("{not json")

    assert load_settings(tmp_path) == WorkspaceSettings()


def test_load_invalid_values_returns_defaults(tmp_path: Path) -> None:
    settings_path(tmp_path).parent.mkdir()
    settings_path(tmp_path).write_text(json.dumps({"log_level": "LOUD"}))

    assert load_settings(tmp_path) == WorkspaceSettings()


def test_load_unknown_key_returns_defaults(tmp_path: Path) -> None:
    settings_path(tmp_path).parent.mkdir()
    settings_path(tmp_path).write_text(json.dumps({"index_fiel": "MAP.md"}))

    assert load_settings(tmp_path) == WorkspaceSettings()


# ===== SettingsStore =====


class TestSettingsStore:
    def test_starts_without_workspace(self):
        store = SettingsStore()
        assert store.has_workspace is False
        assert store.current == WorkspaceSettings()
        assert store.save() is False

    def test_load_workspace(self, tmp_path: Path):
        save_settings(WorkspaceSettings(output_dir="docs"), tmp_path)
        store = SettingsStore()

        settings = store.load(tmp_path)

        assert store.has_workspace is True
        assert settings.output_dir == "docs"

    def test_load_none_resets(self, tmp_path: Path):
        store = SettingsStore()
        store.load(tmp_path)
        store.load(None)
        assert store.has_workspace is False

    def test_update_saves_and_notifies(self, tmp_path: Path):
        store = SettingsStore()
        store.load(tmp_path)
        seen: list[WorkspaceSettings] = []
        store.subscribe(seen.append)

        assert store.update(index_file="MAP.md") is True

        assert [s.index_file for s in seen] == ["MAP.md"]
        assert load_settings(tmp_path).index_file == "MAP.md"

    def test_update_validates(self, tmp_path: Path):
        store = SettingsStore()
        store.load(tmp_path)
        with pytest.raises(ValidationError):
            store.update(log_level="LOUD")

    def test_unsubscribe(self, tmp_path: Path):
        store = SettingsStore()
        store.load(tmp_path)
        seen: list[WorkspaceSettings] = []
        unsubscribe = store.subscribe(seen.append)

        unsubscribe()
        store.save()

        assert seen == []

    def test_no_notification_without_workspace(self):
        store = SettingsStore()
        seen: list[WorkspaceSettings] = []
        store.subscribe(seen.append)

        store.update(index_file="MAP.md")

        assert seen == []

    def test_reload_picks_up_external_edits(self, tmp_path: Path):
        store = SettingsStore()
        store.load(tmp_path)
        save_settings(WorkspaceSettings(cache_file="cache.json"), tmp_path)

        assert store.reload().cache_file == "cache.json"

    def test_reset_to_defaults(self, tmp_path: Path):
        store = SettingsStore()
        store.load(tmp_path)
        store.update(output_dir="custom")

        assert store.reset_to_defaults() is True
        assert load_settings(tmp_path) == WorkspaceSettings()

    def test_unsubscribe_twice_is_harmless(self, tmp_path: Path):
        store = SettingsStore()
        store.load(tmp_path)
        seen: list[WorkspaceSettings] = []
        unsubscribe = store.subscribe(seen.append)

        unsubscribe()
        unsubscribe()
        store.save()

        assert seen == []

    def test_update_rejects_unknown_setting(self, tmp_path: Path):
        store = SettingsStore()
        store.load(tmp_path)
        seen: list[WorkspaceSettings] = []
        store.subscribe(seen.append)

        with pytest.raises(ValidationError):
            store.update(index_fiel="MAP.md")

        assert seen == []
        assert store.current == WorkspaceSettings()
        assert not settings_path(tmp_path).exists()
