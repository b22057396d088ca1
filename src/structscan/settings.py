"""Workspace settings — persisted per workspace in .structscan/settings.json.

The store keeps the settings of the currently loaded workspace, saves them
back, and notifies subscribers after every successful save.
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

SETTINGS_DIR = ".structscan"
SETTINGS_FILE = "settings.json"

SettingsListener = Callable[["WorkspaceSettings"], None]


class WorkspaceSettings(BaseModel):
    """Per-workspace settings. Paths are relative to the workspace root."""

    version: str = "1.0"
    output_dir: str = SETTINGS_DIR
    index_file: str = "INDEX.md"
    cache_file: str = "analysis.json"
    log_file: str | None = None
    log_level: str = Field(default="WARNING", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    model_config = ConfigDict(frozen=True, extra="forbid")

    def index_path(self, workspace: Path) -> Path:
        return workspace / self.output_dir / self.index_file

    def cache_path(self, workspace: Path) -> Path:
        return workspace / self.output_dir / self.cache_file


def settings_path(workspace: Path) -> Path:
    return workspace / SETTINGS_DIR / SETTINGS_FILE


def load_settings(workspace: Path) -> WorkspaceSettings:
    """Load settings for ``workspace``.

    Returns defaults if the file doesn't exist, is corrupt, or fails validation.
    """
    path = settings_path(workspace)
    if not path.exists():
        return WorkspaceSettings()

    try:
        return WorkspaceSettings.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError, OSError) as e:
        logger.warning("Ignoring unreadable settings at %s: %s", path, e)
        return WorkspaceSettings()


def save_settings(settings: WorkspaceSettings, workspace: Path) -> Path:
    """Write settings to .structscan/settings.json, creating the directory."""
    path = settings_path(workspace)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(settings.model_dump_json(indent=2), encoding="utf-8")
    return path


class SettingsStore:
    """Settings of the currently loaded workspace, with change notification."""

    def __init__(self) -> None:
        self.workspace: Path | None = None
        self.current = WorkspaceSettings()
        self._listeners: list[SettingsListener] = []

    @property
    def has_workspace(self) -> bool:
        return self.workspace is not None

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it.

        The returned function may be called more than once.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load(self, workspace: Path | None) -> WorkspaceSettings:
        """Load settings for ``workspace`` (defaults when None)."""
        if workspace is None:
            self.workspace = None
            self.current = WorkspaceSettings()
            return self.current

        self.workspace = workspace
        self.current = load_settings(workspace)
        logger.debug("Settings loaded for workspace %s", workspace)
        return self.current

    def reload(self) -> WorkspaceSettings:
        """Re-read settings from disk (after external edits)."""
        if self.workspace is not None:
            self.current = load_settings(self.workspace)
        return self.current

    def save(self) -> bool:
        """Save current settings; notify subscribers on success.

        Returns:
            False when no workspace is loaded
        """
        if self.workspace is None:
            logger.debug("Not saving settings: no workspace loaded")
            return False

        save_settings(self.current, self.workspace)
        for listener in list(self._listeners):
            listener(self.current)
        return True

    def update(self, **changes: object) -> bool:
        """Apply ``changes`` (validated) and save."""
        self.current = WorkspaceSettings.model_validate(self.current.model_dump() | changes)
        return self.save()

    def reset_to_defaults(self) -> bool:
        self.current = WorkspaceSettings()
        return self.save()
