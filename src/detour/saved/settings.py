"""Hierarchical list settings with JSON persistence.

Precedence: CLI overrides > project settings > global settings. Only fields
modified in this session are written back, so external edits to the global
file survive.
"""

from __future__ import annotations

import json
import os
from copy import deepcopy
from pathlib import Path
from typing import Any

CONFIG_DIR_NAME = ".detour"

DEFAULT_ITEM_HEIGHT = 2
DEFAULT_OVERSCAN_ITEMS = 2
DEFAULT_VIEWPORT_HEIGHT = 10
STORE_FILE_NAME = "saved_detours.json"


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    Nested dicts merge; any other override value replaces the base value.
    ``None`` overrides are skipped.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


class SettingsManager:
    """Manages list geometry and storage settings.

    Use ``create`` or ``in_memory`` rather than the constructor.
    """

    def __init__(
        self,
        *,
        config_dir: str | None,
        settings_path: str | None,
        project_settings_path: str | None,
        initial_settings: dict[str, Any],
        persist: bool = True,
        load_error: Exception | None = None,
    ) -> None:
        self._config_dir = config_dir
        self._settings_path = settings_path
        self._project_settings_path = project_settings_path
        self._global_settings = dict(initial_settings)
        self._persist = persist
        self._load_error = load_error
        self._modified_fields: set[str] = set()
        self._overrides: dict[str, Any] = {}
        self._remerge()

    # --- Factory methods ---

    @classmethod
    def create(cls, cwd: str, config_dir: str | None = None) -> SettingsManager:
        """Create a settings manager backed by the global and project files."""
        cdir = config_dir or default_config_dir()
        settings_path = os.path.join(cdir, "settings.json")
        settings, error = _load_from_file(settings_path)
        return cls(
            config_dir=cdir,
            settings_path=settings_path,
            project_settings_path=os.path.join(cwd, CONFIG_DIR_NAME, "settings.json"),
            initial_settings=settings,
            persist=True,
            load_error=error,
        )

    @classmethod
    def in_memory(cls, settings: dict[str, Any] | None = None) -> SettingsManager:
        """Create an in-memory settings manager for testing."""
        return cls(
            config_dir=None,
            settings_path=None,
            project_settings_path=None,
            initial_settings=settings or {},
            persist=False,
        )

    # --- Core operations ---

    @property
    def settings(self) -> dict[str, Any]:
        """Current merged settings (read-only view)."""
        return self._settings

    @property
    def load_error(self) -> Exception | None:
        return self._load_error

    def get_global_settings(self) -> dict[str, Any]:
        return deepcopy(self._global_settings)

    def apply_overrides(self, overrides: dict[str, Any]) -> None:
        """Apply CLI-level overrides on top of merged settings."""
        self._overrides = deep_merge_settings(self._overrides, overrides)
        self._settings = deep_merge_settings(self._settings, overrides)

    def reload(self) -> None:
        if self._settings_path:
            self._global_settings, self._load_error = _load_from_file(self._settings_path)
        self._modified_fields.clear()
        self._remerge()

    # --- Getters ---

    def get_item_height(self) -> int:
        value = self._settings.get("itemHeight")
        return DEFAULT_ITEM_HEIGHT if value is None else value

    def get_overscan_items(self) -> int:
        value = self._settings.get("overscanItems")
        return DEFAULT_OVERSCAN_ITEMS if value is None else value

    def get_viewport_height(self) -> int:
        value = self._settings.get("viewportHeight")
        return DEFAULT_VIEWPORT_HEIGHT if value is None else value

    def get_store_path(self) -> str:
        path = self._settings.get("storePath")
        if path:
            return os.path.expanduser(path)
        return os.path.join(self._config_dir or default_config_dir(), STORE_FILE_NAME)

    # --- Setters ---

    def set_item_height(self, height: int) -> None:
        self._set("itemHeight", height)

    def set_overscan_items(self, count: int) -> None:
        self._set("overscanItems", count)

    def set_viewport_height(self, height: int) -> None:
        self._set("viewportHeight", height)

    def set_store_path(self, path: str) -> None:
        self._set("storePath", path)

    # --- Persistence ---

    def _set(self, field_name: str, value: Any) -> None:
        self._global_settings[field_name] = value
        self._modified_fields.add(field_name)
        self._save()

    def _save(self) -> None:
        """Write modified fields to the global file, preserving external changes."""
        # A corrupt file is left for the user to fix
        if self._persist and self._settings_path and not self._load_error:
            current_file, _ = _load_from_file(self._settings_path)
            merged = dict(current_file)
            for field_name in self._modified_fields:
                merged[field_name] = self._global_settings.get(field_name)
            merged = {k: v for k, v in merged.items() if v is not None}

            os.makedirs(os.path.dirname(self._settings_path), exist_ok=True)
            Path(self._settings_path).write_text(
                json.dumps(merged, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        self._remerge()

    def _remerge(self) -> None:
        project: dict[str, Any] = {}
        if self._project_settings_path:
            project, _ = _load_from_file(self._project_settings_path)
        merged = deep_merge_settings(self._global_settings, project)
        self._settings = deep_merge_settings(merged, self._overrides)


def _load_from_file(path: str) -> tuple[dict[str, Any], Exception | None]:
    """Load settings from a JSON file. Returns (settings, error)."""
    if not os.path.exists(path):
        return {}, None
    try:
        settings = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        return {}, e
    if not isinstance(settings, dict):
        return {}, ValueError(f"{path}: expected a JSON object")
    return settings, None


def default_config_dir() -> str:
    """Config directory: ``$DETOUR_CONFIG_DIR`` or ``~/.detour``."""
    return os.environ.get("DETOUR_CONFIG_DIR") or os.path.join(
        os.path.expanduser("~"), CONFIG_DIR_NAME
    )
