from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any

from scmasterdata.app.entity_models import ENTITY_ITEM_TYPE, normalize_entity_kind

_APP_SETTINGS_DIRNAME = "scmasterdata"
_DARK_MODE_KEY = "darkMode"
_LAST_ENTITY_KIND_KEY = "lastEntityKind"
_DRAWER_WIDTH_KEY = "drawerWidth"
DEFAULT_DRAWER_WIDTH = 320
MIN_DRAWER_WIDTH = 280
MAX_DRAWER_WIDTH = 640
LOG_LEVEL_ENV = "SCMASTERDATA_LOG_LEVEL"
SETTINGS_PATH_ENV = "SCMASTERDATA_SETTINGS_PATH"


def _app_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[3]


def _resolve_settings_path() -> Path:
    env = os.environ
    override = str(env.get(SETTINGS_PATH_ENV, "") or "").strip()
    if override:
        return Path(override).expanduser()
    if os.name == "nt":
        appdata = str(env.get("APPDATA", "") or "").strip()
        if appdata:
            return Path(appdata) / _APP_SETTINGS_DIRNAME / "config" / "settings.json"
        localappdata = str(env.get("LOCALAPPDATA", "") or "").strip()
        if localappdata:
            return Path(localappdata) / _APP_SETTINGS_DIRNAME / "config" / "settings.json"
    else:
        xdg_config_home = str(env.get("XDG_CONFIG_HOME", "") or "").strip()
        if xdg_config_home:
            return Path(xdg_config_home) / _APP_SETTINGS_DIRNAME / "settings.json"
        home = str(env.get("HOME", "") or "").strip()
        if home:
            return Path(home) / ".config" / _APP_SETTINGS_DIRNAME / "settings.json"

    return _app_root() / "config" / "settings.json"


def settings_path() -> Path:
    return _resolve_settings_path()


def load_settings() -> dict[str, Any]:
    path = settings_path()
    if not path.exists():
        return {}
    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
    except Exception:
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def save_settings(settings: dict[str, Any]) -> None:
    path = settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2), encoding="utf-8")


def load_dark_mode(default: bool = False) -> bool:
    settings = load_settings()
    value = settings.get(_DARK_MODE_KEY, default)
    if isinstance(value, bool):
        return value
    return bool(default)


def save_dark_mode(enabled: bool) -> None:
    settings = load_settings()
    settings[_DARK_MODE_KEY] = bool(enabled)
    save_settings(settings)


def load_last_entity_kind(default: str = ENTITY_ITEM_TYPE) -> str:
    settings = load_settings()
    value = settings.get(_LAST_ENTITY_KIND_KEY)
    if not isinstance(value, str) or not value.strip():
        return default
    try:
        return normalize_entity_kind(value)
    except KeyError:
        return default


def save_last_entity_kind(entity_kind: str) -> str:
    resolved = normalize_entity_kind(entity_kind)
    settings = load_settings()
    settings[_LAST_ENTITY_KIND_KEY] = resolved
    save_settings(settings)
    return resolved


def normalize_drawer_width(value: Any, *, default: int = DEFAULT_DRAWER_WIDTH) -> int:
    try:
        parsed = int(value)
    except Exception:
        parsed = int(default)
    return max(MIN_DRAWER_WIDTH, min(MAX_DRAWER_WIDTH, parsed))


def load_drawer_width(default: int = DEFAULT_DRAWER_WIDTH) -> int:
    settings = load_settings()
    return normalize_drawer_width(settings.get(_DRAWER_WIDTH_KEY, default), default=default)


def save_drawer_width(value: Any) -> int:
    resolved = normalize_drawer_width(value)
    settings = load_settings()
    settings[_DRAWER_WIDTH_KEY] = resolved
    save_settings(settings)
    return resolved


def load_log_level(default: str = "WARNING") -> str:
    value = str(os.getenv(LOG_LEVEL_ENV, "") or "").strip().upper()
    if value in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
        return value
    return default
