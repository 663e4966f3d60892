"""Theme and settings, optionally read from a YAML file."""

import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from .errors import ConfigError
from .models import DEFAULT_CONFIG, DEFAULT_DIR, DEFAULT_LOG

COLOR_NAMES = ("default", "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")


@dataclass
class Theme:
    """Colors (curses color names) and glyphs used by the renderer."""

    primary_metadata_color: str = "blue"
    secondary_metadata_color: str = "green"
    cursor_char: str = "|"
    cursor_color: str = "white"
    tab_inactive_color: str = "green"
    tab_active_color: str = "blue"
    done_color: str = "green"
    not_done_color: str = "red"
    done_mark: str = "✓"
    not_done_mark: str = "✕"


@dataclass
class Settings:
    notes_dir: str = DEFAULT_DIR
    tick_rate: float = 0.25
    log_file: str = DEFAULT_LOG
    log_level: str = "INFO"
    theme: Theme = field(default_factory=Theme)


def _apply(target: Any, data: Dict[str, Any], section: str) -> None:
    known = {f.name for f in fields(target)}
    for key, value in data.items():
        if key == "theme" and section == "settings":
            continue
        if key not in known:
            logger.warning("Ignoring unknown {} key: {}", section, key)
            continue
        setattr(target, key, value)


def _validate(theme: Theme) -> None:
    for f in fields(theme):
        if f.name.endswith("_color") and getattr(theme, f.name) not in COLOR_NAMES:
            raise ConfigError(
                f"theme.{f.name}: {getattr(theme, f.name)!r} is not one of {', '.join(COLOR_NAMES)}"
            )
    for name in ("cursor_char", "done_mark", "not_done_mark"):
        if not isinstance(getattr(theme, name), str) or not getattr(theme, name):
            raise ConfigError(f"theme.{name} must be a non-empty string")


def load_settings(path: Optional[str] = None) -> Settings:
    """Read settings from YAML; a missing file gives the defaults."""
    path = os.path.expanduser(path or DEFAULT_CONFIG)
    settings = Settings()
    if not os.path.exists(path):
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    if data is None:
        return settings
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    theme_data = data.get("theme") or {}
    if not isinstance(theme_data, dict):
        raise ConfigError(f"{path}: 'theme' must be a mapping")
    _apply(settings, data, "settings")
    _apply(settings.theme, theme_data, "theme")
    _validate(settings.theme)
    try:
        settings.tick_rate = float(settings.tick_rate)
    except (TypeError, ValueError):
        raise ConfigError(f"{path}: tick_rate must be a number") from None
    if settings.tick_rate <= 0:
        raise ConfigError(f"{path}: tick_rate must be greater than 0")
    settings.notes_dir = os.path.expanduser(str(settings.notes_dir))
    settings.log_file = os.path.expanduser(str(settings.log_file))
    logger.debug("Loaded settings from {}", path)
    return settings
