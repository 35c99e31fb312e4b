"""
Config utilities for Ticket Printer.

Responsibilities:
- Resolve config/media paths with environment and XDG support
- Provide JSON load/save helpers for the app's config
- Merge the saved config over built-in defaults (page geometry, image threshold,
  discovery command overrides)
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

# Built-in settings. A saved config.json only needs the keys it overrides.
DEFAULT_SETTINGS: Dict[str, Any] = {
    # Suppress console windows for shell fallbacks on Windows
    "windows_hide": True,
    # Thermal binarization threshold on a 0-255 scale
    "image_threshold": 180,
    # 80mm roll: 226pt wide, tall enough to avoid cuts
    "page_width": 226,
    "page_height": 800,
    "page_margin": 12,
    "image_width_ratio": 0.35,
    # Per-strategy shell command overrides; None disables a strategy
    "list_commands": {},
    "default_commands": {},
}


def default_config_path() -> str:
    """
    Resolve the default config path using:
    1) $XDG_CONFIG_HOME/ticketprinter/config.json
    2) ~/.config/ticketprinter/config.json
    """
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return str(Path(xdg) / "ticketprinter" / "config.json")
    return str(Path.home() / ".config" / "ticketprinter" / "config.json")


def default_media_path() -> str:
    """
    Resolve the default media path using:
    1) $XDG_DATA_HOME/ticketprinter/media
    2) ~/.local/share/ticketprinter/media
    """
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return str(Path(xdg) / "ticketprinter" / "media")
    return str(Path.home() / ".local" / "share" / "ticketprinter" / "media")


def get_config_path() -> str:
    """
    Return the config path honoring TICKETPRINTER_CONFIG_PATH override.
    """
    return os.environ.get("TICKETPRINTER_CONFIG_PATH", default_config_path())


def get_media_path() -> str:
    """
    Return the media path honoring TICKETPRINTER_MEDIA_PATH override.
    """
    return os.environ.get("TICKETPRINTER_MEDIA_PATH", default_media_path())


def ensure_dir(path: str) -> str:
    """
    Ensure a directory exists and return the path.
    """
    Path(path).mkdir(parents=True, exist_ok=True)
    return path


def get_upload_dir() -> str:
    """Directory for uploaded ticket images."""
    return ensure_dir(str(Path(get_media_path()) / "uploads"))


def get_tmp_dir() -> str:
    """Directory for rendered PDFs waiting to be spooled."""
    return ensure_dir(str(Path(get_media_path()) / "tmp"))


def load_config(path: Optional[str] = None) -> Optional[dict[str, Any]]:
    """
    Load the JSON config if it exists; return None if missing.

    The path is resolved at call time so TICKETPRINTER_CONFIG_PATH changes
    (e.g. in tests) are honored.

    Raises:
        json.JSONDecodeError if the file exists but contains invalid JSON.
        OSError for I/O errors other than missing file.
    """
    cfg_path = Path(path or get_config_path())
    if not cfg_path.exists():
        return None
    with cfg_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def save_config(data: dict[str, Any], path: Optional[str] = None) -> None:
    """
    Save the JSON config, creating parent directories as needed.

    Writes atomically by using a temporary file and os.replace().
    Raises OSError on I/O failures.
    """
    cfg_path = Path(path or get_config_path())
    cfg_dir = cfg_path.parent
    cfg_dir.mkdir(parents=True, exist_ok=True)

    tmp_path = cfg_path.with_suffix(cfg_path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp_path, cfg_path)


def get_settings(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Return DEFAULT_SETTINGS overlaid with the saved config.

    A missing or unreadable config yields the defaults; settings are never
    required for the service to start.
    """
    settings = dict(DEFAULT_SETTINGS)
    try:
        saved = load_config(path)
    except (OSError, ValueError):
        saved = None
    if saved:
        settings.update(saved)
    return settings


__all__ = [
    "DEFAULT_SETTINGS",
    "default_config_path",
    "default_media_path",
    "ensure_dir",
    "get_config_path",
    "get_media_path",
    "get_settings",
    "get_tmp_dir",
    "get_upload_dir",
    "load_config",
    "save_config",
]
