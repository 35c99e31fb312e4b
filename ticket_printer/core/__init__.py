"""
Core utilities for Ticket Printer.

This package groups non-Flask helpers used across the app:
- config: paths, JSON load/save, settings defaults
- logging: Request ID aware logging filters/formatters and root logger config
- assets: upload validation, storage and temp-file cleanup

Exports are explicit to keep static analyzers (e.g., Pyright) happy.
"""

from .assets import (
    IMAGE_EXTS,
    is_supported_image,
    remove_quietly,
    save_upload,
    temp_pdf_path,
    unique_name,
)
from .config import (
    DEFAULT_SETTINGS,
    default_config_path,
    ensure_dir,
    get_config_path,
    get_media_path,
    get_settings,
    get_tmp_dir,
    get_upload_dir,
    load_config,
    save_config,
)
from .logging import (
    JsonFormatter,
    RequestIdFilter,
    configure_logging,
)

__all__ = [
    # config
    "DEFAULT_SETTINGS",
    "default_config_path",
    "ensure_dir",
    "get_config_path",
    "get_media_path",
    "get_settings",
    "get_tmp_dir",
    "get_upload_dir",
    "load_config",
    "save_config",
    # logging
    "configure_logging",
    "RequestIdFilter",
    "JsonFormatter",
    # assets
    "IMAGE_EXTS",
    "is_supported_image",
    "remove_quietly",
    "save_upload",
    "temp_pdf_path",
    "unique_name",
]
