"""
Upload helpers for Ticket Printer.

Responsibilities:
- Supported image extensions for ticket uploads
- Store an uploaded file under the media directory with a unique name
- Remove temporary files without failing the request

These functions are intentionally independent of Flask so they can be used
from both web and MCP contexts.
"""

from __future__ import annotations

import logging
import os
import time
import uuid
from pathlib import Path
from typing import List, Optional

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ticket_printer.core.config import get_tmp_dir, get_upload_dir

logger = logging.getLogger(__name__)

IMAGE_EXTS: List[str] = [".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp"]


def is_supported_image(filename: str) -> bool:
    """
    True if the filename has a supported image extension.
    """
    ext = os.path.splitext(filename)[1].lower()
    return ext in IMAGE_EXTS


def unique_name(prefix: str, ext: str) -> str:
    """``<prefix>-<millis>-<uuid><ext>``; concurrent requests never share a name."""
    return f"{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex}{ext}"


def temp_pdf_path(prefix: str = "ticket") -> str:
    """A fresh path for a rendered PDF under the media tmp directory."""
    return os.path.join(get_tmp_dir(), unique_name(prefix, ".pdf"))


def save_upload(upload: FileStorage, directory: Optional[str] = None) -> str:
    """
    Save an uploaded image as ``image-<millis>-<uuid><ext>`` and return its path.

    Files without an extension are stored as ``.png``.
    """
    target_dir = Path(directory or get_upload_dir())
    target_dir.mkdir(parents=True, exist_ok=True)
    ext = os.path.splitext(secure_filename(upload.filename or ""))[1].lower() or ".png"
    path = target_dir / unique_name("image", ext)
    upload.save(str(path))
    return str(path)


def remove_quietly(path: Optional[str]) -> None:
    """Delete a temporary file, logging (not raising) on failure."""
    if not path:
        return
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.debug("Could not remove temp file %s: %s", path, e)


__all__ = ["IMAGE_EXTS", "is_supported_image", "remove_quietly", "save_upload", "temp_pdf_path", "unique_name"]
