"""
Image preparation for thermal output.

Thermal heads only print black or white, so uploaded images are converted to
grayscale and binarized before they are placed in the ticket.
"""

from __future__ import annotations

import io
import logging
from typing import Optional

from PIL import Image, ImageOps

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 180


def _to_png(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def binarize(img: Image.Image, threshold: int = DEFAULT_THRESHOLD) -> Image.Image:
    """Grayscale + threshold: pixels >= threshold become white, the rest black."""
    gray = ImageOps.exif_transpose(img).convert("L")
    return gray.point(lambda v: 255 if v >= threshold else 0)


def prepare_thermal_image(path: str, threshold: int = DEFAULT_THRESHOLD) -> Optional[bytes]:
    """
    Return PNG bytes of the thresholded image at ``path``.

    Falls back to the unmodified image re-encoded as PNG when thresholding
    fails, and to None when the file cannot be read at all.
    """
    try:
        with Image.open(path) as img:
            return _to_png(binarize(img, threshold))
    except Exception as e:
        logger.warning("Could not transform image %s, using original: %s", path, e)

    try:
        with Image.open(path) as img:
            img.load()
            if img.mode not in ("1", "L", "LA", "P", "RGB", "RGBA"):
                img = img.convert("RGB")
            return _to_png(img)
    except Exception as e:
        logger.warning("Could not read image %s: %s", path, e)
        return None


__all__ = ["DEFAULT_THRESHOLD", "binarize", "prepare_thermal_image"]
