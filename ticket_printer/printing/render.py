"""
Ticket rendering to PDF for 80mm thermal rolls.

Layout (points):
- 226 x 800 page, 12pt margins on every side
- Title: Helvetica-Bold 18, centered
- Description: Helvetica 12, left aligned
- Optional monochrome image at 35% of the content width, centered
- A dashed separator in Helvetica 10 closes the ticket
"""

from __future__ import annotations

import io
import logging
from collections.abc import Mapping
from typing import Any, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Flowable, Image, Paragraph, SimpleDocTemplate, Spacer
from reportlab.platypus.doctemplate import LayoutError

from ticket_printer.core.config import DEFAULT_SETTINGS

logger = logging.getLogger(__name__)

SEPARATOR = "------------------------------"
FRAME_PADDING = 6

TITLE_STYLE = ParagraphStyle("TicketTitle", fontName="Helvetica-Bold", fontSize=18, leading=21.6, alignment=TA_CENTER)
BODY_STYLE = ParagraphStyle("TicketBody", fontName="Helvetica", fontSize=12, leading=14.4, alignment=TA_LEFT)
SEPARATOR_STYLE = ParagraphStyle("TicketSeparator", fontName="Helvetica", fontSize=10, leading=12, alignment=TA_CENTER)


def _setting(config: Optional[Mapping[str, Any]], key: str) -> Any:
    if config and config.get(key) is not None:
        return config[key]
    return DEFAULT_SETTINGS[key]


def _markup(text: str) -> str:
    # Paragraph takes a mini-markup; keep user text literal and its line breaks.
    return escape(text).replace("\r\n", "\n").replace("\n", "<br/>")


def _half_line(style: ParagraphStyle) -> Spacer:
    return Spacer(1, style.leading * 0.5)


def _image_flowable(data: bytes, width: float, max_height: float) -> Image:
    iw, ih = ImageReader(io.BytesIO(data)).getSize()
    height = width * (ih / float(iw)) if iw else width
    if height > max_height:
        # Tall images shrink as a whole so they still fit on one page.
        width, height = width * (max_height / height), max_height
    img = Image(io.BytesIO(data), width=width, height=height)
    img.hAlign = "CENTER"
    return img


def build_story(
    title: str,
    description: str,
    image: Optional[bytes] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> List[Flowable]:
    """Flowables for one ticket; an image that cannot be laid out is skipped."""
    width = float(_setting(config, "page_width"))
    height = float(_setting(config, "page_height"))
    margin = float(_setting(config, "page_margin"))
    content_width = width - 2 * margin
    # Frames keep 6pt of padding on each side inside the margins.
    max_image_height = height - 2 * margin - 2 * FRAME_PADDING

    story: List[Flowable] = [
        Paragraph(_markup(title), TITLE_STYLE),
        _half_line(TITLE_STYLE),
        Paragraph(_markup(description), BODY_STYLE),
        _half_line(BODY_STYLE),
    ]

    if image:
        try:
            ratio = float(_setting(config, "image_width_ratio"))
            story.append(_image_flowable(image, round(content_width * ratio), max_image_height))
            story.append(_half_line(BODY_STYLE))
        except Exception as e:
            logger.warning("Could not place image in ticket: %s", e)

    story.append(_half_line(BODY_STYLE))
    story.append(Paragraph(SEPARATOR, SEPARATOR_STYLE))
    return story


def render_ticket_pdf(
    title: str,
    description: str,
    image: Optional[bytes] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> bytes:
    """
    Render a ticket and return the PDF bytes.

    Args:
        title: Ticket heading.
        description: Free text body; newlines are kept.
        image: Optional PNG bytes (already prepared for thermal output).
        config: Settings mapping; page geometry falls back to DEFAULT_SETTINGS.
    """
    width = float(_setting(config, "page_width"))
    height = float(_setting(config, "page_height"))
    margin = float(_setting(config, "page_margin"))

    def _build(img: Optional[bytes]) -> bytes:
        buf = io.BytesIO()
        doc = SimpleDocTemplate(
            buf,
            pagesize=(width, height),
            leftMargin=margin,
            rightMargin=margin,
            topMargin=margin,
            bottomMargin=margin,
            title=title,
            creator="Ticket Printer",
        )
        doc.build(build_story(title, description, img, config))
        return buf.getvalue()

    if not image:
        return _build(None)
    try:
        return _build(image)
    except LayoutError as e:
        logger.warning("Image does not fit the ticket page, printing without it: %s", e)
        return _build(None)


def render_ticket_to_file(
    path: str,
    title: str,
    description: str,
    image: Optional[bytes] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> str:
    """Render a ticket into ``path`` and return the path."""
    data = render_ticket_pdf(title, description, image, config)
    with open(path, "wb") as f:
        f.write(data)
    logger.info("Rendered ticket PDF %s (%d bytes)", path, len(data))
    return path


__all__ = ["SEPARATOR", "build_story", "render_ticket_pdf", "render_ticket_to_file"]
