from __future__ import annotations

"""
Pydantic schemas for the Ticket Printer HTTP API.

Request models validate the multipart form fields of /print and /preview.
Limits are applied via the validation context passed at runtime, allowing
env-driven constraints without circular imports.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

REQUIRED_FIELDS_MSG = "Title and description are required."


def _has_control_chars(s: str) -> bool:
    return any((ord(c) < 32 and c not in "\n\r\t") or ord(c) == 127 for c in s)


class TicketRequest(BaseModel):
    """A ticket to render: title, free text and an optional target printer."""

    title: str = Field(default="", description="Ticket heading", examples=["Table 4"])
    description: str = Field(default="", description="Ticket body; newlines are kept", examples=["2x coffee\n1x toast"])
    printer: Optional[str] = Field(
        default=None,
        description="Printer name; empty uses the system default",
        examples=["EPSON TM-T20", None],
    )

    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip(cls, v: Optional[str]) -> str:
        return str(v or "").strip()

    @field_validator("title")
    @classmethod
    def _title_rules(cls, v: str, info: ValidationInfo) -> str:
        limits = (info.context or {}).get("limits", {})
        max_len = int(limits.get("MAX_TITLE_LEN", 200))
        if len(v) > max_len:
            raise ValueError(f"title too long (max {max_len})")
        if _has_control_chars(v):
            raise ValueError("control characters not allowed")
        return v

    @field_validator("description")
    @classmethod
    def _description_rules(cls, v: str, info: ValidationInfo) -> str:
        limits = (info.context or {}).get("limits", {})
        max_len = int(limits.get("MAX_DESCRIPTION_LEN", 5000))
        if len(v) > max_len:
            raise ValueError(f"description too long (max {max_len})")
        if _has_control_chars(v):
            raise ValueError("control characters not allowed")
        return v

    @field_validator("printer", mode="before")
    @classmethod
    def _printer_norm(cls, v: Optional[str]) -> Optional[str]:
        v = str(v or "").strip()
        return v or None

    @model_validator(mode="after")
    def _require_text(self) -> "TicketRequest":
        if not self.title or not self.description:
            raise ValueError(REQUIRED_FIELDS_MSG)
        return self


class PrintersResponse(BaseModel):
    ok: bool = True
    printers: List[str] = Field(default_factory=list, description="Installed printer names, in discovery order")
    defaultPrinter: Optional[str] = Field(default=None, description="System default printer, if known")


class PrintAcceptedResponse(BaseModel):
    ok: bool = True
    message: str = "Ticket sent to printer."


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str


def first_error_message(exc: Exception) -> str:
    """Concise message from a pydantic ValidationError (first error only)."""
    try:
        msg = str(exc.errors()[0].get("msg") or exc)  # type: ignore[attr-defined]
    except Exception:
        return str(exc)
    # pydantic prefixes messages raised from validators
    return msg.removeprefix("Value error, ")


__all__ = [
    "ErrorResponse",
    "PrintAcceptedResponse",
    "PrintersResponse",
    "REQUIRED_FIELDS_MSG",
    "TicketRequest",
    "first_error_message",
]
