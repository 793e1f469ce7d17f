"""Per-format text extraction.

Handlers are tried in registration order and the first one that accepts a
MIME type wins, so the order below is part of the behaviour.
"""
from __future__ import annotations

from typing import Sequence

from .base import FileHandler
from .docx import DocxHandler
from .image import ImageHandler
from .pdf import PdfHandler
from .text import TextHandler, extract_text_content
from .xlsx import XlsxHandler


def default_handlers() -> list[FileHandler]:
    return [
        DocxHandler(),
        ImageHandler(),
        PdfHandler(),
        TextHandler(),
        XlsxHandler(),
    ]


def find_handler(mime_type: str, handlers: Sequence[FileHandler]) -> FileHandler | None:
    for handler in handlers:
        if handler.can_handle(mime_type):
            return handler
    return None


__all__ = [
    "DocxHandler",
    "FileHandler",
    "ImageHandler",
    "PdfHandler",
    "TextHandler",
    "XlsxHandler",
    "default_handlers",
    "extract_text_content",
    "find_handler",
]
