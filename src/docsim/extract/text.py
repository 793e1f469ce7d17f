from __future__ import annotations

import codecs

from charset_normalizer import from_bytes

from ..errors import ExtractionError


TEXT_LIKE_MIME_TYPES = frozenset(
    {
        "application/json",
        "application/xml",
        "application/javascript",
        "application/typescript",
        "application/x-javascript",
        "application/xhtml+xml",
        "application/ld+json",
    }
)


def is_mime_type_text(mime_type: str) -> bool:
    return mime_type.startswith("text/") or mime_type in TEXT_LIKE_MIME_TYPES


def detect_encoding(content: bytes) -> str:
    """Best guess at the charset of ``content``; utf-8 when nothing fits."""
    best = from_bytes(content).best()
    if best is None or not best.encoding:
        return "utf-8"
    return best.encoding


def extract_text_content(content: bytes, encoding: str) -> str:
    """Strict decode; unknown labels mean utf-8, any bad byte means "".

    Codecs that are not character encodings (rot13, base64, hex...) count
    as unknown labels.
    """
    try:
        info = codecs.lookup(encoding)
    except LookupError:
        info = None
    if info is not None and getattr(info, "_is_text_encoding", True):
        codec = info.name
    else:
        codec = "utf-8"
    try:
        return content.decode(codec)
    except UnicodeDecodeError:
        return ""


class TextHandler:
    """Plain text and text-shaped formats (csv, json, xml, source code...)."""

    def can_handle(self, mime_type: str) -> bool:
        return is_mime_type_text(mime_type)

    def extract_text(self, content: bytes, filename: str, mime_type: str) -> str:
        if not content:
            return ""
        text = extract_text_content(content, detect_encoding(content))
        if not text:
            raise ExtractionError("Failed to decode text content")
        return text
