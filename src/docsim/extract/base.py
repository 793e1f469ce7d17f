from __future__ import annotations

from typing import Protocol


class FileHandler(Protocol):
    """Turns the bytes of one file format into plain text.

    ``can_handle`` is asked first; the first registered handler that says
    yes gets ``extract_text``, which raises ``ExtractionError`` on failure.
    """

    def can_handle(self, mime_type: str) -> bool: ...

    def extract_text(self, content: bytes, filename: str, mime_type: str) -> str: ...
