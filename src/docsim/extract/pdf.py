from __future__ import annotations

import fitz  # PyMuPDF

from ..clean import strip_blank_lines
from ..errors import ExtractionError


def extract_pdf_pages(content: bytes) -> list[dict]:
    """Extract text per page using PyMuPDF.

    Returns a list of dicts: {"page": int, "text": str}
    """
    doc = fitz.open(stream=content, filetype="pdf")
    pages: list[dict] = []
    try:
        for i in range(doc.page_count):
            page = doc.load_page(i)
            pages.append({"page": i + 1, "text": page.get_text("text")})
    finally:
        doc.close()
    return pages


class PdfHandler:
    def can_handle(self, mime_type: str) -> bool:
        return mime_type == "application/pdf"

    def extract_text(self, content: bytes, filename: str, mime_type: str) -> str:
        try:
            pages = extract_pdf_pages(content)
        except Exception as e:
            raise ExtractionError(f"PDF extraction failed: {e}") from e
        return strip_blank_lines("\n".join(p["text"] for p in pages))
