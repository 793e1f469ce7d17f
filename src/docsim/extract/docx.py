from __future__ import annotations

from .ooxml import W_NS, open_package, read_part


DOCX_MIME_TYPES = frozenset(
    {
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/docx",
    }
)


class DocxHandler:
    """Word documents: one line per paragraph, runs concatenated."""

    def can_handle(self, mime_type: str) -> bool:
        return mime_type in DOCX_MIME_TYPES

    def extract_text(self, content: bytes, filename: str, mime_type: str) -> str:
        with open_package(content, "DOCX") as package:
            root = read_part(package, "word/document.xml", "DOCX")

        lines: list[str] = []
        # paragraphs inside tables come along in document order
        for para in root.iterfind(".//w:body//w:p", W_NS):
            lines.append("".join(t.text or "" for t in para.iterfind(".//w:t", W_NS)))
        return "\n".join(lines).strip()
