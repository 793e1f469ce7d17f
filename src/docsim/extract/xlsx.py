from __future__ import annotations

import posixpath
import zipfile

from .ooxml import R_ID, REL_NS, S_NS, open_package, read_optional_part, read_part, resolve_target


XLSX_MIME_TYPES = frozenset(
    {
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-excel",
        "application/xlsx",
    }
)

_WORKBOOK = "xl/workbook.xml"


def _node_text(node) -> str:
    return "".join(t.text or "" for t in node.iterfind(".//s:t", S_NS))


def _shared_strings(package: zipfile.ZipFile) -> list[str]:
    root = read_optional_part(package, "xl/sharedStrings.xml", "XLSX")
    if root is None:
        return []
    return [_node_text(si) for si in root.iterfind("s:si", S_NS)]


def _sheet_parts(package: zipfile.ZipFile) -> list[tuple[str, str]]:
    """(sheet name, archive member) in workbook order."""
    workbook = read_part(package, _WORKBOOK, "XLSX")
    rels = read_part(package, "xl/_rels/workbook.xml.rels", "XLSX")
    targets = {
        rel.get("Id"): resolve_target(posixpath.dirname(_WORKBOOK), rel.get("Target", ""))
        for rel in rels.iterfind("rel:Relationship", REL_NS)
    }
    parts: list[tuple[str, str]] = []
    for sheet in workbook.iterfind("s:sheets/s:sheet", S_NS):
        target = targets.get(sheet.get(R_ID))
        if target:
            parts.append((sheet.get("name", ""), target))
    return parts


def _cell_value(cell, shared: list[str]) -> str:
    kind = cell.get("t")
    if kind == "inlineStr":
        node = cell.find("s:is", S_NS)
        return _node_text(node) if node is not None else ""

    v = cell.find("s:v", S_NS)
    raw = (v.text or "") if v is not None else ""
    if not raw:
        return ""
    if kind == "s":
        idx = int(raw)
        return shared[idx] if 0 <= idx < len(shared) else ""
    if kind == "b":
        return "true" if raw == "1" else "false"
    return raw


class XlsxHandler:
    """Spreadsheets: a ``Sheet: <name>`` header, then tab-joined rows."""

    def can_handle(self, mime_type: str) -> bool:
        return mime_type in XLSX_MIME_TYPES

    def extract_text(self, content: bytes, filename: str, mime_type: str) -> str:
        blocks: list[str] = []
        with open_package(content, "XLSX") as package:
            shared = _shared_strings(package)
            for name, member in _sheet_parts(package):
                sheet = read_optional_part(package, member, "XLSX")
                if sheet is None:
                    continue
                lines = [f"Sheet: {name}"]
                for row in sheet.iterfind("s:sheetData/s:row", S_NS):
                    values = [_cell_value(c, shared) for c in row.iterfind("s:c", S_NS)]
                    values = [val for val in values if val]
                    if values:
                        lines.append("\t".join(values))
                blocks.append("\n".join(lines))
        return "\n\n".join(blocks).strip()
