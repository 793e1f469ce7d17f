import io
import zipfile

import pytest

from docsim.extract.image import set_ocr_engine


W_MAIN = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
S_MAIN = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
R_OFFICE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
R_PKG = "http://schemas.openxmlformats.org/package/2006/relationships"


def _zip(parts: dict[str, str]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, xml in parts.items():
            zf.writestr(name, xml)
    return buf.getvalue()


def build_docx(paragraphs: list[list[str]]) -> bytes:
    """Each paragraph is a list of run texts."""
    body = "".join(
        "<w:p>" + "".join(f"<w:r><w:t>{run}</w:t></w:r>" for run in runs) + "</w:p>"
        for runs in paragraphs
    )
    document = f'<?xml version="1.0" encoding="UTF-8"?><w:document xmlns:w="{W_MAIN}"><w:body>{body}</w:body></w:document>'
    return _zip({"word/document.xml": document})


def build_xlsx(sheets: list[tuple[str, list[list[object]]]]) -> bytes:
    """Strings go to the shared string table, ints stay numeric, None is an empty cell."""
    shared: list[str] = []
    parts: dict[str, str] = {}
    sheet_entries = []
    rel_entries = []

    for n, (name, rows) in enumerate(sheets, start=1):
        row_xml = []
        for r, row in enumerate(rows, start=1):
            cells = []
            for c, value in enumerate(row):
                ref = f"{chr(ord('A') + c)}{r}"
                if value is None:
                    cells.append(f'<c r="{ref}"/>')
                elif isinstance(value, str):
                    shared.append(value)
                    cells.append(f'<c r="{ref}" t="s"><v>{len(shared) - 1}</v></c>')
                else:
                    cells.append(f'<c r="{ref}"><v>{value}</v></c>')
            row_xml.append(f'<row r="{r}">{"".join(cells)}</row>')
        parts[f"xl/worksheets/sheet{n}.xml"] = (
            f'<?xml version="1.0" encoding="UTF-8"?><worksheet xmlns="{S_MAIN}"><sheetData>{"".join(row_xml)}</sheetData></worksheet>'
        )
        sheet_entries.append(f'<sheet name="{name}" sheetId="{n}" r:id="rId{n}"/>')
        rel_entries.append(
            f'<Relationship Id="rId{n}" Type="{R_OFFICE}/worksheet" Target="worksheets/sheet{n}.xml"/>'
        )

    parts["xl/workbook.xml"] = (
        f'<?xml version="1.0" encoding="UTF-8"?><workbook xmlns="{S_MAIN}" xmlns:r="{R_OFFICE}">'
        f'<sheets>{"".join(sheet_entries)}</sheets></workbook>'
    )
    parts["xl/_rels/workbook.xml.rels"] = (
        f'<?xml version="1.0" encoding="UTF-8"?><Relationships xmlns="{R_PKG}">{"".join(rel_entries)}</Relationships>'
    )
    parts["xl/sharedStrings.xml"] = (
        f'<?xml version="1.0" encoding="UTF-8"?><sst xmlns="{S_MAIN}">'
        + "".join(f"<si><t>{s}</t></si>" for s in shared)
        + "</sst>"
    )
    return _zip(parts)


class StubOcrEngine:
    def __init__(self, lines):
        self.lines = lines
        self.calls = 0

    def recognize(self, image):
        self.calls += 1
        return list(self.lines)


@pytest.fixture
def ocr_engine():
    """Install a stub OCR engine for the test and drop it afterwards."""
    engines = []

    def install(lines):
        engine = StubOcrEngine(lines)
        set_ocr_engine(engine)
        engines.append(engine)
        return engine

    yield install
    set_ocr_engine(None)
