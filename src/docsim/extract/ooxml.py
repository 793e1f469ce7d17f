from __future__ import annotations

"""Helpers for Office Open XML packages (.docx, .xlsx).

Both formats are ZIP archives of XML parts; we read the parts we need with
lxml and ignore the rest.
"""

import io
import posixpath
import zipfile

from lxml import etree

from ..errors import ExtractionError


W_NS = {"w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main"}
S_NS = {"s": "http://schemas.openxmlformats.org/spreadsheetml/2006/main"}
REL_NS = {"rel": "http://schemas.openxmlformats.org/package/2006/relationships"}
R_ID = "{http://schemas.openxmlformats.org/officeDocument/2006/relationships}id"


def open_package(content: bytes, kind: str) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(io.BytesIO(content))
    except zipfile.BadZipFile as e:
        raise ExtractionError(f"Failed to read {kind}: not a zip archive") from e


def read_part(package: zipfile.ZipFile, name: str, kind: str):
    try:
        raw = package.read(name)
    except KeyError as e:
        raise ExtractionError(f"Failed to read {kind}: missing part {name}") from e
    try:
        return etree.fromstring(raw)
    except etree.XMLSyntaxError as e:
        raise ExtractionError(f"Failed to read {kind}: {name}: {e}") from e


def read_optional_part(package: zipfile.ZipFile, name: str, kind: str):
    if name not in package.namelist():
        return None
    return read_part(package, name, kind)


def resolve_target(base_dir: str, target: str) -> str:
    """Relationship target -> archive member name."""
    if target.startswith("/"):
        return target.lstrip("/")
    return posixpath.normpath(posixpath.join(base_dir, target))
