from __future__ import annotations

import io
from typing import Iterator, Optional

from docx import Document

from .console import RichLogger
from .models import FileEntry

PLAIN_TEXT_EXTENSIONS = {
    ".txt",
    ".md",
    ".json",
    ".js",
    ".ts",
    ".tsx",
    ".jsx",
    ".html",
    ".css",
    ".xml",
    ".log",
    ".rtf",
}

# CNC / machine-control programs
MACHINE_EXTENSIONS = {".eia", ".nc", ".ptp"}

DOCX_EXTENSION = ".docx"

SUPPORTED_EXTENSIONS = PLAIN_TEXT_EXTENSIONS | MACHINE_EXTENSIONS | {DOCX_EXTENSION}


def detect_text_encoding(sample: bytes) -> str:
    if sample.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"
    if sample.startswith(b"\xff\xfe") or sample.startswith(b"\xfe\xff"):
        return "utf-16"
    return "utf-8"


def _declares_text(entry: FileEntry) -> bool:
    return (entry.content_type or "").lower().startswith("text/")


def _name_ends_with(entry: FileEntry, extensions) -> bool:
    return entry.name.lower().endswith(tuple(extensions))


def is_supported(entry: FileEntry) -> bool:
    return _name_ends_with(entry, SUPPORTED_EXTENSIONS) or _declares_text(entry)


def _reads_as_text(entry: FileEntry) -> bool:
    return _name_ends_with(entry, PLAIN_TEXT_EXTENSIONS | MACHINE_EXTENSIONS) or _declares_text(entry)


def decode_text(data: bytes) -> str:
    return data.decode(detect_text_encoding(data[:4]), errors="replace")


def _table_lines(table) -> Iterator[str]:
    for row in table.rows:
        prev = None
        for cell in row.cells:
            # a horizontally merged cell repeats once per grid column
            if cell._tc is prev:
                continue
            prev = cell._tc
            for para in cell.paragraphs:
                yield para.text
            for inner in cell.tables:
                yield from _table_lines(inner)


def _part_lines(part) -> Iterator[str]:
    for para in part.paragraphs:
        yield para.text
    for table in part.tables:
        yield from _table_lines(table)


def _docx_lines(doc) -> Iterator[str]:
    yield from _part_lines(doc)
    for section in doc.sections:
        for part in (section.header, section.footer):
            if part.is_linked_to_previous:
                continue
            yield from _part_lines(part)


def extract_docx_text(data: bytes, logger: Optional[RichLogger] = None, name: str = "") -> str:
    try:
        doc = Document(io.BytesIO(data))
    except Exception as exc:
        if logger:
            logger.debug(f"Unreadable DOCX {name}: {exc}")
        return ""
    return "\n".join(_docx_lines(doc))


def extract_text(entry: FileEntry, logger: Optional[RichLogger] = None) -> str:
    """Return the text content of ``entry`` or ``""`` when it has none to offer.

    Text-like files are decoded verbatim, line endings included. DOCX files
    yield their body, table, header and footer text; a document that fails
    to parse gives ``""``. Every other kind of file gives ``""``.
    """
    if entry.path is None:
        return ""
    if _name_ends_with(entry, (DOCX_EXTENSION,)):
        with open(entry.path, "rb") as bf:
            data = bf.read()
        return extract_docx_text(data, logger, entry.name)
    if _reads_as_text(entry):
        with open(entry.path, "rb") as bf:
            return decode_text(bf.read())
    return ""
