from __future__ import annotations

from typing import Iterable, List, Optional

from .console import RichLogger
from .extractors import extract_text, is_supported
from .input_sources import resolve_file_id
from .models import FileEntry, Occurrence, PatternIndex, ScanResult
from .scanner import scan_text

NO_SUPPORTED_FILES_MESSAGE = "No supported files found."
SCAN_FAILED_MESSAGE = "Error scanning files. Please try again."


class ScanError(RuntimeError):
    """A batch was aborted; nothing from it may be published."""


def add_occurrences(index: PatternIndex, file_id: str, occurrences: Iterable[Occurrence]) -> int:
    added = 0
    for occ in occurrences:
        index.setdefault(occ.pattern, {}).setdefault(file_id, []).append(occ)
        added += 1
    return added


def scan_batch(
    entries: Iterable[FileEntry],
    label: str,
    logger: Optional[RichLogger] = None,
) -> ScanResult:
    """Scan ``entries`` one at a time and fold their matches into a pattern index.

    Unsupported entries are skipped and not counted. Any failure aborts the
    whole batch with :class:`ScanError`; the partial index is dropped.
    """
    index: PatternIndex = {}
    scanned = 0
    current: Optional[FileEntry] = None
    try:
        for entry in entries:
            current = entry
            if not is_supported(entry):
                if logger:
                    logger.debug(f"Skipping unsupported file: {entry.name}")
                continue
            scanned += 1
            text = extract_text(entry, logger)
            file_id = resolve_file_id(entry)
            found = add_occurrences(index, file_id, scan_text(text))
            if logger:
                logger.debug(f"Scanned {file_id}: {found} occurrences")
    except Exception as exc:
        where = f" at {current.name}" if current is not None else ""
        raise ScanError(f"Scan of {label} failed{where}: {exc}") from exc
    return ScanResult(index=index, scanned_files=scanned, label=label)


class ScanSession:
    """Holds the most recently published scan result.

    Each :meth:`run` clears the previous result and error before scanning, so a
    failed batch leaves the session empty rather than showing stale matches.
    """

    def __init__(self, logger: Optional[RichLogger] = None):
        self.logger = logger
        self.result: Optional[ScanResult] = None
        self.label = ""
        self.error = ""

    def reset(self, label: str = "") -> None:
        self.result = None
        self.label = label
        self.error = ""

    def run(self, entries: List[FileEntry], label: str) -> Optional[ScanResult]:
        self.reset(label)
        try:
            result = scan_batch(entries, label, self.logger)
        except ScanError as exc:
            if self.logger:
                self.logger.debug(str(exc))
            self.error = SCAN_FAILED_MESSAGE
            return None
        if result.scanned_files == 0:
            self.error = NO_SUPPORTED_FILES_MESSAGE
        self.result = result
        return result

    @property
    def scanned_files(self) -> int:
        return self.result.scanned_files if self.result else 0

    @property
    def index(self) -> PatternIndex:
        return self.result.index if self.result else {}
