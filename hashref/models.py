from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Occurrence:
    pattern: str
    line_no: int
    snippet: str


@dataclass(frozen=True)
class FileEntry:
    name: str
    path: Optional[Path] = None
    relative_path: Optional[str] = None
    content_type: str = ""


PatternIndex = Dict[str, Dict[str, List[Occurrence]]]


@dataclass(frozen=True)
class ScanResult:
    index: PatternIndex
    scanned_files: int
    label: str

    @property
    def outcome(self) -> str:
        if self.scanned_files == 0:
            return "no_supported_files"
        if not self.index:
            return "no_matches"
        return "matches"
