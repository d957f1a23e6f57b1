from __future__ import annotations

from typing import List, Optional

from .models import Occurrence
from .patterns import OCCURRENCE_RX
from .text_utils import matches_prefix, split_lines


def scan_text(text: str, filter_prefix: Optional[str] = None) -> List[Occurrence]:
    """Return every ``#NNN`` occurrence in ``text``, top to bottom and left to right.

    Lines are split on ``\\n`` and ``\\r\\n`` only. Each line gets its own
    ``finditer`` so no match can span a line break. When ``filter_prefix`` is
    given, only matches whose digits start with it (minus any leading ``#``)
    are kept. Duplicates are reported individually.
    """
    occurrences: List[Occurrence] = []
    for line_no, line in enumerate(split_lines(text), start=1):
        snippet = None
        for match in OCCURRENCE_RX.finditer(line):
            if not matches_prefix(match.group(1), filter_prefix):
                continue
            if snippet is None:
                snippet = line.strip()
            occurrences.append(Occurrence(pattern=match.group(0), line_no=line_no, snippet=snippet))
    return occurrences
