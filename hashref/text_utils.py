from __future__ import annotations

from typing import List, Optional

from .patterns import LINE_BREAK_RX


def trim_snippet(text: str, max_len: int = 240) -> str:
    value = text.strip()
    if max_len <= 0 or len(value) <= max_len:
        return value
    if max_len <= 3:
        return value[:max_len]
    return value[: max_len - 3] + "..."


def split_lines(text: str) -> List[str]:
    return LINE_BREAK_RX.split(text)


def normalize_prefix(prefix: Optional[str]) -> str:
    if not prefix:
        return ""
    return prefix.lstrip("#")


def matches_prefix(body: str, prefix: Optional[str]) -> bool:
    """True when the digit body starts with the ``#``-stripped prefix.

    This is a string prefix test, so ``"6"`` keeps ``600`` and ``060`` is kept
    only by ``"0"`` or ``"06"``. An empty prefix keeps everything.
    """
    normalized = normalize_prefix(prefix)
    if not normalized:
        return True
    return body.startswith(normalized)
