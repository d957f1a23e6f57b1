from __future__ import annotations

import re

OCCURRENCE_RX = re.compile(r"#(\d{3})\b", re.ASCII)
LINE_BREAK_RX = re.compile(r"\r?\n")
