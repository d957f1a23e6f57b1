from __future__ import annotations

from pathlib import PurePath
from typing import Dict, List, Optional, Tuple

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from .models import Occurrence, PatternIndex, ScanResult
from .text_utils import matches_prefix, trim_snippet

NO_VARIABLES_MESSAGE = "No variables found."


def filter_patterns(index: PatternIndex, prefix: Optional[str] = None) -> List[str]:
    return sorted(p for p in index if matches_prefix(p[1:], prefix))


def pattern_totals(file_map: Dict[str, List[Occurrence]]) -> Tuple[int, int]:
    return sum(len(occs) for occs in file_map.values()), len(file_map)


def empty_message(index: PatternIndex, prefix: Optional[str] = None) -> str:
    if not index:
        return NO_VARIABLES_MESSAGE
    return f'No matches for "{prefix}"'


def display_name(file_id: str) -> str:
    return PurePath(file_id.replace("\\", "/")).name or file_id


def render_tree(result: ScanResult, prefix: Optional[str] = None, max_snippet: int = 240) -> Tree:
    patterns = filter_patterns(result.index, prefix)
    tree = Tree(
        Text.assemble(
            (result.label or "Scan", "bold"),
            (f"  {result.scanned_files} files scanned, {len(patterns)} results", "dim"),
        )
    )
    if not patterns:
        tree.add(Text(empty_message(result.index, prefix), style="dim italic"))
        return tree

    for pattern in patterns:
        file_map = result.index[pattern]
        matches, files = pattern_totals(file_map)
        node = tree.add(
            Text.assemble(
                (pattern, "bold magenta"),
                (f"  {matches} matches  {files} files", "dim"),
            )
        )
        for file_id, occurrences in file_map.items():
            file_node = node.add(
                Text.assemble((display_name(file_id), "cyan"), ("  " + file_id, "dim"))
            )
            for occ in occurrences:
                file_node.add(
                    Text.assemble(
                        (f"{occ.line_no:>4}: ", "dim"),
                        trim_snippet(occ.snippet, max_snippet),
                    )
                )
    return tree


def render_summary(result: ScanResult, prefix: Optional[str] = None) -> Table:
    table = Table(title=f"Found Variables ({result.label})", header_style="bold")
    table.add_column("Pattern", style="magenta")
    table.add_column("Matches", justify="right")
    table.add_column("Files", justify="right")
    for pattern in filter_patterns(result.index, prefix):
        matches, files = pattern_totals(result.index[pattern])
        table.add_row(pattern, str(matches), str(files))
    return table
