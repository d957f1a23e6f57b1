from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from .console import RichLogger
from .input_sources import batch_label, collect_entries
from .launcher import OpenFileError, open_path
from .presentation import empty_message, filter_patterns, render_summary, render_tree
from .results import ScanSession

DEFAULT_MAX_SNIPPET = 240


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="hashref",
        description="Find #NNN references (machine variables, ticket numbers) across a folder of text files.",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    scan = sub.add_parser(
        "scan",
        help="Scan files and folders and group matches by pattern, then by file.",
    )
    scan.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files or folders to scan. Folders are expanded depth first.",
    )
    scan.add_argument(
        "--filter",
        default="",
        help="Only show patterns whose digits start with this prefix (a leading # is ignored).",
    )
    scan.add_argument(
        "--summary",
        action="store_true",
        help="Show one row per pattern instead of the full tree.",
    )
    scan.add_argument(
        "--max-snippet",
        type=int,
        default=DEFAULT_MAX_SNIPPET,
        help="Truncate displayed lines to N characters (0 = no limit, default: 240).",
    )
    scan.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Descend into symlinked folders.",
    )
    scan.add_argument("-v", "--verbose", action="store_true", help="Verbose debug logs")

    op = sub.add_parser(
        "open",
        help="Open a result file with the system's default application.",
    )
    op.add_argument("path", help="File to open (an absolute path from scan output).")
    op.add_argument("-v", "--verbose", action="store_true", help="Verbose debug logs")

    return ap


def run_scan(args, console: Optional[Console] = None, log_console: Optional[Console] = None) -> int:
    console = console or Console()
    logger = RichLogger(console=log_console or Console(stderr=True), verbose=args.verbose)

    try:
        entries = collect_entries(args.paths, logger, follow_symlinks=args.follow_symlinks)
    except FileNotFoundError as exc:
        logger.error(f"Path not found: {exc}")
        return 2

    label = batch_label(args.paths)
    logger.info(f"Scanning {len(entries)} files from {label}")

    session = ScanSession(logger=logger)
    with logger.status("Scanning files..."):
        result = session.run(entries, label)

    if result is None:
        logger.error(session.error)
        return 1
    if session.error:
        logger.warn(session.error)
        return 0

    if args.summary:
        if filter_patterns(result.index, args.filter):
            console.print(render_summary(result, args.filter))
        else:
            console.print(empty_message(result.index, args.filter), style="dim italic")
    else:
        console.print(render_tree(result, args.filter, args.max_snippet))

    logger.done(f"Scanned {result.scanned_files} files, found {len(result.index)} distinct patterns")
    return 0


def run_open(args, log_console: Optional[Console] = None) -> int:
    logger = RichLogger(console=log_console or Console(stderr=True), verbose=args.verbose)
    logger.debug(f"Attempting to open file at path: {args.path}")
    try:
        open_path(args.path)
    except OpenFileError as exc:
        logger.error(str(exc))
        return 1
    logger.done(f"Opened {args.path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    if args.command == "scan":
        return run_scan(args)
    if args.command == "open":
        return run_open(args)
    return 2
