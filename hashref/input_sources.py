from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from .console import RichLogger
from .models import FileEntry

DROPPED_FILES_LABEL = "Dropped Files"


def guess_content_type(name: str) -> str:
    content_type, _ = mimetypes.guess_type(name)
    return content_type or ""


def make_entry(path: Path, relative_path: Optional[str] = None) -> FileEntry:
    return FileEntry(
        name=path.name,
        path=path,
        relative_path=relative_path or path.name,
        content_type=guess_content_type(path.name),
    )


def _dir_key(directory: Path) -> Tuple[int, int]:
    st = directory.stat()
    return st.st_dev, st.st_ino


def _walk_dir(
    root: Path,
    directory: Path,
    follow_symlinks: bool,
    logger: Optional[RichLogger],
    visited: Optional[Set[Tuple[int, int]]] = None,
) -> Iterator[FileEntry]:
    visited = set() if visited is None else visited
    try:
        key = _dir_key(directory)
        if key in visited:
            if logger:
                logger.debug(f"Skipping already visited folder: {directory}")
            return
        visited.add(key)
        children = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        if logger:
            logger.warn(f"Skipping unreadable path: {directory} ({e})")
        return
    for p in children:
        try:
            if p.is_symlink() and p.is_dir() and not follow_symlinks:
                continue
            if p.is_dir():
                yield from _walk_dir(root, p, follow_symlinks, logger, visited)
                continue
            if not p.is_file():
                continue
        except OSError as e:
            if logger:
                logger.warn(f"Skipping unreadable path: {p} ({e})")
            continue
        rel_path = (Path(root.name) / p.relative_to(root)).as_posix()
        yield make_entry(p, rel_path)


def iter_input_entries(
    paths: Iterable[Path],
    logger: Optional[RichLogger] = None,
    follow_symlinks: bool = False,
) -> Iterator[FileEntry]:
    """Flatten files and folders into entries, depth first, in the order given.

    Folder contents are visited in name order. Relative paths start with the
    selected folder's own name, the way a folder picker reports them.
    """
    for input_path in paths:
        input_path = Path(input_path).expanduser()
        if not input_path.exists():
            raise FileNotFoundError(str(input_path))
        if input_path.is_dir():
            if logger:
                logger.debug(f"Expanding folder: {input_path}")
            yield from _walk_dir(input_path.absolute(), input_path.absolute(), follow_symlinks, logger)
            continue
        yield make_entry(input_path)


def collect_entries(
    paths: Iterable[Path],
    logger: Optional[RichLogger] = None,
    follow_symlinks: bool = False,
) -> List[FileEntry]:
    return list(iter_input_entries(paths, logger, follow_symlinks))


def batch_label(paths: Iterable[Path]) -> str:
    for p in paths:
        name = Path(p).expanduser().absolute().name
        if name:
            return name
        break
    return DROPPED_FILES_LABEL


def resolve_file_id(entry: FileEntry) -> str:
    if entry.path is not None:
        try:
            return str(entry.path.absolute())
        except OSError:
            pass
    if entry.relative_path:
        return entry.relative_path
    return entry.name
