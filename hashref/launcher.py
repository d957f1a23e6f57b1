from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import List


class OpenFileError(RuntimeError):
    pass


def opener_command(path: str, platform: str = sys.platform) -> List[str]:
    if platform == "darwin":
        return ["open", path]
    return ["xdg-open", path]


def open_path(path: str, platform: str = sys.platform) -> None:
    """Hand ``path`` to the desktop's default application. No retries."""
    target = Path(path).expanduser()
    if not target.exists():
        raise OpenFileError(f"File not found: {target}")

    if platform.startswith("win"):
        try:
            os.startfile(str(target))  # type: ignore[attr-defined]
        except OSError as exc:
            raise OpenFileError(f"Failed to open file: {exc}") from exc
        return

    cmd = opener_command(str(target), platform)
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=30)
    except (OSError, subprocess.SubprocessError) as exc:
        raise OpenFileError(f"Failed to open file: {exc}") from exc
    if proc.returncode != 0:
        detail = (proc.stderr or proc.stdout or "").strip()[:200]
        raise OpenFileError(f"Failed to open file: {cmd[0]} exited with {proc.returncode} {detail}".rstrip())
