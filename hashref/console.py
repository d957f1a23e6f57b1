from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.status import Status
from rich.text import Text


class RichLogger:
    """Leveled status lines on a rich console, kept apart from rendered results.

    The CLI hands in a stderr console so the tree or table printed on stdout
    can be piped without log lines mixed in.
    """

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console(stderr=True)
        self.verbose = verbose

    def _emit(self, level: str, msg: str, style: str) -> None:
        tag = Text(level.ljust(5), style=style)
        self.console.log(tag, Text(msg), log_locals=False)

    def status(self, msg: str) -> Status:
        return self.console.status(msg)

    def info(self, msg: str) -> None:
        self._emit("INFO", msg, "bold green")

    def warn(self, msg: str) -> None:
        self._emit("WARN", msg, "bold yellow")

    def error(self, msg: str) -> None:
        self._emit("ERROR", msg, "bold red")

    def debug(self, msg: str) -> None:
        if not self.verbose:
            return
        self._emit("DEBUG", msg, "bold blue")

    def done(self, msg: str) -> None:
        self._emit("DONE", msg, "bold cyan")
