"""Test reporters — sinks for informational messages and pass/fail assertions."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class Reporter:
    """Records every reported entry in order.

    ``pass_`` carries a trailing underscore because ``pass`` is a keyword.
    """

    def __init__(self, title: str = ""):
        self.title = title
        self.entries: list[tuple[str, str]] = []
        self.finished = False

    def info(self, message: str) -> None:
        self._record("info", message)

    def pass_(self, message: str) -> None:
        self._record("pass", message)

    def fail(self, message: str) -> None:
        self._record("fail", message)

    def done(self) -> None:
        if self.finished:
            raise RuntimeError(f"Reporter for '{self.title}' already finished")
        self.finished = True
        self._on_done()

    @property
    def passed(self) -> int:
        return sum(1 for kind, _ in self.entries if kind == "pass")

    @property
    def failed(self) -> int:
        return sum(1 for kind, _ in self.entries if kind == "fail")

    @property
    def assertions(self) -> list[str]:
        """Kinds of the pass/fail entries, in reporting order."""
        return [kind for kind, _ in self.entries if kind in ("pass", "fail")]

    def _record(self, kind: str, message: str) -> None:
        if self.finished:
            raise RuntimeError(f"Reporter for '{self.title}' already finished")
        self.entries.append((kind, message))
        self._emit(kind, message)

    def _emit(self, kind: str, message: str) -> None:
        pass

    def _on_done(self) -> None:
        pass


class ConsoleReporter(Reporter):
    """Prints each entry to a rich console as it is reported."""

    _STYLES = {
        "info": "[blue]INFO[/blue]",
        "pass": "[green]PASS[/green]",
        "fail": "[red]FAIL[/red]",
    }

    def __init__(self, title: str = "", console: Optional[Console] = None):
        super().__init__(title)
        self.console = console or Console()
        if title:
            self.console.print(f"[bold]Test file:[/bold] {escape(title)}")

    def _emit(self, kind: str, message: str) -> None:
        self.console.print(f"{self._STYLES[kind]} {escape(message)}")

    def _on_done(self) -> None:
        colour = "green" if self.failed == 0 else "red"
        self.console.print(
            f"[bold {colour}]{'PASS' if self.failed == 0 else 'FAIL'}[/bold {colour}] "
            f"{self.passed + self.failed} tests executed, "
            f"{self.passed} passed, {self.failed} failed"
        )
        logger.debug("Reporter '%s' done", self.title)
