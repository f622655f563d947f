"""Colored console output for the shell, backed by rich."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

if TYPE_CHECKING:
    from rich.table import Table

    from treeshell.filesystem.types import ItemOutcome


class ShellConsole:
    """Writes command output. User-supplied text is never parsed as markup."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(highlight=False)

    @property
    def console(self) -> Console:
        return self._console

    def line(self, text: str, style: str | None = None, end: str = "\n") -> None:
        self._console.print(text, style=style, markup=False, highlight=False, soft_wrap=True, end=end)

    def success(self, text: str) -> None:
        self.line(text, "green")

    def error(self, text: str) -> None:
        self.line(text, "red")

    def info(self, text: str) -> None:
        self.line(text, "magenta")

    def outcome(self, outcome: ItemOutcome) -> None:
        self.line(outcome.describe(), None if outcome.ok else "red")

    def table(self, table: Table) -> None:
        self._console.print(table)

    def clear(self) -> None:
        self._console.clear()

    def input(self, prompt: str, style: str = "blue") -> str:
        return self._console.input(Text(prompt, style=style))
