"""Per-session state passed to every command."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from treeshell.infrastructure.config import ShellSettings
from treeshell.shell.console import ShellConsole


@dataclass
class ShellContext:
    cwd: Path
    console: ShellConsole = field(default_factory=ShellConsole)
    settings: ShellSettings = field(default_factory=ShellSettings)
    running: bool = True
