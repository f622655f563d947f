"""Utility handlers: base conversion, external commands, clear, help, exit."""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING, Any

from treeshell.filesystem.errors import UsageError
from treeshell.infrastructure.logger import logger
from treeshell.shell.dispatcher import CommandHandler

if TYPE_CHECKING:
    from collections.abc import Iterable

    from treeshell.shell.context import ShellContext

BASE_NAMES = {2: "bin", 8: "oct", 16: "hex"}
BASE_FORMATS = {2: "b", 8: "o", 16: "x"}


# --- Base conversion ---


class ToDecimalHandler(CommandHandler):
    """bin2dec / oct2dec / hex2dec"""

    names: tuple[str, ...] = ()

    def __init__(self, base: int) -> None:
        self.base = base
        prefix = BASE_NAMES[base]
        self.names = (f"{prefix}2dec",)
        self.usage = f"{prefix}2dec {{{prefix}}}"
        self.summary = f"converts {prefix} number to dec"

    def validate(self, args: list[str]) -> int:
        if not args:
            raise UsageError(f"Expected a base-{self.base} number")
        try:
            return int(args[0], self.base)
        except ValueError as err:
            raise UsageError(f"Conversion error: {err}") from err

    def execute(self, payload: int, context: ShellContext) -> None:
        context.console.line(str(payload))


class FromDecimalHandler(CommandHandler):
    """dec2bin / dec2oct / dec2hex"""

    names: tuple[str, ...] = ()

    def __init__(self, base: int) -> None:
        self.base = base
        suffix = BASE_NAMES[base]
        self.names = (f"dec2{suffix}",)
        self.usage = f"dec2{suffix} {{dec}}"
        self.summary = f"converts dec number to {suffix}"

    def validate(self, args: list[str]) -> int:
        if not args:
            raise UsageError("Expected a decimal number")
        try:
            return int(args[0], 10)
        except ValueError as err:
            raise UsageError(f"Conversion error: {err}") from err

    def execute(self, payload: int, context: ShellContext) -> None:
        context.console.line(format(payload, BASE_FORMATS[self.base]))


# --- ExternalCommandHandler ---


class ExternalCommandHandler(CommandHandler):
    names = ("!",)
    usage = "! {command}"
    summary = "run an external command"

    def validate(self, args: list[str]) -> str:
        if not args:
            raise UsageError("Expected a command")
        return " ".join(args)

    def execute(self, payload: str, context: ShellContext) -> None:
        logger.debug("Running external command", command=payload, cwd=str(context.cwd))
        proc = subprocess.run(payload, shell=True, cwd=context.cwd, capture_output=True, text=True)
        if proc.stdout:
            context.console.line(proc.stdout, end="" if proc.stdout.endswith("\n") else "\n")
        if proc.stderr:
            context.console.line(proc.stderr, style="red", end="" if proc.stderr.endswith("\n") else "\n")


# --- ClearHandler / ExitHandler / HelpHandler ---


class ClearHandler(CommandHandler):
    names = ("cls", "clear")
    usage = "cls"
    summary = "clears the screen"

    def validate(self, args: list[str]) -> None:
        return None

    def execute(self, payload: Any, context: ShellContext) -> None:
        context.console.clear()


class ExitHandler(CommandHandler):
    names = ("exit", "kill", "quit")
    usage = "exit"
    summary = "terminates the current instance of the terminal"

    def validate(self, args: list[str]) -> None:
        return None

    def execute(self, payload: Any, context: ShellContext) -> None:
        context.running = False


class HelpHandler(CommandHandler):
    names = ("help",)
    usage = "help"
    summary = "display this menu"

    def __init__(self, handlers: Iterable[CommandHandler]) -> None:
        self._handlers = list(handlers)

    def validate(self, args: list[str]) -> None:
        return None

    def execute(self, payload: Any, context: ShellContext) -> None:
        for handler in [*self._handlers, self]:
            context.console.line(f"{handler.usage:<40}- {handler.summary}")
