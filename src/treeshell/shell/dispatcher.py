"""Command tokenizer, dispatcher and base handler."""

from __future__ import annotations

import shlex
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from treeshell.filesystem.errors import IOFailure, ShellError, UsageError
from treeshell.infrastructure.logger import logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from treeshell.shell.context import ShellContext

UNKNOWN_COMMAND = "Unknown internal or external command"


def tokenize(line: str) -> list[str]:
    """Split a command line on whitespace, honouring quotes."""
    try:
        return shlex.split(line)
    except ValueError as err:
        raise UsageError(f"Cannot parse command: {err}") from err


class CommandHandler(ABC):
    """Base class for shell command handlers."""

    usage: str = ""
    summary: str = ""

    @property
    @abstractmethod
    def names(self) -> tuple[str, ...]: ...

    @abstractmethod
    def validate(self, args: list[str]) -> Any: ...

    @abstractmethod
    def execute(self, payload: Any, context: ShellContext) -> None: ...

    def handle(self, args: list[str], context: ShellContext) -> None:
        validated = self.validate(args)
        self.execute(validated, context)


class CommandDispatcher:
    """Routes tokenized commands to registered handlers."""

    def __init__(self, handlers: Iterable[CommandHandler]) -> None:
        self._ordered: list[CommandHandler] = list(handlers)
        self._handlers: dict[str, CommandHandler] = {name: h for h in self._ordered for name in h.names}

    @property
    def handlers(self) -> list[CommandHandler]:
        return list(self._ordered)

    def register(self, handler: CommandHandler) -> None:
        self._ordered.append(handler)
        for name in handler.names:
            self._handlers[name] = handler

    def dispatch_line(self, line: str, context: ShellContext) -> None:
        try:
            tokens = tokenize(line)
        except UsageError as err:
            context.console.error(err.message)
            return
        self.dispatch(tokens, context)

    def dispatch(self, tokens: list[str], context: ShellContext) -> None:
        if not tokens:
            return
        command = tokens[0].lower()
        handler = self._handlers.get(command)
        if not handler:
            logger.debug("Unknown command", command=command)
            context.console.error(UNKNOWN_COMMAND)
            return
        try:
            handler.handle(tokens[1:], context)
        except ShellError as err:
            logger.info(err.message, command=command, **err.details)
            context.console.error(err.message)
        except OSError as err:
            failure = IOFailure.from_os_error(err.filename or command, err)
            logger.warning("Command failed", command=command, **failure.details)
            context.console.error(failure.message)
