"""Interactive read-dispatch loop."""

from __future__ import annotations

import getpass
import socket
from datetime import datetime
from typing import TYPE_CHECKING

from treeshell.infrastructure.logger import logger
from treeshell.shell.dispatcher import CommandDispatcher, CommandHandler
from treeshell.shell.handlers.file_handlers import (
    BackupHandler,
    EmptyHandler,
    FindHandler,
    FindLikeHandler,
    MakeDirectoryHandler,
    PrefixHandler,
    RemoveHandler,
    SuffixHandler,
    TouchHandler,
    TreeHandler,
)
from treeshell.shell.handlers.navigation_handlers import (
    ChangeDirectoryHandler,
    CwdHandler,
    ListHandler,
    ReadHandler,
)
from treeshell.shell.handlers.utility_handlers import (
    ClearHandler,
    ExitHandler,
    ExternalCommandHandler,
    FromDecimalHandler,
    HelpHandler,
    ToDecimalHandler,
)

if TYPE_CHECKING:
    from treeshell.infrastructure.config import ShellSettings
    from treeshell.shell.context import ShellContext


def build_dispatcher() -> CommandDispatcher:
    """Dispatcher with every built-in command registered."""
    handlers: list[CommandHandler] = [
        BackupHandler(),
        ToDecimalHandler(2),
        ToDecimalHandler(8),
        ToDecimalHandler(16),
        FromDecimalHandler(2),
        FromDecimalHandler(8),
        FromDecimalHandler(16),
        RemoveHandler(),
        ListHandler(),
        CwdHandler(),
        ChangeDirectoryHandler(),
        FindHandler(),
        FindLikeHandler(),
        TreeHandler(),
        ClearHandler(),
        ExitHandler(),
        ExternalCommandHandler(),
        ReadHandler(),
        MakeDirectoryHandler(),
        TouchHandler(),
        EmptyHandler(),
        SuffixHandler(),
        PrefixHandler(),
    ]
    dispatcher = CommandDispatcher(handlers)
    dispatcher.register(HelpHandler(handlers))
    return dispatcher


def _user_name() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "user"


def format_prompt(settings: ShellSettings, now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"{_user_name()} @ {socket.gethostname()} ({now.strftime(settings.prompt_time_format)})\n> "


def run_shell(context: ShellContext, dispatcher: CommandDispatcher | None = None) -> None:
    """Read and run commands until ``exit`` or end of input."""
    dispatcher = dispatcher or build_dispatcher()
    logger.info("Shell started", cwd=str(context.cwd))

    while context.running:
        try:
            line = context.console.input(format_prompt(context.settings))
        except (EOFError, KeyboardInterrupt):
            context.console.line("")
            break

        try:
            dispatcher.dispatch_line(line, context)
        except KeyboardInterrupt:
            context.console.error("Interrupted")
        except Exception as err:
            logger.exception("Command crashed", line=line)
            context.console.error(f"Internal error: {err}")

    logger.info("Shell stopped")
