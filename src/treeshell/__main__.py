"""Entry point: python -m treeshell"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from treeshell.infrastructure.config import ConfigError, load_settings
from treeshell.infrastructure.logger import logger
from treeshell.shell.context import ShellContext
from treeshell.shell.repl import build_dispatcher, run_shell


def run(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="treeshell", description="Interactive filesystem shell")
    parser.add_argument("--config", type=Path, help="Path to a YAML config file")
    parser.add_argument("-C", "--directory", type=Path, default=None, help="Start in this directory")
    parser.add_argument("-c", "--command", action="append", default=[], help="Run a command and exit (repeatable)")
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as err:
        print(f"treeshell: {err}", file=sys.stderr)
        sys.exit(1)

    start_dir = (args.directory or Path.cwd()).expanduser().resolve()
    if not start_dir.is_dir():
        print(f"treeshell: no such directory: {start_dir}", file=sys.stderr)
        sys.exit(1)

    context = ShellContext(cwd=start_dir, settings=settings)
    dispatcher = build_dispatcher()

    if args.command:
        for line in args.command:
            dispatcher.dispatch_line(line, context)
            if not context.running:
                break
        return

    logger.debug("Starting interactive session", cwd=str(start_dir))
    run_shell(context, dispatcher)


if __name__ == "__main__":
    run()
