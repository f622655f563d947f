"""Navigation handlers: ls/dir, cwd, cd, read."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.table import Table

from treeshell.filesystem.errors import IOFailure, NotFoundError, UsageError
from treeshell.filesystem.paths import PathResolver
from treeshell.filesystem.walker import list_directory
from treeshell.shell.context import ShellContext
from treeshell.shell.dispatcher import CommandHandler

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _timestamp(value: float) -> str:
    return datetime.fromtimestamp(value).strftime(TIME_FORMAT)


def _created(info: os.stat_result) -> float:
    return getattr(info, "st_birthtime", info.st_ctime)


def _listing_table(title: str, size_header: str) -> Table:
    table = Table(title=title, title_style="magenta", header_style="green", style="blue")
    table.add_column("Name", style="yellow")
    table.add_column(size_header, justify="right")
    table.add_column("Modified")
    table.add_column("Accessed")
    table.add_column("Created")
    return table


# --- ListHandler ---


class ListHandler(CommandHandler):
    names = ("ls", "dir")
    usage = "ls"
    summary = "displays the dirs/files in the current dir"

    def validate(self, args: list[str]) -> None:
        return None

    def execute(self, payload: Any, context: ShellContext) -> None:
        try:
            listing = list_directory(context.cwd)
        except OSError as err:
            raise IOFailure.from_os_error(context.cwd, err) from err

        directories = _listing_table("Directories:", "")
        for directory in listing.directories:
            info = directory.stat()
            directories.add_row(
                directory.name + "/", "", _timestamp(info.st_mtime), _timestamp(info.st_atime), _timestamp(_created(info))
            )

        files = _listing_table("Files:", "Size")
        for file in listing.files:
            try:
                info = file.stat()
            except OSError:
                # Broken symlink
                files.add_row(file.name, "?", "", "", "")
                continue
            files.add_row(
                file.name, f"{info.st_size}B", _timestamp(info.st_mtime), _timestamp(info.st_atime), _timestamp(_created(info))
            )

        context.console.table(directories)
        context.console.table(files)


# --- CwdHandler ---


class CwdHandler(CommandHandler):
    names = ("cwd", "pwd")
    usage = "cwd"
    summary = "displays the current working directory"

    def validate(self, args: list[str]) -> None:
        return None

    def execute(self, payload: Any, context: ShellContext) -> None:
        context.console.line(str(context.cwd))


# --- ChangeDirectoryHandler ---


@dataclass
class ChangeDirectoryPayload:
    target: str


class ChangeDirectoryHandler(CommandHandler):
    names = ("cd",)
    usage = "cd {new dir}"
    summary = "change the current directory to the new specified one"

    def validate(self, args: list[str]) -> ChangeDirectoryPayload:
        if not args:
            raise UsageError("Expected directory path")
        return ChangeDirectoryPayload(target=" ".join(args))

    def execute(self, payload: ChangeDirectoryPayload, context: ShellContext) -> None:
        new_dir = PathResolver.resolve(context.cwd, payload.target)
        if not new_dir.is_dir():
            raise NotFoundError("No such directory", {"path": str(new_dir)})
        context.cwd = new_dir


# --- ReadHandler ---


class ReadHandler(CommandHandler):
    names = ("read", "cat")
    usage = "read {file name}"
    summary = "display the contents of a file"

    def validate(self, args: list[str]) -> Path:
        if not args:
            raise UsageError("Expected a file name")
        return Path(" ".join(args))

    def execute(self, payload: Path, context: ShellContext) -> None:
        path = PathResolver.resolve(context.cwd, str(payload))
        if not path.is_file():
            raise NotFoundError(f"'{path.name}' does not exist", {"path": str(path)})
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as err:
            raise IOFailure(f"An error occurred while reading '{path.name}': {err.strerror or err}", {"path": str(path)}) from err
        context.console.line(content, end="" if content.endswith("\n") else "\n")
