"""Recursive copy for backup and empty (flatten into the working directory)."""

from __future__ import annotations

import contextlib
import os
import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from treeshell.filesystem.errors import NotFoundError, UsageError
from treeshell.filesystem.paths import PathResolver
from treeshell.filesystem.types import ItemOutcome, OperationResult
from treeshell.filesystem.walker import walk
from treeshell.infrastructure.logger import logger

if TYPE_CHECKING:
    from collections.abc import Callable

    ProgressCallback = Callable[[ItemOutcome], None]


def copy_file(src: Path, dest: Path) -> None:
    """Copy ``src`` over ``dest`` through a temporary sibling file.

    The destination only ever holds the old content or the complete new
    content; a failed copy leaves no partial file behind.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{dest.name}.", suffix=".part", dir=dest.parent)
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        shutil.copy2(src, tmp_path)
        os.replace(tmp_path, dest)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            tmp_path.unlink()
        raise


def copy_tree(
    source: Path,
    destination: Path,
    delete_source_after_copy: bool = False,
    progress: ProgressCallback | None = None,
) -> OperationResult:
    """Copy everything under ``source`` into ``destination``, keeping the layout.

    Files at each level are copied before descending into subdirectories.
    With ``delete_source_after_copy`` each source file is removed once its
    copy succeeded, which turns the copy into a move; directories are left
    in place, empty. Existing destination files are overwritten.

    Best-effort: every file and directory gets its own outcome and a failure
    never stops the remaining work.
    """
    source = Path(source)
    destination = Path(destination)
    if not source.is_dir():
        raise NotFoundError(f"'{source}' is not a directory", {"path": str(source)})
    if PathResolver.same_location(source, destination):
        raise UsageError("Source and destination are the same directory", {"path": str(source)})

    result = OperationResult()

    def record(outcome: ItemOutcome) -> None:
        result.outcomes.append(outcome)
        if progress is not None:
            progress(outcome)

    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        record(ItemOutcome(action="mkdir", path=str(destination), ok=False, error=err.strerror or str(err)))
        return result

    file_action = "move" if delete_source_after_copy else "copy"
    logger.info("Copying tree", src=str(source), dst=str(destination), delete_source=delete_source_after_copy)

    # A destination nested inside the source must not be copied into itself.
    dest_resolved = destination.resolve()
    for entry in walk(source, exclude=[destination]):
        if entry.kind == "error":
            record(ItemOutcome(action="list", path=str(entry.path), ok=False, error=entry.error))
            continue

        target = destination / entry.path.relative_to(source)

        if entry.kind == "directory":
            if entry.path.resolve() == dest_resolved:
                continue
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as err:
                record(ItemOutcome(action="mkdir", path=str(entry.path), target=str(target), ok=False, error=err.strerror or str(err)))
            else:
                record(ItemOutcome(action="mkdir", path=str(entry.path), target=str(target)))
            continue

        try:
            copy_file(entry.path, target)
            if delete_source_after_copy:
                entry.path.unlink()
        except OSError as err:
            logger.warning("File copy failed", src=str(entry.path), dst=str(target), error=str(err))
            record(ItemOutcome(action=file_action, path=str(entry.path), target=str(target), ok=False, error=err.strerror or str(err)))
        else:
            logger.debug("File copied", src=str(entry.path), dst=str(target), action=file_action)
            record(ItemOutcome(action=file_action, path=str(entry.path), target=str(target)))

    return result


def backup(
    working_directory: Path,
    source: str,
    destination: str | None = None,
    progress: ProgressCallback | None = None,
) -> OperationResult:
    """Copy ``source`` (file or directory) into ``destination`` under its own name.

    Both arguments are relative to ``working_directory``; ``destination``
    defaults to it.
    """
    if not source:
        raise UsageError("Expected source path")

    src_path = PathResolver.resolve(working_directory, source)
    dest_dir = PathResolver.resolve(working_directory, destination) if destination else Path(working_directory)
    target = dest_dir / src_path.name

    if src_path.is_dir():
        return copy_tree(src_path, target, delete_source_after_copy=False, progress=progress)

    if not src_path.exists():
        raise NotFoundError(f"The path '{src_path}' doesn't exist", {"path": str(src_path)})
    if PathResolver.same_location(src_path, target):
        raise UsageError("Source and destination are the same file", {"path": str(src_path)})

    result = OperationResult()
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        copy_file(src_path, target)
    except OSError as err:
        outcome = ItemOutcome(action="copy", path=str(src_path), target=str(target), ok=False, error=err.strerror or str(err))
    else:
        outcome = ItemOutcome(action="copy", path=str(src_path), target=str(target))
    result.outcomes.append(outcome)
    if progress is not None:
        progress(outcome)
    return result


def empty(
    working_directory: Path,
    directory: str,
    progress: ProgressCallback | None = None,
) -> OperationResult:
    """Move every file below ``directory`` up into ``working_directory``.

    Subdirectories are recreated under the working directory and the source
    directory shells are left behind, empty.
    """
    if not directory:
        raise UsageError("Expected a directory path")

    source = PathResolver.resolve(working_directory, directory)
    if not source.is_dir():
        raise NotFoundError(f"'{directory}' is not a directory", {"path": str(source)})
    return copy_tree(source, Path(working_directory), delete_source_after_copy=True, progress=progress)
