"""Single-directory mutations: bulk rename, create and remove."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from treeshell.filesystem.copying import copy_file
from treeshell.filesystem.errors import IOFailure, NotFoundError, UsageError
from treeshell.filesystem.paths import PathResolver
from treeshell.filesystem.types import ItemOutcome, OperationResult
from treeshell.filesystem.walker import list_directory
from treeshell.infrastructure.logger import logger

if TYPE_CHECKING:
    from collections.abc import Callable


def _check_name_part(value: str, label: str) -> None:
    if not value:
        raise UsageError(f"Expected {label}")
    if os.sep in value or (os.altsep and os.altsep in value):
        raise UsageError(f"The {label} must not contain a path separator", {label: value})


def _rename_files(directory: Path, new_name: Callable[[Path], str]) -> OperationResult:
    """Copy each immediate file of ``directory`` to its new name, then delete it.

    The listing is taken once up front so renamed files are not picked up
    again. Not transactional: files renamed before a failure stay renamed.
    """
    directory = Path(directory)
    try:
        listing = list_directory(directory)
    except FileNotFoundError as err:
        raise NotFoundError(f"'{directory}' does not exist", {"path": str(directory)}) from err
    except OSError as err:
        raise IOFailure.from_os_error(directory, err) from err

    result = OperationResult()
    for old_path in listing.files:
        new_path = directory / new_name(old_path)
        if new_path.exists() or new_path.is_symlink():
            result.outcomes.append(
                ItemOutcome(action="rename", path=str(old_path), target=str(new_path), ok=False, error="target already exists")
            )
            continue
        try:
            copy_file(old_path, new_path)
            old_path.unlink()
        except OSError as err:
            logger.warning("Rename failed", src=str(old_path), dst=str(new_path), error=str(err))
            result.outcomes.append(
                ItemOutcome(action="rename", path=str(old_path), target=str(new_path), ok=False, error=err.strerror or str(err))
            )
        else:
            result.outcomes.append(ItemOutcome(action="rename", path=str(old_path), target=str(new_path)))
    return result


def rename_prefix(directory: Path, prefix: str) -> OperationResult:
    """Prepend ``prefix`` to the name of every file directly in ``directory``."""
    _check_name_part(prefix, "prefix")
    return _rename_files(directory, lambda path: prefix + path.name)


def rename_suffix(directory: Path, suffix: str) -> OperationResult:
    """Insert ``suffix`` before the extension of every file directly in ``directory``.

    A leading dot does not start an extension, so ``.bashrc`` becomes
    ``.bashrc_s``.
    """
    _check_name_part(suffix, "suffix")
    return _rename_files(directory, lambda path: path.stem + suffix + path.suffix)


def remove(working_directory: Path, target: str, restrict_to_working_directory: bool = False) -> OperationResult:
    """Delete a file, a symlink, or a directory with all of its contents.

    Refuses the working directory itself and its ancestors. With
    ``restrict_to_working_directory`` paths outside it are refused too.
    Deletion failures are returned as a failed outcome.
    """
    if not target:
        raise UsageError("Expected a file or directory name")

    path = PathResolver.resolve(working_directory, target)
    if not path.exists() and not path.is_symlink():
        raise NotFoundError(f"'{path.name}' does not exist", {"path": str(path)})

    if not path.is_symlink() and PathResolver.is_within(path, working_directory):
        raise UsageError("Refusing to remove the working directory or one of its parents", {"path": str(path)})
    if restrict_to_working_directory and not PathResolver.is_within(working_directory, path.parent):
        raise UsageError(f"'{path}' is outside the working directory", {"path": str(path)})

    result = OperationResult()
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as err:
        logger.warning("Remove failed", path=str(path), error=str(err))
        result.outcomes.append(ItemOutcome(action="remove", path=path.name, ok=False, error=err.strerror or str(err)))
    else:
        logger.info("Removed", path=str(path))
        result.outcomes.append(ItemOutcome(action="remove", path=path.name))
    return result


def make_directory(working_directory: Path, name: str) -> Path:
    """Create a directory (and missing parents) relative to the working directory."""
    if not name:
        raise UsageError("Expected a directory name")
    path = PathResolver.resolve(working_directory, name)
    if path.exists():
        raise UsageError(f"'{name}' already exists", {"path": str(path)})
    try:
        path.mkdir(parents=True)
    except OSError as err:
        raise IOFailure.from_os_error(path, err) from err
    return path


def create_file(working_directory: Path, name: str) -> Path:
    """Create an empty file, or update the timestamps of an existing one."""
    if not name:
        raise UsageError("Expected a file name")
    path = PathResolver.resolve(working_directory, name)
    try:
        path.touch()
    except OSError as err:
        raise IOFailure.from_os_error(path, err) from err
    return path
