"""Depth-first directory walking driven by an explicit work-list."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Union

from treeshell.filesystem.types import DirectoryListing, WalkEntry
from treeshell.infrastructure.logger import logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

# A pending step is either an entry ready to yield or a directory to list,
# carried with its level and the (st_dev, st_ino) keys of its ancestors.
_Pending = Union[WalkEntry, tuple[Path, int, frozenset[tuple[int, int]]]]


def list_directory(path: Path) -> DirectoryListing:
    """List the immediate files and subdirectories of ``path``, sorted by name.

    Anything that is not a directory (including broken symlinks) counts as a
    file. Raises OSError if the directory cannot be read.
    """
    files: list[Path] = []
    directories: list[Path] = []
    for entry in sorted(Path(path).iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            directories.append(entry)
        else:
            files.append(entry)
    return DirectoryListing(path=Path(path), files=files, directories=directories)


def walk(
    root: Path,
    *,
    max_depth: int | None = None,
    dirs_first: bool = False,
    exclude: Iterable[Path] = (),
) -> Iterator[WalkEntry]:
    """Yield the entries below ``root`` in depth-first order.

    With ``dirs_first`` False (search, copy) each directory's files come
    before its subdirectories and every subdirectory entry is immediately
    followed by its own subtree. With ``dirs_first`` True (tree layout) the
    subdirectories and their subtrees come first and the files last.

    ``max_depth`` bounds descent: subdirectories found at level ``n`` are
    still yielded but only listed while ``n < max_depth``. Directories in
    ``exclude`` are yielded but never listed.

    A directory that cannot be listed, or that is reached again below itself
    through a symlink, yields a single ``error`` entry and its siblings carry
    on. Other paths to an already walked directory are walked again.
    """
    excluded = {Path(p).resolve() for p in exclude}
    stack: list[_Pending] = [(Path(root), 0, frozenset())]

    while stack:
        item = stack.pop()
        if isinstance(item, WalkEntry):
            yield item
            continue

        directory, level, ancestors = item
        try:
            info = os.stat(directory)
            key = (info.st_dev, info.st_ino)
            if key in ancestors:
                logger.warning("Skipping symlink cycle", path=str(directory))
                yield WalkEntry(path=directory, kind="error", depth=level, error="symlink cycle: directory contains itself")
                continue
            listing = list_directory(directory)
        except OSError as err:
            logger.warning("Cannot list directory", path=str(directory), error=str(err))
            yield WalkEntry(path=directory, kind="error", depth=level, error=err.strerror or str(err))
            continue

        descend = max_depth is None or level < max_depth
        lineage = ancestors | {key}
        pending: list[_Pending] = []
        file_entries = [WalkEntry(path=f, kind="file", depth=level) for f in listing.files]
        if not dirs_first:
            pending.extend(file_entries)
        for sub in listing.directories:
            pending.append(WalkEntry(path=sub, kind="directory", depth=level))
            if descend and not (excluded and sub.resolve() in excluded):
                pending.append((sub, level + 1, lineage))
        if dirs_first:
            pending.extend(file_entries)

        stack.extend(reversed(pending))
