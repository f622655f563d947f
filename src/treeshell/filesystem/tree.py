"""Indented text rendering of a directory subtree."""

from __future__ import annotations

from pathlib import Path

from treeshell.filesystem.errors import NotFoundError, UsageError
from treeshell.filesystem.types import ItemOutcome, TreeResult
from treeshell.filesystem.walker import walk

DEFAULT_DEPTH = 2
DEFAULT_INDENT = "\t"
DEFAULT_MARKER = "└"


def render_tree(
    root: Path,
    max_depth: int = DEFAULT_DEPTH,
    indent: str = DEFAULT_INDENT,
    marker: str = DEFAULT_MARKER,
) -> TreeResult:
    """Render ``root`` as one line per entry, down to ``max_depth`` descents.

    Each directory's subdirectories come first, each followed by its own
    subtree, then its files. Lines are ``indent * depth`` plus ``marker``
    (below the root level only) plus the entry name. ``max_depth=0`` shows
    just the root's immediate children.
    """
    if max_depth < 0:
        raise UsageError("Depth must be a non-negative integer", {"depth": max_depth})
    root = Path(root)
    if not root.is_dir():
        raise NotFoundError(f"'{root}' is not a directory", {"path": str(root)})

    lines: list[str] = []
    failures: list[ItemOutcome] = []
    for entry in walk(root, max_depth=max_depth, dirs_first=True):
        if entry.kind == "error":
            failures.append(ItemOutcome(action="list", path=str(entry.path), ok=False, error=entry.error))
            continue
        prefix = indent * entry.depth + (marker if entry.depth > 0 else "")
        lines.append(f"{prefix}{entry.path.name}\n")

    return TreeResult(text="".join(lines), failures=failures)
