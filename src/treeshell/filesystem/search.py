"""Exact-name and substring file search across a directory subtree."""

from __future__ import annotations

from pathlib import Path

from treeshell.filesystem.errors import NotFoundError, UsageError
from treeshell.filesystem.paths import PathResolver
from treeshell.filesystem.types import ItemOutcome, SearchResult
from treeshell.filesystem.walker import walk


def _check_root(root: Path) -> Path:
    root = Path(root)
    if not root.is_dir():
        raise NotFoundError(f"'{root}' is not a directory", {"path": str(root)})
    return root


def _failure(path: Path, error: str | None) -> ItemOutcome:
    return ItemOutcome(action="list", path=str(path), ok=False, error=error)


def find_exact(root: Path, name: str) -> SearchResult:
    """Find the first file whose base name is exactly ``name``.

    Files of a directory are checked before its subdirectories, so a
    shallower or earlier-listed match wins. ``result.first`` is None when
    nothing matched.
    """
    if not name:
        raise UsageError("Expected filename")
    root = _check_root(root)

    result = SearchResult(root=root)
    for entry in walk(root):
        if entry.kind == "error":
            result.failures.append(_failure(entry.path, entry.error))
        elif entry.kind == "file" and entry.path.name == name:
            result.matches.append(entry.path)
            break
    return result


def find_substring(root: Path, fragment: str) -> SearchResult:
    """Collect every file whose full path contains ``fragment``.

    Matching is case-sensitive and runs against the whole path, so a
    fragment naming a directory above or below ``root`` matches every file
    under it. Matches keep discovery order.
    """
    if not fragment:
        raise UsageError("Expected filename")
    root = _check_root(root)

    result = SearchResult(root=root)
    for entry in walk(root):
        if entry.kind == "error":
            result.failures.append(_failure(entry.path, entry.error))
        elif entry.kind == "file" and fragment in str(entry.path):
            result.matches.append(entry.path)
    return result


def format_matches(result: SearchResult, relative: bool = False) -> list[str]:
    """Render matches as absolute paths or paths relative to the search root."""
    if relative:
        return [str(PathResolver.relative(result.root, match)) for match in result.matches]
    return [str(match) for match in result.matches]
