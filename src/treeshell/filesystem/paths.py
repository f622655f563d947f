"""Path construction relative to the shell's working directory."""

from __future__ import annotations

import os
from pathlib import Path


class PathResolver:
    """Joins user fragments onto a base directory and computes display paths."""

    @staticmethod
    def resolve(base: Path, fragment: str) -> Path:
        """Absolute, normalized path for ``fragment`` relative to ``base``.

        An absolute fragment replaces the base. Symlinks are not resolved, so
        ``rm link`` acts on the link and not on its target.
        """
        joined = Path(base) / os.path.expanduser(fragment)
        return Path(os.path.normpath(os.path.abspath(joined)))

    @staticmethod
    def relative(base: Path, target: Path) -> Path:
        """Path of ``target`` relative to ``base``; may contain ``..``."""
        return Path(os.path.relpath(target, base))

    @staticmethod
    def is_within(root: Path, candidate: Path) -> bool:
        """True if ``candidate`` is ``root`` or lies underneath it."""
        root_resolved = Path(root).resolve()
        resolved = Path(candidate).resolve()
        return resolved == root_resolved or root_resolved in resolved.parents

    @staticmethod
    def same_location(first: Path, second: Path) -> bool:
        return Path(first).resolve() == Path(second).resolve()
