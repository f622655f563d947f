"""Shared fixtures for shell and filesystem tests."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import pytest
from rich.console import Console

from treeshell.infrastructure.config import ShellSettings
from treeshell.shell.console import ShellConsole
from treeshell.shell.context import ShellContext

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def _write_files(root: Path, files: dict[str, str]) -> Path:
    for rel_path, content in files.items():
        full_path = root / rel_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture()
def write_files() -> Callable[[Path, dict[str, str]], Path]:
    """Create files (and parent directories) from a {relative path: content} map."""
    return _write_files


@pytest.fixture()
def sample_tree(tmp_path: Path) -> Path:
    """root/x.txt, root/sub/y.txt, root/sub/deep/z.txt"""
    return _write_files(
        tmp_path / "root",
        {
            "x.txt": "x content",
            "sub/y.txt": "y content",
            "sub/deep/z.txt": "z content",
        },
    )


@pytest.fixture()
def shell_context(sample_tree: Path) -> ShellContext:
    """Context rooted at sample_tree with output captured in memory."""
    console = Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)
    return ShellContext(cwd=sample_tree, console=ShellConsole(console), settings=ShellSettings())


@pytest.fixture()
def shell_output(shell_context: ShellContext) -> Callable[[], str]:
    """Return everything written to the shell console so far."""

    def read() -> str:
        return shell_context.console.console.file.getvalue()  # type: ignore[attr-defined]

    return read


def relative_files(root: Path) -> dict[str, bytes]:
    return {str(p.relative_to(root)): p.read_bytes() for p in root.rglob("*") if p.is_file()}


@pytest.fixture()
def snapshot() -> Callable[[Path], dict[str, bytes]]:
    """Map of every file below a root to its bytes, keyed by relative path."""
    return relative_files
