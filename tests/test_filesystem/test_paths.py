"""Tests for path resolution."""

from __future__ import annotations

from pathlib import Path

from treeshell.filesystem.paths import PathResolver


class TestPathResolver:
    def test_resolve_joins_relative_fragment(self, tmp_path: Path) -> None:
        assert PathResolver.resolve(tmp_path, "a/b.txt") == tmp_path / "a" / "b.txt"

    def test_resolve_normalizes_parent_segments(self, tmp_path: Path) -> None:
        assert PathResolver.resolve(tmp_path / "a", "../b") == tmp_path / "b"

    def test_absolute_fragment_replaces_base(self, tmp_path: Path) -> None:
        other = tmp_path / "other"
        assert PathResolver.resolve(tmp_path / "base", str(other)) == other

    def test_relative_between_paths(self, tmp_path: Path) -> None:
        assert PathResolver.relative(tmp_path, tmp_path / "sub" / "z.txt") == Path("sub") / "z.txt"
        assert PathResolver.relative(tmp_path / "a", tmp_path / "b") == Path("..") / "b"

    def test_is_within(self, tmp_path: Path) -> None:
        assert PathResolver.is_within(tmp_path, tmp_path)
        assert PathResolver.is_within(tmp_path, tmp_path / "x" / "y")
        assert not PathResolver.is_within(tmp_path / "x", tmp_path)
        assert not PathResolver.is_within(tmp_path / "x", tmp_path / "xy")
