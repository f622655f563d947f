"""Tests for tree rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from treeshell.filesystem.errors import NotFoundError, UsageError
from treeshell.filesystem.tree import render_tree

if TYPE_CHECKING:
    from pathlib import Path


class TestRenderTree:
    @pytest.fixture(autouse=True)
    def _setup(self, sample_tree: Path) -> None:
        self.root = sample_tree

    def test_default_depth_renders_whole_sample(self) -> None:
        result = render_tree(self.root)
        assert result.text == "sub\n\t└deep\n\t\t└z.txt\n\t└y.txt\nx.txt\n"
        assert result.failures == []

    def test_depth_zero_lists_only_immediate_children(self) -> None:
        assert render_tree(self.root, 0).text == "sub\nx.txt\n"

    def test_depth_one_stops_below_first_level(self) -> None:
        assert render_tree(self.root, 1).text == "sub\n\t└deep\n\t└y.txt\nx.txt\n"

    def test_large_depth_matches_unbounded_rendering(self, write_files) -> None:
        write_files(self.root, {"a/b/c/d/e.txt": "e"})
        assert render_tree(self.root, 4).text == render_tree(self.root, 100).text
        assert "\t\t\t\t└e.txt\n" in render_tree(self.root, 4).text

    def test_custom_indent_and_marker(self) -> None:
        result = render_tree(self.root, 2, indent="  ", marker="|-")
        assert result.text == "sub\n  |-deep\n    |-z.txt\n  |-y.txt\nx.txt\n"

    def test_empty_directory_renders_empty_text(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()
        assert render_tree(empty).text == ""

    def test_negative_depth_is_usage_error(self) -> None:
        with pytest.raises(UsageError):
            render_tree(self.root, -1)

    def test_missing_root_raises_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError):
            render_tree(tmp_path / "nope")
