"""Filesystem engine domain types."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

Action = Literal["copy", "move", "mkdir", "list", "rename", "remove"]


@dataclass(frozen=True)
class DirectoryListing:
    """Immediate children of a directory as observed by one listing call."""

    path: Path
    files: list[Path]
    directories: list[Path]


@dataclass(frozen=True)
class WalkEntry:
    """One step of a directory walk.

    ``depth`` is the level of the directory that contains ``path``; the
    root's immediate children are at depth 0. ``kind == "error"`` marks a
    directory whose subtree could not be walked; ``error`` holds the reason
    and ``depth`` is the level its children would have had.
    """

    path: Path
    kind: Literal["file", "directory", "error"]
    depth: int
    error: str | None = None


class ItemOutcome(BaseModel):
    action: Action
    path: str
    target: str | None = None
    ok: bool = True
    error: str | None = None

    def describe(self) -> str:
        if not self.ok:
            return f"Error ({self.action}) '{self.path}': {self.error}"
        if self.action == "copy":
            return f"Copied file '{self.path}' to '{self.target}'"
        if self.action == "move":
            return f"Moved file '{self.path}' to '{self.target}'"
        if self.action == "rename":
            return f"Renamed '{self.path}' to '{self.target}'"
        if self.action == "mkdir":
            if self.target:
                return f"Copied directory '{self.path}' to '{self.target}'"
            return f"Created directory '{self.path}'"
        if self.action == "remove":
            return f"Removed '{self.path}'"
        return f"Listed '{self.path}'"


class OperationResult(BaseModel):
    outcomes: list[ItemOutcome] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)

    @property
    def failures(self) -> list[ItemOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def succeeded(self) -> list[ItemOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]


class SearchResult(BaseModel):
    root: Path
    matches: list[Path] = Field(default_factory=list)
    failures: list[ItemOutcome] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.matches)

    @property
    def first(self) -> Path | None:
        return self.matches[0] if self.matches else None


class TreeResult(BaseModel):
    text: str
    failures: list[ItemOutcome] = Field(default_factory=list)
