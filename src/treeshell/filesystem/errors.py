"""Error taxonomy for shell operations."""

from __future__ import annotations

from typing import Any


class ShellError(Exception):
    """Expected failure of a command, reported to the user as an error line."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}

    @property
    def message(self) -> str:
        return self.args[0]


class UsageError(ShellError):
    """A required argument is missing or malformed. Nothing was started."""


class NotFoundError(ShellError):
    """A referenced file or directory does not exist."""


class IOFailure(ShellError):
    """An individual filesystem operation failed."""

    @classmethod
    def from_os_error(cls, path: object, err: OSError) -> IOFailure:
        reason = err.strerror or str(err)
        return cls(f"{path}: {reason}", {"path": str(path), "errno": err.errno})
