"""Exceptions raised while materialising a project skeleton."""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Raised when skeleton generation aborts.

    The tree under the scaffold root is left as it was at the point of
    failure; nothing is rolled back.
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class ScaffoldExistsError(ScaffoldError):
    """A directory or file the skeleton needs is already present."""


class ScaffoldIOError(ScaffoldError):
    """The file system rejected a create, write or close."""
