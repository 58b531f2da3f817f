"""Exception types raised by DeskForge."""

from __future__ import annotations

from pathlib import Path


class DeskforgeError(Exception):
    """Base class for errors reported to the user on exit."""


class PersistenceError(DeskforgeError):
    """Writing a launcher record failed; the session cannot continue."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Can't save {path}: {reason}")
        self.path = path
        self.reason = reason


class RecordReadError(DeskforgeError):
    """An existing launcher record could not be opened or read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Can't read {path}: {reason}")
        self.path = path
        self.reason = reason


class LauncherExistsError(DeskforgeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"File name already exists: {name}")
        self.name = name


class LauncherNotFoundError(DeskforgeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"File doesn't exist: {name}")
        self.name = name


class FormInvariantError(RuntimeError):
    """The form state machine reached a state it should never be in."""
