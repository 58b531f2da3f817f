"""Per-user locations for launcher records and logs."""

from __future__ import annotations

import os
from pathlib import Path

from .constants import APP_NAME, DESKTOP_SUFFIX


def data_dir() -> Path:
    """Return the per-user data directory (``XDG_DATA_HOME``)."""
    override = os.environ.get("DESKFORGE_DATA_DIR")
    if override:
        return Path(override).expanduser()
    xdg_data_home = os.environ.get("XDG_DATA_HOME")
    if xdg_data_home:
        return Path(xdg_data_home)
    return Path.home() / ".local" / "share"


def state_dir() -> Path:
    xdg_state_home = os.environ.get("XDG_STATE_HOME")
    base = Path(xdg_state_home) if xdg_state_home else Path.home() / ".local" / "state"
    return base / APP_NAME


def applications_dir() -> Path:
    return data_dir() / "applications"


def ensure_applications_dir() -> Path:
    """Create the applications directory if needed and return it."""
    path = applications_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def normalize_desktop_name(name: str) -> str:
    """Return ``name`` trimmed and carrying the ``.desktop`` suffix."""
    trimmed = name.strip()
    if trimmed.endswith(DESKTOP_SUFFIX):
        return trimmed
    return f"{trimmed}{DESKTOP_SUFFIX}"


def launcher_path(directory: Path, name: str) -> Path:
    return directory / normalize_desktop_name(name)
