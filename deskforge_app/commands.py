"""Non-interactive launcher commands: list, remove and existence checks."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from .constants import DESKTOP_SUFFIX
from .errors import DeskforgeError, LauncherNotFoundError
from .paths import launcher_path, normalize_desktop_name

logger = logging.getLogger(__name__)


def launcher_exists(directory: Path, name: str) -> bool:
    """Return ``True`` if ``name`` (with or without suffix) is on disk."""
    if not name.strip():
        return False
    return launcher_path(directory, name).exists()


def desktop_files(directory: Path) -> list[Path]:
    return sorted(
        (path for path in directory.iterdir() if path.is_file() and path.suffix == DESKTOP_SUFFIX),
        key=lambda path: path.name,
    )


def list_launchers(directory: Path, out: TextIO) -> int:
    """Print every launcher in ``directory`` and return how many there are."""
    if not directory.is_dir():
        raise DeskforgeError("No applications directory found!")

    try:
        files = desktop_files(directory)
    except OSError as exc:
        raise DeskforgeError(f"Failed to read directory: {exc}") from exc

    out.write("[DESKFORGE]\n")
    for counter, path in enumerate(files, start=1):
        out.write(f"{counter}. {path.name}\n")
    out.write(f"Total: {len(files)}\n")
    logger.debug("Listed %d launchers in %s", len(files), directory)
    return len(files)


def remove_launcher(directory: Path, name: str) -> Path:
    """Delete the launcher called ``name`` and return its path."""
    file_name = normalize_desktop_name(name)
    path = directory / file_name
    if not path.exists():
        raise LauncherNotFoundError(file_name)
    path.unlink()
    logger.info("Removed launcher %s", path)
    return path
