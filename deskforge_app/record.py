"""Reading and writing ``.desktop`` launcher records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .constants import DESKTOP_HEADER
from .errors import PersistenceError, RecordReadError
from .fields import CATEGORY_NONE, FieldId, TargetKind
from .state import FormState

logger = logging.getLogger(__name__)

ENV_COMMAND = "env"


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def _is_assignment(token: str) -> bool:
    return "=" in token and not token.startswith("-")


def compose_exec(launcher: str, exec_text: str) -> str:
    """Combine a launcher prefix with the Exec text.

    With an ``env`` prefix the variable assignments have to precede the
    program, while any flags in the prefix belong to the program, so they
    are moved after it::

        compose_exec("env GDK_BACKEND=x11 --no-sandbox", "/opt/app %U")
        -> "env GDK_BACKEND=x11 /opt/app --no-sandbox %U"
    """
    launcher = launcher.strip()
    if not launcher:
        return exec_text
    exec_text = exec_text.strip()
    if not exec_text:
        return launcher

    prefix = launcher.split()
    if prefix[0] != ENV_COMMAND:
        return f"{launcher} {exec_text}"

    assignments = [token for token in prefix[1:] if _is_assignment(token)]
    flags = [token for token in prefix[1:] if not _is_assignment(token)]
    program, _, arguments = exec_text.partition(" ")
    parts = [ENV_COMMAND, *assignments, program, *flags]
    if arguments:
        parts.append(arguments.strip())
    return " ".join(parts)


def serialize(state: FormState) -> list[str]:
    """Return the record lines for ``state`` in their on-disk order."""
    target = state.launch_target()
    lines = [DESKTOP_HEADER, f"Name={state.name}"]

    if target.kind is TargetKind.URL:
        lines.append(f"URL={target.text}")
    else:
        lines.append(f"Exec={compose_exec(state.launcher, target.text)}")

    lines.append(f"Icon={state.text(FieldId.ICON)}")
    version = state.text(FieldId.VERSION)
    if version:
        lines.append(f"Version={version}")
    lines.append(f"Comment={state.text(FieldId.COMMENT)}")
    actions = state.text(FieldId.ACTION)
    if actions:
        lines.append(f"Actions={actions}")
    lines.append(f"NoDisplay={format_bool(state.toggles[FieldId.NO_DISPLAY])}")
    lines.append(f"StartupNotify={format_bool(state.toggles[FieldId.STARTUP_NOTIFY])}")
    lines.append(f"Terminal={format_bool(state.toggles[FieldId.TERMINAL])}")
    lines.append(f"Type={state.type_value}")
    category = state.category
    lines.append(f"Category={'' if category == CATEGORY_NONE else category}")
    return lines


def parse_record(lines: Iterable[str]) -> dict[str, str]:
    """Parse ``Key=Value`` lines into a dict.

    Section headers, comments and lines without ``=`` are skipped. Only the
    first ``=`` splits, so values may contain further ``=`` signs.
    """
    record: dict[str, str] = {}
    for line in lines:
        line = line.rstrip("\r\n")
        if not line or line.startswith(("#", "[")):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        record[key.strip()] = value
    return record


def read_record(path: Path) -> dict[str, str]:
    """Parse the record at ``path``.

    Bytes that are not valid UTF-8 are replaced rather than aborting the
    load. Any ``OSError`` is re-raised as :class:`RecordReadError`.
    """
    try:
        with path.open("r", encoding="utf-8", errors="replace") as handle:
            return parse_record(handle)
    except OSError as exc:
        logger.error("Failed to read %s: %s", path, exc)
        raise RecordReadError(path, exc.strerror or str(exc)) from exc


def write_record(path: Path, lines: Iterable[str]) -> None:
    """Truncate ``path`` and write one line per entry.

    Any ``OSError`` is re-raised as :class:`PersistenceError`.
    """
    try:
        with path.open("w", encoding="utf-8") as handle:
            for line in lines:
                handle.write(f"{line}\n")
    except OSError as exc:
        logger.error("Failed to write %s: %s", path, exc)
        raise PersistenceError(path, exc.strerror or str(exc)) from exc
    logger.info("Wrote launcher %s", path)
