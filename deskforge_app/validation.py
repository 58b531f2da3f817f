"""Per-field verdicts and the save-gate.

Everything here is a pure read of :class:`FormState` plus filesystem probes;
nothing mutates the form, so the renderer may call it on every frame.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol, Sequence

from .fields import (
    ICON_EXTENSIONS,
    LENIENT_TYPES,
    FieldId,
    TargetKind,
)
from .paths import launcher_path
from .state import FormState

URL_SCHEMES: tuple[str, ...] = (
    "file://",
    "https://",
    "http://",
    "mailto:",
    "smb://",
    "trash:///",
    "recent:///",
)
FILE_SCHEME = "file://"
SPECIAL_PATH_MARKER = "//"


class Verdict(Enum):
    """Outcome of validating one row, with the suffix shown after its label."""

    BLANK = ""
    EMPTY = " - Empty"
    NOT_FOUND = " - Not found"
    WRONG_TYPE = " - Unexpected type"
    INVALID_SCHEME = " - Invalid scheme"
    ALREADY_EXISTS = " - Already exists"
    INVALID_NAME = " - Invalid name"
    IGNORED = " - Ignored"
    OK = " - OK"

    @property
    def suffix(self) -> str:
        return self.value

    @property
    def passes(self) -> bool:
        """Return ``True`` for verdicts that do not block saving."""
        return self in (Verdict.OK, Verdict.IGNORED)


class FilesystemProbe(Protocol):
    def exists(self, path: str) -> bool: ...

    def is_executable(self, path: str) -> bool: ...


class LocalProbe:
    """Probe backed by the real filesystem."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_executable(self, path: str) -> bool:
        return os.access(path, os.X_OK)


LOCAL_PROBE = LocalProbe()


def _candidate_executable(text: str) -> Optional[str]:
    """Return the first whitespace token that looks like a path."""
    for part in text.split():
        if os.sep in part:
            return part
    return None


def _has_special_path(text: str) -> bool:
    return any(SPECIAL_PATH_MARKER in part for part in text.split())


def check_url(url: str, probe: FilesystemProbe) -> Verdict:
    url = url.strip()
    if not url:
        return Verdict.EMPTY
    if not url.startswith(URL_SCHEMES):
        return Verdict.INVALID_SCHEME
    if url.startswith(FILE_SCHEME) and not probe.exists(url[len(FILE_SCHEME) :]):
        return Verdict.NOT_FOUND
    return Verdict.OK


def check_exec(text: str, type_value: str, probe: FilesystemProbe) -> Verdict:
    trimmed = text.strip()
    candidate = _candidate_executable(trimmed) or trimmed

    if type_value in LENIENT_TYPES and not probe.exists(candidate):
        return Verdict.IGNORED
    if not trimmed:
        return Verdict.EMPTY
    if _has_special_path(trimmed):
        return Verdict.OK

    exec_path = _candidate_executable(trimmed)
    if exec_path is None:
        # Bare command names are resolved through PATH by the launcher.
        return Verdict.OK
    if not probe.exists(exec_path):
        return Verdict.NOT_FOUND
    if not probe.is_executable(exec_path):
        return Verdict.WRONG_TYPE
    return Verdict.OK


def check_icon(
    text: str,
    type_value: str,
    probe: FilesystemProbe,
    extensions: Sequence[str] = ICON_EXTENSIONS,
) -> Verdict:
    trimmed = text.strip()
    if type_value in LENIENT_TYPES and not probe.exists(trimmed):
        return Verdict.IGNORED
    if not trimmed:
        return Verdict.EMPTY
    suffix = Path(trimmed).suffix.lstrip(".").lower()
    if suffix and suffix in (ext.lower() for ext in extensions):
        return Verdict.OK
    return Verdict.WRONG_TYPE


def is_valid_file_name(name: str) -> bool:
    """Return ``False`` for names that would leave the applications directory."""
    return os.sep not in name and (os.altsep is None or os.altsep not in name)


def check_name(state: FormState, probe: FilesystemProbe) -> Verdict:
    if state.edit:
        return Verdict.IGNORED
    name = state.name.strip()
    if not name:
        return Verdict.EMPTY
    if not is_valid_file_name(name):
        return Verdict.INVALID_NAME
    if probe.exists(str(launcher_path(state.applications_dir, name))):
        return Verdict.ALREADY_EXISTS
    return Verdict.OK


def check_launch_target(state: FormState, probe: FilesystemProbe) -> Verdict:
    target = state.launch_target()
    if target.kind is TargetKind.URL:
        return check_url(target.text, probe)
    return check_exec(target.text, state.type_value, probe)


def field_verdict(
    state: FormState, field_id: FieldId, probe: FilesystemProbe = LOCAL_PROBE
) -> Verdict:
    """Verdict for ``field_id`` regardless of focus."""
    if field_id == FieldId.NAME:
        return check_name(state, probe)
    if field_id == FieldId.EXEC:
        return check_launch_target(state, probe)
    if field_id == FieldId.ICON:
        return check_icon(state.text(FieldId.ICON), state.type_value, probe)
    return Verdict.BLANK


def validate(
    state: FormState, field_id: FieldId, probe: FilesystemProbe = LOCAL_PROBE
) -> Verdict:
    """Verdict to display for ``field_id``; unfocused rows show nothing."""
    if state.focus != field_id:
        return Verdict.BLANK
    return field_verdict(state, field_id, probe)


def can_save(state: FormState, probe: FilesystemProbe = LOCAL_PROBE) -> bool:
    """Return ``True`` when the form may be written out.

    Name must be present. When it decides the file name it must not contain
    a path separator, and when creating it must not collide with an
    existing launcher. The launch target must pass its checks for the
    current Type. The Icon verdict is advisory and never blocks.
    """
    name = state.name.strip()
    if not name:
        return False
    if state.source_path is None and not is_valid_file_name(name):
        return False
    if not state.edit and probe.exists(str(launcher_path(state.applications_dir, name))):
        return False
    return check_launch_target(state, probe).passes
