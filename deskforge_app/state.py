"""Form state containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, NamedTuple, Optional

from .fields import (
    CATEGORY_NONE,
    CHOICE_OPTIONS,
    DEFAULT_TEXT,
    DEFAULT_TOGGLES,
    FIELD_KINDS,
    FieldId,
    FieldKind,
    TargetKind,
    target_kind_for,
)
from .line_buffer import LineBuffer


class Mode(Enum):
    NORMAL = "NORMAL"
    INSERT = "INSERT"


class PendingSequence(Enum):
    """Progress through the two-key Normal mode commands (``gg``, ``dd``)."""

    IDLE = "idle"
    AWAITING_SECOND_G = "g"
    AWAITING_SECOND_D = "d"


class LaunchTarget(NamedTuple):
    kind: TargetKind
    text: str


@dataclass
class Dropdown:
    """Overlay listing the options of a choice row.

    ``highlighted`` only previews; the target row's buffer changes when the
    overlay is confirmed.
    """

    target: FieldId
    options: tuple[str, ...]
    highlighted: int = 0

    @property
    def preview(self) -> str:
        return self.options[self.highlighted]

    def move_down(self) -> None:
        self.highlighted = (self.highlighted + 1) % len(self.options)

    def move_up(self) -> None:
        self.highlighted = max(0, self.highlighted - 1)


def default_buffers() -> dict[FieldId, LineBuffer]:
    """Return one buffer per text, path and choice row, seeded with defaults."""
    return {
        field_id: LineBuffer(DEFAULT_TEXT.get(field_id, ""))
        for field_id, kind in FIELD_KINDS.items()
        if kind in (FieldKind.TEXT, FieldKind.PATH, FieldKind.CHOICE)
    }


def default_toggles() -> dict[FieldId, bool]:
    return dict(DEFAULT_TOGGLES)


@dataclass
class FormState:
    """Encapsulate mutable form state for one session."""

    applications_dir: Path
    buffers: dict[FieldId, LineBuffer] = field(default_factory=default_buffers)
    toggles: dict[FieldId, bool] = field(default_factory=default_toggles)
    focus: FieldId = FieldId.NAME
    mode: Mode = Mode.NORMAL
    dropdown: Optional[Dropdown] = None
    pending: PendingSequence = PendingSequence.IDLE
    edit: bool = False
    exit: bool = False
    launcher: str = ""
    source_path: Optional[Path] = None
    saved_path: Optional[Path] = None

    def text(self, field_id: FieldId) -> str:
        return self.buffers[field_id].value

    def set_text(self, field_id: FieldId, value: str) -> None:
        self.buffers[field_id].set(value)

    @property
    def name(self) -> str:
        return self.text(FieldId.NAME)

    @property
    def type_value(self) -> str:
        return self.text(FieldId.TYPE)

    @property
    def category(self) -> str:
        return self.text(FieldId.CATEGORY)

    def launch_target(self) -> LaunchTarget:
        """Return the Exec/URL slot tagged by the current Type."""
        return LaunchTarget(target_kind_for(self.type_value), self.text(FieldId.EXEC))

    def display_text(self, field_id: FieldId) -> str:
        """Return a row's text, showing the dropdown preview while it is open."""
        if self.dropdown is not None and self.dropdown.target == field_id:
            return self.dropdown.preview
        return self.text(field_id)

    def toggle(self, field_id: FieldId) -> None:
        self.toggles[field_id] = not self.toggles[field_id]

    def open_dropdown(self, field_id: FieldId) -> None:
        self.dropdown = Dropdown(field_id, CHOICE_OPTIONS[field_id])

    def close_dropdown(self) -> None:
        self.dropdown = None

    def request_exit(self) -> None:
        self.exit = True


def parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


RECORD_TEXT_KEYS: dict[str, FieldId] = {
    "Name": FieldId.NAME,
    "Exec": FieldId.EXEC,
    "URL": FieldId.EXEC,
    "Icon": FieldId.ICON,
    "Version": FieldId.VERSION,
    "Comment": FieldId.COMMENT,
    "Actions": FieldId.ACTION,
    "Type": FieldId.TYPE,
    "Category": FieldId.CATEGORY,
}

RECORD_TOGGLE_KEYS: dict[str, FieldId] = {
    "NoDisplay": FieldId.NO_DISPLAY,
    "StartupNotify": FieldId.STARTUP_NOTIFY,
    "Terminal": FieldId.TERMINAL,
}


def new_form(
    applications_dir: Path,
    name: Optional[str] = None,
    launcher: str = "",
) -> FormState:
    """Create a form for a new launcher, optionally pre-filling the name."""
    state = FormState(applications_dir=applications_dir, launcher=launcher)
    if name:
        state.set_text(FieldId.NAME, name)
        state.focus = FieldId.EXEC
    return state


def form_from_record(
    applications_dir: Path,
    record: Mapping[str, str],
    name: Optional[str] = None,
    launcher: str = "",
    source_path: Optional[Path] = None,
) -> FormState:
    """Create an edit-mode form seeded from a parsed launcher record.

    Keys the form does not know are ignored; rows missing from ``record``
    keep their defaults. Saving writes back to ``source_path`` when given.
    """
    state = FormState(
        applications_dir=applications_dir,
        edit=True,
        launcher=launcher,
        source_path=source_path,
    )
    if name:
        state.set_text(FieldId.NAME, name)
        state.focus = FieldId.EXEC

    for key, value in record.items():
        if key in RECORD_TEXT_KEYS:
            state.set_text(RECORD_TEXT_KEYS[key], value)
        elif key in RECORD_TOGGLE_KEYS:
            state.toggles[RECORD_TOGGLE_KEYS[key]] = parse_bool(value)

    if not state.category:
        state.set_text(FieldId.CATEGORY, CATEGORY_NONE)
    return state
