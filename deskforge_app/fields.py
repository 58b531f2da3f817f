"""Field registry for the launcher form."""

from __future__ import annotations

from enum import Enum, IntEnum


class FieldId(IntEnum):
    """Form rows, in focus order."""

    NAME = 0
    EXEC = 1
    ICON = 2
    VERSION = 3
    COMMENT = 4
    ACTION = 5
    NO_DISPLAY = 6
    STARTUP_NOTIFY = 7
    TERMINAL = 8
    TYPE = 9
    CATEGORY = 10
    SAVE = 11
    CANCEL = 12


class FieldKind(Enum):
    TEXT = "text"
    PATH = "path"
    CHOICE = "choice"
    TOGGLE = "toggle"
    ACTION = "action"


class TargetKind(Enum):
    """Interpretation of the Exec/URL slot."""

    EXEC = "Exec"
    URL = "URL"


FIELD_COUNT = len(FieldId)
FIRST_FIELD = FieldId.NAME
LAST_FIELD = FieldId.CANCEL

FIELD_KINDS: dict[FieldId, FieldKind] = {
    FieldId.NAME: FieldKind.TEXT,
    FieldId.EXEC: FieldKind.PATH,
    FieldId.ICON: FieldKind.PATH,
    FieldId.VERSION: FieldKind.TEXT,
    FieldId.COMMENT: FieldKind.TEXT,
    FieldId.ACTION: FieldKind.TEXT,
    FieldId.NO_DISPLAY: FieldKind.TOGGLE,
    FieldId.STARTUP_NOTIFY: FieldKind.TOGGLE,
    FieldId.TERMINAL: FieldKind.TOGGLE,
    FieldId.TYPE: FieldKind.CHOICE,
    FieldId.CATEGORY: FieldKind.CHOICE,
    FieldId.SAVE: FieldKind.ACTION,
    FieldId.CANCEL: FieldKind.ACTION,
}

TYPE_APPLICATION = "Application"
TYPE_APPLICATION_OTHER = "Application (other)"
TYPE_LINK = "Link"
TYPE_DIRECTORY = "Directory"

TYPE_OPTIONS: tuple[str, ...] = (
    TYPE_APPLICATION,
    TYPE_APPLICATION_OTHER,
    TYPE_LINK,
    TYPE_DIRECTORY,
)

CATEGORY_NONE = "None"

CATEGORY_OPTIONS: tuple[str, ...] = (
    CATEGORY_NONE,
    "Audio",
    "Video",
    "Development",
    "Education",
    "Graphics",
    "Network",
    "Office",
    "Settings",
    "System",
)

CHOICE_OPTIONS: dict[FieldId, tuple[str, ...]] = {
    FieldId.TYPE: TYPE_OPTIONS,
    FieldId.CATEGORY: CATEGORY_OPTIONS,
}

# Types whose launch target may point at something that does not exist yet
LENIENT_TYPES = (TYPE_APPLICATION_OTHER, TYPE_DIRECTORY)

ICON_EXTENSIONS: tuple[str, ...] = ("png", "svg", "jpg")

FIELD_LABELS: dict[FieldId, str] = {
    FieldId.NAME: "Name",
    FieldId.EXEC: "Exec",
    FieldId.ICON: "Icon",
    FieldId.VERSION: "Version",
    FieldId.COMMENT: "Comment",
    FieldId.ACTION: "Actions",
    FieldId.NO_DISPLAY: "NoDisplay",
    FieldId.STARTUP_NOTIFY: "StartupNotify",
    FieldId.TERMINAL: "Terminal",
    FieldId.TYPE: "Type",
    FieldId.CATEGORY: "Category",
    FieldId.SAVE: "SAVE",
    FieldId.CANCEL: "CANCEL",
}

DEFAULT_TEXT: dict[FieldId, str] = {
    FieldId.TYPE: TYPE_APPLICATION,
    FieldId.CATEGORY: CATEGORY_NONE,
}

DEFAULT_TOGGLES: dict[FieldId, bool] = {
    FieldId.NO_DISPLAY: False,
    FieldId.STARTUP_NOTIFY: True,
    FieldId.TERMINAL: False,
}


def field_kind(field: FieldId) -> FieldKind:
    return FIELD_KINDS[field]


def is_editable(field: FieldId) -> bool:
    """Return ``True`` for rows backed by a line-editing buffer."""
    return FIELD_KINDS[field] in (FieldKind.TEXT, FieldKind.PATH)


def target_kind_for(type_value: str) -> TargetKind:
    """Return how the Exec/URL slot is read for ``type_value``."""
    return TargetKind.URL if type_value == TYPE_LINK else TargetKind.EXEC
