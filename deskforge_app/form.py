"""Key handling for the launcher form.

Normal mode reads keys as vim-style commands; Insert mode sends them to the
focused row's text buffer or to the open dropdown.
"""

from __future__ import annotations

import curses
import logging
from pathlib import Path
from typing import Callable, Iterable, Union

from .constants import KEY_CTRL_C, KEY_ENTER_CODES, KEY_ESCAPE
from .errors import FormInvariantError
from .fields import FIELD_KINDS, FIRST_FIELD, LAST_FIELD, FieldId, FieldKind, is_editable
from .paths import launcher_path
from .record import serialize, write_record
from .state import FormState, Mode, PendingSequence
from .validation import LOCAL_PROBE, FilesystemProbe, can_save

logger = logging.getLogger(__name__)

PersistFn = Callable[[Path, Iterable[str]], None]
# A curses key code, or a character read with get_wch()
Key = Union[int, str]

KEYS_DOWN = (curses.KEY_DOWN, ord("j"))
KEYS_UP = (curses.KEY_UP, ord("k"))
KEYS_QUIT = (ord("q"), KEY_CTRL_C)
KEYS_ACTIVATE = (ord("i"), *KEY_ENTER_CODES)
KEYS_CONFIRM = (ord("i"), *KEY_ENTER_CODES)


def normalize_key(key: Key) -> Key:
    """Turn ASCII characters from ``get_wch()`` into key codes.

    Commands and control keys are matched as integers; any other character
    stays a ``str`` and is only ever inserted as text.
    """
    if isinstance(key, str) and len(key) == 1 and ord(key) < 128:
        return ord(key)
    return key


def next_field(state: FormState) -> None:
    if state.focus != LAST_FIELD:
        state.focus = FieldId(state.focus + 1)


def previous_field(state: FormState) -> None:
    if state.focus != FIRST_FIELD:
        state.focus = FieldId(state.focus - 1)


def submit_field(state: FormState) -> None:
    """Move past the focused row; a checkbox row is flipped on the way."""
    if FIELD_KINDS[state.focus] is FieldKind.TOGGLE:
        state.toggle(state.focus)
    next_field(state)


def clear_field(state: FormState) -> None:
    if is_editable(state.focus):
        state.buffers[state.focus].clear()


def save_form(
    state: FormState,
    probe: FilesystemProbe = LOCAL_PROBE,
    persist: PersistFn = write_record,
) -> bool:
    """Write the launcher and end the session if the save-gate allows it.

    Returns ``False`` without touching anything when the gate is closed.
    Errors raised by ``persist`` propagate to the caller.
    """
    if not can_save(state, probe):
        logger.debug("Save refused for %r", state.name)
        return False

    path = state.source_path or launcher_path(state.applications_dir, state.name)
    persist(path, serialize(state))
    logger.info("Saved launcher %s", path)
    state.saved_path = path
    state.request_exit()
    return True


def activate_field(
    state: FormState,
    probe: FilesystemProbe = LOCAL_PROBE,
    persist: PersistFn = write_record,
) -> None:
    field_id = state.focus
    kind = FIELD_KINDS[field_id]

    if kind is FieldKind.TOGGLE:
        state.toggle(field_id)
        next_field(state)
    elif kind is FieldKind.CHOICE:
        state.open_dropdown(field_id)
        state.mode = Mode.INSERT
    elif field_id == FieldId.SAVE:
        save_form(state, probe, persist)
    elif field_id == FieldId.CANCEL:
        state.request_exit()
    else:
        state.mode = Mode.INSERT


def _handle_normal(state: FormState, key: Key, probe: FilesystemProbe, persist: PersistFn) -> None:
    pending = state.pending
    state.pending = PendingSequence.IDLE

    if key in KEYS_QUIT:
        state.request_exit()
    elif key == ord("g"):
        if pending is PendingSequence.AWAITING_SECOND_G:
            state.focus = FIRST_FIELD
        else:
            state.pending = PendingSequence.AWAITING_SECOND_G
    elif key == ord("G"):
        state.focus = FieldId.SAVE
    elif key == ord("d"):
        if pending is PendingSequence.AWAITING_SECOND_D:
            clear_field(state)
        else:
            state.pending = PendingSequence.AWAITING_SECOND_D
    elif key in KEYS_DOWN:
        next_field(state)
    elif key in KEYS_UP:
        previous_field(state)
    elif key in KEYS_ACTIVATE:
        activate_field(state, probe, persist)


def _handle_dropdown(state: FormState, key: Key) -> None:
    dropdown = state.dropdown
    if dropdown is None or dropdown.target != state.focus:
        raise FormInvariantError(f"Dropdown {dropdown!r} does not target {state.focus!r}")
    if FIELD_KINDS[dropdown.target] is not FieldKind.CHOICE:
        raise FormInvariantError(f"Dropdown opened on {dropdown.target!r}")

    if key in KEYS_DOWN:
        dropdown.move_down()
    elif key in KEYS_UP:
        dropdown.move_up()
    elif key in KEYS_CONFIRM:
        state.set_text(dropdown.target, dropdown.preview)
        state.close_dropdown()
        submit_field(state)
        state.mode = Mode.NORMAL
    elif key == KEY_ESCAPE:
        state.close_dropdown()
        state.mode = Mode.NORMAL


def _handle_insert(state: FormState, key: Key) -> None:
    if state.dropdown is not None:
        _handle_dropdown(state, key)
        return

    if key == KEY_ESCAPE:
        state.mode = Mode.NORMAL
        return

    if key in KEY_ENTER_CODES:
        kind = FIELD_KINDS[state.focus]
        if state.focus == FieldId.COMMENT:
            submit_field(state)
            state.mode = Mode.NORMAL
        elif kind is not FieldKind.CHOICE:
            submit_field(state)
        return

    if is_editable(state.focus):
        state.buffers[state.focus].handle_key(key)


def handle_key(
    state: FormState,
    key: Key,
    probe: FilesystemProbe = LOCAL_PROBE,
    persist: PersistFn = write_record,
) -> FormState:
    """Apply one key press to ``state`` and return it.

    ``key`` is expected to have gone through :func:`normalize_key`.
    """
    if state.mode is Mode.NORMAL:
        _handle_normal(state, key, probe, persist)
    else:
        _handle_insert(state, key)
    return state
