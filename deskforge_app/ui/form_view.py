"""Drawing helpers for the launcher form."""

from __future__ import annotations

import curses

from ..constants import (
    BUTTON_SPACING,
    COLOR_PAIR_ACTIVE,
    COLOR_PAIR_CANCEL,
    COLOR_PAIR_DARK,
    COLOR_PAIR_ERROR,
    COLOR_PAIR_FIELD,
    COLOR_PAIR_HEADER,
    COLOR_PAIR_OK,
    COLOR_PAIR_SELECTED,
    COLOR_PAIR_WARNING,
    HALF_SCREEN,
    LABEL_WIDTH,
    SMALLEST_HEIGHT,
    SMALLEST_WIDTH,
    WIDE_MARGIN,
)
from ..fields import FIELD_KINDS, FIELD_LABELS, FieldId, FieldKind, TargetKind, is_editable
from ..state import FormState, Mode
from ..validation import LOCAL_PROBE, FilesystemProbe, Verdict, can_save, validate

FORM_TOP = 2
BUTTON_GAP = 1

VERDICT_COLORS = {
    Verdict.OK: COLOR_PAIR_OK,
    Verdict.IGNORED: COLOR_PAIR_OK,
    Verdict.EMPTY: COLOR_PAIR_ERROR,
    Verdict.NOT_FOUND: COLOR_PAIR_ERROR,
    Verdict.ALREADY_EXISTS: COLOR_PAIR_ERROR,
    Verdict.INVALID_NAME: COLOR_PAIR_ERROR,
    Verdict.WRONG_TYPE: COLOR_PAIR_WARNING,
    Verdict.INVALID_SCHEME: COLOR_PAIR_WARNING,
}


def _put(win: "curses.window", y: int, x: int, text: str, attr: int = curses.A_NORMAL) -> None:
    # Writing into the bottom-right cell raises even though the text is drawn.
    try:
        win.addstr(y, x, text, attr)
    except curses.error:
        pass


def form_margin(width: int) -> int:
    return WIDE_MARGIN if width > HALF_SCREEN else 0


def field_row(field_id: FieldId) -> int:
    """Screen row of ``field_id``; Save and Cancel share the button row."""
    if field_id in (FieldId.SAVE, FieldId.CANCEL):
        return FORM_TOP + FieldId.CATEGORY + 1 + BUTTON_GAP
    return FORM_TOP + field_id


def field_label(state: FormState, field_id: FieldId) -> str:
    if field_id == FieldId.EXEC and state.launch_target().kind is TargetKind.URL:
        return TargetKind.URL.value
    return FIELD_LABELS[field_id]


def row_attr(state: FormState, field_id: FieldId) -> int:
    if state.focus != field_id:
        return curses.A_NORMAL
    if field_id == FieldId.CANCEL:
        return curses.color_pair(COLOR_PAIR_CANCEL) | curses.A_BOLD
    return curses.color_pair(COLOR_PAIR_ACTIVE) | curses.A_BOLD


def visible_slice(text: str, cursor: int, width: int) -> tuple[str, int]:
    """Return the part of ``text`` that fits ``width`` around ``cursor``."""
    width = max(1, width)
    start = max(0, cursor - width + 1)
    return text[start : start + width], cursor - start


def draw_too_small(stdscr: "curses.window", height: int, width: int) -> None:
    """Replace the form with a notice about the terminal size."""
    stdscr.erase()
    current = f"Terminal size is too small: Width: {width} Height: {height}"
    needed = f"Needed terminal size: Width: {SMALLEST_WIDTH} Height: {SMALLEST_HEIGHT}"
    middle = height // 2
    _put(stdscr, max(0, middle - 1), max(0, (width - len(current)) // 2), current[:width])
    _put(stdscr, min(height - 1, middle + 1), max(0, (width - len(needed)) // 2), needed[:width])
    stdscr.refresh()


def draw_title(stdscr: "curses.window", state: FormState, left: int, inner_width: int) -> None:
    action = "Edit" if state.edit else "Create"
    title = f" DeskForge - {action} Launcher "
    _put(stdscr, 0, left + max(0, (inner_width - len(title)) // 2), title[:inner_width], curses.A_BOLD)


def draw_footer(stdscr: "curses.window", state: FormState, left: int, inner_width: int, height: int) -> None:
    """Render the mode indicator and the key hints."""
    if state.mode is Mode.NORMAL:
        hints = ["Insert <i>", "Next <j>", "Previous <k>", "Top <gg>", "Save <G>", "Quit <q>"]
    else:
        hints = ["Normal <Esc>", "Next <Enter>"]
    mode_label = f" Mode: {state.mode.value} "
    _put(stdscr, height - 1, left, mode_label, curses.color_pair(COLOR_PAIR_FIELD) | curses.A_BOLD)
    hint_text = " ─ ".join(hints)
    x = left + len(mode_label) + 1
    _put(stdscr, height - 1, x, hint_text[: max(0, inner_width - x + left)], curses.color_pair(COLOR_PAIR_DARK))


def draw_text_row(
    stdscr: "curses.window",
    state: FormState,
    field_id: FieldId,
    left: int,
    inner_width: int,
    probe: FilesystemProbe,
) -> tuple[int, int] | None:
    """Draw a text or path row and return the cursor position when editing."""
    y = field_row(field_id)
    verdict = validate(state, field_id, probe)
    attr = row_attr(state, field_id)
    label = f"{field_label(state, field_id)}:".ljust(LABEL_WIDTH)
    value_x = left + LABEL_WIDTH
    value_width = max(1, inner_width - LABEL_WIDTH - len(verdict.suffix) - 1)

    buffer = state.buffers[field_id]
    shown, cursor_col = visible_slice(buffer.value, buffer.cursor, value_width)

    _put(stdscr, y, left, label, attr)
    _put(stdscr, y, value_x, shown.ljust(value_width), curses.color_pair(COLOR_PAIR_FIELD) | (attr & curses.A_BOLD))
    if verdict is not Verdict.BLANK:
        _put(stdscr, y, value_x + value_width + 1, verdict.suffix, curses.color_pair(VERDICT_COLORS[verdict]))

    if state.mode is Mode.INSERT and state.focus == field_id:
        return y, value_x + cursor_col
    return None


def draw_toggle_row(stdscr: "curses.window", state: FormState, field_id: FieldId, left: int) -> None:
    mark = "X" if state.toggles[field_id] else " "
    label = f"{FIELD_LABELS[field_id]}:".ljust(LABEL_WIDTH)
    _put(stdscr, field_row(field_id), left, f"{label}[ {mark} ]", row_attr(state, field_id))


def draw_choice_row(stdscr: "curses.window", state: FormState, field_id: FieldId, left: int) -> None:
    is_open = state.dropdown is not None and state.dropdown.target == field_id
    arrow = "▲" if is_open else "▼"
    label = f"{FIELD_LABELS[field_id]}:".ljust(LABEL_WIDTH)
    _put(
        stdscr,
        field_row(field_id),
        left,
        f"{label}[ {state.display_text(field_id)} {arrow} ]",
        row_attr(state, field_id),
    )


def draw_buttons(
    stdscr: "curses.window", state: FormState, left: int, inner_width: int, probe: FilesystemProbe
) -> None:
    save_label = f"[ {FIELD_LABELS[FieldId.SAVE]} ]"
    cancel_label = f"[ {FIELD_LABELS[FieldId.CANCEL]} ]"
    y = field_row(FieldId.SAVE)
    x = left + max(0, (inner_width - len(save_label) - len(cancel_label) - BUTTON_SPACING) // 2)

    save_attr = row_attr(state, FieldId.SAVE)
    if state.focus == FieldId.SAVE and not can_save(state, probe):
        save_attr = curses.color_pair(COLOR_PAIR_ERROR) | curses.A_BOLD
    _put(stdscr, y, x, save_label, save_attr)
    _put(stdscr, y, x + len(save_label) + BUTTON_SPACING, cancel_label, row_attr(state, FieldId.CANCEL))


def draw_dropdown(stdscr: "curses.window", state: FormState, left: int) -> None:
    """Paint the open dropdown just below its row."""
    dropdown = state.dropdown
    if dropdown is None:
        return
    height, width = stdscr.getmaxyx()
    box_width = max(len(option) for option in dropdown.options) + 4
    box_height = len(dropdown.options) + 2
    start_y = min(field_row(dropdown.target) + 1, max(0, height - box_height))
    start_x = min(left + LABEL_WIDTH, max(0, width - box_width))

    win = curses.newwin(box_height, box_width, start_y, start_x)
    win.bkgd(" ", curses.color_pair(COLOR_PAIR_HEADER))
    win.box()
    for idx, option in enumerate(dropdown.options):
        if idx == dropdown.highlighted:
            attr = curses.color_pair(COLOR_PAIR_SELECTED) | curses.A_BOLD
        else:
            attr = curses.A_NORMAL
        _put(win, 1 + idx, 2, option.ljust(box_width - 4), attr)
    win.refresh()


def draw_form(stdscr: "curses.window", state: FormState, probe: FilesystemProbe = LOCAL_PROBE) -> None:
    """Paint the whole form for the current state."""
    height, width = stdscr.getmaxyx()
    if width < SMALLEST_WIDTH or height < SMALLEST_HEIGHT:
        curses.curs_set(0)
        draw_too_small(stdscr, height, width)
        return

    stdscr.erase()
    left = form_margin(width)
    inner_width = width - 2 * left

    draw_title(stdscr, state, left, inner_width)
    cursor = None
    for field_id in FieldId:
        kind = FIELD_KINDS[field_id]
        if is_editable(field_id):
            position = draw_text_row(stdscr, state, field_id, left, inner_width, probe)
            cursor = cursor or position
        elif kind is FieldKind.TOGGLE:
            draw_toggle_row(stdscr, state, field_id, left)
        elif kind is FieldKind.CHOICE:
            draw_choice_row(stdscr, state, field_id, left)
    draw_buttons(stdscr, state, left, inner_width, probe)
    draw_footer(stdscr, state, left, inner_width, height)

    if cursor is not None:
        curses.curs_set(1)
        stdscr.move(*cursor)
    else:
        curses.curs_set(0)
    stdscr.refresh()

    draw_dropdown(stdscr, state, left)
