"""Main application loop for DeskForge."""

from __future__ import annotations

import curses
import logging
from pathlib import Path
from typing import Optional

from .curses_setup import init_curses
from .form import PersistFn, handle_key, normalize_key
from .paths import ensure_applications_dir, launcher_path
from .record import read_record, write_record
from .state import FormState, form_from_record, new_form
from .ui.form_view import draw_form
from .validation import LOCAL_PROBE, FilesystemProbe

logger = logging.getLogger(__name__)

IGNORED_KEYS = (-1, curses.KEY_RESIZE)


def build_state(
    name: Optional[str],
    edit: bool,
    applications_dir: Path,
    launcher: str = "",
) -> FormState:
    """Create the form for a new launcher, or load an existing one to edit."""
    if not edit:
        return new_form(applications_dir, name, launcher=launcher)
    if not name:
        raise ValueError("Editing requires a launcher name")

    source_path = launcher_path(applications_dir, name)
    record = read_record(source_path)
    return form_from_record(
        applications_dir,
        record,
        name=source_path.name,
        launcher=launcher,
        source_path=source_path,
    )


def run_app(
    stdscr: "curses.window",
    state: FormState,
    probe: FilesystemProbe = LOCAL_PROBE,
    persist: PersistFn = write_record,
) -> FormState:
    """Render and feed keys to ``state`` until it asks to exit."""
    init_curses(stdscr)
    while not state.exit:
        draw_form(stdscr, state, probe)
        try:
            key = stdscr.get_wch()
        except curses.error:
            # No input before the timeout
            continue
        if key in IGNORED_KEYS:
            continue
        handle_key(state, normalize_key(key), probe, persist)
    return state


class FormSession:
    """One interactive form, from construction until the user leaves it."""

    def __init__(
        self,
        name: Optional[str] = None,
        edit: bool = False,
        applications_dir: Optional[Path] = None,
        launcher: str = "",
        probe: FilesystemProbe = LOCAL_PROBE,
        persist: PersistFn = write_record,
    ) -> None:
        self.applications_dir = applications_dir or ensure_applications_dir()
        self.probe = probe
        self.persist = persist
        self.state = build_state(name, edit, self.applications_dir, launcher)

    def run(self, stdscr: "curses.window") -> FormState:
        logger.info(
            "Starting %s session for %r",
            "edit" if self.state.edit else "create",
            self.state.name,
        )
        return run_app(stdscr, self.state, self.probe, self.persist)
