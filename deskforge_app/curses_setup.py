"""Helpers for configuring the curses environment."""

from __future__ import annotations

import curses

from .constants import (
    COLOR_LIGHT_GREEN,
    COLOR_LIGHT_RED,
    COLOR_PAIR_ACTIVE,
    COLOR_PAIR_CANCEL,
    COLOR_PAIR_DARK,
    COLOR_PAIR_ERROR,
    COLOR_PAIR_FIELD,
    COLOR_PAIR_HEADER,
    COLOR_PAIR_OK,
    COLOR_PAIR_SELECTED,
    COLOR_PAIR_WARNING,
)


def init_curses(stdscr: "curses.window") -> None:
    """Initialise colors and global curses settings."""
    curses.set_escdelay(25)
    curses.raw()
    curses.noecho()
    curses.curs_set(0)
    stdscr.keypad(True)
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(COLOR_PAIR_OK, COLOR_LIGHT_GREEN, -1)
    curses.init_pair(COLOR_PAIR_ERROR, COLOR_LIGHT_RED, -1)
    curses.init_pair(COLOR_PAIR_WARNING, curses.COLOR_YELLOW, -1)
    curses.init_pair(COLOR_PAIR_ACTIVE, COLOR_LIGHT_GREEN, -1)
    curses.init_pair(COLOR_PAIR_CANCEL, COLOR_LIGHT_RED, -1)
    curses.init_pair(COLOR_PAIR_HEADER, curses.COLOR_WHITE, -1)
    curses.init_pair(COLOR_PAIR_DARK, 245, -1)
    curses.init_pair(COLOR_PAIR_FIELD, curses.COLOR_WHITE, 234)
    curses.init_pair(COLOR_PAIR_SELECTED, curses.COLOR_BLACK, COLOR_LIGHT_GREEN)
