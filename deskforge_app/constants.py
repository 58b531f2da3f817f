"""Shared constant values for the DeskForge TUI application."""

import curses

# Colors
COLOR_LIGHT_RED = 203
COLOR_LIGHT_GREEN = 120

# Color pairs
COLOR_PAIR_OK = 1
COLOR_PAIR_ERROR = 2
COLOR_PAIR_WARNING = 3
COLOR_PAIR_ACTIVE = 4
COLOR_PAIR_CANCEL = 5
COLOR_PAIR_HEADER = 6
COLOR_PAIR_DARK = 7
COLOR_PAIR_FIELD = 8
COLOR_PAIR_SELECTED = 9

# Smallest terminal the form can be painted into
SMALLEST_WIDTH = 41
SMALLEST_HEIGHT = 24
HALF_SCREEN = 89
WIDE_MARGIN = 20

BUTTON_SPACING = 4
LABEL_WIDTH = 16

# Key codes
KEY_CTRL_C = 3
KEY_ESCAPE = 27
KEY_ENTER_CODES = (10, 13, curses.KEY_ENTER)
KEY_BACKSPACE_CODES = (curses.KEY_BACKSPACE, 127, 8)

# Desktop entry records
DESKTOP_HEADER = "[Desktop Entry]"
DESKTOP_SUFFIX = ".desktop"
APP_NAME = "deskforge"
