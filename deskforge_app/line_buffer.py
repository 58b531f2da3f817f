"""Single line text buffer used by the free-text form rows."""

from __future__ import annotations

import curses
from typing import Union

from .constants import KEY_BACKSPACE_CODES


class LineBuffer:
    """Text plus a cursor, edited one key code at a time."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.cursor = len(text)

    def __repr__(self) -> str:
        return f"LineBuffer({self.text!r}, cursor={self.cursor})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LineBuffer):
            return self.text == other.text
        return NotImplemented

    @property
    def value(self) -> str:
        return self.text

    def set(self, text: str) -> None:
        self.text = text
        self.cursor = len(text)

    def clear(self) -> str:
        """Empty the buffer and return what it held."""
        previous = self.text
        self.set("")
        return previous

    def insert(self, text: str) -> None:
        self.text = self.text[: self.cursor] + text + self.text[self.cursor :]
        self.cursor += len(text)

    def handle_key(self, ch: Union[int, str]) -> bool:
        """Apply ``ch`` to the buffer. Return ``True`` if it was consumed.

        ``ch`` is a curses key code, or a character as returned by
        ``get_wch()``.
        """
        if isinstance(ch, str):
            if len(ch) == 1 and ch.isprintable():
                self.insert(ch)
                return True
            return False

        if ch in KEY_BACKSPACE_CODES:
            if self.cursor > 0:
                self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
                self.cursor -= 1
            return True

        if ch == curses.KEY_DC:
            self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]
            return True

        if ch == curses.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
            return True

        if ch == curses.KEY_RIGHT:
            self.cursor = min(len(self.text), self.cursor + 1)
            return True

        if ch in (curses.KEY_HOME, 1):  # Home or Ctrl+A
            self.cursor = 0
            return True

        if ch in (curses.KEY_END, 5):  # End or Ctrl+E
            self.cursor = len(self.text)
            return True

        if ch == 21:  # Ctrl+U, kill to line start
            self.text = self.text[self.cursor :]
            self.cursor = 0
            return True

        if 32 <= ch <= 126:
            self.insert(chr(ch))
            return True

        return False
