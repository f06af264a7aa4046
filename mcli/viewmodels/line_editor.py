"""Single-line text editing shared by the filter box and the command line"""

import curses
import enum

from mcli.helpers.curses_utils import BACKSPACE_KEYS, ENTER_KEYS, ESC

CTRL_A = 1
CTRL_E = 5
CTRL_U = 21


class EditResult(enum.Enum):
    """What a key did to the editor"""

    CHANGED = "changed"
    MOVED = "moved"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"
    IGNORED = "ignored"


class LineEditor:
    """A text buffer with a cursor, edited one key at a time"""

    def __init__(self, max_length: int) -> None:
        self._max_length = max_length
        self.text = ""
        self.cursor_pos = 0

    def reset(self, text: str = "") -> None:
        """Replace the buffer and put the cursor at its end"""
        self.text = text[: self._max_length]
        self.cursor_pos = len(self.text)

    def handle_key(self, key: int) -> EditResult:
        """Apply one key press"""
        if key == ESC:
            return EditResult.CANCELLED
        if key in ENTER_KEYS:
            return EditResult.SUBMITTED
        if key in BACKSPACE_KEYS:
            if self.cursor_pos == 0:
                return EditResult.IGNORED
            self.text = self.text[: self.cursor_pos - 1] + self.text[self.cursor_pos :]
            self.cursor_pos -= 1
            return EditResult.CHANGED
        if key == curses.KEY_DC:
            if self.cursor_pos >= len(self.text):
                return EditResult.IGNORED
            self.text = self.text[: self.cursor_pos] + self.text[self.cursor_pos + 1 :]
            return EditResult.CHANGED
        if key == CTRL_U:
            if not self.text:
                return EditResult.IGNORED
            self.reset()
            return EditResult.CHANGED
        if key == curses.KEY_LEFT:
            self.cursor_pos = max(0, self.cursor_pos - 1)
            return EditResult.MOVED
        if key == curses.KEY_RIGHT:
            self.cursor_pos = min(len(self.text), self.cursor_pos + 1)
            return EditResult.MOVED
        if key in (curses.KEY_HOME, CTRL_A):
            self.cursor_pos = 0
            return EditResult.MOVED
        if key in (curses.KEY_END, CTRL_E):
            self.cursor_pos = len(self.text)
            return EditResult.MOVED
        if 32 <= key <= 126 and len(self.text) < self._max_length:
            self.text = (
                self.text[: self.cursor_pos] + chr(key) + self.text[self.cursor_pos :]
            )
            self.cursor_pos += 1
            return EditResult.CHANGED
        return EditResult.IGNORED
