"""Input controller for wrapping curses key reads to enable testing"""

from abc import ABC, abstractmethod

NO_KEY = -1


class InputController(ABC):
    """Abstract source of key presses"""

    @abstractmethod
    def get_input(self) -> int:
        """Return the next key code, or NO_KEY when the read timed out"""


class CursesInputController(InputController):
    """Reads keys from a curses window with a poll timeout"""

    def __init__(self, stdscr, timeout_ms: int) -> None:
        self._stdscr = stdscr
        self._stdscr.keypad(True)
        self._stdscr.timeout(timeout_ms)

    def get_input(self) -> int:
        """Return the next key code, or NO_KEY when the read timed out"""
        return self._stdscr.getch()
