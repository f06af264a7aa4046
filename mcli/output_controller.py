"""Output controller for wrapping curses operations to enable testing"""

import curses
from abc import ABC, abstractmethod

from mcli.helpers.curses_utils import Color, Position, Size, TextAttribute
from mcli.helpers.text import cut


class Window(ABC):
    """Abstract window interface for curses operations"""

    @abstractmethod
    def erase(self) -> None:
        """Blank the window without forcing a full repaint"""

    @abstractmethod
    def refresh(self) -> None:
        """Refresh the window"""

    @abstractmethod
    def addstr(
        self,
        position: Position,
        text: str,
        *,
        color: Color | None = None,
        attributes: list[TextAttribute] | None = None,
    ) -> None:
        """Add a string to the window, clipped to the window bounds"""

    @abstractmethod
    def move(self, position: Position) -> None:
        """Move the cursor"""


class OutputController(ABC):
    """Abstract output controller interface for curses module operations"""

    @abstractmethod
    def create_main_window(self) -> Window:
        """Create the Window covering the whole terminal"""

    @abstractmethod
    def curs_set(self, visibility: int) -> None:
        """Set cursor visibility"""

    @abstractmethod
    def update_lines_cols(self) -> None:
        """Update LINES and COLS after terminal resize"""

    @abstractmethod
    def get_terminal_size(self) -> Size:
        """Get the terminal size as a Size tuple"""


class CursesWindow(Window):
    """Concrete implementation of Window wrapping a curses window"""

    def __init__(self, curses_window, color_to_pair: dict[Color, int]) -> None:
        self._window = curses_window
        self._color_to_pair = color_to_pair

    def erase(self) -> None:
        """Blank the window without forcing a full repaint"""
        self._window.erase()

    def refresh(self) -> None:
        """Refresh the window"""
        self._window.refresh()

    def addstr(
        self,
        position: Position,
        text: str,
        *,
        color: Color | None = None,
        attributes: list[TextAttribute] | None = None,
    ) -> None:
        """Add a string to the window, clipped to the window bounds"""
        height, width = self._window.getmaxyx()
        if not 0 <= position.y < height or not 0 <= position.x < width:
            return
        # The bottom-right cell cannot be written without curses raising
        available = width - position.x
        if position.y == height - 1:
            available -= 1
        clipped = cut(text, available)
        if not clipped:
            return

        attr = 0
        if color is not None:
            attr = self._color_to_pair.get(color, 0)
        if attributes:
            for text_attr in attributes:
                attr |= text_attr.value
        try:
            self._window.addstr(position.y, position.x, clipped, attr)
        except curses.error:
            pass

    def move(self, position: Position) -> None:
        """Move the cursor"""
        try:
            self._window.move(position.y, position.x)
        except curses.error:
            pass


class CursesOutputController(OutputController):
    """Concrete implementation of OutputController wrapping the curses module"""

    def __init__(self, stdscr) -> None:
        self._stdscr = stdscr
        self._color_to_pair: dict[Color, int] = {}
        self._start_color()
        self._use_default_colors()

    @staticmethod
    def _start_color() -> None:
        """Initialize color support"""
        curses.start_color()

    def _use_default_colors(self) -> None:
        """Use default terminal colors"""
        curses.use_default_colors()
        for i, color in enumerate(Color):
            pair_num = i + 1
            curses.init_pair(pair_num, color.value, -1)
            self._color_to_pair[color] = curses.color_pair(pair_num)

    def create_main_window(self) -> Window:
        """Create the Window covering the whole terminal"""
        return CursesWindow(self._stdscr, self._color_to_pair)

    def curs_set(self, visibility: int) -> None:
        """Set cursor visibility"""
        try:
            curses.curs_set(visibility)
        except curses.error:
            pass

    def update_lines_cols(self) -> None:
        """Update LINES and COLS after terminal resize"""
        curses.update_lines_cols()

    def get_terminal_size(self) -> Size:
        """Get the terminal size as a Size tuple"""
        return Size(curses.LINES, curses.COLS)  # pylint: disable=no-member
