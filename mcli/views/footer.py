"""Filter box, status bar and command line drawing"""

from mcli.helpers.curses_utils import Color, Position, TextAttribute, Viewport
from mcli.helpers.text import truncate
from mcli.models.mcli_model import McliState, Mode
from mcli.output_controller import Window
from mcli.viewmodels.command_line import PROMPT

FILTER_PROMPT = "/"
HELP_HINT = "? for help"

MODE_LABELS = {
    Mode.NORMAL: "BROWSE",
    Mode.FILTERING: "FILTER",
    Mode.COMMAND_ENTRY: "COMMAND",
}


class FooterView:
    """Draws the bottom rows and reports where the text cursor belongs"""

    def __init__(self, state: McliState, filter_placeholder: str) -> None:
        self._state = state
        self._filter_placeholder = filter_placeholder

    def draw(
        self, window: Window, filter_area: Viewport, footer: Viewport
    ) -> Position | None:
        """Draw the footer; returns the text cursor position when an input has focus"""
        cursor = None
        if not filter_area.is_empty:
            cursor = self._draw_filter(window, filter_area)
        if footer.is_empty:
            return cursor

        window.addstr(
            footer.pos,
            self.status_line(footer.width),
            attributes=[TextAttribute.REVERSE],
        )
        if footer.height < 2:
            return cursor

        line = Position(footer.y + 1, footer.x)
        if self._state.command_active:
            window.addstr(line, PROMPT + self._state.command_buffer)
            return Position(
                line.y, line.x + len(PROMPT) + self._state.command_cursor_pos
            )

        output = self._state.last_command_output
        if output:
            window.addstr(line, truncate(output, footer.width), color=Color.INFO)
        return cursor

    def status_line(self, width: int) -> str:
        """Mode, row and help hint on the left, the committed filter on the right"""
        count = len(self._state.displayed_events)
        row = self._state.cursor + 1 if count else 0
        left = f" {MODE_LABELS[self._state.mode]} | Row {row}/{count} | {HELP_HINT}"
        right = f"filter: {self._state.filter_text} " if self._state.filter_text else ""

        gap = width - len(left) - len(right)
        if gap < 1:
            return truncate(left, width).ljust(width)
        return left + " " * gap + right

    def _draw_filter(self, window: Window, area: Viewport) -> Position:
        window.addstr(
            area.pos,
            FILTER_PROMPT,
            color=Color.HEADER,
            attributes=[TextAttribute.BOLD],
        )
        text_position = Position(area.y, area.x + len(FILTER_PROMPT))
        if self._state.filter_text:
            window.addstr(text_position, self._state.filter_text)
        else:
            window.addstr(
                text_position, self._filter_placeholder, attributes=[TextAttribute.DIM]
            )
        return Position(
            text_position.y, text_position.x + self._state.filter_cursor_pos
        )
