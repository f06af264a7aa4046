"""Events table drawing"""

from datetime import datetime

from mcli.helpers.curses_utils import Color, Position, TextAttribute, Viewport
from mcli.helpers.text import truncate
from mcli.models.event import SourceKind
from mcli.models.mcli_model import McliState
from mcli.output_controller import Window
from mcli.viewmodels.table import HEADERS, column_widths, format_cells, row_cells

SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"

LOADING = "Loading events"
NO_EVENTS = "No events found"
NO_MATCHES = "No events match the filter"
ERROR_HINT = "Press q to quit, or :refresh to try again"

_ROWS_START = 2


class TableView:
    """Draws the column headers and the visible window of displayed events"""

    def __init__(self, state: McliState) -> None:
        self._state = state

    def draw(self, window: Window, viewport: Viewport, now: datetime) -> None:
        """Draw the table inside `viewport`"""
        if viewport.is_empty:
            return

        widths = column_widths(viewport.width, self._state.sidebar_visible)
        window.addstr(
            viewport.pos,
            format_cells(HEADERS, widths),
            color=Color.HEADER,
            attributes=[TextAttribute.BOLD],
        )
        if viewport.height > 1:
            window.addstr(
                Position(viewport.y + 1, viewport.x),
                "─" * viewport.width,
                color=Color.HEADER,
            )

        body = Position(viewport.y + _ROWS_START, viewport.x)
        if self._state.loading:
            frame = SPINNER_FRAMES[self._state.spinner_frame % len(SPINNER_FRAMES)]
            self._message(
                window, body, viewport.width, f"{LOADING} {frame}", Color.INFO
            )
        elif self._state.last_error is not None:
            self._message(
                window,
                body,
                viewport.width,
                f"Error: {self._state.last_error}",
                Color.ERROR,
            )
            self._message(
                window,
                Position(body.y + 1, body.x),
                viewport.width,
                ERROR_HINT,
                Color.WARNING,
            )
        elif not self._state.events:
            self._message(window, body, viewport.width, NO_EVENTS, Color.WARNING)
        elif not self._state.displayed_events:
            self._message(window, body, viewport.width, NO_MATCHES, Color.WARNING)
        else:
            self._draw_rows(window, viewport, now)

    def _draw_rows(self, window: Window, viewport: Viewport, now: datetime) -> None:
        widths = column_widths(viewport.width, self._state.sidebar_visible)
        displayed = self._state.displayed_events
        top = self._state.viewport_top
        rows = displayed[top : top + viewport.height - _ROWS_START]

        for offset, event in enumerate(rows):
            position = Position(viewport.y + _ROWS_START + offset, viewport.x)
            text = format_cells(row_cells(event, now), widths)
            if top + offset == self._state.cursor:
                window.addstr(
                    position,
                    text,
                    color=Color.SELECTED,
                    attributes=[TextAttribute.REVERSE],
                )
            elif event.source is SourceKind.SECONDARY:
                window.addstr(position, text, color=Color.LINK)
            else:
                window.addstr(position, text, color=Color.DEFAULT)

    @staticmethod
    def _message(
        window: Window, position: Position, width: int, text: str, color: Color
    ) -> None:
        window.addstr(
            Position(position.y, position.x + 1), truncate(text, width - 1), color=color
        )
