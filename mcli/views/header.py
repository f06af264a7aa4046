"""Title bar above the table"""

from mcli.helpers.curses_utils import Color, Position, TextAttribute, Viewport
from mcli.models.mcli_model import McliState
from mcli.output_controller import Window

TITLE = "Upcoming events"


class HeaderView:
    """Draws the title with the event counts and a separator"""

    def __init__(self, state: McliState) -> None:
        self._state = state

    def draw(self, window: Window, viewport: Viewport) -> None:
        """Draw the header inside `viewport`"""
        if viewport.is_empty:
            return

        shown = len(self._state.displayed_events)
        total = len(self._state.events)
        counts = f"{shown} of {total}" if shown != total else f"{total} events"
        title = f" {TITLE} "
        window.addstr(
            viewport.pos,
            title,
            color=Color.HEADER,
            attributes=[TextAttribute.BOLD],
        )
        counts_x = viewport.x + viewport.width - len(counts) - 1
        if counts_x > viewport.x + len(title):
            window.addstr(Position(viewport.y, counts_x), counts, color=Color.INFO)

        if viewport.height > 1:
            window.addstr(
                Position(viewport.y + 1, viewport.x),
                "─" * viewport.width,
                color=Color.HEADER,
            )
