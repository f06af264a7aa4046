"""Detail sidebar drawing"""

from mcli.helpers.curses_utils import Color, Position, Viewport
from mcli.helpers.text import display_width
from mcli.models.mcli_model import McliState
from mcli.output_controller import Window


class SidebarView:
    """Draws the snapshotted detail lines beside the table"""

    def __init__(self, state: McliState) -> None:
        self._state = state

    def draw(self, window: Window, pane: Viewport, text_area: Viewport) -> None:
        """Draw the border in `pane` and the visible lines in `text_area`"""
        if pane.is_empty:
            return

        for y in range(pane.y, pane.y + pane.height):
            window.addstr(Position(y, pane.x), "│", color=Color.HEADER)

        snapshot = self._state.sidebar
        if snapshot is None or text_area.is_empty:
            return

        scroll = self._state.sidebar_scroll
        visible = snapshot.lines[scroll : scroll + text_area.height]
        for row, line in enumerate(visible):
            x = text_area.x
            for span in line:
                window.addstr(
                    Position(text_area.y + row, x),
                    span.text,
                    attributes=list(span.attributes),
                )
                x += display_width(span.text)

        hidden_below = len(snapshot.lines) - scroll - len(visible)
        if scroll > 0 or hidden_below > 0:
            indicator = f" {scroll + 1}-{scroll + len(visible)}/{len(snapshot.lines)} "
            window.addstr(
                Position(pane.y, pane.x + max(1, pane.width - len(indicator) - 1)),
                indicator,
                color=Color.INFO,
            )
