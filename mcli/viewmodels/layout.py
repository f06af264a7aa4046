"""Pane geometry: where every pane goes for a terminal size and pane visibility"""

from typing import NamedTuple

from mcli.helpers.curses_utils import Position, Size, Viewport

HEADER_HEIGHT = 2
FOOTER_HEIGHT = 2
FILTER_HEIGHT = 1
TABLE_HEADER_HEIGHT = 2

SIDEBAR_SHARE = 0.62
SIDEBAR_MIN_WIDTH = 30
# Left border plus one blank column on each side of the text
SIDEBAR_HORIZONTAL_CHROME = 3
SIDEBAR_TOP_PADDING = 1

DEFAULT_TERMINAL_SIZE = Size(24, 80)


class Layout(NamedTuple):
    """Bounds of every pane for one frame"""

    terminal: Size
    header: Viewport
    table: Viewport
    sidebar: Viewport
    filter: Viewport
    footer: Viewport

    @property
    def viewport_height(self) -> int:
        """Number of event rows the table can show"""
        return max(1, self.table.height - TABLE_HEADER_HEIGHT)

    @property
    def sidebar_text(self) -> Viewport:
        """Area inside the sidebar chrome where detail lines go"""
        if self.sidebar.is_empty:
            return Viewport(self.sidebar.pos, Size(0, 0))
        return Viewport(
            Position(self.sidebar.y + SIDEBAR_TOP_PADDING, self.sidebar.x + 2),
            Size(
                max(1, self.sidebar.height - SIDEBAR_TOP_PADDING),
                max(1, self.sidebar.width - SIDEBAR_HORIZONTAL_CHROME),
            ),
        )


def effective_size(terminal_size: Size) -> Size:
    """The size to lay out for; a missing or zero size falls back to a usable default"""
    if terminal_size.height <= 0 or terminal_size.width <= 0:
        return DEFAULT_TERMINAL_SIZE
    return terminal_size


def sidebar_width(terminal_width: int) -> int:
    """A share of the terminal width, never below the minimum usable width"""
    share = int(terminal_width * SIDEBAR_SHARE)
    return min(terminal_width, max(share, SIDEBAR_MIN_WIDTH))


def compute_layout(
    terminal_size: Size, sidebar_visible: bool, filter_active: bool
) -> Layout:
    """Place header, table, sidebar, filter box and footer for one frame"""
    height, width = effective_size(terminal_size)

    header_height = min(HEADER_HEIGHT, height)
    footer_height = min(FOOTER_HEIGHT, height - header_height)
    filter_height = (
        min(FILTER_HEIGHT, height - header_height - footer_height)
        if filter_active
        else 0
    )
    body_height = height - header_height - footer_height - filter_height
    side_width = sidebar_width(width) if sidebar_visible else 0

    return Layout(
        terminal=Size(height, width),
        header=Viewport(Position(0, 0), Size(header_height, width)),
        table=Viewport(
            Position(header_height, 0), Size(body_height, width - side_width)
        ),
        sidebar=Viewport(
            Position(header_height, width - side_width), Size(body_height, side_width)
        ),
        filter=Viewport(
            Position(header_height + body_height, 0), Size(filter_height, width)
        ),
        footer=Viewport(
            Position(height - footer_height, 0), Size(footer_height, width)
        ),
    )
