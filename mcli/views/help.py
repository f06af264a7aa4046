"""Handles help overlay drawing"""

from mcli.helpers.curses_utils import Color, Position, Size
from mcli.output_controller import Window

HELP_TEXT = [
    "EVENTS BROWSER - HELP",
    "",
    "Navigation:",
    "  ↑/k ↓/j   - Move up/down",
    "  PgUp/PgDn - Page up/down",
    "  Home/g    - Go to top",
    "  End/G     - Go to bottom",
    "",
    "Details sidebar:",
    "  Enter/d   - Toggle details for the selected event",
    "  ↑/↓       - Scroll details",
    "  ←/→       - Previous/next event",
    "  R         - Fetch full description",
    "  Esc       - Close details",
    "",
    "Other:",
    "  /         - Filter by title, location or description",
    "  o         - Open the event link",
    "  :         - Command line (help, quit, refresh, fetch <location>, open)",
    "  ?         - Toggle this help",
    "  q/Ctrl+C  - Quit",
    "",
    "Press any key to continue...",
]


class HelpView:
    """Draws the key bindings over the table"""

    def draw(self, window: Window, size: Size) -> None:
        """Draw help screen"""
        height, width = size

        start_row = max(0, (height - len(HELP_TEXT)) // 2)
        x_pos = max(0, min(width // 4, width - max(len(line) for line in HELP_TEXT)))
        for i, line in enumerate(HELP_TEXT):
            if start_row + i < height - 1:
                color = Color.HEADER if i == 0 else Color.DEFAULT
                window.addstr(Position(start_row + i, x_pos), line, color=color)
