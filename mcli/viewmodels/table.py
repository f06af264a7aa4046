"""Column layout and row formatting for the events table"""

from datetime import datetime
from typing import NamedTuple

from mcli.helpers.dates import relative_from_string
from mcli.helpers.text import fit
from mcli.models.event import Event

ICON_WIDTH = 2
DATE_WIDTH = 12
LOCATION_SHARE = 0.22
TITLE_ONLY_THRESHOLD = 60

HEADERS = ("", "Event", "Location", "Date")


class ColumnWidths(NamedTuple):
    """Widths of the fixed table columns; they never add up to more than the pane"""

    icon: int
    title: int
    location: int
    date: int

    @property
    def title_only(self) -> bool:
        """True when location and date are hidden"""
        return self.location == 0 and self.date == 0


def column_widths(total_width: int, sidebar_visible: bool) -> ColumnWidths:
    """Split the table width between the columns.

    Location and date collapse to zero when the sidebar is open or the pane is too
    narrow, leaving the title everything but the icon.
    """
    total_width = max(0, total_width)
    icon = min(ICON_WIDTH, total_width)
    if sidebar_visible or total_width < TITLE_ONLY_THRESHOLD:
        return ColumnWidths(icon, total_width - icon, 0, 0)

    location = int(total_width * LOCATION_SHARE)
    title = total_width - icon - location - DATE_WIDTH
    return ColumnWidths(icon, title, location, DATE_WIDTH)


def format_cells(cells: tuple[str, str, str, str], widths: ColumnWidths) -> str:
    """Lay cells out in their columns, one space between columns"""
    parts = []
    for text, width in zip(cells, widths):
        if width <= 0:
            continue
        if width == 1:
            parts.append(fit(text, 1))
        else:
            parts.append(fit(text, width - 1) + " ")
    return "".join(parts)


def row_cells(event: Event, now: datetime) -> tuple[str, str, str, str]:
    """The cell texts of one event"""
    return (
        event.source.icon,
        event.title,
        event.location,
        relative_from_string(event.date_time, now),
    )
