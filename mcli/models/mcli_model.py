"""Application state of the events browser"""

import dataclasses
import enum

from mcli.helpers.curses_utils import Size
from mcli.helpers.markup import StyledLine
from mcli.helpers.state import Field, State
from mcli.models.event import FILTER_FIELDS, Event, EventDetail


class Mode(enum.Enum):
    """Mutually exclusive input modes deciding who receives key presses"""

    NORMAL = "normal"
    FILTERING = "filtering"
    COMMAND_ENTRY = "command"


@dataclasses.dataclass(frozen=True)
class SidebarSnapshot:
    """Detail content captured when the sidebar was opened or refreshed"""

    event: Event
    detail: EventDetail | None
    lines: tuple[StyledLine, ...]
    width: int


def filter_events(
    events: tuple[Event, ...], query: str, fields: tuple[str, ...] = FILTER_FIELDS
) -> tuple[Event, ...]:
    """The subsequence of events matching the query; all of them for an empty query"""
    if not query:
        return events
    return tuple(event for event in events if event.matches(query, fields))


class McliState(State):  # pylint: disable=too-many-instance-attributes
    """The single authoritative state, written only by the update loop"""

    terminal_size = Field[Size](Size(0, 0))
    mode = Field[Mode](Mode.NORMAL)
    events = Field[tuple[Event, ...]](tuple)
    filter_text = Field[str]("")
    filter_fields = Field[tuple[str, ...]](FILTER_FIELDS)
    filter_cursor_pos = Field[int](0)
    cursor = Field[int](0)
    viewport_top = Field[int](0)
    viewport_height = Field[int](1)
    sidebar_visible = Field[bool](False)
    sidebar = Field[SidebarSnapshot | None](None)
    sidebar_scroll = Field[int](0)
    command_buffer = Field[str]("")
    command_cursor_pos = Field[int](0)
    last_command_output = Field[str]("")
    loading = Field[bool](True)
    last_error = Field[Exception | None](None)
    fetch_generation = Field[int](0)
    help_visible = Field[bool](False)
    spinner_frame = Field[int](0)

    def __init__(self) -> None:
        super().__init__()
        self._displayed_source: tuple[Event, ...] | None = None
        self._displayed_query: tuple[str, tuple[str, ...]] = ("", ())
        self._displayed: tuple[Event, ...] = ()

    @property
    def filter_active(self) -> bool:
        """True while the filter box has focus"""
        return self.mode == Mode.FILTERING

    @property
    def command_active(self) -> bool:
        """True while the command line has focus"""
        return self.mode == Mode.COMMAND_ENTRY

    @property
    def displayed_events(self) -> tuple[Event, ...]:
        """Events currently shown: derived from `events` and `filter_text` on demand"""
        events = self.events
        query = (self.filter_text, self.filter_fields)
        if events is not self._displayed_source or query != self._displayed_query:
            self._displayed = filter_events(events, *query)
            self._displayed_source = events
            self._displayed_query = query
        return self._displayed

    @property
    def current_event(self) -> Event | None:
        """The event under the cursor"""
        displayed = self.displayed_events
        if 0 <= self.cursor < len(displayed):
            return displayed[self.cursor]
        return None
