"""The update loop: the only writer of application state"""

import curses
import logging
from datetime import datetime
from typing import Callable, assert_never

from mcli.helpers.curses_utils import CTRL_C, ENTER_KEYS, ESC
from mcli.helpers.dates import utc_now
from mcli.models.event import FILTER_FIELDS, Event, EventDetail
from mcli.models.mcli_model import McliState, Mode
from mcli.models.messages import (
    DetailFetched,
    DetailFetchFailed,
    Effect,
    FetchFailed,
    FetchSucceeded,
    KeyPress,
    Message,
    OpenUrl,
    Quit,
    Resize,
    StartDetailFetch,
    StartFetch,
    Tick,
)
from mcli.viewmodels import sidebar, viewport
from mcli.viewmodels.command_line import (
    ACTIVATION_KEY,
    CommandAction,
    CommandLine,
    FetchCommand,
    OpenCommand,
    QuitCommand,
)
from mcli.viewmodels.filter import FilterInput
from mcli.viewmodels.layout import Layout, compute_layout
from mcli.viewmodels.line_editor import EditResult

FILTER_KEY = ord("/")
HELP_KEY = ord("?")
QUIT_KEY = ord("q")
OPEN_KEY = ord("o")
DETAIL_KEY = ord("R")
SIDEBAR_KEYS = frozenset(ENTER_KEYS | {ord("d")})

NO_LINK = "Selected event has no link"


def _scroll_target(key: int, position: int, page: int, count: int) -> int | None:
    """Where a navigation key moves a position, or None when it is not one"""
    if key in (curses.KEY_UP, ord("k")):
        return position - 1
    if key in (curses.KEY_DOWN, ord("j")):
        return position + 1
    if key == curses.KEY_PPAGE:
        return position - page
    if key == curses.KEY_NPAGE:
        return position + page
    if key in (curses.KEY_HOME, ord("g")):
        return 0
    if key in (curses.KEY_END, ord("G")):
        return count - 1
    return None


class AppModel:
    """Applies one message at a time to the state and returns the effects to run.

    Keys are routed by priority: the command line while entering a command, then the
    filter box while filtering, then the sidebar when it is visible, then the table.
    """

    def __init__(
        self,
        state: McliState,
        filter_fields: tuple[str, ...] = FILTER_FIELDS,
        logger: logging.Logger | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._state = state
        self._logger = logger or logging.getLogger(__name__)
        self._clock = clock
        self._state.filter_fields = filter_fields
        self._filter = FilterInput(filter_fields)
        self._command_line = CommandLine()
        self.layout: Layout = compute_layout(state.terminal_size, False, False)
        self._relayout()

    @property
    def filter_placeholder(self) -> str:
        """Hint shown in an empty filter box"""
        return self._filter.placeholder

    def startup(self) -> list[Effect]:
        """Effects to run before the first message: the initial fetch"""
        return [self._start_fetch(None)]

    def update(self, message: Message) -> list[Effect]:
        """Apply one message"""
        match message:
            case Resize(size=size):
                self._state.terminal_size = size
                self._relayout()
                return []
            case KeyPress(key=key):
                return self._handle_key(key)
            case FetchSucceeded():
                self._fetch_succeeded(message)
                return []
            case FetchFailed():
                self._fetch_failed(message)
                return []
            case DetailFetched():
                self._detail_fetched(message)
                return []
            case DetailFetchFailed(event_id=event_id, error=error):
                self._logger.warning("Detail fetch for %s failed: %s", event_id, error)
                self._state.last_command_output = f"Could not fetch details: {error}"
                return []
            case Tick():
                if self._state.loading:
                    self._state.spinner_frame += 1
                return []
            case _:
                assert_never(message)

    # Fetch results

    def _start_fetch(self, location: str | None) -> StartFetch:
        self._state.fetch_generation += 1
        self._state.loading = True
        self._logger.info(
            "Starting fetch #%d (location=%r)", self._state.fetch_generation, location
        )
        return StartFetch(self._state.fetch_generation, location)

    def _is_stale(self, generation: int) -> bool:
        if generation != self._state.fetch_generation:
            self._logger.info(
                "Discarding result of fetch #%d, newest is #%d",
                generation,
                self._state.fetch_generation,
            )
            return True
        return False

    def _fetch_succeeded(self, message: FetchSucceeded) -> None:
        if self._is_stale(message.generation):
            return
        self._logger.info(
            "Fetch #%d returned %d events", message.generation, len(message.events)
        )
        self._state.events = message.events
        self._state.loading = False
        self._state.last_error = None
        self._state.cursor = 0
        self._state.viewport_top = 0
        self._clamp_table()

    def _fetch_failed(self, message: FetchFailed) -> None:
        if self._is_stale(message.generation):
            return
        self._logger.warning("Fetch #%d failed: %s", message.generation, message.error)
        self._state.loading = False
        self._state.last_error = message.error

    def _detail_fetched(self, message: DetailFetched) -> None:
        snapshot = self._state.sidebar
        if snapshot is None or snapshot.event.id != message.event_id:
            self._logger.debug("Discarding detail for %s", message.event_id)
            return
        self._snapshot(snapshot.event, message.detail)
        self._state.last_command_output = ""

    # Keys

    def _handle_key(self, key: int) -> list[Effect]:
        if key == CTRL_C:
            return [Quit()]
        if self._state.help_visible:
            self._state.help_visible = False
            return []
        if self._state.command_active:
            return self._handle_command_key(key)
        if self._state.last_error is not None:
            return self._handle_error_key(key)
        if self._state.filter_active:
            self._handle_filter_key(key)
            return []
        return self._handle_normal_key(key)

    def _handle_error_key(self, key: int) -> list[Effect]:
        if key == QUIT_KEY:
            return [Quit()]
        if key == ACTIVATION_KEY:
            self._begin_command()
        return []

    def _handle_normal_key(self, key: int) -> list[Effect]:
        if key == QUIT_KEY:
            return [Quit()]
        if key == ACTIVATION_KEY:
            self._begin_command()
        elif key == FILTER_KEY:
            self._begin_filter()
        elif key == HELP_KEY:
            self._state.help_visible = True
        elif key in SIDEBAR_KEYS:
            self._toggle_sidebar()
        elif key == ESC:
            if self._state.sidebar_visible:
                self._toggle_sidebar()
        elif key == OPEN_KEY:
            return self._open_selected()
        elif key == DETAIL_KEY:
            return self._fetch_detail()
        elif self._state.sidebar_visible:
            self._handle_sidebar_navigation(key)
        else:
            self._handle_table_navigation(key)
        return []

    def _begin_command(self) -> None:
        if self._state.filter_active:
            self._state.filter_text = self._filter.commit()
        update = self._command_line.begin()
        self._state.mode = Mode.COMMAND_ENTRY
        self._state.command_buffer = update.buffer
        self._state.command_cursor_pos = update.cursor_pos
        self._relayout()

    def _handle_command_key(self, key: int) -> list[Effect]:
        update = self._command_line.handle_key(key)
        self._state.command_buffer = update.buffer
        self._state.command_cursor_pos = update.cursor_pos
        if update.outcome is None:
            return []

        self._state.mode = Mode.NORMAL
        self._state.last_command_output = update.outcome.output
        self._relayout()
        return self._run_action(update.outcome.action)

    def _run_action(self, action: CommandAction | None) -> list[Effect]:
        match action:
            case None:
                return []
            case QuitCommand():
                return [Quit()]
            case FetchCommand(location=location):
                return [self._start_fetch(location)]
            case OpenCommand():
                return self._open_selected()
            case _:
                assert_never(action)

    def _begin_filter(self) -> None:
        update = self._filter.begin(self._state.filter_text)
        self._state.mode = Mode.FILTERING
        self._state.filter_cursor_pos = update.cursor_pos
        self._relayout()

    def _handle_filter_key(self, key: int) -> None:
        update = self._filter.handle_key(key)
        self._state.filter_cursor_pos = update.cursor_pos
        if update.result in (EditResult.CHANGED, EditResult.CANCELLED):
            if update.text != self._state.filter_text:
                self._state.filter_text = update.text
                self._state.cursor = 0
                self._state.viewport_top = 0
        if update.result in (EditResult.SUBMITTED, EditResult.CANCELLED):
            self._state.mode = Mode.NORMAL
            self._relayout()
        else:
            self._clamp_table()

    # Table and sidebar

    def _handle_table_navigation(self, key: int) -> None:
        count = len(self._state.displayed_events)
        target = _scroll_target(
            key, self._state.cursor, self._state.viewport_height, count
        )
        if target is None:
            return
        self._move_cursor(target - self._state.cursor)

    def _move_cursor(self, delta: int) -> None:
        count = len(self._state.displayed_events)
        self._state.cursor = viewport.move_cursor(self._state.cursor, delta, count)
        self._clamp_table()

    def _handle_sidebar_navigation(self, key: int) -> None:
        if key in (curses.KEY_LEFT, curses.KEY_RIGHT):
            self._move_cursor(-1 if key == curses.KEY_LEFT else 1)
            event = self._state.current_event
            snapshot = self._state.sidebar
            if event is not None and (snapshot is None or snapshot.event != event):
                self._snapshot(event, None)
            return

        snapshot = self._state.sidebar
        if snapshot is None:
            return
        height = self.layout.sidebar_text.height
        target = _scroll_target(
            key, self._state.sidebar_scroll, height, len(snapshot.lines)
        )
        if target is None:
            return
        self._state.sidebar_scroll = viewport.clamp_scroll(
            target, len(snapshot.lines), height
        )

    def _toggle_sidebar(self) -> None:
        if self._state.sidebar_visible:
            self._state.sidebar_visible = False
            self._state.sidebar = None
            self._state.sidebar_scroll = 0
            self._relayout()
            return

        event = self._state.current_event
        if event is None:
            return
        self._state.sidebar_visible = True
        self._relayout()
        self._snapshot(event, None)

    def _snapshot(self, event: Event, detail: EventDetail | None) -> None:
        self._state.sidebar = sidebar.snapshot(
            event, detail, self.layout.sidebar_text.width, self._clock()
        )
        self._state.sidebar_scroll = 0

    def _open_selected(self) -> list[Effect]:
        event = self._state.current_event
        if self._state.sidebar_visible and self._state.sidebar is not None:
            event = self._state.sidebar.event
        if event is None or not event.url:
            self._state.last_command_output = NO_LINK
            return []
        return [OpenUrl(event.url)]

    def _fetch_detail(self) -> list[Effect]:
        snapshot = self._state.sidebar
        if not self._state.sidebar_visible or snapshot is None:
            return []
        self._state.last_command_output = "Fetching details..."
        return [StartDetailFetch(snapshot.event)]

    # Layout

    def _relayout(self) -> None:
        self.layout = compute_layout(
            self._state.terminal_size,
            self._state.sidebar_visible,
            self._state.filter_active,
        )
        self._state.viewport_height = self.layout.viewport_height
        self._clamp_table()

        snapshot = self._state.sidebar
        width = self.layout.sidebar_text.width
        visible = self._state.sidebar_visible
        if visible and snapshot is not None and snapshot.width != width:
            scroll = self._state.sidebar_scroll
            self._state.sidebar = sidebar.snapshot(
                snapshot.event, snapshot.detail, width, self._clock()
            )
            self._state.sidebar_scroll = viewport.clamp_scroll(
                scroll, len(self._state.sidebar.lines), self.layout.sidebar_text.height
            )

    def _clamp_table(self) -> None:
        count = len(self._state.displayed_events)
        self._state.cursor = viewport.clamp_cursor(self._state.cursor, count)
        self._state.viewport_top = viewport.adjust(
            self._state.cursor,
            self._state.viewport_top,
            self._state.viewport_height,
            count,
        )
