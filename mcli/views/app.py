"""Main loop: turns terminal input and fetch results into messages and redraws"""

import curses
import logging
import queue
from datetime import datetime
from typing import Callable, assert_never

from mcli.fetcher import FetchOrchestrator
from mcli.helpers.dates import utc_now
from mcli.helpers.opener import open_url
from mcli.input_controller import NO_KEY, InputController
from mcli.models.mcli_model import McliState
from mcli.models.messages import (
    Effect,
    KeyPress,
    Message,
    OpenUrl,
    Quit,
    Resize,
    StartDetailFetch,
    StartFetch,
    Tick,
)
from mcli.output_controller import OutputController
from mcli.viewmodels.app import AppModel
from mcli.views.footer import FooterView
from mcli.views.header import HeaderView
from mcli.views.help import HelpView
from mcli.views.sidebar import SidebarView
from mcli.views.table import TableView

logger = logging.getLogger(__name__)


class App:  # pylint: disable=too-many-instance-attributes
    """Owns the frame: reads a key or a timeout, applies it and drains fetch results"""

    def __init__(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        output_controller: OutputController,
        input_controller: InputController,
        state: McliState,
        model: AppModel,
        orchestrator: FetchOrchestrator,
        messages: "queue.Queue[Message]",
        url_opener: Callable[[str], bool] = open_url,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._output_controller = output_controller
        self._input_controller = input_controller
        self._state = state
        self._model = model
        self._orchestrator = orchestrator
        self._messages = messages
        self._url_opener = url_opener
        self._clock = clock

        self._window = output_controller.create_main_window()
        self._header = HeaderView(state)
        self._table = TableView(state)
        self._sidebar = SidebarView(state)
        self._footer = FooterView(state, model.filter_placeholder)
        self._help = HelpView()

    def run(self) -> None:
        """Run until a quit effect is produced"""
        self._output_controller.curs_set(0)
        if self._dispatch(Resize(self._output_controller.get_terminal_size())):
            return
        if self._run_effects(self._model.startup()):
            return
        self.draw()

        while True:
            if self._dispatch(self._next_input_message()):
                return
            while True:
                try:
                    message = self._messages.get_nowait()
                except queue.Empty:
                    break
                if self._dispatch(message):
                    return

            if self._state.changes:
                self.draw()

    def _next_input_message(self) -> Message:
        key = self._input_controller.get_input()
        if key == NO_KEY:
            return Tick()
        if key == curses.KEY_RESIZE:
            self._output_controller.update_lines_cols()
            return Resize(self._output_controller.get_terminal_size())
        return KeyPress(key)

    def _dispatch(self, message: Message) -> bool:
        """Apply one message; True when the loop should stop"""
        return self._run_effects(self._model.update(message))

    def _run_effects(self, effects: list[Effect]) -> bool:
        for effect in effects:
            match effect:
                case Quit():
                    logger.info("Quit requested")
                    return True
                case StartFetch(generation=generation, location=location):
                    self._orchestrator.start_fetch(generation, location)
                case StartDetailFetch(event=event):
                    self._orchestrator.start_detail_fetch(event)
                case OpenUrl(url=url):
                    self._url_opener(url)
                case _:
                    assert_never(effect)
        return False

    def draw(self) -> None:
        """Draw a full frame from the current state"""
        layout = self._model.layout
        self._window.erase()

        if self._state.help_visible:
            self._help.draw(self._window, layout.terminal)
        else:
            self._header.draw(self._window, layout.header)
            self._table.draw(self._window, layout.table, self._clock())
            self._sidebar.draw(self._window, layout.sidebar, layout.sidebar_text)

        cursor = self._footer.draw(self._window, layout.filter, layout.footer)
        if cursor is None:
            self._output_controller.curs_set(0)
        else:
            self._output_controller.curs_set(1)
            self._window.move(cursor)

        self._window.refresh()
        self._state.clear_changes()
