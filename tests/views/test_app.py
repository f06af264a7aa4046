"""Tests for the main loop wiring input, fetch results, effects and drawing."""

import curses
import queue
from datetime import datetime, timezone
from typing import Callable
from unittest.mock import Mock

import pytest

from mcli.fetcher import FetchOrchestrator
from mcli.helpers.curses_utils import Size
from mcli.input_controller import NO_KEY, InputController
from mcli.models.event import Event
from mcli.models.mcli_model import McliState
from mcli.models.messages import FetchSucceeded, Message
from mcli.viewmodels.app import AppModel
from mcli.views.app import App
from tests.infra.mock_output_controller import MockOutputController

NOW = datetime(2025, 5, 14, 5, 34, tzinfo=timezone.utc)

EVENTS = (
    Event.from_json(
        {"id": "1", "title": "Python Meetup", "url": "https://example.com/1"}
    ),
    Event.from_json({"id": "2", "title": "Rust Night", "url": "https://example.com/2"}),
)


class ScriptedInputController(InputController):
    """Replays keys; callables run first and return the key to deliver"""

    def __init__(self, keys: list[int | Callable[[], int]]) -> None:
        self._keys = list(keys)

    def get_input(self) -> int:
        if not self._keys:
            return ord("q")
        key = self._keys.pop(0)
        if callable(key):
            return key()
        return key


@pytest.fixture(name="output_controller")
def output_controller_fixture() -> MockOutputController:
    """Create a mock terminal"""
    return MockOutputController(Size(24, 100))


@pytest.fixture(name="messages")
def messages_fixture() -> "queue.Queue[Message]":
    """Create the message queue shared with the orchestrator"""
    return queue.Queue()


@pytest.fixture(name="orchestrator")
def orchestrator_fixture(messages: "queue.Queue[Message]") -> Mock:
    """Create an orchestrator whose list fetch completes immediately"""
    orchestrator = Mock(spec=FetchOrchestrator)

    def complete(generation: int, *_: object) -> None:
        messages.put(FetchSucceeded(EVENTS, generation))

    orchestrator.start_fetch.side_effect = complete
    return orchestrator


@pytest.fixture(name="state")
def state_fixture() -> McliState:
    """Create a fresh application state"""
    return McliState()


def _run(
    keys: list[int | Callable[[], int]],
    output_controller: MockOutputController,
    state: McliState,
    orchestrator: Mock,
    messages: "queue.Queue[Message]",
    url_opener: Mock | None = None,
) -> AppModel:
    model = AppModel(state, clock=lambda: NOW)
    app = App(
        output_controller,
        ScriptedInputController(keys),
        state,
        model,
        orchestrator,
        messages,
        url_opener=url_opener or Mock(return_value=True),
        clock=lambda: NOW,
    )
    app.run()
    return model


def test_run_fetches_and_draws_events(
    output_controller: MockOutputController,
    state: McliState,
    orchestrator: Mock,
    messages: "queue.Queue[Message]",
) -> None:
    """Test that the first fetch is started and its events reach the screen."""
    # Act
    _run([NO_KEY, ord("q")], output_controller, state, orchestrator, messages)

    # Assert
    orchestrator.start_fetch.assert_called_once_with(1, None)
    assert not state.loading
    screen = output_controller.get_screen()
    assert "Python Meetup" in screen
    assert "Rust Night" in screen


def test_run_opens_selected_url(
    output_controller: MockOutputController,
    state: McliState,
    orchestrator: Mock,
    messages: "queue.Queue[Message]",
) -> None:
    """Test that the open effect reaches the URL opener."""
    # Arrange
    opener = Mock(return_value=True)

    # Act
    _run(
        [NO_KEY, ord("j"), ord("o"), ord("q")],
        output_controller,
        state,
        orchestrator,
        messages,
        url_opener=opener,
    )

    # Assert
    opener.assert_called_once_with("https://example.com/2")


def test_run_starts_detail_fetch(
    output_controller: MockOutputController,
    state: McliState,
    orchestrator: Mock,
    messages: "queue.Queue[Message]",
) -> None:
    """Test that R in the sidebar asks the orchestrator for details."""
    # Act
    _run(
        [NO_KEY, ord("\n"), ord("R"), ord("q")],
        output_controller,
        state,
        orchestrator,
        messages,
    )

    # Assert
    orchestrator.start_detail_fetch.assert_called_once_with(EVENTS[0])


def test_run_refresh_command_starts_new_fetch(
    output_controller: MockOutputController,
    state: McliState,
    orchestrator: Mock,
    messages: "queue.Queue[Message]",
) -> None:
    """Test that :fetch dispatches a fetch with the next generation and location."""
    # Arrange
    keys: list[int | Callable[[], int]] = [NO_KEY]
    keys.extend(ord(char) for char in ":fetch Berlin\n")

    # Act
    _run(keys, output_controller, state, orchestrator, messages)

    # Assert
    orchestrator.start_fetch.assert_called_with(2, "Berlin")
    assert state.fetch_generation == 2


def test_run_handles_resize(
    output_controller: MockOutputController,
    state: McliState,
    orchestrator: Mock,
    messages: "queue.Queue[Message]",
) -> None:
    """Test that a resize key re-reads the terminal size and relays out."""

    # Arrange
    def resize() -> int:
        output_controller.set_terminal_size(Size(30, 120))
        return curses.KEY_RESIZE

    # Act
    model = _run([resize, ord("q")], output_controller, state, orchestrator, messages)

    # Assert
    assert state.terminal_size == Size(30, 120)
    assert model.layout.terminal == Size(30, 120)


def test_run_animates_spinner_while_loading(
    output_controller: MockOutputController,
    state: McliState,
    messages: "queue.Queue[Message]",
) -> None:
    """Test that timeouts become ticks that redraw the loading indicator."""
    # Arrange
    silent_orchestrator = Mock(spec=FetchOrchestrator)

    # Act
    _run(
        [NO_KEY, NO_KEY, ord("q")],
        output_controller,
        state,
        silent_orchestrator,
        messages,
    )

    # Assert
    assert state.loading
    assert state.spinner_frame == 2
    assert "Loading events" in output_controller.get_screen()
