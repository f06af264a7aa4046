"""The ':' command line: editing and command execution"""

import dataclasses
from typing import Callable, NamedTuple

from mcli.viewmodels.line_editor import EditResult, LineEditor

ACTIVATION_KEY = ord(":")
MAX_COMMAND_LENGTH = 156
PROMPT = ": "


@dataclasses.dataclass(frozen=True)
class QuitCommand:
    """Terminate the application"""


@dataclasses.dataclass(frozen=True)
class FetchCommand:
    """Fetch events again, optionally for a location"""

    location: str | None = None


@dataclasses.dataclass(frozen=True)
class OpenCommand:
    """Open the selected event's link"""


CommandAction = QuitCommand | FetchCommand | OpenCommand


class CommandResult(NamedTuple):
    """Text to show after a command and the action it asks for, if any"""

    output: str
    action: CommandAction | None = None


def _help(_: str) -> CommandResult:
    return CommandResult(
        "Commands: help, quit, refresh [location], fetch <location>, open"
    )


def _quit(_: str) -> CommandResult:
    return CommandResult("Bye", QuitCommand())


def _fetch(argument: str) -> CommandResult:
    if not argument:
        return CommandResult("Refreshing events...", FetchCommand())
    return CommandResult(f"Fetching events for '{argument}'...", FetchCommand(argument))


def _open(_: str) -> CommandResult:
    return CommandResult("Opening link...", OpenCommand())


COMMANDS: dict[str, Callable[[str], CommandResult]] = {
    "help": _help,
    "quit": _quit,
    "q": _quit,
    "exit": _quit,
    "refresh": _fetch,
    "fetch": _fetch,
    "open": _open,
}


def execute(raw_input: str) -> CommandResult:
    """Run a command line: a case-insensitive name, then one argument string"""
    name, _, argument = raw_input.strip().partition(" ")
    if not name:
        return CommandResult("")
    handler = COMMANDS.get(name.lower())
    if handler is None:
        return CommandResult(f"Unknown command: {name}")
    return handler(argument.strip())


class CommandUpdate(NamedTuple):
    """Outcome of one key press in the command line"""

    result: EditResult
    buffer: str
    cursor_pos: int
    outcome: CommandResult | None = None


class CommandLine:
    """Edits a command and runs it on submit"""

    def __init__(self) -> None:
        self._editor = LineEditor(MAX_COMMAND_LENGTH)

    def begin(self) -> CommandUpdate:
        """Start a fresh command"""
        self._editor.reset()
        return CommandUpdate(EditResult.MOVED, "", 0)

    def handle_key(self, key: int) -> CommandUpdate:
        """Apply one key; submitting runs the command, cancelling discards it"""
        result = self._editor.handle_key(key)
        if result == EditResult.SUBMITTED:
            outcome = execute(self._editor.text)
            self._editor.reset()
            return CommandUpdate(result, "", 0, outcome)
        if result == EditResult.CANCELLED:
            self._editor.reset()
            return CommandUpdate(result, "", 0, CommandResult("Command cancelled"))
        return CommandUpdate(result, self._editor.text, self._editor.cursor_pos)
