"""Filter box editing: live text that narrows the displayed events"""

from typing import NamedTuple

from mcli.models.event import FILTER_FIELDS
from mcli.viewmodels.line_editor import EditResult, LineEditor

MAX_FILTER_LENGTH = 50


class FilterUpdate(NamedTuple):
    """Outcome of one key press in the filter box"""

    result: EditResult
    text: str
    cursor_pos: int


class FilterInput:
    """Edits the filter text and remembers the committed text to revert to on cancel"""

    def __init__(self, fields: tuple[str, ...] = FILTER_FIELDS) -> None:
        self._editor = LineEditor(MAX_FILTER_LENGTH)
        self._committed = ""
        self.placeholder = f"Filter by {', '.join(fields)}..."

    def begin(self, committed_text: str) -> FilterUpdate:
        """Start editing from the currently committed filter"""
        self._committed = committed_text
        self._editor.reset(committed_text)
        return FilterUpdate(
            EditResult.MOVED, self._editor.text, self._editor.cursor_pos
        )

    def handle_key(self, key: int) -> FilterUpdate:
        """Apply one key; a cancel reports the text from before editing started"""
        result = self._editor.handle_key(key)
        if result == EditResult.CANCELLED:
            self._editor.reset(self._committed)
        elif result == EditResult.SUBMITTED:
            self._committed = self._editor.text
        return FilterUpdate(result, self._editor.text, self._editor.cursor_pos)

    def commit(self) -> str:
        """Keep the live text as the committed filter, as if submitted"""
        self._committed = self._editor.text
        return self._committed
