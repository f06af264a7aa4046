"""Cell and line fitting helpers.

Widths are terminal cells: wide (East Asian wide/fullwidth, most emoji) characters take
two cells and combining marks take none.
"""

import unicodedata

ELLIPSIS = "…"


def char_width(char: str) -> int:
    """Number of terminal cells one character occupies"""
    if unicodedata.combining(char):
        return 0
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2
    return 1


def display_width(text: str) -> int:
    """Number of terminal cells `text` occupies"""
    return sum(char_width(char) for char in text)


def cut(text: str, width: int) -> str:
    """The longest prefix of `text` that fits in `width` cells"""
    used = 0
    for i, char in enumerate(text):
        used += char_width(char)
        if used > width:
            return text[:i]
    return text


def truncate(text: str, width: int) -> str:
    """Cut text to at most `width` cells, marking the cut with an ellipsis"""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    if width == 1:
        return ELLIPSIS
    return cut(text, width - 1) + ELLIPSIS


def fit(text: str, width: int) -> str:
    """Truncate and pad text so it occupies exactly `width` cells"""
    fitted = truncate(single_line(text), width)
    return fitted + " " * max(0, width - display_width(fitted))


def single_line(text: str) -> str:
    """Collapse newlines and tabs so a value can live in one table cell"""
    return " ".join(text.split())
