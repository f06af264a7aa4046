"""Resolve the small markdown dialect found in event descriptions into styled spans.

Only what descriptions actually use is supported: headings, bullet lists, block quotes,
bold, italic, inline code, links and images. Anything else passes through as plain text.
"""

import html
import re
from typing import NamedTuple

from mcli.helpers.curses_utils import TextAttribute
from mcli.helpers.text import ELLIPSIS, cut, display_width


class Span(NamedTuple):
    """A run of text sharing the same attributes"""

    text: str
    attributes: tuple[TextAttribute, ...] = ()


StyledLine = list[Span]

_HEADING = re.compile(r"^\s{0,3}(#{1,6})\s+(.*?)\s*#*\s*$")
_BULLET = re.compile(r"^(\s*)[-*+]\s+(.*)$")
_QUOTE = re.compile(r"^\s*>\s?(.*)$")
_RULE = re.compile(r"^\s*([-*_])(\s*\1){2,}\s*$")
_BREAK_TAG = re.compile(r"<br\s*/?>|</p>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]+>")
_ESCAPE = re.compile(r"\\([\\`*_{}\[\]()#+\-.!>~|])")

_INLINE = re.compile(
    r"\*\*(?P<bold>.+?)\*\*"
    r"|__(?P<bold2>.+?)__"
    r"|\*(?P<italic>[^*\s][^*]*?)\*"
    r"|(?<!\w)_(?P<italic2>[^_\s][^_]*?)_(?!\w)"
    r"|`(?P<code>[^`]+)`"
    r"|!\[(?P<alt>[^\]]*)\]\([^)]*\)"
    r"|\[(?P<label>[^\]]+)\]\((?P<url>[^)\s]+)\)"
)

_BOLD = (TextAttribute.BOLD,)
_ITALIC = (TextAttribute.ITALIC,)


def resolve_markup(text: str) -> list[StyledLine]:
    """Turn description markup into logical (unwrapped) styled lines"""
    text = _BREAK_TAG.sub("\n", text.replace("\r\n", "\n"))
    text = html.unescape(_ANY_TAG.sub("", text))

    lines: list[StyledLine] = []
    for raw_line in text.split("\n"):
        lines.append(_resolve_line(raw_line.rstrip()))

    # Collapse runs of blank lines left behind by stripped tags
    collapsed: list[StyledLine] = []
    for line in lines:
        if not line_text(line) and collapsed and not line_text(collapsed[-1]):
            continue
        collapsed.append(line)
    while collapsed and not line_text(collapsed[-1]):
        collapsed.pop()
    return collapsed


def _resolve_line(raw_line: str) -> StyledLine:
    if not raw_line.strip():
        return []
    if _RULE.match(raw_line):
        return [Span("―" * 3, (TextAttribute.DIM,))]

    heading = _HEADING.match(raw_line)
    if heading:
        return [
            Span(
                span.text,
                _merge(span.attributes, (TextAttribute.BOLD, TextAttribute.UNDERLINE)),
            )
            for span in _resolve_inline(heading.group(2))
        ]

    bullet = _BULLET.match(raw_line)
    if bullet:
        indent = " " * len(bullet.group(1))
        return [Span(f"{indent}• ")] + _resolve_inline(bullet.group(2))

    quote = _QUOTE.match(raw_line)
    if quote:
        return [Span("│ ", (TextAttribute.DIM,))] + [
            Span(span.text, _merge(span.attributes, _ITALIC))
            for span in _resolve_inline(quote.group(1))
        ]

    return _resolve_inline(raw_line)


def _resolve_inline(text: str) -> StyledLine:
    spans: StyledLine = []
    position = 0
    for match in _INLINE.finditer(text):
        if match.start() > position:
            spans.append(Span(_unescape(text[position : match.start()])))
        spans.extend(_inline_match_spans(match))
        position = match.end()
    if position < len(text):
        spans.append(Span(_unescape(text[position:])))
    return [span for span in spans if span.text]


def _inline_match_spans(match: re.Match[str]) -> StyledLine:
    groups = match.groupdict()
    if groups["bold"] is not None or groups["bold2"] is not None:
        return [Span(_unescape(groups["bold"] or groups["bold2"]), _BOLD)]
    if groups["italic"] is not None or groups["italic2"] is not None:
        return [Span(_unescape(groups["italic"] or groups["italic2"]), _ITALIC)]
    if groups["code"] is not None:
        return [Span(groups["code"], (TextAttribute.REVERSE,))]
    if groups["alt"] is not None:
        alt = groups["alt"] or "image"
        return [Span(f"[{alt}]", (TextAttribute.DIM,))]
    return [
        Span(_unescape(groups["label"])),
        Span(f" <{groups['url']}>", (TextAttribute.UNDERLINE,)),
    ]


def _unescape(text: str) -> str:
    return _ESCAPE.sub(r"\1", text)


def _merge(
    first: tuple[TextAttribute, ...], second: tuple[TextAttribute, ...]
) -> tuple[TextAttribute, ...]:
    return first + tuple(attr for attr in second if attr not in first)


def line_text(line: StyledLine) -> str:
    """The plain text of a styled line"""
    return "".join(span.text for span in line)


def wrap_line(line: StyledLine, width: int) -> list[StyledLine]:
    """Greedy word wrap of a styled line.

    Words wider than `width` are left whole for truncation.
    """
    if not line or width <= 0:
        return [[]]

    words: list[list[Span]] = [[]]
    for span in line:
        for i, chunk in enumerate(re.split(r"(\s+)", span.text)):
            if not chunk:
                continue
            if i % 2 == 1:
                words.append([])
            else:
                words[-1].append(Span(chunk, span.attributes))
    words = [word for word in words if word]

    wrapped: list[StyledLine] = []
    current: StyledLine = []
    current_width = 0
    for word in words:
        word_width = sum(display_width(span.text) for span in word)
        if current and current_width + 1 + word_width > width:
            wrapped.append(current)
            current, current_width = [], 0
        if current:
            current.append(Span(" ", current[-1].attributes))
            current_width += 1
        current.extend(word)
        current_width += word_width
    wrapped.append(current)
    return wrapped


def truncate_line(line: StyledLine, width: int) -> StyledLine:
    """Cut a styled line to `width` cells, ending with an ellipsis when cut"""
    if width <= 0:
        return []
    if display_width(line_text(line)) <= width:
        return line

    result: StyledLine = []
    remaining = width - 1
    for span in line:
        if remaining <= 0:
            break
        kept = cut(span.text, remaining)
        if kept:
            result.append(Span(kept, span.attributes))
        if kept != span.text:
            break
        remaining -= display_width(kept)
    last_attributes = result[-1].attributes if result else ()
    result.append(Span(ELLIPSIS, last_attributes))
    return result
