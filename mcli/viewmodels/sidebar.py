"""Detail sidebar content: the lines shown for the selected event"""

from datetime import datetime

from mcli.helpers.curses_utils import TextAttribute
from mcli.helpers.dates import format_local, format_relative
from mcli.helpers.markup import (
    Span,
    StyledLine,
    resolve_markup,
    truncate_line,
    wrap_line,
)
from mcli.models.event import Event, EventDetail, format_ticket_price
from mcli.models.mcli_model import SidebarSnapshot

FETCH_DESCRIPTION_HINT = "press R to fetch description"
NO_DESCRIPTION = "No description"

_BOLD = (TextAttribute.BOLD,)
_DIM = (TextAttribute.DIM,)


def _labelled(label: str, value: str) -> StyledLine:
    return [Span(f"{label} ", _BOLD), Span(value)]


def _header_lines(event: Event, now: datetime) -> list[StyledLine]:
    lines: list[StyledLine] = [[Span(event.title or "(untitled)", _BOLD)], []]
    if event.url:
        lines.append([Span("🔗 "), Span(event.url, (TextAttribute.UNDERLINE,))])
    if event.location:
        lines.append([Span(f"📍 {event.location}")])
    if event.parsed_date is not None:
        lines.append(
            [
                Span(f"📅 {format_local(event.parsed_date)} "),
                Span(f"({format_relative(event.parsed_date, now)})", _DIM),
            ]
        )
    return lines


def _detail_lines(detail: EventDetail) -> list[StyledLine]:
    lines: list[StyledLine] = []
    if detail.group_name:
        lines.append(_labelled("Group:", detail.group_name))
    if detail.organizer_name:
        lines.append(_labelled("Organizer:", detail.organizer_name))
    if detail.event_type:
        lines.append(_labelled("Type:", detail.event_type))
    if detail.venue.region:
        lines.append(_labelled("Region:", detail.venue.region))
    if detail.rsvps_count:
        lines.append(_labelled("RSVPs:", str(detail.rsvps_count)))
    if detail.ticket.count:
        lines.append(
            _labelled(
                "Tickets:", f"{detail.ticket.remaining} of {detail.ticket.count} left"
            )
        )
    lines.append(_labelled("Price:", format_ticket_price(detail.ticket.price)))
    return lines


def _description(event: Event, detail: EventDetail | None) -> str | None:
    if detail is not None and detail.description:
        return detail.description
    return event.description


def render(
    event: Event, detail: EventDetail | None, width: int, now: datetime
) -> tuple[StyledLine, ...]:
    """All sidebar lines for an event, wrapped and cut to `width` columns"""
    logical = _header_lines(event, now)
    if detail is not None:
        logical.append([])
        logical.extend(_detail_lines(detail))

    logical.append([])
    logical.append([Span("Description:", _BOLD)])
    description = _description(event, detail)
    if description is None:
        logical.append([Span(FETCH_DESCRIPTION_HINT, _DIM)])
    elif not description.strip():
        logical.append([Span(NO_DESCRIPTION, _DIM)])
    else:
        logical.extend(resolve_markup(description))

    lines: list[StyledLine] = []
    for line in logical:
        for wrapped in wrap_line(line, width):
            lines.append(truncate_line(wrapped, width))
    return tuple(lines)


def snapshot(
    event: Event, detail: EventDetail | None, width: int, now: datetime
) -> SidebarSnapshot:
    """Capture the sidebar content for an event at the given text width"""
    return SidebarSnapshot(event, detail, render(event, detail, width, now), width)
