"""Event value types and their wire-format parsing"""

import dataclasses
import enum
import functools
import logging
from datetime import datetime, timezone
from typing import Any, assert_never

from mcli.helpers.dates import parse_datetime

logger = logging.getLogger(__name__)

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)

FILTER_FIELDS = ("title", "location", "description")


class EventParseError(ValueError):
    """A single record could not be turned into an Event"""


class SourceKind(enum.StrEnum):
    """Which upstream calendar an event came from"""

    PRIMARY = "meetup"
    SECONDARY = "luma"

    @classmethod
    def from_wire(cls, value: Any) -> "SourceKind":
        """Map the wire `source` field; anything unrecognised is primary"""
        if isinstance(value, str) and value.lower() == cls.SECONDARY.value:
            return cls.SECONDARY
        return cls.PRIMARY

    @property
    def icon(self) -> str:
        """Indicator glyph shown in the table"""
        return "✦" if self is SourceKind.SECONDARY else "☘"


@dataclasses.dataclass(frozen=True)
class UnknownPrice:
    """No usable ticket price was given"""


@dataclasses.dataclass(frozen=True)
class TextPrice:
    """A free-form price such as "Free" or "10-20 EUR" """

    text: str


@dataclasses.dataclass(frozen=True)
class AmountPrice:
    """A numeric price"""

    amount: float


TicketPrice = UnknownPrice | TextPrice | AmountPrice


def parse_ticket_price(value: Any) -> TicketPrice:
    """Turn the string-or-number wire value into a TicketPrice"""
    if value is None or isinstance(value, bool):
        return UnknownPrice()
    if isinstance(value, (int, float)):
        return AmountPrice(float(value))
    if isinstance(value, str):
        return TextPrice(value) if value.strip() else UnknownPrice()
    return TextPrice(str(value))


def format_ticket_price(price: TicketPrice) -> str:
    """Format a ticket price for display"""
    match price:
        case UnknownPrice():
            return "N/A"
        case TextPrice(text=text):
            return text
        case AmountPrice(amount=amount):
            if amount.is_integer():
                return f"${int(amount)}"
            return f"${amount:.2f}"
        case _:
            assert_never(price)


@dataclasses.dataclass(frozen=True)
class Venue:
    """Where an event takes place"""

    name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    country: str = ""

    @property
    def display(self) -> str:
        """The most specific non-empty description of the place"""
        return self.name or self.address or self.city

    @property
    def region(self) -> str:
        """City, state and country joined, skipping blanks"""
        return ", ".join(part for part in (self.city, self.state, self.country) if part)


@dataclasses.dataclass(frozen=True)
class Ticket:
    """Ticketing information"""

    count: int = 0
    remaining: int = 0
    price: TicketPrice = UnknownPrice()


@dataclasses.dataclass(frozen=True)
class Event:  # pylint: disable=too-many-instance-attributes
    """A single calendar entry as listed by the events endpoint"""

    id: str
    title: str
    description: str | None = None
    url: str = ""
    venue: Venue = Venue()
    date_time: str = ""
    source: SourceKind = SourceKind.PRIMARY
    event_type: str = ""
    ticket: Ticket = Ticket()
    rsvp_count: int = 0
    image_url: str | None = None
    organizer_name: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "Event":
        """Build an Event from one element of the events array"""
        if not isinstance(data, dict):
            raise EventParseError(f"expected an object, got {type(data).__name__}")
        event_id = _str(data, "id")
        if not event_id:
            raise EventParseError("event without an id")

        return cls(
            id=event_id,
            title=_str(data, "title"),
            description=_optional_str(data, "description"),
            url=_str(data, "url"),
            venue=Venue(
                name=_str(data, "venueName") or _str(data, "location"),
                address=_str(data, "venueAddress"),
                city=_str(data, "venueCity"),
                state=_str(data, "venueState"),
                country=_str(data, "venueCountry"),
            ),
            date_time=_str(data, "dateTime"),
            source=SourceKind.from_wire(data.get("source")),
            event_type=_str(data, "eventType"),
            ticket=Ticket(
                count=_int(data, "ticketCount"),
                remaining=_int(data, "ticketRemaining"),
                price=parse_ticket_price(data.get("ticketPrice")),
            ),
            rsvp_count=_int(data, "rsvpsCount") or _int(data, "rsvpCount"),
            image_url=_optional_str(data, "imageUrl"),
            organizer_name=_str(data, "organizerName"),
        )

    @property
    def location(self) -> str:
        """Location text shown in the table and matched by the filter"""
        return self.venue.display

    @functools.cached_property
    def parsed_date(self) -> datetime | None:
        """The event start as an aware UTC datetime, or None when malformed"""
        return parse_datetime(self.date_time)

    def field_text(self, field: str) -> str:
        """The text of a filterable field"""
        if field == "title":
            return self.title
        if field == "location":
            return self.location
        if field == "description":
            return self.description or ""
        raise KeyError(field)

    def matches(self, query: str, fields: tuple[str, ...] = FILTER_FIELDS) -> bool:
        """Case-insensitive substring match against any of the given fields"""
        if not query:
            return True
        query_lower = query.lower()
        return any(query_lower in self.field_text(field).lower() for field in fields)


@dataclasses.dataclass(frozen=True)
class EventDetail:  # pylint: disable=too-many-instance-attributes
    """The richer record returned by the per-source detail endpoint"""

    id: str
    title: str
    source: SourceKind
    description: str = ""
    url: str = ""
    venue: Venue = Venue()
    date_time: str = ""
    event_type: str = ""
    group_name: str = ""
    organizer_id: str = ""
    organizer_name: str = ""
    ticket: Ticket = Ticket()
    rsvps_count: int = 0

    @classmethod
    def from_json(cls, data: Any, source: SourceKind) -> "EventDetail":
        """Build an EventDetail; the two sources name the region fields differently"""
        if not isinstance(data, dict):
            raise EventParseError(f"expected an object, got {type(data).__name__}")

        return cls(
            id=_str(data, "id"),
            title=_str(data, "title"),
            source=source,
            description=_str(data, "description"),
            url=_str(data, "url"),
            venue=Venue(
                name=_str(data, "venueName"),
                address=_str(data, "venueAddress"),
                city=_str(data, "city") or _str(data, "venueCity"),
                state=_str(data, "state") or _str(data, "venueState"),
                country=_str(data, "country") or _str(data, "venueCountry"),
            ),
            date_time=_str(data, "dateTime"),
            event_type=_str(data, "eventType"),
            group_name=_str(data, "groupName"),
            organizer_id=_str(data, "organizerId"),
            organizer_name=_str(data, "organizerName"),
            ticket=Ticket(
                count=_int(data, "ticketCount"),
                remaining=_int(data, "ticketRemaining"),
                price=parse_ticket_price(data.get("ticketPrice")),
            ),
            rsvps_count=_int(data, "rsvpsCount"),
        )


def parse_events(payload: Any) -> tuple[Event, ...]:
    """Parse the events array, skipping malformed records and repeated ids"""
    if not isinstance(payload, list):
        raise EventParseError(f"expected a JSON array, got {type(payload).__name__}")

    events: list[Event] = []
    seen_ids: set[str] = set()
    for index, item in enumerate(payload):
        try:
            event = Event.from_json(item)
        except EventParseError as e:
            logger.debug("Skipping event #%d: %s", index, e)
            continue
        if event.id in seen_ids:
            logger.debug("Skipping duplicate event id %s", event.id)
            continue
        seen_ids.add(event.id)
        events.append(event)
    return tuple(events)


def sort_by_date(events: tuple[Event, ...]) -> tuple[Event, ...]:
    """Ascending by start time; malformed dates go last, keeping their relative order"""
    return tuple(
        sorted(
            events,
            key=lambda e: (e.parsed_date is None, e.parsed_date or _EARLIEST),
        )
    )


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value)


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    return str(value)


def _int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool):
        return 0
    try:
        return int(value) if value is not None else 0
    except (TypeError, ValueError):
        return 0
