"""Tests for Event parsing, sorting and ticket prices."""

import pytest

from mcli.models.event import (
    AmountPrice,
    Event,
    EventDetail,
    EventParseError,
    SourceKind,
    TextPrice,
    UnknownPrice,
    format_ticket_price,
    parse_events,
    parse_ticket_price,
    sort_by_date,
)


def _record(event_id: str, **fields) -> dict:
    return {"id": event_id, "title": f"Event {event_id}", **fields}


def test_from_json_reads_wire_fields() -> None:
    """Test that the wire names map onto the Event fields."""
    # Arrange
    data = _record(
        "42",
        description=None,
        url="https://example.com/42",
        venueName="Community Hall",
        venueAddress="1 Main St",
        dateTime="2025-06-01T10:00:00Z",
        source="luma",
        eventType="PHYSICAL",
        ticketCount=100,
        ticketRemaining=12,
        ticketPrice=15,
        rsvpCount=30,
        imageUrl=None,
    )

    # Act
    event = Event.from_json(data)

    # Assert
    assert event.id == "42"
    assert event.description is None
    assert event.location == "Community Hall"
    assert event.source is SourceKind.SECONDARY
    assert event.ticket.remaining == 12
    assert event.ticket.price == AmountPrice(15.0)
    assert event.rsvp_count == 30


def test_from_json_defaults_missing_fields() -> None:
    """Test that absent optional fields fall back to zero values."""
    # Act
    event = Event.from_json({"id": "1"})

    # Assert
    assert event.title == ""
    assert event.location == ""
    assert event.source is SourceKind.PRIMARY
    assert event.ticket.price == UnknownPrice()
    assert event.parsed_date is None


def test_from_json_location_falls_back_to_address() -> None:
    """Test that the location column uses the address when the venue has no name."""
    # Act
    event = Event.from_json(_record("1", venueAddress="1 Main St"))

    # Assert
    assert event.location == "1 Main St"


def test_from_json_requires_id() -> None:
    """Test that a record without an id is rejected."""
    # Act / Assert
    with pytest.raises(EventParseError):
        Event.from_json({"title": "No id"})


def test_parse_events_skips_bad_records_and_duplicates() -> None:
    """Test that malformed records and repeated ids are dropped, order is kept."""
    # Arrange
    payload = [
        _record("1"),
        "not an object",
        {"title": "no id"},
        _record("2"),
        _record("1"),
    ]

    # Act
    events = parse_events(payload)

    # Assert
    assert [event.id for event in events] == ["1", "2"]


def test_parse_events_rejects_non_list() -> None:
    """Test that a payload that is not an array is an error."""
    # Act / Assert
    with pytest.raises(EventParseError):
        parse_events({"events": []})


def test_sort_by_date_puts_invalid_last() -> None:
    """Test that valid dates sort ascending and malformed ones go last."""
    # Arrange
    events = parse_events(
        [
            _record("a", dateTime="2025-06-01T10:00:00Z"),
            _record("b", dateTime="2025-05-01T10:00:00-07:00"),
            _record("c", dateTime="bad-date"),
        ]
    )

    # Act
    result = sort_by_date(events)

    # Assert
    assert [event.id for event in result] == ["b", "a", "c"]


def test_sort_by_date_is_stable() -> None:
    """Test that equal and malformed dates keep their arrival order."""
    # Arrange
    events = parse_events(
        [
            _record("x", dateTime=""),
            _record("a", dateTime="2025-06-01T10:00:00Z"),
            _record("y", dateTime="nope"),
            _record("b", dateTime="2025-06-01T10:00:00Z"),
        ]
    )

    # Act
    result = sort_by_date(events)

    # Assert
    assert [event.id for event in result] == ["a", "b", "x", "y"]


def test_matches_any_field_case_insensitively() -> None:
    """Test that the filter predicate ORs across title, location and description."""
    # Arrange
    event = Event.from_json(
        _record("1", title="Rust Night", venueName="Berlin Hub", description="Talks")
    )

    # Assert
    assert event.matches("rust")
    assert event.matches("BERLIN")
    assert event.matches("talk")
    assert event.matches("")
    assert not event.matches("python")


def test_matches_respects_field_selection() -> None:
    """Test that only the configured fields are searched."""
    # Arrange
    event = Event.from_json(_record("1", title="Rust Night", venueName="Berlin Hub"))

    # Assert
    assert not event.matches("berlin", ("title",))
    assert event.matches("rust", ("title",))


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, UnknownPrice()),
        ("", UnknownPrice()),
        ("Free", TextPrice("Free")),
        (12, AmountPrice(12.0)),
        (12.5, AmountPrice(12.5)),
    ],
)
def test_parse_ticket_price(value, expected) -> None:
    """Test that the string-or-number wire value becomes the right variant."""
    # Assert
    assert parse_ticket_price(value) == expected


def test_format_ticket_price() -> None:
    """Test the display format of each price variant."""
    # Assert
    assert format_ticket_price(UnknownPrice()) == "N/A"
    assert format_ticket_price(TextPrice("Free")) == "Free"
    assert format_ticket_price(AmountPrice(12.0)) == "$12"
    assert format_ticket_price(AmountPrice(12.5)) == "$12.50"


def test_event_detail_reads_region_from_either_naming() -> None:
    """Test that both sources' region field names are understood."""
    # Act
    first = EventDetail.from_json(
        {"id": "1", "city": "Berlin", "country": "DE"}, SourceKind.PRIMARY
    )
    second = EventDetail.from_json(
        {"id": "2", "venueCity": "Paris", "venueCountry": "FR"}, SourceKind.SECONDARY
    )

    # Assert
    assert first.venue.region == "Berlin, DE"
    assert second.venue.region == "Paris, FR"
