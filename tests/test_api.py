"""Tests for the HTTP client of the events service."""

import pytest
import requests
import responses
from responses import matchers

from mcli.api import EventsClient, FetchError
from mcli.models.event import Event, SourceKind, TextPrice

BASE_URL = "https://events.example.com/api"


@pytest.fixture(name="client")
def client_fixture() -> EventsClient:
    """Create a client for the mocked service"""
    return EventsClient(BASE_URL + "/", timeout=2)


@responses.activate
def test_fetch_events_parses_and_sorts(client: EventsClient) -> None:
    """Test that the list is parsed, bad records skipped and the rest sorted by date."""
    # Arrange
    responses.add(
        responses.GET,
        f"{BASE_URL}/events",
        json=[
            {"id": "a", "title": "Later", "dateTime": "2025-06-01T10:00:00Z"},
            {"id": "b", "title": "Sooner", "dateTime": "2025-05-01T10:00:00-07:00"},
            {"title": "no id"},
            {"id": "c", "title": "Unknown date", "dateTime": "bad-date"},
        ],
        status=200,
    )

    # Act
    events = client.fetch_events()

    # Assert
    assert [event.id for event in events] == ["b", "a", "c"]


@responses.activate
def test_fetch_events_sends_location(client: EventsClient) -> None:
    """Test that a location is passed as a query parameter."""
    # Arrange
    responses.add(
        responses.GET,
        f"{BASE_URL}/events",
        json=[],
        match=[matchers.query_param_matcher({"location": "Berlin"})],
    )

    # Act
    events = client.fetch_events("Berlin")

    # Assert
    assert events == ()


@responses.activate
def test_fetch_events_http_error(client: EventsClient) -> None:
    """Test that a non-2xx status becomes a FetchError."""
    # Arrange
    responses.add(responses.GET, f"{BASE_URL}/events", status=503)

    # Act / Assert
    with pytest.raises(FetchError, match="HTTP 503"):
        client.fetch_events()


@responses.activate
def test_fetch_events_transport_error(client: EventsClient) -> None:
    """Test that connection problems become a FetchError."""
    # Arrange
    responses.add(
        responses.GET,
        f"{BASE_URL}/events",
        body=requests.ConnectionError("connection refused"),
    )

    # Act / Assert
    with pytest.raises(FetchError, match="Could not reach"):
        client.fetch_events()


@responses.activate
def test_fetch_events_timeout(client: EventsClient) -> None:
    """Test that a timeout becomes a FetchError."""
    # Arrange
    responses.add(
        responses.GET, f"{BASE_URL}/events", body=requests.Timeout("timed out")
    )

    # Act / Assert
    with pytest.raises(FetchError):
        client.fetch_events()


@responses.activate
def test_fetch_events_invalid_json(client: EventsClient) -> None:
    """Test that a body that is not JSON becomes a FetchError."""
    # Arrange
    responses.add(responses.GET, f"{BASE_URL}/events", body="<html>oops</html>")

    # Act / Assert
    with pytest.raises(FetchError, match="invalid JSON"):
        client.fetch_events()


@responses.activate
def test_fetch_events_not_a_list(client: EventsClient) -> None:
    """Test that a JSON object instead of an array becomes a FetchError."""
    # Arrange
    responses.add(responses.GET, f"{BASE_URL}/events", json={"events": []})

    # Act / Assert
    with pytest.raises(FetchError, match="Unexpected response"):
        client.fetch_events()


@responses.activate
def test_fetch_event_detail_uses_source_path(client: EventsClient) -> None:
    """Test that the detail request goes to the event's source endpoint."""
    # Arrange
    event = Event(id="evt-9", title="Rust Night", source=SourceKind.SECONDARY)
    responses.add(
        responses.GET,
        f"{BASE_URL}/luma/evt-9",
        json={
            "id": "evt-9",
            "title": "Rust Night",
            "description": "Full agenda",
            "organizerId": "org-1",
            "ticketPrice": "Free",
        },
    )

    # Act
    detail = client.fetch_event_detail(event)

    # Assert
    assert detail.source is SourceKind.SECONDARY
    assert detail.description == "Full agenda"
    assert detail.organizer_id == "org-1"
    assert detail.ticket.price == TextPrice("Free")


@responses.activate
def test_fetch_event_detail_not_found(client: EventsClient) -> None:
    """Test that a missing detail record becomes a FetchError."""
    # Arrange
    event = Event(id="gone", title="Gone")
    responses.add(responses.GET, f"{BASE_URL}/meetup/gone", status=404)

    # Act / Assert
    with pytest.raises(FetchError, match="HTTP 404"):
        client.fetch_event_detail(event)


class _RecordingSession(requests.Session):
    """Session remembering whether it was closed"""

    closed = False

    def close(self) -> None:
        self.closed = True
        super().close()


@responses.activate
def test_each_request_uses_its_own_session() -> None:
    """Test that concurrent list and detail fetches never share a session."""
    # Arrange
    sessions: list[_RecordingSession] = []

    def factory() -> requests.Session:
        sessions.append(_RecordingSession())
        return sessions[-1]

    client = EventsClient(BASE_URL, timeout=2, session_factory=factory)
    responses.add(responses.GET, f"{BASE_URL}/events", json=[{"id": "a"}])
    responses.add(responses.GET, f"{BASE_URL}/meetup/a", json={"id": "a"})

    # Act
    events = client.fetch_events()
    client.fetch_event_detail(events[0])

    # Assert
    assert len(sessions) == 2
    assert sessions[0] is not sessions[1]
    assert all(session.closed for session in sessions)
