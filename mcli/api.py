"""HTTP client for the events service"""

import logging
from typing import Any, Callable

import requests

from mcli.models.event import (
    Event,
    EventDetail,
    EventParseError,
    parse_events,
    sort_by_date,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class FetchError(Exception):
    """The events service could not be reached or returned something unusable"""


class EventsClient:
    """Fetches the event list and per-event details from the service at `base_url`"""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session_factory = session_factory

    def fetch_events(self, location: str | None = None) -> tuple[Event, ...]:
        """GET /events, parsed and sorted by start time"""
        params = {"location": location} if location else None
        payload = self._get_json(f"{self._base_url}/events", params)
        try:
            events = parse_events(payload)
        except EventParseError as e:
            raise FetchError(f"Unexpected response from events service: {e}") from e
        logger.info("Fetched %d events", len(events))
        return sort_by_date(events)

    def fetch_event_detail(self, event: Event) -> EventDetail:
        """GET /{source}/{id} for one event"""
        url = f"{self._base_url}/{event.source.value}/{event.id}"
        payload = self._get_json(url, None)
        try:
            return EventDetail.from_json(payload, event.source)
        except EventParseError as e:
            raise FetchError(f"Unexpected detail response: {e}") from e

    def _get_json(self, url: str, params: dict[str, str] | None) -> Any:
        logger.debug("GET %s params=%s", url, params)
        # Fetches run on concurrent worker threads, which must not share a Session
        try:
            with self._session_factory() as session:
                response = session.get(url, params=params, timeout=self._timeout)
                response.raise_for_status()
        except requests.HTTPError as e:
            raise FetchError(
                f"Events service returned HTTP {e.response.status_code}"
            ) from e
        except requests.RequestException as e:
            raise FetchError(f"Could not reach events service: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise FetchError("Events service returned invalid JSON") from e
