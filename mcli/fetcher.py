"""Runs network fetches off the UI thread and posts their outcome as messages"""

import logging
import queue
import threading
from typing import Callable

from mcli.api import EventsClient, FetchError
from mcli.models.event import Event
from mcli.models.messages import (
    DetailFetched,
    DetailFetchFailed,
    FetchFailed,
    FetchSucceeded,
    Message,
)


class FetchOrchestrator:
    """Starts one daemon thread per fetch; each thread posts exactly one message"""

    def __init__(
        self,
        client: EventsClient,
        messages: "queue.Queue[Message]",
        logger: logging.Logger | None = None,
    ) -> None:
        self._client = client
        self._messages = messages
        self._logger = logger or logging.getLogger(__name__)

    def start_fetch(
        self, generation: int, location: str | None = None
    ) -> threading.Thread:
        """Fetch the event list in the background"""
        return self._spawn(
            f"fetch-{generation}", self._fetch_events, generation, location
        )

    def start_detail_fetch(self, event: Event) -> threading.Thread:
        """Fetch one event's detail record in the background"""
        return self._spawn(f"detail-{event.id}", self._fetch_detail, event)

    def _spawn(
        self, name: str, target: Callable[..., None], *args: object
    ) -> threading.Thread:
        thread = threading.Thread(target=target, args=args, name=name, daemon=True)
        thread.start()
        return thread

    def _fetch_events(self, generation: int, location: str | None) -> None:
        try:
            events = self._client.fetch_events(location)
        except FetchError as e:
            self._messages.put(FetchFailed(e, generation))
        except Exception as e:  # pylint: disable=broad-exception-caught
            self._logger.exception("Unexpected error while fetching events")
            self._messages.put(FetchFailed(e, generation))
        else:
            self._messages.put(FetchSucceeded(events, generation))

    def _fetch_detail(self, event: Event) -> None:
        try:
            detail = self._client.fetch_event_detail(event)
        except FetchError as e:
            self._messages.put(DetailFetchFailed(event.id, e))
        except Exception as e:  # pylint: disable=broad-exception-caught
            self._logger.exception("Unexpected error while fetching %s", event.id)
            self._messages.put(DetailFetchFailed(event.id, e))
        else:
            self._messages.put(DetailFetched(event.id, detail))
