"""Messages consumed by the update loop and the effects it asks the runtime to run"""

import dataclasses

from mcli.helpers.curses_utils import Size
from mcli.models.event import Event, EventDetail


@dataclasses.dataclass(frozen=True)
class Resize:
    """The terminal changed size"""

    size: Size


@dataclasses.dataclass(frozen=True)
class KeyPress:
    """A key code as returned by curses getch"""

    key: int


@dataclasses.dataclass(frozen=True)
class FetchSucceeded:
    """The events fetch numbered `generation` returned a collection"""

    events: tuple[Event, ...]
    generation: int


@dataclasses.dataclass(frozen=True)
class FetchFailed:
    """The events fetch numbered `generation` failed"""

    error: Exception
    generation: int


@dataclasses.dataclass(frozen=True)
class DetailFetched:
    """Detail for the event with `event_id` arrived"""

    event_id: str
    detail: EventDetail


@dataclasses.dataclass(frozen=True)
class DetailFetchFailed:
    """Detail for the event with `event_id` could not be fetched"""

    event_id: str
    error: Exception


@dataclasses.dataclass(frozen=True)
class Tick:
    """Periodic wake-up while no key is pressed"""


Message = (
    Resize
    | KeyPress
    | FetchSucceeded
    | FetchFailed
    | DetailFetched
    | DetailFetchFailed
    | Tick
)


@dataclasses.dataclass(frozen=True)
class Quit:
    """Stop the main loop"""


@dataclasses.dataclass(frozen=True)
class StartFetch:
    """Fetch the event list, optionally for a location"""

    generation: int
    location: str | None = None


@dataclasses.dataclass(frozen=True)
class StartDetailFetch:
    """Fetch the detail record for one event"""

    event: Event


@dataclasses.dataclass(frozen=True)
class OpenUrl:
    """Open a URL with the platform opener"""

    url: str


Effect = Quit | StartFetch | StartDetailFetch | OpenUrl
