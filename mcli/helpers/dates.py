"""Date-time parsing and human-relative formatting"""

import logging
from datetime import datetime, timedelta, timezone

logger = logging.getLogger(__name__)

FUTURE_SUFFIX = "to go"
PAST_SUFFIX = "ago"
UNKNOWN_DATE = "?"

_SECONDS_PER_HOUR = 3600
_SECONDS_PER_DAY = 24 * _SECONDS_PER_HOUR


def parse_datetime(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp ("...Z" or "...+02:00") into an aware UTC datetime.

    Naive timestamps are taken to be UTC. Returns None when the value cannot be parsed.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        logger.debug("Unparseable date-time %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def format_duration(delta: timedelta) -> str:
    """Format an absolute duration as days and hours, e.g. "3d2h", "5h" or "2d" """
    total_seconds = int(abs(delta.total_seconds()))
    days, remainder = divmod(total_seconds, _SECONDS_PER_DAY)
    hours = remainder // _SECONDS_PER_HOUR

    result = ""
    if days > 0:
        result += f"{days}d"
    if hours > 0 or days == 0:
        result += f"{hours}h"
    return result


def format_relative(when: datetime, now: datetime) -> str:
    """Describe `when` relative to `now`, e.g. "1d to go" or "3d2h ago" """
    delta = when - now
    suffix = FUTURE_SUFFIX if delta >= timedelta(0) else PAST_SUFFIX
    return f"{format_duration(delta)} {suffix}"


def relative_from_string(value: str, now: datetime) -> str:
    """Relative description of a raw timestamp, or a placeholder when it is malformed"""
    parsed = parse_datetime(value)
    if parsed is None:
        return UNKNOWN_DATE
    return format_relative(parsed, now)


def format_local(when: datetime) -> str:
    """Absolute date in the local time zone, e.g. "Sat 14 Jun 2025 18:00" """
    return when.astimezone().strftime("%a %d %b %Y %H:%M")
