"""Startup configuration read from the environment and an optional .env file"""

import dataclasses
import os
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from mcli.api import DEFAULT_TIMEOUT
from mcli.models.event import FILTER_FIELDS


class ConfigError(Exception):
    """The configuration is missing or invalid"""


@dataclasses.dataclass(frozen=True)
class Config:
    """Everything the application needs from its environment"""

    api_base_url: str
    http_timeout: float = DEFAULT_TIMEOUT
    filter_fields: tuple[str, ...] = FILTER_FIELDS


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Load `.env` (without overriding the environment), then read the settings"""
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    base_url = environ.get("API_BASE_URL", "").strip()
    if not base_url:
        raise ConfigError("API_BASE_URL is not set (add it to the environment or .env)")

    return Config(
        api_base_url=base_url.rstrip("/"),
        http_timeout=_parse_timeout(environ.get("MCLI_HTTP_TIMEOUT")),
        filter_fields=_parse_filter_fields(environ.get("MCLI_FILTER_FIELDS")),
    )


def _parse_timeout(value: str | None) -> float:
    if value is None or not value.strip():
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError as e:
        raise ConfigError(f"MCLI_HTTP_TIMEOUT must be a number, got {value!r}") from e
    if timeout <= 0:
        raise ConfigError(f"MCLI_HTTP_TIMEOUT must be positive, got {value!r}")
    return timeout


def _parse_filter_fields(value: str | None) -> tuple[str, ...]:
    if value is None or not value.strip():
        return FILTER_FIELDS
    fields = tuple(field.strip().lower() for field in value.split(",") if field.strip())
    unknown = [field for field in fields if field not in FILTER_FIELDS]
    if unknown:
        raise ConfigError(
            f"Unknown MCLI_FILTER_FIELDS {', '.join(unknown)};"
            f" choose from {', '.join(FILTER_FIELDS)}"
        )
    return fields
