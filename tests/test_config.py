"""Tests for configuration loading."""

import os

import pytest

from mcli.config import ConfigError, load_config
from mcli.models.event import FILTER_FIELDS


def test_load_config_reads_base_url() -> None:
    """Test that the base URL is read and its trailing slash dropped."""
    # Act
    config = load_config({"API_BASE_URL": "https://events.example.com/api/"})

    # Assert
    assert config.api_base_url == "https://events.example.com/api"
    assert config.http_timeout == 10
    assert config.filter_fields == FILTER_FIELDS


@pytest.mark.parametrize("environ", [{}, {"API_BASE_URL": "   "}])
def test_load_config_requires_base_url(environ: dict[str, str]) -> None:
    """Test that a missing base URL is a configuration error."""
    # Act / Assert
    with pytest.raises(ConfigError, match="API_BASE_URL"):
        load_config(environ)


def test_load_config_optional_settings() -> None:
    """Test the timeout and filter field settings."""
    # Act
    config = load_config(
        {
            "API_BASE_URL": "http://localhost:8080",
            "MCLI_HTTP_TIMEOUT": "2.5",
            "MCLI_FILTER_FIELDS": "Title, location",
        }
    )

    # Assert
    assert config.http_timeout == 2.5
    assert config.filter_fields == ("title", "location")


@pytest.mark.parametrize(
    "key, value",
    [
        ("MCLI_HTTP_TIMEOUT", "soon"),
        ("MCLI_HTTP_TIMEOUT", "0"),
        ("MCLI_FILTER_FIELDS", "title,organizer"),
    ],
)
def test_load_config_rejects_invalid_settings(key: str, value: str) -> None:
    """Test that unusable optional settings are configuration errors."""
    # Act / Assert
    with pytest.raises(ConfigError):
        load_config({"API_BASE_URL": "http://localhost", key: value})


def test_load_config_reads_dotenv_file(
    tmp_path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that a .env file in the working directory supplies the base URL."""
    # Arrange
    (tmp_path / ".env").write_text("API_BASE_URL=https://from-dotenv.example.com\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(os, "environ", {})

    # Act
    config = load_config()

    # Assert
    assert config.api_base_url == "https://from-dotenv.example.com"
