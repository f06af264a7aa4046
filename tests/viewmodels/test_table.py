"""Tests for table column widths and row formatting."""

from datetime import datetime, timezone

import pytest

from mcli.models.event import Event
from mcli.viewmodels.table import (
    TITLE_ONLY_THRESHOLD,
    column_widths,
    format_cells,
    row_cells,
)


@pytest.mark.parametrize("total_width", [0, 1, 2, 10, 39, 59, 60, 61, 80, 200])
@pytest.mark.parametrize("sidebar_visible", [False, True])
def test_column_widths_fit_total(total_width: int, sidebar_visible: bool) -> None:
    """Test that the columns never need more room than the pane has."""
    # Act
    widths = column_widths(total_width, sidebar_visible)

    # Assert
    assert sum(widths) <= total_width
    assert min(widths) >= 0


def test_column_widths_title_only_with_sidebar() -> None:
    """Test that the sidebar hides location and date."""
    # Act
    widths = column_widths(120, sidebar_visible=True)

    # Assert
    assert widths.title_only
    assert widths.location == 0
    assert widths.title == 118


def test_column_widths_title_only_when_narrow() -> None:
    """Test that a narrow pane hides location and date."""
    # Act
    widths = column_widths(TITLE_ONLY_THRESHOLD - 1, sidebar_visible=False)

    # Assert
    assert widths.title_only


def test_column_widths_full_layout() -> None:
    """Test that a wide pane gives location about a fifth and the title the rest."""
    # Act
    widths = column_widths(100, sidebar_visible=False)

    # Assert
    assert widths.location == 22
    assert widths.date > 0
    assert widths.icon + widths.title + widths.location + widths.date == 100


def test_format_cells_truncates_long_values() -> None:
    """Test that an overlong cell is cut with an ellipsis rather than overflowing."""
    # Arrange
    widths = column_widths(100, sidebar_visible=False)
    cells = ("☘", "A" * 200, "Somewhere", "1d to go")

    # Act
    text = format_cells(cells, widths)

    # Assert
    assert len(text) == 100
    assert "…" in text


def test_row_cells_for_event() -> None:
    """Test the cell texts of an event row."""
    # Arrange
    event = Event.from_json(
        {
            "id": "1",
            "title": "Python Meetup",
            "venueName": "Berlin",
            "dateTime": "2025-05-15T05:34:00Z",
            "source": "meetup",
        }
    )
    now = datetime(2025, 5, 14, 5, 34, tzinfo=timezone.utc)

    # Act
    cells = row_cells(event, now)

    # Assert
    assert cells == ("☘", "Python Meetup", "Berlin", "1d to go")
