"""Cursor and scroll-window arithmetic shared by the table and the sidebar"""


def adjust(
    cursor: int, viewport_top: int, viewport_height: int, item_count: int
) -> int:
    """Return the viewport top that keeps `cursor` visible.

    Scrolls up when the cursor is above the window, down when it is below, then clamps
    the top to [0, max(0, item_count - viewport_height)].
    """
    viewport_height = max(1, viewport_height)
    if cursor < viewport_top:
        viewport_top = cursor
    elif cursor > viewport_top + viewport_height - 1:
        viewport_top = cursor - viewport_height + 1

    max_top = max(0, item_count - viewport_height)
    return max(0, min(viewport_top, max_top))


def clamp_cursor(cursor: int, item_count: int) -> int:
    """Keep the cursor inside [0, max(1, item_count) - 1]"""
    return max(0, min(cursor, max(1, item_count) - 1))


def move_cursor(cursor: int, delta: int, item_count: int) -> int:
    """Move the cursor by `delta` rows without wrapping around either end"""
    if item_count <= 0:
        return 0
    return max(0, min(cursor + delta, item_count - 1))


def clamp_scroll(offset: int, line_count: int, height: int) -> int:
    """Keep a free-scrolling offset inside [0, max(0, line_count - height)]"""
    return max(0, min(offset, max(0, line_count - max(1, height))))
