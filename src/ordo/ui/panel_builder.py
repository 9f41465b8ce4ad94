"""Viewport windowing for lists longer than the page size."""


def page_window(
    active: int,
    total_items: int,
    page_size: int,
    offset: int = 0,
) -> tuple[int, int]:
    """Calculate the visible slice keeping ``active`` on screen.

    The window only scrolls when the cursor leaves it, so moving within a
    page doesn't shift the list.

    Args:
        active: Index of the active item
        total_items: Total number of items
        page_size: Maximum items shown at once
        offset: Start of the previously visible window

    Returns:
        Tuple of (start, end) for ``items[start:end]``
    """
    if total_items <= page_size:
        return 0, total_items

    active = max(0, min(active, total_items - 1))
    if active < offset:
        offset = active
    elif active >= offset + page_size:
        offset = active - page_size + 1

    offset = max(0, min(offset, total_items - page_size))
    return offset, offset + page_size


def scroll_indicators(hidden_above: int, hidden_below: int) -> tuple[str | None, str | None]:
    """Rich markup hints for items scrolled out of view (None if none)."""
    above = f"[dim]  ↑ {hidden_above} more[/dim]" if hidden_above > 0 else None
    below = f"[dim]  ↓ {hidden_below} more[/dim]" if hidden_below > 0 else None
    return above, below
