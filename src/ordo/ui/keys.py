"""Map raw readchar keys onto engine events."""

import readchar

from ordo.engine import Event

KEY_EVENTS: dict[str, Event] = {
    readchar.key.UP: Event.UP,
    "k": Event.UP,
    readchar.key.DOWN: Event.DOWN,
    "j": Event.DOWN,
    "\t": Event.DOWN,
    readchar.key.SPACE: Event.TOGGLE,
    readchar.key.ENTER: Event.SUBMIT,
    "\r": Event.SUBMIT,
    "\n": Event.SUBMIT,
}


def classify_key(key: str) -> Event | None:
    """Return the event for ``key``, or None if the prompt ignores it."""
    return KEY_EVENTS.get(key)
