"""Ordered multi-select prompt for terminals.

Usage:
    from ordo import ordered_checkbox, Separator

    ranked = ordered_checkbox("Pick in order", ["Apple", "Banana", Separator(), "Cherry"])
"""

from ordo.engine import Event, NoSelectableChoicesError, SelectionEngine, SelectionState
from ordo.models import Choice, NormalizedChoice, Separator
from ordo.ui.prompt import ordered_checkbox, ordered_checkbox_async

__all__ = [
    "Choice",
    "Event",
    "NoSelectableChoicesError",
    "NormalizedChoice",
    "SelectionEngine",
    "SelectionState",
    "Separator",
    "ordered_checkbox",
    "ordered_checkbox_async",
]
