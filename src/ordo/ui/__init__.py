"""UI module."""

from .keys import classify_key
from .panel_builder import page_window, scroll_indicators
from .projector import Frame, Projector
from .prompt import ordered_checkbox, ordered_checkbox_async
from .theme import Theme, make_theme

__all__ = [
    "Frame",
    "Projector",
    "Theme",
    "classify_key",
    "make_theme",
    "ordered_checkbox",
    "ordered_checkbox_async",
    "page_window",
    "scroll_indicators",
]
