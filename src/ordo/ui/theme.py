"""Prompt theme: icons, Rich markup styles and help mode."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, fields, replace
from typing import Any

from rich.markup import escape

from ordo.config import check_value
from ordo.models import NormalizedChoice


def _markup(tag: str) -> Callable[[str], str]:
    return lambda text: f"[{tag}]{text}[/{tag}]"


def _render_selected_choices(selected: Sequence[NormalizedChoice]) -> str:
    return ", ".join(escape(choice.short) for choice in selected)


@dataclass(frozen=True)
class Icons:
    cursor: str = "❯"
    prefix: str = "?"
    prefix_done: str = "✔"


@dataclass(frozen=True)
class Styles:
    """Style callbacks. Each takes plain text and returns Rich markup."""

    prefix: Callable[[str], str] = _markup("blue")
    prefix_done: Callable[[str], str] = _markup("green")
    message: Callable[[str], str] = _markup("bold")
    answer: Callable[[str], str] = _markup("cyan")
    highlight: Callable[[str], str] = _markup("cyan")
    key: Callable[[str], str] = lambda text: f"[bold cyan]<{text}>[/bold cyan]"
    help: Callable[[str], str] = _markup("dim")
    error: Callable[[str], str] = lambda text: f"[red]> {text}[/red]"
    separator: Callable[[str], str] = _markup("dim")
    disabled_choice: Callable[[str], str] = lambda text: f"[dim]- {text}[/dim]"
    description: Callable[[str], str] = lambda text: f"[cyan]({text})[/cyan]"
    selected_order: Callable[[str], str] = _markup("bold bright_green")
    unselected_order: Callable[[str], str] = _markup("dim")
    render_selected_choices: Callable[[Sequence[NormalizedChoice]], str] = (
        _render_selected_choices
    )


@dataclass(frozen=True)
class Theme:
    icon: Icons = field(default_factory=Icons)
    style: Styles = field(default_factory=Styles)
    help_mode: str = "auto"


def _override(section: Any, overrides: Mapping[str, Any]) -> Any:
    known = {f.name for f in fields(section)}
    unknown = set(overrides) - known
    if unknown:
        raise KeyError(f"Unknown theme keys: {', '.join(sorted(unknown))}")
    return replace(section, **overrides)


def make_theme(overrides: Mapping[str, Any] | None = None, help_mode: str | None = None) -> Theme:
    """Build a theme from the defaults plus partial overrides.

    Example:
        make_theme({"icon": {"cursor": ">"}, "style": {"error": str.upper}})

    Args:
        overrides: Nested mapping with optional ``icon``, ``style`` and
            ``help_mode`` entries. Only the given keys are replaced.
        help_mode: Fallback help mode when ``overrides`` doesn't set one

    Raises:
        KeyError: On keys the theme doesn't know
        ConfigError: On an invalid help mode
    """
    overrides = dict(overrides or {})
    theme = Theme()
    icon = _override(theme.icon, overrides.pop("icon", {}))
    style = _override(theme.style, overrides.pop("style", {}))
    mode = overrides.pop("help_mode", help_mode or theme.help_mode)
    if overrides:
        raise KeyError(f"Unknown theme keys: {', '.join(sorted(overrides))}")
    check_value("help_mode", mode)
    return Theme(icon=icon, style=style, help_mode=mode)
