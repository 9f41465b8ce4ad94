"""Turn engine state into display frames of Rich markup lines."""

from __future__ import annotations

from dataclasses import dataclass

from rich.markup import escape

from ordo.choices import is_checked, is_separator
from ordo.engine import SelectionState, selected_choices
from ordo.models import Item, Status

from .panel_builder import page_window, scroll_indicators
from .theme import Theme, make_theme

DEFAULT_PAGE_SIZE = 7
DISABLED_LABEL = "(disabled)"
MORE_CHOICES_HINT = "(Use arrow keys to reveal more choices)"


@dataclass(frozen=True)
class Frame:
    """One rendered frame. ``lines`` hold Rich markup."""

    lines: tuple[str, ...]
    active: int
    done: bool = False

    def __str__(self) -> str:
        return "\n".join(self.lines)


class Projector:
    """Render-agnostic view of a :class:`SelectionState`.

    Keeps only presentation state between frames: the scroll offset and
    whether the first frame was already drawn.
    """

    def __init__(
        self,
        message: str,
        theme: Theme | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        instructions: str | bool | None = None,
    ):
        self.message = message
        self.theme = theme or make_theme()
        self.page_size = page_size
        self.instructions = instructions
        self._offset = 0
        self._first_render = True

    def render(self, state: SelectionState) -> Frame:
        if state.status is Status.DONE:
            return self._render_done(state)

        style = self.theme.style
        help_top, help_bottom = self._help_tips(state)
        header = f"{style.prefix(self.theme.icon.prefix)} {self._message()}{help_top}"
        lines = [header]

        start, end = page_window(state.active, len(state.items), self.page_size, self._offset)
        self._offset = start
        above, below = scroll_indicators(start, len(state.items) - end)
        if above:
            lines.append(above)
        for index in range(start, end):
            lines.append(self._render_item(state.items[index], index == state.active))
        if below:
            lines.append(below)

        if help_bottom:
            lines.append(style.help(help_bottom))
        description = getattr(state.active_item, "description", None)
        if description:
            lines.append(style.description(escape(description)))
        if state.error_message:
            lines.append(style.error(escape(state.error_message)))

        self._first_render = False
        return Frame(lines=tuple(lines), active=state.active)

    def _message(self) -> str:
        return self.theme.style.message(escape(self.message))

    def _help_tips(self, state: SelectionState) -> tuple[str, str]:
        """Return (top, bottom) help text, empty when hidden."""
        mode = self.theme.help_mode
        wanted = self.instructions is None or bool(self.instructions)
        if not (mode == "always" or (mode == "auto" and state.show_tips and wanted)):
            return "", ""

        if isinstance(self.instructions, str) and self.instructions:
            top = escape(self.instructions)
        else:
            key = self.theme.style.key
            top = f" (Press {key('space')} to select, and {key('enter')} to proceed)"

        bottom = ""
        if len(state.items) > self.page_size and (mode == "always" or self._first_render):
            bottom = MORE_CHOICES_HINT
        return top, bottom

    def _render_item(self, item: Item, active: bool) -> str:
        style = self.theme.style
        if is_separator(item):
            return f" {style.separator(escape(item.separator))}"
        if item.disabled:
            reason = item.disabled_reason or DISABLED_LABEL
            return style.disabled_choice(f"{escape(item.name)} {escape(reason)}")

        if is_checked(item):
            badge = style.selected_order(escape(f"[{item.order}]"))
        else:
            badge = style.unselected_order(escape("[ ]"))
        cursor = self.theme.icon.cursor if active else " "
        line = f"{cursor} {badge} {escape(item.name)}"
        return style.highlight(line) if active else line

    def _render_done(self, state: SelectionState) -> Frame:
        style = self.theme.style
        answer = style.answer(style.render_selected_choices(selected_choices(state)))
        line = f"{style.prefix_done(self.theme.icon.prefix_done)} {self._message()} {answer}"
        return Frame(lines=(line,), active=state.active, done=True)
