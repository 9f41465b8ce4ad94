"""Order-tracking selection engine.

The engine is a set of pure transitions over an immutable
:class:`SelectionState`, plus :class:`SelectionEngine`, which owns the
current state and applies semantic key events to it one at a time.

Every checked choice carries its rank in the selection sequence. Ranks stay
dense (1..k for k checked choices): deselecting a choice shifts every later
rank down by one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from ordo.choices import is_checked, is_selectable, normalize_choices
from ordo.models import Item, NormalizedChoice, Status
from ordo.validation import Accepted, Outcome, ValidateFn, validate_selection

logger = logging.getLogger("ordo.engine")


class NoSelectableChoicesError(ValueError):
    """Raised when a prompt is built without any selectable choice."""

    pass


class Event(Enum):
    """Semantic input events understood by the engine."""

    UP = "up"
    DOWN = "down"
    TOGGLE = "toggle"
    SUBMIT = "submit"


@dataclass(frozen=True)
class SelectionState:
    """Snapshot of the prompt. Transitions return a new instance."""

    items: tuple[Item, ...]
    active: int
    next_order: int = 1
    show_tips: bool = True
    error_message: str | None = None
    status: Status = Status.IDLE

    @property
    def active_item(self) -> Item:
        return self.items[self.active]


def selection_bounds(items: Sequence[Item]) -> tuple[int, int]:
    """Return indices of the first and last selectable items.

    Raises:
        NoSelectableChoicesError: If no item is selectable
    """
    selectable = [i for i, item in enumerate(items) if is_selectable(item)]
    if not selectable:
        raise NoSelectableChoicesError("No selectable choices found")
    return selectable[0], selectable[-1]


def selected_choices(state: SelectionState) -> list[NormalizedChoice]:
    """Checked choices sorted by their selection order."""
    return sorted((item for item in state.items if is_checked(item)), key=lambda c: c.order)


def result_values(state: SelectionState) -> list[Any]:
    return [choice.value for choice in selected_choices(state)]


def _rank_preselected(items: tuple[Item, ...]) -> tuple[tuple[Item, ...], int]:
    """Renumber caller-checked choices to 1..k. Returns (items, next_order).

    Choices with a positive order come first, by that order; the rest follow
    in list order.
    """
    checked = [i for i, item in enumerate(items) if is_checked(item)]
    ranked = sorted(checked, key=lambda i: (items[i].order <= 0, items[i].order, i))

    renumbered = list(items)
    for rank, index in enumerate(ranked, start=1):
        if items[index].order != rank:
            renumbered[index] = replace(items[index], order=rank)

    if any(items[i].order not in (0, rank) for rank, i in enumerate(ranked, start=1)):
        logger.warning("Pre-selected choice orders were not dense; renumbered 1..%d", len(ranked))
    return tuple(renumbered), len(ranked) + 1


def create_state(items: Iterable[Item]) -> SelectionState:
    """Build the initial state from normalized items.

    The cursor starts on the first selectable item.

    Raises:
        NoSelectableChoicesError: If no item is selectable
    """
    items = tuple(items)
    first, _ = selection_bounds(items)
    items, next_order = _rank_preselected(items)
    return SelectionState(items=items, active=first, next_order=next_order)


def _activate(state: SelectionState) -> SelectionState:
    if state.status is Status.IDLE:
        return replace(state, status=Status.ACTIVE)
    return state


def navigate(state: SelectionState, direction: int, loop: bool = True) -> SelectionState:
    """Move the cursor to the previous (-1) or next (+1) selectable item.

    Wraps around the ends of the list. With ``loop`` disabled, moving past
    the first or last selectable item does nothing.
    """
    state = _activate(state)
    step = -1 if direction < 0 else 1
    first, last = selection_bounds(state.items)
    if not loop and state.active == (first if step < 0 else last):
        return state

    index = state.active
    while True:
        index = (index + step) % len(state.items)
        if is_selectable(state.items[index]):
            break
    return replace(state, active=index)


def toggle(state: SelectionState) -> SelectionState:
    """Check or uncheck the active item, keeping orders dense.

    Also clears any error and dismisses the help tips for the session.
    """
    state = replace(_activate(state), error_message=None, show_tips=False)
    current = state.active_item
    if not is_selectable(current):
        return state

    if is_checked(current):
        removed = current.order
        items = tuple(
            replace(item, checked=False, order=0)
            if index == state.active
            else replace(item, order=item.order - 1)
            if is_checked(item) and item.order > removed
            else item
            for index, item in enumerate(state.items)
        )
        return replace(state, items=items, next_order=state.next_order - 1)

    items = tuple(
        replace(item, checked=True, order=state.next_order) if index == state.active else item
        for index, item in enumerate(state.items)
    )
    return replace(state, items=items, next_order=state.next_order + 1)


def begin_submit(state: SelectionState) -> SelectionState:
    """Enter the pending sub-state while the selection is validated."""
    return replace(_activate(state), status=Status.PENDING)


def resolve_submit(state: SelectionState, outcome: Outcome) -> SelectionState:
    """Apply a validation outcome to a pending state."""
    if isinstance(outcome, Accepted):
        return replace(state, status=Status.DONE, error_message=None)
    return replace(state, status=Status.ACTIVE, error_message=outcome.message)


class SelectionEngine:
    """Owns the prompt state and processes one event at a time.

    Example:
        engine = SelectionEngine(["Apple", "Banana", "Cherry"])
        await engine.dispatch(Event.TOGGLE)
        await engine.dispatch(Event.SUBMIT)
        engine.result  # ["Apple"]
    """

    def __init__(
        self,
        choices: Iterable[Any],
        loop: bool = True,
        required: bool = False,
        validate: ValidateFn | None = None,
    ):
        self.loop = loop
        self.required = required
        self.validate = validate
        self._state = create_state(normalize_choices(choices))

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state.status is Status.DONE

    @property
    def result(self) -> list[Any] | None:
        """Selected values in selection order, once submitted."""
        return result_values(self._state) if self.done else None

    async def dispatch(self, event: Event) -> SelectionState:
        """Apply ``event`` and return the new state.

        Events arriving while a submission is being validated, or after the
        prompt is done, are dropped.
        """
        if self._state.status in (Status.PENDING, Status.DONE):
            logger.debug("Dropped %s event while %s", event.value, self._state.status.value)
            return self._state

        if event is Event.UP:
            self._state = navigate(self._state, -1, self.loop)
        elif event is Event.DOWN:
            self._state = navigate(self._state, 1, self.loop)
        elif event is Event.TOGGLE:
            self._state = toggle(self._state)
        elif event is Event.SUBMIT:
            await self._submit()
        return self._state

    async def _submit(self) -> None:
        selection = selected_choices(self._state)
        self._state = begin_submit(self._state)
        try:
            outcome = await validate_selection(selection, self.required, self.validate)
        except Exception:
            self._state = replace(self._state, status=Status.ACTIVE)
            raise
        self._state = resolve_submit(self._state, outcome)
        logger.debug("Submit of %d choice(s) -> %s", len(selection), type(outcome).__name__)
