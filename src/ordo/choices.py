"""Choice normalization and selectability predicates."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ordo.models import Choice, Item, NormalizedChoice, Separator

RawChoice = str | Choice | Separator | Mapping[str, Any]


def is_separator(item: Item) -> bool:
    return isinstance(item, Separator)


def is_selectable(item: Item) -> bool:
    """True iff the item is a choice that isn't disabled."""
    return not is_separator(item) and not item.disabled


def is_checked(item: Item) -> bool:
    """True iff the item is selectable and currently checked."""
    return is_selectable(item) and item.checked


def _split_disabled(disabled: Any) -> tuple[bool, str | None]:
    """Turn a loose ``disabled`` value into (disabled, reason)."""
    if isinstance(disabled, str):
        return (True, disabled) if disabled else (False, None)
    return bool(disabled), None


def _coerce_order(order: Any) -> int:
    try:
        order = int(order or 0)
    except (TypeError, ValueError):
        return 0
    return max(order, 0)


def _from_fields(fields: Mapping[str, Any]) -> NormalizedChoice:
    value = fields.get("value")
    name = fields.get("name") or str(value)
    disabled, reason = _split_disabled(fields.get("disabled", False))
    checked = bool(fields.get("checked", False))
    return NormalizedChoice(
        name=str(name),
        value=value,
        short=str(fields.get("short") or name),
        description=fields.get("description") or None,
        disabled=disabled,
        disabled_reason=reason,
        checked=checked,
        # An unchecked choice never carries a rank
        order=_coerce_order(fields.get("order")) if checked else 0,
    )


def normalize_choice(choice: RawChoice | Any) -> Item:
    """Normalize a single input choice. Never raises."""
    if isinstance(choice, Separator):
        return choice
    if isinstance(choice, str):
        return NormalizedChoice(name=choice, value=choice, short=choice)
    if isinstance(choice, Choice):
        return _from_fields(vars(choice))
    if isinstance(choice, Mapping):
        return _from_fields(choice)
    return _from_fields({"value": choice})


def normalize_choices(choices: Iterable[RawChoice | Any]) -> tuple[Item, ...]:
    """Convert heterogeneous input choices into uniform records.

    Separators pass through unchanged, plain strings become a choice whose
    name, value and short label are the string itself, and descriptors are
    mapped field-for-field with defaults filled in.
    """
    return tuple(normalize_choice(choice) for choice in choices)
