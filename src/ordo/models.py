"""Data models for ordo."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_SEPARATOR = "─" * 14


class Status(Enum):
    """Prompt lifecycle status."""

    IDLE = "idle"
    ACTIVE = "active"
    PENDING = "pending"  # Waiting on the validation check
    DONE = "done"


@dataclass(frozen=True)
class Separator:
    """Display-only divider between choices. Never selectable."""

    separator: str = DEFAULT_SEPARATOR


@dataclass(frozen=True)
class Choice:
    """Structured choice descriptor as supplied by the caller.

    Every field except ``value`` is optional. ``disabled`` may be a string,
    in which case it is shown as the reason the choice can't be picked.
    """

    value: Any
    name: str | None = None
    description: str | None = None
    short: str | None = None
    disabled: bool | str = False
    checked: bool = False
    order: int = 0


@dataclass(frozen=True)
class NormalizedChoice:
    """Immutable, fully-defaulted choice record used by the engine."""

    name: str
    value: Any
    short: str
    description: str | None = None
    disabled: bool = False
    disabled_reason: str | None = None
    checked: bool = False
    order: int = 0


Item = NormalizedChoice | Separator
