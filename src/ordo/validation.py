"""Validation gate run before a selection is accepted."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from ordo.models import NormalizedChoice

EMPTY_SELECTION_MESSAGE = "At least one item must be selected"
INVALID_SELECTION_MESSAGE = "Invalid selection"

ValidateResult = bool | str
ValidateFn = Callable[
    [Sequence[NormalizedChoice]], ValidateResult | Awaitable[ValidateResult]
]


@dataclass(frozen=True)
class Accepted:
    """The selection may be submitted."""


@dataclass(frozen=True)
class EmptyRejected:
    """Nothing selected while a selection is required."""

    message: str = EMPTY_SELECTION_MESSAGE


@dataclass(frozen=True)
class UserRejected:
    """The caller's check refused the selection."""

    message: str = INVALID_SELECTION_MESSAGE


Outcome = Accepted | EmptyRejected | UserRejected


def accept_all(selection: Sequence[NormalizedChoice]) -> bool:
    return True


def to_outcome(result: object) -> Outcome:
    """Map a check's return value onto an outcome.

    Only the boolean ``True`` accepts. A non-empty string is used as the
    rejection message; anything else gets the generic message.
    """
    if result is True:
        return Accepted()
    if isinstance(result, str) and result:
        return UserRejected(result)
    return UserRejected()


async def validate_selection(
    selection: Sequence[NormalizedChoice],
    required: bool = False,
    check: ValidateFn | None = None,
) -> Outcome:
    """Run the required-nonempty check, then the caller's check.

    Args:
        selection: Checked choices at the moment of submission
        required: Reject an empty selection without calling ``check``
        check: Sync or async predicate, defaults to accepting everything

    Returns:
        Accepted, EmptyRejected or UserRejected
    """
    if required and not selection:
        return EmptyRejected()

    result = (check or accept_all)(selection)
    if inspect.isawaitable(result):
        result = await result
    return to_outcome(result)
