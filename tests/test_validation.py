"""Tests for the validation gate."""

import pytest

from ordo.choices import normalize_choices
from ordo.validation import (
    EMPTY_SELECTION_MESSAGE,
    INVALID_SELECTION_MESSAGE,
    Accepted,
    EmptyRejected,
    UserRejected,
    to_outcome,
    validate_selection,
)

SELECTION = list(normalize_choices(["a", "b"]))


class TestToOutcome:
    def test_true_accepts(self):
        assert to_outcome(True) == Accepted()

    def test_message_rejects(self):
        assert to_outcome("too many") == UserRejected("too many")

    @pytest.mark.parametrize("result", [False, None, "", 0, ["msg"]])
    def test_other_values_use_generic_message(self, result):
        assert to_outcome(result) == UserRejected(INVALID_SELECTION_MESSAGE)

    def test_truthy_non_bool_is_not_accepted(self):
        assert isinstance(to_outcome(1), UserRejected)


class TestValidateSelection:
    @pytest.mark.asyncio
    async def test_default_accepts_everything(self):
        assert await validate_selection([]) == Accepted()

    @pytest.mark.asyncio
    async def test_required_empty_rejected_before_check(self):
        calls = []

        def check(selection):
            calls.append(selection)
            return True

        outcome = await validate_selection([], required=True, check=check)
        assert outcome == EmptyRejected()
        assert outcome.message == EMPTY_SELECTION_MESSAGE
        assert calls == []

    @pytest.mark.asyncio
    async def test_required_nonempty_runs_check(self):
        outcome = await validate_selection(SELECTION, required=True, check=lambda s: "no")
        assert outcome == UserRejected("no")

    @pytest.mark.asyncio
    async def test_async_check_awaited(self):
        async def check(selection):
            return len(selection) == 2 or "pick two"

        assert await validate_selection(SELECTION, check=check) == Accepted()
        assert await validate_selection(SELECTION[:1], check=check) == UserRejected("pick two")

    @pytest.mark.asyncio
    async def test_check_receives_selection(self):
        seen = []

        def check(selection):
            seen.append(selection)
            return True

        await validate_selection(SELECTION, check=check)
        assert seen == [SELECTION]
