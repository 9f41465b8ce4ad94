"""Interactive ordered-checkbox prompt (Rich Live + readchar)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import readchar
from rich.console import Console
from rich.live import Live
from rich.text import Text

from ordo.config import Config, check_value
from ordo.engine import SelectionEngine
from ordo.validation import ValidateFn

from .keys import classify_key
from .projector import Frame, Projector
from .theme import make_theme

logger = logging.getLogger("ordo.prompt")


def _renderable(frame: Frame) -> Text:
    return Text.from_markup(str(frame))


async def ordered_checkbox_async(
    message: str,
    choices: Iterable[Any],
    *,
    page_size: int | None = None,
    instructions: str | bool | None = None,
    loop: bool | None = None,
    required: bool = False,
    validate: ValidateFn | None = None,
    theme: Mapping[str, Any] | None = None,
    console: Console | None = None,
    read_key: Callable[[], str] = readchar.readkey,
) -> list[Any] | None:
    """Ask the user to pick choices in order.

    Args:
        message: Prompt label
        choices: Strings, Choice/dict descriptors and Separators
        page_size: Choices visible at once (config default: 7)
        instructions: Replacement help text, or False to hide it
        loop: Wrap the cursor around the list ends (config default: True)
        required: Reject an empty selection
        validate: Sync or async check, True accepts, a string rejects with
            that message
        theme: Partial theme overrides (see ``make_theme``)
        console: Console to draw on
        read_key: Blocking key reader, run in a worker thread

    Returns:
        Values in the order they were selected, or None if cancelled.

    Raises:
        NoSelectableChoicesError: If no choice can be selected
        ConfigError: On an invalid page size or help mode
    """
    cfg = Config.load()
    page_size = cfg.page_size if page_size is None else page_size
    check_value("page_size", page_size)

    engine = SelectionEngine(
        choices,
        loop=cfg.loop if loop is None else loop,
        required=required,
        validate=validate,
    )
    projector = Projector(
        message,
        theme=make_theme(theme, help_mode=cfg.help_mode),
        page_size=page_size,
        instructions=instructions,
    )
    console = console or Console()

    console.show_cursor(False)
    try:
        frame = projector.render(engine.state)
        with Live(_renderable(frame), console=console, auto_refresh=False, transient=True) as live:
            while not engine.done:
                try:
                    key = await asyncio.to_thread(read_key)
                except KeyboardInterrupt:
                    logger.debug("Prompt cancelled")
                    return None

                event = classify_key(key)
                if event is None:
                    continue
                # Keys are only read again once the event (and any
                # validation it triggers) has settled.
                await engine.dispatch(event)
                live.update(_renderable(projector.render(engine.state)), refresh=True)
    finally:
        console.show_cursor(True)

    console.print(_renderable(projector.render(engine.state)))
    logger.debug("Prompt done with %d value(s)", len(engine.result or []))
    return engine.result


def ordered_checkbox(message: str, choices: Iterable[Any], **options: Any) -> list[Any] | None:
    """Blocking wrapper around :func:`ordered_checkbox_async`.

    Example:
        from ordo import ordered_checkbox, Separator

        fruits = ordered_checkbox(
            "Rank your favorite fruits",
            ["Apple", {"value": "banana", "disabled": "sold out"}, Separator(), "Cherry"],
        )
    """
    return asyncio.run(ordered_checkbox_async(message, choices, **options))
