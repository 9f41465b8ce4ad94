"""CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer
from rich.console import Console

if TYPE_CHECKING:
    from ordo.config import Config

app = typer.Typer(
    name="ordo",
    help="Pick items from a list, in order.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("ordo.cli")

SEPARATOR_MARK = "---"
EXIT_CANCELLED = 130


def _get_config() -> Config:
    """Lazy import and load config."""
    from ordo.config import Config

    return Config.load()


def _setup_logging(log_file: Path | None) -> None:
    """Send debug logs to a file; the terminal belongs to the prompt."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _build_choices(
    labels: list[str],
    disabled: list[str],
    checked: list[str],
) -> list[Any]:
    """Turn CLI labels into prompt choices.

    ``---`` becomes a separator. Labels listed in ``checked`` start selected,
    ranked in the order they were given.
    """
    from ordo.models import Choice, Separator

    choices: list[Any] = []
    for label in labels:
        if label == SEPARATOR_MARK:
            choices.append(Separator())
        elif label in disabled or label in checked:
            choices.append(
                Choice(
                    value=label,
                    disabled=label in disabled,
                    checked=label in checked,
                    order=checked.index(label) + 1 if label in checked else 0,
                )
            )
        else:
            choices.append(label)
    return choices


def _read_labels(file: Path) -> list[str]:
    return [line.strip() for line in file.read_text().splitlines() if line.strip()]


@app.command()
def pick(
    labels: Annotated[
        list[str] | None, typer.Argument(help="Choices (use --- for a separator)")
    ] = None,
    message: Annotated[str, typer.Option("-m", "--message", help="Prompt label")] = "Select",
    file: Annotated[
        Path | None, typer.Option("-f", "--file", help="Read choices from file, one per line")
    ] = None,
    disabled: Annotated[
        list[str] | None, typer.Option("--disabled", "-x", help="Choice that can't be picked")
    ] = None,
    checked: Annotated[
        list[str] | None, typer.Option("--checked", "-c", help="Pre-select a choice (in order)")
    ] = None,
    required: Annotated[
        bool, typer.Option("--required", help="Refuse an empty selection")
    ] = False,
    loop: Annotated[
        bool | None, typer.Option("--loop/--no-loop", help="Wrap around list ends")
    ] = None,
    page_size: Annotated[
        int | None, typer.Option("--page-size", "-n", help="Choices visible at once")
    ] = None,
    instructions: Annotated[
        str | None, typer.Option("--instructions", help="Replace the key help text")
    ] = None,
    no_help: Annotated[bool, typer.Option("--no-help", help="Hide the key help text")] = False,
    format_: Annotated[
        str | None, typer.Option("-o", "--format", help="Output format: lines/json")
    ] = None,
    log_file: Annotated[
        Path | None, typer.Option("--log-file", help="Write debug logs to this file")
    ] = None,
):
    """Pick choices interactively and print them in the order picked."""
    from ordo.config import ConfigError, check_value
    from ordo.engine import NoSelectableChoicesError
    from ordo.ui.prompt import ordered_checkbox

    _setup_logging(log_file)

    all_labels = list(labels or [])
    if file is not None:
        try:
            all_labels.extend(_read_labels(file))
        except OSError as e:
            err_console.print(f"[red]Error:[/red] Can't read {file}: {e.strerror}")
            raise typer.Exit(1)

    if not all_labels:
        err_console.print("[red]Error:[/red] Provide choices as arguments or with --file")
        raise typer.Exit(1)

    choices = _build_choices(all_labels, disabled or [], checked or [])
    logger.debug("Prompting with %d choice(s)", len(choices))

    try:
        output_format = format_ or _get_config().output_format
        check_value("output_format", output_format)
        result = ordered_checkbox(
            message,
            choices,
            page_size=page_size,
            instructions=False if no_help else instructions,
            loop=loop,
            required=required,
            console=err_console,
        )
    except (ConfigError, NoSelectableChoicesError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if result is None:
        err_console.print("[dim]Cancelled[/dim]")
        raise typer.Exit(EXIT_CANCELLED)

    if output_format == "json":
        typer.echo(json.dumps(result))
    else:
        for value in result:
            typer.echo(value)


@app.command()
def config(
    key: Annotated[str | None, typer.Argument(help="Setting to show or change")] = None,
    value: Annotated[str | None, typer.Argument(help="New value")] = None,
):
    """Show settings, or set one."""
    from rich.table import Table

    from ordo.config import ConfigError

    try:
        cfg = _get_config()
        if key is None:
            rows = cfg.items()
        elif value is None:
            current = cfg.get(key)
        else:
            cfg.set(key, value)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if key is None:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Setting")
        table.add_column("Value")
        table.add_column("Description", style="dim")
        for name, setting, desc in rows:
            table.add_row(name, str(setting), desc)
        console.print(table)
    elif value is None:
        typer.echo(current)
    else:
        console.print(f"[green]✓[/green] {key} = {cfg.get(key)}")
