"""Interactive selector: list, confirm and text prompts on the terminal."""

import click
import typer

CANCEL = "> Cancel"


def select(message: str, options: list[str], cancel: bool = True) -> str | None:
    """Prompt for one of options by number. Returns None when cancelled or empty."""
    if not options:
        return None

    choices = list(options)
    if cancel:
        choices.append(CANCEL)

    typer.echo(message)
    for i, option in enumerate(choices, 1):
        typer.echo(f"  {i}. {option}")

    index = typer.prompt("Choice", type=click.IntRange(1, len(choices)))
    if cancel and index == len(choices):
        return None
    return choices[index - 1]


def confirm(message: str, default: bool = False) -> bool:
    return typer.confirm(message, default=default)


def text(message: str, default: str = "") -> str:
    """Prompt for free text. Blank input returns the default."""
    value = typer.prompt(message, default=default, show_default=bool(default))
    return value.strip()
