"""
FILE: wipboard/cli/commands/cards.py
PURPOSE: Card commands (add, edit, priority, mv, left, right, rm)
"""

from typing import Optional

import typer
from rich.markup import escape

from ..app import app, console, error_console
from ...core.exceptions import (
    WipboardError,
    CapacityExceededError,
    CardNotFoundError,
    ColumnNotFoundError,
    InvalidInputError,
)
from ...formatting import parse_card_ids
from ...utils import open_store, parse_priority


def _fail(message: str) -> None:
    error_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


@app.command()
def add(
    text: str = typer.Argument(..., help="Card text"),
    column: Optional[str] = typer.Option(None, "--column", "-c", help="Column ID or title (default: backlog)"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Create a new card.

    Example:
        wipboard add "Write documentation"
        wipboard add "Fix bug" --column todo
    """
    try:
        store = open_store()
        column_id = store.config.resolve_column(column) if column else None
        card = store.add_card(text, column=column_id)
        _, placed_in = store.find_card(card.id)

        if raw:
            console.print(f"{card.id}: {card.text}", markup=False, highlight=False, soft_wrap=True)
        else:
            console.print(
                f"[green]✓ Created card [bold]{card.short_id}[/bold] in {placed_in}:[/green] {escape(card.text)}"
            )

    except (InvalidInputError, ColumnNotFoundError) as e:
        _fail(str(e))
    except WipboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def edit(
    card_id: str = typer.Argument(..., help="Card ID (or unique prefix)"),
    text: str = typer.Argument(..., help="New card text"),
):
    """
    Update a card's text.

    Example:
        wipboard edit 3f2a "Updated text"
    """
    try:
        store = open_store()
        card = store.update_card(store.resolve_id(card_id), text=text)
        console.print(f"[green]✓ Updated card [bold]{card.short_id}[/bold]:[/green] {escape(card.text)}")

    except (InvalidInputError, CardNotFoundError) as e:
        _fail(str(e))
    except WipboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def priority(
    card_id: str = typer.Argument(..., help="Card ID (or unique prefix)"),
    level: str = typer.Argument(..., help="High, Normal, Low (or 1, 2, 3)"),
):
    """
    Set a card's priority.

    Example:
        wipboard priority 3f2a high
        wipboard priority 3f2a 1
    """
    try:
        store = open_store()
        card = store.update_card(store.resolve_id(card_id), priority=parse_priority(level))
        console.print(f"[green]✓ Card [bold]{card.short_id}[/bold] priority:[/green] {card.priority}")

    except (InvalidInputError, CardNotFoundError) as e:
        _fail(str(e))
    except WipboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def mv(
    card_id: str = typer.Argument(..., help="Card ID (or unique prefix)"),
    column: str = typer.Argument(..., help="Target column ID or title"),
):
    """
    Move a card to the end of another column.

    Example:
        wipboard mv 3f2a done
        wipboard mv 3f2a "In Progress"
    """
    try:
        store = open_store()
        target = store.config.resolve_column(column)
        card = store.move_card(store.resolve_id(card_id), target)
        console.print(f"[green]✓ Moved card [bold]{card.short_id}[/bold] to {target}[/green]")

    except (CapacityExceededError, InvalidInputError, CardNotFoundError, ColumnNotFoundError) as e:
        _fail(str(e))
    except WipboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


def _shift(card_id: str, step: int) -> None:
    try:
        store = open_store()
        full_id = store.resolve_id(card_id)
        card = store.shift_card(full_id, step)
        if card is None:
            edge = "first" if step < 0 else "last"
            console.print(f"[yellow]Card is already in the {edge} column[/yellow]")
            return
        _, column_id = store.find_card(full_id)
        console.print(f"[green]✓ Moved card [bold]{card.short_id}[/bold] to {column_id}[/green]")

    except (CapacityExceededError, InvalidInputError, CardNotFoundError) as e:
        _fail(str(e))
    except WipboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def left(card_id: str = typer.Argument(..., help="Card ID (or unique prefix)")):
    """Move a card one column to the left."""
    _shift(card_id, -1)


@app.command()
def right(card_id: str = typer.Argument(..., help="Card ID (or unique prefix)")):
    """Move a card one column to the right."""
    _shift(card_id, 1)


@app.command()
def rm(
    card_ids: str = typer.Argument(..., help="Card ID(s) to delete (comma-separated)"),
):
    """
    Delete one or more cards.

    Example:
        wipboard rm 3f2a
        wipboard rm 3f2a,9bc1
    """
    try:
        store = open_store()
    except WipboardError as e:
        _fail(str(e))

    removed = []
    errors = []

    for token in parse_card_ids(card_ids):
        try:
            removed.append(store.remove_card(store.resolve_id(token)))
        except (InvalidInputError, CardNotFoundError) as e:
            errors.append(str(e))
        except WipboardError as e:
            errors.append(f"Error with card {token}: {e}")

    for card in removed:
        console.print(f"[green]✓[/green] Deleted: {escape(card.text)}")

    if errors:
        for error in errors:
            error_console.print(f"[red]Error:[/red] {error}")
        raise typer.Exit(1)
