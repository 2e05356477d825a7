"""
FILE: wipboard/repl/display.py
PURPOSE: Display functions for cards and the board
EXPORTS:
  - display_card() - Display a single card
  - display_board() - Re-render the whole board
  - display_capacity_warnings() - Flag columns over their WIP limit
DEPENDENCIES:
  - rich (formatted output)
  - wipboard.formatting (BoardFormatter)
NOTES:
  - Accepts a console so command modules don't import main's console twice
"""

from typing import Optional

from rich.console import Console

from ..core.models import Card
from ..core.store import BoardStore
from ..formatting import BoardFormatter

console = Console()


def display_card(card: Card, message: str = "", column_id: str = "", console_instance: Optional[Console] = None) -> None:
    """
    Display a single card with optional message.

    Args:
        card: Card to display
        message: Optional message to show before the card (e.g., "Created:")
        column_id: Column the card is in, shown after the text when given
        console_instance: Optional Rich console instance (defaults to module console)
    """
    if console_instance is None:
        console_instance = console

    if message:
        console_instance.print(f"[green]{message}[/green]")

    where = f" [dim]({column_id})[/dim]" if column_id else ""
    line = BoardFormatter.card_text(card)
    console_instance.print("  ", line, where, sep="")


def display_board(store: BoardStore, console_instance: Optional[Console] = None) -> None:
    if console_instance is None:
        console_instance = console

    console_instance.print(BoardFormatter.create_table(store))
    display_capacity_warnings(store, console_instance)


def display_capacity_warnings(store: BoardStore, console_instance: Optional[Console] = None) -> None:
    if console_instance is None:
        console_instance = console

    for stats in store.column_stats():
        if stats.over_limit:
            console_instance.print(
                f"[yellow]Warning:[/yellow] {stats.title} is over its WIP limit ({stats.label()})"
            )
