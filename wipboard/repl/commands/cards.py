"""
FILE: wipboard/repl/commands/cards.py
PURPOSE: Card command handlers for REPL
"""

from rich.markup import escape

from ..main import console, repl_context
from ..parser import ParseResult
from ..display import display_board, display_card
from ...core.exceptions import (
    WipboardError,
    CapacityExceededError,
)
from ...formatting import parse_card_ids
from ...utils import parse_priority


def handle_add_command(result: ParseResult) -> None:
    """
    Handle 'add' command - create new card.

    Usage:
        add Buy groceries
        add "Card with spaces" --column todo
    """
    if not result.args:
        console.print("[red]Error:[/red] Card text required")
        console.print("[dim]Usage: add <text> [--column <column>][/dim]")
        return

    store = repl_context.get_store()
    try:
        column = result.flags.get("column")
        column_id = store.config.resolve_column(column) if isinstance(column, str) else None
        card = store.add_card(result.text, column=column_id)
    except WipboardError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    _, placed_in = store.find_card(card.id)
    display_card(card, "✓ Created:", placed_in, console)
    display_board(store, console)


def handle_edit_command(result: ParseResult) -> None:
    """
    Handle 'edit' command - update card text.

    Usage:
        edit 3f2a New text for the card
    """
    if len(result.args) < 2:
        console.print("[red]Error:[/red] Card ID and new text required")
        console.print("[dim]Usage: edit <id> <text>[/dim]")
        return

    store = repl_context.get_store()
    try:
        card_id = store.resolve_id(result.args[0])
        card = store.update_card(card_id, text=" ".join(result.args[1:]))
    except WipboardError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    display_card(card, "✓ Updated:", console_instance=console)
    display_board(store, console)


def handle_priority_command(result: ParseResult) -> None:
    """
    Handle 'pri' command - set card priority.

    Usage:
        pri 3f2a high
        pri 3f2a 1        (1=High, 2=Normal, 3=Low)
    """
    if len(result.args) < 2:
        console.print("[red]Error:[/red] Card ID and priority required")
        console.print("[dim]Usage: pri <id> high|normal|low|1|2|3[/dim]")
        return

    store = repl_context.get_store()
    try:
        card_id = store.resolve_id(result.args[0])
        card = store.update_card(card_id, priority=parse_priority(result.args[1]))
    except WipboardError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    display_card(card, f"✓ Priority set to {card.priority}:", console_instance=console)
    display_board(store, console)


def handle_mv_command(result: ParseResult) -> None:
    """
    Handle 'mv' command - move card to another column.

    Usage:
        mv 3f2a done
        mv 3f2a In Progress
    """
    if len(result.args) < 2:
        console.print("[red]Error:[/red] Card ID and column required")
        console.print("[dim]Usage: mv <id> <column>[/dim]")
        return

    store = repl_context.get_store()
    try:
        card_id = store.resolve_id(result.args[0])
        target = store.config.resolve_column(" ".join(result.args[1:]))
        card = store.move_card(card_id, target)
    except CapacityExceededError as e:
        console.print(f"[yellow]⚠ {e}[/yellow]")
        return
    except WipboardError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    console.print(f"[green]✓ Moved {card.short_id} to {target}[/green]")
    display_board(store, console)


def _handle_shift(result: ParseResult, step: int) -> None:
    if not result.args:
        console.print("[red]Error:[/red] Card ID required")
        return

    store = repl_context.get_store()
    try:
        card_id = store.resolve_id(result.args[0])
        card = store.shift_card(card_id, step)
    except CapacityExceededError as e:
        console.print(f"[yellow]⚠ {e}[/yellow]")
        return
    except WipboardError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    if card is None:
        edge = "first" if step < 0 else "last"
        console.print(f"[dim]Already in the {edge} column[/dim]")
        return

    _, column_id = store.find_card(card_id)
    console.print(f"[green]✓ Moved {card.short_id} to {column_id}[/green]")
    display_board(store, console)


def handle_left_command(result: ParseResult) -> None:
    """Handle 'left' command - move card one column left."""
    _handle_shift(result, -1)


def handle_right_command(result: ParseResult) -> None:
    """Handle 'right' command - move card one column right."""
    _handle_shift(result, 1)


def handle_rm_command(result: ParseResult) -> None:
    """
    Handle 'rm' command - delete one or more cards.

    Usage:
        rm 3f2a
        rm 3f2a,9bc1
    """
    if not result.args:
        console.print("[red]Error:[/red] Card ID required")
        console.print("[dim]Usage: rm <id>[,<id>...][/dim]")
        return

    store = repl_context.get_store()
    removed = 0
    for token in parse_card_ids(",".join(result.args)):
        try:
            card = store.remove_card(store.resolve_id(token))
        except WipboardError as e:
            console.print(f"[red]Error:[/red] {e}")
            continue
        removed += 1
        console.print(f"[green]✓[/green] Deleted: {escape(card.text)}")

    if removed:
        console.print("[dim]Type 'undo' to restore[/dim]")
        display_board(store, console)
