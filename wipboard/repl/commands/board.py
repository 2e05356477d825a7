"""
FILE: wipboard/repl/commands/board.py
PURPOSE: Board command handlers for REPL (ls, columns, undo, export, import)
"""

from pathlib import Path

from ..main import console, repl_context
from ..parser import ParseResult
from ..display import display_board
from ...core.exceptions import WipboardError
from ...formatting import BoardFormatter


def handle_ls_command(result: ParseResult) -> None:
    """
    Handle 'ls' command - show the board.

    Usage:
        ls
        ls --raw
    """
    store = repl_context.get_store()
    if result.flags.get("raw"):
        for line in BoardFormatter.to_raw_lines(store):
            console.print(line, markup=False, highlight=False)
        return

    display_board(store, console)
    console.print(f"[dim]Total: {store.card_count()} card(s)[/dim]")


def handle_columns_command(result: ParseResult) -> None:
    """Handle 'columns' command - show columns with counts and WIP limits."""
    store = repl_context.get_store()
    console.print(BoardFormatter.create_columns_table(store.column_stats()))


def handle_undo_command(result: ParseResult) -> None:
    """
    Handle 'undo' command - restore the board from before the last change.

    Usage:
        undo
    """
    store = repl_context.get_store()
    if not store.undo():
        console.print("[yellow]Nothing to undo[/yellow]")
        return

    remaining = len(store.history)
    console.print(f"[green]✓ Undone[/green] [dim]({remaining} more available)[/dim]")
    display_board(store, console)


def handle_export_command(result: ParseResult) -> None:
    """
    Handle 'export' command - write the board to a JSON file.

    Usage:
        export
        export backups/board.json
    """
    store = repl_context.get_store()
    path = Path(result.args[0]) if result.args else None
    try:
        written = store.export_to_file(path)
    except OSError as e:
        console.print(f"[red]Error:[/red] Could not write export: {e}")
        return

    console.print(f"[green]✓ Exported {store.card_count()} card(s) to[/green] {written}")


def handle_import_command(result: ParseResult) -> None:
    """
    Handle 'import' command - replace the board from a JSON file.

    Usage:
        import kanban-board.json

    Notes:
        - The import itself can't be undone
    """
    if not result.args:
        console.print("[red]Error:[/red] File path required")
        console.print("[dim]Usage: import <path>[/dim]")
        return

    store = repl_context.get_store()
    try:
        store.import_from_file(Path(result.args[0]))
    except WipboardError as e:
        console.print(f"[red]Error:[/red] Import failed, board unchanged: {e}")
        return

    console.print(f"[green]✓ Imported {store.card_count()} card(s)[/green]")
    display_board(store, console)
