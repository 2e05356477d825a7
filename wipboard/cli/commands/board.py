"""
FILE: wipboard/cli/commands/board.py
PURPOSE: Board commands (ls, columns, export, import)
"""

from pathlib import Path
from typing import Optional

import typer

from ..app import app, console, error_console
from ...core.exceptions import WipboardError, MalformedInputError
from ...formatting import BoardFormatter
from ...utils import open_store


@app.command()
def ls(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Show the board.

    Example:
        wipboard ls
        wipboard ls --raw
        wipboard ls --json
    """
    try:
        store = open_store()
    except WipboardError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        console.print(BoardFormatter.to_json(store), markup=False, highlight=False, soft_wrap=True)
    elif raw:
        for line in BoardFormatter.to_raw_lines(store):
            console.print(line, markup=False, highlight=False, soft_wrap=True)
    else:
        console.print(BoardFormatter.create_table(store))
        console.print(f"\n[dim]Total: {store.card_count()} card(s)[/dim]")


@app.command()
def columns():
    """
    Show configured columns with card counts and WIP limits.

    Example:
        wipboard columns
    """
    try:
        store = open_store()
    except WipboardError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(BoardFormatter.create_columns_table(store.column_stats()))


@app.command()
def export(
    path: Optional[Path] = typer.Argument(None, help="File or directory (default: ./kanban-board.json)"),
):
    """
    Write the board to a pretty-printed JSON file.

    Example:
        wipboard export
        wipboard export backups/board.json
    """
    try:
        store = open_store()
        written = store.export_to_file(path)
    except OSError as e:
        error_console.print(f"[red]Error:[/red] Could not write export: {e}")
        raise typer.Exit(1)
    except WipboardError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓ Exported {store.card_count()} card(s) to[/green] {written}")


@app.command("import")
def import_(
    path: Path = typer.Argument(..., help="JSON file produced by export"),
):
    """
    Replace the whole board with the contents of a JSON file.

    The import is not undoable.

    Example:
        wipboard import kanban-board.json
    """
    try:
        store = open_store()
        store.import_from_file(path)
    except MalformedInputError as e:
        error_console.print(f"[red]Error:[/red] Import failed, board unchanged: {e}")
        raise typer.Exit(1)
    except WipboardError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓ Imported {store.card_count()} card(s) from[/green] {path}")
    for stats in store.column_stats():
        if stats.over_limit:
            console.print(f"[yellow]Warning:[/yellow] {stats.title} is over its WIP limit ({stats.label()})")
