"""
FILE: wipboard/cli/commands/system.py
PURPOSE: System commands (version, help, repl)
"""

import typer

from ..app import app, console, error_console, __version__


@app.command()
def version():
    """Show wipboard version."""
    console.print(f"wipboard v{__version__}")


@app.command()
def help():
    """Show available commands and usage."""
    console.print("\n[bold cyan]wipboard[/bold cyan] - Single-board kanban with WIP limits\n")
    console.print(f"[dim]Version {__version__}[/dim]\n")

    console.print("[bold]Usage:[/bold]")
    console.print("  wipboard \\[command] \\[options]")
    console.print("  wipboard                    [dim]# Launch interactive REPL (default)[/dim]\n")

    console.print("[bold]Commands:[/bold]")

    commands = [
        ("add", "Create a new card", 'wipboard add "Card text" [--column todo]'),
        ("ls", "Show the board", "wipboard ls [--json] [--raw]"),
        ("columns", "Show columns and WIP limits", "wipboard columns"),
        ("edit", "Update card text", 'wipboard edit <card_id> "New text"'),
        ("priority", "Set card priority", "wipboard priority <card_id> high|normal|low|1|2|3"),
        ("mv", "Move card to column", "wipboard mv <card_id> <column>"),
        ("left", "Move card one column left", "wipboard left <card_id>"),
        ("right", "Move card one column right", "wipboard right <card_id>"),
        ("rm", "Delete card(s)", "wipboard rm <card_id>[,<card_id>...]"),
        ("export", "Write board to JSON", "wipboard export \\[path]"),
        ("import", "Replace board from JSON", "wipboard import <path>"),
        ("repl", "Launch interactive REPL (with undo)", "wipboard repl"),
        ("version", "Show version", "wipboard version"),
        ("help", "Show this help message", "wipboard help"),
    ]

    for cmd, desc, example in commands:
        console.print(f"  [green]{cmd:9}[/green] {desc}")
        console.print(f"            [dim]{example}[/dim]\n")

    console.print("[bold]Global Options:[/bold]")
    console.print("  [yellow]--verbose[/yellow] Show debug logging on stderr")
    console.print("  [yellow]--help[/yellow]    Show detailed help for a command\n")

    console.print("[bold]Notes:[/bold]")
    console.print("  Card IDs can be shortened to any unique prefix (the 8 characters shown by ls).")
    console.print("  Set WIPBOARD_HOME to keep the board somewhere other than ~/.wipboard.\n")


@app.command()
def repl():
    """
    Launch interactive REPL mode.

    The REPL provides:
    - Command history (up/down arrows)
    - Autocomplete (Tab key)
    - Undo for every change made in the session
    - Exit with Ctrl+D or type 'exit'

    Example:
        wipboard repl
    """
    # Import here to avoid loading REPL dependencies for one-shot commands
    from ...repl import main as repl_main

    try:
        repl_main()
    except Exception as e:
        error_console.print(f"[red]Error starting REPL:[/red] {e}")
        raise typer.Exit(1)
