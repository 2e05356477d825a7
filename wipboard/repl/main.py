"""
FILE: wipboard/repl/main.py
PURPOSE: Interactive REPL for the board with prompt-toolkit
EXPORTS:
  - main() - Entry point for REPL mode
  - run_repl() - Main REPL loop
  - execute_command() - Dispatch one parsed command
DEPENDENCIES:
  - prompt_toolkit (REPL interface, history, completion)
  - rich (formatted output)
  - wipboard.core.store (board engine)
  - wipboard.repl.parser (command parsing)
  - wipboard.repl.completer (autocomplete)
NOTES:
  - One BoardStore lives for the whole session, so undo works across commands
  - Bottom toolbar shows count/limit per column
  - Ctrl+D or "exit"/"quit" to exit
  - The board is re-rendered after every change
"""

import sys
from dataclasses import dataclass
from typing import Optional

# Fix Windows console encoding for Unicode characters
# Only wrap if not already wrapped to prevent issues
if sys.platform == "win32":
    import io
    if not isinstance(sys.stdout, io.TextIOWrapper) or sys.stdout.encoding != 'utf-8':
        try:
            sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
        except (AttributeError, ValueError):
            pass  # Already wrapped or unavailable

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console

from ..core.store import BoardStore
from ..utils import open_store
from .parser import parse_command, ParseResult
from .completer import create_completer


# Rich console for formatted output
console = Console()


# --- REPL Context (Persistent State) ---


@dataclass
class REPLContext:
    """
    Persistent context for the REPL session.

    Attributes:
        store: The session's board store (loaded on first use)
    """
    store: Optional[BoardStore] = None

    def get_store(self) -> BoardStore:
        """Return the session store, loading the saved board on first call."""
        if self.store is None:
            self.store = open_store()
        return self.store

    def get_prompt(self) -> str:
        if self.store is not None and self.store.history.can_undo():
            return f"wipboard({len(self.store.history)})> "
        return "wipboard> "


# Global REPL context (persists during session, resets on restart)
repl_context = REPLContext()


def format_prompt() -> HTML:
    """
    Create formatted prompt text.

    Returns:
        HTML prompt: "wipboard> ", or "wipboard(n)> " when n changes can be undone
    """
    store = repl_context.store
    if store is not None and store.history.can_undo():
        return HTML(f"<b>wipboard<ansigray>({len(store.history)})</ansigray>&gt; </b>")
    return HTML("<b>wipboard&gt; </b>")


def get_bottom_toolbar() -> HTML:
    """
    Create bottom toolbar showing each column's count/limit.

    Over-limit columns are shown in red.
    """
    store = repl_context.store
    if store is None:
        return HTML("<style bg='#444444' fg='#ffffff'> wipboard </style>")

    parts = []
    for stats in store.column_stats():
        label = f"{stats.title} {stats.label()}"
        if stats.over_limit:
            label = f"<style fg='#ff5555'>{label}</style>"
        parts.append(label)
    return HTML(f"<style bg='#444444' fg='#ffffff'> {' | '.join(parts)} </style>")


# Import command handlers from command modules
from .commands import (  # noqa: E402
    # Card handlers
    handle_add_command,
    handle_edit_command,
    handle_priority_command,
    handle_mv_command,
    handle_left_command,
    handle_right_command,
    handle_rm_command,
    # Board handlers
    handle_ls_command,
    handle_columns_command,
    handle_undo_command,
    handle_export_command,
    handle_import_command,
    # System handlers
    handle_help_command,
    handle_clear_command,
)


def execute_command(result: ParseResult) -> bool:
    """
    Execute a parsed command.

    Args:
        result: Parsed command from parser

    Returns:
        True to continue REPL loop, False to exit
    """
    command = result.command.lower()

    if command in ("exit", "quit"):
        console.print("[dim]Goodbye![/dim]")
        return False

    if not command:
        return True

    handlers = {
        "add": handle_add_command,
        "edit": handle_edit_command,
        "pri": handle_priority_command,
        "priority": handle_priority_command,
        "mv": handle_mv_command,
        "left": handle_left_command,
        "right": handle_right_command,
        "rm": handle_rm_command,
        "ls": handle_ls_command,
        "board": handle_ls_command,
        "columns": handle_columns_command,
        "undo": handle_undo_command,
        "export": handle_export_command,
        "import": handle_import_command,
        "help": handle_help_command,
        "clear": handle_clear_command,
    }

    handler = handlers.get(command)
    if handler:
        handler(result)
        console.print()
    else:
        console.print(f"[red]Unknown command:[/red] {command}")
        console.print("[dim]Type 'help' for available commands[/dim]")
        console.print()

    return True


def run_repl() -> None:
    """
    Main REPL loop.

    Sets up prompt_toolkit session with:
    - Command history (in-memory, not persisted)
    - Autocomplete (commands, card IDs, columns, priorities)
    - Column occupancy toolbar

    Exits on:
    - Ctrl+D (EOFError)
    - "exit" or "quit" commands
    """
    repl_context.get_store()

    # In piped/test environments, skip prompt_toolkit entirely
    has_tty = sys.stdin.isatty() and sys.stdout.isatty()

    session = None
    use_simple_input = not has_tty

    if has_tty:
        try:
            session = PromptSession(
                history=InMemoryHistory(),
                completer=create_completer(lambda: repl_context.store),
                complete_while_typing=True,
                bottom_toolbar=get_bottom_toolbar,
            )
        except Exception as e:
            console.print(f"[yellow]Warning:[/yellow] Running in simple input mode: {e}")
            use_simple_input = True

    console.print("[bold cyan]wipboard REPL[/bold cyan] - Type 'help' for commands, 'exit' to quit")
    if use_simple_input:
        console.print("[dim](Running in simple mode - no autocomplete)[/dim]")
    console.print()

    while True:
        try:
            if use_simple_input or session is None:
                user_input = input(repl_context.get_prompt())
            else:
                user_input = session.prompt(format_prompt())

            result = parse_command(user_input)
            if not execute_command(result):
                break

        except KeyboardInterrupt:
            console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
            continue
        except EOFError:
            console.print()
            console.print("[dim]Goodbye![/dim]")
            break


def main() -> None:
    """
    Entry point for REPL mode.

    Called when user runs: wipboard repl
    """
    run_repl()


if __name__ == "__main__":
    main()
