"""
FILE: wipboard/repl/commands/system.py
PURPOSE: System command handlers for REPL
"""

from ..main import console
from ..parser import ParseResult


def handle_help_command(result: ParseResult) -> None:
    """
    Handle 'help' command - show available commands.

    Args:
        result: Parsed command (unused)
    """
    help_text = """
[bold cyan]Available Commands:[/bold cyan]

  [cyan]add <text> [--column <col>][/cyan]   Create a new card (default column: backlog)
  [cyan]ls [--raw][/cyan]                    Show the board
  [cyan]columns[/cyan]                       Show columns and WIP limits
  [cyan]edit <id> <text>[/cyan]              Update card text
  [cyan]pri <id> <level>[/cyan]              Set priority (high/normal/low or 1/2/3)
  [cyan]mv <id> <column>[/cyan]              Move card to the end of a column
  [cyan]left <id>[/cyan] / [cyan]right <id>[/cyan]        Move card to the neighbouring column
  [cyan]rm <id>[,<id>...][/cyan]             Delete card(s)
  [cyan]undo[/cyan]                          Undo the last change
  [cyan]export \\[path][/cyan]                Write board to JSON (default: kanban-board.json)
  [cyan]import <path>[/cyan]                 Replace board from JSON (not undoable)
  [cyan]clear[/cyan]                         Clear the screen
  [cyan]help[/cyan]                          Show this help
  [cyan]exit[/cyan] / [cyan]quit[/cyan]                   Leave the REPL

[bold cyan]Tips:[/bold cyan]
  Card IDs can be shortened to any unique prefix.
  Moves into a full column are refused; adds and imports are not.
"""
    console.print(help_text)


def handle_clear_command(result: ParseResult) -> None:
    """Handle 'clear' command - clear the screen."""
    console.clear()
