"""
FILE: wipboard/cli/main.py
PURPOSE: Typer-based CLI for one-shot board commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - version() - Show version
  - help() - Show command list and usage
  - repl() - Launch interactive REPL
  - add() - Create card
  - ls() - Show the board
  - columns() - Show columns and WIP limits
  - edit() - Update card text
  - priority() - Set card priority
  - mv() - Move card to column
  - left() / right() - Move card to neighbouring column
  - rm() - Delete card(s)
  - export() - Write board JSON to a file
  - import_() - Replace board from a JSON file
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - wipboard.core.store (board engine)
  - wipboard.core.exceptions (error handling)
  - wipboard.repl (interactive mode)
NOTES:
  - ls supports --json and --raw flags
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - Undo history lives for one process, so undo is offered in the REPL only
"""

import sys

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

import typer

from .app import app, error_console
from ..utils import setup_logging


@app.callback(invoke_without_command=True)
def default_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
):
    """
    Default callback - launches REPL when no command is specified.

    If a subcommand is invoked, this only configures logging.
    If no subcommand is invoked (just 'wipboard'), launch the REPL.
    """
    setup_logging(verbose)

    if ctx.invoked_subcommand is None:
        from ..repl import main as repl_main
        try:
            repl_main()
        except Exception as e:
            error_console.print(f"[red]Error starting REPL:[/red] {e}")
            raise typer.Exit(1)


# Import command modules to register commands with app
# Commands are decorated with @app.command() in their modules
from .commands import (  # noqa: E402,F401
    # System commands
    version,
    help,
    repl,
    # Card commands
    add,
    edit,
    priority,
    mv,
    left,
    right,
    rm,
    # Board commands
    ls,
    columns,
    export,
    import_,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
