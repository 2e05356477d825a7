"""
FILE: wipboard/cli/app.py
PURPOSE: Shared Typer application and consoles for CLI command modules
EXPORTS:
  - app (Typer application)
  - console (stdout Rich console)
  - error_console (stderr Rich console)
  - __version__
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
NOTES:
  - Command modules register on this app with @app.command()
  - Kept apart from main.py so `python -m wipboard.cli.main` sees one app
"""

import typer
from rich.console import Console

__version__ = "0.2.0"

app = typer.Typer(
    name="wipboard",
    help="Single-board kanban with WIP limits and undo",
    add_completion=False,
)

console = Console()
error_console = Console(stderr=True)
