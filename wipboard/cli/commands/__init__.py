"""
FILE: wipboard/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .cards import (
    add,
    edit,
    priority,
    mv,
    left,
    right,
    rm,
)
from .board import (
    ls,
    columns,
    export,
    import_,
)
from .system import (
    version,
    help,
    repl,
)

__all__ = [
    "add",
    "edit",
    "priority",
    "mv",
    "left",
    "right",
    "rm",
    "ls",
    "columns",
    "export",
    "import_",
    "version",
    "help",
    "repl",
]
