"""
FILE: wipboard/repl/commands/__init__.py
PURPOSE: REPL command handler modules
"""

# Export all command handlers for easy importing
from .cards import (
    handle_add_command,
    handle_edit_command,
    handle_priority_command,
    handle_mv_command,
    handle_left_command,
    handle_right_command,
    handle_rm_command,
)
from .board import (
    handle_ls_command,
    handle_columns_command,
    handle_undo_command,
    handle_export_command,
    handle_import_command,
)
from .system import (
    handle_help_command,
    handle_clear_command,
)

__all__ = [
    "handle_add_command",
    "handle_edit_command",
    "handle_priority_command",
    "handle_mv_command",
    "handle_left_command",
    "handle_right_command",
    "handle_rm_command",
    "handle_ls_command",
    "handle_columns_command",
    "handle_undo_command",
    "handle_export_command",
    "handle_import_command",
    "handle_help_command",
    "handle_clear_command",
]
