"""
FILE: wipboard/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - STATE_KEY: Storage key for the board snapshot
  - DEFAULT_COLUMNS: Default (id, title, wip limit) triples in board order
  - VALID_PRIORITIES: All valid priority values
  - DEFAULT_PRIORITY: Priority for new cards
  - DEFAULT_HISTORY_DEPTH: Undo snapshots kept per session
  - EXPORT_FILENAME: Default file name for board exports
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - Single source of truth for column and priority values
  - A WIP limit of None means the column is unlimited
"""

# Storage keys
STATE_KEY = "kanban-state"

# Default board layout: (column id, display title, WIP limit)
DEFAULT_COLUMNS = (
    ("backlog", "Backlog", None),
    ("todo", "To Do", 5),
    ("in-progress", "In Progress", 3),
    ("done", "Done", None),
)
DEFAULT_COLUMN = "backlog"

# Card priority constants
PRIORITY_HIGH = "High"
PRIORITY_NORMAL = "Normal"
PRIORITY_LOW = "Low"
VALID_PRIORITIES = (PRIORITY_HIGH, PRIORITY_NORMAL, PRIORITY_LOW)
DEFAULT_PRIORITY = PRIORITY_NORMAL

# Keyboard shortcut digits for priorities
PRIORITY_SHORTCUTS = {
    "1": PRIORITY_HIGH,
    "2": PRIORITY_NORMAL,
    "3": PRIORITY_LOW,
}

# Fields a caller may change on an existing card
EDITABLE_FIELDS = ("text", "priority")

# Undo history
DEFAULT_HISTORY_DEPTH = 50

# Import / export
EXPORT_FILENAME = "kanban-board.json"
EXPORT_INDENT = 2

# Short ids shown by the front end
SHORT_ID_LENGTH = 8
