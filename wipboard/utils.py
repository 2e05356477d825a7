"""
FILE: wipboard/utils.py
PURPOSE: Shared utility functions for CLI and REPL
EXPORTS:
  - setup_logging(verbose) -> None
  - parse_priority(value) -> str
  - open_store() -> BoardStore
DEPENDENCIES:
  - logging (stdlib)
  - rich.logging (RichHandler for stderr log output)
  - wipboard.core (config, store, exceptions)
NOTES:
  - Used by both CLI and REPL
  - Priority shortcuts mirror the board's keyboard keys (1/2/3)
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .core.config import load_config
from .core.constants import PRIORITY_SHORTCUTS, VALID_PRIORITIES
from .core.exceptions import InvalidInputError
from .core.store import BoardStore


def setup_logging(verbose: bool = False) -> None:
    """
    Route wipboard log records to stderr through rich.

    Args:
        verbose: Show DEBUG records instead of only warnings and errors
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=verbose,
    )
    root = logging.getLogger("wipboard")
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False


def parse_priority(value: str) -> str:
    """
    Convert user input to a priority value.

    Accepts "1"/"2"/"3" or a priority name in any case.

    Raises:
        InvalidInputError: If value isn't a recognised priority
    """
    value = value.strip()
    if value in PRIORITY_SHORTCUTS:
        return PRIORITY_SHORTCUTS[value]
    for priority in VALID_PRIORITIES:
        if priority.lower() == value.lower():
            return priority
    raise InvalidInputError(
        f"Invalid priority '{value}'. Must be one of: {', '.join(VALID_PRIORITIES)} (or 1/2/3)"
    )


def open_store() -> BoardStore:
    """Load config and the saved board from the data directory."""
    return BoardStore.load(config=load_config())
