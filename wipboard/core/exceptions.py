"""
FILE: wipboard/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - WipboardError (base exception)
  - InvalidInputError
  - ValidationError
  - CardNotFoundError
  - ColumnNotFoundError
  - CapacityExceededError
  - MalformedInputError
  - ConfigError
  - StorageError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from WipboardError for easy catching
  - Exceptions include context (IDs, limits) for helpful error messages
  - The store raises these, UI layers catch and display
  - A failed operation never leaves a history entry behind
"""

from typing import Optional


class WipboardError(Exception):
    """Base exception for all wipboard errors."""
    pass


class InvalidInputError(WipboardError):
    """Input validation failed."""

    def __init__(self, message: str):
        super().__init__(message)


class ValidationError(InvalidInputError):
    """Card text or fields were rejected before any change was made."""
    pass


class CardNotFoundError(WipboardError):
    """Card with given ID doesn't exist on the board."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Card {card_id} not found")


class ColumnNotFoundError(WipboardError):
    """Column with given ID isn't configured."""

    def __init__(self, column_id: str):
        self.column_id = column_id
        super().__init__(f"Column '{column_id}' not found")


class CapacityExceededError(WipboardError):
    """Target column is already at its WIP limit."""

    def __init__(self, column_id: str, limit: Optional[int]):
        self.column_id = column_id
        self.limit = limit
        super().__init__(f"WIP limit reached: '{column_id}' holds at most {limit} card(s)")


class MalformedInputError(WipboardError):
    """Serialized board data could not be parsed as a board."""

    def __init__(self, message: str):
        super().__init__(message)


class ConfigError(WipboardError):
    """Board configuration file is invalid."""

    def __init__(self, message: str):
        super().__init__(message)


class StorageError(WipboardError):
    """Durable storage could not be read or written."""

    def __init__(self, message: str):
        super().__init__(message)
