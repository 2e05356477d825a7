"""
FILE: wipboard/core/models.py
PURPOSE: Domain models for cards and the board
EXPORTS:
  - Card (dataclass)
  - Board (dataclass)
  - now_iso() -> str
DEPENDENCIES:
  - dataclasses (stdlib)
  - datetime (stdlib)
  - uuid (stdlib)
  - wipboard.core.constants (priorities)
  - wipboard.core.exceptions (MalformedInputError)
NOTES:
  - All models have from_dict() for snapshot conversion
  - All models have to_dict() for serialization
  - Timestamps stored as ISO-8601 strings (UTC, "Z" suffix)
  - Board keeps columns in configured order; cards in display order
"""

import uuid
from dataclasses import dataclass, field, asdict, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .constants import DEFAULT_PRIORITY, SHORT_ID_LENGTH, VALID_PRIORITIES
from .exceptions import MalformedInputError


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def _is_iso_timestamp(value: str) -> bool:
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


@dataclass
class Card:
    """A unit of work with text, priority and creation time."""

    id: str
    text: str
    priority: str = DEFAULT_PRIORITY
    created: Optional[str] = None

    @classmethod
    def new(cls, text: str) -> "Card":
        """Create a card with a fresh id, default priority and current timestamp."""
        return cls(id=str(uuid.uuid4()), text=text, priority=DEFAULT_PRIORITY, created=now_iso())

    @classmethod
    def from_dict(cls, data: Any) -> "Card":
        """
        Convert a snapshot entry to a Card.

        Raises:
            MalformedInputError: If the entry isn't a card-shaped object
        """
        if not isinstance(data, dict):
            raise MalformedInputError(f"Card entry must be an object, got {type(data).__name__}")

        card_id = data.get("id")
        if not isinstance(card_id, str) or not card_id:
            raise MalformedInputError("Card entry is missing a string 'id'")

        text = data.get("text")
        if not isinstance(text, str):
            raise MalformedInputError(f"Card {card_id} is missing a string 'text'")
        if not text.strip():
            raise MalformedInputError(f"Card {card_id} has empty 'text'")

        priority = data.get("priority")
        if priority not in VALID_PRIORITIES:
            raise MalformedInputError(
                f"Card {card_id} has invalid priority {priority!r}. "
                f"Must be one of: {', '.join(VALID_PRIORITIES)}"
            )

        created = data.get("created")
        if not isinstance(created, str) or not _is_iso_timestamp(created):
            raise MalformedInputError(f"Card {card_id} has invalid 'created' timestamp {created!r}")

        return cls(id=card_id, text=text, priority=priority, created=created)

    @property
    def short_id(self) -> str:
        return self.id[:SHORT_ID_LENGTH]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Board:
    """Mapping of column id to an ordered list of cards."""

    columns: Dict[str, List[Card]] = field(default_factory=dict)

    @classmethod
    def empty(cls, column_ids: Iterable[str]) -> "Board":
        """Board with every given column present and empty."""
        return cls(columns={column_id: [] for column_id in column_ids})

    @classmethod
    def from_dict(cls, data: Any, column_ids: Iterable[str]) -> "Board":
        """
        Convert a structural snapshot to a Board.

        Args:
            data: Decoded snapshot ({column: [card, ...]})
            column_ids: Configured columns, in board order

        Returns:
            Board holding every configured column (missing ones empty)

        Raises:
            MalformedInputError: If the snapshot isn't board-shaped, names an
                unknown column, or repeats a card id
        """
        column_ids = list(column_ids)
        if not isinstance(data, dict):
            raise MalformedInputError(f"Board must be an object, got {type(data).__name__}")

        unknown = [key for key in data if key not in column_ids]
        if unknown:
            raise MalformedInputError(f"Unknown column(s): {', '.join(map(str, unknown))}")

        board = cls.empty(column_ids)
        seen = set()
        for column_id in column_ids:
            entries = data.get(column_id, [])
            if not isinstance(entries, list):
                raise MalformedInputError(f"Column '{column_id}' must hold a list of cards")
            for entry in entries:
                card = Card.from_dict(entry)
                if card.id in seen:
                    raise MalformedInputError(f"Duplicate card id {card.id}")
                seen.add(card.id)
                board.columns[column_id].append(card)

        return board

    def find(self, card_id: str) -> Optional[Tuple[Card, str]]:
        """Locate a card; returns (card, column id) or None."""
        for column_id, cards in self.columns.items():
            for card in cards:
                if card.id == card_id:
                    return card, column_id
        return None

    def count(self, column_id: str) -> int:
        return len(self.columns.get(column_id, []))

    def total(self) -> int:
        return sum(len(cards) for cards in self.columns.values())

    def all_cards(self) -> List[Card]:
        return [card for cards in self.columns.values() for card in cards]

    def copy(self) -> "Board":
        """Deep copy; cards in the copy can be mutated independently."""
        return Board(columns={
            column_id: [replace(card) for card in cards]
            for column_id, cards in self.columns.items()
        })

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            column_id: [card.to_dict() for card in cards]
            for column_id, cards in self.columns.items()
        }
