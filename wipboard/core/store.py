"""
FILE: wipboard/core/store.py
PURPOSE: Board state engine - owns the board, enforces WIP limits, keeps undo history
EXPORTS:
  - BoardStore (class)
  - ColumnStats (dataclass)
DEPENDENCIES:
  - wipboard.core.models (Board, Card)
  - wipboard.core.config (BoardConfig)
  - wipboard.core.history (BoardHistory)
  - wipboard.core.serialization (serialize_board, deserialize_board)
  - wipboard.core.storage (Storage, MemoryStorage, default_storage)
  - wipboard.core.exceptions (ValidationError, CardNotFoundError, CapacityExceededError, ...)
NOTES:
  - The only writer of board contents; callers get copies, never live cards
  - Every mutation: validate -> change a copy -> persist -> push snapshot and swap in
  - A failed write leaves board and history as they were
  - Failed or no-op operations push nothing and leave the board untouched
  - Moves are WIP-gated, adds are not (imports may also exceed limits)
  - undo() and import write through to storage but aren't themselves undoable
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .config import BoardConfig
from .constants import (
    DEFAULT_COLUMN,
    EDITABLE_FIELDS,
    EXPORT_FILENAME,
    EXPORT_INDENT,
    STATE_KEY,
    VALID_PRIORITIES,
)
from .exceptions import (
    CapacityExceededError,
    CardNotFoundError,
    InvalidInputError,
    MalformedInputError,
    ValidationError,
)
from .history import BoardHistory
from .models import Board, Card
from .serialization import deserialize_board, serialize_board
from .storage import MemoryStorage, Storage, default_storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnStats:
    """Occupancy of one column against its WIP limit."""

    column_id: str
    title: str
    count: int
    limit: Optional[int]

    @property
    def over_limit(self) -> bool:
        return self.limit is not None and self.count > self.limit

    @property
    def at_limit(self) -> bool:
        return self.limit is not None and self.count >= self.limit

    def label(self) -> str:
        """'count/limit', or 'count/∞' for unlimited columns."""
        limit = "∞" if self.limit is None else str(self.limit)
        return f"{self.count}/{limit}"


class BoardStore:
    """
    In-memory board with write-through persistence and bounded undo.

    Attributes:
        config: Column layout and WIP limits
        storage: Durable key/value collaborator the board is written to
        history: Snapshots taken before each mutation
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        storage: Optional[Storage] = None,
        board: Optional[Board] = None,
    ):
        self.config = config or BoardConfig()
        self.storage = storage if storage is not None else MemoryStorage()
        self.history = BoardHistory(self.config.history_depth)
        if board is None:
            self._board = Board.empty(self.config.column_ids)
        else:
            # Injected boards are validated against this config
            self._board = deserialize_board(serialize_board(board), self.config.column_ids)

    @classmethod
    def load(cls, config: Optional[BoardConfig] = None, storage: Optional[Storage] = None) -> "BoardStore":
        """
        Create a store from the snapshot saved in storage.

        Args:
            config: Column layout (defaults to the built-in four columns)
            storage: Storage to read from and write to (defaults to SQLite)

        Returns:
            BoardStore holding the saved board

        Notes:
            - Missing snapshot -> empty board with every configured column
            - Malformed snapshot -> logged and replaced by an empty board
        """
        store = cls(config=config, storage=storage if storage is not None else default_storage())
        blob = store.storage.get(STATE_KEY)
        if blob is None:
            logger.debug("No saved board, starting empty")
            return store

        try:
            store.deserialize(blob)
        except MalformedInputError as e:
            logger.warning("Saved board is unreadable, starting with an empty board: %s", e)
        return store

    # --- Queries ---

    def snapshot(self) -> Board:
        """Copy of the current board."""
        return self._board.copy()

    def find_card(self, card_id: str) -> Optional[Tuple[Card, str]]:
        """Returns (copy of card, column id), or None if the id isn't on the board."""
        found = self._board.find(card_id)
        if not found:
            return None
        card, column_id = found
        return replace(card), column_id

    def get_card(self, card_id: str) -> Card:
        """
        Raises:
            CardNotFoundError: If the id isn't on the board
        """
        found = self.find_card(card_id)
        if not found:
            raise CardNotFoundError(card_id)
        return found[0]

    def cards_in(self, column_id: str) -> List[Card]:
        self.config.column(column_id)
        return [replace(card) for card in self._board.columns[column_id]]

    def card_count(self) -> int:
        return self._board.total()

    def can_accept(self, column_id: str) -> bool:
        """
        Check whether a column has room for one more card.

        Columns with no WIP limit always accept.

        Raises:
            ColumnNotFoundError: If the column isn't configured
        """
        limit = self.config.limit(column_id)
        if limit is None:
            return True
        return self._board.count(column_id) < limit

    def column_stats(self) -> List[ColumnStats]:
        """Per-column occupancy, in board order."""
        return [
            ColumnStats(
                column_id=spec.id,
                title=spec.title,
                count=self._board.count(spec.id),
                limit=spec.wip_limit,
            )
            for spec in self.config.columns
        ]

    def resolve_id(self, prefix: str) -> str:
        """
        Expand a (possibly shortened) card id to the full id.

        Raises:
            CardNotFoundError: If no card id starts with prefix
            InvalidInputError: If more than one card id starts with prefix
        """
        prefix = prefix.strip()
        if not prefix:
            raise InvalidInputError("Card ID cannot be empty")

        if self._board.find(prefix):
            return prefix

        matches = [card.id for card in self._board.all_cards() if card.id.startswith(prefix)]
        if not matches:
            raise CardNotFoundError(prefix)
        if len(matches) > 1:
            raise InvalidInputError(f"Card ID '{prefix}' is ambiguous ({len(matches)} matches)")
        return matches[0]

    # --- Mutations ---

    def add_card(self, text: str, column: Optional[str] = None) -> Card:
        """
        Create a new card at the end of a column.

        Args:
            text: Card text (required, must not be empty)
            column: Target column (defaults to backlog, or the first column
                if backlog isn't configured)

        Returns:
            Copy of the newly created Card

        Raises:
            ValidationError: If text is empty or whitespace-only
            ColumnNotFoundError: If column isn't configured

        Notes:
            - Trims whitespace from text
            - New cards start with priority Normal and created=now
            - Not WIP-gated: a column may end up over its limit
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError("Card text cannot be empty")

        column_id = column or self._default_column()
        self.config.column(column_id)

        card = Card.new(text)
        board = self._board.copy()
        board.columns[column_id].append(card)
        self._commit(board)

        logger.debug("Added card %s to %s", card.id, column_id)
        return replace(card)

    def update_card(self, card_id: str, **fields) -> Card:
        """
        Change text and/or priority of a card, wherever it is.

        Args:
            card_id: ID of card to update
            **fields: text=..., priority=...

        Returns:
            Copy of the updated Card

        Raises:
            ValidationError: For unknown fields, empty text or invalid priority
            CardNotFoundError: If card_id isn't on the board

        Notes:
            - Column membership and position are unchanged
            - An update that changes nothing records no history
        """
        unknown = sorted(set(fields) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValidationError(
                f"Cannot update field(s) {', '.join(unknown)}. "
                f"Editable: {', '.join(EDITABLE_FIELDS)}"
            )

        updates: Dict[str, str] = {}
        if "text" in fields:
            text = (fields["text"] or "").strip()
            if not text:
                raise ValidationError("Card text cannot be empty")
            updates["text"] = text
        if "priority" in fields:
            priority = fields["priority"]
            if priority not in VALID_PRIORITIES:
                raise ValidationError(
                    f"Invalid priority '{priority}'. Must be one of: {', '.join(VALID_PRIORITIES)}"
                )
            updates["priority"] = priority

        board = self._board.copy()
        found = board.find(card_id)
        if not found:
            raise CardNotFoundError(card_id)
        card, _ = found

        if all(getattr(card, name) == value for name, value in updates.items()):
            return replace(card)

        for name, value in updates.items():
            setattr(card, name, value)
        self._commit(board)

        logger.debug("Updated card %s: %s", card_id, ", ".join(updates))
        return replace(card)

    def move_card(self, card_id: str, target: str) -> Card:
        """
        Move a card to the end of another column.

        Args:
            card_id: ID of card to move
            target: Destination column

        Returns:
            Copy of the moved Card

        Raises:
            ColumnNotFoundError: If target isn't configured
            CardNotFoundError: If card_id isn't on the board
            CapacityExceededError: If target is at its WIP limit

        Notes:
            - Moving to the card's current column changes nothing
            - A rejected move leaves the board and history untouched
        """
        limit = self.config.limit(target)

        found = self._board.find(card_id)
        if not found:
            raise CardNotFoundError(card_id)
        card, origin = found

        if origin == target:
            return replace(card)

        if not self.can_accept(target):
            logger.info("Rejected move of %s to %s: WIP limit %s reached", card_id, target, limit)
            raise CapacityExceededError(target, limit)

        board = self._board.copy()
        moved, _ = board.find(card_id)
        board.columns[origin].remove(moved)
        board.columns[target].append(moved)
        self._commit(board)

        logger.debug("Moved card %s: %s -> %s", card_id, origin, target)
        return replace(moved)

    def shift_card(self, card_id: str, step: int) -> Optional[Card]:
        """
        Move a card to a neighbouring column (-1 = left, +1 = right).

        Returns:
            Copy of the moved Card, or None if there's no column in that direction

        Raises:
            CardNotFoundError: If card_id isn't on the board
            CapacityExceededError: If the neighbouring column is full
        """
        found = self._board.find(card_id)
        if not found:
            raise CardNotFoundError(card_id)

        target = self.config.neighbour(found[1], step)
        if target is None:
            return None
        return self.move_card(card_id, target)

    def remove_card(self, card_id: str) -> Card:
        """
        Delete a card permanently.

        Returns:
            Copy of the removed Card

        Raises:
            CardNotFoundError: If card_id isn't on the board
        """
        found = self._board.find(card_id)
        if not found:
            raise CardNotFoundError(card_id)
        card, column_id = found

        board = self._board.copy()
        board.columns[column_id] = [c for c in board.columns[column_id] if c.id != card_id]
        self._commit(board)

        logger.debug("Removed card %s from %s", card_id, column_id)
        return replace(card)

    def undo(self) -> bool:
        """
        Restore the board as it was before the last mutation.

        Returns:
            True if a snapshot was restored, False if there was nothing to undo

        Notes:
            - Persists the restored board, pushes no history (no redo)
            - The snapshot stays on the stack if the write fails
        """
        previous = self.history.peek()
        if previous is None:
            return False

        board = deserialize_board(previous, self.config.column_ids)
        self._write(board)
        self.history.pop()
        self._board = board
        logger.debug("Undo: restored snapshot (%d left)", len(self.history))
        return True

    # --- Serialization ---

    def serialize(self, indent: Optional[int] = None) -> str:
        return serialize_board(self._board, indent=indent)

    def deserialize(self, blob: Union[str, bytes]) -> None:
        """
        Replace the whole board with a serialized snapshot.

        Raises:
            MalformedInputError: If blob isn't a board; the board is left as it was

        Notes:
            - Pushes no history and doesn't persist; callers decide
        """
        self._board = deserialize_board(blob, self.config.column_ids)

    def export_board(self) -> str:
        """Pretty-printed snapshot for download / sharing."""
        return self.serialize(indent=EXPORT_INDENT)

    def export_to_file(self, path: Optional[Path] = None) -> Path:
        """
        Write the pretty-printed snapshot to a file.

        Args:
            path: Destination file, or a directory to write kanban-board.json
                into (defaults to ./kanban-board.json)

        Returns:
            Path that was written
        """
        path = Path(path) if path else Path(EXPORT_FILENAME)
        if path.is_dir():
            path = path / EXPORT_FILENAME
        path.write_text(self.export_board() + "\n", encoding="utf-8")
        logger.info("Exported %d card(s) to %s", self.card_count(), path)
        return path

    def import_board(self, text: Union[str, bytes]) -> None:
        """
        Replace the board with imported JSON and persist it.

        Raises:
            MalformedInputError: If text isn't a board; nothing changes

        Notes:
            - Not undoable; earlier history is kept
        """
        board = deserialize_board(text, self.config.column_ids)
        self._write(board)
        self._board = board
        logger.info("Imported board with %d card(s)", self.card_count())

    def import_from_file(self, path: Path) -> None:
        """
        Raises:
            MalformedInputError: If the file can't be read or isn't a board
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedInputError(f"Could not read {path}: {e}") from e
        self.import_board(text)

    # --- Internals ---

    def _default_column(self) -> str:
        ids = self.config.column_ids
        return DEFAULT_COLUMN if DEFAULT_COLUMN in ids else ids[0]

    def _commit(self, board: Board) -> None:
        """
        Make board current: write it, then record the old board for undo.

        Raises:
            StorageError: If the write fails; board and history are unchanged
        """
        previous = self.serialize()
        self._write(board)
        self.history.push(previous)
        self._board = board

    def _write(self, board: Board) -> None:
        self.storage.set(STATE_KEY, serialize_board(board))
