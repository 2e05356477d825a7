"""
FILE: wipboard/core/serialization.py
PURPOSE: JSON snapshot encoding used by persistence, export, import and undo
EXPORTS:
  - serialize_board(board, indent) -> str
  - deserialize_board(blob, column_ids) -> Board
DEPENDENCIES:
  - json (stdlib)
  - wipboard.core.models (Board)
  - wipboard.core.exceptions (MalformedInputError)
NOTES:
  - Shape: {"<column>": [{"id", "text", "priority", "created"}, ...], ...}
  - Columns are written in board order, card fields in declaration order
  - Compact output for storage and history, indented output for export
"""

import json
from typing import Iterable, Optional, Union

from .models import Board
from .exceptions import MalformedInputError


def serialize_board(board: Board, indent: Optional[int] = None) -> str:
    """
    Encode a board as JSON text.

    Args:
        board: Board to encode
        indent: Pretty-print indent (None for compact output)

    Returns:
        JSON string that deserialize_board() turns back into an equal board
    """
    return json.dumps(board.to_dict(), indent=indent, ensure_ascii=False)


def deserialize_board(blob: Union[str, bytes, None], column_ids: Iterable[str]) -> Board:
    """
    Decode JSON text into a board.

    Args:
        blob: JSON text (str or UTF-8 bytes)
        column_ids: Configured columns, in board order

    Returns:
        Board with every configured column present

    Raises:
        MalformedInputError: If the text isn't JSON or isn't board-shaped
    """
    if blob is None:
        raise MalformedInputError("No board data")

    try:
        data = json.loads(blob)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedInputError(f"Board data is not valid JSON: {e}") from e

    return Board.from_dict(data, column_ids)
