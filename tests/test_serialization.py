"""Tests for the JSON snapshot contract."""

import json

import pytest

from wipboard.core.exceptions import MalformedInputError
from wipboard.core.models import Board, Card
from wipboard.core.serialization import deserialize_board, serialize_board


COLUMNS = ["backlog", "todo", "in-progress", "done"]


def sample_board():
    board = Board.empty(COLUMNS)
    board.columns["todo"].append(
        Card(id="c1", text="Ünïcode ✓", priority="High", created="2025-01-15T10:30:00.000Z")
    )
    board.columns["done"].append(
        Card(id="c2", text="shipped", priority="Low", created="2025-01-14T08:00:00.000Z")
    )
    return board


def test_round_trip_preserves_board():
    board = sample_board()
    assert deserialize_board(serialize_board(board), COLUMNS) == board


def test_shape_and_field_order():
    data = json.loads(serialize_board(sample_board()))

    assert list(data) == COLUMNS
    assert list(data["todo"][0]) == ["id", "text", "priority", "created"]
    assert data["backlog"] == []


def test_non_ascii_text_is_written_as_is():
    assert "✓" in serialize_board(sample_board())


def test_indent_for_export():
    assert serialize_board(sample_board(), indent=2).startswith('{\n  "backlog"')


def test_accepts_utf8_bytes():
    blob = serialize_board(sample_board()).encode("utf-8")
    assert deserialize_board(blob, COLUMNS).total() == 2


@pytest.mark.parametrize("blob", [None, "", "{", "null", "42"])
def test_rejects_non_board_input(blob):
    with pytest.raises(MalformedInputError):
        deserialize_board(blob, COLUMNS)
