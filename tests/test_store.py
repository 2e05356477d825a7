"""Tests for the board state engine (BoardStore)."""

import json

import pytest

from wipboard.core.config import BoardConfig
from wipboard.core.constants import STATE_KEY
from wipboard.core.exceptions import (
    CapacityExceededError,
    CardNotFoundError,
    ColumnNotFoundError,
    InvalidInputError,
    MalformedInputError,
    StorageError,
    ValidationError,
)
from wipboard.core.storage import MemoryStorage
from wipboard.core.store import BoardStore


def ids_by_column(store):
    return {
        column_id: [card.id for card in cards]
        for column_id, cards in store.snapshot().columns.items()
    }


def fill(store, column, count):
    return [store.add_card(f"card {i}", column=column) for i in range(count)]


# --- Scenarios ---

def test_add_to_empty_board_lands_in_backlog(store):
    """Adding to an empty default board puts a Normal card in backlog."""
    card = store.add_card("write release plan")

    backlog = store.cards_in("backlog")
    assert len(backlog) == 1
    assert backlog[0].id == card.id
    assert backlog[0].text == "write release plan"
    assert backlog[0].priority == "Normal"
    assert store.card_count() == 1


def test_move_into_full_column_is_rejected(storage):
    """A move into a column at its limit raises and changes nothing."""
    config = BoardConfig.from_limits({"backlog": None, "todo": None, "done": 2})
    store = BoardStore(config=config, storage=storage)
    fill(store, "done", 2)
    todo_card = store.add_card("from todo", column="todo")

    before = ids_by_column(store)
    history_before = len(store.history)
    writes_before = storage.writes

    with pytest.raises(CapacityExceededError) as excinfo:
        store.move_card(todo_card.id, "done")

    assert excinfo.value.column_id == "done"
    assert excinfo.value.limit == 2
    assert ids_by_column(store) == before
    assert len(store.cards_in("done")) == 2
    assert len(store.history) == history_before
    assert storage.writes == writes_before


def test_remove_then_undo_twice(store):
    """Undo restores a removed card, then a second undo removes the add."""
    card = store.add_card("x")
    after_add = store.serialize()

    store.remove_card(card.id)
    assert store.card_count() == 0

    assert store.undo() is True
    assert store.serialize() == after_add
    assert store.find_card(card.id) is not None

    assert store.undo() is True
    assert store.card_count() == 0
    assert store.undo() is False


def test_update_priority_keeps_column(store):
    """Changing priority leaves the card where it was and others untouched."""
    target = store.add_card("target", column="todo")
    other = store.add_card("other", column="todo")

    updated = store.update_card(target.id, priority="High")

    assert updated.priority == "High"
    card, column_id = store.find_card(target.id)
    assert column_id == "todo"
    assert card.priority == "High"
    assert [c.id for c in store.cards_in("todo")] == [target.id, other.id]
    assert store.get_card(other.id).priority == "Normal"


# --- Add ---

def test_add_trims_text(store):
    card = store.add_card("   padded   ")
    assert card.text == "padded"


@pytest.mark.parametrize("text", ["", "   ", None])
def test_add_rejects_empty_text(store, text):
    with pytest.raises(ValidationError):
        store.add_card(text)
    assert store.card_count() == 0
    assert len(store.history) == 0


def test_add_to_unknown_column(store):
    with pytest.raises(ColumnNotFoundError):
        store.add_card("x", column="archive")
    assert len(store.history) == 0


def test_add_is_not_wip_gated(small_store):
    """Adds may take a column past its limit; only moves are gated."""
    fill(small_store, "todo", 3)
    stats = {s.column_id: s for s in small_store.column_stats()}
    assert stats["todo"].count == 3
    assert stats["todo"].over_limit


def test_add_defaults_to_first_column_without_backlog(storage):
    config = BoardConfig.from_limits({"ready": None, "doing": 2})
    store = BoardStore(config=config, storage=storage)
    store.add_card("x")
    assert len(store.cards_in("ready")) == 1


def test_add_appends_to_end(store):
    first, second = fill(store, "todo", 2)
    assert [c.id for c in store.cards_in("todo")] == [first.id, second.id]


# --- Update ---

def test_update_text(store):
    card = store.add_card("old")
    updated = store.update_card(card.id, text="  new  ")
    assert updated.text == "new"
    assert updated.created == card.created


def test_update_rejects_unknown_field(store):
    card = store.add_card("x")
    with pytest.raises(ValidationError, match="Cannot update"):
        store.update_card(card.id, created="2020-01-01T00:00:00Z")


def test_update_rejects_bad_priority(store):
    card = store.add_card("x")
    with pytest.raises(ValidationError):
        store.update_card(card.id, priority="urgent")
    assert store.get_card(card.id).priority == "Normal"


def test_update_rejects_empty_text(store):
    card = store.add_card("x")
    with pytest.raises(ValidationError):
        store.update_card(card.id, text="  ")


def test_update_unknown_card(store):
    with pytest.raises(CardNotFoundError):
        store.update_card("missing", text="y")
    assert len(store.history) == 0


def test_unchanged_update_records_no_history(store):
    card = store.add_card("x")
    depth = len(store.history)

    store.update_card(card.id, text="x", priority="Normal")

    assert len(store.history) == depth


# --- Move ---

def test_move_appends_to_target(store):
    existing = store.add_card("already done", column="done")
    card = store.add_card("x")

    moved = store.move_card(card.id, "done")

    assert moved.id == card.id
    assert [c.id for c in store.cards_in("done")] == [existing.id, card.id]
    assert store.cards_in("backlog") == []


def test_move_to_same_column_is_noop(small_store):
    """Moving within the current column succeeds even when it's full."""
    card = small_store.add_card("x", column="todo")
    depth = len(small_store.history)

    small_store.move_card(card.id, "todo")

    assert len(small_store.history) == depth
    assert len(small_store.cards_in("todo")) == 1


def test_move_unknown_card(store):
    with pytest.raises(CardNotFoundError):
        store.move_card("missing", "done")
    assert len(store.history) == 0


def test_move_unknown_column(store):
    card = store.add_card("x")
    with pytest.raises(ColumnNotFoundError):
        store.move_card(card.id, "archive")


def test_move_into_zero_limit_column(storage):
    config = BoardConfig.from_limits({"backlog": None, "blocked": 0})
    store = BoardStore(config=config, storage=storage)
    card = store.add_card("x")

    assert store.can_accept("blocked") is False
    with pytest.raises(CapacityExceededError):
        store.move_card(card.id, "blocked")


def test_move_into_over_limit_column_is_rejected(small_store):
    fill(small_store, "todo", 2)
    card = small_store.add_card("x")
    with pytest.raises(CapacityExceededError):
        small_store.move_card(card.id, "todo")


def test_moves_never_exceed_limits(store):
    """No sequence of moves pushes a limited column past its limit."""
    cards = fill(store, "backlog", 10)
    for card in cards:
        for target in ("todo", "in-progress"):
            try:
                store.move_card(card.id, target)
            except CapacityExceededError:
                pass

    assert len(store.cards_in("todo")) <= 5
    assert len(store.cards_in("in-progress")) == 3
    assert store.card_count() == 10


# --- Shift ---

def test_shift_right_and_left(store):
    card = store.add_card("x")

    store.shift_card(card.id, 1)
    assert store.find_card(card.id)[1] == "todo"

    store.shift_card(card.id, 1)
    assert store.find_card(card.id)[1] == "in-progress"

    store.shift_card(card.id, -1)
    assert store.find_card(card.id)[1] == "todo"


def test_shift_past_edge_returns_none(store):
    card = store.add_card("x")
    depth = len(store.history)

    assert store.shift_card(card.id, -1) is None
    assert store.find_card(card.id)[1] == "backlog"
    assert len(store.history) == depth


def test_shift_into_full_column(small_store):
    small_store.add_card("occupant", column="todo")
    card = small_store.add_card("x")
    with pytest.raises(CapacityExceededError):
        small_store.shift_card(card.id, 1)


# --- Remove ---

def test_remove_returns_card(store):
    card = store.add_card("x")
    removed = store.remove_card(card.id)
    assert removed.id == card.id
    assert store.find_card(card.id) is None


def test_remove_unknown_card(store):
    store.add_card("x")
    depth = len(store.history)
    with pytest.raises(CardNotFoundError):
        store.remove_card("missing")
    assert len(store.history) == depth


# --- Undo ---

@pytest.mark.parametrize("operation", ["add", "update", "move", "shift", "remove"])
def test_undo_round_trip(store, operation):
    """Each mutation followed by undo gives back the exact prior board."""
    card = store.add_card("seed", column="todo")
    before = store.serialize()

    if operation == "add":
        store.add_card("new")
    elif operation == "update":
        store.update_card(card.id, text="changed", priority="Low")
    elif operation == "move":
        store.move_card(card.id, "done")
    elif operation == "shift":
        store.shift_card(card.id, 1)
    else:
        store.remove_card(card.id)

    assert store.serialize() != before
    assert store.undo() is True
    assert store.serialize() == before


def test_undo_on_empty_history(store, storage):
    assert store.undo() is False
    assert storage.writes == 0


def test_undo_is_persisted(store, storage):
    store.add_card("x")
    store.undo()
    assert json.loads(storage.get(STATE_KEY))["backlog"] == []


def test_history_is_bounded(storage):
    config = BoardConfig(history_depth=3)
    store = BoardStore(config=config, storage=storage)
    fill(store, "backlog", 5)

    assert len(store.history) == 3
    assert store.undo() and store.undo() and store.undo()
    assert store.undo() is False
    # The two oldest adds can no longer be undone
    assert store.card_count() == 2


# --- Invariants ---

def test_ids_stay_unique_and_cards_conserved(store):
    cards = fill(store, "backlog", 6)
    store.move_card(cards[0].id, "todo")
    store.shift_card(cards[1].id, 1)
    store.update_card(cards[2].id, priority="High")
    store.move_card(cards[0].id, "done")

    ids = [c.id for c in store.snapshot().all_cards()]
    assert len(ids) == len(set(ids)) == 6


def test_queries_return_copies(store):
    card = store.add_card("x")

    store.get_card(card.id).text = "hacked"
    store.snapshot().columns["backlog"].clear()
    store.cards_in("backlog")[0].priority = "High"

    stored = store.get_card(card.id)
    assert stored.text == "x"
    assert stored.priority == "Normal"


# --- Persistence ---

def test_every_mutation_writes_through(store, storage):
    card = store.add_card("x")
    assert storage.writes == 1
    store.update_card(card.id, priority="High")
    store.move_card(card.id, "todo")
    store.remove_card(card.id)
    assert storage.writes == 4
    assert storage.get(STATE_KEY) == store.serialize()


def test_failed_mutation_writes_nothing(small_store, storage):
    small_store.add_card("occupant", column="todo")
    card = small_store.add_card("x")
    writes = storage.writes
    with pytest.raises(CapacityExceededError):
        small_store.move_card(card.id, "todo")
    assert storage.writes == writes


def test_load_restores_saved_board(storage):
    first = BoardStore(storage=storage)
    card = first.add_card("persisted", column="todo")

    second = BoardStore.load(storage=storage)

    assert second.get_card(card.id).text == "persisted"
    assert second.find_card(card.id)[1] == "todo"
    assert len(second.history) == 0


def test_load_without_saved_board(storage):
    store = BoardStore.load(storage=storage)
    assert store.card_count() == 0
    assert list(store.snapshot().columns) == ["backlog", "todo", "in-progress", "done"]


def test_load_malformed_board_falls_back_to_empty(caplog):
    storage = MemoryStorage({STATE_KEY: "{not json"})

    store = BoardStore.load(storage=storage)

    assert store.card_count() == 0
    assert "unreadable" in caplog.text


def test_load_uses_sqlite_by_default(wipboard_home):
    store = BoardStore.load()
    store.add_card("on disk")

    reloaded = BoardStore.load()
    assert reloaded.card_count() == 1
    assert (wipboard_home / "wipboard.db").exists()


def test_injected_board_is_validated(storage):
    source = BoardStore(storage=MemoryStorage())
    source.add_card("x", column="in-progress")

    config = BoardConfig.from_limits({"backlog": None, "done": None})
    with pytest.raises(MalformedInputError):
        BoardStore(config=config, storage=storage, board=source.snapshot())


# --- Serialization / import / export ---

def test_deserialize_does_not_persist_or_push(store, storage):
    other = BoardStore()
    other.add_card("elsewhere")

    store.deserialize(other.serialize())

    assert store.card_count() == 1
    assert storage.writes == 0
    assert len(store.history) == 0


def test_export_is_indented(store):
    store.add_card("x")
    exported = store.export_board()
    assert exported.startswith("{\n  ")
    assert json.loads(exported) == json.loads(store.serialize())


def test_import_replaces_board_and_keeps_history(store, storage):
    store.add_card("before import")
    depth = len(store.history)

    other = BoardStore()
    card = other.add_card("imported", column="done")
    store.import_board(other.export_board())

    assert [c.id for c in store.snapshot().all_cards()] == [card.id]
    assert len(store.history) == depth
    assert storage.get(STATE_KEY) == store.serialize()


def test_import_may_exceed_limits(small_store):
    other = BoardStore(config=small_store.config)
    fill(other, "todo", 3)

    small_store.import_board(other.serialize())

    assert len(small_store.cards_in("todo")) == 3


@pytest.mark.parametrize("payload", [
    "",
    "not json",
    "[]",
    '{"archive": []}',
    '{"todo": [{"id": "a", "text": "x", "priority": "Normal"}]}',
    '{"backlog": [{"id": "a", "text": "   ", "priority": "Normal", "created": "2025-01-15T10:30:00.000Z"}]}',
])
def test_import_malformed_leaves_board_unchanged(store, storage, payload):
    store.add_card("keep me")
    before = store.serialize()
    writes = storage.writes

    with pytest.raises(MalformedInputError):
        store.import_board(payload)

    assert store.serialize() == before
    assert storage.writes == writes


def test_export_and_import_files(store, tmp_path):
    store.add_card("round trip", column="todo")

    written = store.export_to_file(tmp_path)
    assert written == tmp_path / "kanban-board.json"

    fresh = BoardStore()
    fresh.import_from_file(written)
    assert fresh.serialize() == store.serialize()


def test_import_missing_file(store, tmp_path):
    with pytest.raises(MalformedInputError):
        store.import_from_file(tmp_path / "nope.json")


# --- Lookup helpers ---

def test_resolve_id_by_prefix(store):
    card = store.add_card("x")
    assert store.resolve_id(card.id) == card.id
    assert store.resolve_id(card.short_id) == card.id


def test_resolve_id_errors(storage):
    store = BoardStore(storage=storage)
    store.import_board(json.dumps({
        "backlog": [
            {"id": "abc1", "text": "a", "priority": "Normal", "created": "2025-01-15T10:30:00.000Z"},
            {"id": "abc2", "text": "b", "priority": "Normal", "created": "2025-01-15T10:30:00.000Z"},
        ],
    }))

    with pytest.raises(InvalidInputError, match="ambiguous"):
        store.resolve_id("abc")
    with pytest.raises(CardNotFoundError):
        store.resolve_id("zzz")
    with pytest.raises(InvalidInputError):
        store.resolve_id("  ")
    assert store.resolve_id("abc2") == "abc2"


def test_column_stats(store):
    fill(store, "in-progress", 3)
    stats = {s.column_id: s for s in store.column_stats()}

    assert stats["in-progress"].label() == "3/3"
    assert stats["in-progress"].at_limit
    assert not stats["in-progress"].over_limit
    assert stats["backlog"].label() == "0/∞"
    assert stats["todo"].title == "To Do"


def test_can_accept_unknown_column(store):
    with pytest.raises(ColumnNotFoundError):
        store.can_accept("archive")


# --- Storage failures ---

class FlakyStorage(MemoryStorage):
    """Memory storage whose writes can be switched off."""

    def __init__(self):
        super().__init__()
        self.broken = False

    def set(self, key, value):
        if self.broken:
            raise StorageError(f"Could not write '{key}'")
        super().set(key, value)


@pytest.fixture
def flaky_store():
    store = BoardStore(storage=FlakyStorage())
    store.add_card("first", column="todo")
    return store


@pytest.mark.parametrize("operation", ["add", "update", "move", "remove", "import"])
def test_failed_write_leaves_board_and_history_unchanged(flaky_store, operation):
    card = flaky_store.cards_in("todo")[0]
    before = flaky_store.serialize()
    depth = len(flaky_store.history)
    other = BoardStore()
    other.add_card("imported")

    flaky_store.storage.broken = True
    with pytest.raises(StorageError):
        if operation == "add":
            flaky_store.add_card("lost")
        elif operation == "update":
            flaky_store.update_card(card.id, text="lost")
        elif operation == "move":
            flaky_store.move_card(card.id, "done")
        elif operation == "remove":
            flaky_store.remove_card(card.id)
        else:
            flaky_store.import_board(other.serialize())

    assert flaky_store.serialize() == before
    assert len(flaky_store.history) == depth
    assert flaky_store.storage.get(STATE_KEY) == before


def test_failed_undo_keeps_snapshot(flaky_store):
    after_add = flaky_store.serialize()

    flaky_store.storage.broken = True
    with pytest.raises(StorageError):
        flaky_store.undo()

    assert len(flaky_store.history) == 1
    assert flaky_store.serialize() == after_add

    flaky_store.storage.broken = False
    assert flaky_store.undo() is True
    assert flaky_store.card_count() == 0


def test_removed_card_is_a_copy(store):
    card = store.add_card("x")
    removed = store.remove_card(card.id)
    removed.text = "changed"

    store.undo()
    assert store.get_card(card.id).text == "x"
