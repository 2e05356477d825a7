"""
FILE: wipboard/repl/completer.py
PURPOSE: Autocomplete logic for REPL commands and arguments
EXPORTS:
  - WipboardCompleter (Completer for command/arg completion)
  - create_completer(store_provider) -> WipboardCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
  - wipboard.core.store (BoardStore, for card ids and columns)
NOTES:
  - Suggests command names when at start of line
  - Suggests card IDs (with text and column) for commands taking a card
  - Suggests column IDs after "mv <id>" and after --column
  - Suggests priorities after "pri <id>"
  - Suggests flags once a command's positional args are typed
  - Case-insensitive matching
"""

from typing import Callable, Iterable, List, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..core.constants import VALID_PRIORITIES
from ..core.store import BoardStore


class WipboardCompleter(Completer):
    """
    Custom completer for the wipboard REPL.

    Provides context-aware autocomplete:
    - Command names at start of input
    - Card IDs, column IDs and priorities for command arguments
    - Flags after command names
    """

    COMMANDS = [
        "add", "ls", "columns", "edit", "pri", "priority", "mv", "left", "right",
        "rm", "undo", "export", "import", "help", "clear", "exit", "quit",
    ]

    # Commands whose first argument is a card ID
    CARD_COMMANDS = {"edit", "pri", "priority", "mv", "left", "right", "rm"}

    COMMAND_FLAGS = {
        "add": ["--column"],
        "ls": ["--raw"],
    }

    COMMAND_DESCRIPTIONS = {
        "add": "Create a new card",
        "ls": "Show the board",
        "columns": "Show columns and WIP limits",
        "edit": "Update card text",
        "pri": "Set card priority",
        "priority": "Set card priority",
        "mv": "Move card to column",
        "left": "Move card one column left",
        "right": "Move card one column right",
        "rm": "Delete card(s)",
        "undo": "Undo last change",
        "export": "Write board to JSON",
        "import": "Replace board from JSON",
        "help": "Show help",
        "clear": "Clear the screen",
        "exit": "Leave the REPL",
        "quit": "Leave the REPL",
    }

    def __init__(self, store_provider: Optional[Callable[[], Optional[BoardStore]]] = None):
        self._store_provider = store_provider or (lambda: None)

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on current input.

        Logic:
            1. Typing the first word -> suggest commands
            2. After --column -> suggest column IDs
            3. First arg of a card command -> suggest card IDs
            4. Second arg of mv -> columns; of pri -> priorities
            5. Otherwise -> suggest the command's flags
        """
        text = document.text_before_cursor
        words = text.split()
        typing_new_word = text.endswith(" ") or not words

        if not words or (len(words) == 1 and not typing_new_word):
            yield from self._complete_commands(words[0] if words else "")
            return

        command = words[0].lower()
        current = "" if typing_new_word else words[-1]
        previous: List[str] = words[1:] if typing_new_word else words[1:-1]

        if previous and previous[-1] in ("--column", "-c"):
            yield from self._complete_column_ids(current)
            return

        if current.startswith("-"):
            yield from self._complete_flags(command, current)
            return

        positional = [w for w in previous if not w.startswith("-")]

        if command in self.CARD_COMMANDS and not positional:
            yield from self._complete_card_ids(current)
            return

        if command == "mv" and len(positional) == 1:
            yield from self._complete_column_ids(current)
            return

        if command in ("pri", "priority") and len(positional) == 1:
            yield from self._complete_priorities(current)
            return

        if typing_new_word:
            yield from self._complete_flags(command, "")

    def _complete_commands(self, word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for cmd in self.COMMANDS:
            if cmd.startswith(word_lower):
                yield Completion(
                    cmd,
                    start_position=-len(word),
                    display=cmd,
                    display_meta=self.COMMAND_DESCRIPTIONS.get(cmd, ""),
                )

    def _complete_flags(self, command: str, word: str) -> Iterable[Completion]:
        for flag in self.COMMAND_FLAGS.get(command, []):
            if flag.startswith(word.lower()):
                yield Completion(flag, start_position=-len(word))

    def _complete_priorities(self, word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for shortcut, priority in zip(("1", "2", "3"), VALID_PRIORITIES):
            if priority.lower().startswith(word_lower):
                yield Completion(
                    priority,
                    start_position=-len(word),
                    display=priority,
                    display_meta=f"shortcut {shortcut}",
                )

    def _complete_column_ids(self, word: str) -> Iterable[Completion]:
        """Complete column IDs, showing occupancy against the WIP limit."""
        store = self._store_provider()
        if store is None:
            return

        word_lower = word.lower()
        for stats in store.column_stats():
            if stats.column_id.lower().startswith(word_lower):
                meta = f"{stats.title} {stats.label()}"
                if stats.at_limit:
                    meta += " (full)"
                yield Completion(
                    stats.column_id,
                    start_position=-len(word),
                    display=stats.column_id,
                    display_meta=meta,
                )

    def _complete_card_ids(self, word: str) -> Iterable[Completion]:
        """
        Complete short card IDs with helpful labels (text + column).
        """
        store = self._store_provider()
        if store is None:
            return

        board = store.snapshot()
        word_lower = word.lower()
        for column_id, cards in board.columns.items():
            for card in cards[:200]:  # cap for responsiveness
                if card.id.lower().startswith(word_lower):
                    text = card.text if len(card.text) <= 40 else card.text[:37] + "..."
                    yield Completion(
                        card.short_id,
                        start_position=-len(word),
                        display=card.short_id,
                        display_meta=f"{text} [{column_id}]",
                    )


def create_completer(store_provider: Optional[Callable[[], Optional[BoardStore]]] = None) -> WipboardCompleter:
    """
    Create and return a WipboardCompleter instance.

    Args:
        store_provider: Callable returning the session's store (or None)

    Usage:
        completer = create_completer(lambda: repl_context.store)
        session = PromptSession(completer=completer)
    """
    return WipboardCompleter(store_provider)
