"""
FILE: wipboard/formatting.py
PURPOSE: Shared formatting utilities for CLI and REPL output
EXPORTS:
  - BoardFormatter: Class for formatting the board and its cards
  - parse_card_ids: Parse comma-separated card IDs
DEPENDENCIES:
  - rich (for table formatting)
  - json (for JSON serialization)
  - datetime (for card dates)
  - wipboard.core.models (Card)
  - wipboard.core.store (BoardStore, ColumnStats)
NOTES:
  - Centralized formatting logic for consistency
  - Used by both CLI and REPL
  - Renders from the store's snapshot only, never from live cards
"""

import json
from datetime import datetime
from typing import List

from rich.table import Table
from rich.text import Text

from .core.models import Card
from .core.store import BoardStore, ColumnStats

PRIORITY_STYLES = {
    "High": "bold red",
    "Normal": "white",
    "Low": "dim",
}


def format_date(created: str) -> str:
    """
    Format a card's ISO creation timestamp as a local date (e.g. "2025-01-15").

    Falls back to the original string if parsing fails.
    """
    try:
        stamp = datetime.fromisoformat(created.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return created or ""
    if stamp.tzinfo is not None:
        stamp = stamp.astimezone()
    return stamp.strftime("%Y-%m-%d")


class BoardFormatter:
    """Centralized board display formatting."""

    @staticmethod
    def card_text(card: Card) -> Text:
        """Card as one styled line: short id, text, priority and date."""
        style = PRIORITY_STYLES.get(card.priority, "white")
        line = Text()
        line.append(card.short_id, style="cyan")
        line.append(" ")
        line.append(card.text, style=style)
        line.append(f"\n{card.priority} • {format_date(card.created)}", style="dim")
        return line

    @staticmethod
    def column_header(stats: ColumnStats) -> Text:
        """Column title with its count/limit, red when over the limit."""
        header = Text(stats.title, style="bold cyan")
        header.append(f" {stats.label()}", style="bold red" if stats.over_limit else "dim")
        return header

    @staticmethod
    def create_table(store: BoardStore, title: str = "Board") -> Table:
        """
        Create Rich table with one table column per board column.

        Args:
            store: Store to render
            title: Table title

        Returns:
            Rich Table object ready for display
        """
        board = store.snapshot()
        stats = store.column_stats()

        table = Table(title=title, show_header=True, show_lines=True, expand=True)
        for column_stats in stats:
            table.add_column(BoardFormatter.column_header(column_stats), ratio=1)

        columns = [board.columns[s.column_id] for s in stats]
        depth = max((len(cards) for cards in columns), default=0)
        for row in range(depth):
            cells = [
                BoardFormatter.card_text(cards[row]) if row < len(cards) else Text("")
                for cards in columns
            ]
            table.add_row(*cells)

        return table

    @staticmethod
    def create_columns_table(stats: List[ColumnStats]) -> Table:
        """Table of configured columns with occupancy and WIP limits."""
        table = Table(title="Columns", show_header=True, header_style="bold cyan")
        table.add_column("#", style="dim", width=3)
        table.add_column("ID", style="cyan")
        table.add_column("Title", style="white")
        table.add_column("Cards", justify="right")
        table.add_column("WIP limit", justify="right")

        for position, column_stats in enumerate(stats, start=1):
            count_style = "bold red" if column_stats.over_limit else (
                "yellow" if column_stats.at_limit else "green"
            )
            table.add_row(
                str(position),
                column_stats.column_id,
                column_stats.title,
                f"[{count_style}]{column_stats.count}[/{count_style}]",
                "-" if column_stats.limit is None else str(column_stats.limit),
            )

        return table

    @staticmethod
    def to_raw_lines(store: BoardStore) -> List[str]:
        """
        Convert the board to plain text lines.

        Returns:
            One header line per column followed by its cards
        """
        board = store.snapshot()
        lines = []
        for stats in store.column_stats():
            lines.append(f"{stats.column_id} ({stats.label()})")
            for card in board.columns[stats.column_id]:
                lines.append(f"  {card.short_id}: [{card.priority}] {card.text}")
        return lines

    @staticmethod
    def to_json(store: BoardStore) -> str:
        """Board snapshot as indented JSON (same shape as an export)."""
        return json.dumps(store.snapshot().to_dict(), indent=2, ensure_ascii=False)


def parse_card_ids(id_string: str) -> List[str]:
    """
    Parse comma-separated card IDs.

    Args:
        id_string: Comma-separated IDs or ID prefixes (e.g., "3f2a,9bc1")

    Returns:
        List of non-empty ID strings
    """
    ids = [part.strip() for part in id_string.split(",")]
    return [card_id for card_id in ids if card_id]
