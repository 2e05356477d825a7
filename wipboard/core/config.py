"""
FILE: wipboard/core/config.py
PURPOSE: Board configuration (columns, WIP limits, history depth)
EXPORTS:
  - ColumnSpec (dataclass)
  - BoardConfig (dataclass)
  - data_dir() -> Path
  - config_path() -> Path
  - load_config(path) -> BoardConfig
DEPENDENCIES:
  - json (stdlib)
  - os, pathlib (stdlib)
  - wipboard.core.constants (defaults)
  - wipboard.core.exceptions (ConfigError, ColumnNotFoundError)
NOTES:
  - Data lives in ~/.wipboard unless WIPBOARD_HOME is set
  - config.json is optional; missing file -> default four-column board
  - WIP limits are owned here, not derived from the presentation layer
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .constants import DEFAULT_COLUMNS, DEFAULT_HISTORY_DEPTH
from .exceptions import ColumnNotFoundError, ConfigError

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "WIPBOARD_HOME"
CONFIG_FILENAME = "config.json"


def data_dir() -> Path:
    """Directory holding the board database and config file."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".wipboard"


def config_path() -> Path:
    return data_dir() / CONFIG_FILENAME


@dataclass(frozen=True)
class ColumnSpec:
    """A workflow column and its optional WIP limit (None = unlimited)."""

    id: str
    title: str
    wip_limit: Optional[int] = None


def _default_columns() -> Tuple[ColumnSpec, ...]:
    return tuple(ColumnSpec(id=cid, title=title, wip_limit=limit) for cid, title, limit in DEFAULT_COLUMNS)


@dataclass(frozen=True)
class BoardConfig:
    """Ordered column layout plus undo depth."""

    columns: Tuple[ColumnSpec, ...] = field(default_factory=_default_columns)
    history_depth: int = DEFAULT_HISTORY_DEPTH

    def __post_init__(self):
        if not self.columns:
            raise ConfigError("At least one column must be configured")

        ids = [spec.id for spec in self.columns]
        for spec in self.columns:
            if not isinstance(spec.id, str) or not spec.id.strip():
                raise ConfigError("Column ids must be non-empty strings")
            if not isinstance(spec.title, str) or not spec.title.strip():
                raise ConfigError(f"Title for column '{spec.id}' must be a non-empty string")
            if spec.wip_limit is not None and (
                isinstance(spec.wip_limit, bool)
                or not isinstance(spec.wip_limit, int)
                or spec.wip_limit < 0
            ):
                raise ConfigError(
                    f"WIP limit for '{spec.id}' must be a non-negative integer or null"
                )
        if len(set(ids)) != len(ids):
            raise ConfigError(f"Duplicate column ids: {', '.join(ids)}")

        if isinstance(self.history_depth, bool) or not isinstance(self.history_depth, int) or self.history_depth < 1:
            raise ConfigError("history_depth must be a positive integer")

    @classmethod
    def from_limits(cls, limits: Dict[str, Optional[int]], history_depth: int = DEFAULT_HISTORY_DEPTH) -> "BoardConfig":
        """Build a config from an ordered {column id: limit} mapping (titles derived from ids)."""
        columns = tuple(
            ColumnSpec(id=cid, title=cid.replace("-", " ").title(), wip_limit=limit)
            for cid, limit in limits.items()
        )
        return cls(columns=columns, history_depth=history_depth)

    @property
    def column_ids(self) -> List[str]:
        return [spec.id for spec in self.columns]

    def column(self, column_id: str) -> ColumnSpec:
        """
        Look up a column by id.

        Raises:
            ColumnNotFoundError: If the column isn't configured
        """
        for spec in self.columns:
            if spec.id == column_id:
                return spec
        raise ColumnNotFoundError(column_id)

    def limit(self, column_id: str) -> Optional[int]:
        return self.column(column_id).wip_limit

    def neighbour(self, column_id: str, step: int) -> Optional[str]:
        """Column `step` positions away in board order, or None past either edge."""
        ids = self.column_ids
        if column_id not in ids:
            raise ColumnNotFoundError(column_id)
        index = ids.index(column_id) + step
        if index < 0 or index >= len(ids):
            return None
        return ids[index]

    def resolve_column(self, name: str) -> str:
        """
        Match a user-typed column name against ids and titles (case-insensitive).

        Raises:
            ColumnNotFoundError: If nothing matches
        """
        wanted = name.strip().lower()
        for spec in self.columns:
            if wanted in (spec.id.lower(), spec.title.lower()):
                return spec.id
        raise ColumnNotFoundError(name)


def _column_from_entry(entry: Any) -> ColumnSpec:
    if not isinstance(entry, dict) or "id" not in entry:
        raise ConfigError("Each column entry needs at least an 'id'")
    column_id = entry["id"]
    title = entry.get("title") or str(column_id).replace("-", " ").title()
    return ColumnSpec(id=column_id, title=title, wip_limit=entry.get("wip"))


def load_config(path: Optional[Path] = None) -> BoardConfig:
    """
    Load board configuration from JSON.

    Args:
        path: Config file (defaults to <data dir>/config.json)

    Returns:
        BoardConfig from the file, or the default config if it doesn't exist

    Raises:
        ConfigError: If the file can't be parsed or describes an invalid board
    """
    path = path or config_path()
    if not path.exists():
        logger.debug("No config at %s, using default columns", path)
        return BoardConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read config {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config {path} must be a JSON object")

    kwargs: Dict[str, Any] = {}
    if "columns" in raw:
        if not isinstance(raw["columns"], list):
            raise ConfigError("'columns' must be a list")
        kwargs["columns"] = tuple(_column_from_entry(entry) for entry in raw["columns"])
    if "history_depth" in raw:
        kwargs["history_depth"] = raw["history_depth"]

    config = BoardConfig(**kwargs)
    logger.debug("Loaded config from %s: %s", path, ", ".join(config.column_ids))
    return config
