"""Shared pytest configuration and fixtures for tests."""

import sys
import io
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from wipboard.core.config import BoardConfig  # noqa: E402
from wipboard.core.storage import MemoryStorage  # noqa: E402
from wipboard.core.store import BoardStore  # noqa: E402


@pytest.fixture(autouse=True)
def wipboard_home(tmp_path, monkeypatch):
    """Keep every test's database and config out of the real home directory."""
    home = tmp_path / "wipboard-home"
    monkeypatch.setenv("WIPBOARD_HOME", str(home))
    return home


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    """Store with the default four columns (todo=5, in-progress=3)."""
    return BoardStore(config=BoardConfig(), storage=storage)


@pytest.fixture
def small_store(storage):
    """Store whose todo column fits a single card."""
    config = BoardConfig.from_limits({"backlog": None, "todo": 1, "done": None})
    return BoardStore(config=config, storage=storage)
