"""
Pytest configuration and fixtures for store-backed tests.
"""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

# Set test environment before importing library modules
os.environ["STOREBACKED_DATA_DIR"] = tempfile.mkdtemp()
os.environ["STOREBACKED_DEFAULT_DOMAIN"] = "tests"

from storebacked.binding import BindingFailure  # noqa: E402
from storebacked.storage import MemoryStore, SQLiteStore, set_default_store  # noqa: E402


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def memory_store() -> MemoryStore:
    """A fresh in-memory settings store."""
    return MemoryStore()


@pytest.fixture
def sqlite_store(temp_data_dir: Path) -> SQLiteStore:
    """A SQLite settings store in a temporary directory."""
    return SQLiteStore(temp_data_dir / "settings.sqlite", domain="test")


@pytest.fixture(autouse=True)
def default_store() -> Generator[MemoryStore, None, None]:
    """Keep tests off the real default store."""
    store = MemoryStore()
    set_default_store(store)
    yield store
    set_default_store(None)


@pytest.fixture
def failures() -> list[BindingFailure]:
    """Collects failures absorbed by bindings; pass `failures.append` as on_failure."""
    return []
