# tests/conftest.py
from pathlib import Path

import pytest

from bgg_chooser.collection import parse_collection
from bgg_chooser.history import HistoryDatabase
from factories import load_fixture


@pytest.fixture
def alice_collection():
    """Parsed collection of the alice fixture (6 items, 5 owned)."""
    return parse_collection(load_fixture("collection_alice.xml"), "alice")


@pytest.fixture
def bob_collection():
    """Parsed collection of the bob fixture (2 items, both owned)."""
    return parse_collection(load_fixture("collection_bob.xml"), "bob")


@pytest.fixture
def history_db(tmp_path: Path) -> HistoryDatabase:
    """History store in a temporary directory."""
    return HistoryDatabase(tmp_path / "history" / "history.db")
