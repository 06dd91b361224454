"""
Persistence of past collection queries.

The history is a short list, most recent first, rewritten as a whole after
every successful load and every deletion.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import List

from ..config import MAX_HISTORY_ITEMS
from ..models import HistoryEntry
from .models import create_database

logger = logging.getLogger(__name__)


class HistoryDatabase:
    """
    Stores the usernames of past queries in SQLite.
    """

    def __init__(self, db_path: Path, max_items: int = MAX_HISTORY_ITEMS):
        """
        Initialize the history store.

        Args:
            db_path: Path to the history database
            max_items: Number of entries kept
        """
        self.db_path = Path(db_path)
        self.max_items = max_items

        # Create database if it doesn't exist
        if not self.db_path.exists():
            logger.info(f"History database not found at {self.db_path}, creating it...")
        create_database(str(self.db_path))

    def load(self) -> List[HistoryEntry]:
        """
        Read the stored history.

        Returns:
            Entries, most recent first; empty if the store cannot be read
        """
        try:
            conn = sqlite3.connect(self.db_path)
            try:
                cursor = conn.cursor()
                cursor.execute("SELECT id, names FROM history ORDER BY position ASC")
                rows = cursor.fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Error reading history: {e}")
            return []

        entries = []
        for entry_id, names in rows:
            try:
                entries.append(HistoryEntry(id=entry_id, names=list(json.loads(names))))
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping unreadable history entry {entry_id}: {e}")
        return entries

    def save(self, entries: List[HistoryEntry]) -> None:
        """Replace the stored history with `entries`, in order."""
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM history")
            cursor.executemany(
                "INSERT INTO history (id, position, names) VALUES (?, ?, ?)",
                [(entry.id, position, json.dumps(entry.names)) for position, entry in enumerate(entries)],
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        finally:
            conn.close()

    def add(self, names: List[str]) -> List[HistoryEntry]:
        """
        Record a query at the top of the history.

        Older entries for the same usernames (ignoring case and order) are
        dropped and the list is capped to max_items.

        Returns:
            The updated history
        """
        entry = HistoryEntry.new(names)
        key = entry.key()
        history = [entry] + [item for item in self.load() if item.key() != key]
        history = history[:self.max_items]
        self.save(history)
        logger.info(f"Added {', '.join(names)} to history ({len(history)} entries)")
        return history

    def delete(self, entry_id: str) -> List[HistoryEntry]:
        """Remove one entry and return the remaining history."""
        history = [item for item in self.load() if item.id != entry_id]
        self.save(history)
        return history
