import sqlite3
import os
import logging

logger = logging.getLogger(__name__)


def create_database(db_path="history.db"):
    """Create the database and table for the search history."""

    # Ensure database directory exists (only if path contains directory)
    db_dir = os.path.dirname(db_path)
    if db_dir:  # Only create directory if there is one
        os.makedirs(db_dir, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    # One row per past query; names is a JSON array of usernames
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS history (
            id TEXT PRIMARY KEY,
            position INTEGER NOT NULL,
            names TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)

    conn.commit()
    conn.close()
    logger.debug(f"History database ready at {db_path}")
