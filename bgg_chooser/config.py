"""
Configuration settings for the BGG collection chooser.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent  # Go up one level to workspace root
DATA_DIR = PROJECT_ROOT / "bgg_chooser_data"
HISTORY_DB_PATH = Path(os.environ.get("BGG_CHOOSER_DB", DATA_DIR / "history.db"))
# Logs directory for per-run logs
LOGS_DIR = DATA_DIR / "logs"

# BoardGameGeek XML API 2
BGG_API_BASE = os.environ.get("BGG_API_BASE", "https://boardgamegeek.com/xmlapi2")
COLLECTION_ENDPOINT = f"{BGG_API_BASE}/collection"
EXCLUDED_SUBTYPE = "boardgameexpansion"
USER_AGENT = os.environ.get("BGG_CHOOSER_USER_AGENT", "bgg-chooser/0.1 (+https://boardgamegeek.com)")
REQUEST_TIMEOUT = float(os.environ.get("BGG_REQUEST_TIMEOUT", "25"))

# Polling for "202 Accepted" responses while BGG prepares a collection
INITIAL_BACKOFF = 0.5  # seconds, doubled after every 202
_max_poll_attempts = os.environ.get("BGG_MAX_POLL_ATTEMPTS")
MAX_POLL_ATTEMPTS = int(_max_poll_attempts) if _max_poll_attempts else None  # None = poll until a terminal response

# Cached collections older than this are fetched again
DEFAULT_MAX_AGE = 86400  # seconds

# Search history
MAX_HISTORY_ITEMS = 8

# Filter options
MAX_PLAYERS = 8  # the "8+" player bracket
DEFAULT_PLAYER_OPTIONS = (1, MAX_PLAYERS)
BASE_TIME_BRACKETS = [30, 60]
TIME_BRACKET_STEP = 60
DEFAULT_TIME_OPTIONS = [30, 45, 60, 120, 240]
