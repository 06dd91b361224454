"""
Logging setup shared by the CLI and library users of BGG Chooser.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .config import LOGS_DIR

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that only matter when something goes wrong
NOISY_LOGGERS = ("aiohttp", "aiohttp.access", "aiohttp.client", "asyncio")


def resolve_log_path(log_file: str) -> Path:
    """Bare names go to LOGS_DIR; absolute paths are used as given."""
    path = Path(log_file)
    if not path.is_absolute():
        path = LOGS_DIR / path.name
    return path


def setup_logging(
    log_file: Optional[str] = "bgg_chooser.log",
    level: int = logging.INFO,
    console_level: Optional[int] = None,
) -> None:
    """
    Configure the root logger with a stdout handler and a per-run log file.

    Does nothing when the root logger already has handlers, so calling it
    from both the CLI and an embedding application is harmless.

    Args:
        log_file: Log file name (placed under LOGS_DIR) or absolute path; None for console only
        level: Level of the root logger and the file handler
        console_level: Level of the stdout handler, defaults to `level`
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(console_level if console_level is not None else level)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = resolve_log_path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
