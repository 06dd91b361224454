"""
History module for past collection queries.

This module handles:
- History schema creation
- Loading, recording and deleting past queries
"""

from .operations import HistoryDatabase
from ..models import HistoryEntry

__all__ = [
    "HistoryEntry",
    "HistoryDatabase",
]
