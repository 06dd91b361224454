"""
Collection module for BGG user collections.

This module handles:
- Requesting collections from the BGG XML API 2, polling while BGG prepares them
- Parsing the collection document into game records
- Caching fetched collections per username
"""

from .cache import CacheEntry, CollectionCache
from .client import BGGCollectionClient
from .parser import parse_collection

__all__ = [
    "BGGCollectionClient",
    "CacheEntry",
    "CollectionCache",
    "parse_collection",
]
