"""
Command-line interface for the BGG Chooser package.

This module provides CLI commands for:
- Loading and combining BGG collections
- Filtering and sorting the combined list
- Listing and deleting past searches
"""

from .main import main

__all__ = [
    "main",
]
