"""
Display helpers for play times.
"""

from typing import Tuple


def format_minutes(minutes: int) -> str:
    """Format a play time: 45 -> "45'", 60 -> "1h", 90 -> "1h30", 120 -> "2h"."""
    if minutes > 60:
        hours, rest = divmod(minutes, 60)
        if rest == 0:
            return f"{hours}h"
        return f"{hours}h{rest}"
    elif minutes == 60:
        return "1h"
    return f"{minutes}'"


def format_minutes_range(bounds: Tuple[int, int]) -> str:
    low, high = bounds
    if low == high:
        return format_minutes(low)
    return f"{format_minutes(low)}–{format_minutes(high)}"
