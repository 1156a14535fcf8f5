"""
Helper functions for formatting data into human-readable strings.
"""

from collections import Counter


def format_duration(seconds: float) -> str:
    """
    Formats a duration in seconds into a human-readable string (e.g., '2h 34m 12s').
    """
    s = int(seconds)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def format_counts(counts: Counter) -> str:
    """Formats a counter as 'a: 3, b: 1', most common first."""
    if not counts:
        return "-"
    return ", ".join(f"{key}: {n}" for key, n in counts.most_common())
