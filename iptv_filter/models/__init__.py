"""
Data Models Layer.

This package contains the records and Pydantic models that define the core
data structures used throughout the application.
"""

from .config import FilterConfig
from .entry import GateDecision, PlaylistEntry, ValidationVerdict, VerdictReason
from .stats import FilterStats

__all__ = [
    "FilterConfig",
    "FilterStats",
    "GateDecision",
    "PlaylistEntry",
    "ValidationVerdict",
    "VerdictReason",
]
