"""
Core pipeline logic for parsing, gating, validating and assembling playlists.
"""

from .dispatcher import Dispatcher
from .pipeline import FilterPipeline, FilterResult
from .validator import StreamValidator

__all__ = ["Dispatcher", "FilterPipeline", "FilterResult", "StreamValidator"]
