"""
HTTP Layer.

This package handles all communication with upstream playlist and stream servers.
"""

from .client import PlaylistClient

__all__ = ["PlaylistClient"]
