"""
iptv-filter: verifies the streams of a remote M3U playlist and writes a
playlist containing only the reachable HLS entries.
"""

__version__ = "1.0.0"
