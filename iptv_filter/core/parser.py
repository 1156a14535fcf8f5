"""
Lenient parser for extended M3U playlists.
"""

import re

from iptv_filter.models.entry import PlaylistEntry

DIRECTIVE_PREFIX = "#EXTINF"

_ATTRIBUTE_PATTERNS: dict[str, re.Pattern] = {}


def extract_attribute(meta_line: str, name: str) -> str:
    """
    Returns the value of a quoted `name="value"` attribute on a directive line,
    or an empty string when the attribute is missing or empty.
    """
    pattern = _ATTRIBUTE_PATTERNS.get(name)
    if pattern is None:
        pattern = re.compile(rf'{re.escape(name)}="([^"]+)"')
        _ATTRIBUTE_PATTERNS[name] = pattern
    match = pattern.search(meta_line)
    return match.group(1) if match else ""


def _display_name(meta_line: str) -> str:
    _, sep, name = meta_line.partition(",")
    return name.strip() if sep else ""


def parse_playlist(text: str) -> list[PlaylistEntry]:
    """
    Parses playlist text into one entry per #EXTINF directive.

    The stream URL is the next non-empty line after the directive. A directive
    at the end of the text, or one followed directly by another directive,
    yields an entry with an empty stream URL. Never raises on malformed input.
    """
    lines = [line.strip() for line in text.splitlines()]
    entries: list[PlaylistEntry] = []

    for i, line in enumerate(lines):
        if not line.startswith(DIRECTIVE_PREFIX):
            continue

        stream_url = ""
        j = i + 1
        while j < len(lines) and not lines[j]:
            j += 1
        if j < len(lines) and not lines[j].startswith(DIRECTIVE_PREFIX):
            stream_url = lines[j]

        entries.append(
            PlaylistEntry(
                index=len(entries),
                meta_line=line,
                name=_display_name(line),
                stream_url=stream_url,
                tvg_logo=extract_attribute(line, "tvg-logo"),
                tvg_id=extract_attribute(line, "tvg-id"),
            )
        )

    return entries
