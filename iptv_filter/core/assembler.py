"""
Serializes kept entries into the output playlist and writes it to disk.
"""

import logging
from pathlib import Path

import aiofiles

from iptv_filter.exceptions import OutputWriteError
from iptv_filter.models.entry import ValidationVerdict
from iptv_filter.utils.path import create_dir

log = logging.getLogger(__name__)

MANIFEST_HEADER = "#EXTM3U"


def build_manifest(
    verdicts: list[ValidationVerdict], preserve_completion_order: bool = False
) -> str:
    """
    Builds playlist text from the keep-verdicts: the header line, then the
    original directive line and stream URL of each kept entry.

    Kept entries are ordered by their position in the input playlist unless
    preserve_completion_order is set, in which case they are written in the
    order the probes finished.
    """
    kept = [v for v in verdicts if v.keep]
    if not preserve_completion_order:
        kept.sort(key=lambda v: v.entry.index)

    content = [MANIFEST_HEADER]
    for verdict in kept:
        content.append(verdict.entry.meta_line)
        content.append(verdict.entry.stream_url)
    return "\n".join(content) + "\n"


async def write_manifest(output_path: Path, text: str) -> None:
    """Writes the playlist, creating the containing directory if needed."""
    try:
        create_dir(output_path.parent)
        async with aiofiles.open(output_path, "w", encoding="utf-8") as f:
            await f.write(text)
    except OSError as e:
        raise OutputWriteError(
            f"Failed to write playlist file '{output_path}': {e}"
        ) from e
    log.debug(f"Wrote playlist: '{output_path}'")
