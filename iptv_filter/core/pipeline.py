"""
The main orchestrator: downloads the master playlist, validates its streams
and writes the filtered playlist.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from rich.markup import escape

from iptv_filter.api.client import PlaylistClient
from iptv_filter.models.config import FilterConfig
from iptv_filter.models.entry import ValidationVerdict
from iptv_filter.models.stats import FilterStats
from iptv_filter.utils.formatting import format_duration
from iptv_filter.utils.path import resolve_output_path

from .assembler import build_manifest, write_manifest
from .dispatcher import Dispatcher, ProgressCallback
from .parser import parse_playlist
from .validator import StreamValidator

log = logging.getLogger(__name__)


@dataclass
class FilterResult:
    """Everything a caller needs to report on a finished run."""

    output_path: Path
    verdicts: list[ValidationVerdict] = field(default_factory=list)
    stats: FilterStats = field(default_factory=FilterStats)
    duration_s: float = 0.0


class FilterPipeline:
    """Orchestrates a single filtering run."""

    def __init__(self, config: FilterConfig):
        self.config = config

    async def run(
        self,
        on_start: Callable[[int], None] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> FilterResult:
        """
        Executes the run end to end.

        Args:
            on_start: Called with the number of parsed entries before probing begins.
            on_progress: Called once per processed entry by the dispatcher.

        Raises:
            MasterPlaylistError: If the master playlist cannot be downloaded.
            OutputWriteError: If the filtered playlist cannot be written.
        """
        start_time = time.monotonic()
        output_path = resolve_output_path(self.config.output_path)

        async with PlaylistClient(
            self.config.user_agent,
            max_workers=self.config.max_concurrent,
            master_timeout=self.config.master_timeout,
        ) as client:
            log.info(
                f"Downloading master playlist: "
                f"[dim]{escape(self.config.master_url)}[/dim]"
            )
            raw = await client.fetch_master(self.config.master_url)

            entries = parse_playlist(raw)
            log.info(
                f"Found {len(entries)} entries. Checking streams with "
                f"{self.config.max_concurrent} workers..."
            )
            if on_start:
                on_start(len(entries))

            validator = StreamValidator(
                client.session,
                timeout=self.config.timeout,
                range_bytes=self.config.range_bytes,
            )
            dispatcher = Dispatcher(
                validator,
                max_concurrent=self.config.max_concurrent,
                on_progress=on_progress,
            )
            verdicts = await dispatcher.run(entries)
            stats = dispatcher.stats

        text = build_manifest(verdicts, self.config.preserve_completion_order)
        await write_manifest(output_path, text)

        duration = time.monotonic() - start_time
        log.info(
            f"Kept [green]{stats.kept}[/green], dropped "
            f"[red]{stats.dropped}[/red], skipped {stats.skipped} "
            f"in {format_duration(duration)}. Wrote '{escape(str(output_path))}'."
        )
        return FilterResult(
            output_path=output_path,
            verdicts=verdicts,
            stats=stats,
            duration_s=duration,
        )
