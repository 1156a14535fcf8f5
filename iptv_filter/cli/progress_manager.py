"""
Manages a Rich progress display for the stream probes of a run.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from iptv_filter.models.entry import GateDecision, PlaylistEntry, ValidationVerdict


class ProgressManager:
    """
    Shows how many parsed entries have been processed, with live kept/dropped
    counters. Used as an async context manager around a pipeline run.
    """

    def __init__(self, console: Console, enabled: bool = True):
        self.console = console
        self.enabled = enabled
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            "•",
            TextColumn("[green]{task.fields[kept]} kept[/green]"),
            TextColumn("[red]{task.fields[dropped]} dropped[/red]"),
            "•",
            TimeElapsedColumn(),
            console=console,
            transient=True,
        )
        self._task_id: TaskID | None = None
        self._kept = 0
        self._dropped = 0

    async def __aenter__(self) -> "ProgressManager":
        if self.enabled:
            self.progress.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.enabled:
            self.progress.stop()

    def start(self, total: int) -> None:
        """Creates the probe task once the number of entries is known."""
        self._task_id = self.progress.add_task(
            "Checking streams", total=total, kept=0, dropped=0
        )

    def advance(
        self,
        entry: PlaylistEntry,
        decision: GateDecision,
        verdict: ValidationVerdict | None,
    ) -> None:
        if verdict is not None:
            if verdict.keep:
                self._kept += 1
            else:
                self._dropped += 1
        if self._task_id is not None:
            self.progress.update(
                self._task_id, advance=1, kept=self._kept, dropped=self._dropped
            )
