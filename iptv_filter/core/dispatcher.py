"""
Fixed-size pool of workers pulling entries from a shared cursor.
"""

import asyncio
import logging
from typing import Callable, Optional, Protocol

from rich.markup import escape

from iptv_filter.models.config import MAX_CONCURRENT_CEILING
from iptv_filter.models.entry import GateDecision, PlaylistEntry, ValidationVerdict
from iptv_filter.models.stats import FilterStats

from .gate import UrlGate

log = logging.getLogger(__name__)

ProgressCallback = Callable[
    [PlaylistEntry, GateDecision, Optional[ValidationVerdict]], None
]


class Validator(Protocol):
    async def validate(self, entry: PlaylistEntry) -> ValidationVerdict: ...


class Dispatcher:
    """
    Runs a fixed number of workers over the parsed entries until every entry
    has been gated and, if admitted, probed exactly once.

    Workers claim indices one at a time from a single cursor, so a worker
    stuck on a slow probe never holds back entries the others could take.

    The cursor, seen-set and statistics belong to one call of `run()`. Each
    call starts from a fresh gate and fresh `FilterStats`, which stay
    readable as `gate` and `stats` afterwards.
    """

    def __init__(
        self,
        validator: Validator,
        max_concurrent: int = MAX_CONCURRENT_CEILING,
        on_progress: ProgressCallback | None = None,
    ):
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1.")
        self.validator = validator
        self.max_concurrent = min(max_concurrent, MAX_CONCURRENT_CEILING)
        self.on_progress = on_progress

        self.gate = UrlGate()
        self.stats = FilterStats()

        self._cursor = 0
        self._cursor_lock = asyncio.Lock()

    async def _claim_next(self, total: int) -> int | None:
        """Atomically hands out the next unclaimed index, or None when exhausted."""
        async with self._cursor_lock:
            if self._cursor >= total:
                return None
            index = self._cursor
            self._cursor += 1
            return index

    async def _probe(self, entry: PlaylistEntry) -> ValidationVerdict:
        await self.stats.probe_started()
        try:
            return await self.validator.validate(entry)
        finally:
            await self.stats.probe_finished()

    async def _worker(
        self,
        worker_id: int,
        entries: list[PlaylistEntry],
        verdicts: list[ValidationVerdict],
    ) -> None:
        while (index := await self._claim_next(len(entries))) is not None:
            entry = entries[index]
            decision = await self.gate.admit(entry.stream_url)
            self.stats.record_gate(decision)

            verdict = None
            if decision is GateDecision.ACCEPTED:
                verdict = await self._probe(entry)
                verdicts.append(verdict)
                self.stats.record_verdict(verdict)
                if verdict.keep:
                    log.debug(
                        f"[green]KEEP[/green] {escape(entry.name)} "
                        f"({verdict.reason.value})"
                    )
                else:
                    log.debug(
                        f"[dim]DROP {escape(entry.stream_url)} "
                        f"({verdict.reason.value})[/dim]"
                    )

            if self.on_progress:
                self.on_progress(entry, decision, verdict)

        log.debug(f"Worker {worker_id} finished.")

    async def run(self, entries: list[PlaylistEntry]) -> list[ValidationVerdict]:
        """
        Processes all entries and returns the verdicts in completion order.
        """
        self.gate = UrlGate()
        self.stats = FilterStats(entries_parsed=len(entries))
        self._cursor = 0
        verdicts: list[ValidationVerdict] = []
        if not entries:
            return verdicts

        workers = [
            asyncio.create_task(self._worker(n, entries, verdicts))
            for n in range(self.max_concurrent)
        ]
        try:
            await asyncio.gather(*workers)
        except BaseException:
            for task in workers:
                task.cancel()
            raise

        return verdicts
