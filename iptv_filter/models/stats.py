"""
Dataclass for tracking the statistics of a filtering run.
"""

import asyncio
from collections import Counter
from dataclasses import dataclass, field

from .entry import GateDecision, ValidationVerdict


@dataclass
class FilterStats:
    """Tracks counters for a run, including probe concurrency."""

    entries_parsed: int = 0
    kept: int = 0
    dropped: int = 0
    reasons: Counter = field(default_factory=Counter)
    gate_rejections: Counter = field(default_factory=Counter)

    active_probes: int = 0
    peak_concurrent: int = 0
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @property
    def probed(self) -> int:
        return self.kept + self.dropped

    @property
    def skipped(self) -> int:
        return sum(self.gate_rejections.values())

    def record_gate(self, decision: GateDecision) -> None:
        if decision is not GateDecision.ACCEPTED:
            self.gate_rejections[decision.value] += 1

    def record_verdict(self, verdict: ValidationVerdict) -> None:
        if verdict.keep:
            self.kept += 1
        else:
            self.dropped += 1
        self.reasons[verdict.reason.value] += 1

    async def probe_started(self) -> None:
        async with self._lock:
            self.active_probes += 1
            self.peak_concurrent = max(self.peak_concurrent, self.active_probes)

    async def probe_finished(self) -> None:
        async with self._lock:
            self.active_probes -= 1
