"""
Cheap syntactic and duplicate filtering applied before any network call.
"""

import asyncio
import logging

from rich.markup import escape

from iptv_filter.models.entry import GateDecision

log = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")


class SeenSet:
    """A set of stream URLs shared by all workers of one run."""

    def __init__(self):
        self._urls: set[str] = set()
        self._lock = asyncio.Lock()

    async def add_if_absent(self, url: str) -> bool:
        """Adds the URL and returns True, or returns False if it was already present."""
        async with self._lock:
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __len__(self) -> int:
        return len(self._urls)


def has_allowed_scheme(url: str) -> bool:
    scheme, sep, _ = url.partition("://")
    return bool(sep) and scheme.lower() in ALLOWED_SCHEMES


class UrlGate:
    """Decides whether a stream URL is worth probing at all."""

    def __init__(self, seen: SeenSet | None = None):
        self.seen = seen if seen is not None else SeenSet()

    async def admit(self, url: str) -> GateDecision:
        """
        Rejects empty, non-HTTP(S) and already-dispatched URLs. An accepted URL
        is recorded in the seen-set before this returns, so it can never be
        admitted twice.
        """
        if not url:
            return GateDecision.EMPTY
        if not has_allowed_scheme(url):
            log.debug(f"Skipping non-HTTP stream: {escape(url)}")
            return GateDecision.UNSUPPORTED_SCHEME
        if not await self.seen.add_if_absent(url):
            log.debug(f"Skipping duplicate stream: {escape(url)}")
            return GateDecision.DUPLICATE
        return GateDecision.ACCEPTED
