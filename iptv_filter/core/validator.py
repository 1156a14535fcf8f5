"""
Single bounded probe of a stream URL, classified into a keep/drop verdict.
"""

import asyncio
import logging
from urllib.parse import urlsplit

import aiohttp
from rich.markup import escape

from iptv_filter.models.entry import PlaylistEntry, ValidationVerdict, VerdictReason

log = logging.getLogger(__name__)

MANIFEST_MARKER = b"#EXTM3U"
MANIFEST_EXTENSION = ".m3u8"
HLS_CONTENT_TYPES = (
    "application/vnd.apple.mpegurl",
    "application/x-mpegurl",
    "audio/mpegurl",
    "audio/x-mpegurl",
)


def is_well_formed(url: str) -> bool:
    """Basic syntactic check: a scheme and a host, and a parseable port."""
    try:
        parts = urlsplit(url)
        return bool(parts.scheme and parts.hostname) and parts.port != 0
    except ValueError:
        return False


def has_manifest_extension(url: str) -> bool:
    return urlsplit(url).path.lower().endswith(MANIFEST_EXTENSION)


def is_hls_content_type(content_type: str) -> bool:
    content_type = content_type.lower()
    return any(mime in content_type for mime in HLS_CONTENT_TYPES)


class StreamValidator:
    """
    Probes stream URLs with a single range-limited GET request.

    Every probe carries its own deadline covering connect, headers and the
    body read. Transport failures are folded into a "network error" verdict
    and never propagate.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout: float = 9.0,
        range_bytes: int = 8191,
    ):
        """
        Args:
            session: The pooled session all probes share.
            timeout: Overall per-request budget in seconds.
            range_bytes: Last byte offset requested in the Range header.
        """
        self.session = session
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.range_bytes = range_bytes

    async def _read_head(self, resp: aiohttp.ClientResponse) -> bytes:
        """Reads at most range_bytes + 1 bytes, even from servers that ignore Range."""
        limit = self.range_bytes + 1
        body = b""
        while len(body) < limit:
            chunk = await resp.content.read(limit - len(body))
            if not chunk:
                break
            body += chunk
        return body

    async def probe_url(self, url: str) -> ValidationVerdict:
        """Validates a bare URL that did not come from a parsed playlist."""
        entry = PlaylistEntry(index=0, meta_line="", name=url, stream_url=url)
        return await self.validate(entry)

    async def validate(self, entry: PlaylistEntry) -> ValidationVerdict:
        url = entry.stream_url
        if not is_well_formed(url):
            return ValidationVerdict(entry, False, VerdictReason.INVALID_URL)

        headers = {"Range": f"bytes=0-{self.range_bytes}"}
        try:
            async with self.session.get(
                url, headers=headers, timeout=self.timeout, allow_redirects=True
            ) as resp:
                if not 200 <= resp.status < 300:
                    return ValidationVerdict(
                        entry, False, VerdictReason.BAD_STATUS, status=resp.status
                    )

                if is_hls_content_type(resp.headers.get("Content-Type", "")):
                    return ValidationVerdict(
                        entry, True, VerdictReason.CONTENT_TYPE, status=resp.status
                    )

                body = await self._read_head(resp)
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            detail = str(e) or type(e).__name__
            log.debug(f"Probe failed for {escape(url)}: {escape(detail)}")
            return ValidationVerdict(
                entry, False, VerdictReason.NETWORK_ERROR, detail=detail
            )

        if MANIFEST_MARKER in body:
            return ValidationVerdict(
                entry, True, VerdictReason.BODY_MARKER, status=status
            )
        if has_manifest_extension(url):
            return ValidationVerdict(entry, True, VerdictReason.EXTENSION, status=status)
        return ValidationVerdict(entry, False, VerdictReason.NO_SIGNAL, status=status)
