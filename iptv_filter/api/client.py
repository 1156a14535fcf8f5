"""
HTTP client wrapping the shared aiohttp session used for the master playlist
download and for every stream probe.
"""

import asyncio
import logging
import time

import aiohttp

from iptv_filter.exceptions import MasterPlaylistError

log = logging.getLogger(__name__)


class PlaylistClient:
    """
    Async client owning a single pooled aiohttp session for one run.

    Features:
    - Connection pooling sized to the number of concurrent probes
    - Descriptive User-Agent on every request
    - Fail-fast retrieval of the master playlist
    """

    def __init__(
        self,
        user_agent: str,
        max_workers: int = 12,
        master_timeout: float = 60.0,
    ):
        """
        Initializes the client.

        Args:
            user_agent: Client identifier sent with every request.
            max_workers: The number of concurrent probes, used to tune the connection pool.
            master_timeout: Overall budget in seconds for downloading the master playlist.
        """
        self.user_agent = user_agent
        self.max_workers = max_workers
        self.master_timeout = master_timeout
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "PlaylistClient":
        await self._initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            raise RuntimeError("PlaylistClient session is not open.")
        return self._session

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.max_workers * 2,
                limit_per_host=self.max_workers,
                ttl_dns_cache=300,
                enable_cleanup_closed=True,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={"User-Agent": self.user_agent, "Accept": "*/*"},
            )
            log.debug(f"Created probe pool with limit_per_host={self.max_workers}")

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def fetch_master(self, url: str) -> str:
        """
        Downloads the master playlist text.

        Raises:
            MasterPlaylistError: On any transport failure or non-success status.
        """
        await self._initialize_session()
        start_time = time.monotonic()
        timeout = aiohttp.ClientTimeout(total=self.master_timeout)

        try:
            async with self.session.get(
                url, timeout=timeout, allow_redirects=True
            ) as r:
                if not 200 <= r.status < 300:
                    raise MasterPlaylistError(
                        f"Master playlist request to '{url}' returned HTTP {r.status}."
                    )
                text = await r.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise MasterPlaylistError(
                f"Could not download master playlist from '{url}': "
                f"{e or type(e).__name__}"
            ) from e

        duration_ms = (time.monotonic() - start_time) * 1000
        log.debug(
            f"Fetched master playlist ({len(text)} chars) in {duration_ms:.0f} ms"
        )
        return text
