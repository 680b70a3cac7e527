"""Periodic keep-alive pinger.

Some hosting platforms idle a process that receives no traffic; pinging a
public URL of the service on a timer keeps it awake.
"""

import asyncio
import logging
from typing import Optional

import httpx


class KeepAlivePinger:
    """Issue ``GET url`` every ``interval_seconds`` in a background task."""

    def __init__(
        self,
        url: str,
        interval_seconds: float = 600,
        timeout_seconds: float = 10,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.url = url
        self.interval_seconds = interval_seconds
        self.timeout_seconds = timeout_seconds
        self.logger = logger or logging.getLogger(__name__)
        self._client = client
        self._owns_client = client is None
        self._task: Optional[asyncio.Task] = None

    async def ping(self) -> bool:
        """Send one ping.

        Returns:
            True if the target answered with a non-error status
        """
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout_seconds)
        try:
            response = await self._client.get(self.url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.warning(f"Keep-alive ping to {self.url} failed: {e}")
            return False

        if response.is_error:
            self.logger.warning(f"Keep-alive ping to {self.url} returned {response.status_code}")
            return False

        self.logger.debug(f"Keep-alive ping to {self.url}: {response.status_code}")
        return True

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.ping()
            except Exception:
                # A failed tick must not end the loop
                self.logger.exception(f"Keep-alive ping to {self.url} raised")

    def start(self) -> None:
        """Start pinging in the background (needs a running event loop)."""
        if self._task is not None:
            return
        self.logger.info(f"Keep-alive pinging {self.url} every {self.interval_seconds}s")
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the background task and close the HTTP client."""
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
