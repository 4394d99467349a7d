# site_mirror/crawler/fetcher.py
"""
Fetcher module: a single GET per URL over a shared aiohttp session.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession
from site_mirror.crawler.models import FetchError
from site_mirror.logger import get_logger

log = get_logger("fetcher")


class Fetcher:
    """Fetches page bodies as text. No retries, no status filtering."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> str:
        """
        GET *url* and return the response body.

        Any HTTP status is treated as a successful transport; the status is
        logged. Connection errors, timeouts and body read failures raise
        :class:`FetchError`.
        """
        try:
            async with self.session.get(url) as resp:
                log.info("Status for %s: %s", url, resp.status)
                return await resp.text(errors="replace")
        except (ClientError, asyncio.TimeoutError) as exc:
            raise FetchError(url, exc) from exc
