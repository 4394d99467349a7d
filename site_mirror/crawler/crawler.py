# === FILE: site_mirror/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from aiohttp import ClientSession, ClientTimeout

from site_mirror.config import CrawlerConfig
from site_mirror.crawler.fetcher import Fetcher
from site_mirror.crawler.frontier import (
    compute_next,
    merge_visited,
    partition_outcomes,
    union_links,
)
from site_mirror.crawler.link_extractor import extract_links
from site_mirror.crawler.models import (
    CrawlError,
    CrawlSummary,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
)
from site_mirror.crawler.storage import PageStore
from site_mirror.logger import get_logger

__all__ = ("MirrorCrawler",)


class MirrorCrawler:
    """
    Iterative same-host crawler that mirrors every page it reaches.

    Each iteration dispatches the whole frontier to a bounded pool of workers
    and waits for all of them before computing the next frontier. The visited
    set is a frozenset replaced only between iterations.
    """

    def __init__(self, config: CrawlerConfig, store: Optional[PageStore] = None) -> None:
        self.config = config
        self.store = store or PageStore(config.output_dir)
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.visited: frozenset[str] = frozenset()
        self.errors: List[CrawlError] = []
        self.pages_saved = 0
        self.iterations = 0
        self.logger = get_logger("crawler")

    async def __aenter__(self) -> MirrorCrawler:
        kwargs = {}
        if self.config.timeout is not None:
            kwargs["timeout"] = ClientTimeout(total=self.config.timeout)
        self.session = ClientSession(
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
            **kwargs,
        )
        self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> CrawlSummary:
        """Bootstrap from the seed, then iterate until the frontier is empty."""
        self.logger.info("Crawl started: %s (host %s)", self.config.seed, self.config.host)
        start = time.monotonic()

        frontier = await self.bootstrap()
        while frontier:
            frontier, _ = await self.run_iteration(frontier)

        elapsed = time.monotonic() - start
        self.logger.info("Elapsed time: %d", int(elapsed))
        return CrawlSummary(
            seed=self.config.seed,
            visited=self.visited,
            errors=list(self.errors),
            iterations=self.iterations,
            pages_saved=self.pages_saved,
            elapsed=elapsed,
        )

    async def bootstrap(self) -> frozenset[str]:
        """
        Fetch and store the seed page and return the initial frontier.

        Errors are not captured here: without the seed there is nothing to crawl.
        """
        seed = self.config.seed
        body = await self._fetcher().fetch(seed)
        await asyncio.to_thread(self.store.save, seed, body)
        self.pages_saved += 1
        self.visited = merge_visited(self.visited, [seed])
        frontier = compute_next(self._links(body), self.visited)
        self.logger.info("New urls: %d", len(frontier))
        return frontier

    async def run_iteration(
        self, frontier: frozenset[str]
    ) -> Tuple[frozenset[str], List[FetchFailure]]:
        """Dispatch *frontier*, join, and return ``(next_frontier, failures)``."""
        # marked at dispatch: a failed URL is never retried
        self.visited = merge_visited(self.visited, frontier)
        self.iterations += 1

        outcomes = await self._dispatch(frontier)
        successes, failures = partition_outcomes(outcomes)
        self.pages_saved += len(successes)
        self.errors.extend(f.error for f in failures)

        next_frontier = compute_next(union_links(successes), self.visited)
        self.logger.info("New urls: %d", len(next_frontier))
        self._report_failures(failures)
        return next_frontier, failures

    async def process(self, url: str) -> FetchOutcome:
        """Fetch, persist and scan a single URL. Crawl errors become a :class:`FetchFailure`."""
        try:
            body = await self._fetcher().fetch(url)
            await asyncio.to_thread(self.store.save, url, body)
        except CrawlError as exc:
            return FetchFailure(url, exc)
        links = frozenset(self._links(body))
        self.logger.debug("Visited: %s found %d links", url, len(links))
        return FetchSuccess(url, links)

    async def _dispatch(self, frontier: frozenset[str]) -> List[FetchOutcome]:
        queue: asyncio.Queue[str] = asyncio.Queue()
        for url in frontier:
            queue.put_nowait(url)
        results: List[FetchOutcome] = []
        pool = min(self.config.concurrency, len(frontier))
        workers = [asyncio.create_task(self._worker(queue, results)) for _ in range(pool)]
        # anything other than a CrawlError escapes here and aborts the crawl
        try:
            await asyncio.gather(*workers)
        except BaseException:
            for w in workers:
                w.cancel()
            raise
        return results

    async def _worker(self, queue: asyncio.Queue[str], results: List[FetchOutcome]) -> None:
        while True:
            try:
                url = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            results.append(await self.process(url))

    def _links(self, body: str) -> set[str]:
        links = extract_links(body, self.config.host, self.config.scheme)
        alias = self._seed_alias()
        if alias in links:
            links.discard(alias)
            links.add(self.config.seed)
        return links

    def _seed_alias(self) -> Optional[str]:
        """The seed spelled without its trailing root slash (``http://host``), if it has one."""
        seed = self.config.seed
        if urlparse(seed).path in ("", "/"):
            return seed.rstrip("/")
        return None

    def _report_failures(self, failures: List[FetchFailure]) -> None:
        self.logger.info("Errors: %d", len(failures))
        for failure in failures:
            self.logger.warning("  %s [%s] %s", failure.url, failure.error.kind, failure.error.cause)

    def _fetcher(self) -> Fetcher:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        return self.fetcher
