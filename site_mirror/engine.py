# File: site_mirror/engine.py
"""site_mirror.engine: слой оркестрации для запуска обхода из CLI и тестов."""

from __future__ import annotations

from typing import Optional

from site_mirror.config import CrawlerConfig
from site_mirror.crawler.crawler import MirrorCrawler
from site_mirror.crawler.models import CrawlError, CrawlSummary
from site_mirror.crawler.storage import PageStore
from site_mirror.logger import logger

__all__ = ["start_crawl"]


async def start_crawl(config: CrawlerConfig, store: Optional[PageStore] = None) -> CrawlSummary:
    """Открывает сессию, выполняет обход и закрывает сессию.

    Ошибка на стартовой странице фатальна: она логируется и пробрасывается дальше.
    """
    try:
        async with MirrorCrawler(config, store) as crawler:
            return await crawler.crawl()
    except CrawlError as exc:
        logger.error("Crawl aborted, seed unavailable: %s", exc)
        raise
