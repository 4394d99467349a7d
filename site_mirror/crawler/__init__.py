"""Crawl loop and its collaborators: fetcher, link extractor, storage, frontier."""
from site_mirror.crawler.crawler import MirrorCrawler
from site_mirror.crawler.models import (
    CrawlError,
    CrawlSummary,
    FetchError,
    FetchFailure,
    FetchSuccess,
    WriteError,
)

__all__ = [
    "MirrorCrawler",
    "CrawlError",
    "CrawlSummary",
    "FetchError",
    "FetchFailure",
    "FetchSuccess",
    "WriteError",
]
