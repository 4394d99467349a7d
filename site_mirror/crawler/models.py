# site_mirror/crawler/models.py
"""
Data models for the SiteMirror crawler: error taxonomy, per-URL outcomes
and the final crawl summary.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union


class CrawlError(Exception):
    """Base class for per-URL crawl failures. Carries the URL and the underlying cause."""

    kind = "crawl"

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(url, cause)
        self.url = url
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.url}: {self.cause!r}"


class FetchError(CrawlError):
    """Network/transport failure while fetching a URL."""

    kind = "fetch"


class WriteError(CrawlError):
    """Directory creation or file write failure while persisting a page."""

    kind = "write"

    def __init__(self, url: str, cause: BaseException, path: Optional[Path] = None) -> None:
        super().__init__(url, cause)
        self.path = path

    def __str__(self) -> str:
        where = f" ({self.path})" if self.path is not None else ""
        return f"{self.url}{where}: {self.cause!r}"


@dataclass(frozen=True, slots=True)
class FetchSuccess:
    """Page fetched and persisted; ``links`` are the same-host URLs found on it."""

    url: str
    links: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class FetchFailure:
    url: str
    error: CrawlError


FetchOutcome = Union[FetchSuccess, FetchFailure]


@dataclass(slots=True)
class CrawlSummary:
    """What a finished crawl leaves behind (besides the files on disk)."""

    seed: str
    visited: frozenset[str] = frozenset()
    errors: List[CrawlError] = field(default_factory=list)
    iterations: int = 0
    pages_saved: int = 0
    elapsed: float = 0.0
