# site_mirror/crawler/storage.py
"""
Persistence sink: mirrors fetched pages to ``<root>/<url path>/index.html``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union
from urllib.parse import urlparse

from site_mirror.crawler.models import WriteError
from site_mirror.logger import get_logger

log = get_logger("storage")

INDEX_FILE = "index.html"


class PageStore:
    """Writes page bodies under *root*, one directory per URL path."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def local_dir(self, url: str) -> Path:
        """Directory for *url*; the site root (``/`` or empty path) maps to :attr:`root`."""
        segments = [s for s in urlparse(url).path.split("/") if s not in ("", ".", "..")]
        return self.root.joinpath(*segments)

    def save(self, url: str, content: str) -> Path:
        """Create the URL's directory and (over)write its ``index.html``. Returns the file path."""
        directory = self.local_dir(url)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(url, exc, directory) from exc

        target = directory / INDEX_FILE
        try:
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise WriteError(url, exc, target) from exc
        log.debug("Saved %s -> %s", url, target)
        return target
