# site_mirror/crawler/link_extractor.py
"""
Link extraction and URL normalization utilities for SiteMirror.
"""
from __future__ import annotations

from pathlib import PurePosixPath
from typing import Optional, Set
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

LINK_TAGS = ["a", "link"]


def normalize_url(href: str, target_host: str, scheme: str = "http") -> Optional[str]:
    """
    Turn a raw href into an absolute URL on *target_host*, or return None.

    Absolute URLs are kept unchanged when their host matches; root-relative
    paths are prefixed with the ``scheme://target_host`` origin. Everything
    else (page-relative paths, fragments, mailto:, other hosts, unparsable
    hrefs) is rejected.

    The host check compares the whole network location, so an explicit
    default port (``http://example.com:80/``) or userinfo
    (``http://user@example.com/``) does not match ``example.com``.
    """
    raw = href.strip()
    if not raw:
        return None
    host = target_host.lower()
    if raw.startswith("//"):
        raw = f"{scheme}:{raw}"

    try:
        parsed = urlparse(raw)
    except ValueError:
        # e.g. "http://[oops/"
        return None
    if parsed.scheme and parsed.netloc:
        return raw if parsed.netloc.lower() == host else None
    if parsed.scheme:
        # mailto:, javascript:, tel: ...
        return None
    if raw.startswith("/"):
        return f"{scheme}://{host}{raw}"
    return None


def has_extension(href: str) -> bool:
    """True if the href's path component ends in a file extension (``.css``, ``.png``, ...).

    Unparsable hrefs have no path and report False; :func:`normalize_url` rejects them.
    """
    try:
        path = urlparse(href.strip()).path
    except ValueError:
        return False
    return bool(PurePosixPath(path).suffix)


def extract_links(html: str, target_host: str, scheme: str = "http") -> Set[str]:
    """
    Extract same-host page links from ``<a>`` and ``<link>`` tags.

    Hrefs pointing at files (anything with an extension) are skipped, the rest
    go through :func:`normalize_url`. Duplicates within the page collapse.
    """
    soup = BeautifulSoup(html, "html.parser")
    links: Set[str] = set()
    for tag in soup.find_all(LINK_TAGS, href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str) or has_extension(href_val):
            continue
        url = normalize_url(href_val, target_host, scheme)
        if url is not None:
            links.add(url)
    return links
