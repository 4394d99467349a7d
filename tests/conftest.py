# File: tests/conftest.py
import asyncio
import socket
from collections import Counter
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Dict, Optional

import pytest
import pytest_asyncio
from aiohttp import web

from site_mirror.config import CrawlerConfig
from site_mirror.logger import init_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """
    CliRunner swaps sys.stdout; re-create the stdout handler after every test
    so later tests do not log into a closed stream.
    """
    yield
    init_logging()


@pytest.fixture()
def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture()
def hits() -> Counter:
    """Request counter per path, filled by apps built with ``make_site``."""
    return Counter()


@pytest.fixture()
def make_site(hits: Counter) -> Callable[..., web.Application]:
    """
    Build an aiohttp app from ``{path: html}``.

    ``delays`` maps a path to a sleep (seconds) before responding.
    """

    def _make(pages: Dict[str, str], delays: Optional[Dict[str, float]] = None) -> web.Application:
        delays = delays or {}
        app = web.Application()

        def handler_for(path: str, html: str):
            async def handle(_):
                hits[path] += 1
                if path in delays:
                    await asyncio.sleep(delays[path])
                return web.Response(text=html, content_type="text/html")

            return handle

        for path, html in pages.items():
            app.router.add_get(path, handler_for(path, html))
        return app

    return _make


@pytest_asyncio.fixture
async def serve(free_port: int) -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start an app on ``free_port`` and return its base URL; cleaned up after the test."""
    runners: list[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", free_port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{free_port}"

    yield _serve
    for runner in runners:
        await runner.cleanup()


@pytest.fixture()
def make_config(tmp_path):
    """CrawlerConfig factory writing into ``tmp_path / 'mirror'``."""

    def _make(seed: str, **overrides) -> CrawlerConfig:
        params = {
            "seed_url": seed,
            "output_dir": tmp_path / "mirror",
            "concurrency": 4,
            "timeout": 5.0,
            "user_agent": "TestAgent/1.0",
        }
        params.update(overrides)
        return CrawlerConfig(**params)

    return _make

