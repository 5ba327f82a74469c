"""Browser session management using patchright.

One browser + one context per session; detail pages open as new pages
in that context. Cookie auth only (no login flow).
"""

import json
import logging
from pathlib import Path
from types import TracebackType
from typing import Any

from patchright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from job_search_widget.core.config import BrowserConfig

logger = logging.getLogger(__name__)


class BrowserSession:
    """Async context manager that owns one patchright browser + context.

    Usage::

        async with BrowserSession(config) as session:
            page = await session.new_page()
            await page.goto("https://...")
    """

    def __init__(self, config: BrowserConfig) -> None:
        self._config = config
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None

    @property
    def context(self) -> BrowserContext:
        """The single context for this session. Raises if not entered."""
        if self._context is None:
            msg = "BrowserSession not entered, use 'async with'"
            raise RuntimeError(msg)
        return self._context

    async def new_page(self) -> Page:
        """Open a fresh page (tab) in the session's context."""
        return await self.context.new_page()

    async def __aenter__(self) -> "BrowserSession":
        pw = await async_playwright().start()
        self._playwright = pw

        # Detail pages are for a person to read
        self._browser = await pw.chromium.launch(headless=False)

        cookies = _load_cookies(self._config.cookies_path)
        self._context = await self._browser.new_context()
        if cookies:
            await self._context.add_cookies(cookies)
            logger.info("Loaded %d cookies from %s", len(cookies), self._config.cookies_path)
        else:
            logger.debug("No cookies loaded, detail pages open unauthenticated")

        self._context.set_default_timeout(self._config.timeout_ms)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._context is not None:
            await self._context.close()
            self._context = None
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None


def _load_cookies(path: str) -> list[Any]:
    """Load cookies from a JSON file. Returns empty list on any failure."""
    cookie_path = Path(path)
    if not cookie_path.exists():
        logger.debug("Cookie file not found: %s", path)
        return []
    try:
        data = json.loads(cookie_path.read_text())
        if isinstance(data, list):
            return data
        logger.warning("Cookie file is not a JSON array: %s", path)
        return []
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to load cookies from %s: %s", path, e)
        return []
