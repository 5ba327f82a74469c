"""Detail navigation: opens a listing's detail page in a new browser page."""

import logging
from types import TracebackType
from typing import Any, Protocol

from job_search_widget.core.config import BrowserConfig
from job_search_widget.pipeline.url_codec import build_detail_url

logger = logging.getLogger(__name__)


class PageOpener(Protocol):
    """Minimal session interface so tests can pass an AsyncMock instead of patchright."""

    async def new_page(self) -> Any: ...


class DetailNavigator:
    """Fire-and-forget opener for ``<base_url>/<section>/<id>``.

    Either pass an already-open session, or let the navigator start its
    own ``BrowserSession`` lazily on first use; ``close()`` releases only
    a session the navigator started itself.
    """

    def __init__(
        self,
        base_url: str,
        section: str,
        *,
        session: PageOpener | None = None,
        browser_config: BrowserConfig | None = None,
    ) -> None:
        self._base_url = base_url
        self._section = section
        self._session = session
        self._browser_config = browser_config or BrowserConfig()
        self._owned: Any = None

    def detail_url(self, record_id: str) -> str:
        return build_detail_url(self._base_url, self._section, record_id)

    async def open(self, record_id: str | None) -> None:
        """Open the detail page; failures are logged, never raised."""
        if not record_id:
            logger.debug("No record id, nothing to open")
            return

        url = self.detail_url(record_id)
        try:
            session = await self._ensure_session()
            page = await session.new_page()
            await page.goto(url)
            logger.info("Opened detail page %s", url)
        except Exception:
            logger.warning("Failed to open detail page %s", url, exc_info=True)

    async def close(self) -> None:
        if self._owned is not None:
            owned, self._owned = self._owned, None
            self._session = None
            await owned.__aexit__(None, None, None)

    async def _ensure_session(self) -> PageOpener:
        if self._session is None:
            from job_search_widget.browser.session import BrowserSession

            owned = BrowserSession(self._browser_config)
            await owned.__aenter__()
            self._owned = owned
            self._session = owned
        return self._session

    async def __aenter__(self) -> "DetailNavigator":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
