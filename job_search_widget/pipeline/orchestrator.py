"""Search widget orchestrator: wires URL codec, filter state, gateway, transform, sort, paging.

Data flow:
  1. mount(url) → URL codec seeds FilterState
  2. Trigger rule → search() if any criterion is off its default
  3. Gateway → raw listings (last response wins, bounded by timeout)
  4. Transformer → display listings
  5. Sorter → ordered listings, page reset to 1
  6. Paginator → visible prefix
"""

import asyncio
import json
import logging
from types import TracebackType

from job_search_widget.browser.navigator import DetailNavigator
from job_search_widget.core.config import WidgetConfig
from job_search_widget.core.schemas import (
    DisplayListing,
    FilterCriteria,
    RawListing,
    ResultState,
    SearchRequest,
    SortOption,
)
from job_search_widget.gateway.base import GatewayError, GatewayTimeoutError, SearchGateway
from job_search_widget.pipeline.paginator import has_more, next_page, visible_results
from job_search_widget.pipeline.sorter import sort_listings
from job_search_widget.pipeline.state import FilterState
from job_search_widget.pipeline.transformer import transform_listings
from job_search_widget.pipeline.url_codec import decode_url, should_auto_search

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0


class SearchWidget:
    """One mounted search widget.

    Usage::

        async with SearchWidget(gateway, settings.widget) as widget:
            await widget.mount(page_url)
            widget.visible_results
    """

    def __init__(
        self,
        gateway: SearchGateway,
        config: WidgetConfig | None = None,
        *,
        navigator: DetailNavigator | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self._gateway = gateway
        self._config = config or WidgetConfig()
        self._navigator = navigator
        self._timeout_s = timeout_s
        self.state = FilterState(self._config.caps, page_size=self._config.page_size)
        self.results = ResultState()
        self._issued = 0
        self._in_flight = 0

    # --- lifecycle ---

    async def __aenter__(self) -> "SearchWidget":
        await self._gateway.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            await self._gateway.close()
        finally:
            if self._navigator is not None:
                await self._navigator.close()

    async def mount(self, url: str) -> bool:
        """Seed filters from the page URL; search if the trigger rule fires.

        Returns True if a search ran.
        """
        criteria, from_path = decode_url(
            url,
            self._config.caps,
            search_root=self._config.search_root,
            page_size=self._config.page_size,
        )
        self.state.load(criteria)

        if not should_auto_search(
            criteria,
            from_path=from_path,
            min_wage_threshold=self._config.auto_search_min_wage,
        ):
            logger.info("No search conditions in URL, waiting for input")
            return False

        await self.search()
        return True

    # --- read side ---

    @property
    def criteria(self) -> FilterCriteria:
        return self.state.criteria

    @property
    def summary_text(self) -> str:
        return self.state.summary_text

    @property
    def is_loading(self) -> bool:
        return self.results.is_loading

    @property
    def visible_results(self) -> list[DisplayListing]:
        c = self.criteria
        return visible_results(self.results.results, c.page, c.page_size)

    @property
    def has_more(self) -> bool:
        c = self.criteria
        return has_more(self.results.results, c.page, c.page_size)

    # --- actions ---

    async def search(self) -> None:
        """Run one search; only the latest issued call may apply its response."""
        self._issued += 1
        seq = self._issued
        request = SearchRequest.from_criteria(self.criteria)

        self.results.has_searched = True
        self._in_flight += 1
        self.results.is_loading = True
        logger.info("Search #%d: keyword='%s'", seq, request.keyword)

        try:
            raw = await self._call_gateway(request)
        except GatewayError:
            logger.error("Search #%d failed", seq, exc_info=True)
            return
        except Exception:
            logger.error("Search #%d failed: unexpected gateway error", seq, exc_info=True)
            return
        finally:
            self._in_flight -= 1
            self.results.is_loading = self._in_flight > 0

        if seq != self._issued:
            logger.debug("Discarding stale response #%d (latest #%d)", seq, self._issued)
            return

        ordered = sort_listings(
            transform_listings(raw, self._config.caps), self.criteria.sort_option,
        )
        self.results = self.results.model_copy(
            update={"results": ordered, "is_no_results": not ordered},
        )
        self.state.set_page(1)
        logger.info("Search #%d: %d results", seq, len(ordered))

    async def submit(self) -> None:
        """Apply the filter dialog: refresh the summary, then search."""
        self.state.refresh_summary()
        await self.search()

    async def set_experience(self, value: bool) -> None:
        """Toggle the experience flag; re-search when any condition is set."""
        self.state.set_experience(value)
        if self.state.has_any_condition():
            await self.search()

    def change_sort(self, option: SortOption | str) -> None:
        """Switch sort order and re-sort the current results."""
        self.state.set_sort_option(option)
        if self.results.results:
            ordered = sort_listings(self.results.results, self.criteria.sort_option)
            self.results = self.results.model_copy(update={"results": ordered})

    def load_more(self) -> None:
        """Show one more page; never re-searches."""
        c = self.criteria
        self.state.set_page(next_page(self.results.results, c.page, c.page_size))

    def reset_all(self) -> None:
        """Clear every filter and the result set.

        Any search still in flight is invalidated so it cannot repopulate
        the cleared results.
        """
        self.state.reset()
        self._issued += 1
        self.results = ResultState(is_loading=self._in_flight > 0)

    async def open_detail(self, record_id: str | None) -> None:
        if self._navigator is None:
            logger.debug("No navigator configured, cannot open %s", record_id)
            return
        await self._navigator.open(record_id)

    async def _call_gateway(self, request: SearchRequest) -> list[RawListing]:
        try:
            return await asyncio.wait_for(self._gateway.search(request), self._timeout_s)
        except asyncio.TimeoutError as e:
            msg = f"Search did not complete within {self._timeout_s}s"
            raise GatewayTimeoutError(msg) from e


def export_results_json(widget: SearchWidget, *, visible_only: bool = True) -> str:
    """Export the (visible) results as a JSON string."""
    items = widget.visible_results if visible_only else widget.results.results
    data = []
    for item in items:
        raw = item.listing
        data.append({
            "id": raw.id,
            "name": raw.name,
            "salary": item.formatted_salary_display,
            "time": item.formatted_time_display,
            "holiday": item.formatted_holiday,
            "is_dispatch_worker": item.is_dispatch_worker,
        })
    return json.dumps(data, indent=2, ensure_ascii=False)
