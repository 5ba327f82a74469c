"""Abstract base class for search gateways."""

from abc import ABC, abstractmethod
from types import TracebackType

from job_search_widget.core.schemas import RawListing, SearchRequest


class GatewayError(Exception):
    """The search service rejected or failed the call."""


class GatewayTimeoutError(GatewayError):
    """The search service did not answer in time."""


class SearchGateway(ABC):
    """Base class that every search gateway must implement.

    Gateways are async context managers so the widget can acquire their
    resources at mount and release them at unmount.
    """

    @property
    @abstractmethod
    def gateway_id(self) -> str:
        """Unique identifier for this gateway (e.g. 'http')."""

    @abstractmethod
    async def search(self, request: SearchRequest) -> list[RawListing]:
        """Run a search and return raw, unordered listings.

        Raises:
            GatewayError: on any failure; an empty list is a valid result.
        """

    async def open(self) -> None:
        """Acquire connection resources. No-op by default."""

    async def close(self) -> None:
        """Release connection resources. No-op by default."""

    async def __aenter__(self) -> "SearchGateway":
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
