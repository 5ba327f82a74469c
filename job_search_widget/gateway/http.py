"""HTTP search gateway: POSTs the criteria payload to the search endpoint."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from job_search_widget.core.config import GatewayConfig
from job_search_widget.core.schemas import RawListing, SearchRequest
from job_search_widget.gateway.base import GatewayError, GatewayTimeoutError, SearchGateway

logger = logging.getLogger(__name__)


def parse_records(data: Any) -> list[RawListing]:
    """Validate a decoded JSON response into RawListing objects.

    Accepts a bare array or an object with a ``results`` array. Records
    that fail validation are skipped, never fatal.
    """
    if isinstance(data, dict) and isinstance(data.get("results"), list):
        data = data["results"]
    if not isinstance(data, list):
        msg = f"Unexpected search response type: {type(data).__name__}"
        raise GatewayError(msg)

    listings: list[RawListing] = []
    for record in data:
        try:
            listings.append(RawListing.model_validate(record))
        except ValidationError:
            logger.debug("Skipping malformed search record", exc_info=True)
    return listings


class HttpSearchGateway(SearchGateway):
    """Search gateway backed by an ``httpx.AsyncClient``.

    The client is created in ``open()``; ``search()`` outside an open
    session uses a short-lived client.
    """

    def __init__(self, config: GatewayConfig) -> None:
        self._config = config
        self._client: httpx.AsyncClient | None = None

    @property
    def gateway_id(self) -> str:
        return "http"

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._config.timeout_s,
            headers=self._config.headers,
        )

    async def open(self) -> None:
        if self._client is None:
            self._client = self._new_client()

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def search(self, request: SearchRequest) -> list[RawListing]:
        endpoint = self._config.endpoint
        payload = request.to_payload()
        logger.debug("POST %s %s", endpoint, payload)

        if self._client is not None:
            data = await self._post(self._client, endpoint, payload)
        else:
            async with self._new_client() as client:
                data = await self._post(client, endpoint, payload)

        listings = parse_records(data)
        logger.info("Gateway returned %d listings", len(listings))
        return listings

    async def _post(self, client: httpx.AsyncClient, endpoint: str, payload: dict[str, Any]) -> Any:
        try:
            response = await client.post(endpoint, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            msg = f"Search request timed out: {endpoint}"
            raise GatewayTimeoutError(msg) from e
        except httpx.HTTPStatusError as e:
            msg = f"HTTP {e.response.status_code} from {endpoint}"
            raise GatewayError(msg) from e
        except httpx.HTTPError as e:
            msg = f"Search request failed: {e}"
            raise GatewayError(msg) from e
        except ValueError as e:
            msg = f"Search response is not valid JSON: {e}"
            raise GatewayError(msg) from e
