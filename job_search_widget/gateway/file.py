"""File-backed search gateway: serves listings from a JSON fixture.

Used for dry runs and demos where the real endpoint is unavailable. The
fixture is read on every call; criteria are not applied.
"""

import json
import logging
from pathlib import Path

from job_search_widget.core.config import GatewayConfig
from job_search_widget.core.schemas import RawListing, SearchRequest
from job_search_widget.gateway.base import GatewayError, SearchGateway
from job_search_widget.gateway.http import parse_records

logger = logging.getLogger(__name__)


class FileSearchGateway(SearchGateway):
    """Returns every record of a JSON file as the search result."""

    def __init__(self, config: GatewayConfig) -> None:
        self._path = Path(config.fixture_path)

    @property
    def gateway_id(self) -> str:
        return "file"

    async def search(self, request: SearchRequest) -> list[RawListing]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            msg = f"Failed to load listings from {self._path}: {e}"
            raise GatewayError(msg) from e

        listings = parse_records(data)
        logger.info("Loaded %d listings from %s", len(listings), self._path)
        return listings
