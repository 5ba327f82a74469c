"""Result ordering by the user-selected sort option.

Sorting is stable and always returns a new list. Listings whose time
cannot be parsed sort after all timed listings in both directions.
"""

import logging
import re
from collections.abc import Callable

from job_search_widget.core.schemas import DisplayListing, SortOption
from job_search_widget.pipeline.transformer import to_number

logger = logging.getLogger(__name__)

_TIME_PREFIX = re.compile(r"^([0-9]{2}):([0-9]{2})")


def parse_minutes(value: str | None) -> int | None:
    """Minutes since midnight from an "HH:MM..." string, None if unparsable."""
    if not isinstance(value, str):
        return None
    match = _TIME_PREFIX.match(value)
    if match is None:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def raw_wage(item: DisplayListing) -> float:
    """Raw minimum wage of a listing; missing or non-numeric counts as 0."""
    offer = item.listing.job_offer
    if offer is None:
        return 0.0
    return to_number(offer.salary_min) or 0.0


def _time_key(
    extract: Callable[[DisplayListing], str],
    descending: bool,
) -> Callable[[DisplayListing], tuple[bool, int]]:
    def key(item: DisplayListing) -> tuple[bool, int]:
        minutes = parse_minutes(extract(item))
        if minutes is None:
            return (True, 0)
        return (False, -minutes if descending else minutes)

    return key


_SORT_KEYS: dict[SortOption, Callable[[DisplayListing], object]] = {
    SortOption.WAGE_DESC: lambda item: -raw_wage(item),
    SortOption.START_TIME_ASC: _time_key(lambda i: i.formatted_start_time, descending=False),
    SortOption.START_TIME_DESC: _time_key(lambda i: i.formatted_start_time, descending=True),
    SortOption.END_TIME_ASC: _time_key(lambda i: i.formatted_end_time, descending=False),
    SortOption.END_TIME_DESC: _time_key(lambda i: i.formatted_end_time, descending=True),
}


def sort_listings(listings: list[DisplayListing], option: SortOption | str) -> list[DisplayListing]:
    """Return a new list ordered by ``option``. Input is never mutated."""
    option = SortOption(option)
    ordered = sorted(listings, key=_SORT_KEYS[option])  # type: ignore[arg-type]
    logger.debug("Sorted %d listings by %s", len(ordered), option.value)
    return ordered
