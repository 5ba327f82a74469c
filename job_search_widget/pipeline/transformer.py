"""Result transformer: raw search hits into display-ready listings.

Every helper is total: missing or malformed raw fields produce "" (or
False), never an exception.
"""

import logging
import math

from job_search_widget.core.config import Capabilities
from job_search_widget.core.schemas import DisplayListing, JobOffer, RawListing

logger = logging.getLogger(__name__)

MS_PER_MINUTE = 60_000
YEN = "円"
RANGE_MARK = "〜"
HOLIDAY_SUFFIX = "休み"


def to_number(value: object) -> float | None:
    """Coerce a raw numeric field to float. Returns None when not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def format_amount(value: object) -> str:
    """Group a currency amount with thousands separators ("1,000").

    Zero and non-numeric values count as absent and give "".
    """
    number = to_number(value)
    if not number:
        return ""
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


def format_time(raw: object) -> str:
    """Render milliseconds since local midnight as zero-padded HH:MM."""
    ms = to_number(raw)
    if ms is None or ms < 0:
        return ""
    total_minutes = ms / MS_PER_MINUTE
    hours = math.floor(total_minutes / 60)
    minutes = int(total_minutes % 60)
    return f"{hours:02d}:{minutes:02d}"


def format_holiday(raw: str | None) -> str:
    """Drop the ';' delimiters from a holiday-name string."""
    if not raw:
        return ""
    return raw.replace(";", "")


def format_time_display(start: object, end: object, holiday: str = "") -> str:
    """Combine working hours and holidays into one line.

    ``"09:00 〜 18:00 （ 土日 休み ）"``, ``"09:00 〜"``, ``"〜 18:00"`` or "".
    """
    formatted_start = format_time(start)
    formatted_end = format_time(end)

    if formatted_start and formatted_end:
        time_range = f"{formatted_start} {RANGE_MARK} {formatted_end}"
        if holiday and holiday.strip():
            return f"{time_range} （ {holiday} {HOLIDAY_SUFFIX} ）"
        return time_range
    if formatted_start:
        return f"{formatted_start} {RANGE_MARK}"
    if formatted_end:
        return f"{RANGE_MARK} {formatted_end}"
    return ""


def format_salary_display(min_salary: object, max_salary: object, salary_type: str | None) -> str:
    """Render a wage range with its type label ("時給 1,000円 〜 1,500円")."""
    formatted_min = format_amount(min_salary)
    formatted_max = format_amount(max_salary)

    if formatted_min and formatted_max:
        body = f"{formatted_min}{YEN} {RANGE_MARK} {formatted_max}{YEN}"
    elif formatted_min:
        body = f"{formatted_min}{YEN}"
    elif formatted_max:
        body = f"{RANGE_MARK} {formatted_max}{YEN}"
    else:
        return ""

    label = (salary_type or "").strip()
    return f"{label} {body}" if label else body


def is_dispatch_worker(listing: RawListing, label: str) -> bool:
    """True iff the employment status is exactly the dispatch-worker label."""
    return listing.employment_status == label


def transform_listing(listing: RawListing, capabilities: Capabilities | None = None) -> DisplayListing:
    """Derive every display field for a single raw listing."""
    caps = capabilities or Capabilities()
    offer = listing.job_offer or JobOffer()
    holiday = format_holiday(offer.holidays)

    return DisplayListing(
        listing=listing,
        formatted_salary_min=format_amount(offer.salary_min),
        formatted_salary_max=format_amount(offer.salary_max),
        formatted_start_time=format_time(offer.start_time),
        formatted_end_time=format_time(offer.end_time),
        formatted_holiday=holiday,
        formatted_time_display=format_time_display(offer.start_time, offer.end_time, holiday),
        formatted_salary_display=format_salary_display(
            offer.salary_min, offer.salary_max, offer.salary_type,
        ),
        is_dispatch_worker=caps.dispatch_flag and is_dispatch_worker(listing, caps.dispatch_label),
    )


def transform_listings(
    listings: list[RawListing],
    capabilities: Capabilities | None = None,
) -> list[DisplayListing]:
    """Transform a whole response into a fresh list of display listings."""
    transformed = [transform_listing(raw, capabilities) for raw in listings]
    logger.debug("Transformed %d listings", len(transformed))
    return transformed
