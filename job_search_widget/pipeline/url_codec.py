"""URL <-> filter state codec.

Two entry forms exist side by side:
  - query string: ``?keyword=...&minWage=1200&holidays=土,日&experience=true``
  - path segment: ``/<search-root>/<urlencoded-keyword>`` (keyword only)

Malformed values never fail the page load; they fall back to the field
default and are logged.
"""

import logging
import re
from urllib.parse import parse_qs, quote, unquote, urlencode, urlparse

from job_search_widget.core.config import Capabilities
from job_search_widget.core.schemas import (
    DEFAULT_MIN_WAGE,
    TIME_PATTERN,
    FilterCriteria,
    unique_values,
)

logger = logging.getLogger(__name__)

AUTO_SEARCH_MIN_WAGE = 1000

QUERY_KEYS = (
    "keyword",
    "minWage",
    "startTime",
    "endTime",
    "holidays",
    "workStyles",
    "employmentTypes",
    "experience",
)

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_int(value: str | None, default: int) -> int:
    """Base-10 leading-integer parse; fractional part and trailing text dropped.

    Returns ``default`` when nothing numeric leads the string.
    """
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    if match is None:
        return default
    return int(match.group(1))


def split_values(value: str | None) -> list[str]:
    """Percent-decode a comma-separated set parameter and split it."""
    if not value:
        return []
    return unique_values([v.strip() for v in unquote(value).split(",")])


def _first(params: dict[str, list[str]], key: str) -> str | None:
    values = params.get(key)
    return values[0] if values else None


def _time(value: str | None, field_name: str) -> str:
    if not value:
        return ""
    value = value.strip()
    if not TIME_PATTERN.match(value):
        logger.warning("Malformed %s '%s' in URL, ignoring", field_name, value)
        return ""
    return value


def decode_query(query: str, *, page_size: int | None = None) -> FilterCriteria:
    """Build FilterCriteria from a query string (with or without leading '?')."""
    params = parse_qs(query.lstrip("?"), keep_blank_values=False)

    keyword = _first(params, "keyword")
    min_wage_raw = _first(params, "minWage")
    min_wage = parse_int(min_wage_raw, DEFAULT_MIN_WAGE)
    if min_wage_raw is not None and (min_wage < 0 or not _LEADING_INT.match(min_wage_raw)):
        logger.warning("Malformed minWage '%s' in URL, using %d", min_wage_raw, DEFAULT_MIN_WAGE)
        min_wage = DEFAULT_MIN_WAGE

    criteria = FilterCriteria(
        keyword=unquote(keyword) if keyword else "",
        min_wage=min_wage,
        start_time=_time(_first(params, "startTime"), "startTime"),
        end_time=_time(_first(params, "endTime"), "endTime"),
        holidays=split_values(_first(params, "holidays")),
        work_styles=split_values(_first(params, "workStyles")),
        employment_types=split_values(_first(params, "employmentTypes")),
        experience=_first(params, "experience") == "true",
    )
    if page_size is not None:
        criteria.page_size = page_size
    return criteria


def decode_path_keyword(path: str, root: str = "global-search") -> str | None:
    """Keyword from a ``/<root>/<keyword>`` path, or None if the path doesn't match."""
    match = re.search(rf"/{re.escape(root)}/([^/]+)", path)
    if match is None:
        return None
    return unquote(match.group(1))


def decode_url(
    url: str,
    capabilities: Capabilities,
    *,
    search_root: str = "global-search",
    page_size: int | None = None,
) -> tuple[FilterCriteria, bool]:
    """Decode a full page URL with every form the capability set enables.

    Returns the criteria and whether a path keyword matched. A path keyword
    takes precedence over a ``keyword`` query parameter.
    """
    parsed = urlparse(url)
    if capabilities.query_url:
        criteria = decode_query(parsed.query, page_size=page_size)
    else:
        criteria = FilterCriteria()
        if page_size is not None:
            criteria.page_size = page_size

    if not capabilities.experience:
        criteria.experience = False

    from_path = False
    if capabilities.path_url:
        keyword = decode_path_keyword(parsed.path, search_root)
        if keyword is not None:
            criteria.keyword = keyword
            from_path = True
    return criteria, from_path


def should_auto_search(
    criteria: FilterCriteria,
    *,
    from_path: bool = False,
    min_wage_threshold: int = AUTO_SEARCH_MIN_WAGE,
) -> bool:
    """Decide whether a freshly decoded URL should run a search immediately.

    The wage threshold here is looser than the 900 default used by the
    summary; both values are kept as observed.
    """
    if from_path:
        return True
    return bool(
        criteria.keyword
        or criteria.holidays
        or criteria.work_styles
        or criteria.employment_types
        or criteria.min_wage > min_wage_threshold
        or criteria.start_time
        or criteria.end_time
        or criteria.experience,
    )


def encode_query(criteria: FilterCriteria) -> str:
    """Query string carrying every non-default URL-borne field ('' if none)."""
    params: dict[str, str] = {}
    if criteria.keyword:
        params["keyword"] = criteria.keyword
    if criteria.min_wage != DEFAULT_MIN_WAGE:
        params["minWage"] = str(criteria.min_wage)
    if criteria.start_time:
        params["startTime"] = criteria.start_time
    if criteria.end_time:
        params["endTime"] = criteria.end_time
    if criteria.holidays:
        params["holidays"] = ",".join(criteria.holidays)
    if criteria.work_styles:
        params["workStyles"] = ",".join(criteria.work_styles)
    if criteria.employment_types:
        params["employmentTypes"] = ",".join(criteria.employment_types)
    if criteria.experience:
        params["experience"] = "true"
    return urlencode(params, quote_via=quote)


def build_search_url(base_url: str, criteria: FilterCriteria) -> str:
    """Shareable URL for the current filters."""
    query = encode_query(criteria)
    return f"{base_url}?{query}" if query else base_url


def build_path_url(base_url: str, root: str, keyword: str) -> str:
    """``<base>/<root>/<keyword>`` link for the search-from-anywhere box."""
    return f"{base_url.rstrip('/')}/{root}/{quote(keyword, safe='')}"


def build_detail_url(base_url: str, section: str, record_id: str) -> str:
    """Canonical listing detail URL ``<base>/<section>/<id>``."""
    return f"{base_url.rstrip('/')}/{section}/{quote(record_id, safe='')}"
