"""Incremental "load more" pagination over the sorted result set."""

from typing import TypeVar

T = TypeVar("T")


def visible_results(results: list[T], page: int, page_size: int) -> list[T]:
    """The first ``page * page_size`` results (saturates at the full list)."""
    if not results:
        return []
    return results[: page * page_size]


def has_more(results: list[T], page: int, page_size: int) -> bool:
    """True while some results are still hidden behind "load more"."""
    return len(results) > len(visible_results(results, page, page_size))


def next_page(results: list[T], page: int, page_size: int) -> int:
    """Page number after one "load more"; unchanged once everything is shown."""
    if has_more(results, page, page_size):
        return page + 1
    return page
