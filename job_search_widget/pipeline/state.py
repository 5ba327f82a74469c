"""Filter state: the widget's criteria plus the derived summary phrase.

Every setter that can change the summary recomputes it synchronously, so
``summary_text`` is always consistent with ``criteria``.
"""

import logging

from job_search_widget.core.config import Capabilities
from job_search_widget.core.schemas import (
    DEFAULT_MIN_WAGE,
    DEFAULT_PAGE_SIZE,
    FilterCriteria,
    SortOption,
)
from job_search_widget.pipeline.summary import build_summary_text, has_summary_condition

logger = logging.getLogger(__name__)


def _toggle(values: list[str], value: str, checked: bool) -> list[str]:
    if checked:
        return values if value in values else [*values, value]
    return [v for v in values if v != value]


class FilterState:
    """Owns one widget's FilterCriteria.

    Usage::

        state = FilterState(capabilities)
        state.toggle_holiday("土", checked=True)
        state.set_min_wage(1200)
        state.summary_text  # "土、1,200円以上"
    """

    def __init__(
        self,
        capabilities: Capabilities | None = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._caps = capabilities or Capabilities()
        self._page_size = page_size
        self._criteria = FilterCriteria(page_size=page_size)
        self._summary_text = ""
        self.refresh_summary()

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def capabilities(self) -> Capabilities:
        return self._caps

    @property
    def summary_text(self) -> str:
        return self._summary_text

    @property
    def has_conditions(self) -> bool:
        """Whether the summary shows real conditions (not the placeholder)."""
        return has_summary_condition(self._criteria, include_experience=self._caps.experience)

    @property
    def formatted_min_wage(self) -> str:
        return f"{self._criteria.min_wage:,}"

    def has_any_condition(self) -> bool:
        """Any criterion off its default, keyword and employment types included."""
        c = self._criteria
        return bool(
            c.keyword
            or c.holidays
            or c.work_styles
            or c.employment_types
            or c.min_wage > DEFAULT_MIN_WAGE
            or c.start_time
            or c.end_time
            or (self._caps.experience and c.experience),
        )

    # --- seeding / reset ---

    def load(self, criteria: FilterCriteria) -> None:
        """Replace the criteria wholesale (URL decode on mount)."""
        self._criteria = criteria.model_copy(deep=True)
        self._criteria.page_size = self._page_size
        if not self._caps.experience:
            self._criteria.experience = False
        self.refresh_summary()

    def reset(self) -> None:
        """Restore every field to its default."""
        self._criteria = FilterCriteria(page_size=self._page_size)
        self.refresh_summary()

    # --- summarised setters ---

    def set_keyword(self, keyword: str) -> None:
        self._criteria.keyword = keyword
        self.refresh_summary()

    def clear_keyword(self) -> None:
        self.set_keyword("")

    def set_min_wage(self, min_wage: int) -> None:
        self._criteria.min_wage = min_wage
        self.refresh_summary()

    def set_start_time(self, value: str) -> None:
        self._criteria.start_time = value
        self.refresh_summary()

    def set_end_time(self, value: str) -> None:
        self._criteria.end_time = value
        self.refresh_summary()

    def toggle_holiday(self, value: str, checked: bool) -> None:
        self._criteria.holidays = _toggle(self._criteria.holidays, value, checked)
        self.refresh_summary()

    def toggle_work_style(self, value: str, checked: bool) -> None:
        self._criteria.work_styles = _toggle(self._criteria.work_styles, value, checked)
        self.refresh_summary()

    def set_experience(self, value: bool) -> None:
        if not self._caps.experience:
            logger.debug("Experience filter disabled for this variant, ignoring")
            return
        self._criteria.experience = value
        self.refresh_summary()

    # --- non-summarised setters ---

    def toggle_employment_type(self, value: str, checked: bool) -> None:
        self._criteria.employment_types = _toggle(self._criteria.employment_types, value, checked)

    def set_sort_option(self, option: SortOption | str) -> None:
        self._criteria.sort_option = SortOption(option)

    def set_page(self, page: int) -> None:
        self._criteria.page = page

    def refresh_summary(self) -> None:
        self._summary_text = build_summary_text(
            self._criteria, include_experience=self._caps.experience,
        )
