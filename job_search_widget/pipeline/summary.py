"""One-line summary of the active filters, shown on the filter button."""

from job_search_widget.core.schemas import DEFAULT_MIN_WAGE, FilterCriteria

PLACEHOLDER = "働き方・休日・時給・時間"
SEPARATOR = "、"
WAGE_SUFFIX = "円以上"
TIME_RANGE_MARK = "〜"
EXPERIENCE_MARK = "体験可能"


def has_summary_condition(
    criteria: FilterCriteria,
    *,
    include_experience: bool = True,
    wage_threshold: int = DEFAULT_MIN_WAGE,
) -> bool:
    """True if any summarised criterion differs from its default.

    Keyword and employment types are not part of the summary.
    """
    return bool(
        criteria.work_styles
        or criteria.holidays
        or criteria.min_wage > wage_threshold
        or criteria.start_time
        or criteria.end_time
        or (include_experience and criteria.experience),
    )


def format_time_range(start: str, end: str) -> str:
    """``HH:MM〜HH:MM`` or the one-sided form; seconds are cut off."""
    start, end = start[:5], end[:5]
    if start and end:
        return f"{start}{TIME_RANGE_MARK}{end}"
    if start:
        return f"{start}{TIME_RANGE_MARK}"
    if end:
        return f"{TIME_RANGE_MARK}{end}"
    return ""


def build_summary_text(
    criteria: FilterCriteria,
    *,
    include_experience: bool = True,
    wage_threshold: int = DEFAULT_MIN_WAGE,
) -> str:
    """Render the active filters as one phrase, or the placeholder."""
    if not has_summary_condition(
        criteria, include_experience=include_experience, wage_threshold=wage_threshold,
    ):
        return PLACEHOLDER

    wage = f"{criteria.min_wage:,}{WAGE_SUFFIX}" if criteria.min_wage > wage_threshold else ""
    experience = EXPERIENCE_MARK if include_experience and criteria.experience else ""

    parts = [
        SEPARATOR.join(criteria.work_styles),
        "".join(criteria.holidays),
        wage,
        format_time_range(criteria.start_time, criteria.end_time),
        experience,
    ]
    return SEPARATOR.join(p for p in parts if p)
