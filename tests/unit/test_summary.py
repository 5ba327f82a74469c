"""Tests for the filter summary phrase."""

from job_search_widget.core.schemas import FilterCriteria
from job_search_widget.pipeline.summary import (
    PLACEHOLDER,
    build_summary_text,
    format_time_range,
    has_summary_condition,
)


class TestHasSummaryCondition:
    def test_defaults(self) -> None:
        assert has_summary_condition(FilterCriteria()) is False

    def test_keyword_not_summarised(self) -> None:
        assert has_summary_condition(FilterCriteria(keyword="倉庫")) is False

    def test_employment_types_not_summarised(self) -> None:
        assert has_summary_condition(FilterCriteria(employment_types=["正社員"])) is False

    def test_wage_at_default_threshold(self) -> None:
        assert has_summary_condition(FilterCriteria(min_wage=900)) is False
        assert has_summary_condition(FilterCriteria(min_wage=901)) is True

    def test_experience_respects_capability(self) -> None:
        c = FilterCriteria(experience=True)
        assert has_summary_condition(c) is True
        assert has_summary_condition(c, include_experience=False) is False


class TestFormatTimeRange:
    def test_both(self) -> None:
        assert format_time_range("09:00", "17:00") == "09:00〜17:00"

    def test_seconds_truncated(self) -> None:
        assert format_time_range("09:00:00", "17:30:00.000") == "09:00〜17:30"

    def test_start_only(self) -> None:
        assert format_time_range("09:00", "") == "09:00〜"

    def test_end_only(self) -> None:
        assert format_time_range("", "17:00") == "〜17:00"

    def test_neither(self) -> None:
        assert format_time_range("", "") == ""


class TestBuildSummaryText:
    def test_placeholder_for_defaults(self) -> None:
        assert build_summary_text(FilterCriteria()) == PLACEHOLDER

    def test_placeholder_text(self) -> None:
        assert PLACEHOLDER == "働き方・休日・時給・時間"

    def test_full_phrase_order(self) -> None:
        c = FilterCriteria(
            work_styles=["正社員", "軽作業"],
            holidays=["土", "日"],
            min_wage=1200,
            start_time="09:00",
            end_time="17:00",
            experience=True,
        )
        assert build_summary_text(c) == "正社員、軽作業、土日、1,200円以上、09:00〜17:00、体験可能"

    def test_wage_only(self) -> None:
        assert build_summary_text(FilterCriteria(min_wage=1000)) == "1,000円以上"

    def test_experience_hidden_when_disabled(self) -> None:
        c = FilterCriteria(holidays=["祝"], experience=True)
        assert build_summary_text(c, include_experience=False) == "祝"

    def test_unknown_values_tolerated(self) -> None:
        c = FilterCriteria(work_styles=["リモート"])
        assert build_summary_text(c) == "リモート"

    def test_wage_at_default_omitted(self) -> None:
        c = FilterCriteria(holidays=["土"], min_wage=900)
        assert build_summary_text(c) == "土"
