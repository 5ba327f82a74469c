"""Tests for the result transformer: time, holiday, salary formatting and flags."""

import json
from pathlib import Path

import pytest

from job_search_widget.core.config import Capabilities
from job_search_widget.core.schemas import RawListing
from job_search_widget.pipeline.transformer import (
    format_amount,
    format_holiday,
    format_salary_display,
    format_time,
    format_time_display,
    is_dispatch_worker,
    to_number,
    transform_listing,
    transform_listings,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def _listing(**offer: object) -> RawListing:
    return RawListing.model_validate({"Id": "x1", "joboffer__r": offer})


def _load_fixture() -> list[RawListing]:
    data = json.loads((FIXTURES_DIR / "sample_listings.json").read_text(encoding="utf-8"))
    return [RawListing.model_validate(d) for d in data]


# ---------------------------------------------------------------------------
# TestFormatTime
# ---------------------------------------------------------------------------


class TestFormatTime:
    """Milliseconds since midnight → HH:MM."""

    def test_ninety_minutes(self) -> None:
        assert format_time(5400000) == "01:30"

    def test_midnight(self) -> None:
        assert format_time(0) == "00:00"

    def test_nine_am(self) -> None:
        assert format_time(32400000) == "09:00"

    def test_numeric_string(self) -> None:
        assert format_time("61200000") == "17:00"

    def test_past_midnight_hours_not_wrapped(self) -> None:
        assert format_time(90000000) == "25:00"

    def test_fractional_minutes_truncated(self) -> None:
        assert format_time(5430000) == "01:30"

    @pytest.mark.parametrize("raw", [-1, -60000, "-3600000"])
    def test_negative_is_empty(self, raw: object) -> None:
        assert format_time(raw) == ""

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "9:00", float("nan"), True, [], {}])
    def test_non_numeric_is_empty(self, raw: object) -> None:
        assert format_time(raw) == ""


# ---------------------------------------------------------------------------
# TestToNumber / TestFormatAmount
# ---------------------------------------------------------------------------


class TestToNumber:
    def test_int(self) -> None:
        assert to_number(1000) == 1000.0

    def test_string(self) -> None:
        assert to_number(" 1200 ") == 1200.0

    def test_garbage(self) -> None:
        assert to_number("12x") is None

    def test_infinity(self) -> None:
        assert to_number(float("inf")) is None


class TestFormatAmount:
    def test_grouping(self) -> None:
        assert format_amount(1000) == "1,000"

    def test_large(self) -> None:
        assert format_amount(1234567) == "1,234,567"

    def test_small_no_separator(self) -> None:
        assert format_amount(950) == "950"

    def test_fraction_kept(self) -> None:
        assert format_amount(1000.5) == "1,000.5"

    def test_zero_is_absent(self) -> None:
        assert format_amount(0) == ""

    def test_none_is_absent(self) -> None:
        assert format_amount(None) == ""


# ---------------------------------------------------------------------------
# TestFormatHoliday
# ---------------------------------------------------------------------------


class TestFormatHoliday:
    def test_semicolons_stripped(self) -> None:
        assert format_holiday("土;日;祝") == "土日祝"

    def test_none(self) -> None:
        assert format_holiday(None) == ""

    def test_empty(self) -> None:
        assert format_holiday("") == ""


# ---------------------------------------------------------------------------
# TestFormatTimeDisplay
# ---------------------------------------------------------------------------


class TestFormatTimeDisplay:
    def test_both_with_holiday(self) -> None:
        result = format_time_display(32400000, 61200000, "土日")
        assert result == "09:00 〜 17:00 （ 土日 休み ）"

    def test_both_without_holiday(self) -> None:
        assert format_time_display(32400000, 61200000, "") == "09:00 〜 17:00"

    def test_blank_holiday_ignored(self) -> None:
        assert format_time_display(32400000, 61200000, "  ") == "09:00 〜 17:00"

    def test_start_only(self) -> None:
        assert format_time_display(32400000, None, "土日") == "09:00 〜"

    def test_end_only(self) -> None:
        assert format_time_display(None, 61200000) == "〜 17:00"

    def test_neither(self) -> None:
        assert format_time_display(None, "bad", "土日") == ""


# ---------------------------------------------------------------------------
# TestFormatSalaryDisplay
# ---------------------------------------------------------------------------


class TestFormatSalaryDisplay:
    def test_range(self) -> None:
        assert format_salary_display(1000, 1500, "時給") == "時給 1,000円 〜 1,500円"

    def test_min_only(self) -> None:
        assert format_salary_display(1000, None, "時給") == "時給 1,000円"

    def test_max_only(self) -> None:
        assert format_salary_display(None, 1500, "時給") == "時給 〜 1,500円"

    def test_neither(self) -> None:
        assert format_salary_display(None, None, "時給") == ""

    def test_string_amounts(self) -> None:
        assert format_salary_display("1200", "250000", "月給") == "月給 1,200円 〜 250,000円"

    def test_missing_label_no_leading_space(self) -> None:
        assert format_salary_display(1000, None, None) == "1,000円"


# ---------------------------------------------------------------------------
# TestDispatchWorker
# ---------------------------------------------------------------------------


class TestDispatchWorker:
    def test_exact_label(self) -> None:
        listing = RawListing.model_validate({"EmploymentStatus__c": "派遣社員"})
        assert is_dispatch_worker(listing, "派遣社員") is True

    def test_other_label(self) -> None:
        listing = RawListing.model_validate({"EmploymentStatus__c": "正社員"})
        assert is_dispatch_worker(listing, "派遣社員") is False

    def test_missing_status(self) -> None:
        assert is_dispatch_worker(RawListing(), "派遣社員") is False

    def test_flag_disabled_by_capability(self) -> None:
        listing = RawListing.model_validate({"EmploymentStatus__c": "派遣社員"})
        result = transform_listing(listing, Capabilities(dispatch_flag=False))
        assert result.is_dispatch_worker is False


# ---------------------------------------------------------------------------
# TestTransformListing
# ---------------------------------------------------------------------------


class TestTransformListing:
    def test_all_fields(self) -> None:
        listing = _listing(
            Salary01__c=1100,
            Field1591__c=1300,
            Field1660__c=32400000,
            Field1663__c=61200000,
            Field1908__c="土;日",
            Field1585__c="時給",
        )
        result = transform_listing(listing)
        assert result.listing is listing
        assert result.formatted_salary_min == "1,100"
        assert result.formatted_salary_max == "1,300"
        assert result.formatted_start_time == "09:00"
        assert result.formatted_end_time == "17:00"
        assert result.formatted_holiday == "土日"
        assert result.formatted_time_display == "09:00 〜 17:00 （ 土日 休み ）"
        assert result.formatted_salary_display == "時給 1,100円 〜 1,300円"
        assert result.is_dispatch_worker is False

    def test_missing_job_offer_is_neutral(self) -> None:
        result = transform_listing(RawListing.model_validate({"Id": "x"}))
        assert result.formatted_salary_min == ""
        assert result.formatted_start_time == ""
        assert result.formatted_time_display == ""
        assert result.formatted_salary_display == ""

    def test_extra_fields_preserved(self) -> None:
        listing = RawListing.model_validate({"Id": "x", "WorkLocation__c": "東京都"})
        result = transform_listing(listing)
        assert result.listing.model_extra == {"WorkLocation__c": "東京都"}

    def test_fixture_batch(self) -> None:
        results = transform_listings(_load_fixture())
        assert [r.listing.id for r in results] == ["a01", "a02", "a03", "a04"]
        assert results[1].formatted_salary_display == "時給 1,500円"
        assert results[1].formatted_time_display == "10:00 〜"
        assert results[1].is_dispatch_worker is True
        assert results[2].formatted_salary_display == "時給 〜 1,200円"
        assert results[2].formatted_time_display == "〜 15:00"
        assert results[3].formatted_salary_display == ""

    def test_deterministic(self) -> None:
        raws = _load_fixture()
        assert transform_listings(raws) == transform_listings(raws)

    def test_empty_input(self) -> None:
        assert transform_listings([]) == []
