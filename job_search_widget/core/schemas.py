"""Core data models for the job search widget."""

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MIN_WAGE = 900
DEFAULT_PAGE_SIZE = 25

TIME_PATTERN = re.compile(r"^[0-9]{2}:[0-9]{2}(:[0-9]{2}(\.[0-9]+)?)?$")


class SortOption(str, Enum):
    """User-selectable result ordering."""

    WAGE_DESC = "wageDesc"
    START_TIME_ASC = "startTimeAsc"
    START_TIME_DESC = "startTimeDesc"
    END_TIME_ASC = "endTimeAsc"
    END_TIME_DESC = "endTimeDesc"


SORT_OPTION_LABELS: dict[SortOption, str] = {
    SortOption.WAGE_DESC: "時給が高い",
    SortOption.START_TIME_ASC: "開始時間が早い",
    SortOption.START_TIME_DESC: "開始時間が遅い",
    SortOption.END_TIME_ASC: "終了時間が早い",
    SortOption.END_TIME_DESC: "終了時間が遅い",
}


def unique_values(values: list[str]) -> list[str]:
    """De-duplicate while keeping first-seen order; drop empty tokens."""
    seen: list[str] = []
    for v in values:
        if v and v not in seen:
            seen.append(v)
    return seen


class FilterCriteria(BaseModel):
    """Current filter values of one widget instance.

    Mutable: setters on FilterState assign fields directly and every
    assignment is re-validated. Set-like fields are insertion-ordered lists.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    keyword: str = ""
    min_wage: int = Field(default=DEFAULT_MIN_WAGE, ge=0, alias="minWage")
    start_time: str = Field(default="", alias="startTime")
    end_time: str = Field(default="", alias="endTime")
    holidays: list[str] = Field(default_factory=list)
    work_styles: list[str] = Field(default_factory=list, alias="workStyles")
    employment_types: list[str] = Field(default_factory=list, alias="employmentTypes")
    experience: bool = False
    sort_option: SortOption = Field(default=SortOption.WAGE_DESC, alias="sortOption")
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, alias="pageSize")

    @field_validator("start_time", "end_time")
    @classmethod
    def time_format(cls, v: str) -> str:
        v = v.strip()
        if v and not TIME_PATTERN.match(v):
            msg = f"time must be HH:MM, got '{v}'"
            raise ValueError(msg)
        return v

    @field_validator("holidays", "work_styles", "employment_types")
    @classmethod
    def dedupe(cls, v: list[str]) -> list[str]:
        return unique_values([s.strip() for s in v])


def _as_text(value: Any) -> str | None:
    """Loose text coercion for service fields: numbers become strings, containers None."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


class JobOffer(BaseModel):
    """Nested job-offer record carried by each search hit."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    salary_min: float | str | None = Field(default=None, alias="Salary01__c")
    salary_max: float | str | None = Field(default=None, alias="Field1591__c")
    start_time: float | str | None = Field(default=None, alias="Field1660__c")
    end_time: float | str | None = Field(default=None, alias="Field1663__c")
    holidays: str | None = Field(default=None, alias="Field1908__c")
    salary_type: str | None = Field(default=None, alias="Field1585__c")

    @field_validator("salary_min", "salary_max", "start_time", "end_time", mode="before")
    @classmethod
    def numeric_fields(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, float, str)):
            return None
        return v

    @field_validator("holidays", "salary_type", mode="before")
    @classmethod
    def text_fields(cls, v: Any) -> str | None:
        return _as_text(v)


class RawListing(BaseModel):
    """A listing as returned by the search service.

    Only the consumed fields are typed; everything else rides along in
    the model extras.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str | None = Field(default=None, alias="Id")
    name: str | None = Field(default=None, alias="Name")
    employment_status: str | None = Field(default=None, alias="EmploymentStatus__c")
    job_offer: JobOffer | None = Field(default=None, alias="joboffer__r")

    @field_validator("id", "name", "employment_status", mode="before")
    @classmethod
    def text_fields(cls, v: Any) -> str | None:
        return _as_text(v)

    @field_validator("job_offer", mode="before")
    @classmethod
    def job_offer_object(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, JobOffer)) else None


class DisplayListing(BaseModel):
    """A raw listing paired with its display-ready derived fields."""

    model_config = ConfigDict(frozen=True)

    listing: RawListing
    formatted_salary_min: str = ""
    formatted_salary_max: str = ""
    formatted_start_time: str = ""
    formatted_end_time: str = ""
    formatted_holiday: str = ""
    formatted_time_display: str = ""
    formatted_salary_display: str = ""
    is_dispatch_worker: bool = False


class SearchRequest(BaseModel):
    """Payload sent to the search gateway. Dump with ``by_alias=True``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    keyword: str = ""
    job_types: list[str] = Field(default_factory=list, alias="jobTypes")
    holidays: list[str] = Field(default_factory=list)
    work_styles: list[str] = Field(default_factory=list, alias="workStyles")
    employment_types: list[str] = Field(default_factory=list, alias="employmentTypes")
    min_wage: int = Field(default=DEFAULT_MIN_WAGE, alias="minWage")
    max_wage: int | None = Field(default=None, alias="maxWage")
    start_time_str: str = Field(default="", alias="startTimeStr")
    end_time_str: str = Field(default="", alias="endTimeStr")
    experience_application: bool = Field(default=False, alias="experienceApplication")

    @classmethod
    def from_criteria(cls, criteria: FilterCriteria) -> "SearchRequest":
        """Build the gateway payload from the current filter values."""
        return cls(
            keyword=criteria.keyword,
            holidays=list(criteria.holidays),
            work_styles=list(criteria.work_styles),
            employment_types=list(criteria.employment_types),
            min_wage=criteria.min_wage,
            start_time_str=criteria.start_time,
            end_time_str=criteria.end_time,
            experience_application=criteria.experience,
        )

    def to_payload(self) -> dict[str, Any]:
        """Wire form of the request (camelCase keys)."""
        return self.model_dump(by_alias=True)


class ResultState(BaseModel):
    """Result-side state owned by one widget; replaced, never patched."""

    results: list[DisplayListing] = Field(default_factory=list)
    is_loading: bool = False
    is_no_results: bool = False
    has_searched: bool = False

    @property
    def has_results_or_no_results(self) -> bool:
        """True once a search ran and there is something (or 'nothing') to show."""
        return self.has_searched and (bool(self.results) or self.is_no_results)
