"""Configuration models and YAML loader for the job search widget."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

DISPATCH_WORKER_LABEL = "派遣社員"


class Capabilities(BaseModel):
    """Optional features a widget variant enables.

    The plain search box and the BU search page differ only in these flags,
    so both run through one pipeline.
    """

    experience: bool = True
    dispatch_flag: bool = True
    query_url: bool = True
    path_url: bool = True
    dispatch_label: str = DISPATCH_WORKER_LABEL


VARIANTS: dict[str, Capabilities] = {
    "standard": Capabilities(experience=False, dispatch_flag=False, query_url=False),
    "bu": Capabilities(path_url=False),
    "full": Capabilities(),
}


class GatewayConfig(BaseModel):
    """Search gateway connection settings."""

    kind: Literal["http", "file"] = "http"
    endpoint: str = "http://localhost:8080/services/apexrest/jobs/search"
    timeout_s: float = Field(default=10.0, gt=0.0)
    headers: dict[str, str] = Field(default_factory=dict)
    fixture_path: str = "tests/fixtures/sample_listings.json"


class WidgetConfig(BaseModel):
    """Widget behaviour: variant, URL roots, paging, trigger threshold."""

    variant: Literal["standard", "bu", "full"] = "bu"
    capabilities: Capabilities | None = None
    search_root: str = "global-search"
    detail_section: str = "joboffer-bu"
    page_size: int = Field(default=25, ge=1)
    auto_search_min_wage: int = Field(default=1000, ge=0)

    @field_validator("search_root", "detail_section")
    @classmethod
    def strip_slashes(cls, v: str) -> str:
        v = v.strip().strip("/")
        if not v:
            msg = "path segment must not be empty"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def resolve_capabilities(self) -> "WidgetConfig":
        if self.capabilities is None:
            self.capabilities = VARIANTS[self.variant].model_copy()
        return self

    @property
    def caps(self) -> Capabilities:
        """Resolved capability set (never None after validation)."""
        assert self.capabilities is not None
        return self.capabilities


class SiteConfig(BaseModel):
    """Public site the widget is embedded in."""

    base_url: str = "https://example.my.site.com"

    @field_validator("base_url")
    @classmethod
    def no_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class BrowserConfig(BaseModel):
    """Browser session configuration for opening detail pages."""

    cookies_path: str = "config/site_cookies.json"
    timeout_ms: int = Field(default=30000, ge=1000)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    widget: WidgetConfig = Field(default_factory=WidgetConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls.model_validate(raw)
