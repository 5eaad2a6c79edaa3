"""
Run configuration.

Built once when a spider is created (``ReconConfig.from_settings``) and handed
to the extractors, the normalizer and the pipelines. Nothing else reads the
Scrapy settings directly.
"""
from __future__ import annotations

from datetime import date, datetime

from dateutil import parser as dp
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from reconocedor import settings as defaults


class ReconConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str = defaults.RECO_BASE_URL
    output_file: str = defaults.RECO_OUTPUT_FILE
    request_delay: float = Field(default=defaults.DOWNLOAD_DELAY, ge=0)
    markup_rate: float = Field(default=defaults.RECO_MARKUP_RATE, ge=0)
    user_agent: str = defaults.USER_AGENT
    start_date: date = date.fromisoformat(defaults.RECO_START_DATE)
    end_date: date = date.fromisoformat(defaults.RECO_END_DATE)
    render_settle_ms: int = Field(default=defaults.RECO_RENDER_SETTLE_MS, ge=0)
    source: str = defaults.RECO_SOURCE

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_date(cls, v):
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str):
            return dp.parse(v.strip()).date()
        return v

    @field_validator("base_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        v = (v or "").strip().rstrip("/")
        if not v:
            raise ValueError("base_url missing")
        return v

    @model_validator(mode="after")
    def _bounds_in_order(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date is before start_date")
        return self

    @classmethod
    def from_settings(cls, settings, **overrides) -> "ReconConfig":
        """Read RECO_* options (plus DOWNLOAD_DELAY and USER_AGENT) from Scrapy settings."""
        values = {
            "base_url": settings.get("RECO_BASE_URL", defaults.RECO_BASE_URL),
            "output_file": settings.get("RECO_OUTPUT_FILE", defaults.RECO_OUTPUT_FILE),
            "request_delay": settings.getfloat("DOWNLOAD_DELAY", defaults.DOWNLOAD_DELAY),
            "markup_rate": settings.getfloat("RECO_MARKUP_RATE", defaults.RECO_MARKUP_RATE),
            "user_agent": settings.get("USER_AGENT") or defaults.USER_AGENT,
            "start_date": settings.get("RECO_START_DATE", defaults.RECO_START_DATE),
            "end_date": settings.get("RECO_END_DATE", defaults.RECO_END_DATE),
            "render_settle_ms": settings.getint("RECO_RENDER_SETTLE_MS", defaults.RECO_RENDER_SETTLE_MS),
            "source": settings.get("RECO_SOURCE", defaults.RECO_SOURCE),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
