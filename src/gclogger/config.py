"""
Logging Configuration.

Usage:
    from gclogger.config import get_settings

    settings = get_settings()
    settings.level          # Level.INFO
    settings.backend        # "default"
"""

from __future__ import annotations

import os
from enum import Enum
from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .levels import Level

Backend = Literal["default", "gcloud", "structured"]


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class LoggingSettings(BaseSettings):
    """Logging facade configuration. Prefix: GCLOG_"""

    model_config = SettingsConfigDict(
        env_prefix="GCLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: Level = Field(default=Level.INFO, description="Threshold for loggers created by the factory")
    backend: Backend = Field(default="default", description="Transport: default, gcloud or structured")
    project_id: Optional[str] = Field(default=None, description="GCP project; falls back to GOOGLE_CLOUD_PROJECT")
    log_name: str = Field(default="app", description="Default Cloud Logging log name")
    component: str = Field(default="", description="Value of jsonPayload.component")
    sinks: str = Field(default="stdio", description="Comma-separated local sink names")
    format: LogFormat = Field(default=LogFormat.CONSOLE, description="Local sink output format")
    fatal_on_client_error: bool = Field(
        default=True,
        description="Exit the process when a Cloud Logging client cannot be created",
    )

    @model_validator(mode="before")
    @classmethod
    def _default_project(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("project_id"):
            ambient = os.getenv("GOOGLE_CLOUD_PROJECT")
            if ambient:
                data = {**data, "project_id": ambient}
        return data

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: object) -> object:
        if isinstance(value, str):
            return Level.parse(value)
        return value


@lru_cache(maxsize=1)
def get_settings() -> LoggingSettings:
    return LoggingSettings()
