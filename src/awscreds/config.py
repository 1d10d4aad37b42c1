import logging
import os
from datetime import timedelta
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# 55 minutes, safely shorter than hourly-rotating tokens.
DEFAULT_REFRESH_PERIOD_SECONDS = 55 * 60


class Settings(BaseSettings):
    refresh_period_seconds: float = DEFAULT_REFRESH_PERIOD_SECONDS
    sts_regional_endpoints: str = "regional"
    aws_region: Optional[str] = Field(
        None, validation_alias=AliasChoices("aws_region", "AWS_REGION"))

    model_config = SettingsConfigDict(
        env_prefix="AWSCREDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore"
    )

    @field_validator("refresh_period_seconds")
    @classmethod
    def _positive_period(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("refresh_period_seconds must be positive")
        return value

    @field_validator("sts_regional_endpoints")
    @classmethod
    def _known_endpoint_mode(cls, value: str) -> str:
        if value not in ("regional", "legacy"):
            raise ValueError("sts_regional_endpoints must be 'regional' or 'legacy'")
        return value


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Load settings from the environment, overlaid with an optional YAML file.

    The YAML file is taken from ``path`` or the AWSCREDS_CONFIG environment
    variable. Values found in the file take precedence over the environment.
    """
    config_path = path or os.getenv("AWSCREDS_CONFIG")
    data: Dict[str, Any] = {}
    if config_path:
        with open(config_path, "r") as file:
            data = yaml.safe_load(file) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{config_path} must contain a mapping of settings")
    return Settings(**data)


class RefreshConfig(BaseModel):
    """Per-instance refresh policy: the tick period and the diagnostics sink."""

    period: timedelta = timedelta(seconds=DEFAULT_REFRESH_PERIOD_SECONDS)
    logger: logging.Logger = Field(default_factory=lambda: logging.getLogger("awscreds"))

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @field_validator("period")
    @classmethod
    def _positive_period(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("period must be positive")
        return value

    @property
    def period_seconds(self) -> float:
        return self.period.total_seconds()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        period: Union[timedelta, float, None] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "RefreshConfig":
        """Build a policy from settings; explicit arguments win over settings."""
        if period is None:
            settings = settings or load_settings()
            period = timedelta(seconds=settings.refresh_period_seconds)
        elif not isinstance(period, timedelta):
            period = timedelta(seconds=period)

        values: Dict[str, Any] = {"period": period}
        if logger is not None:
            values["logger"] = logger
        return cls(**values)
