"""
Configuration settings for the chart engine using Pydantic.

All settings can be configured via environment variables with CHART_ENGINE_
prefix.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors import InvalidTimeZoneError
from ..transform.alignment import resolve_time_zone
from ..types.common import AggregationType, MassUnit, TimeUnit


class EngineSettings(BaseSettings):
    """Defaults for chart transformations and logging"""

    # Service metadata
    service_name: str = "chart-engine"
    version: str = "0.1.0"

    # Transformation defaults
    default_time_zone: str = "UTC"
    default_time_unit: TimeUnit = TimeUnit.DAY
    default_aggregation: AggregationType = AggregationType.SUM
    fill_gaps: bool = False
    fill_value: float = 0.0
    default_mass_unit: MassUnit = MassUnit.KILOGRAM

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CHART_ENGINE_",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("default_time_zone")
    @classmethod
    def validate_time_zone(cls, v: str) -> str:
        """Validate the zone identifier resolves."""
        try:
            resolve_time_zone(v)
        except InvalidTimeZoneError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["json", "console"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()


@lru_cache()
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
