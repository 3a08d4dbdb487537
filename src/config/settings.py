"""Engine settings using Pydantic Settings.

Centralized configuration for the document classification and tax
computation engine. Every value can be overridden from the environment
(or a local .env file) using the prefix of its settings class:

- TAX_ENGINE_*: tax year, default filing status, tax table directory
- EXTRACTION_*: confidence thresholds applied to OCR output
- LOG_*: logging level and format
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ExtractionSettings(BaseSettings):
    """Thresholds for trusting OCR documents and fields."""

    model_config = SettingsConfigDict(
        env_prefix="EXTRACTION_",
        extra="ignore",
    )

    min_document_confidence: float = Field(
        default=0.1, ge=0.0, le=1.0,
        description="Documents below this confidence are skipped entirely"
    )
    min_field_confidence: float = Field(
        default=0.3, ge=0.0, le=1.0,
        description="Fields below this confidence are discarded"
    )
    default_box_confidence: float = Field(
        default=0.8, ge=0.0, le=1.0,
        description="Confidence assumed for transaction-array boxes that carry none"
    )

    @model_validator(mode="after")
    def _document_threshold_not_above_field_threshold(self):
        if self.min_document_confidence > self.min_field_confidence:
            logger.warning(
                f"min_document_confidence ({self.min_document_confidence}) exceeds "
                f"min_field_confidence ({self.min_field_confidence}); "
                "documents will be dropped before their fields are considered"
            )
        return self


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        extra="ignore",
    )

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(default=False, description="Emit JSON log records")
    file: Optional[Path] = Field(default=None, description="Optional JSON log file")

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(_LOG_LEVELS)}")
        return upper


class Settings(BaseSettings):
    """Main engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="TAX_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    name: str = Field(default="Tax Document Engine", description="Application name")
    environment: str = Field(default="development", description="Environment name")

    tax_year: int = Field(default=2025, description="Tax year of the federal and state tables")
    default_filing_status: str = Field(
        default="single",
        description="Filing status used when the caller supplies none"
    )
    tax_parameters_dir: Optional[Path] = Field(
        default=None,
        description="Directory holding tax_year_{year}.yaml table files"
    )

    @field_validator("tax_year")
    @classmethod
    def _plausible_tax_year(cls, value: int) -> int:
        if value < 2000 or value > 2100:
            raise ValueError("tax_year must be between 2000 and 2100")
        return value

    # Nested settings (loaded separately)
    @property
    def extraction(self) -> ExtractionSettings:
        return ExtractionSettings()

    @property
    def log(self) -> LoggingSettings:
        return LoggingSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached engine settings instance.

    Returns:
        Settings: Cached settings loaded from environment.
    """
    return Settings()


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
