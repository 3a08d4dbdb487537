"""Configuration module for the tax document engine."""

from .settings import (
    ExtractionSettings,
    LoggingSettings,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "ExtractionSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
    "reset_settings",
]
