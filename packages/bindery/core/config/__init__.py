"""Configuration models and loaders."""

from bindery.core.config.loader import detect_format, load_app_config, load_config
from bindery.core.config.models import (
    AppConfig,
    CacheConfig,
    LLMConfig,
    LoggingConfig,
    ResolutionSettings,
)

__all__ = [
    "AppConfig",
    "CacheConfig",
    "LLMConfig",
    "LoggingConfig",
    "ResolutionSettings",
    "detect_format",
    "load_app_config",
    "load_config",
]
