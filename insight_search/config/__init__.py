"""Configuration and logging."""

from insight_search.config.logging_config import configure_logging
from insight_search.config.settings import SUPPORTED_MODELS, Settings, get_settings

__all__ = ["Settings", "SUPPORTED_MODELS", "get_settings", "configure_logging"]
