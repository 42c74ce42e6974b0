"""Configuration management for CDC Schema Hub.

Usage:
    >>> from cdc_schema_hub.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.schema_registry_url)
"""

from cdc_schema_hub.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
