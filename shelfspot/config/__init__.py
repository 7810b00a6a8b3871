"""
==============================================================================
Configuration Package
==============================================================================

Centralized configuration management using Pydantic Settings.

Usage:
------
    from shelfspot.config import get_settings

    settings = get_settings()
    print(settings.catalog_backend)
    print(settings.resolved_database_url)

==============================================================================
"""

from .settings import ConfigurationError, Settings, get_settings

__all__ = [
    "ConfigurationError",
    "Settings",
    "get_settings",
]
