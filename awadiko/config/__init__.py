"""
Configuration package for the AwaDiko dictionary backend.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    DatabaseSettings,
    RedisSettings,
    SecuritySettings,
    DictionarySettings,
    settings,
    get_settings,
    reload_settings,
    build_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "DatabaseSettings",
    "RedisSettings",
    "SecuritySettings",
    "DictionarySettings",
    "settings",
    "get_settings",
    "reload_settings",
    "build_settings",
]
