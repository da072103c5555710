"""Utility modules for configuration."""

from .config import (
    TrackerConfig,
    MapSettings,
    StorageSettings,
    GeolocationSettings,
    ServerSettings,
    get_config,
    reset_config
)

__all__ = [
    "TrackerConfig",
    "MapSettings",
    "StorageSettings",
    "GeolocationSettings",
    "ServerSettings",
    "get_config",
    "reset_config"
]
