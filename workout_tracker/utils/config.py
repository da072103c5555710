"""
Configuration module for the workout tracker.
Groups map, storage, geolocation and server settings behind one object.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, Mapping
import os

ENV_PREFIX = "WORKOUT_TRACKER_"

@dataclass
class MapSettings:
    """Map view configuration."""
    zoom_level: int = 13  # Zoom used for the initial view and for panning to a workout
    pan_duration_s: float = 1.0  # Duration of the animated pan
    tile_style: str = "open-street-map"  # Tiles that need no access token
    click_resolution_px: int = 8  # On-screen spacing of the transparent click surface
    click_surface_px: int = 1024  # Width of the area the click surface covers
    height_px: int = 560
    home_caption: str = "Current location"

@dataclass
class StorageSettings:
    """Data storage configuration."""
    data_dir: str = "workout_data"  # Directory holding the key/value files
    storage_key: str = "workouts"  # Key under which the workout list is stored
    backup_enabled: bool = True  # Keep copies of previous blobs
    max_backup_files: int = 10  # Maximum backup files to keep per key
    large_history_warning: int = 500  # Warn once the full-list rewrite gets this big

@dataclass
class GeolocationSettings:
    """Location sensor configuration."""
    high_accuracy: bool = False
    fallback_latitude: Optional[float] = None  # Used by headless sessions only
    fallback_longitude: Optional[float] = None

@dataclass
class ServerSettings:
    """Dash server configuration."""
    host: str = "127.0.0.1"
    port: int = 8050
    debug: bool = False

class TrackerConfig:
    """Main configuration class for the workout tracker."""

    def __init__(self):
        self.map = MapSettings()
        self.storage = StorageSettings()
        self.geolocation = GeolocationSettings()
        self.server = ServerSettings()
        self._user_inputs: Dict[str, Any] = {}

    def _update(self, section_name: str, **kwargs):
        section = getattr(self, section_name)
        for key, value in kwargs.items():
            if hasattr(section, key):
                setattr(section, key, value)
                self._user_inputs[f'{section_name}_{key}'] = value
            else:
                raise ValueError(f"Unknown {section_name} setting: {key}")

    def update_map_settings(self, **kwargs):
        """Update map settings dynamically."""
        self._update('map', **kwargs)

    def update_storage_settings(self, **kwargs):
        """Update storage settings dynamically."""
        self._update('storage', **kwargs)

    def update_geolocation_settings(self, **kwargs):
        """Update geolocation settings dynamically."""
        self._update('geolocation', **kwargs)

    def update_server_settings(self, **kwargs):
        """Update server settings dynamically."""
        self._update('server', **kwargs)

    def load_from_env(self, environ: Optional[Mapping[str, str]] = None) -> "TrackerConfig":
        """
        Apply overrides from environment variables.

        Recognized variables: WORKOUT_TRACKER_DATA_DIR, WORKOUT_TRACKER_STORAGE_KEY,
        WORKOUT_TRACKER_HOST and WORKOUT_TRACKER_PORT.
        """
        environ = os.environ if environ is None else environ

        if environ.get(ENV_PREFIX + "DATA_DIR"):
            self.update_storage_settings(data_dir=environ[ENV_PREFIX + "DATA_DIR"])
        if environ.get(ENV_PREFIX + "STORAGE_KEY"):
            self.update_storage_settings(storage_key=environ[ENV_PREFIX + "STORAGE_KEY"])
        if environ.get(ENV_PREFIX + "HOST"):
            self.update_server_settings(host=environ[ENV_PREFIX + "HOST"])
        if environ.get(ENV_PREFIX + "PORT"):
            try:
                port = int(environ[ENV_PREFIX + "PORT"])
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}PORT must be an integer, got {environ[ENV_PREFIX + 'PORT']!r}")
            self.update_server_settings(port=port)
        return self

    def get_fallback_position(self) -> Optional[tuple]:
        """Return the configured fallback coordinate, if both parts are set."""
        lat = self.geolocation.fallback_latitude
        lng = self.geolocation.fallback_longitude
        if lat is None or lng is None:
            return None
        return (float(lat), float(lng))

    def get_summary(self) -> Dict[str, Any]:
        """Get configuration summary."""
        return {
            'map': asdict(self.map),
            'storage': asdict(self.storage),
            'geolocation': asdict(self.geolocation),
            'server': asdict(self.server),
            'user_inputs': self._user_inputs
        }

    def validate_configuration(self) -> bool:
        """Validate that settings are usable."""
        errors = []

        if not 0 <= self.map.zoom_level <= 22:
            errors.append("Map zoom level must be between 0 and 22")

        if self.map.click_resolution_px < 1:
            errors.append("Click resolution must be at least 1 pixel")

        if self.map.click_surface_px < self.map.click_resolution_px:
            errors.append("Click surface must be wider than the click resolution")

        if not self.storage.storage_key:
            errors.append("Storage key must not be empty")

        if self.storage.max_backup_files < 0:
            errors.append("Maximum backup files cannot be negative")

        if not 0 < self.server.port < 65536:
            errors.append("Server port must be between 1 and 65535")

        if errors:
            raise ValueError(f"Configuration errors: {'; '.join(errors)}")

        return True

# Global configuration instance
config = TrackerConfig()

def get_config() -> TrackerConfig:
    """Get the global configuration instance."""
    return config

def reset_config() -> TrackerConfig:
    """Reset configuration to defaults."""
    global config
    config = TrackerConfig()
    return config
