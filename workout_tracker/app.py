"""Dash app factory and session wiring for the workout tracker."""

import logging
from typing import Optional

from dash import Dash

from .core.geolocation import BrowserGeolocator, StaticGeolocator
from .frontend.components.alerts import AlertState
from .frontend.components.workout_form import WorkoutFormState
from .frontend.components.workout_map import PlotlyMapView
from .frontend.main_dashboard import WorkoutDashboard
from .frontend.presenter import WorkoutPresenter
from .main import WorkoutTracker
from .storage.codec import WorkoutCodec
from .storage.local_store import LocalStorage
from .utils.config import TrackerConfig, get_config

logger = logging.getLogger(__name__)


def setup_workout_tracker(geolocator, store=None, data_dir: Optional[str] = None,
                          config: Optional[TrackerConfig] = None, clock=None) -> WorkoutTracker:
    """Build a WorkoutTracker wired to the dashboard's view-state objects.

    Args:
        geolocator: Source of the one-shot location request
        store: Key/value store; defaults to a LocalStorage in the data directory
        data_dir: Overrides the configured data directory
        config: Configuration, defaults to the global one
        clock: Millisecond clock for workout timestamps

    Returns:
        WorkoutTracker: Not yet started.
    """
    config = config or get_config()
    config.validate_configuration()

    if store is None:
        store = LocalStorage(data_dir or config.storage.data_dir)

    kwargs = {} if clock is None else {'clock': clock}
    return WorkoutTracker(
        codec=WorkoutCodec(store, config.storage.storage_key),
        geolocator=geolocator,
        map_view=PlotlyMapView(),
        form=WorkoutFormState(),
        presenter=WorkoutPresenter(),
        notifier=AlertState(),
        config=config,
        **kwargs
    )


def create_headless_tracker(coords=None, store=None, data_dir: Optional[str] = None,
                            config: Optional[TrackerConfig] = None) -> WorkoutTracker:
    """Start a session located at fixed coordinates (or the configured fallback)."""
    config = config or get_config()
    if coords is None:
        coords = config.get_fallback_position()
    tracker = setup_workout_tracker(StaticGeolocator(coords), store=store,
                                    data_dir=data_dir, config=config)
    tracker.start()
    return tracker


def create_app(config: Optional[TrackerConfig] = None, store=None,
               data_dir: Optional[str] = None) -> Dash:
    """Create and configure the Dash application instance.

    Returns:
        Dash: Configured Dash application.
    """
    geolocator = BrowserGeolocator()
    tracker = setup_workout_tracker(geolocator, store=store, data_dir=data_dir, config=config)
    tracker.start()

    dashboard = WorkoutDashboard(tracker, geolocator)
    return dashboard.get_app()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    _config = get_config().load_from_env()
    _app = create_app(_config)
    _app.run(debug=_config.server.debug, host=_config.server.host, port=_config.server.port)
