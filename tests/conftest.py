import itertools

import pytest

from workout_tracker.app import setup_workout_tracker
from workout_tracker.core.geolocation import BrowserGeolocator, StaticGeolocator
from workout_tracker.storage.codec import WorkoutCodec
from workout_tracker.storage.local_store import MemoryStorage
from workout_tracker.utils.config import reset_config

# 2024-03-14T12:00:00.000Z
BASE_TIMESTAMP_MS = 1710417600000


@pytest.fixture(autouse=True)
def fresh_config(tmp_path):
    config = reset_config()
    config.update_storage_settings(data_dir=str(tmp_path / "workout_data"))
    yield config
    reset_config()


@pytest.fixture
def clock():
    """Millisecond clock that advances by one second per call."""
    ticks = itertools.count(BASE_TIMESTAMP_MS, 1000)
    return lambda: next(ticks)


@pytest.fixture
def store():
    return MemoryStorage()


@pytest.fixture
def codec(store):
    return WorkoutCodec(store)


@pytest.fixture
def make_tracker(store, clock, fresh_config):
    """Build a tracker around the shared in-memory store."""
    def _make(coords=(51.5, -0.1), geolocator=None):
        if geolocator is None:
            geolocator = StaticGeolocator(coords)
        return setup_workout_tracker(geolocator, store=store, config=fresh_config, clock=clock)
    return _make


@pytest.fixture
def tracker(make_tracker):
    t = make_tracker()
    t.start()
    return t


@pytest.fixture
def browser_tracker(make_tracker):
    geolocator = BrowserGeolocator()
    t = make_tracker(geolocator=geolocator)
    t.start()
    return t, geolocator
