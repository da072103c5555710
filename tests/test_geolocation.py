import pytest

from workout_tracker.core.geolocation import (
    BrowserGeolocator,
    LocationError,
    LocationRequest,
    Position,
    StaticGeolocator,
)


class _Recorder:
    def __init__(self):
        self.successes = []
        self.errors = []

    def attach(self, request):
        request.then(self.successes.append, self.errors.append)


def test_consumer_runs_once_on_resolve():
    request = LocationRequest()
    recorder = _Recorder()
    recorder.attach(request)

    assert request.resolve(Position(1.0, 2.0))
    assert not request.resolve(Position(3.0, 4.0))
    assert not request.reject(LocationError(LocationError.TIMEOUT, "late"))

    assert recorder.successes == [Position(1.0, 2.0)]
    assert recorder.errors == []
    assert request.done


def test_consumer_attached_after_settle_runs_immediately():
    request = LocationRequest()
    request.reject(LocationError(LocationError.PERMISSION_DENIED, "denied"))
    recorder = _Recorder()
    recorder.attach(request)
    assert recorder.errors == [LocationError(1, "denied")]


def test_second_consumer_rejected():
    request = LocationRequest()
    _Recorder().attach(request)
    with pytest.raises(RuntimeError):
        _Recorder().attach(request)


def test_static_geolocator():
    recorder = _Recorder()
    recorder.attach(StaticGeolocator((51.5, -0.1)).request_position())
    assert recorder.successes[0].coords == (51.5, -0.1)

    recorder = _Recorder()
    recorder.attach(StaticGeolocator().request_position())
    assert recorder.errors[0].code == LocationError.POSITION_UNAVAILABLE


def test_browser_geolocator_delivers_reading():
    geolocator = BrowserGeolocator()
    assert not geolocator.deliver({'lat': 1, 'lon': 2})

    recorder = _Recorder()
    recorder.attach(geolocator.request_position())
    assert geolocator.deliver({'lat': 48.8, 'lon': 2.3, 'accuracy': 12})
    assert recorder.successes == [Position(48.8, 2.3, 12.0)]
    # Later readings do not settle the request again
    assert not geolocator.deliver({'lat': 0, 'lon': 0})


def test_browser_geolocator_failure_and_bad_reading():
    geolocator = BrowserGeolocator()
    recorder = _Recorder()
    recorder.attach(geolocator.request_position())
    assert geolocator.fail({'code': 1, 'message': 'User denied Geolocation'})
    assert recorder.errors == [LocationError(1, 'User denied Geolocation')]

    recorder = _Recorder()
    recorder.attach(geolocator.request_position())
    geolocator.deliver({'lat': 'north'})
    assert recorder.errors[0].code == LocationError.POSITION_UNAVAILABLE
    assert "Unusable location reading" in recorder.errors[0].message
