"""
One-shot location requests.

A LocationRequest ends in exactly one of two outcomes, a Position or a
LocationError, and hands that outcome to a single consumer. There is no
timeout, retry or cancellation.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float
    accuracy_m: Optional[float] = None

    @property
    def coords(self):
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class LocationError:
    code: int
    message: str

    # Codes follow the browser geolocation API
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


Outcome = Union[Position, LocationError]


class LocationRequest:
    """A pending location lookup with a single consumer."""

    def __init__(self):
        self._outcome: Optional[Outcome] = None
        self._on_success: Optional[Callable[[Position], Any]] = None
        self._on_error: Optional[Callable[[LocationError], Any]] = None
        self._consumed = False

    @property
    def done(self) -> bool:
        return self._outcome is not None

    @property
    def outcome(self) -> Optional[Outcome]:
        return self._outcome

    def then(self, on_success: Callable[[Position], Any],
             on_error: Callable[[LocationError], Any]) -> None:
        """Attach the consumer. It runs at once if the outcome is already known."""
        if self._on_success is not None:
            raise RuntimeError("LocationRequest already has a consumer")
        self._on_success = on_success
        self._on_error = on_error
        self._deliver()

    def resolve(self, position: Position) -> bool:
        """Settle with a position. Returns False if already settled."""
        return self._settle(position)

    def reject(self, error: LocationError) -> bool:
        """Settle with an error. Returns False if already settled."""
        return self._settle(error)

    def _settle(self, outcome: Outcome) -> bool:
        if self._outcome is not None:
            logger.debug(f"Ignoring extra location outcome: {outcome}")
            return False
        self._outcome = outcome
        self._deliver()
        return True

    def _deliver(self):
        if self._consumed or self._outcome is None or self._on_success is None:
            return
        self._consumed = True
        if isinstance(self._outcome, Position):
            self._on_success(self._outcome)
        else:
            self._on_error(self._outcome)


class StaticGeolocator:
    """
    Answers every request immediately with a fixed coordinate.

    With no coordinate configured, requests fail with POSITION_UNAVAILABLE.
    """

    def __init__(self, coords=None):
        self.position = Position(float(coords[0]), float(coords[1])) if coords is not None else None

    def request_position(self) -> LocationRequest:
        request = LocationRequest()
        if self.position is not None:
            request.resolve(self.position)
        else:
            request.reject(LocationError(LocationError.POSITION_UNAVAILABLE, "No location configured"))
        return request


class BrowserGeolocator:
    """
    Requests settled later by the browser's geolocation sensor.

    The web front end forwards the sensor's reading through deliver() or fail().
    """

    def __init__(self):
        self.pending: Optional[LocationRequest] = None

    def request_position(self) -> LocationRequest:
        self.pending = LocationRequest()
        return self.pending

    def deliver(self, reading: Dict[str, Any]) -> bool:
        """Settle the pending request from a sensor reading ({'lat', 'lon', 'accuracy'})."""
        if self.pending is None:
            return False
        try:
            position = Position(
                latitude=float(reading['lat']),
                longitude=float(reading['lon']),
                accuracy_m=float(reading['accuracy']) if reading.get('accuracy') is not None else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            return self.fail({'code': LocationError.POSITION_UNAVAILABLE,
                              'message': f"Unusable location reading: {e}"})
        return self.pending.resolve(position)

    def fail(self, error: Optional[Dict[str, Any]]) -> bool:
        """Settle the pending request with a sensor error ({'code', 'message'})."""
        if self.pending is None:
            return False
        error = error or {}
        return self.pending.reject(LocationError(
            code=int(error.get('code') or LocationError.POSITION_UNAVAILABLE),
            message=str(error.get('message') or "Location unavailable"),
        ))
