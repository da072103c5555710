"""
Data models for the workout tracker.
A workout is a shared record plus a running or cycling payload, selected by its type tag.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple, Union
import time

from ..metrics.workout_metrics import calc_pace, calc_speed

Coords = Tuple[float, float]


class WorkoutType(str, Enum):
    """Discriminant of the workout variants."""
    RUNNING = "running"
    CYCLING = "cycling"


@dataclass(frozen=True)
class RunningDetails:
    """Running payload: cadence and the pace derived at construction."""
    cadence_spm: int
    pace_min_per_km: float


@dataclass(frozen=True)
class CyclingDetails:
    """Cycling payload: elevation gain and the speed derived at construction."""
    elevation_gain_m: float
    speed_km_per_h: float


WorkoutDetails = Union[RunningDetails, CyclingDetails]


@dataclass(frozen=True)
class Workout:
    """A geotagged exercise session. Immutable once created."""
    id: str
    created_at: datetime
    coords: Coords
    distance_km: float
    duration_min: float
    type: WorkoutType
    details: WorkoutDetails

    @property
    def is_running(self) -> bool:
        return self.type == WorkoutType.RUNNING

    @property
    def is_cycling(self) -> bool:
        return self.type == WorkoutType.CYCLING

    def restored(self, created_at: datetime, workout_id: Optional[str] = None) -> "Workout":
        """Return a copy carrying a previously stored creation time (and id)."""
        return replace(
            self,
            created_at=created_at,
            id=self.id if workout_id is None else workout_id,
        )


def current_timestamp_ms() -> int:
    """Milliseconds since the epoch, the clock workout ids are cut from."""
    return int(time.time() * 1000)


def create_workout_id(timestamp_ms: int) -> str:
    """Create a workout ID from the last 10 digits of a millisecond timestamp.

    Two workouts created within the same millisecond get the same ID.
    """
    return str(timestamp_ms)[-10:]


def _stamp(timestamp_ms: Optional[int]) -> Tuple[str, datetime]:
    if timestamp_ms is None:
        timestamp_ms = current_timestamp_ms()
    created_at = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return create_workout_id(timestamp_ms), created_at


def _coords(coords) -> Coords:
    lat, lng = coords
    return (float(lat), float(lng))


def create_running(coords, distance_km: float, duration_min: float, cadence_spm: int,
                   timestamp_ms: Optional[int] = None) -> Workout:
    """Create a running workout with its pace already computed."""
    workout_id, created_at = _stamp(timestamp_ms)
    return Workout(
        id=workout_id,
        created_at=created_at,
        coords=_coords(coords),
        distance_km=distance_km,
        duration_min=duration_min,
        type=WorkoutType.RUNNING,
        details=RunningDetails(
            cadence_spm=cadence_spm,
            pace_min_per_km=calc_pace(distance_km, duration_min),
        ),
    )


def create_cycling(coords, distance_km: float, duration_min: float, elevation_gain_m: float,
                   timestamp_ms: Optional[int] = None) -> Workout:
    """Create a cycling workout with its speed already computed."""
    workout_id, created_at = _stamp(timestamp_ms)
    return Workout(
        id=workout_id,
        created_at=created_at,
        coords=_coords(coords),
        distance_km=distance_km,
        duration_min=duration_min,
        type=WorkoutType.CYCLING,
        details=CyclingDetails(
            elevation_gain_m=elevation_gain_m,
            speed_km_per_h=calc_speed(distance_km, duration_min),
        ),
    )


def create_workout(workout_type, coords, distance_km: float, duration_min: float,
                   type_param: float, timestamp_ms: Optional[int] = None) -> Workout:
    """
    Create the workout variant named by the type tag.

    Args:
        workout_type: "running" or "cycling" (or a WorkoutType member)
        coords: (latitude, longitude)
        distance_km: Distance covered
        duration_min: Time taken
        type_param: Cadence (spm) for running, elevation gain (m) for cycling
        timestamp_ms: Creation time in epoch milliseconds, defaults to now

    Returns:
        Fully formed Workout
    """
    workout_type = WorkoutType(workout_type)
    if workout_type == WorkoutType.RUNNING:
        return create_running(coords, distance_km, duration_min, type_param, timestamp_ms)
    return create_cycling(coords, distance_km, duration_min, type_param, timestamp_ms)
