"""
Persistence codec for the workout list.
The whole ordered list is written as one JSON array under a single key.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
import json
import logging
import math
import numbers

from .data_models import (
    Workout,
    WorkoutType,
    RunningDetails,
    CyclingDetails,
    create_running,
    create_cycling,
)
from ..utils.config import get_config

logger = logging.getLogger(__name__)


class DecodeErrorKind(str, Enum):
    NOT_A_RECORD = "not_a_record"
    UNKNOWN_TYPE = "unknown_type"
    MISSING_FIELD = "missing_field"
    INVALID_FIELD = "invalid_field"


class DecodeError(ValueError):
    """A stored entry that cannot be turned back into a workout."""

    def __init__(self, kind: DecodeErrorKind, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.kind = DecodeErrorKind(kind)
        self.field = field


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing 'Z'."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(text: str) -> datetime:
    """Parse the timestamps written by format_timestamp (and naive ISO strings as UTC)."""
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def encode_workout(workout: Workout) -> Dict[str, Any]:
    """Convert a workout to its stored record."""
    record: Dict[str, Any] = {
        'type': workout.type.value,
        'coords': [workout.coords[0], workout.coords[1]],
        'distance': workout.distance_km,
        'duration': workout.duration_min,
        'date': format_timestamp(workout.created_at),
        'id': workout.id,
    }
    details = workout.details
    if isinstance(details, RunningDetails):
        record['cadence'] = details.cadence_spm
        record['pace'] = details.pace_min_per_km
    elif isinstance(details, CyclingDetails):
        record['elevationGain'] = details.elevation_gain_m
        record['speed'] = details.speed_km_per_h
    return record


def encode_workouts(workouts: List[Workout]) -> str:
    """Serialize the full ordered list."""
    return json.dumps([encode_workout(w) for w in workouts])


def _require(entry: Dict[str, Any], name: str) -> Any:
    if name not in entry or entry[name] is None:
        raise DecodeError(DecodeErrorKind.MISSING_FIELD, f"Stored workout is missing '{name}'", name)
    return entry[name]


def _finite(value: Any) -> bool:
    """True for real numbers that fit in a float and are not inf or NaN."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def _number(entry: Dict[str, Any], name: str, positive: bool = False) -> float:
    value = _require(entry, name)
    if not _finite(value):
        raise DecodeError(DecodeErrorKind.INVALID_FIELD, f"'{name}' must be a finite number, got {value!r}", name)
    if positive and value <= 0:
        raise DecodeError(DecodeErrorKind.INVALID_FIELD, f"'{name}' must be positive, got {value!r}", name)
    return value


def decode_workout(entry: Any) -> Workout:
    """
    Rebuild one workout from its stored record.

    The variant is constructed afresh, so the derived metric is recomputed from the
    raw fields; the stored creation time and id are then restored.

    Raises:
        DecodeError: When the record is malformed or carries an unknown type
    """
    if not isinstance(entry, dict):
        raise DecodeError(DecodeErrorKind.NOT_A_RECORD, f"Stored workout is not an object: {entry!r}")

    raw_type = _require(entry, 'type')
    try:
        workout_type = WorkoutType(raw_type)
    except ValueError:
        raise DecodeError(DecodeErrorKind.UNKNOWN_TYPE, f"Unknown workout type: {raw_type!r}", 'type')

    coords = _require(entry, 'coords')
    if not isinstance(coords, (list, tuple)) or len(coords) != 2:
        raise DecodeError(DecodeErrorKind.INVALID_FIELD, f"'coords' must be [lat, lng], got {coords!r}", 'coords')
    if not all(_finite(part) for part in coords):
        raise DecodeError(DecodeErrorKind.INVALID_FIELD, f"'coords' must hold finite numbers, got {coords!r}", 'coords')

    distance = _number(entry, 'distance', positive=True)
    duration = _number(entry, 'duration', positive=True)

    raw_date = _require(entry, 'date')
    try:
        created_at = parse_timestamp(str(raw_date))
    except ValueError:
        raise DecodeError(DecodeErrorKind.INVALID_FIELD, f"'date' is not an ISO-8601 timestamp: {raw_date!r}", 'date')

    stored_id = entry.get('id')

    if workout_type == WorkoutType.RUNNING:
        cadence = _number(entry, 'cadence', positive=True)
        if not float(cadence).is_integer():
            raise DecodeError(DecodeErrorKind.INVALID_FIELD,
                              f"'cadence' must be a whole number, got {cadence!r}", 'cadence')
        workout = create_running(coords, distance, duration, int(cadence))
    else:
        elevation = _number(entry, 'elevationGain')
        workout = create_cycling(coords, distance, duration, elevation)

    return workout.restored(created_at, None if stored_id is None else str(stored_id))


def decode_workouts(blob: Optional[str]) -> List[Workout]:
    """
    Decode a stored blob.

    Absent or unparseable blobs give an empty list. Entries that fail to decode
    are skipped with a warning; the rest keep their stored order.
    """
    if blob is None:
        return []

    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        logger.debug(f"Ignoring unparseable workout data: {e}")
        return []

    if not isinstance(data, list):
        logger.debug(f"Ignoring workout data that is not a list: {type(data).__name__}")
        return []

    workouts: List[Workout] = []
    for index, entry in enumerate(data):
        try:
            workouts.append(decode_workout(entry))
        except DecodeError as e:
            logger.warning(f"Skipping stored workout #{index} ({e.kind.value}): {e}")
    return workouts


class WorkoutCodec:
    """
    Saves and loads the workout list through a key/value store.
    """

    def __init__(self, store, key: Optional[str] = None, large_history_warning: Optional[int] = None):
        self.config = get_config()
        self.store = store
        self.key = key or self.config.storage.storage_key
        self.large_history_warning = (
            self.config.storage.large_history_warning
            if large_history_warning is None else large_history_warning
        )
        self._warned_large_history = False

    def save(self, workouts: List[Workout]) -> bool:
        """Rewrite the stored list with every workout. Returns True on success."""
        # Every save re-serializes the full history
        if (self.large_history_warning and len(workouts) >= self.large_history_warning
                and not self._warned_large_history):
            logger.warning(
                f"Workout history has {len(workouts)} entries; each save rewrites all of them"
            )
            self._warned_large_history = True

        stored = self.store.set_item(self.key, encode_workouts(workouts))
        if stored:
            logger.debug(f"Saved {len(workouts)} workouts under '{self.key}'")
        else:
            logger.error(f"Failed to save {len(workouts)} workouts under '{self.key}'")
        return stored

    def load(self) -> List[Workout]:
        """Load the stored list, or an empty list when nothing usable is stored."""
        workouts = decode_workouts(self.store.get_item(self.key))
        logger.info(f"Loaded {len(workouts)} stored workouts")
        return workouts

    def clear(self) -> bool:
        """Remove the stored list."""
        return self.store.remove_item(self.key)
