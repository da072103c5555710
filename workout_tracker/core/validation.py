"""
Form input coercion and validation.
"""
from dataclasses import dataclass
from typing import Any, Optional
import math

from ..storage.data_models import WorkoutType

INVALID_INPUT_MESSAGE = "Inputs must be positive numbers."


class WorkoutValidationError(ValueError):
    """Form input that cannot become a workout."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


@dataclass
class FormInput:
    """Raw values as typed into the form."""
    workout_type: Any = WorkoutType.RUNNING.value
    distance: Any = ""
    duration: Any = ""
    cadence: Any = ""
    elevation: Any = ""


@dataclass(frozen=True)
class ValidatedWorkout:
    """Numeric form values that satisfy the workout invariants."""
    workout_type: WorkoutType
    distance_km: float
    duration_min: float
    type_param: float


def to_number(raw: Any) -> float:
    """
    Coerce a raw field value to a float.

    Blank input counts as 0 and text that is not a number becomes NaN,
    so both fail the positivity checks downstream.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0 if raw is None else math.nan
    if isinstance(raw, (int, float)):
        return float(raw)
    text = str(raw).strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return math.nan


def _positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def validate_form_input(form_input: FormInput) -> ValidatedWorkout:
    """
    Validate raw form values.

    Raises:
        WorkoutValidationError: On an unknown type, a non-positive distance or
            duration, a non-positive or fractional cadence (running) or a
            non-finite elevation gain (cycling)
    """
    try:
        workout_type = WorkoutType(form_input.workout_type)
    except ValueError:
        raise WorkoutValidationError(f"Unknown workout type: {form_input.workout_type!r}", 'type')

    distance = to_number(form_input.distance)
    duration = to_number(form_input.duration)

    if not _positive(distance):
        raise WorkoutValidationError(INVALID_INPUT_MESSAGE, 'distance')
    if not _positive(duration):
        raise WorkoutValidationError(INVALID_INPUT_MESSAGE, 'duration')

    if workout_type == WorkoutType.RUNNING:
        cadence = to_number(form_input.cadence)
        if not _positive(cadence):
            raise WorkoutValidationError(INVALID_INPUT_MESSAGE, 'cadence')
        if not cadence.is_integer():
            raise WorkoutValidationError("Cadence must be a whole number of steps per minute.", 'cadence')
        return ValidatedWorkout(workout_type, distance, duration, int(cadence))

    elevation = to_number(form_input.elevation)
    if not math.isfinite(elevation):
        raise WorkoutValidationError("Elevation gain must be a number.", 'elevation')
    return ValidatedWorkout(workout_type, distance, duration, elevation)
