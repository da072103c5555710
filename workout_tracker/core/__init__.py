"""Session plumbing: location requests, form validation and collaborator interfaces."""

from .geolocation import (
    Position,
    LocationError,
    LocationRequest,
    StaticGeolocator,
    BrowserGeolocator
)
from .validation import (
    FormInput,
    ValidatedWorkout,
    WorkoutValidationError,
    to_number,
    validate_form_input
)

__all__ = [
    "Position",
    "LocationError",
    "LocationRequest",
    "StaticGeolocator",
    "BrowserGeolocator",
    "FormInput",
    "ValidatedWorkout",
    "WorkoutValidationError",
    "to_number",
    "validate_form_input"
]
