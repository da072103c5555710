"""
Data Formatting Utilities
========================

Turns workouts into the captions and list entries shown in the dashboard.
Derived metrics are read from the workout, never recomputed here.
"""

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import List, Optional
import logging

from ...storage.data_models import Workout, WorkoutType, RunningDetails, CyclingDetails

logger = logging.getLogger(__name__)

MONTHS = ['January', 'February', 'March', 'April', 'May', 'June', 'July',
          'August', 'September', 'October', 'November', 'December']

ICONS = {
    WorkoutType.RUNNING: '🏃‍♂️',
    WorkoutType.CYCLING: '🚴‍♀️',
    'duration': '⏱',
    'metric': '⚡️',
    'cadence': '🦶🏼',
    'elevation': '⛰',
}


@dataclass(frozen=True)
class EntryDetail:
    icon: str
    value: str
    unit: str


@dataclass(frozen=True)
class WorkoutEntry:
    """Everything the list needs to show one workout."""
    workout_id: str
    workout_type: str
    title: str
    details: List[EntryDetail] = field(default_factory=list)

    @property
    def css_class(self) -> str:
        return f"workout workout--{self.workout_type}"


class DataFormatter:
    """
    Utility class for formatting workouts for dashboard display.

    Provides methods for:
    - Day/month date formatting
    - Popup captions
    - List entries with unit labels
    """

    def __init__(self, tz: Optional[tzinfo] = None):
        """
        Args:
            tz: Zone dates are shown in; None means the local zone
        """
        self.tz = tz

    def format_date(self, value: datetime) -> str:
        """Format a date as '<day> <Month>', e.g. '14 March'."""
        if value.tzinfo is not None:
            value = value.astimezone(self.tz)
        return f"{value.day} {MONTHS[value.month - 1]}"

    def format_number(self, value: float) -> str:
        """Show whole numbers without a trailing '.0'."""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    def format_metric(self, value: float) -> str:
        """Derived metrics are shown to one decimal."""
        return f"{value:.1f}"

    def workout_title(self, workout: Workout) -> str:
        """Caption shared by the popup and the list entry."""
        return f"{workout.type.value.capitalize()} on {self.format_date(workout.created_at)}"

    def popup_class(self, workout: Workout) -> str:
        return f"{workout.type.value}-popup"

    def build_entry(self, workout: Workout) -> WorkoutEntry:
        """
        Build the list entry for a workout.

        Args:
            workout: Fully formed workout

        Returns:
            WorkoutEntry with distance, duration and the two type-specific rows
        """
        details = [
            EntryDetail(ICONS[workout.type], self.format_number(workout.distance_km), 'km'),
            EntryDetail(ICONS['duration'], self.format_number(workout.duration_min), 'min'),
        ]

        payload = workout.details
        if isinstance(payload, RunningDetails):
            details.append(EntryDetail(ICONS['metric'], self.format_metric(payload.pace_min_per_km), 'min/km'))
            details.append(EntryDetail(ICONS['cadence'], self.format_number(payload.cadence_spm), 'spm'))
        elif isinstance(payload, CyclingDetails):
            details.append(EntryDetail(ICONS['metric'], self.format_metric(payload.speed_km_per_h), 'km/h'))
            details.append(EntryDetail(ICONS['elevation'], self.format_number(payload.elevation_gain_m), 'm'))
        else:
            logger.warning(f"Workout {workout.id} has no type-specific details to show")

        return WorkoutEntry(
            workout_id=workout.id,
            workout_type=workout.type.value,
            title=self.workout_title(workout),
            details=details,
        )
