"""Draws workouts: one map marker and one list entry each."""

from typing import Optional
import logging

from .components.workout_list import WorkoutListView
from .utils.data_formatter import DataFormatter
from ..storage.data_models import Workout

logger = logging.getLogger(__name__)


class WorkoutPresenter:
    """
    Presentation adapter for the session controller.

    Holds no workout state of its own; everything shown comes from the
    Workout it is handed.
    """

    def __init__(self, list_view: Optional[WorkoutListView] = None,
                 formatter: Optional[DataFormatter] = None):
        self.list_view = list_view if list_view is not None else WorkoutListView()
        self.formatter = formatter if formatter is not None else DataFormatter()

    def render_marker(self, map_view, workout: Workout) -> None:
        """Add the workout's marker with its caption popup."""
        map_view.add_marker(
            workout.coords,
            popup=self.formatter.workout_title(workout),
            popup_class=self.formatter.popup_class(workout),
            workout_id=workout.id,
        )

    def render_entry(self, workout: Workout) -> None:
        """Append the workout's list entry."""
        self.list_view.append(self.formatter.build_entry(workout))

    def clear(self) -> None:
        self.list_view.clear()
