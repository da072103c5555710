"""
Workout List Component
====================

Sidebar list of recorded workouts, one entry per workout in creation order.
"""

from typing import List, Optional
import logging

from dash import html

from ..utils.data_formatter import WorkoutEntry

logger = logging.getLogger(__name__)


class WorkoutListView:
    """Ordered list entries as shown in the sidebar."""

    def __init__(self):
        self.entries: List[WorkoutEntry] = []

    def append(self, entry: WorkoutEntry) -> None:
        self.entries.append(entry)

    def clear(self) -> None:
        self.entries = []

    def find(self, workout_id: str) -> Optional[WorkoutEntry]:
        for entry in self.entries:
            if entry.workout_id == workout_id:
                return entry
        return None

    def render(self):
        """Build the Dash children for the list container."""
        if not self.entries:
            return [html.Li("No workouts yet. Click the map to add one.",
                            className="workout workout--empty text-muted")]
        return [self._render_entry(entry) for entry in self.entries]

    def _render_entry(self, entry: WorkoutEntry):
        details = [
            html.Div([
                html.Span(detail.icon, className="workout__icon"),
                html.Span(detail.value, className="workout__value"),
                html.Span(detail.unit, className="workout__unit"),
            ], className="workout__details")
            for detail in entry.details
        ]
        return html.Li(
            [html.H2(entry.title, className="workout__title")] + details,
            id={'type': 'workout-entry', 'index': entry.workout_id},
            className=entry.css_class,
            n_clicks=0,
            style={'cursor': 'pointer'}
        )
