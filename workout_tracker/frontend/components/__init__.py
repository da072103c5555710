"""Dashboard components: map, form, list and alerts."""

from .workout_map import PlotlyMapView, MapMarker, coords_from_click, viewport_from_relayout
from .workout_form import WorkoutFormState, create_form_layout
from .workout_list import WorkoutListView
from .alerts import AlertState, create_alert_layout

__all__ = [
    'PlotlyMapView',
    'MapMarker',
    'coords_from_click',
    'viewport_from_relayout',
    'WorkoutFormState',
    'create_form_layout',
    'WorkoutListView',
    'AlertState',
    'create_alert_layout'
]
