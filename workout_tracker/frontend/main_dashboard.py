"""
Main Dashboard Application
========================

Dash application for the workout tracker.

A single dispatch callback receives every browser event (location reading,
map click, form submit, type change, list click, reset), hands it to the
session controller and re-renders the views from their state.
"""

import json
import logging

import dash
from dash import Input, Output, State, ALL, callback_context, no_update
import dash_bootstrap_components as dbc

from .layouts.main_layout import create_main_layout
from .components.workout_form import TYPE_FIELDS
from .components.workout_map import coords_from_click, viewport_from_relayout

logger = logging.getLogger(__name__)

FORM_FIELDS = ('distance', 'duration', 'cadence', 'elevation')

# Runs after the form is shown, so the input is focusable
FOCUS_FIELD_JS = """
function(request) {
    if (request && request.field) {
        setTimeout(function() {
            var input = document.getElementById('form-input-' + request.field);
            if (input) { input.focus(); }
        }, 0);
    }
    return window.dash_clientside.no_update;
}
"""


class WorkoutDashboard:
    """
    Main Dash application for the workout tracker.

    Wraps one WorkoutTracker whose collaborators are the dashboard's view-state
    objects (map view, form state, list view, alerts) and a BrowserGeolocator.
    """

    def __init__(self, tracker, geolocator, app_name="Workout Map"):
        """Initialize the dashboard application."""
        self.tracker = tracker
        self.geolocator = geolocator

        self.app = dash.Dash(__name__,
                             suppress_callback_exceptions=True,
                             external_stylesheets=[dbc.themes.BOOTSTRAP],
                             meta_tags=[
                                 {"name": "viewport", "content": "width=device-width, initial-scale=1"}
                             ])
        self.app.title = app_name

        self._setup_layout()
        self._setup_callbacks()

        logger.info("Workout dashboard initialized successfully")

    @property
    def map_view(self):
        return self.tracker.map_view

    @property
    def form(self):
        return self.tracker.form

    @property
    def alerts(self):
        return self.tracker.notifier

    @property
    def list_view(self):
        return self.tracker.presenter.list_view

    def _setup_layout(self):
        """Serve the layout per page load so it reflects the current session."""
        self.app.layout = self.serve_layout

    def serve_layout(self):
        return create_main_layout(
            figure=self.map_view.figure(),
            workouts=self.list_view.render(),
            high_accuracy=self.tracker.config.geolocation.high_accuracy,
        )

    def _setup_callbacks(self):
        """Register the dispatch callback and the clientside focus callback."""

        self.app.clientside_callback(
            FOCUS_FIELD_JS,
            Output('form-focus-sink', 'children'),
            Input('form-focus', 'data'),
            prevent_initial_call=True
        )

        @self.app.callback(
            [Output('workout-map', 'figure'),
             Output('workout-form', 'style'),
             Output('form-row-cadence', 'className'),
             Output('form-row-cadence', 'style'),
             Output('form-row-elevation', 'className'),
             Output('form-row-elevation', 'style')]
            + [Output(f'form-input-{name}', 'value') for name in FORM_FIELDS]
            + [Output('workout-list', 'children'),
               Output('form-alert', 'children'),
               Output('form-alert', 'is_open'),
               Output('location-banner', 'children'),
               Output('location-banner', 'is_open'),
               Output('geolocation', 'update_now'),
               Output('form-focus', 'data')],
            [Input('geolocation', 'position'),
             Input('geolocation', 'position_error'),
             Input('workout-map', 'clickData'),
             Input('workout-map', 'relayoutData'),
             Input('form-input-type', 'value'),
             Input('form-submit', 'n_clicks'),
             Input({'type': 'workout-entry', 'index': ALL}, 'n_clicks'),
             Input('reset-confirm', 'submit_n_clicks')],
            [State(f'form-input-{name}', 'value') for name in FORM_FIELDS],
            prevent_initial_call=True
        )
        def dispatch(position, position_error, click_data, relayout_data, workout_type,
                     submit_clicks, entry_clicks, reset_clicks, *field_values):
            """Route the triggering event to the session controller."""
            triggered = callback_context.triggered[0] if callback_context.triggered else {}
            return self.handle_event(
                triggered.get('prop_id', ''),
                triggered.get('value'),
                workout_type=workout_type,
                field_values=dict(zip(FORM_FIELDS, field_values)),
                position=position,
                position_error=position_error,
                click_data=click_data,
                relayout_data=relayout_data,
            )

    def handle_event(self, prop_id, value, workout_type=None, field_values=None,
                     position=None, position_error=None, click_data=None, relayout_data=None):
        """
        Apply one browser event to the session and return the callback outputs.

        Args:
            prop_id: '<component id>.<property>' of the trigger
            value: New value of the triggering property
        """
        # Keep whatever the user has typed so far
        self.form.update(workout_type=workout_type, **(field_values or {}))

        update_location = no_update

        if prop_id == 'geolocation.position':
            self.geolocator.deliver(position or {})
        elif prop_id == 'geolocation.position_error':
            self.geolocator.fail(position_error)
        elif prop_id == 'workout-map.clickData':
            coords = coords_from_click(click_data)
            if coords is not None:
                self.map_view.click(coords)
        elif prop_id == 'workout-map.relayoutData':
            viewport = viewport_from_relayout(relayout_data)
            if viewport is None:
                return self._no_change()
            self.map_view.sync_viewport(*viewport)
        elif prop_id == 'form-input-type.value':
            if workout_type in TYPE_FIELDS and self.form.type_field != TYPE_FIELDS[workout_type]:
                self.tracker.toggle_type_fields()
        elif prop_id == 'form-submit.n_clicks':
            self.tracker.submit_workout()
        elif prop_id.startswith('{'):
            # Re-rendered entries report 0 clicks
            workout_id = _entry_id(prop_id)
            if value and workout_id is not None:
                self.tracker.move_to_workout(workout_id)
                return self._render_map_only()
            return self._no_change()
        elif prop_id == 'reset-confirm.submit_n_clicks':
            self.tracker.reset()
            update_location = True
        else:
            logger.debug(f"Unhandled dashboard event: {prop_id}")

        return self._render(update_location)

    def _render(self, update_location=no_update):
        """Build every callback output from the current view state."""
        alert_message = self.alerts.alert_message
        self.alerts.dismiss_alert()
        banner_message = self.alerts.banner_message
        focus_request = self.form.take_focus_request() or no_update

        return (
            [self.map_view.figure(),
             self.form.container_style(),
             self.form.row_class('cadence'),
             self.form.row_style('cadence'),
             self.form.row_class('elevation'),
             self.form.row_style('elevation')]
            + [self.form.values[name] for name in FORM_FIELDS]
            + [self.list_view.render(),
               alert_message or '',
               bool(alert_message),
               banner_message or '',
               bool(banner_message),
               update_location,
               focus_request]
        )

    def _render_map_only(self):
        outputs = self._no_change()
        outputs[0] = self.map_view.figure()
        return outputs

    def _no_change(self):
        return [no_update] * (6 + len(FORM_FIELDS) + 7)

    def run_server(self, debug=False, host='127.0.0.1', port=8050, **kwargs):
        """Run the dashboard server."""
        logger.info(f"Starting dashboard server on {host}:{port}")
        self.app.run(debug=debug, host=host, port=port, **kwargs)

    def get_app(self):
        """Return the underlying Dash app instance."""
        return self.app


def _entry_id(prop_id):
    """Workout id from a pattern-matching prop id like '{"index":"...","type":"workout-entry"}.n_clicks'."""
    component_id = prop_id.rsplit('.', 1)[0]
    try:
        parsed = json.loads(component_id)
    except ValueError:
        return None
    if not isinstance(parsed, dict) or parsed.get('type') != 'workout-entry':
        return None
    return parsed.get('index')
