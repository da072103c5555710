"""
Main Dashboard Layout
==================

Sidebar with the form and the workout list next to the map.
"""

from dash import html, dcc
import dash_bootstrap_components as dbc

from ..components.alerts import create_alert_layout
from ..components.workout_form import create_form_layout


def create_main_layout(figure=None, workouts=None, high_accuracy=False):
    """
    Create the main dashboard layout.

    Args:
        figure: Initial map figure
        workouts: Initial children of the workout list
        high_accuracy: Ask the browser for a precise location
    """

    return dbc.Container([

        # Browser location sensor
        dcc.Geolocation(id='geolocation', high_accuracy=high_accuracy),

        # Focus requests for the form, applied in the browser
        dcc.Store(id='form-focus'),
        html.Span(id='form-focus-sink', hidden=True),

        dbc.Row([

            # Sidebar
            dbc.Col([
                html.H1("Workout Map", className="h3 pt-3"),
                html.P("Click the map to record a run or a ride.",
                       className="text-muted"),

                create_alert_layout(),
                create_form_layout(),

                html.Ul(workouts or [], id='workout-list', className="workouts list-unstyled"),

                html.Hr(className="mt-4"),
                dcc.ConfirmDialogProvider(
                    children=dbc.Button("Reset all workouts", color="secondary",
                                        outline=True, size="sm"),
                    id='reset-confirm',
                    message="Delete every stored workout and start over?"
                ),
            ], width=4, className="sidebar"),

            # Map
            dbc.Col([
                dcc.Graph(
                    id='workout-map',
                    figure=figure or {},
                    config={'displayModeBar': False, 'scrollZoom': True}
                )
            ], width=8)
        ])

    ], fluid=True, className="px-4")
