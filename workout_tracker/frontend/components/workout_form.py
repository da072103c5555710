"""
Workout Form Component
====================

View state of the new-workout form and its Dash layout. The session
controller shows, hides, clears and reads it; the dashboard copies the
browser's field values in before a submit.
"""

from typing import Dict, Optional
import logging

from dash import html, dcc
import dash_bootstrap_components as dbc

from ...core.validation import FormInput
from ...storage.data_models import WorkoutType

logger = logging.getLogger(__name__)

FIELDS = ('distance', 'duration', 'cadence', 'elevation')

TYPE_FIELDS = {
    WorkoutType.RUNNING.value: 'cadence',
    WorkoutType.CYCLING.value: 'elevation',
}


class WorkoutFormState:
    """
    Component state for the new-workout form.

    Only one type-specific field is visible at a time: cadence for running,
    elevation gain for cycling.
    """

    def __init__(self):
        self.visible = False
        self.workout_type = WorkoutType.RUNNING.value
        self.hidden_field = 'elevation'
        self.focused_field: Optional[str] = None
        self.focus_requests = 0
        self._focus_pending = False
        self.values: Dict[str, str] = {name: '' for name in FIELDS}

    @property
    def type_field(self) -> str:
        """The type-specific field currently shown."""
        return 'cadence' if self.hidden_field == 'elevation' else 'elevation'

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False
        self.focused_field = None
        self._focus_pending = False

    def focus(self, field: str) -> None:
        """Ask the browser to move the cursor into a field on the next render."""
        if field not in FIELDS:
            raise ValueError(f"Unknown form field: {field}")
        self.focused_field = field
        self.focus_requests += 1
        self._focus_pending = True

    def take_focus_request(self) -> Optional[Dict[str, object]]:
        """The pending focus request, once; None when nothing new was asked."""
        if not self._focus_pending or self.focused_field is None:
            return None
        self._focus_pending = False
        return {'field': self.focused_field, 'request': self.focus_requests}

    def toggle_type_fields(self) -> None:
        """Swap which of cadence and elevation is visible."""
        self.hidden_field = self.type_field

    def update(self, workout_type: Optional[str] = None, **values) -> None:
        """Copy values typed in the browser."""
        if workout_type is not None:
            self.workout_type = workout_type
        for name, value in values.items():
            if name not in FIELDS:
                raise ValueError(f"Unknown form field: {name}")
            self.values[name] = '' if value is None else value

    def read(self) -> FormInput:
        return FormInput(
            workout_type=self.workout_type,
            distance=self.values['distance'],
            duration=self.values['duration'],
            cadence=self.values['cadence'],
            elevation=self.values['elevation'],
        )

    def clear(self) -> None:
        """Empty every input field; the type selection stays."""
        self.values = {name: '' for name in FIELDS}

    def reset(self) -> None:
        self.__init__()

    def row_class(self, field: str) -> str:
        hidden = field == self.hidden_field
        return "form__row form__row--hidden" if hidden else "form__row"

    def row_style(self, field: str) -> Dict[str, str]:
        return {'display': 'none'} if field == self.hidden_field else {}

    def container_style(self) -> Dict[str, str]:
        return {} if self.visible else {'display': 'none'}


def _field_row(field: str, label: str, placeholder: str, hidden: bool = False):
    return dbc.Row([
        dbc.Label(label, html_for=f'form-input-{field}', width=4),
        dbc.Col([
            dcc.Input(
                id=f'form-input-{field}',
                type='text',
                inputMode='decimal',
                placeholder=placeholder,
                value='',
                autoFocus=field == 'distance',
                className="form-control"
            )
        ], width=8)
    ],
        id=f'form-row-{field}',
        className="form__row form__row--hidden" if hidden else "form__row",
        style={'display': 'none'} if hidden else {}
    )


def create_form_layout():
    """Create the new-workout form. Hidden until the map is clicked."""
    return dbc.Card([
        dbc.CardBody([
            dbc.Row([
                dbc.Label("Type", html_for='form-input-type', width=4),
                dbc.Col([
                    dcc.Dropdown(
                        id='form-input-type',
                        options=[
                            {'label': 'Running', 'value': WorkoutType.RUNNING.value},
                            {'label': 'Cycling', 'value': WorkoutType.CYCLING.value},
                        ],
                        value=WorkoutType.RUNNING.value,
                        clearable=False
                    )
                ], width=8)
            ], className="form__row mb-2"),
            _field_row('distance', "Distance", "km"),
            _field_row('duration', "Duration", "min"),
            _field_row('cadence', "Cadence", "step/min"),
            _field_row('elevation', "Elev Gain", "meters", hidden=True),
            dbc.Button("OK", id='form-submit', color="primary", className="mt-2", n_clicks=0),
        ])
    ], id='workout-form', className="form mb-3", style={'display': 'none'})
