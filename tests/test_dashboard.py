import json

import pytest
from dash import no_update

from workout_tracker.frontend.main_dashboard import FOCUS_FIELD_JS, WorkoutDashboard, _entry_id
from workout_tracker.main import SessionPhase

FIGURE, FORM_STYLE, CADENCE_CLASS, CADENCE_STYLE, ELEVATION_CLASS, ELEVATION_STYLE = range(6)
DISTANCE_VALUE = 6
LIST_CHILDREN, ALERT_TEXT, ALERT_OPEN, BANNER_TEXT, BANNER_OPEN, UPDATE_NOW, FOCUS = range(10, 17)


@pytest.fixture
def dashboard(browser_tracker):
    tracker, geolocator = browser_tracker
    return WorkoutDashboard(tracker, geolocator)


def _fields(distance="", duration="", cadence="", elevation=""):
    return {'distance': distance, 'duration': duration, 'cadence': cadence, 'elevation': elevation}


def _locate(dashboard, lat=51.5, lon=-0.1):
    return dashboard.handle_event('geolocation.position', None, workout_type='running',
                                  field_values=_fields(), position={'lat': lat, 'lon': lon, 'accuracy': 10})


def _entry_prop(workout_id):
    return json.dumps({'index': workout_id, 'type': 'workout-entry'}, separators=(',', ':')) + '.n_clicks'


def _record_run(dashboard):
    dashboard.handle_event('workout-map.clickData', None, workout_type='running', field_values=_fields(),
                           click_data={'points': [{'lat': 51.51, 'lon': -0.11}]})
    return dashboard.handle_event('form-submit.n_clicks', 1, workout_type='running',
                                  field_values=_fields("5", "25", "180"))


def test_layout_before_location(dashboard):
    layout = dashboard.serve_layout()
    assert layout is not None
    assert dashboard.tracker.phase == SessionPhase.AWAITING_LOCATION


def test_location_reading_loads_map(dashboard):
    outputs = _locate(dashboard)
    assert len(outputs) == 17
    assert dashboard.tracker.phase == SessionPhase.MAP_READY
    assert outputs[FIGURE].layout.map.center.lat == 51.5
    assert outputs[BANNER_OPEN] is False


def test_location_error_shows_banner(dashboard):
    outputs = dashboard.handle_event('geolocation.position_error', None, workout_type='running',
                                     field_values=_fields(),
                                     position_error={'code': 1, 'message': 'User denied Geolocation'})
    assert outputs[BANNER_OPEN] is True
    assert "User denied Geolocation" in outputs[BANNER_TEXT]


def test_map_click_shows_form(dashboard):
    _locate(dashboard)
    outputs = dashboard.handle_event('workout-map.clickData', None, workout_type='running',
                                     field_values=_fields(),
                                     click_data={'points': [{'lat': 51.51, 'lon': -0.11}]})
    assert outputs[FORM_STYLE] == {}
    assert outputs[FOCUS] == {'field': 'distance', 'request': 1}
    assert dashboard.tracker.phase == SessionPhase.FORM_OPEN

    # Changing the type keeps the cursor where it is
    outputs = dashboard.handle_event('form-input-type.value', 'cycling', workout_type='cycling',
                                     field_values=_fields("5"))
    assert outputs[FOCUS] is no_update

    # Each new click asks again
    outputs = dashboard.handle_event('workout-map.clickData', None, workout_type='cycling',
                                     field_values=_fields("5"),
                                     click_data={'points': [{'lat': 51.52, 'lon': -0.12}]})
    assert outputs[FOCUS] == {'field': 'distance', 'request': 2}


def test_focus_is_applied_in_the_browser(dashboard):
    assert 'form-focus-sink.children' in dashboard.app.callback_map
    assert "'form-input-' + request.field" in FOCUS_FIELD_JS


def test_submit_records_workout(dashboard):
    _locate(dashboard)
    outputs = _record_run(dashboard)

    assert len(dashboard.tracker.workouts) == 1
    assert outputs[FORM_STYLE] == {'display': 'none'}
    assert outputs[DISTANCE_VALUE] == ''
    assert len(outputs[LIST_CHILDREN]) == 1
    assert outputs[ALERT_OPEN] is False


def test_invalid_submit_alerts_once(dashboard):
    _locate(dashboard)
    dashboard.handle_event('workout-map.clickData', None, workout_type='running', field_values=_fields(),
                           click_data={'points': [{'lat': 51.51, 'lon': -0.11}]})
    outputs = dashboard.handle_event('form-submit.n_clicks', 1, workout_type='running',
                                     field_values=_fields("0", "25", "180"))
    assert outputs[ALERT_OPEN] is True
    assert outputs[ALERT_TEXT] == "Inputs must be positive numbers."
    assert outputs[DISTANCE_VALUE] == "0"

    outputs = dashboard.handle_event('workout-map.clickData', None, workout_type='running',
                                     field_values=_fields("0", "25", "180"),
                                     click_data={'points': [{'lat': 51.52, 'lon': -0.12}]})
    assert outputs[ALERT_OPEN] is False


def test_type_change_swaps_rows(dashboard):
    _locate(dashboard)
    outputs = dashboard.handle_event('form-input-type.value', 'cycling', workout_type='cycling',
                                     field_values=_fields())
    assert outputs[CADENCE_STYLE] == {'display': 'none'}
    assert outputs[ELEVATION_STYLE] == {}
    assert "form__row--hidden" in outputs[CADENCE_CLASS]


def test_entry_click_pans_map_only(dashboard):
    _locate(dashboard)
    _record_run(dashboard)
    workout = dashboard.tracker.workouts[0]

    outputs = dashboard.handle_event(_entry_prop(workout.id), 1, workout_type='running', field_values=_fields())
    assert outputs[FIGURE].layout.map.center.lat == workout.coords[0]
    assert outputs[FIGURE].layout.transition.duration == 1000
    assert not dashboard.map_view.animate
    assert all(o is no_update for o in outputs[1:])

    # Re-rendered entries report zero clicks
    outputs = dashboard.handle_event(_entry_prop(workout.id), 0, workout_type='running', field_values=_fields())
    assert all(o is no_update for o in outputs)


def test_relayout_without_center_changes_nothing(dashboard):
    _locate(dashboard)
    outputs = dashboard.handle_event('workout-map.relayoutData', {'autosize': True}, workout_type='running',
                                     field_values=_fields(), relayout_data={'autosize': True})
    assert all(o is no_update for o in outputs)


def test_reset_requests_location_again(dashboard):
    _locate(dashboard)
    _record_run(dashboard)

    outputs = dashboard.handle_event('reset-confirm.submit_n_clicks', 1, workout_type='running',
                                     field_values=_fields())
    assert outputs[UPDATE_NOW] is True
    assert dashboard.tracker.workouts == []
    assert dashboard.tracker.phase == SessionPhase.AWAITING_LOCATION

    _locate(dashboard)
    assert dashboard.tracker.phase == SessionPhase.MAP_READY


def test_entry_id_parsing():
    assert _entry_id(_entry_prop("0417600000")) == "0417600000"
    assert _entry_id('form-submit.n_clicks') is None
    assert _entry_id('{"index":"1","type":"other"}.n_clicks') is None
