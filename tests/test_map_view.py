import numpy as np
import pytest

from workout_tracker.frontend.components.workout_map import (
    CLICK_SURFACE_NAME,
    PlotlyMapView,
    degrees_per_pixel,
    coords_from_click,
    viewport_from_relayout,
)


def _ready_view():
    view = PlotlyMapView(click_resolution_px=8, click_surface_px=64)
    view.set_view((51.5, -0.1), 13)
    return view


def test_waiting_figure_before_location():
    view = PlotlyMapView()
    assert not view.is_ready
    fig = view.figure()
    assert len(fig.data) == 0
    assert fig.layout.annotations[0].text == "Waiting for your location..."


def test_figure_has_click_surface_and_marker_groups():
    view = _ready_view()
    view.add_marker((51.5, -0.1), popup="Current location", popup_class="home-popup")
    view.add_marker((51.51, -0.11), popup="Running on 14 March", popup_class="running-popup", workout_id="1")
    view.add_marker((51.52, -0.12), popup="Running on 15 March", popup_class="running-popup", workout_id="2")

    fig = view.figure()
    assert fig.data[0].name == CLICK_SURFACE_NAME
    assert fig.data[0].marker.opacity == 0
    # 64px wide and 38px high at 8px spacing
    assert len(fig.data[0].lat) == 9 * 7

    running = [t for t in fig.data if t.name == "running-popup"][0]
    assert list(running.customdata) == ["1", "2"]
    assert list(running.text) == ["Running on 14 March", "Running on 15 March"]

    assert fig.layout.map.style == "open-street-map"
    assert fig.layout.map.zoom == 13
    assert fig.layout.clickmode == "event"


def test_click_grid_surrounds_center():
    lats, lngs = _ready_view().click_grid()
    assert np.isclose(lats.mean(), 51.5)
    assert np.isclose(lngs.mean(), -0.1)
    assert lats.min() < 51.5 < lats.max()


def test_set_view_bumps_revision_and_animates():
    view = _ready_view()
    revision = view.view_revision
    view.set_view((48.8, 2.3), 13, animate=True)
    fig = view.figure()
    assert fig.layout.uirevision == revision + 1
    assert fig.layout.transition.duration == 1000

    # The pan animates once; the next redraw has no transition
    assert not view.animate
    assert view.figure().layout.transition.duration is None


@pytest.mark.parametrize("center, zoom", [((51.5, -0.1), 13), ((0.0, 0.0), 5), ((-33.9, 151.2), 17.5)])
def test_click_lands_within_half_a_step(center, zoom):
    view = PlotlyMapView(click_resolution_px=8)
    view.set_view(center, zoom)
    lats, lngs = view.click_grid()
    lat_step, lng_step = view.click_steps()

    # Eight pixels of longitude, and the same on-screen distance in latitude
    assert np.isclose(lng_step, 8 * degrees_per_pixel(zoom))
    assert np.isclose(lat_step, lng_step * np.cos(np.radians(center[0])))

    rng = np.random.default_rng(3)
    clicks = np.column_stack([
        rng.uniform(lats.min(), lats.max(), 200),
        rng.uniform(lngs.min(), lngs.max(), 200),
    ])
    for lat, lng in clicks:
        nearest = np.argmin(((lats - lat) / lat_step) ** 2 + ((lngs - lng) / lng_step) ** 2)
        assert abs(lats[nearest] - lat) <= lat_step / 2 + 1e-12
        assert abs(lngs[nearest] - lng) <= lng_step / 2 + 1e-12


def test_click_surface_covers_the_configured_width():
    view = PlotlyMapView(click_resolution_px=8, click_surface_px=1024)
    view.set_view((51.5, -0.1), 13)
    _, lngs = view.click_grid()
    span_px = (lngs.max() - lngs.min()) / degrees_per_pixel(13)
    assert span_px >= 1024 - 1e-6


def test_sync_viewport_needs_a_view():
    view = PlotlyMapView()
    view.sync_viewport((1.0, 2.0), 10)
    assert view.center is None

    view = _ready_view()
    revision = view.view_revision
    view.sync_viewport((52.0, 0.5), 11)
    assert view.center == (52.0, 0.5)
    assert view.zoom == 11
    assert view.view_revision == revision


def test_click_dispatch_and_clear():
    view = _ready_view()
    clicks = []
    view.on_click(clicks.append)
    view.click((51.49, -0.09))
    assert clicks == [(51.49, -0.09)]

    view.clear()
    view.click((0, 0))
    assert clicks == [(51.49, -0.09)]
    assert view.markers == []
    assert not view.is_ready


def test_payload_helpers():
    assert coords_from_click({'points': [{'lat': 51.5, 'lon': -0.1}]}) == (51.5, -0.1)
    assert coords_from_click({'points': []}) is None
    assert coords_from_click(None) is None

    relayout = {'map.center': {'lat': 10, 'lon': 20}, 'map.zoom': 9}
    assert viewport_from_relayout(relayout) == ((10.0, 20.0), 9)
    assert viewport_from_relayout({'autosize': True}) is None
