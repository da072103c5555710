"""
Workout Map Component
===================

Map view backed by a plotly map (MapLibre) figure on OpenStreetMap tiles.

Plotly only reports clicks on plotted points, so the figure carries a
transparent grid of points around the current view; a click anywhere on
the map lands on the nearest of them. Grid spacing is fixed in screen
pixels (``click_resolution_px``), so a recorded click is at most half a
step from where the user clicked, in each axis, at any zoom.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple
import logging
import math

import numpy as np
import plotly.graph_objects as go

from ...utils.config import get_config

logger = logging.getLogger(__name__)

Coords = Tuple[float, float]

CLICK_SURFACE_NAME = "click-surface"

# Web-mercator tiles are 256px wide at zoom 0
TILE_SIZE_PX = 256

# The click surface covers less height than width
SURFACE_ASPECT = 0.6

MARKER_COLORS = {
    'running-popup': '#00c46a',
    'cycling-popup': '#ffb545',
    'home-popup': '#2c7be5',
}


def degrees_per_pixel(zoom: float) -> float:
    """Degrees of longitude covered by one screen pixel at a zoom level."""
    return 360.0 / (TILE_SIZE_PX * 2 ** zoom)


@dataclass(frozen=True)
class MapMarker:
    coords: Coords
    popup: Optional[str] = None
    popup_class: Optional[str] = None
    workout_id: Optional[str] = None


class PlotlyMapView:
    """
    Map view state: center, zoom, markers and click subscribers.

    The Dash layer renders it with figure() and forwards clicks with click().
    """

    def __init__(self, tile_style: Optional[str] = None, click_resolution_px: Optional[int] = None,
                 height_px: Optional[int] = None, pan_duration_s: Optional[float] = None,
                 click_surface_px: Optional[int] = None):
        self.config = get_config()
        self.tile_style = tile_style or self.config.map.tile_style
        self.click_resolution_px = click_resolution_px or self.config.map.click_resolution_px
        self.click_surface_px = click_surface_px or self.config.map.click_surface_px
        self.height_px = height_px or self.config.map.height_px
        self.pan_duration_s = self.config.map.pan_duration_s if pan_duration_s is None else pan_duration_s
        self.center: Optional[Coords] = None
        self.zoom: Optional[float] = None
        self.animate = False
        self.view_revision = 0
        self.markers: List[MapMarker] = []
        self._click_handlers: List[Callable[[Coords], None]] = []

    @property
    def is_ready(self) -> bool:
        return self.center is not None

    def set_view(self, coords: Coords, zoom: float, animate: bool = False) -> None:
        """Center the map. Bumps the view revision so the browser applies it."""
        self.center = (float(coords[0]), float(coords[1]))
        self.zoom = zoom
        self.animate = animate
        self.view_revision += 1
        logger.debug(f"Map view set to {self.center} @ zoom {zoom} (animate={animate})")

    def sync_viewport(self, coords: Coords, zoom: Optional[float] = None) -> None:
        """Record a pan/zoom made in the browser without forcing a redraw of the view."""
        if self.center is None:
            return
        self.center = (float(coords[0]), float(coords[1]))
        if zoom is not None:
            self.zoom = zoom
        self.animate = False

    def add_marker(self, coords: Coords, popup: Optional[str] = None,
                   popup_class: Optional[str] = None, workout_id: Optional[str] = None) -> MapMarker:
        marker = MapMarker((float(coords[0]), float(coords[1])), popup, popup_class, workout_id)
        self.markers.append(marker)
        return marker

    def on_click(self, handler: Callable[[Coords], None]) -> None:
        self._click_handlers.append(handler)

    def click(self, coords: Coords) -> None:
        """Dispatch a map click to every subscriber."""
        for handler in list(self._click_handlers):
            handler((float(coords[0]), float(coords[1])))

    def clear(self) -> None:
        """Drop markers, subscribers and the view."""
        self.center = None
        self.zoom = None
        self.animate = False
        self.markers = []
        self._click_handlers = []
        self.view_revision += 1

    def click_steps(self) -> Tuple[float, float]:
        """Latitude and longitude spacing of the click surface, in degrees."""
        lng_step = self.click_resolution_px * degrees_per_pixel(self.zoom)
        # Mercator stretches latitude by 1/cos(lat); keep the on-screen spacing square
        lat_step = lng_step * math.cos(math.radians(self.center[0]))
        return lat_step, lng_step

    def click_grid(self) -> Tuple[np.ndarray, np.ndarray]:
        """Latitudes and longitudes of the transparent click surface."""
        lat, lng = self.center
        lat_step, lng_step = self.click_steps()

        half_width = math.ceil(self.click_surface_px / 2 / self.click_resolution_px)
        half_height = math.ceil(self.click_surface_px * SURFACE_ASPECT / 2 / self.click_resolution_px)

        lats = np.clip(lat + lat_step * np.arange(-half_height, half_height + 1), -85.0, 85.0)
        lngs = lng + lng_step * np.arange(-half_width, half_width + 1)
        grid_lat, grid_lng = np.meshgrid(lats, lngs)
        return grid_lat.ravel(), grid_lng.ravel()

    def figure(self) -> go.Figure:
        """
        Build the plotly figure for the current state.

        An animated pan is emitted once; later figures redraw without the transition.
        """
        if not self.is_ready:
            return self._create_waiting_figure()

        fig = go.Figure()

        grid_lat, grid_lng = self.click_grid()
        fig.add_trace(go.Scattermap(
            lat=grid_lat,
            lon=grid_lng,
            mode='markers',
            marker=dict(size=self.click_resolution_px * 2, opacity=0),
            hoverinfo='none',
            name=CLICK_SURFACE_NAME,
            showlegend=False
        ))

        groups: Dict[str, List[MapMarker]] = {}
        for marker in self.markers:
            groups.setdefault(marker.popup_class or 'home-popup', []).append(marker)

        for popup_class, markers in groups.items():
            fig.add_trace(go.Scattermap(
                lat=[m.coords[0] for m in markers],
                lon=[m.coords[1] for m in markers],
                mode='markers+text',
                text=[m.popup or '' for m in markers],
                textposition='top center',
                customdata=[m.workout_id or '' for m in markers],
                hovertext=[m.popup or '' for m in markers],
                hoverinfo='text',
                marker=dict(size=14, color=MARKER_COLORS.get(popup_class, '#2c7be5')),
                name=popup_class,
                showlegend=False
            ))

        fig.update_layout(
            map=dict(
                style=self.tile_style,
                center=dict(lat=self.center[0], lon=self.center[1]),
                zoom=self.zoom
            ),
            margin=dict(l=0, r=0, t=0, b=0),
            height=self.height_px,
            clickmode='event',
            hoverdistance=self.click_resolution_px,
            uirevision=self.view_revision
        )

        if self.animate:
            fig.update_layout(transition=dict(
                duration=int(self.pan_duration_s * 1000),
                easing='cubic-in-out'
            ))
            self.animate = False

        return fig

    def _create_waiting_figure(self) -> go.Figure:
        """Placeholder shown until the location is known."""
        fig = go.Figure()
        fig.add_annotation(
            text="Waiting for your location...",
            xref="paper", yref="paper",
            x=0.5, y=0.5, xanchor='center', yanchor='middle',
            showarrow=False, font_size=16
        )
        fig.update_layout(
            showlegend=False,
            xaxis={'visible': False},
            yaxis={'visible': False},
            height=self.height_px
        )
        return fig


def coords_from_click(click_data) -> Optional[Coords]:
    """Extract (lat, lng) from a dcc.Graph clickData payload."""
    if not click_data or not click_data.get('points'):
        return None
    point = click_data['points'][0]
    if point.get('lat') is None or point.get('lon') is None:
        return None
    return (float(point['lat']), float(point['lon']))


def viewport_from_relayout(relayout_data) -> Optional[Tuple[Coords, Optional[float]]]:
    """Extract the map center and zoom from a dcc.Graph relayoutData payload."""
    if not relayout_data:
        return None
    center = relayout_data.get('map.center')
    if not center or 'lat' not in center or 'lon' not in center:
        return None
    return (float(center['lat']), float(center['lon'])), relayout_data.get('map.zoom')
