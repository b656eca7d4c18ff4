"""
Track Map Plotting Module

This module provides the storm-track map for HurricaneLens:
- OpenStreetMap tile background
- Track polylines coloured by each storm's peak category
- Observation markers coloured by their own category, with hover details
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np
import holoviews as hv
from holoviews.util.transform import lon_lat_to_easting_northing

from hurricanelens.config import MAP_CENTER, MAP_HEIGHT, NO_SELECTION
from hurricanelens.core.models import MapTrack
from hurricanelens.plotting.colormaps import category_color, get_category_legend
from hurricanelens.utils.metadata import format_time_value

logger = logging.getLogger(__name__)

# Half-width of the default view around MAP_CENTER (degrees lon, lat)
DEFAULT_SPAN_DEG = (45.0, 20.0)


def _default_extent() -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Web Mercator x/y ranges of the Atlantic basin view."""
    lat, lon = MAP_CENTER
    dlon, dlat = DEFAULT_SPAN_DEG
    xs, ys = lon_lat_to_easting_northing(
        np.array([lon - dlon, lon + dlon]), np.array([lat - dlat, lat + dlat])
    )
    return (float(xs[0]), float(xs[1])), (float(ys[0]), float(ys[1]))


def _track_points(track: MapTrack) -> Tuple[np.ndarray, np.ndarray]:
    lons = np.array([o.longitude for o in track.points], dtype=float)
    lats = np.array([o.latitude for o in track.points], dtype=float)
    return lon_lat_to_easting_northing(lons, lats)


def create_track_paths(tracks: Sequence[MapTrack], selected_storm_id: str = NO_SELECTION) -> hv.Path:
    """
    Track polylines, one per storm with at least two positions.

    When a storm is selected the other tracks are faded.
    """
    paths = []
    for track in tracks:
        if len(track.points) < 2:
            continue
        xs, ys = _track_points(track)
        selected = track.storm_id == selected_storm_id
        if selected_storm_id == NO_SELECTION or selected:
            alpha = 1.0
        else:
            alpha = 0.3
        paths.append({
            'x': xs,
            'y': ys,
            'storm': track.display_name,
            'color': track.color,
            'alpha': alpha,
            'width': 4 if selected else 3,
        })

    return hv.Path(paths, vdims=['storm', 'color', 'alpha', 'width']).opts(
        color='color', alpha='alpha', line_width='width'
    )


def create_track_points(tracks: Sequence[MapTrack], selected_storm_id: str = NO_SELECTION) -> hv.Points:
    """Observation markers with name, time, wind and pressure on hover."""
    rows: List[tuple] = []
    for track in tracks:
        xs, ys = _track_points(track)
        selected = track.storm_id == selected_storm_id
        size = 8 if selected else 6
        for x, y, obs in zip(xs, ys, track.points):
            pressure = '' if obs.min_pressure_mb is None else f"{obs.min_pressure_mb:g} mb"
            rows.append((
                x, y,
                track.display_name,
                format_time_value(obs.timestamp, '%Y-%m-%d %H:%M'),
                obs.max_wind_kt,
                pressure,
                category_color(obs.max_wind_kt),
                size,
            ))

    return hv.Points(
        rows,
        kdims=['x', 'y'],
        vdims=['Storm', 'Time', 'Wind (kt)', 'Pressure', 'color', 'size'],
    ).opts(
        color='color',
        size='size',
        line_color='color',
        tools=['hover'],
    )


def create_track_map(tracks: Sequence[MapTrack], selected_storm_id: str = NO_SELECTION) -> hv.Overlay:
    """
    Complete track map: tiles, track lines and observation markers.

    Parameters
    ----------
    tracks : sequence of MapTrack
        Output of ``map_tracks`` for the observations to display
    selected_storm_id : str
        Currently selected storm id ('none' for all)

    Returns
    -------
    hv.Overlay
        Tiles * Path * Points
    """
    tiles = hv.element.tiles.OSM()
    xlim, ylim = _default_extent()

    overlay = tiles * create_track_paths(tracks, selected_storm_id) * create_track_points(tracks, selected_storm_id)
    opts = dict(responsive=True, height=MAP_HEIGHT, xaxis=None, yaxis=None, title='Hurricane Tracks')
    if not tracks:
        opts.update(xlim=xlim, ylim=ylim)

    logger.debug(f"Track map built with {len(tracks)} storms")
    return overlay.opts(**opts)


def legend_markdown() -> str:
    """Category colour legend as HTML swatches for a Markdown pane."""
    items = [
        f'<span style="color:{color}">&#9679;</span> {label}'
        for color, label in get_category_legend()
    ]
    return ' &nbsp; '.join(items)
