"""
Chart Plotting Module

This module builds the HoloViews chart elements of the dashboard from the
derived series in ``hurricanelens.core.data_processor``:
- Cumulative ACE area chart
- Storm count per category bar chart
- Wind intensity lines per storm
- Simulated wind-radii chart with landfall marker
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import holoviews as hv

from hurricanelens.config import NO_SELECTION
from hurricanelens.core.classification import CATEGORY_LABELS
from hurricanelens.core.models import AcePoint, IntensitySeries, WindRadiiSeries
from hurricanelens.plotting.colormaps import CATEGORY_PALETTE

logger = logging.getLogger(__name__)

# Shared chart defaults
CHART_HEIGHT = 250
BASE_OPTS = dict(
    responsive=True,
    height=CHART_HEIGHT,
    fontsize={'labels': 10, 'xticks': 9, 'yticks': 9, 'title': 11},
    toolbar=None,
)

ACE_COLOR = '#1f77b4'
RADII_COLORS = {'r34': '#3b82f6', 'r50': '#f97316', 'r64': '#16a34a'}
RADII_Y_RANGE = (0, 350)


def _naive_utc(ts: datetime) -> datetime:
    """Drop tzinfo after converting to UTC (Bokeh expects naive datetimes)."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def _placeholder(message: str) -> hv.Curve:
    """Empty chart carrying a message as its title."""
    return hv.Curve([], 'x', 'y').opts(
        title=message, xaxis=None, yaxis=None, **BASE_OPTS
    )


# =============================================================================
# Season Charts
# =============================================================================

def create_ace_chart(points: Sequence[AcePoint]) -> hv.Element:
    """
    Area chart of cumulative ACE over the season.

    Parameters
    ----------
    points : sequence of AcePoint
        Output of ``cumulative_ace_by_date``

    Returns
    -------
    hv.Area
        Filled cumulative-ACE curve
    """
    data = [(datetime(p.date.year, p.date.month, p.date.day), p.cumulative_ace) for p in points]
    return hv.Area(data, 'Date', 'ACE Index', label='ACE').opts(
        color=ACE_COLOR,
        fill_alpha=0.3,
        line_width=2,
        tools=['hover'],
        **BASE_OPTS
    )


def create_category_bar(counts: Sequence[int]) -> hv.Bars:
    """
    Horizontal bar chart of storm counts per peak category.

    Parameters
    ----------
    counts : sequence of int
        Six counters, TS first (output of ``category_counts``)

    Returns
    -------
    hv.Bars
        One coloured bar per category
    """
    data = [
        (label, int(count), color)
        for label, count, color in zip(CATEGORY_LABELS, counts, CATEGORY_PALETTE)
    ]
    return hv.Bars(data, 'Category', ['Number of Storms', 'color']).opts(
        color='color',
        invert_axes=True,
        line_color='white',
        tools=['hover'],
        **BASE_OPTS
    )


# =============================================================================
# Per-Storm Charts
# =============================================================================

def create_intensity_chart(
    tracks: Sequence[IntensitySeries],
    selected_storm_id: str = NO_SELECTION,
    year: Optional[int] = None
) -> hv.Element:
    """
    Wind intensity over time, one line per storm.

    Line colour follows the storm's mid-track category; markers are coloured
    by each observation's category. The selected storm is drawn heavier.

    Parameters
    ----------
    tracks : sequence of IntensitySeries
        Output of ``intensity_tracks``
    selected_storm_id : str
        Currently selected storm id
    year : int, optional
        Active year, used in the empty-state message

    Returns
    -------
    hv.Overlay or hv.Curve
        Overlay of curves and markers, or a placeholder when empty
    """
    tracks = [t for t in tracks if not t.is_empty]
    if not tracks:
        suffix = f" for {year}" if year is not None else ""
        return _placeholder(f"No storm data available{suffix}")

    layers: List[hv.Element] = []
    for track in tracks:
        selected = track.storm_id == selected_storm_id
        label = f"{track.display_name} ({track.max_wind_kt:g} kt)"
        times = [_naive_utc(t) for t in track.times]
        line_color = track.colors[len(track.colors) // 2]

        curve = hv.Curve((times, track.winds), 'Time', 'Wind (kt)', label=label).opts(
            color=line_color,
            line_width=2 if selected else 1.5,
            alpha=1.0 if selected else 0.75,
        )
        markers = hv.Scatter(
            (times, track.winds, list(track.colors)), 'Time', ['Wind (kt)', 'color'], label=label
        ).opts(
            color='color',
            size=5 if selected else 4,
            alpha=1.0 if selected else 0.75,
            tools=['hover'],
        )
        layers.extend([curve, markers])

    return hv.Overlay(layers).opts(
        title='Wind Intensity',
        show_legend=len(tracks) <= 12,
        legend_position='right',
        **BASE_OPTS
    )


def create_pressure_chart(series: IntensitySeries) -> hv.Element:
    """
    Minimum central pressure over time for one storm.

    Only observations that report a pressure are drawn, against their own
    ``pressure_times``. An empty series (no storm selected) prompts for a
    selection.
    """
    if series.is_empty:
        return _placeholder("Select a storm to view pressure")
    if not series.pressures:
        return _placeholder(f"No pressure readings for {series.display_name}")
    times = [_naive_utc(t) for t in series.pressure_times]
    return hv.Curve((times, series.pressures), 'Time', 'Pressure (mb)').opts(
        title=f"{series.display_name} - minimum pressure",
        color='#475569', line_width=2, tools=['hover'], **BASE_OPTS
    )


def create_wind_radii_chart(radii: WindRadiiSeries) -> hv.Element:
    """
    Simulated 34/50/64-kt wind radii with a landfall marker.

    Parameters
    ----------
    radii : WindRadiiSeries
        Output of ``wind_radii_series``

    Returns
    -------
    hv.Overlay or hv.Curve
        Radii curves plus landfall line and label, or a placeholder prompting
        the user to select a storm
    """
    if radii.is_empty:
        return _placeholder("Select a storm to view wind radii")

    times = [_naive_utc(t) for t in radii.times]
    layers: List[hv.Element] = [
        hv.Curve((times, radii.r34), 'Time', 'Average radius (nm)', label='34-kt radius').opts(
            color=RADII_COLORS['r34'], line_width=2),
        hv.Curve((times, radii.r50), 'Time', 'Average radius (nm)', label='50-kt radius').opts(
            color=RADII_COLORS['r50'], line_width=2, line_dash='dashed'),
        hv.Curve((times, radii.r64), 'Time', 'Average radius (nm)', label='64-kt radius').opts(
            color=RADII_COLORS['r64'], line_width=2, line_dash='dotted'),
    ]

    if radii.landfall_time is not None:
        landfall = _naive_utc(radii.landfall_time)
        layers.append(hv.VLine(landfall).opts(color='black', line_width=1, line_dash='dashed'))
        layers.append(hv.Text(landfall, 250, 'landfall').opts(text_font_size='9pt'))

    title = f"{radii.display_name} - wind-radii growth"
    if radii.simulated:
        title += " (simulated)"

    return hv.Overlay(layers).opts(
        title=title,
        ylim=RADII_Y_RANGE,
        legend_position='bottom',
        **BASE_OPTS
    )
