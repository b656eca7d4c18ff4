"""
HurricaneLens Plotting Package

This package provides all plotting and visualization functionality:
- Category palette management (colormaps.py)
- Season and per-storm charts (charts.py)
- Storm-track map (track_map.py)
"""

# Palette functions
from hurricanelens.plotting.colormaps import (
    CATEGORY_PALETTE,
    category_color,
    get_category_legend,
    to_hex_palette,
)

# Chart functions
from hurricanelens.plotting.charts import (
    create_ace_chart,
    create_category_bar,
    create_intensity_chart,
    create_pressure_chart,
    create_wind_radii_chart,
)

# Map functions
from hurricanelens.plotting.track_map import (
    create_track_map,
    create_track_paths,
    create_track_points,
)

__all__ = [
    # Palette exports
    'CATEGORY_PALETTE',
    'category_color',
    'get_category_legend',
    'to_hex_palette',

    # Chart exports
    'create_ace_chart',
    'create_category_bar',
    'create_intensity_chart',
    'create_pressure_chart',
    'create_wind_radii_chart',

    # Map exports
    'create_track_map',
    'create_track_paths',
    'create_track_points',
]
