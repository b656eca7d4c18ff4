"""
HurricaneLens - Interactive Hurricane Season Dashboard

A dashboard for exploring Atlantic hurricane seasons from a public
best-track CSV feed: storm tracks on a map, storm counts per category,
cumulative Accumulated Cyclone Energy, wind intensity over time and
(simulated) wind radii for a selected storm.

This package provides:
- Typed loading of the track feed with a typed load result
- Pure derivations (categories, ACE, per-storm grouping and series)
- A param-based selection state shared by all views
- Interactive visualization with Panel and HoloViews

Quick Start
-----------
Derive season numbers without the UI:

>>> from hurricanelens import load_observations, filter_by_year, category_counts
>>> result = load_observations()
>>> if result.ok:
...     print(category_counts(filter_by_year(result.observations, 2024)))

Or serve the dashboard with the provided app.py:

    $ panel serve app.py --show --port 5006
"""

__version__ = "0.1.0"

# Core components
from hurricanelens.config import config, HurricaneLensConfig

# Data layer
from hurricanelens.core.models import Observation, StormKey, StormTrack, LoadResult
from hurricanelens.core.classification import category, ace_contribution
from hurricanelens.core.data_loader import load_observations
from hurricanelens.core.data_processor import (
    filter_by_year,
    group_storms,
    summarize_track,
    cumulative_ace_by_date,
    category_counts,
    intensity_series,
    wind_radii_series,
)

# State
from hurricanelens.state import AppState

# Plotting layer
from hurricanelens.plotting.colormaps import category_color, CATEGORY_PALETTE

# UI components
from hurricanelens.ui import create_dashboard
from hurricanelens.controllers import HurricaneLensController

__all__ = [
    # Version
    '__version__',

    # Config
    'config',
    'HurricaneLensConfig',

    # Models
    'Observation',
    'StormKey',
    'StormTrack',
    'LoadResult',

    # Classification
    'category',
    'ace_contribution',
    'category_color',
    'CATEGORY_PALETTE',

    # Data loading and processing
    'load_observations',
    'filter_by_year',
    'group_storms',
    'summarize_track',
    'cumulative_ace_by_date',
    'category_counts',
    'intensity_series',
    'wind_radii_series',

    # State
    'AppState',

    # UI
    'create_dashboard',
    'HurricaneLensController',
]
