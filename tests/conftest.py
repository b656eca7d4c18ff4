"""Shared fixtures for the HurricaneLens test suite."""

from datetime import datetime, timezone
from pathlib import Path

import holoviews as hv
import pytest

from hurricanelens.core.classification import category
from hurricanelens.core.data_loader import fetch_feed_text, format_display_name
from hurricanelens.core.models import Observation

hv.extension('bokeh')

DATA_DIR = Path(__file__).parent / "data"


def utc(year, month, day, hour=0):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def make_obs(name, number, timestamp=None, wind=0.0, pressure=None, lat=None, lon=None):
    """Build an Observation the way the loader does (category and label attached)."""
    return Observation(
        storm_name=name,
        cyclone_number=number,
        timestamp=timestamp,
        max_wind_kt=float(wind),
        min_pressure_mb=pressure,
        latitude=lat,
        longitude=lon,
        category=category(wind),
        display_name=format_display_name(name, number),
    )


@pytest.fixture(autouse=True)
def clear_feed_cache():
    """Each test fetches its feed afresh."""
    fetch_feed_text.cache_clear()
    yield
    fetch_feed_text.cache_clear()


@pytest.fixture
def sample_csv() -> Path:
    return DATA_DIR / "sample_tracks.csv"


@pytest.fixture
def two_season_observations():
    """
    Storm A (#1): three 2021 observations peaking at 90 kt (Cat 2).
    Storm B (#2): one 2022 observation at 120 kt and one untimestamped
    observation at 150 kt (peak Cat 5).
    """
    return [
        make_obs("ALPHA", 1, utc(2021, 8, 2, 12), 90, 975, 20.0, -70.0),
        make_obs("ALPHA", 1, utc(2021, 8, 1, 0), 40, 1000, 18.0, -65.0),
        make_obs("ALPHA", 1, utc(2021, 8, 1, 18), 65, None, 19.0, -67.5),
        make_obs("BRAVO", 2, utc(2022, 9, 10, 6), 120, 930, 25.0, -75.0),
        make_obs("BRAVO", 2, None, 150),
    ]


@pytest.fixture
def obs():
    """Factory fixture: ``obs(name, number, timestamp, wind, ...)``."""
    return make_obs


@pytest.fixture
def at():
    """Factory fixture for UTC datetimes: ``at(2024, 10, 9, 18)``."""
    return utc
