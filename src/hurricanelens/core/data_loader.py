"""
Storm Feed Loading Module

Handles fetching the hurricane-track CSV feed, parsing it and validating each
row once into an immutable ``Observation``. Feed failures are reported as a
typed ``LoadResult`` rather than raised to the view layer.
"""

import io
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
import requests

from hurricanelens.config import (
    config,
    COL_STORM_NAME,
    COL_CYCLONE_NUM,
    COL_DATETIME,
    COL_MAX_WIND,
    COL_MIN_PRESSURE,
    COL_LATITUDE,
    COL_LONGITUDE,
    REQUIRED_COLUMNS,
    OPTIONAL_COLUMNS,
)
from hurricanelens.core.classification import category, coerce_wind
from hurricanelens.core.models import Observation, LoadResult

logger = logging.getLogger(__name__)

# Number of feed texts kept in memory (keyed by source and timeout)
FEED_CACHE_SIZE = 4


# =============================================================================
# Errors
# =============================================================================

class FeedError(Exception):
    """Base class for problems loading the observation feed."""


class FeedFetchError(FeedError):
    """The feed could not be retrieved (network, HTTP status or file I/O)."""


class FeedParseError(FeedError):
    """The feed was retrieved but is not a usable track table."""


# =============================================================================
# Fetching
# =============================================================================

def _is_url(source: str) -> bool:
    return source.startswith(('http://', 'https://'))


@lru_cache(maxsize=FEED_CACHE_SIZE)
def fetch_feed_text(source: str, timeout: float = 30.0) -> str:
    """
    Retrieve the raw feed text from a URL or a local file.

    Successful fetches are cached; failures are not, so a retry after an
    error goes back to the source.

    Parameters
    ----------
    source : str
        http(s) URL or filesystem path of the CSV feed
    timeout : float
        Request timeout in seconds (ignored for local files)

    Returns
    -------
    str
        Feed text

    Raises
    ------
    FeedFetchError
        If the source cannot be read
    """
    if _is_url(source):
        logger.info(f"Fetching storm feed: {source}")
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FeedFetchError(f"Error fetching {source}: {e}") from e
        return response.text

    path = Path(source).expanduser()
    logger.info(f"Reading storm feed from file: {path}")
    try:
        return path.read_text(encoding='utf-8')
    except OSError as e:
        raise FeedFetchError(f"Error reading {path}: {e}") from e


# =============================================================================
# Parsing
# =============================================================================

def parse_feed(text: str) -> pd.DataFrame:
    """
    Parse feed text into a DataFrame with all known columns present.

    Optional columns missing from the feed are added as all-NaN columns.

    Parameters
    ----------
    text : str
        CSV text with a header row

    Returns
    -------
    pd.DataFrame
        Raw (untyped) feed table

    Raises
    ------
    FeedParseError
        If the text is not CSV or a required column is missing
    """
    try:
        frame = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise FeedParseError(f"Could not parse storm feed: {e}") from e

    frame.columns = [str(c).strip() for c in frame.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise FeedParseError(f"Storm feed is missing required columns: {', '.join(missing)}")

    for col in OPTIONAL_COLUMNS:
        if col not in frame.columns:
            frame[col] = np.nan

    return frame


def _optional_float(value) -> Optional[float]:
    """Finite float, or None for missing, NaN and infinite values."""
    if value is None or pd.isna(value) or not np.isfinite(value):
        return None
    return float(value)


def _optional_int(value) -> Optional[int]:
    value = _optional_float(value)
    return None if value is None else int(value)


def format_display_name(
    storm_name: str,
    cyclone_number: Optional[int],
    basin_prefix: str = 'AL'
) -> str:
    """
    Human readable storm label.

    Examples
    --------
    >>> format_display_name('IAN', 9)
    'IAN (9)'
    >>> format_display_name('', 5)
    'AL05'
    """
    if storm_name:
        if cyclone_number is None:
            return storm_name
        return f"{storm_name} ({cyclone_number})"
    if cyclone_number is None:
        return f"{basin_prefix} Unnumbered"
    return f"{basin_prefix}{cyclone_number:02d}"


def rows_to_observations(
    frame: pd.DataFrame,
    basin_prefix: str = 'AL'
) -> Tuple[List[Observation], int]:
    """
    Validate feed rows into typed observations.

    Numeric fields that fail to parse become absent (None), wind defaults to
    0 kt, and timestamps are interpreted as UTC. Rows with neither a storm
    name nor a cyclone number cannot be attributed to a storm and are dropped.

    Parameters
    ----------
    frame : pd.DataFrame
        Table returned by ``parse_feed``
    basin_prefix : str
        Prefix for labels of unnamed storms

    Returns
    -------
    tuple of (list of Observation, int)
        Observations in feed order, and the number of dropped rows
    """
    names = frame[COL_STORM_NAME].fillna('').astype(str).str.strip()
    numbers = pd.to_numeric(frame[COL_CYCLONE_NUM], errors='coerce')
    times = pd.to_datetime(frame[COL_DATETIME], utc=True, errors='coerce', format='mixed')
    winds = pd.to_numeric(frame[COL_MAX_WIND], errors='coerce')
    pressures = pd.to_numeric(frame[COL_MIN_PRESSURE], errors='coerce')
    lats = pd.to_numeric(frame[COL_LATITUDE], errors='coerce')
    lons = pd.to_numeric(frame[COL_LONGITUDE], errors='coerce')

    observations = []
    dropped = 0

    for name, number, ts, wind, pressure, lat, lon in zip(
        names, numbers, times, winds, pressures, lats, lons
    ):
        cyclone_number = _optional_int(number)
        if not name and cyclone_number is None:
            dropped += 1
            continue

        max_wind = coerce_wind(_optional_float(wind))
        observations.append(Observation(
            storm_name=name,
            cyclone_number=cyclone_number,
            timestamp=None if pd.isna(ts) else ts.to_pydatetime(),
            max_wind_kt=max_wind,
            min_pressure_mb=_optional_float(pressure),
            latitude=_optional_float(lat),
            longitude=_optional_float(lon),
            category=category(max_wind),
            display_name=format_display_name(name, cyclone_number, basin_prefix),
        ))

    if dropped:
        logger.warning(f"Dropped {dropped} feed rows without storm name or cyclone number")

    return observations, dropped


# =============================================================================
# Load Boundary
# =============================================================================

def load_observations(
    source: Optional[str] = None,
    timeout: Optional[float] = None,
    basin_prefix: Optional[str] = None
) -> LoadResult:
    """
    Fetch, parse and validate the storm feed.

    This never raises for feed problems; inspect ``LoadResult.ok``.

    Parameters
    ----------
    source : str, optional
        URL or path of the feed (default: config.csv_url)
    timeout : float, optional
        Fetch timeout in seconds (default: config.fetch_timeout)
    basin_prefix : str, optional
        Label prefix for unnamed storms (default: config.basin_prefix)

    Returns
    -------
    LoadResult
        Observations on success, otherwise the error that occurred

    Examples
    --------
    >>> result = load_observations('tests/data/sample_tracks.csv')
    >>> result.ok
    True
    """
    source = str(source or config.csv_url)
    timeout = config.fetch_timeout if timeout is None else timeout
    basin_prefix = config.basin_prefix if basin_prefix is None else basin_prefix

    try:
        text = fetch_feed_text(source, timeout)
        frame = parse_feed(text)
        observations, dropped = rows_to_observations(frame, basin_prefix)
    except FeedError as e:
        logger.error(f"Storm feed unavailable: {e}")
        return LoadResult(error=e, source=source)

    logger.info(f"Loaded {len(observations)} storm observations from {source}")
    return LoadResult(observations=observations, source=source, dropped_rows=dropped)
