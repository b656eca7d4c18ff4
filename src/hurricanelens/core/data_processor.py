"""
Storm Data Processing Module

Pure functions that turn the flat observation list into the per-storm,
per-category and per-date structures the views consume. None of them keep
state between calls; each is a function of the observations passed in and,
where relevant, a selected storm id.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from hurricanelens.config import NO_SELECTION
from hurricanelens.core.classification import (
    category,
    ace_contribution,
    NUM_CATEGORIES,
)
from hurricanelens.core.models import (
    Observation,
    StormKey,
    StormTrack,
    StormSummary,
    AcePoint,
    IntensitySeries,
    WindRadiiSeries,
    MapTrack,
    KeyStats,
)
from hurricanelens.plotting.colormaps import category_color

logger = logging.getLogger(__name__)


# =============================================================================
# Active Set Filtering
# =============================================================================

def filter_by_year(observations: Iterable[Observation], year: int) -> List[Observation]:
    """
    Observations active in a given year.

    Timestamped observations are active when their UTC year matches. An
    observation without a timestamp is active when its storm has at least one
    timestamped observation in that year; it then counts toward peak wind
    but is left out of anything time-ordered.

    Parameters
    ----------
    observations : iterable of Observation
        All loaded observations
    year : int
        Season year

    Returns
    -------
    list of Observation
        Active observations, in input order
    """
    observations = list(observations)
    keys_in_year = {
        o.key for o in observations
        if o.timestamp is not None and o.timestamp.year == year
    }
    return [
        o for o in observations
        if (o.timestamp.year == year if o.timestamp is not None else o.key in keys_in_year)
    ]


def filter_by_storm(observations: Iterable[Observation], storm_id: Optional[str]) -> List[Observation]:
    """
    Restrict observations to one storm.

    ``NO_SELECTION`` (or an empty id) leaves the set unchanged; an id that
    matches no storm yields an empty list.
    """
    observations = list(observations)
    if not storm_id or storm_id == NO_SELECTION:
        return observations
    key = StormKey.from_storm_id(storm_id)
    if key is None:
        return []
    return [o for o in observations if o.key == key]


# =============================================================================
# Storm Grouping
# =============================================================================

def group_storms(observations: Iterable[Observation]) -> Dict[StormKey, StormTrack]:
    """
    Partition observations into per-storm tracks.

    Each track is sorted ascending by timestamp; ties keep their input
    order. Observations without a timestamp cannot be ordered and are kept
    aside in ``StormTrack.undated``. A storm with no timestamped observation
    at all forms no track.

    Parameters
    ----------
    observations : iterable of Observation
        Observations in any order, possibly spanning several years

    Returns
    -------
    dict
        StormKey -> StormTrack, in order of first appearance

    Examples
    --------
    >>> tracks = group_storms(observations)
    >>> [t.id for t in tracks.values()]
    ['IDALIA-10', 'LEE-13']
    """
    dated: Dict[StormKey, List[Observation]] = defaultdict(list)
    undated: Dict[StormKey, List[Observation]] = defaultdict(list)
    order: List[StormKey] = []

    for obs in observations:
        key = obs.key
        if key not in dated and key not in undated:
            order.append(key)
        if obs.timestamp is None:
            undated[key].append(obs)
        else:
            dated[key].append(obs)

    tracks = {}
    for key in order:
        points = dated.get(key)
        if not points:
            logger.debug(f"Storm {key.storm_id} has no timestamped observations; no track")
            continue
        # sorted() is stable, so equal timestamps keep input order
        points = sorted(points, key=lambda o: o.timestamp)
        tracks[key] = StormTrack(
            key=key,
            observations=tuple(points),
            undated=tuple(undated.get(key, ())),
        )

    return tracks


def find_track(observations: Iterable[Observation], storm_id: Optional[str]) -> Optional[StormTrack]:
    """Track of the selected storm, or None when nothing (valid) is selected."""
    if not storm_id or storm_id == NO_SELECTION:
        return None
    key = StormKey.from_storm_id(storm_id)
    if key is None:
        return None
    return group_storms(o for o in observations if o.key == key).get(key)


# =============================================================================
# Per-Storm Aggregation
# =============================================================================

def summarize_track(track: StormTrack) -> StormSummary:
    """
    Summary attributes of one storm.

    The category is that of the storm's peak wind over all of its
    observations, not of any single observation.
    """
    first = track.observations[0]
    max_wind = track.max_wind
    return StormSummary(
        id=track.id,
        display_name=first.display_name,
        max_wind_kt=max_wind,
        category=category(max_wind),
        cyclone_number=track.key.cyclone_number,
        storm_name=track.key.name,
    )


def storm_summaries(observations: Iterable[Observation]) -> List[StormSummary]:
    """
    One summary per storm, sorted by cyclone number then label.

    Storms without a cyclone number sort first.
    """
    summaries = [summarize_track(t) for t in group_storms(observations).values()]
    summaries.sort(key=lambda s: (s.cyclone_number or 0, s.label))
    return summaries


def storm_options(summaries: Sequence[StormSummary]) -> Dict[str, str]:
    """
    Selector options mapping label -> storm id, led by an "All Storms" entry.

    Examples
    --------
    >>> storm_options([])
    {'All Storms': 'none'}
    """
    options = {'All Storms': NO_SELECTION}
    for s in summaries:
        options[s.label] = s.id
    return options


# =============================================================================
# Season Aggregates
# =============================================================================

def cumulative_ace_by_date(observations: Iterable[Observation]) -> List[AcePoint]:
    """
    Running ACE total per UTC calendar date.

    Contributions from all storms on the same day are summed, then
    accumulated in ascending date order, so the series never decreases.
    Observations without a timestamp are ignored.

    Returns
    -------
    list of AcePoint
        (date, cumulative_ace) pairs, ascending by date
    """
    daily: Dict[date, float] = defaultdict(float)
    for obs in observations:
        if obs.timestamp is None:
            continue
        daily[obs.timestamp.date()] += ace_contribution(obs.max_wind_kt)

    points = []
    running = 0.0
    for day in sorted(daily):
        running += daily[day]
        points.append(AcePoint(day, running))
    return points


def category_counts(observations: Iterable[Observation]) -> List[int]:
    """
    Number of storms per peak category, indices 0 (TS) .. 5.

    Each storm is represented by its strongest observation; the counts sum
    to the number of distinct storms, not observations.
    """
    peaks: Dict[StormKey, Observation] = {}
    for obs in observations:
        best = peaks.get(obs.key)
        if best is None or obs.max_wind_kt > best.max_wind_kt:
            peaks[obs.key] = obs

    counts = [0] * NUM_CATEGORIES
    for obs in peaks.values():
        counts[category(obs.max_wind_kt)] += 1
    return counts


def key_stats(observations: Iterable[Observation]) -> KeyStats:
    """Total storms, strongest wind and latest observation time of the set."""
    observations = list(observations)
    if not observations:
        return KeyStats()

    times = [o.timestamp for o in observations if o.timestamp is not None]
    return KeyStats(
        total_storms=len({o.key for o in observations}),
        strongest_wind_kt=max(o.max_wind_kt for o in observations),
        last_update=max(times) if times else None,
    )


# =============================================================================
# Per-Storm Series
# =============================================================================

def intensity_series(track: Optional[StormTrack]) -> IntensitySeries:
    """
    Wind and pressure series of one storm.

    ``winds`` is aligned with ``times``. Pressures are only listed where a
    reading exists, with their own ``pressure_times``; do not assume index
    alignment between the two. A missing track gives an empty series.
    """
    if track is None:
        return IntensitySeries(storm_id=NO_SELECTION, display_name='')

    points = track.observations
    with_pressure = [o for o in points if o.min_pressure_mb is not None]

    return IntensitySeries(
        storm_id=track.id,
        display_name=points[0].display_name,
        times=tuple(o.timestamp for o in points),
        winds=tuple(o.max_wind_kt for o in points),
        pressure_times=tuple(o.timestamp for o in with_pressure),
        pressures=tuple(o.min_pressure_mb for o in with_pressure),
        colors=tuple(category_color(o.max_wind_kt) for o in points),
        max_wind_kt=track.max_wind,
    )


def intensity_tracks(
    observations: Iterable[Observation],
    selected_storm_id: Optional[str] = NO_SELECTION
) -> List[IntensitySeries]:
    """
    Intensity series for every storm of the set, or only the selected one.

    An id that matches no storm in the set yields an empty list.
    """
    tracks = group_storms(observations)
    if selected_storm_id and selected_storm_id != NO_SELECTION:
        key = StormKey.from_storm_id(selected_storm_id)
        track = tracks.get(key) if key is not None else None
        return [intensity_series(track)] if track is not None else []
    return [intensity_series(t) for t in tracks.values()]


# Wind-radii simulation constants (nautical miles)
R34_RANGE = (20.0, 300.0)
R50_RANGE = (10.0, 200.0)
R64_RANGE = (5.0, 100.0)
R34_WOBBLE_NM = 40.0
LANDFALL_FRACTION = 0.6


def wind_radii_series(track: Optional[StormTrack]) -> WindRadiiSeries:
    """
    Simulated 34/50/64-kt wind radii for one storm.

    The feed carries no radii, so they are synthesized from wind speed:
    the 34-kt radius grows with wind plus a sinusoidal wobble, the 50-kt and
    64-kt radii are zero below their own thresholds. A synthetic landfall is
    marked 60% of the way through the track. The result is flagged as
    simulated and must not be presented as measured data.

    Parameters
    ----------
    track : StormTrack or None
        Selected storm; None gives an empty series

    Returns
    -------
    WindRadiiSeries
        Radii aligned with the track's timestamps
    """
    if track is None:
        return WindRadiiSeries(storm_id=NO_SELECTION, display_name='')

    points = track.observations
    winds = np.array([o.max_wind_kt for o in points], dtype=float)
    index = np.arange(len(points))

    r34 = np.clip(winds * 2, *R34_RANGE) + np.sin(index * 0.5) * R34_WOBBLE_NM
    r50 = np.where(winds >= 50, np.clip(winds, *R50_RANGE), 0.0)
    r64 = np.where(winds >= 64, np.clip(winds / 2, *R64_RANGE), 0.0)

    return WindRadiiSeries(
        storm_id=track.id,
        display_name=points[0].display_name,
        times=tuple(o.timestamp for o in points),
        r34=tuple(float(v) for v in r34),
        r50=tuple(float(v) for v in r50),
        r64=tuple(float(v) for v in r64),
        landfall_index=int(len(points) * LANDFALL_FRACTION),
    )


# =============================================================================
# Map Data
# =============================================================================

def map_tracks(observations: Iterable[Observation]) -> List[MapTrack]:
    """
    Plottable track of each storm, coloured by the storm's peak category.

    Observations without a position are left out; storms with no plottable
    point are skipped.
    """
    result = []
    for track in group_storms(observations).values():
        points = tuple(o for o in track.observations if o.has_position)
        if not points:
            continue
        result.append(MapTrack(
            storm_id=track.id,
            display_name=points[0].display_name,
            color=category_color(track.max_wind),
            points=points,
        ))
    return result
