"""
HurricaneLens Core Module

Typed storm records, feed loading, intensity classification and the pure
derivation functions behind every view.
"""

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
    LoadResult,
)

from hurricanelens.core.classification import (
    category,
    ace_contribution,
    CATEGORY_LABELS,
)

from hurricanelens.core.data_loader import (
    FeedError,
    FeedFetchError,
    FeedParseError,
    fetch_feed_text,
    parse_feed,
    rows_to_observations,
    load_observations,
)

from hurricanelens.core.data_processor import (
    filter_by_year,
    filter_by_storm,
    group_storms,
    find_track,
    summarize_track,
    storm_summaries,
    storm_options,
    cumulative_ace_by_date,
    category_counts,
    key_stats,
    intensity_series,
    intensity_tracks,
    wind_radii_series,
    map_tracks,
)

__all__ = [
    # Models
    'Observation',
    'StormKey',
    'StormTrack',
    'StormSummary',
    'AcePoint',
    'IntensitySeries',
    'WindRadiiSeries',
    'MapTrack',
    'KeyStats',
    'LoadResult',
    # Classification
    'category',
    'ace_contribution',
    'CATEGORY_LABELS',
    # Feed Loading
    'FeedError',
    'FeedFetchError',
    'FeedParseError',
    'fetch_feed_text',
    'parse_feed',
    'rows_to_observations',
    'load_observations',
    # Derivations
    'filter_by_year',
    'filter_by_storm',
    'group_storms',
    'find_track',
    'summarize_track',
    'storm_summaries',
    'storm_options',
    'cumulative_ace_by_date',
    'category_counts',
    'key_stats',
    'intensity_series',
    'intensity_tracks',
    'wind_radii_series',
    'map_tracks',
]
