"""
HurricaneLens Utilities

Formatting helpers for time values and sidebar markdown.
"""

from hurricanelens.utils.metadata import (
    format_time_value,
    format_wind,
    build_stats_markdown,
    build_storm_markdown,
)

__all__ = [
    'format_time_value',
    'format_wind',
    'build_stats_markdown',
    'build_storm_markdown',
]
