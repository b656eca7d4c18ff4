"""
Metadata Formatting Utilities

Functions for formatting time values and building the key-stats and
storm-information displays of the sidebar.
"""

from datetime import datetime
from typing import Any, Optional

import numpy as np
import pandas as pd

from hurricanelens.core.classification import CATEGORY_LABELS
from hurricanelens.core.models import KeyStats, StormSummary


def format_time_value(real_t: Any, fmt: str = '%Y-%m-%d %H:%M:%S') -> str:
    """
    Format time value for display.

    Parameters
    ----------
    real_t : Any
        Time value (datetime, datetime64, pandas Timestamp or None)
    fmt : str, optional
        strftime format

    Returns
    -------
    str
        Formatted time string, 'N/A' for missing values

    Examples
    --------
    >>> format_time_value(datetime(2024, 10, 9, 18), '%Y-%m-%d')
    '2024-10-09'
    >>> format_time_value(None)
    'N/A'
    """
    if real_t is None:
        return 'N/A'

    if isinstance(real_t, (datetime, np.datetime64, pd.Timestamp)):
        ts = pd.Timestamp(real_t)
        if pd.isna(ts):
            return 'N/A'
        return ts.strftime(fmt)

    # Fallback: convert to string
    return str(real_t)


def format_wind(wind_kt: float) -> str:
    """Wind speed with unit, dropping a trailing .0 (e.g. '155 kt')."""
    return f"{wind_kt:g} kt"


def build_stats_markdown(stats: KeyStats, year: Optional[int] = None) -> str:
    """
    Build the "Key Stats" markdown for the sidebar.

    Parameters
    ----------
    stats : KeyStats
        Output of ``key_stats`` for the active year
    year : int, optional
        Active year, shown in the heading

    Returns
    -------
    str
        Markdown-formatted statistics
    """
    heading = f"### Key Stats ({year})" if year is not None else "### Key Stats"
    lines = [
        f"{heading}\n\n",
        f"- **Total Storms**: {stats.total_storms}\n",
        f"- **Strongest Wind**: {format_wind(stats.strongest_wind_kt)}\n",
        f"- **Last Update**: {format_time_value(stats.last_update, '%Y-%m-%d')}\n",
    ]
    return "".join(lines)


def build_storm_markdown(summary: Optional[StormSummary]) -> str:
    """
    Build the selected-storm information markdown.

    A missing summary (nothing selected, or an id absent from the active
    year) renders a hint instead of failing.
    """
    if summary is None:
        return "_Select a storm to see its details._"

    lines = [
        f"### {summary.display_name}\n\n",
        f"- **Storm ID**: `{summary.id}`\n",
        f"- **Peak Wind**: {format_wind(summary.max_wind_kt)}\n",
        f"- **Peak Category**: {CATEGORY_LABELS[summary.category]}\n",
    ]
    return "".join(lines)
