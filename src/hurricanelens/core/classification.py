"""
Storm Intensity Classification

Saffir-Simpson binning and Accumulated Cyclone Energy (ACE) for a single
sustained-wind value in knots.
"""

from bisect import bisect_right
from typing import Optional


# =============================================================================
# Saffir-Simpson Thresholds
# =============================================================================

# Tropical storm lower bound; also the ACE qualifying threshold
TROPICAL_STORM_KT = 34

# Lower bounds (kt) of categories 1..5; intervals are [lower, upper)
CATEGORY_THRESHOLDS_KT = (64, 83, 96, 113, 137)

CATEGORY_LABELS = (
    'Tropical Storm',
    'Category 1',
    'Category 2',
    'Category 3',
    'Category 4',
    'Category 5',
)

CATEGORY_RANGES = (
    'TS (<64 kt)',
    'Cat 1 (64-82 kt)',
    'Cat 2 (83-95 kt)',
    'Cat 3 (96-112 kt)',
    'Cat 4 (113-136 kt)',
    'Cat 5 (≥137 kt)',
)

NUM_CATEGORIES = len(CATEGORY_LABELS)


def category(wind_kt: float) -> int:
    """
    Saffir-Simpson category (0..5) of a sustained wind speed.

    Category 0 covers both tropical depressions and tropical storms
    (below 64 kt). Missing (NaN) or negative wind is treated as 0 kt.

    Examples
    --------
    >>> category(63.9), category(64), category(137)
    (0, 1, 5)
    """
    return bisect_right(CATEGORY_THRESHOLDS_KT, coerce_wind(wind_kt))


def ace_contribution(wind_kt: float) -> float:
    """
    ACE contribution of one observation, in units of 10^4 kt^2.

    Only tropical-storm strength winds (>= 34 kt) contribute.

    Examples
    --------
    >>> ace_contribution(33), ace_contribution(100)
    (0.0, 1.0)
    """
    if wind_kt < TROPICAL_STORM_KT:
        return 0.0
    return wind_kt ** 2 / 10000


def coerce_wind(value: Optional[float]) -> float:
    """Treat missing or negative wind as 0 kt."""
    if value is None or value != value or value < 0:
        return 0.0
    return float(value)
