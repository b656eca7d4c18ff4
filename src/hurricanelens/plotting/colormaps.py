"""
Category Palette Module

This module provides colour handling for HurricaneLens visualization:
- The single Saffir-Simpson category palette shared by every view
- Wind-speed to colour lookup (binned exactly like ``category``)
- Colour normalisation utilities (matplotlib colour specs to hex)
- Legend entries for the map and charts
"""

import logging
from typing import List, Sequence, Tuple

import matplotlib.colors as mcolors

from hurricanelens.core.classification import (
    category,
    CATEGORY_RANGES,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Palette Conversion
# =============================================================================

def to_hex_palette(colors: Sequence[str]) -> List[str]:
    """
    Normalise a list of matplotlib colour specs to lowercase hex strings.

    Accepts hex codes and CSS colour names alike, so palettes written in
    either style resolve to the same representation.

    Parameters
    ----------
    colors : sequence of str
        Colour specs (e.g. '#6b7280', 'gray', 'tab:orange')

    Returns
    -------
    list of str
        Hex colours ('#rrggbb')

    Raises
    ------
    ValueError
        If any entry is not a valid matplotlib colour

    Examples
    --------
    >>> to_hex_palette(['black', '#FFFFFF'])
    ['#000000', '#ffffff']
    """
    return [mcolors.to_hex(c) for c in colors]


# =============================================================================
# Saffir-Simpson Palette
# =============================================================================

# Indexed by category: TS/TD, Cat 1 .. Cat 5
CATEGORY_PALETTE: Tuple[str, ...] = tuple(to_hex_palette([
    '#6b7280',  # gray
    '#eab308',  # yellow
    '#f97316',  # orange
    '#dc2626',  # red
    '#9333ea',  # purple
    '#000000',  # black
]))


def category_color(wind_kt: float) -> str:
    """
    Palette colour for a sustained wind speed.

    Uses ``category`` for binning, so colour and category always agree.

    Examples
    --------
    >>> category_color(64) == CATEGORY_PALETTE[1]
    True
    """
    return CATEGORY_PALETTE[category(wind_kt)]


def get_category_legend() -> List[Tuple[str, str]]:
    """
    Legend entries as (hex colour, range label) pairs, TS first.

    Returns
    -------
    list of tuple
        [('#6b7280', 'TS (<64 kt)'), ...]
    """
    return list(zip(CATEGORY_PALETTE, CATEGORY_RANGES))
