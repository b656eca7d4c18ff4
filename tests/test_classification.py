"""Tests for Saffir-Simpson classification, ACE and the category palette."""

import pytest

from hurricanelens.core.classification import (
    category,
    ace_contribution,
    coerce_wind,
    CATEGORY_LABELS,
    NUM_CATEGORIES,
)
from hurricanelens.plotting.colormaps import (
    CATEGORY_PALETTE,
    category_color,
    get_category_legend,
    to_hex_palette,
)

BOUNDARIES = [
    (0, 0),
    (33.9, 0),
    (34, 0),
    (63.9, 0),
    (64, 1),
    (82.9, 1),
    (83, 2),
    (95.9, 2),
    (96, 3),
    (112.9, 3),
    (113, 4),
    (136.9, 4),
    (137, 5),
    (185, 5),
]


class TestCategory:
    """Tests for category binning."""

    @pytest.mark.parametrize("wind, expected", BOUNDARIES)
    def test_boundaries(self, wind, expected):
        """Lower bounds are inclusive."""
        assert category(wind) == expected

    @pytest.mark.parametrize("wind, expected", BOUNDARIES)
    def test_color_agrees_with_category(self, wind, expected):
        """Palette lookup uses the same bins as the category."""
        assert category_color(wind) == CATEGORY_PALETTE[expected]

    def test_missing_wind_is_tropical_storm(self):
        """NaN and negative wind bin as 0 kt, never as the top category."""
        assert category(float('nan')) == 0
        assert category(-10) == 0
        assert category_color(float('nan')) == CATEGORY_PALETTE[0]

    def test_labels_cover_all_categories(self):
        assert len(CATEGORY_LABELS) == NUM_CATEGORIES == 6
        assert CATEGORY_LABELS[0] == 'Tropical Storm'
        assert CATEGORY_LABELS[5] == 'Category 5'


class TestAce:
    """Tests for per-observation ACE contribution."""

    def test_below_tropical_storm_is_zero(self):
        assert ace_contribution(33.9) == 0.0
        assert ace_contribution(0) == 0.0

    def test_at_threshold(self):
        assert ace_contribution(34) == pytest.approx(0.1156)

    def test_hundred_knots(self):
        assert ace_contribution(100) == pytest.approx(1.0)


class TestCoerceWind:
    """Tests for missing and invalid wind handling."""

    @pytest.mark.parametrize("value", [None, float('nan'), -5])
    def test_invalid_becomes_zero(self, value):
        assert coerce_wind(value) == 0.0

    def test_valid_passes_through(self):
        assert coerce_wind(85) == 85.0


class TestPalette:
    """Tests for palette helpers."""

    def test_palette_is_hex(self):
        assert all(c.startswith('#') and len(c) == 7 for c in CATEGORY_PALETTE)
        assert len(CATEGORY_PALETTE) == NUM_CATEGORIES

    def test_to_hex_palette_accepts_names(self):
        assert to_hex_palette(['black', '#FFFFFF']) == ['#000000', '#ffffff']

    def test_invalid_colour_raises(self):
        with pytest.raises(ValueError):
            to_hex_palette(['not-a-colour'])

    def test_legend_order(self):
        legend = get_category_legend()
        assert len(legend) == NUM_CATEGORIES
        assert legend[0][0] == CATEGORY_PALETTE[0]
        assert legend[-1][0] == CATEGORY_PALETTE[5]
