"""Tests for the storm grouping and derivation functions."""

import math
from datetime import date, datetime, timedelta, timezone

import pytest

from hurricanelens.config import NO_SELECTION
from hurricanelens.core.classification import ace_contribution
from hurricanelens.core.models import StormKey
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
from hurricanelens.plotting.colormaps import CATEGORY_PALETTE


class TestStormKey:
    """Tests for storm id rendering and parsing."""

    def test_round_trip(self):
        key = StormKey('IAN', 9)
        assert key.storm_id == 'IAN-9'
        assert StormKey.from_storm_id('IAN-9') == key

    def test_hyphenated_name(self):
        """The id is split on its last hyphen."""
        key = StormKey('ONE-E', 1)
        assert StormKey.from_storm_id(key.storm_id) == key

    def test_unnamed_storm(self):
        assert StormKey.from_storm_id(StormKey('', 5).storm_id) == StormKey('', 5)

    @pytest.mark.parametrize("storm_id", ['', 'IAN', 'IAN-x'])
    def test_invalid(self, storm_id):
        assert StormKey.from_storm_id(storm_id) is None


class TestFilters:
    """Tests for year and storm filtering."""

    def test_year_filter(self, two_season_observations):
        active = filter_by_year(two_season_observations, 2021)
        assert {o.storm_name for o in active} == {'ALPHA'}
        assert len(active) == 3

    def test_year_filter_keeps_undated_of_active_storm(self, two_season_observations):
        """Undated observations follow their storm into its season."""
        active = filter_by_year(two_season_observations, 2022)
        assert len(active) == 2
        assert any(o.timestamp is None for o in active)

    def test_year_without_storms(self, two_season_observations):
        assert filter_by_year(two_season_observations, 2015) == []

    def test_storm_filter_none_keeps_all(self, two_season_observations):
        assert filter_by_storm(two_season_observations, NO_SELECTION) == two_season_observations

    def test_storm_filter(self, two_season_observations):
        result = filter_by_storm(two_season_observations, 'BRAVO-2')
        assert len(result) == 2
        assert all(o.storm_name == 'BRAVO' for o in result)

    def test_unknown_storm_is_empty(self, two_season_observations):
        assert filter_by_storm(two_season_observations, 'ZETA-99') == []


class TestGroupStorms:
    """Tests for the storm grouper."""

    def test_tracks_sorted_by_time(self, two_season_observations):
        tracks = group_storms(two_season_observations)
        alpha = tracks[StormKey('ALPHA', 1)]
        times = [o.timestamp for o in alpha.observations]
        assert times == sorted(times)
        assert len(alpha) == 3

    def test_first_appearance_order(self, two_season_observations):
        tracks = group_storms(two_season_observations)
        assert [t.id for t in tracks.values()] == ['ALPHA-1', 'BRAVO-2']

    def test_ties_keep_input_order(self, obs, at):
        t = at(2020, 9, 1)
        first = obs('BETA', 2, t, 50)
        second = obs('BETA', 2, t, 55)
        track = group_storms([first, second])[StormKey('BETA', 2)]
        assert track.observations == (first, second)

    def test_idempotent(self, two_season_observations):
        once = group_storms(two_season_observations)
        flattened = [o for t in once.values() for o in t.observations + t.undated]
        assert group_storms(flattened) == once

    def test_undated_kept_aside(self, two_season_observations):
        bravo = group_storms(two_season_observations)[StormKey('BRAVO', 2)]
        assert len(bravo.observations) == 1
        assert len(bravo.undated) == 1
        assert bravo.max_wind == 150

    def test_storm_without_dated_observations_has_no_track(self, obs):
        assert group_storms([obs('GHOST', 7, None, 40)]) == {}

    def test_same_name_different_number_are_distinct(self, obs, at):
        tracks = group_storms([
            obs('UNNAMED', 1, at(2020, 6, 1), 30),
            obs('UNNAMED', 2, at(2020, 7, 1), 30),
        ])
        assert len(tracks) == 2

    def test_find_track(self, two_season_observations):
        assert find_track(two_season_observations, 'ALPHA-1').id == 'ALPHA-1'
        assert find_track(two_season_observations, NO_SELECTION) is None
        assert find_track(two_season_observations, 'ZETA-99') is None


class TestSummaries:
    """Tests for per-storm summaries and selector options."""

    def test_summary_uses_peak_wind(self, two_season_observations):
        alpha = group_storms(two_season_observations)[StormKey('ALPHA', 1)]
        summary = summarize_track(alpha)
        assert summary.id == 'ALPHA-1'
        assert summary.max_wind_kt == 90
        assert summary.category == 2
        assert summary.display_name == 'ALPHA (1)'

    def test_summary_counts_undated_peak(self, two_season_observations):
        bravo = group_storms(two_season_observations)[StormKey('BRAVO', 2)]
        assert summarize_track(bravo).category == 5

    def test_sorted_by_cyclone_number(self, obs, at):
        observations = [
            obs('LATE', 12, at(2020, 10, 1), 40),
            obs('EARLY', 3, at(2020, 6, 1), 40),
        ]
        assert [s.id for s in storm_summaries(observations)] == ['EARLY-3', 'LATE-12']

    def test_label(self, two_season_observations):
        summary = storm_summaries(two_season_observations)[0]
        assert summary.label == 'ALPHA – #1 (90 kt)'

    def test_options(self, two_season_observations):
        options = storm_options(storm_summaries(two_season_observations))
        assert list(options.values()) == [NO_SELECTION, 'ALPHA-1', 'BRAVO-2']
        assert list(options)[0] == 'All Storms'


class TestCumulativeAce:
    """Tests for the running ACE series."""

    def test_monotonic_and_total(self, two_season_observations):
        points = cumulative_ace_by_date(two_season_observations)
        values = [p.cumulative_ace for p in points]
        assert values == sorted(values)

        expected = sum(
            ace_contribution(o.max_wind_kt)
            for o in two_season_observations if o.timestamp is not None
        )
        assert values[-1] == pytest.approx(expected)

    def test_same_day_summed(self, obs, at):
        points = cumulative_ace_by_date([
            obs('A', 1, at(2020, 9, 1, 0), 100),
            obs('B', 2, at(2020, 9, 1, 12), 100),
            obs('A', 1, at(2020, 9, 2, 0), 30),
        ])
        assert points[0].date == date(2020, 9, 1)
        assert points[0].cumulative_ace == pytest.approx(2.0)
        assert points[1].cumulative_ace == pytest.approx(2.0)

    def test_dates_ascending(self, two_season_observations):
        dates = [p.date for p in cumulative_ace_by_date(two_season_observations)]
        assert dates == sorted(dates)
        assert len(dates) == len(set(dates))

    def test_empty(self):
        assert cumulative_ace_by_date([]) == []


class TestCategoryCounts:
    """Tests for storms-per-category counting."""

    def test_counts_sum_to_distinct_storms(self, two_season_observations):
        counts = category_counts(two_season_observations)
        assert sum(counts) == 2
        assert len(counts) == 6

    def test_one_storm_per_peak(self, two_season_observations):
        counts = category_counts(filter_by_year(two_season_observations, 2021))
        assert counts == [0, 0, 1, 0, 0, 0]

    def test_undated_peak_counts(self, two_season_observations):
        counts = category_counts(filter_by_year(two_season_observations, 2022))
        assert counts == [0, 0, 0, 0, 0, 1]

    def test_empty(self):
        assert category_counts([]) == [0] * 6


class TestKeyStats:
    """Tests for the season key stats."""

    def test_stats(self, two_season_observations, at):
        stats = key_stats(filter_by_year(two_season_observations, 2022))
        assert stats.total_storms == 1
        assert stats.strongest_wind_kt == 150
        assert stats.last_update == at(2022, 9, 10, 6)

    def test_empty(self):
        stats = key_stats([])
        assert stats.total_storms == 0
        assert stats.last_update is None


class TestIntensity:
    """Tests for intensity series."""

    def test_sparse_pressures(self, two_season_observations):
        series = intensity_series(find_track(two_season_observations, 'ALPHA-1'))
        assert len(series.times) == len(series.winds) == 3
        assert series.pressures == (1000, 975)
        assert len(series.pressure_times) == 2
        assert series.max_wind_kt == 90

    def test_colors_follow_category(self, two_season_observations):
        series = intensity_series(find_track(two_season_observations, 'ALPHA-1'))
        assert series.colors == (CATEGORY_PALETTE[0], CATEGORY_PALETTE[1], CATEGORY_PALETTE[2])

    def test_missing_track_is_empty(self):
        assert intensity_series(None).is_empty

    def test_all_storms(self, two_season_observations):
        assert len(intensity_tracks(two_season_observations)) == 2

    def test_selected_storm(self, two_season_observations):
        tracks = intensity_tracks(two_season_observations, 'BRAVO-2')
        assert [t.storm_id for t in tracks] == ['BRAVO-2']

    def test_unknown_storm_is_empty(self, two_season_observations):
        assert intensity_tracks(two_season_observations, 'ZETA-99') == []


class TestWindRadii:
    """Tests for the simulated wind-radii series."""

    def test_shape_and_landfall(self, two_season_observations):
        radii = wind_radii_series(find_track(two_season_observations, 'ALPHA-1'))
        assert len(radii.r34) == len(radii.r50) == len(radii.r64) == len(radii.times) == 3
        assert radii.landfall_index == 1
        assert radii.landfall_time == radii.times[1]
        assert radii.simulated

    def test_values(self, two_season_observations):
        radii = wind_radii_series(find_track(two_season_observations, 'ALPHA-1'))
        # winds in time order: 40, 65, 90
        assert radii.r34[0] == pytest.approx(80.0)
        assert radii.r34[1] == pytest.approx(130.0 + math.sin(0.5) * 40)
        assert radii.r50 == pytest.approx((0.0, 65.0, 90.0))
        assert radii.r64 == pytest.approx((0.0, 32.5, 45.0))

    def test_clipping(self, obs, at):
        track = find_track([obs('BIG', 1, at(2020, 9, 1), 185)], 'BIG-1')
        radii = wind_radii_series(track)
        assert radii.r34[0] == pytest.approx(300.0)
        assert radii.r50[0] == pytest.approx(185.0)
        assert radii.r64[0] == pytest.approx(92.5)

    def test_no_selection_is_empty(self):
        radii = wind_radii_series(None)
        assert radii.is_empty
        assert radii.landfall_time is None


class TestMapTracks:
    """Tests for plottable track extraction."""

    def test_positions_only(self, obs, at):
        tracks = map_tracks([
            obs('A', 1, at(2020, 9, 1), 70, lat=20.0, lon=-60.0),
            obs('A', 1, at(2020, 9, 2), 120, lat=None, lon=None),
            obs('B', 2, at(2020, 9, 3), 40),
        ])
        assert len(tracks) == 1
        assert len(tracks[0].points) == 1

    def test_color_from_storm_peak(self, obs, at):
        tracks = map_tracks([
            obs('A', 1, at(2020, 9, 1), 70, lat=20.0, lon=-60.0),
            obs('A', 1, at(2020, 9, 2), 120, lat=22.0, lon=-62.0),
        ])
        assert tracks[0].color == CATEGORY_PALETTE[4]


class TestUtcNormalisation:
    """Tests that seasons and ACE dates are taken in UTC."""

    EST = timezone(timedelta(hours=-5))

    def test_aware_timestamp_converted(self, obs):
        o = obs('A', 1, datetime(2021, 12, 31, 23, tzinfo=self.EST), 100)
        assert o.timestamp == datetime(2022, 1, 1, 4, tzinfo=timezone.utc)
        assert o.timestamp.utcoffset() == timedelta(0)

    def test_naive_timestamp_taken_as_utc(self, obs):
        o = obs('A', 1, datetime(2021, 12, 31, 23), 100)
        assert o.timestamp.tzinfo is not None
        assert o.timestamp.year == 2021

    def test_new_years_eve_local_time_lands_in_next_season(self, obs):
        observations = [obs('A', 1, datetime(2021, 12, 31, 23, tzinfo=self.EST), 100)]
        assert len(filter_by_year(observations, 2022)) == 1
        assert filter_by_year(observations, 2021) == []
        points = cumulative_ace_by_date(observations)
        assert points[0].date == date(2022, 1, 1)
        assert points[0].cumulative_ace == pytest.approx(1.0)
