"""Tests for the selection state and its notifications."""

from hurricanelens.config import DEFAULT_YEAR, NO_SELECTION
from hurricanelens.state import AppState


class TestTransitions:
    """Tests for init, set_year and set_storm."""

    def test_defaults(self):
        state = AppState()
        assert state.year == DEFAULT_YEAR
        assert state.selected_storm_id == NO_SELECTION
        assert state.observations == ()

    def test_set_year_clears_selection(self):
        state = AppState()
        state.set_storm('ALPHA-1')
        state.set_year(2021)
        assert state.year == 2021
        assert state.selected_storm_id == NO_SELECTION

    def test_init_keeps_year_and_selection(self, two_season_observations):
        state = AppState(year=2021)
        state.set_storm('ALPHA-1')
        state.init(two_season_observations)
        assert state.year == 2021
        assert state.selected_storm_id == 'ALPHA-1'
        assert len(state.observations) == 5

    def test_init_clears_load_error(self):
        state = AppState()
        state.load_error = 'boom'
        state.init([])
        assert state.load_error is None

    def test_set_storm_none_means_all(self):
        state = AppState()
        state.set_storm('ALPHA-1')
        state.set_storm(None)
        assert state.selected_storm_id == NO_SELECTION

    def test_unknown_storm_is_stored(self):
        """Ids are not validated by the state."""
        state = AppState()
        state.set_storm('ZETA-99')
        assert state.selected_storm_id == 'ZETA-99'


class TestSnapshot:
    """Tests for snapshots and the active set."""

    def test_active_follows_year(self, two_season_observations):
        state = AppState(year=2022)
        state.init(two_season_observations)
        snapshot = state.snapshot()
        assert {o.storm_name for o in snapshot.active} == {'BRAVO'}
        assert not snapshot.has_selection

    def test_snapshot_is_a_copy(self):
        state = AppState(year=2021)
        snapshot = state.snapshot()
        state.set_year(2023)
        assert snapshot.year == 2021


class TestSubscribe:
    """Tests for change notifications."""

    def test_set_year_notifies_once_with_consistent_state(self):
        state = AppState()
        state.set_storm('ALPHA-1')
        seen = []
        state.subscribe(seen.append)

        state.set_year(2021)

        assert len(seen) == 1
        assert seen[0].year == 2021
        assert seen[0].selected_storm_id == NO_SELECTION

    def test_init_notifies(self, two_season_observations):
        state = AppState()
        seen = []
        state.subscribe(seen.append)
        state.init(two_season_observations)
        assert len(seen) == 1
        assert len(seen[0].observations) == 5

    def test_loading_flags_do_not_notify(self):
        state = AppState()
        seen = []
        state.subscribe(seen.append)
        state.is_loading = True
        state.load_error = 'boom'
        assert seen == []

    def test_unsubscribe(self):
        state = AppState()
        seen = []
        watcher = state.subscribe(seen.append)
        state.unsubscribe(watcher)
        state.set_storm('ALPHA-1')
        assert seen == []
