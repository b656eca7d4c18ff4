"""
HurricaneLens Application Controller

This module provides the main Controller class that orchestrates all
application logic for the HurricaneLens dashboard.

The HurricaneLensController follows the Controller pattern, separating:
- View (UI widgets, layout) - in hurricanelens.ui
- Model (feed loading, derivations, selection state) - in hurricanelens.core
  and hurricanelens.state
- Controller (this module) - orchestrates View and Model

Widgets never write to the views directly: user input goes to ``AppState``,
and every view is recomputed from a state snapshot when the state notifies.
"""

import logging
from typing import Dict, Any, Optional

import panel as pn

from hurricanelens.config import HurricaneLensConfig, config as default_config, NO_SELECTION
from hurricanelens.state import AppState, StateSnapshot
from hurricanelens.core.data_loader import load_observations
from hurricanelens.core.data_processor import (
    filter_by_storm,
    find_track,
    storm_summaries,
    storm_options,
    category_counts,
    cumulative_ace_by_date,
    key_stats,
    intensity_series,
    intensity_tracks,
    wind_radii_series,
    map_tracks,
)
from hurricanelens.plotting.charts import (
    create_ace_chart,
    create_category_bar,
    create_intensity_chart,
    create_pressure_chart,
    create_wind_radii_chart,
)
from hurricanelens.plotting.track_map import create_track_map
from hurricanelens.utils.metadata import build_stats_markdown, build_storm_markdown

logger = logging.getLogger(__name__)


class HurricaneLensController:
    """
    Main application controller for the HurricaneLens dashboard.

    Parameters
    ----------
    widgets : dict
        Dictionary of all widgets created by create_all_widgets()
    state : AppState, optional
        Selection state for this session (a new one is created if omitted)
    cfg : HurricaneLensConfig, optional
        Configuration (feed location, default year)

    Attributes
    ----------
    state : AppState
        The session's selection state
    widgets : dict
        Reference to all UI widgets

    Example
    -------
    >>> from hurricanelens.ui import create_dashboard
    >>> from hurricanelens.controllers import HurricaneLensController
    >>>
    >>> layout = create_dashboard()
    >>> controller = HurricaneLensController(layout._hurricanelens_widgets)
    >>> controller.attach_callbacks()
    >>> controller.schedule_load()
    """

    def __init__(
        self,
        widgets: Dict[str, Any],
        state: Optional[AppState] = None,
        cfg: Optional[HurricaneLensConfig] = None
    ):
        self.widgets = widgets
        self.cfg = cfg or default_config
        self.state = state or AppState(year=self.cfg.default_year)

        # Guards widget updates made by the controller itself
        self._syncing_widgets = False

        self._state_watcher = self.state.subscribe(self.refresh)
        self.refresh(self.state.snapshot())

        logger.info("HurricaneLensController initialized")

    # =========================================================================
    # Data Loading
    # =========================================================================

    def load_data(self, event=None) -> bool:
        """
        Fetch the storm feed and initialise the state with it.

        On failure the state keeps its previous (initially empty) observations,
        the error is shown in the status pane and the retry button is enabled.

        Returns
        -------
        bool
            True if the feed was loaded
        """
        self.state.is_loading = True
        try:
            result = load_observations(
                self.cfg.csv_url,
                timeout=self.cfg.fetch_timeout,
                basin_prefix=self.cfg.basin_prefix
            )
        finally:
            self.state.is_loading = False

        if not result.ok:
            message = f"Could not load storm data: {result.error}"
            self.state.load_error = message
            self.widgets['status'].object = message
            self.widgets['status'].visible = True
            self.widgets['reload_btn'].visible = True
            if pn.state.notifications:
                pn.state.notifications.error(message)
            logger.error(message, exc_info=result.error)
            return False

        self.widgets['status'].visible = False
        self.widgets['reload_btn'].visible = False
        self.state.init(result.observations)

        if pn.state.notifications:
            pn.state.notifications.success(f"Loaded {len(result.observations)} storm observations.")
        return True

    def schedule_load(self):
        """Load the feed once the page has rendered, or right away outside a server."""
        if pn.state.curdoc is not None:
            pn.state.onload(self.load_data)
        else:
            self.load_data()

    # =========================================================================
    # Widget Callbacks
    # =========================================================================

    def on_year_change(self, event):
        """Year slider moved: set the year (this also clears the storm selection)."""
        if self._syncing_widgets:
            return
        self.state.set_year(event.new)

    def on_storm_change(self, event):
        """Storm selector changed: select the storm, or all storms."""
        if self._syncing_widgets:
            return
        self.state.set_storm(event.new)

    # =========================================================================
    # View Refresh
    # =========================================================================

    def refresh(self, snapshot: StateSnapshot):
        """
        Recompute every view from one state snapshot.

        A selected id that matches no storm of the active year is treated
        as no selection by the season views; the per-storm views show their
        empty state.
        """
        active = snapshot.active
        summaries = storm_summaries(active)
        by_id = {s.id: s for s in summaries}

        selected = snapshot.selected_storm_id
        resolved = selected if selected in by_id else NO_SELECTION
        if snapshot.has_selection and resolved == NO_SELECTION:
            logger.info(f"Selected storm {selected} not found in {snapshot.year}")

        self._sync_widgets(snapshot, storm_options(summaries), resolved)

        # Sidebar
        self.widgets['stats'].object = build_stats_markdown(key_stats(active), snapshot.year)
        self.widgets['storm_info'].object = build_storm_markdown(by_id.get(resolved))

        # Season views
        charts = self.widgets['charts']
        charts['category'].object = create_category_bar(category_counts(active))
        charts['ace'].object = create_ace_chart(cumulative_ace_by_date(active))
        charts['map'].object = create_track_map(
            map_tracks(filter_by_storm(active, resolved)), resolved
        )

        # Per-storm views
        track = find_track(active, resolved)
        charts['intensity'].object = create_intensity_chart(
            intensity_tracks(active, resolved), resolved, snapshot.year
        )
        charts['pressure'].object = create_pressure_chart(intensity_series(track))
        charts['radii'].object = create_wind_radii_chart(wind_radii_series(track))

        logger.debug(
            f"Views refreshed: year={snapshot.year}, storm={selected}, "
            f"{len(active)} active observations, {len(summaries)} storms"
        )

    def _sync_widgets(self, snapshot: StateSnapshot, options: Dict[str, str], selected: str):
        """Reflect the state in the year slider and storm selector."""
        self._syncing_widgets = True
        try:
            if self.widgets['year_slider'].value != snapshot.year:
                self.widgets['year_slider'].value = snapshot.year
            selector = self.widgets['storm_selector']
            selector.options = options
            selector.value = selected
        finally:
            self._syncing_widgets = False

    # =========================================================================
    # Callback Attachment
    # =========================================================================

    def attach_callbacks(self):
        """
        Attach all widget callbacks.

        This method connects all widgets to their respective handler methods.
        It should be called once after the controller is initialized.
        """
        logger.info("Attaching callbacks...")

        self.widgets['year_slider'].param.watch(self.on_year_change, 'value')
        self.widgets['storm_selector'].param.watch(self.on_storm_change, 'value')
        self.widgets['reload_btn'].on_click(self.load_data)

        logger.info("All callbacks attached")

    def detach(self):
        """Stop listening to state changes (end of session)."""
        self.state.unsubscribe(self._state_watcher)
