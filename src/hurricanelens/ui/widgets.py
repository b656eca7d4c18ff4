"""
UI Widgets Module

This module provides factory functions for creating all Panel widgets used in HurricaneLens.
Each function creates a properly configured widget with default values and settings.
"""

import logging
from typing import Dict, Optional

import panel as pn

from hurricanelens.config import HurricaneLensConfig, config as default_config, NO_SELECTION
from hurricanelens.plotting.track_map import legend_markdown

logger = logging.getLogger(__name__)


# =============================================================================
# Selection Controls
# =============================================================================

def create_year_slider(cfg: Optional[HurricaneLensConfig] = None) -> pn.widgets.IntSlider:
    """
    Create the season year slider.

    Parameters
    ----------
    cfg : HurricaneLensConfig, optional
        Configuration providing the year bounds (default: global config)

    Returns
    -------
    pn.widgets.IntSlider
        Year slider

    Examples
    --------
    >>> slider = create_year_slider()
    >>> slider.value
    2024
    """
    cfg = cfg or default_config
    return pn.widgets.IntSlider(
        name='Select Year',
        start=cfg.min_year,
        end=cfg.max_year,
        value=cfg.default_year,
        step=1,
        sizing_mode='stretch_width'
    )


def create_storm_selector() -> pn.widgets.Select:
    """
    Create the storm selector (initially only "All Storms").

    Options map display labels to storm ids; the controller refreshes them
    whenever the active year or the observation set changes.
    """
    return pn.widgets.Select(
        name='Select Storm',
        options={'All Storms': NO_SELECTION},
        value=NO_SELECTION,
        sizing_mode='stretch_width'
    )


def create_reload_button() -> pn.widgets.Button:
    """Button that re-fetches the storm feed (enabled after a failed load)."""
    return pn.widgets.Button(
        name='Retry Loading Data',
        button_type='warning',
        visible=False,
        sizing_mode='stretch_width'
    )


# =============================================================================
# Information Panes
# =============================================================================

def create_stats_pane() -> pn.pane.Markdown:
    """Key stats pane (total storms, strongest wind, last update)."""
    return pn.pane.Markdown("### Key Stats\n\n_Loading storm data..._", sizing_mode='stretch_width')


def create_storm_info_pane() -> pn.pane.Markdown:
    """Selected-storm details pane."""
    return pn.pane.Markdown("_Select a storm to see its details._", sizing_mode='stretch_width')


def create_status_pane() -> pn.pane.Alert:
    """Alert pane for feed errors, hidden until a load fails."""
    return pn.pane.Alert('', alert_type='danger', visible=False, sizing_mode='stretch_width')


def create_legend_pane() -> pn.pane.Markdown:
    """Category colour legend shown under the track map."""
    return pn.pane.Markdown(legend_markdown(), sizing_mode='stretch_width')


# =============================================================================
# Chart Panes
# =============================================================================

def create_chart_panes() -> Dict[str, pn.pane.HoloViews]:
    """
    Create one empty HoloViews pane per view.

    Returns
    -------
    dict
        Keys: 'map', 'category', 'ace', 'intensity', 'pressure', 'radii'
    """
    return {
        name: pn.pane.HoloViews(object=None, sizing_mode='stretch_width', linked_axes=False)
        for name in ('map', 'category', 'ace', 'intensity', 'pressure', 'radii')
    }
