"""
Dashboard Layout Module

This module provides functions for assembling the complete HurricaneLens
dashboard layout from individual widgets and chart panes.
"""

import logging
from typing import Dict, Any, Optional

import panel as pn

from hurricanelens.config import HurricaneLensConfig
from hurricanelens.ui.widgets import (
    create_year_slider,
    create_storm_selector,
    create_reload_button,
    create_stats_pane,
    create_storm_info_pane,
    create_status_pane,
    create_legend_pane,
    create_chart_panes,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Layout Assembly
# =============================================================================

def create_all_widgets(cfg: Optional[HurricaneLensConfig] = None) -> Dict[str, Any]:
    """
    Create all widgets and panes needed for the dashboard.

    Returns
    -------
    dict
        - 'year_slider': Season year slider
        - 'storm_selector': Storm selector
        - 'reload_btn': Retry button for failed loads
        - 'stats': Key stats pane
        - 'storm_info': Selected storm pane
        - 'status': Error alert pane
        - 'legend': Category legend pane
        - 'charts': Chart panes dict (map, category, ace, intensity, pressure, radii)
    """
    return {
        'year_slider': create_year_slider(cfg),
        'storm_selector': create_storm_selector(),
        'reload_btn': create_reload_button(),
        'stats': create_stats_pane(),
        'storm_info': create_storm_info_pane(),
        'status': create_status_pane(),
        'legend': create_legend_pane(),
        'charts': create_chart_panes(),
    }


def create_sidebar(widgets: Dict[str, Any]) -> pn.Column:
    """
    Create sidebar with selection controls and key stats.

    Parameters
    ----------
    widgets : dict
        Dictionary of all widget instances

    Returns
    -------
    pn.Column
        Sidebar column layout
    """
    return pn.Column(
        widgets['status'],
        widgets['reload_btn'],
        widgets['year_slider'],
        widgets['storm_selector'],
        pn.layout.Divider(),
        widgets['stats'],
        pn.layout.Divider(),
        widgets['storm_info'],
        width=260,
        sizing_mode='stretch_height'
    )


def create_main_area(widgets: Dict[str, Any]) -> pn.GridSpec:
    """
    Create the chart grid.

    Top row: track map (left) with category bar and ACE chart stacked on
    the right. Bottom row: wind intensity, minimum pressure and wind-radii
    charts.
    """
    charts = widgets['charts']

    grid = pn.GridSpec(sizing_mode='stretch_both', min_height=900)
    grid[0:3, 0:7] = pn.Card(
        charts['map'], widgets['legend'], title='Hurricane Tracks', collapsible=False
    )
    grid[0:3, 7:10] = pn.Column(
        pn.Card(charts['category'], title='Storm Categories', collapsible=False),
        pn.Card(charts['ace'], title='Accumulated Cyclone Energy', collapsible=False),
    )
    grid[3:5, 0:4] = pn.Card(charts['intensity'], title='Wind Intensity', collapsible=False)
    grid[3:5, 4:7] = pn.Card(charts['pressure'], title='Minimum Pressure', collapsible=False)
    grid[3:5, 7:10] = pn.Card(charts['radii'], title='Wind Radii Growth (simulated)', collapsible=False)
    return grid


def create_dashboard(
    cfg: Optional[HurricaneLensConfig] = None,
    title: str = "Hurricane Lens"
) -> pn.Column:
    """
    Create complete dashboard layout.

    This creates the layout structure but does NOT attach callbacks;
    build a ``HurricaneLensController`` on the returned widgets first.

    Parameters
    ----------
    cfg : HurricaneLensConfig, optional
        Configuration (year bounds)
    title : str, default='Hurricane Lens'
        Dashboard title

    Returns
    -------
    pn.Column
        Header plus sidebar and chart grid; widgets are available as
        ``_hurricanelens_widgets``

    Examples
    --------
    >>> dashboard = create_dashboard()
    >>> controller = HurricaneLensController(dashboard._hurricanelens_widgets)
    >>> dashboard.servable()
    """
    widgets = create_all_widgets(cfg)

    header = pn.pane.Markdown(
        f"## {title}\n\nVisualize Atlantic hurricane data from NOAA best-track observations",
        styles={"background": "#1e293b", "color": "white", "padding": "0 16px"},
        sizing_mode="stretch_width"
    )

    layout = pn.Column(
        header,
        pn.Row(
            create_sidebar(widgets),
            create_main_area(widgets),
            sizing_mode="stretch_both"
        ),
        sizing_mode="stretch_both"
    )

    logger.info("Dashboard layout created")

    # Store references for callback attachment
    layout._hurricanelens_widgets = widgets

    return layout
