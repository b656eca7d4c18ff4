"""
HurricaneLens UI Module

This module provides the user interface components for HurricaneLens:
- widgets: Factory functions for the Panel controls and panes
- layout: Dashboard layout assembly functions

Examples
--------
>>> from hurricanelens.ui import create_dashboard
>>> import panel as pn
>>>
>>> dashboard = create_dashboard()
>>> pn.serve(dashboard, port=5006)
"""

# Widget factories
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

# Layout assembly
from hurricanelens.ui.layout import (
    create_dashboard,
    create_all_widgets,
    create_sidebar,
    create_main_area,
)

__all__ = [
    # Widget factories
    'create_year_slider',
    'create_storm_selector',
    'create_reload_button',
    'create_stats_pane',
    'create_storm_info_pane',
    'create_status_pane',
    'create_legend_pane',
    'create_chart_panes',

    # Layout assembly
    'create_dashboard',
    'create_all_widgets',
    'create_sidebar',
    'create_main_area',
]
