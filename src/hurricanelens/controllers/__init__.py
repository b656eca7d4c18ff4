"""
HurricaneLens Controllers Module

This module provides the controller layer for HurricaneLens, implementing the
Controller pattern to separate application logic from UI components.

The main controller (HurricaneLensController) orchestrates:
- Feed loading and error reporting
- Selection state updates from the year slider and storm selector
- View refreshes from state snapshots

Example
-------
>>> from hurricanelens.ui import create_dashboard
>>> from hurricanelens.controllers import HurricaneLensController
>>>
>>> layout = create_dashboard()
>>> controller = HurricaneLensController(layout._hurricanelens_widgets)
>>> controller.attach_callbacks()
"""

from hurricanelens.controllers.app_controller import HurricaneLensController

__all__ = ['HurricaneLensController']
