"""
HurricaneLens Dashboard Application

This is the main entry point for the HurricaneLens dashboard application.
It assembles all components (feed loading, UI, plotting, callbacks) and
serves the interactive hurricane season dashboard.

Usage
-----
Run with panel serve:
    $ panel serve app.py --show --port 5006

Or run directly:
    $ python app.py

The dashboard will be available at http://localhost:5006
"""

import logging

import panel as pn
import holoviews as hv

# Initialize extensions
hv.extension('bokeh')
pn.extension(notifications=True)

# Import HurricaneLens modules
from hurricanelens.config import HurricaneLensConfig
from hurricanelens.state import AppState
from hurricanelens.ui import create_dashboard
from hurricanelens.controllers import HurricaneLensController

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
    ]
)
logger = logging.getLogger(__name__)


# =============================================================================
# Main Dashboard Assembly
# =============================================================================

def create_hurricanelens_dashboard():
    """
    Create and configure the complete HurricaneLens dashboard.

    This function:
    1. Loads configuration (config.toml if present)
    2. Creates the UI layout with all widgets
    3. Creates the session state and the Controller
    4. Attaches all callbacks and schedules the feed load

    Returns
    -------
    pn.Column
        Complete dashboard layout ready for serving

    Example
    -------
    >>> dashboard = create_hurricanelens_dashboard()
    >>> dashboard.servable(title="Hurricane Lens")
    """
    logger.info("Creating HurricaneLens dashboard...")

    cfg = HurricaneLensConfig.load_from_file()

    # Create dashboard layout using UI factory
    layout = create_dashboard(cfg)

    # One state per session
    state = AppState(year=cfg.default_year)

    # Create and configure controller
    controller = HurricaneLensController(
        widgets=layout._hurricanelens_widgets,
        state=state,
        cfg=cfg
    )

    # Attach all callbacks
    controller.attach_callbacks()

    # Fetch the feed once the page is up
    controller.schedule_load()

    # Store references for external access
    layout._hurricanelens_controller = controller
    layout._hurricanelens_state = state

    logger.info("Dashboard created successfully")

    return layout


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    """Main entry point when running as script."""
    logger.info("Starting HurricaneLens Dashboard Application")

    logger.info("Serving dashboard on http://localhost:5006")
    pn.serve(
        create_hurricanelens_dashboard,
        port=5006,
        title="Hurricane Lens",
        show=True,
        autoreload=False
    )


if __name__ == '__main__':
    main()
else:
    # For panel serve
    create_hurricanelens_dashboard().servable(title="Hurricane Lens")
