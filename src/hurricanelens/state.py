"""
HurricaneLens Application State Module

This module provides the selection state shared by every view of the
dashboard: the loaded observations, the active year and the selected storm.

The state is a single ``AppState`` instance created per dashboard session and
passed explicitly to the controller; there is no module-level singleton.
Views subscribe with ``subscribe`` and re-derive from ``snapshot()`` on every
change.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

import param

from hurricanelens.config import DEFAULT_YEAR, NO_SELECTION
from hurricanelens.core.models import Observation
from hurricanelens.core.data_processor import filter_by_year

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateSnapshot:
    """Immutable view of the state at one instant."""
    observations: Tuple[Observation, ...]
    year: int
    selected_storm_id: str

    @property
    def active(self):
        """Observations of the active year."""
        return filter_by_year(self.observations, self.year)

    @property
    def has_selection(self) -> bool:
        return self.selected_storm_id != NO_SELECTION


class AppState(param.Parameterized):
    """
    Selection state manager.

    Written only through ``init``, ``set_year`` and ``set_storm``. Each of
    them applies its changes in a single batched update, so watchers never
    see a half-applied transition (e.g. a new year with the old storm).

    Attributes
    ----------
    observations : tuple of Observation
        All loaded observations, replaced wholesale by ``init``
    year : int
        Active season year (default 2024)
    selected_storm_id : str
        Selected storm id, or ``'none'`` for all storms of the year
    load_error : str or None
        Last feed error message, None after a successful load
    is_loading : bool
        Flag set while the feed is being fetched
    """

    observations = param.Parameter(default=(), doc="Loaded observations (tuple)")
    year = param.Integer(default=DEFAULT_YEAR, doc="Active season year")
    selected_storm_id = param.String(default=NO_SELECTION, doc="Selected storm id or 'none'")

    # Loading flags
    load_error = param.String(default=None, allow_None=True)
    is_loading = param.Boolean(default=False)

    # =========================================================================
    # Transitions
    # =========================================================================

    def init(self, observations: Sequence[Observation]):
        """Replace the whole observation set; year and selection are untouched."""
        self.param.update(observations=tuple(observations), load_error=None)
        logger.info(f"State initialised with {len(self.observations)} observations")

    def set_year(self, year: int):
        """Set the active year and reset the storm selection."""
        self.param.update(year=int(year), selected_storm_id=NO_SELECTION)
        logger.info(f"Year set to {self.year}")

    def set_storm(self, storm_id: Optional[str]):
        """
        Select a storm id, or clear the selection with ``'none'``/None.

        The id is not validated; views treat an unknown id as no match.
        """
        self.selected_storm_id = storm_id or NO_SELECTION
        logger.info(f"Storm selection set to {self.selected_storm_id}")

    # =========================================================================
    # Readers
    # =========================================================================

    def snapshot(self) -> StateSnapshot:
        """Consistent copy of the current state."""
        return StateSnapshot(
            observations=self.observations,
            year=self.year,
            selected_storm_id=self.selected_storm_id,
        )

    def subscribe(self, callback: Callable[[StateSnapshot], None]):
        """
        Call ``callback(snapshot)`` after every state change.

        A batched update (e.g. ``set_year``) triggers a single call.

        Returns
        -------
        param.parameterized.Watcher
            Watcher handle, pass to ``unsubscribe`` to stop notifications
        """
        def notify(*events):
            callback(self.snapshot())

        return self.param.watch(
            notify,
            ['observations', 'year', 'selected_storm_id'],
            queued=True,
        )

    def unsubscribe(self, watcher):
        """Remove a watcher returned by ``subscribe``."""
        self.param.unwatch(watcher)
