"""
Storm Data Models

Typed records shared by the loader, the derivation functions and the views.
Feed rows are validated once into ``Observation`` instances; nothing past the
load boundary handles loosely-typed rows again.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, NamedTuple, Optional, Tuple


# =============================================================================
# Storm Identity
# =============================================================================

class StormKey(NamedTuple):
    """
    Structured identity of a storm: (storm name, cyclone number).

    ``storm_id`` renders the key as ``"<name>-<number>"`` for use as a widget
    value; ``from_storm_id`` parses it back by splitting on the last hyphen,
    so names containing hyphens round-trip safely.
    """
    name: str
    cyclone_number: Optional[int]

    @property
    def storm_id(self) -> str:
        number = '' if self.cyclone_number is None else str(self.cyclone_number)
        return f"{self.name}-{number}"

    @classmethod
    def from_storm_id(cls, storm_id: str) -> Optional['StormKey']:
        """Parse a storm id; returns None when it is not of the form name-number."""
        if not storm_id or '-' not in storm_id:
            return None
        name, number = storm_id.rsplit('-', 1)
        if not number:
            return cls(name, None)
        try:
            return cls(name, int(number))
        except ValueError:
            return None


# =============================================================================
# Observation
# =============================================================================

@dataclass(frozen=True)
class Observation:
    """
    One (storm, timestamp) measurement.

    Attributes
    ----------
    storm_name : str
        Storm name ('' when the feed leaves it blank)
    cyclone_number : int or None
        Seasonal cyclone number
    timestamp : datetime or None
        Observation instant, stored as an aware UTC datetime (naive values
        are taken to be UTC). None excludes the observation from every
        time-ordered output.
    max_wind_kt : float
        Maximum sustained wind in knots (0 when absent)
    min_pressure_mb : float or None
        Minimum central pressure, None when not reported
    latitude, longitude : float or None
        Position, None when not plottable
    category : int
        Saffir-Simpson category 0..5 of ``max_wind_kt``, attached at load
    display_name : str
        Human readable storm label, attached at load
    """
    storm_name: str
    cyclone_number: Optional[int]
    timestamp: Optional[datetime] = None
    max_wind_kt: float = 0.0
    min_pressure_mb: Optional[float] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    category: int = 0
    display_name: str = ''

    def __post_init__(self):
        ts = self.timestamp
        if ts is not None:
            ts = ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts.astimezone(timezone.utc)
            object.__setattr__(self, 'timestamp', ts)

    @property
    def key(self) -> StormKey:
        return StormKey(self.storm_name, self.cyclone_number)

    @property
    def storm_id(self) -> str:
        return self.key.storm_id

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None


# =============================================================================
# Storm Track and Summary
# =============================================================================

@dataclass(frozen=True)
class StormTrack:
    """
    Observations of one storm, sorted ascending by timestamp.

    ``observations`` holds only timestamped observations and is never empty.
    ``undated`` keeps the storm's observations without a timestamp; they take
    part in the peak-wind aggregate but in no ordering.
    """
    key: StormKey
    observations: Tuple[Observation, ...]
    undated: Tuple[Observation, ...] = ()

    @property
    def id(self) -> str:
        return self.key.storm_id

    @property
    def max_wind(self) -> float:
        winds = [o.max_wind_kt for o in self.observations + self.undated]
        return max(winds) if winds else 0.0

    def __len__(self) -> int:
        return len(self.observations)


@dataclass(frozen=True)
class StormSummary:
    """Per-storm aggregate used by the selector, map and intensity views."""
    id: str
    display_name: str
    max_wind_kt: float
    category: int
    cyclone_number: Optional[int] = None
    storm_name: str = ''

    @property
    def label(self) -> str:
        """Selector label, e.g. ``'MILTON – #14 (155 kt)'``."""
        name = self.storm_name or 'Unnamed'
        number = '' if self.cyclone_number is None else self.cyclone_number
        return f"{name} – #{number} ({self.max_wind_kt:g} kt)"


# =============================================================================
# Derived Series
# =============================================================================

class AcePoint(NamedTuple):
    """Cumulative ACE (10^4 kt^2) at the end of a calendar day."""
    date: date
    cumulative_ace: float


@dataclass(frozen=True)
class IntensitySeries:
    """
    Wind and pressure series of one storm.

    ``winds`` is aligned with ``times``; ``pressures`` is aligned with
    ``pressure_times`` only and may be shorter.
    """
    storm_id: str
    display_name: str
    times: Tuple[datetime, ...] = ()
    winds: Tuple[float, ...] = ()
    pressure_times: Tuple[datetime, ...] = ()
    pressures: Tuple[float, ...] = ()
    colors: Tuple[str, ...] = ()
    max_wind_kt: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.times


@dataclass(frozen=True)
class WindRadiiSeries:
    """
    Simulated wind-radii series (nautical miles) for one storm.

    These values are synthesized from wind speed as a placeholder for real
    radii data and must not be presented as measurements.
    """
    storm_id: str
    display_name: str
    times: Tuple[datetime, ...] = ()
    r34: Tuple[float, ...] = ()
    r50: Tuple[float, ...] = ()
    r64: Tuple[float, ...] = ()
    landfall_index: Optional[int] = None
    simulated: bool = True

    @property
    def landfall_time(self) -> Optional[datetime]:
        if self.landfall_index is None:
            return None
        return self.times[self.landfall_index]

    @property
    def is_empty(self) -> bool:
        return not self.times


@dataclass(frozen=True)
class MapTrack:
    """Plottable positions of one storm for the track map."""
    storm_id: str
    display_name: str
    color: str
    points: Tuple[Observation, ...] = ()


@dataclass(frozen=True)
class KeyStats:
    """Headline numbers for the active year."""
    total_storms: int = 0
    strongest_wind_kt: float = 0.0
    last_update: Optional[datetime] = None


# =============================================================================
# Load Result
# =============================================================================

@dataclass
class LoadResult:
    """
    Outcome of loading the observation feed.

    Exactly one of a non-empty ``error`` or a usable ``observations`` list is
    meaningful; check ``ok`` before using the observations.
    """
    observations: List[Observation] = field(default_factory=list)
    error: Optional[Exception] = None
    source: str = ''
    dropped_rows: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None
