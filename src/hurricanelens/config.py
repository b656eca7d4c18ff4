"""
HurricaneLens Configuration Module

This module contains all global configuration, constants, and default settings
for the HurricaneLens application.
"""

import logging
from pathlib import Path
from dataclasses import dataclass

logger = logging.getLogger(__name__)


# =============================================================================
# Data Feed
# =============================================================================

# Atlantic best-track observations, 2010-2024, one row per (storm, timestamp)
DEFAULT_CSV_URL = (
    'https://raw.githubusercontent.com/MiamiCrypto/hurricane-lens/'
    'refs/heads/main/data/atl_2010_2024_clean.csv'
)

# Seconds to wait for the feed before giving up
FETCH_TIMEOUT = 30

# Basin prefix used to label storms that carry no name (e.g. "AL05")
DEFAULT_BASIN_PREFIX = 'AL'


# =============================================================================
# Feed Columns
# =============================================================================

COL_STORM_NAME = 'StormName'
COL_CYCLONE_NUM = 'CycloneNum'
COL_DATETIME = 'DateTime'
COL_MAX_WIND = 'MaxWind_kt'
COL_MIN_PRESSURE = 'MinPressure_mb'
COL_LATITUDE = 'Latitude'
COL_LONGITUDE = 'Longitude'

REQUIRED_COLUMNS = (COL_STORM_NAME, COL_CYCLONE_NUM, COL_DATETIME, COL_MAX_WIND)
OPTIONAL_COLUMNS = (COL_MIN_PRESSURE, COL_LATITUDE, COL_LONGITUDE)


# =============================================================================
# Selection Defaults
# =============================================================================

DEFAULT_YEAR = 2024
MIN_YEAR = 2010
MAX_YEAR = 2024

# Sentinel storm id meaning "all storms of the active year"
NO_SELECTION = 'none'


# =============================================================================
# Map Defaults
# =============================================================================

# Atlantic hurricane basin
MAP_CENTER = (25.0, -60.0)
MAP_HEIGHT = 520


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass
class HurricaneLensConfig:
    """
    HurricaneLens configuration with sensible defaults.

    Values can be overridden from a ``[hurricanelens]`` table in a
    config.toml file (see ``load_from_file``).
    """

    # Feed
    csv_url: str = DEFAULT_CSV_URL
    fetch_timeout: float = FETCH_TIMEOUT
    basin_prefix: str = DEFAULT_BASIN_PREFIX

    # Year slider
    default_year: int = DEFAULT_YEAR
    min_year: int = MIN_YEAR
    max_year: int = MAX_YEAR

    @classmethod
    def load_from_file(cls, config_path: Path | None = None) -> 'HurricaneLensConfig':
        """
        Load configuration from TOML file if exists, otherwise use defaults.

        Parameters
        ----------
        config_path : Path, optional
            Path to configuration file. If None, searches for config.toml
            in current directory or ~/.hurricanelens/

        Returns
        -------
        HurricaneLensConfig
            Configuration instance
        """
        # Search paths: specified path -> ./config.toml -> ~/.hurricanelens/config.toml
        search_paths = [
            Path(config_path) if config_path else None,
            Path.cwd() / 'config.toml',
            Path.home() / '.hurricanelens' / 'config.toml'
        ]

        for path in search_paths:
            if path and path.exists():
                try:
                    import tomllib
                    with open(path, 'rb') as f:
                        data = tomllib.load(f)
                        section = data.get('hurricanelens', {})

                        return cls(
                            csv_url=str(section.get('csv_url', cls.csv_url)),
                            fetch_timeout=float(section.get('fetch_timeout', cls.fetch_timeout)),
                            basin_prefix=str(section.get('basin_prefix', cls.basin_prefix)),
                            default_year=int(section.get('default_year', cls.default_year)),
                            min_year=int(section.get('min_year', cls.min_year)),
                            max_year=int(section.get('max_year', cls.max_year)),
                        )
                except Exception as e:
                    logger.warning(f"Failed to load config from {path}: {e}")
                    # Fall through to use defaults

        # No config file found or loading failed, use defaults
        return cls()


# =============================================================================
# Global Config Instance
# =============================================================================

# Default configuration instance (can be overridden by loading from file)
config = HurricaneLensConfig()
