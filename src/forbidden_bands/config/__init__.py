"""Character table configuration."""

from forbidden_bands.config.defaults import build_default_tables
from forbidden_bands.config.loader import (
    config_to_json,
    load_config,
    load_default_config,
    loads_config,
    save_config,
)
from forbidden_bands.config.shared import SharedTables, default_tables

__all__ = [
    "build_default_tables",
    "config_to_json",
    "load_config",
    "load_default_config",
    "loads_config",
    "save_config",
    "SharedTables",
    "default_tables",
]
