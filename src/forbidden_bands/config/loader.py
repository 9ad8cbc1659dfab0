"""Load and save character table configuration.

Configuration documents are JSON:

{
  "version": "0.2.0",
  "petscii": {
    "version": "0.2.0",
    "character_set_map": {
      "petsciiUnshiftedToScreen": {"65": [1, 1], ...},
      "screenSet1ToUnicode": {"1": 65, ...},
      ...
    }
  }
}
"""

import json
import logging
from pathlib import Path
from typing import Any

from forbidden_bands.config.defaults import build_default_tables
from forbidden_bands.core.constants import CONFIG_VERSION
from forbidden_bands.core.errors import ConfigError
from forbidden_bands.core.tables import TableSet, major_version

logger = logging.getLogger(__name__)

SYSTEM_KEY = "petscii"
MAP_KEY = "character_set_map"


def parse_config(data: Any) -> TableSet:
    """Build a TableSet from a decoded configuration document."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be an object")

    version = data.get("version")
    if not isinstance(version, str):
        raise ConfigError("Configuration is missing a version string")
    system = data.get(SYSTEM_KEY)
    if not isinstance(system, dict):
        raise ConfigError(f"Configuration has no {SYSTEM_KEY!r} section")
    system_version = system.get("version", version)
    if not isinstance(system_version, str):
        raise ConfigError(f"{SYSTEM_KEY!r} version must be a string")
    if MAP_KEY not in system:
        raise ConfigError(f"{SYSTEM_KEY!r} section has no {MAP_KEY!r}")

    for label, value in (("configuration", version), (SYSTEM_KEY, system_version)):
        if major_version(value) != major_version(CONFIG_VERSION):
            raise ConfigError(
                f"Unsupported {label} version {value} (expected {CONFIG_VERSION})"
            )
    return TableSet.from_dict(system[MAP_KEY], version=system_version)


def loads_config(text: str) -> TableSet:
    """Parse a configuration document from a JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid configuration JSON: {e}") from e
    return parse_config(data)


def load_config(path: str | Path) -> TableSet:
    """Load a configuration document from a JSON file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}") from e
    tables = loads_config(text)
    logger.debug("Loaded character tables version %s from %s", tables.version, path)
    return tables


def load_default_config() -> TableSet:
    """Get the built-in C64 character tables."""
    tables = build_default_tables()
    logger.debug("Built default character tables version %s", tables.version)
    return tables


def config_to_dict(tables: TableSet) -> dict[str, Any]:
    """Wrap a TableSet in a configuration document."""
    return {
        "version": CONFIG_VERSION,
        SYSTEM_KEY: {
            "version": tables.version,
            MAP_KEY: tables.to_dict(),
        },
    }


def config_to_json(tables: TableSet, indent: int | None = 2) -> str:
    """Serialize a TableSet as a configuration JSON document."""
    return json.dumps(config_to_dict(tables), indent=indent)


def save_config(tables: TableSet, path: str | Path) -> None:
    """Write a TableSet to a configuration JSON file."""
    path = Path(path)
    try:
        path.write_text(config_to_json(tables) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot write configuration {path}: {e}") from e
    logger.debug("Saved character tables version %s to %s", tables.version, path)
