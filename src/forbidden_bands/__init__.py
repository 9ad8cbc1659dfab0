"""
forbidden-bands: Python library for old 8-bit string formats

Convert Commodore PETSCII strings to and from Unicode.

Quick Start:
    >>> import forbidden_bands as fb
    >>> tables = fb.default_tables()
    >>> ps = fb.PetsciiString.from_bytes(b"\\x0eHELLO\\x8e", 16)
    >>> fb.decode(ps, tables)
    'hello'
    >>> bytes(fb.encode("Hello", tables, 16))
    b'H\\x0eELLO\\x8e'

Features:
    - Fixed-capacity PETSCII strings, as used by C64 file systems
    - Table-driven conversion through C64 screen codes
    - Shift (0x0E/0x8E) and reverse video (0x12/0x92) control codes
    - Stripping of CBM DOS 0xA0 padding
    - Character tables loadable from JSON, with built-in C64 defaults
"""

__version__ = "0.3.0"

# Core types
from forbidden_bands.core.buffer import PetsciiString
from forbidden_bands.core.state import ConversionState
from forbidden_bands.core.tables import TableSet, ScreenSet

# Errors
from forbidden_bands.core.errors import (
    ForbiddenBandsError,
    OversizeError,
    TableCorruptionError,
    ConfigError,
)

# Conversion
from forbidden_bands.codec.decoder import decode
from forbidden_bands.codec.encoder import encode

# Configuration
from forbidden_bands.config.loader import (
    load_config,
    load_default_config,
    save_config,
    config_to_json,
)
from forbidden_bands.config.shared import SharedTables, default_tables

__all__ = [
    # Version
    "__version__",
    # Core types
    "PetsciiString",
    "ConversionState",
    "TableSet",
    "ScreenSet",
    # Errors
    "ForbiddenBandsError",
    "OversizeError",
    "TableCorruptionError",
    "ConfigError",
    # Conversion
    "decode",
    "encode",
    # Configuration
    "load_config",
    "load_default_config",
    "save_config",
    "config_to_json",
    "SharedTables",
    "default_tables",
]
