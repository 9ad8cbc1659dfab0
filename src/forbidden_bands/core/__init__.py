"""Core data structures for PETSCII conversion."""

from forbidden_bands.core.buffer import PetsciiString
from forbidden_bands.core.state import ConversionState
from forbidden_bands.core.tables import PetsciiCode, ScreenCode, ScreenSet, TableSet

__all__ = ["PetsciiString", "ConversionState", "TableSet", "ScreenSet", "ScreenCode", "PetsciiCode"]
