"""Shift and reverse-video state for PETSCII streams."""

from dataclasses import dataclass, replace
from typing import Callable

from forbidden_bands.core.constants import REVERSE_OFF, REVERSE_ON, SHIFT_IN, SHIFT_OUT


@dataclass(frozen=True, slots=True)
class ConversionState:
    """
    The two independent modes a PETSCII stream can be in.

    Every decode or encode call starts from the default state
    (unshifted, normal video); nothing carries over between calls.
    """
    shifted: bool = False
    reversed: bool = False

    def shift(self, shifted: bool) -> "ConversionState":
        """Return a copy with the shift state changed."""
        return replace(self, shifted=shifted)

    def reverse(self, reversed: bool) -> "ConversionState":
        """Return a copy with the video state changed."""
        return replace(self, reversed=reversed)

    def apply(self, byte: int) -> "ConversionState | None":
        """
        Apply a control byte.

        Returns the new state, or None if ``byte`` is not a control code
        and should be looked up as a character.
        """
        transition = CONTROL_TRANSITIONS.get(byte)
        if transition is None:
            return None
        return transition(self)


INITIAL_STATE = ConversionState()

# Control byte -> state transition
CONTROL_TRANSITIONS: dict[int, Callable[[ConversionState], ConversionState]] = {
    SHIFT_IN: lambda state: state.shift(True),
    SHIFT_OUT: lambda state: state.shift(False),
    REVERSE_ON: lambda state: state.reverse(True),
    REVERSE_OFF: lambda state: state.reverse(False),
}
