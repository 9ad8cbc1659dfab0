"""Unicode to PETSCII encoding."""

from forbidden_bands.core.buffer import PetsciiString
from forbidden_bands.core.constants import SHIFT_IN, SHIFT_OUT
from forbidden_bands.core.errors import OversizeError
from forbidden_bands.core.state import INITIAL_STATE
from forbidden_bands.core.tables import TableSet


class Encoder:
    """
    Stateful Unicode to PETSCII encoder.

    Characters go Unicode -> screen code -> PETSCII. Shift codes are
    emitted whenever the next character needs the other character set;
    codes flagged as printable in either set keep the current state.
    Characters with no mapping are dropped.
    """

    def __init__(self, tables: TableSet):
        self.tables = tables
        self.state = INITIAL_STATE
        self._output = bytearray()

    def feed(self, text: str) -> None:
        """Encode characters, continuing from the current state."""
        for char in text:
            self.encode_char(char)

    def encode_char(self, char: str) -> None:
        """Encode a single character."""
        screen = self.tables.unicode_to_screen.get(ord(char))
        if screen is None:
            return
        petscii = self.tables.screen_set_to_petscii(screen.screen_set).get(screen.code)
        if petscii is None:
            return

        if petscii.any_shift:
            pass
        elif petscii.shifted and not self.state.shifted:
            self._output.append(SHIFT_IN)
            self.state = self.state.shift(True)
        elif not petscii.shifted and self.state.shifted:
            self._output.append(SHIFT_OUT)
            self.state = self.state.shift(False)
        self._output.append(petscii.code)

    def finish(self) -> bytes:
        """Shift back out if needed and return the encoded bytes."""
        if self.state.shifted:
            self._output.append(SHIFT_OUT)
            self.state = self.state.shift(False)
        result = bytes(self._output)
        self._output.clear()
        return result


def encode_bytes(text: str, tables: TableSet) -> bytes:
    """Encode text to PETSCII bytes, always ending unshifted."""
    encoder = Encoder(tables)
    encoder.feed(text)
    return encoder.finish()


def encode(text: str, tables: TableSet, capacity: int) -> PetsciiString:
    """
    Encode text into a PETSCII string of the given capacity.

    Raises OversizeError if the encoded bytes, shift codes included,
    do not fit.
    """
    data = encode_bytes(text, tables)
    if len(data) > capacity:
        raise OversizeError(len(data), capacity)
    return PetsciiString(capacity, data)
