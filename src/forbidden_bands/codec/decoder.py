"""PETSCII to Unicode decoding."""

from forbidden_bands.core.buffer import PetsciiString
from forbidden_bands.core.constants import (
    DUPLICATE_RANGES,
    MAX_SCREEN_CODE,
    PAD_BYTE,
    REVERSE_OFFSET,
)
from forbidden_bands.core.errors import TableCorruptionError
from forbidden_bands.core.state import INITIAL_STATE
from forbidden_bands.core.tables import TableSet


def normalize(code: int) -> int:
    """Fold the duplicate PETSCII ranges (192-255) onto their canonical codes."""
    for first, last, offset in DUPLICATE_RANGES:
        if first <= code <= last:
            return code - offset
    return code


class Decoder:
    """
    Stateful PETSCII decoder.

    Tracks shift and reverse-video state across the bytes of one string.
    Control codes change state and produce no output; every other byte
    goes PETSCII -> screen code -> Unicode through the table set. Bytes
    with no mapping decode to the code point of the same value.
    """

    def __init__(self, tables: TableSet, strip_padding: bool = False):
        self.tables = tables
        self.strip_padding = strip_padding
        self.state = INITIAL_STATE

    def reset(self) -> None:
        """Return to the unshifted, normal-video state."""
        self.state = INITIAL_STATE

    def feed(self, data: bytes) -> str:
        """Decode bytes, continuing from the current state."""
        chars = []
        for byte in data:
            char = self.decode_byte(byte)
            if char is not None:
                chars.append(char)
        return ''.join(chars)

    def decode_byte(self, byte: int) -> str | None:
        """Decode a single byte; returns None for bytes that produce no character."""
        if self.strip_padding and byte == PAD_BYTE:
            return None

        state = self.state.apply(byte)
        if state is not None:
            self.state = state
            return None

        code = normalize(byte)
        screen = self.tables.petscii_to_screen(self.state.shifted).get(code)
        if screen is None:
            return chr(byte)

        screen_code = screen.code
        if screen_code > MAX_SCREEN_CODE:
            raise TableCorruptionError(
                f"PETSCII {code} maps to screen code {screen_code} "
                f"in set {screen.screen_set} (must be <= {MAX_SCREEN_CODE})"
            )
        if self.state.reversed:
            screen_code += REVERSE_OFFSET

        scalar = self.tables.screen_set_to_unicode(screen.screen_set).get(screen_code)
        if scalar is None:
            return chr(code)
        return chr(scalar)


def decode(string: PetsciiString, tables: TableSet | None = None) -> str:
    """
    Decode a PETSCII string to Unicode.

    Without tables every byte maps to the code point of the same value,
    control codes included.
    """
    data = string.to_bytes()
    if tables is None:
        if string.strip_padding:
            data = data.replace(bytes([PAD_BYTE]), b"")
        return data.decode("latin-1")
    return Decoder(tables, strip_padding=string.strip_padding).feed(data)
