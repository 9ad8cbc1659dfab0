"""Built-in C64 character tables.

Screen-code glyphs follow the Unicode 13 "Symbols for Legacy Computing"
mapping of the C64 character ROMs where a dedicated character exists,
and the closest Box Drawing / Block Elements character otherwise.
Source: https://www.unicode.org/L2/L2019/19025-terminals-prop.pdf
"""

from forbidden_bands.core.constants import (
    ATTR_ANY_SHIFT,
    ATTR_SHIFTED,
    CONFIG_VERSION,
    REVERSE_OFFSET,
    SCREEN_SET_CONTROL,
    SCREEN_SET_LOWERCASE,
    SCREEN_SET_UPPERCASE,
)
from forbidden_bands.core.tables import PetsciiCode, ScreenCode, TableSet


# Screen codes 0x40-0x7F of the uppercase/graphics ROM
UPPERCASE_GRAPHICS: tuple[int, ...] = (
    # 0x40-0x4F
    0x2500, 0x2660, 0x1FB72, 0x1FB78, 0x1FB77, 0x1FB76, 0x1FB7A, 0x1FB71,
    0x1FB74, 0x256E, 0x2570, 0x256F, 0x1FB7C, 0x2572, 0x2571, 0x1FB7D,
    # 0x50-0x5F
    0x1FB7E, 0x25CF, 0x1FB7B, 0x2665, 0x1FB70, 0x256D, 0x2573, 0x25CB,
    0x2663, 0x1FB75, 0x2666, 0x253C, 0x1FB8C, 0x2502, 0x03C0, 0x25E5,
    # 0x60-0x6F
    0x00A0, 0x258C, 0x2584, 0x2594, 0x2581, 0x258F, 0x2592, 0x2595,
    0x1FB8F, 0x25E4, 0x1FB87, 0x251C, 0x2597, 0x2514, 0x2510, 0x2582,
    # 0x70-0x7F
    0x250C, 0x2534, 0x252C, 0x2524, 0x258E, 0x258D, 0x1FB88, 0x1FB82,
    0x1FB83, 0x2583, 0x1FB7F, 0x2596, 0x259D, 0x2518, 0x2598, 0x259A,
)

# Lowercase ROM glyphs that differ from the uppercase ROM in 0x40-0x7F
LOWERCASE_GRAPHICS_OVERRIDES: dict[int, int] = {
    0x5E: 0x1FB96,  # Checkerboard
    0x5F: 0x1FB98,  # Upper left to lower right fill
    0x69: 0x1FB99,  # Upper right to lower left fill
    0x7A: 0x2713,   # Check mark
}

# Reversed glyphs (screen codes 0x80-0xFF) with a Unicode counterpart.
# Everything else in the reversed half is left unmapped.
REVERSED_COMMON: dict[int, int] = {
    0xA0: 0x2588,   # Reversed space: full block
    0xE1: 0x2590,   # Left half block -> right half block
    0xE2: 0x2580,   # Lower half block -> upper half block
    0xEC: 0x259B,   # Quadrant lower right -> the other three
    0xFB: 0x259C,
    0xFC: 0x2599,
    0xFE: 0x259F,
    0xFF: 0x259E,
}

REVERSED_UPPERCASE: dict[int, int] = {
    0xC1: 0x2664,   # Spade -> outline spade
    0xD3: 0x2661,   # Heart -> outline heart
    0xD8: 0x2667,   # Club -> outline club
    0xDA: 0x2662,   # Diamond -> outline diamond
    0xDF: 0x25E3,
    0xE9: 0x25E2,
}

LINE_FEED = 0x0A
CARRIAGE_RETURN = 0x0D
SHIFTED_RETURN = 0x8D


def _text_glyphs() -> list[int]:
    """Screen codes 0x00-0x3F shared by both ROMs (letters resolved by caller)."""
    table = [0] * 0x40
    table[0x00] = ord("@")
    for offset in range(26):
        table[0x01 + offset] = ord("A") + offset
    table[0x1B] = ord("[")
    table[0x1C] = 0x00A3  # Pound sign
    table[0x1D] = ord("]")
    table[0x1E] = 0x2191  # Up arrow
    table[0x1F] = 0x2190  # Left arrow
    for code in range(0x20, 0x40):
        table[code] = code
    return table


def build_uppercase_set() -> dict[int, int]:
    """Screen-to-Unicode table for the uppercase/graphics ROM."""
    glyphs = _text_glyphs() + list(UPPERCASE_GRAPHICS)
    table = dict(enumerate(glyphs))
    table.update(REVERSED_COMMON)
    table.update(REVERSED_UPPERCASE)
    return table


def build_lowercase_set() -> dict[int, int]:
    """Screen-to-Unicode table for the lowercase/uppercase ROM."""
    glyphs = _text_glyphs() + list(UPPERCASE_GRAPHICS)
    for offset in range(26):
        glyphs[0x01 + offset] = ord("a") + offset
        glyphs[0x41 + offset] = ord("A") + offset
    for code, scalar in LOWERCASE_GRAPHICS_OVERRIDES.items():
        glyphs[code] = scalar
    table = dict(enumerate(glyphs))
    table.update(REVERSED_COMMON)
    return table


def build_control_set() -> dict[int, int]:
    """Screen-to-Unicode table for the virtual control-character set."""
    return {LINE_FEED: LINE_FEED, CARRIAGE_RETURN: CARRIAGE_RETURN}


def screen_code_for_petscii(code: int) -> int | None:
    """
    Screen code shown for a canonical PETSCII code (0-191), or None.

    Both ROMs share this layout; only the glyphs differ.
    """
    if 0x20 <= code <= 0x3F:
        return code
    if 0x40 <= code <= 0x5F:
        return code - 0x40
    if 0x60 <= code <= 0x7F:
        return code - 0x20
    if 0xA0 <= code <= 0xBF:
        return code - 0x40
    return None


def petscii_for_screen_code(code: int) -> int:
    """Canonical PETSCII code that prints screen code 0x00-0x7F."""
    if code < 0x20:
        return code + 0x40
    if code < 0x40:
        return code
    if code < 0x60:
        return code + 0x20
    return code + 0x40


def build_petscii_to_screen(screen_set: int) -> dict[int, ScreenCode]:
    """PETSCII-to-screen table for the shift state that selects ``screen_set``."""
    table = {}
    for code in range(0xC0):
        screen_code = screen_code_for_petscii(code)
        if screen_code is not None:
            table[code] = ScreenCode(screen_set, screen_code)
    table[LINE_FEED] = ScreenCode(SCREEN_SET_CONTROL, LINE_FEED)
    table[CARRIAGE_RETURN] = ScreenCode(SCREEN_SET_CONTROL, CARRIAGE_RETURN)
    table[SHIFTED_RETURN] = ScreenCode(SCREEN_SET_CONTROL, CARRIAGE_RETURN)
    return table


def build_screen_to_petscii(
    attributes: int, shared: frozenset[int] = frozenset()
) -> dict[int, PetsciiCode]:
    """
    Screen-to-PETSCII table for one ROM.

    Codes in ``shared`` show the same glyph in both ROMs and are flagged
    so the encoder does not switch sets for them.
    """
    return {
        code: PetsciiCode(
            attributes | ATTR_ANY_SHIFT if code in shared else attributes,
            petscii_for_screen_code(code),
        )
        for code in range(REVERSE_OFFSET)
    }


def shared_screen_codes(first: dict[int, int], second: dict[int, int]) -> frozenset[int]:
    """Non-reversed screen codes with the same glyph in both tables."""
    return frozenset(
        code for code, scalar in first.items()
        if code < REVERSE_OFFSET and second.get(code) == scalar
    )


def build_unicode_to_screen(
    screen_to_unicode: dict[int, dict[int, int]],
) -> dict[int, ScreenCode]:
    """
    Invert the screen-to-Unicode tables.

    Sets are searched in id order and codes in ascending order, so a
    character present in both ROMs encodes through the uppercase ROM.
    Reversed glyphs are decode-only.
    """
    table: dict[int, ScreenCode] = {}
    for screen_set in sorted(screen_to_unicode):
        for code, scalar in sorted(screen_to_unicode[screen_set].items()):
            if code < REVERSE_OFFSET:
                table.setdefault(scalar, ScreenCode(screen_set, code))
    return table


def build_default_tables() -> TableSet:
    """Build the built-in C64 table set."""
    uppercase = build_uppercase_set()
    lowercase = build_lowercase_set()
    shared = shared_screen_codes(uppercase, lowercase)
    screen_to_unicode = {
        SCREEN_SET_UPPERCASE: uppercase,
        SCREEN_SET_LOWERCASE: lowercase,
        SCREEN_SET_CONTROL: build_control_set(),
    }
    return TableSet(
        petscii_unshifted_to_screen=build_petscii_to_screen(SCREEN_SET_UPPERCASE),
        petscii_shifted_to_screen=build_petscii_to_screen(SCREEN_SET_LOWERCASE),
        unicode_to_screen=build_unicode_to_screen(screen_to_unicode),
        screen_to_unicode=screen_to_unicode,
        screen_to_petscii={
            SCREEN_SET_UPPERCASE: build_screen_to_petscii(0, shared),
            SCREEN_SET_LOWERCASE: build_screen_to_petscii(ATTR_SHIFTED, shared),
            # LF and CR work the same in both shift states
            SCREEN_SET_CONTROL: {
                LINE_FEED: PetsciiCode(ATTR_ANY_SHIFT, LINE_FEED),
                CARRIAGE_RETURN: PetsciiCode(ATTR_ANY_SHIFT, CARRIAGE_RETURN),
            },
        },
        version=CONFIG_VERSION,
    )
