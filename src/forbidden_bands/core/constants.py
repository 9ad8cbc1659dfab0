"""Shared constants for PETSCII processing."""

# Control codes
SHIFT_IN = 0x0E         # Switch to the lowercase/uppercase character set
SHIFT_OUT = 0x8E        # Switch back to the uppercase/graphics character set
REVERSE_ON = 0x12       # RVS ON
REVERSE_OFF = 0x92      # RVS OFF

# CBM DOS pads fixed-width names (file names, disk names) with shifted space
PAD_BYTE = 0xA0

# Screen codes 0x80-0xFF are the reversed glyphs of 0x00-0x7F
REVERSE_OFFSET = 0x80
MAX_SCREEN_CODE = 0x7F

# Screen-to-PETSCII attribute bits
ATTR_SHIFTED = 0x01
ATTR_ANY_SHIFT = 0x02   # Same glyph in both ROMs, no shift code needed

# Screen set identifiers
SCREEN_SET_UPPERCASE = 1    # Uppercase/graphics character ROM
SCREEN_SET_LOWERCASE = 2    # Lowercase/uppercase character ROM
SCREEN_SET_CONTROL = 3      # Virtual set for LF and CR

# PETSCII codes 192-254 and 255 repeat other ranges:
# (first, last, offset subtracted)
DUPLICATE_RANGES: tuple[tuple[int, int, int], ...] = (
    (0xC0, 0xDF, 96),    # 192-223 -> 96-127
    (0xE0, 0xFE, 64),    # 224-254 -> 160-190
    (0xFF, 0xFF, 129),   # 255 -> 126 (pi)
)

# Version of the configuration document format
CONFIG_VERSION = "0.2.0"

# Default capacity for strings built by the CLI
DEFAULT_CAPACITY = 256
