"""Tests for PETSCII to Unicode decoding."""

import pytest

from forbidden_bands.codec.decoder import Decoder, decode, normalize
from forbidden_bands.core.buffer import PetsciiString
from forbidden_bands.core.errors import TableCorruptionError
from forbidden_bands.core.tables import TableSet


def ps(data: bytes, strip: bool = False) -> PetsciiString:
    if strip:
        return PetsciiString.from_bytes_strip_padding(data, 256)
    return PetsciiString.from_bytes(data, 256)


class TestIdentityDecoding:
    """Decoding without character tables."""

    def test_all_bytes_map_to_same_code_point(self) -> None:
        data = bytes(range(256))
        text = decode(ps(data))
        assert [ord(c) for c in text] == list(range(256))

    def test_control_codes_are_not_interpreted(self) -> None:
        assert decode(ps(b"\x0eA\x8e")) == "\x0eA\x8e"

    def test_ascii_symbols(self) -> None:
        assert decode(ps(b"\x41\x42\x43\x5c\x5e\x5f")) == "ABC\\^_"

    def test_strip_padding(self) -> None:
        assert decode(ps(b"AB\xa0\xa0", strip=True)) == "AB"


class TestNormalize:
    """Folding of duplicate PETSCII ranges."""

    def test_low_range_unchanged(self) -> None:
        for code in range(192):
            assert normalize(code) == code

    def test_192_to_223(self) -> None:
        assert normalize(0xC0) == 0x60
        assert normalize(0xC1) == 0x61
        assert normalize(0xDF) == 0x7F

    def test_224_to_254(self) -> None:
        assert normalize(0xE0) == 0xA0
        assert normalize(0xFE) == 0xBE

    def test_255(self) -> None:
        assert normalize(0xFF) == 0x7E


class TestTableDecoding:
    """Decoding with the built-in C64 tables."""

    def test_uppercase(self, tables: TableSet) -> None:
        data = bytes(range(0x41, 0x5B))
        assert decode(ps(data), tables) == "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

    def test_symbols(self, tables: TableSet) -> None:
        text = decode(ps(b"\x41\x42\x43\x5c\x5e\x5f"), tables)
        assert text == "ABC£↑←"

    def test_digits_and_punctuation(self, tables: TableSet) -> None:
        assert decode(ps(b"10 PRINT\"HI\";"), tables) == "10 PRINT\"HI\";"

    def test_shifted_lowercase(self, tables: TableSet) -> None:
        data = b"\x0e" + bytes(range(0x41, 0x5B)) + b"\x8e"
        assert decode(ps(data), tables) == "abcdefghijklmnopqrstuvwxyz"

    def test_shifted_uppercase(self, tables: TableSet) -> None:
        assert decode(ps(b"\x0e\x48\xc5\xcc\xcc\xcf"), tables) == "hELLO"

    def test_shift_state_switches_mid_string(self, tables: TableSet) -> None:
        assert decode(ps(b"\x48\x0e\x45\x4c\x4c\x4f\x8e\x21"), tables) == "Hello!"

    def test_graphics(self, tables: TableSet) -> None:
        assert decode(ps(b"\x61\x73\x78\x7a"), tables) == "♠♥♣♦"

    def test_pi(self, tables: TableSet) -> None:
        assert decode(ps(b"\x7e"), tables) == "π"
        assert decode(ps(b"\xff"), tables) == "π"

    def test_duplicate_range_192(self, tables: TableSet) -> None:
        assert decode(ps(b"\xc1"), tables) == decode(ps(b"\x61"), tables)
        assert decode(ps(b"\x0e\xc1"), tables) == decode(ps(b"\x0e\x61"), tables) == "A"

    def test_duplicate_range_224(self, tables: TableSet) -> None:
        for code in range(0xE0, 0xFF):
            assert decode(ps(bytes([code])), tables) == decode(ps(bytes([code - 64])), tables)

    def test_duplicate_255(self, tables: TableSet) -> None:
        assert decode(ps(b"\xff"), tables) == decode(ps(b"\x7e"), tables)

    def test_reversed_playing_cards(self, tables: TableSet) -> None:
        plain = decode(ps(b"\x61\x73\x78\x7a"), tables)
        reversed_ = decode(ps(b"\x12\x61\x73\x78\x7a\x92"), tables)
        assert reversed_ == "♤♡♧♢"
        assert reversed_ != plain

    def test_reverse_off_restores_normal(self, tables: TableSet) -> None:
        assert decode(ps(b"\x12\x61\x92\x61"), tables) == "♤♠"

    def test_unmapped_reversed_glyph_falls_back(self, tables: TableSet) -> None:
        # Reversed letters have no Unicode glyph, the PETSCII code is used
        assert decode(ps(b"\x12\x41\x42\x92"), tables) == "AB"

    def test_newlines(self, tables: TableSet) -> None:
        assert decode(ps(b"A\x0d\x0aB"), tables) == "A\r\nB"
        assert decode(ps(b"\x0eA\x0dB"), tables) == "a\rb"

    def test_unmapped_code_is_identity(self, tables: TableSet) -> None:
        # Color codes have no table entry
        assert decode(ps(b"\x05A\x1c"), tables) == "\x05A\x1c"

    def test_shift_lock_codes_pass_through(self, tables: TableSet) -> None:
        assert decode(ps(b"\x08A\x09"), tables) == "\x08A\x09"

    def test_padding_kept_without_strip(self, tables: TableSet) -> None:
        # Shifted space decodes to a no-break space
        assert decode(ps(b"AB\xa0\xa0"), tables) == "AB\u00a0\u00a0"

    def test_padding_stripped(self, tables: TableSet) -> None:
        assert decode(ps(b"AB\xa0\xa0", strip=True), tables) == "AB"

    def test_padding_stripped_anywhere(self, tables: TableSet) -> None:
        assert decode(ps(b"A\xa0B\xa0", strip=True), tables) == "AB"

    def test_state_does_not_carry_between_calls(self, tables: TableSet) -> None:
        assert decode(ps(b"\x0e\x12"), tables) == ""
        assert decode(ps(b"\x41"), tables) == "A"

    def test_to_str(self, tables: TableSet) -> None:
        assert ps(b"\x0eHI\x8e").to_str(tables) == "hi"

    def test_hello_world_border(self, tables: TableSet) -> None:
        data = b"\xb0\x60\x60\xae\x0d\x7d\x48\x0e\x49\x8e\x7d\x0d\xad\x60\x60\xbd"
        assert decode(ps(data), tables) == "┌──┐\r│Hi│\r└──┘"


class TestDecoder:
    """Tests for the stateful Decoder."""

    def test_state_carries_across_feeds(self, tables: TableSet) -> None:
        decoder = Decoder(tables)
        assert decoder.feed(b"\x0e") == ""
        assert decoder.feed(b"\x41") == "a"

    def test_reset(self, tables: TableSet) -> None:
        decoder = Decoder(tables)
        decoder.feed(b"\x0e\x12")
        decoder.reset()
        assert decoder.feed(b"\x41") == "A"

    def test_decode_byte_control(self, tables: TableSet) -> None:
        decoder = Decoder(tables)
        assert decoder.decode_byte(0x12) is None
        assert decoder.state.reversed is True


class TestTableCorruption:
    """Broken tables must abort decoding."""

    def test_custom_tables(self, tiny_tables: TableSet) -> None:
        assert decode(ps(b"\x41\x0e\x41\x8e\x12\x41"), tiny_tables) == "AaZ"

    def test_screen_code_above_127(self, tiny_tables: TableSet) -> None:
        broken = TableSet(
            petscii_unshifted_to_screen={0x41: (1, 0x81)},
            petscii_shifted_to_screen=tiny_tables.petscii_shifted_to_screen,
            unicode_to_screen=tiny_tables.unicode_to_screen,
            screen_to_unicode=tiny_tables.screen_to_unicode,
            screen_to_petscii=tiny_tables.screen_to_petscii,
        )
        with pytest.raises(TableCorruptionError):
            decode(ps(b"\x41"), broken)

    def test_unknown_screen_set(self, tiny_tables: TableSet) -> None:
        broken = TableSet(
            petscii_unshifted_to_screen={0x41: (7, 1)},
            petscii_shifted_to_screen=tiny_tables.petscii_shifted_to_screen,
            unicode_to_screen=tiny_tables.unicode_to_screen,
            screen_to_unicode=tiny_tables.screen_to_unicode,
            screen_to_petscii=tiny_tables.screen_to_petscii,
        )
        with pytest.raises(TableCorruptionError):
            decode(ps(b"\x41"), broken)

    def test_corruption_only_on_lookup(self, tiny_tables: TableSet) -> None:
        broken = TableSet(
            petscii_unshifted_to_screen={0x41: (7, 1)},
            petscii_shifted_to_screen=tiny_tables.petscii_shifted_to_screen,
            unicode_to_screen=tiny_tables.unicode_to_screen,
            screen_to_unicode=tiny_tables.screen_to_unicode,
            screen_to_petscii=tiny_tables.screen_to_petscii,
        )
        assert decode(ps(b"\x42"), broken) == "B"
