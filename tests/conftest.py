"""Shared fixtures for forbidden-bands tests."""

import pytest

from forbidden_bands.config.defaults import build_default_tables
from forbidden_bands.core.tables import TableSet


@pytest.fixture(scope="session")
def tables() -> TableSet:
    """The built-in C64 character tables."""
    return build_default_tables()


@pytest.fixture
def tiny_tables() -> TableSet:
    """
    A hand-built table set with one character per screen set.

    PETSCII 0x41 shows screen code 1 ('A' unshifted, 'a' shifted),
    0x0D routes through the virtual control set.
    """
    return TableSet(
        petscii_unshifted_to_screen={0x41: (1, 1), 0x0D: (3, 0x0D)},
        petscii_shifted_to_screen={0x41: (2, 1), 0x0D: (3, 0x0D)},
        unicode_to_screen={ord("A"): (1, 1), ord("a"): (2, 1), 0x0D: (3, 0x0D)},
        screen_to_unicode={
            1: {1: ord("A"), 0x81: ord("Z")},
            2: {1: ord("a")},
            3: {0x0D: 0x0D},
        },
        screen_to_petscii={
            1: {1: (0, 0x41)},
            2: {1: (1, 0x41)},
            3: {0x0D: (0, 0x0D)},
        },
    )
