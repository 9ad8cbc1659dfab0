"""Exception types raised by forbidden-bands."""


class ForbiddenBandsError(Exception):
    """Base class for all forbidden-bands errors."""


class OversizeError(ForbiddenBandsError, ValueError):
    """Source data does not fit in a fixed-capacity string."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(
            f"{size} bytes will not fit in a string of capacity {capacity}"
        )


class TableCorruptionError(ForbiddenBandsError, RuntimeError):
    """
    A table set violates an invariant the engine depends on.

    Raised for screen codes above 127 in a PETSCII-to-screen table and for
    references to a screen set that has no table. This points at broken
    tables, not bad input, so it is never caught inside the library.
    """


class ConfigError(ForbiddenBandsError):
    """A configuration document could not be read, parsed or validated."""
