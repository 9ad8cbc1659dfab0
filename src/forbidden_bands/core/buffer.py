"""PetsciiString - fixed-capacity PETSCII byte string."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from forbidden_bands.core.errors import OversizeError

if TYPE_CHECKING:
    from forbidden_bands.core.tables import TableSet


@dataclass(frozen=True)
class PetsciiString:
    """
    A fixed-capacity PETSCII string.

    Holds ``capacity`` raw bytes of which the first ``length`` are
    meaningful; the rest are zero and never iterated. This mirrors the
    fixed-width strings in C64 file system structures (directory entries,
    disk headers), which is also why ``strip_padding`` exists: CBM DOS
    pads names with shifted spaces (0xA0), and a string with the flag set
    decodes without them.

    Strings are immutable. Character tables are not stored on the string;
    pass them to ``to_str`` (or ``decode``) instead.
    """
    capacity: int
    data: bytes = b""
    length: int | None = None
    strip_padding: bool = False

    def __post_init__(self) -> None:
        """Validate length and zero-fill the unused capacity."""
        if self.capacity < 0:
            raise ValueError(f"capacity must not be negative, got {self.capacity}")
        data = bytes(self.data)
        length = len(data) if self.length is None else self.length
        if length < 0:
            raise ValueError(f"length must not be negative, got {length}")
        if length > len(data):
            raise ValueError(f"length {length} exceeds the {len(data)} bytes given")
        if length > self.capacity:
            raise OversizeError(length, self.capacity)
        data = data[:length].ljust(self.capacity, b"\x00")
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "length", length)

    @classmethod
    def from_bytes(cls, data: bytes, capacity: int) -> "PetsciiString":
        """Create a string from raw PETSCII bytes."""
        if len(data) > capacity:
            raise OversizeError(len(data), capacity)
        return cls(capacity, bytes(data))

    @classmethod
    def from_bytes_strip_padding(cls, data: bytes, capacity: int) -> "PetsciiString":
        """Create a string from raw bytes that decodes without 0xA0 padding."""
        if len(data) > capacity:
            raise OversizeError(len(data), capacity)
        return cls(capacity, bytes(data), strip_padding=True)

    @classmethod
    def from_str(cls, text: str, tables: "TableSet", capacity: int) -> "PetsciiString":
        """Encode a Unicode string into a new PETSCII string."""
        from forbidden_bands.codec.encoder import encode
        return encode(text, tables, capacity)

    def to_bytes(self) -> bytes:
        """Get the meaningful bytes, without the unused capacity."""
        return self.data[:self.length]

    def to_str(self, tables: "TableSet | None" = None) -> str:
        """Decode to Unicode, using identity mapping if no tables are given."""
        from forbidden_bands.codec.decoder import decode
        return decode(self, tables)

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_bytes())

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __str__(self) -> str:
        """Identity-decoded text, one code point per byte."""
        return self.to_str()

    def __repr__(self) -> str:
        return (
            f"PetsciiString(capacity={self.capacity}, length={self.length}, "
            f"data={self.to_bytes()!r}, text={str(self)!r})"
        )
