"""TableSet - the mappings that drive PETSCII/Unicode conversion."""

import re
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple

from forbidden_bands.core.constants import ATTR_ANY_SHIFT, ATTR_SHIFTED, CONFIG_VERSION, MAX_SCREEN_CODE
from forbidden_bands.core.errors import ConfigError, TableCorruptionError


class ScreenSet(IntEnum):
    """Screen sets of the built-in tables."""
    UPPERCASE = 1   # Uppercase/graphics ROM
    LOWERCASE = 2   # Lowercase/uppercase ROM
    CONTROL = 3     # Virtual set for control characters


class ScreenCode(NamedTuple):
    """A screen code together with the set it belongs to."""
    screen_set: int
    code: int


class PetsciiCode(NamedTuple):
    """A PETSCII code and the attributes needed to print it."""
    attributes: int
    code: int

    @property
    def shifted(self) -> bool:
        """True if the code must be sent in shifted mode."""
        return bool(self.attributes & ATTR_SHIFTED)

    @property
    def any_shift(self) -> bool:
        """True if the code prints the same glyph in either shift state."""
        return bool(self.attributes & ATTR_ANY_SHIFT)


UNSHIFTED_KEY = "petsciiUnshiftedToScreen"
SHIFTED_KEY = "petsciiShiftedToScreen"
UNICODE_KEY = "unicodeToScreen"
SCREEN_SET_KEY = re.compile(r"^screenSet([1-9][0-9]*)To(Unicode|Petscii)$")


def _freeze(mapping: Mapping, pair: type | None = None) -> Mapping:
    if pair is None:
        return MappingProxyType({int(k): v for k, v in mapping.items()})
    return MappingProxyType({int(k): pair(*v) for k, v in mapping.items()})


@dataclass(frozen=True)
class TableSet:
    """
    The nine PETSCII mappings plus a version tag.

    Decoding goes PETSCII -> screen code -> Unicode, encoding goes
    Unicode -> screen code -> PETSCII. Screen-code tables are keyed by
    screen set id, so extra virtual sets are just more entries in
    ``screen_to_unicode`` and ``screen_to_petscii``.

    All mappings are wrapped in read-only views; a TableSet can be shared
    freely between threads once built. It compares by value but is not
    hashable.
    """
    petscii_unshifted_to_screen: Mapping[int, ScreenCode]
    petscii_shifted_to_screen: Mapping[int, ScreenCode]
    unicode_to_screen: Mapping[int, ScreenCode]
    screen_to_unicode: Mapping[int, Mapping[int, int]]
    screen_to_petscii: Mapping[int, Mapping[int, PetsciiCode]]
    version: str = CONFIG_VERSION

    # Mapping proxies are unhashable
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        """Copy every mapping into a read-only view with typed values."""
        object.__setattr__(self, "petscii_unshifted_to_screen", _freeze(self.petscii_unshifted_to_screen, ScreenCode))
        object.__setattr__(self, "petscii_shifted_to_screen", _freeze(self.petscii_shifted_to_screen, ScreenCode))
        object.__setattr__(self, "unicode_to_screen", _freeze(self.unicode_to_screen, ScreenCode))
        object.__setattr__(self, "screen_to_unicode", _freeze(
            {int(k): _freeze(v) for k, v in self.screen_to_unicode.items()}
        ))
        object.__setattr__(self, "screen_to_petscii", _freeze(
            {int(k): _freeze(v, PetsciiCode) for k, v in self.screen_to_petscii.items()}
        ))

    @property
    def screen_sets(self) -> frozenset[int]:
        """Ids of every screen set with at least one table."""
        return frozenset(self.screen_to_unicode) | frozenset(self.screen_to_petscii)

    def petscii_to_screen(self, shifted: bool) -> Mapping[int, ScreenCode]:
        """Get the PETSCII-to-screen table for a shift state."""
        return self.petscii_shifted_to_screen if shifted else self.petscii_unshifted_to_screen

    def screen_set_to_unicode(self, screen_set: int) -> Mapping[int, int]:
        """Get the screen-to-Unicode table for a screen set."""
        try:
            return self.screen_to_unicode[screen_set]
        except KeyError:
            raise TableCorruptionError(
                f"Screen set {screen_set} has no screen-to-Unicode table"
            ) from None

    def screen_set_to_petscii(self, screen_set: int) -> Mapping[int, PetsciiCode]:
        """Get the screen-to-PETSCII table for a screen set (empty if none)."""
        return self.screen_to_petscii.get(screen_set, MappingProxyType({}))

    def is_compatible(self, version: str = CONFIG_VERSION) -> bool:
        """Check whether this table set can be used by a reader of ``version``."""
        return major_version(self.version) == major_version(version)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON ``character_set_map`` layout."""
        data: dict[str, Any] = {
            UNSHIFTED_KEY: _pairs_to_json(self.petscii_unshifted_to_screen),
            SHIFTED_KEY: _pairs_to_json(self.petscii_shifted_to_screen),
        }
        for screen_set in sorted(self.screen_to_unicode):
            data[f"screenSet{screen_set}ToUnicode"] = {
                str(k): v for k, v in sorted(self.screen_to_unicode[screen_set].items())
            }
        data[UNICODE_KEY] = _pairs_to_json(self.unicode_to_screen)
        for screen_set in sorted(self.screen_to_petscii):
            data[f"screenSet{screen_set}ToPetscii"] = _pairs_to_json(
                self.screen_to_petscii[screen_set]
            )
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], version: str = CONFIG_VERSION) -> "TableSet":
        """
        Build a TableSet from the JSON ``character_set_map`` layout.

        Keys are decimal strings, pair values are two-element lists.
        Raises ConfigError if a table is missing or malformed.
        """
        if not isinstance(data, Mapping):
            raise ConfigError("character set map must be an object")

        screen_to_unicode: dict[int, dict[int, int]] = {}
        screen_to_petscii: dict[int, dict[int, PetsciiCode]] = {}
        for name, table in data.items():
            match = SCREEN_SET_KEY.match(name)
            if match is None:
                continue
            screen_set = int(match.group(1))
            if match.group(2) == "Unicode":
                screen_to_unicode[screen_set] = _parse_scalars(name, table)
            else:
                screen_to_petscii[screen_set] = {
                    k: PetsciiCode(*v) for k, v in _parse_pairs(name, table, 0xFF, 0xFF).items()
                }

        for name in (UNSHIFTED_KEY, SHIFTED_KEY, UNICODE_KEY):
            if name not in data:
                raise ConfigError(f"Missing table: {name}")
        unshifted = _parse_screen_codes(UNSHIFTED_KEY, data[UNSHIFTED_KEY], 0xFF)
        shifted = _parse_screen_codes(SHIFTED_KEY, data[SHIFTED_KEY], 0xFF)
        from_unicode = _parse_screen_codes(UNICODE_KEY, data[UNICODE_KEY], 0x10FFFF)

        for name, table in ((UNSHIFTED_KEY, unshifted), (SHIFTED_KEY, shifted)):
            for key, value in table.items():
                if value.screen_set not in screen_to_unicode:
                    raise ConfigError(
                        f"{name}[{key}] refers to screen set {value.screen_set} "
                        f"which has no screen-to-Unicode table"
                    )
                if value.code > MAX_SCREEN_CODE:
                    raise ConfigError(
                        f"{name}[{key}] has screen code {value.code} "
                        f"(must be <= {MAX_SCREEN_CODE})"
                    )
        for key, value in from_unicode.items():
            if value.screen_set not in screen_to_petscii:
                raise ConfigError(
                    f"{UNICODE_KEY}[{key}] refers to screen set {value.screen_set} "
                    f"which has no screen-to-PETSCII table"
                )

        return cls(
            petscii_unshifted_to_screen=unshifted,
            petscii_shifted_to_screen=shifted,
            unicode_to_screen=from_unicode,
            screen_to_unicode=screen_to_unicode,
            screen_to_petscii=screen_to_petscii,
            version=version,
        )


def major_version(version: str) -> int:
    try:
        return int(version.split(".")[0])
    except ValueError:
        raise ConfigError(f"Invalid version: {version!r}") from None


def _pairs_to_json(table: Mapping[int, tuple[int, int]]) -> dict[str, list[int]]:
    return {str(k): [v[0], v[1]] for k, v in sorted(table.items())}


def _parse_key(name: str, key: Any, limit: int) -> int:
    try:
        value = int(key)
    except (TypeError, ValueError):
        raise ConfigError(f"{name}: key {key!r} is not an integer") from None
    if not 0 <= value <= limit:
        raise ConfigError(f"{name}: key {value} out of range (0-{limit})")
    return value


def _parse_int(name: str, key: int, value: Any, limit: int) -> int:
    # bool is an int subclass, but true/false in a table is a mistake
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigError(f"{name}[{key}]: {value!r} is not an integer")
    if not 0 <= value <= limit:
        raise ConfigError(f"{name}[{key}]: {value} out of range (0-{limit})")
    return value


def _parse_scalars(name: str, table: Any) -> dict[int, int]:
    if not isinstance(table, Mapping):
        raise ConfigError(f"{name} must be an object")
    result = {}
    for key, value in table.items():
        code = _parse_key(name, key, 0xFF)
        scalar = _parse_int(name, code, value, 0x10FFFF)
        if 0xD800 <= scalar <= 0xDFFF:
            raise ConfigError(f"{name}[{code}]: {scalar:#x} is a surrogate")
        result[code] = scalar
    return result


def _parse_pairs(name: str, table: Any, key_limit: int, first_limit: int) -> dict[int, tuple[int, int]]:
    if not isinstance(table, Mapping):
        raise ConfigError(f"{name} must be an object")
    result = {}
    for key, value in table.items():
        code = _parse_key(name, key, key_limit)
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise ConfigError(f"{name}[{code}]: expected a pair, got {value!r}")
        result[code] = (
            _parse_int(name, code, value[0], first_limit),
            _parse_int(name, code, value[1], 0xFF),
        )
    return result


def _parse_screen_codes(name: str, table: Any, key_limit: int) -> dict[int, ScreenCode]:
    return {
        k: ScreenCode(*v)
        for k, v in _parse_pairs(name, table, key_limit, 0xFF).items()
    }
