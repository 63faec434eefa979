"""Five-component version value type.

A version is ``major.minor.build.revision`` plus an optional service pack
level. Text such as ``"v1.2.3.4"``, ``"2.0 SP1"`` or ``"3 service pack 2"``
parses into a :class:`Version`; versions order lexicographically over all
five fields, most significant first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields

from appmeta.common.errors import EmptyInputError, VersionFormatError, VersionOutOfRangeError
from appmeta.common.logging import get_logger

logger = get_logger(__name__)

# ASCII digits only; other Unicode digits are a format error
_COMPONENTS_RE = re.compile(
    r"^v?(?P<major>\d+)"
    r"(?:\.(?P<minor>\d+)(?:\.(?P<build>\d+))?(?:\.(?P<revision>\d+))?)?"
    r"(?:\s?(?:service pack\s|sp)(?P<sp>\d+))?$",
    re.IGNORECASE | re.ASCII,
)

MIN_FIELD_COUNT = -1
MAX_FIELD_COUNT = 5


def _to_int16(value: int) -> int:
    """Interpret the low 16 bits of value as a signed short."""
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


@dataclass(frozen=True, eq=False, slots=True)
class Version:
    """Immutable version number with a service pack level."""

    major: int = 0
    minor: int = 0
    build: int = 0
    revision: int = 0
    service_pack: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"Version component '{f.name}' must be an int, got {type(value).__name__}")
            if value < 0:
                raise VersionOutOfRangeError(f.name, value)

    @property
    def major_revision(self) -> int:
        """High 16 bits of the revision, as a signed short."""
        return _to_int16(self.revision >> 16)

    @property
    def minor_revision(self) -> int:
        """Low 16 bits of the revision, as a signed short."""
        return _to_int16(self.revision)

    def as_tuple(self) -> tuple[int, int, int, int, int]:
        return (self.major, self.minor, self.build, self.revision, self.service_pack)

    @classmethod
    def parse(cls, text: str | None) -> Version:
        """Parse version text.

        Raises:
            EmptyInputError: text is None, empty or only whitespace.
            VersionFormatError: text is not a str or does not match the version grammar.
        """
        if text is not None and not isinstance(text, str):
            raise VersionFormatError(f"Version must be given as text, got {type(text).__name__}")
        text = text.strip() if text is not None else ""
        if not text:
            raise EmptyInputError("Version string is empty.")

        match = _COMPONENTS_RE.match(text)
        if match is None:
            raise VersionFormatError(f"Version string is not in the correct format: {text!r}")

        return cls(*(int(match.group(name) or 0) for name in ("major", "minor", "build", "revision", "sp")))

    @classmethod
    def try_parse(cls, text: str | None) -> Version | None:
        """Parse version text, returning None instead of raising."""
        try:
            return cls.parse(text)
        except (EmptyInputError, VersionFormatError) as e:
            logger.debug("version_parse_rejected", text=text, reason=str(e))
            return None

    def compare(self, other: Version | None) -> int:
        """Return -1, 0 or 1. A missing comparand always sorts first."""
        if other is None:
            return 1
        mine, theirs = self.as_tuple(), other.as_tuple()
        if mine == theirs:
            return 0
        return 1 if mine > theirs else -1

    def to_string(self, field_count: int = -1) -> str:
        """Render the first field_count fields.

        0 renders nothing, 1-4 render that many dotted fields, and -1 or 5
        render all four dotted fields plus " SP<n>" when a service pack is set.
        Counts outside [-1, 5] are clamped.
        """
        field_count = max(MIN_FIELD_COUNT, min(MAX_FIELD_COUNT, field_count))

        if field_count == 0:
            return ""
        if 1 <= field_count <= 4:
            return ".".join(str(n) for n in self.as_tuple()[:field_count])

        text = f"{self.major}.{self.minor}.{self.build}.{self.revision}"
        if self.service_pack < 1:
            return text
        return f"{text} SP{self.service_pack}"

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return self.to_string()
        try:
            field_count = int(format_spec)
        except ValueError:
            raise ValueError(f"Invalid format specifier for Version: {format_spec!r}") from None
        return self.to_string(field_count)

    def __eq__(self, other: object) -> bool:
        if other is None:
            return False
        if not isinstance(other, Version):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self) -> int:
        packed = (
            (self.major & 0xF) << 44
            | (self.minor & 0xFF) << 36
            | (self.build & 0xFF) << 28
            | (self.revision & 0xFFF) << 16
            | (self.service_pack & 0xFFFF)
        )
        return hash(packed)

    def __lt__(self, other: object) -> bool:
        if other is not None and not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if other is not None and not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if other is not None and not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if other is not None and not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) >= 0


def compare(a: Version | None, b: Version | None) -> int:
    """Compare two possibly-missing versions; None sorts before any version."""
    if a is None:
        return 0 if b is None else -1
    return a.compare(b)
