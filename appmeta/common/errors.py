"""Exception hierarchy for appmeta."""

from __future__ import annotations


class AppMetaError(Exception):
    """Base exception for all appmeta errors."""


class VersionError(AppMetaError):
    """Errors related to version construction or parsing."""


class VersionOutOfRangeError(VersionError, ValueError):
    """A version component is negative."""

    def __init__(self, field: str, value: int) -> None:
        super().__init__(f"Version component '{field}' must be >= 0, got {value}")
        self.field = field
        self.value = value


class VersionParseError(VersionError, ValueError):
    """Version text could not be parsed."""


class EmptyInputError(VersionParseError):
    """Version text is missing, empty or whitespace only."""


class VersionFormatError(VersionParseError):
    """Version text does not match the version grammar."""


class RegistryError(AppMetaError):
    """Errors related to the attribute registry."""


class NotRegisteredError(RegistryError, KeyError):
    """No factory is registered for the requested attribute kind."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"No attribute factory registered for '{kind}'")
        self.kind = kind

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class InvalidKindError(RegistryError, TypeError):
    """The attribute kind is not a recognized metadata field."""


class ConfigError(AppMetaError):
    """Errors related to configuration loading or validation."""
