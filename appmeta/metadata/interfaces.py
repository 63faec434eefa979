"""Abstract interfaces for metadata sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class MetadataSource(ABC):
    """Read-only view over an application's descriptive metadata."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the application or distribution, empty if unknown."""

    @property
    @abstractmethod
    def location(self) -> Path | None:
        """Filesystem location the metadata was loaded from, if any."""

    @abstractmethod
    def get_all(self, field: str) -> list[str]:
        """Return every value of a metadata field.

        Args:
            field: Core-metadata field name, matched case-insensitively.

        Returns:
            Values in declaration order; empty when the field is absent.
        """

    def get(self, field: str) -> str | None:
        """Return the first value of a metadata field, or None."""
        values = self.get_all(field)
        return values[0] if values else None
