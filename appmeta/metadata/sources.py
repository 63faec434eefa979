"""Metadata sources backed by installed distributions or plain mappings."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from importlib import metadata as importlib_metadata
from pathlib import Path

from appmeta.metadata.interfaces import MetadataSource


class DistributionSource(MetadataSource):
    """Core metadata of an installed distribution.

    Raises importlib.metadata.PackageNotFoundError when the distribution
    is not installed.
    """

    def __init__(self, distribution: str | importlib_metadata.Distribution) -> None:
        if isinstance(distribution, str):
            distribution = importlib_metadata.distribution(distribution)
        self._distribution = distribution
        self._metadata = distribution.metadata

    @property
    def name(self) -> str:
        return self._metadata.get("Name") or ""

    @property
    def location(self) -> Path | None:
        # Root the distribution's files are installed relative to
        try:
            return Path(str(self._distribution.locate_file(""))).resolve()
        except (NotImplementedError, OSError):
            return None

    def get_all(self, field: str) -> list[str]:
        return [str(v) for v in self._metadata.get_all(field) or []]


class MappingSource(MetadataSource):
    """Metadata held in memory, e.g. for applications that are not installed."""

    def __init__(
        self,
        values: Mapping[str, str | Iterable[str]],
        name: str = "",
        location: str | Path | None = None,
    ) -> None:
        self._values: dict[str, list[str]] = {}
        for key, value in values.items():
            items = [value] if isinstance(value, str) else list(value)
            self._values.setdefault(key.lower(), []).extend(items)
        self._name = name or (self._values.get("name") or [""])[0]
        self._location = Path(location) if location is not None else None

    @property
    def name(self) -> str:
        return self._name

    @property
    def location(self) -> Path | None:
        return self._location

    def get_all(self, field: str) -> list[str]:
        return list(self._values.get(field.lower(), []))
