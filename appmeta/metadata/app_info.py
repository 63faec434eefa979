"""Descriptive information about an application and its distribution."""

from __future__ import annotations

import locale
import sys
from email.utils import getaddresses
from functools import partial
from importlib import import_module
from importlib import metadata as importlib_metadata
from pathlib import Path
from types import ModuleType
from typing import Any

from appmeta.common.config import MetadataConfig
from appmeta.common.logging import get_logger
from appmeta.common.types import AttributeKind
from appmeta.metadata.interfaces import MetadataSource
from appmeta.metadata.registry import AttributeFactory, AttributeRegistry
from appmeta.metadata.sources import DistributionSource, MappingSource
from appmeta.versioning.version import Version

logger = get_logger(__name__)


def _read_field(field: str, source: MetadataSource) -> str:
    return source.get(field) or ""


def _constant(value: str, source: MetadataSource) -> str:
    return value


def _current_culture() -> str:
    """Current locale as a language tag, e.g. "en-US"; empty if unset."""
    try:
        name = locale.getlocale()[0]
    except ValueError:
        return ""
    if not name or name in ("C", "POSIX"):
        return ""
    return name.replace("_", "-")


class AppInfo:
    """Title, company, version and path information for an application.

    Values come from an :class:`AttributeRegistry` bound to the metadata
    source, so callers can register extra kinds or replace the standard
    ones with :meth:`register_attribute`.
    """

    def __init__(
        self,
        source: MetadataSource,
        module_path: str | Path | None = None,
        config: MetadataConfig | None = None,
    ) -> None:
        self._config = config or MetadataConfig()
        self._module_path = Path(module_path) if module_path is not None else None
        self._registry = AttributeRegistry(source)

        for kind in AttributeKind:
            self._registry.register(kind, partial(_read_field, kind.value))
        for kind, value in self._config.overrides.items():
            self._registry.register(kind, partial(_constant, value))

    @classmethod
    def for_distribution(cls, name: str, config: MetadataConfig | None = None) -> AppInfo:
        """AppInfo for an installed distribution, e.g. "pydantic"."""
        return cls(DistributionSource(name), config=config)

    @classmethod
    def for_module(cls, module: ModuleType | str, config: MetadataConfig | None = None) -> AppInfo:
        """AppInfo for the distribution that provides module.

        Falls back to in-memory metadata named after the top-level package
        when no installed distribution provides it.
        """
        if isinstance(module, str):
            module = sys.modules.get(module) or import_module(module)

        top_level = module.__name__.partition(".")[0]
        module_file = getattr(module, "__file__", None)

        dist_names = importlib_metadata.packages_distributions().get(top_level, [])
        source: MetadataSource | None = None
        for dist_name in dist_names:
            try:
                source = DistributionSource(dist_name)
                break
            except importlib_metadata.PackageNotFoundError:
                continue
        if source is None:
            logger.debug("distribution_not_found", module=module.__name__)
            source = MappingSource({"Name": top_level})

        return cls(source, module_path=module_file, config=config)

    @property
    def registry(self) -> AttributeRegistry:
        return self._registry

    @property
    def source(self) -> MetadataSource:
        return self._registry.source

    def get_attribute(self, kind: AttributeKind | str) -> str:
        return self._registry.get(kind)

    def register_attribute(self, kind: AttributeKind | str, factory: AttributeFactory) -> bool:
        return self._registry.register(kind, factory)

    @property
    def title(self) -> str:
        title = self.get_attribute(AttributeKind.NAME).strip()
        if not title:
            title = self.source.name.strip()
        if not title and self.path is not None:
            title = self.path.stem
        return title

    @property
    def description(self) -> str:
        return self.get_attribute(AttributeKind.SUMMARY)

    @property
    def product_name(self) -> str:
        return self.get_attribute(AttributeKind.NAME)

    @property
    def company(self) -> str:
        company = self.get_attribute(AttributeKind.AUTHOR) or self.get_attribute(AttributeKind.MAINTAINER)
        if company:
            return company
        # Author-email: "Jane Doe <jane@example.com>, Org <org@example.com>"
        for display_name, address in getaddresses([self.get_attribute(AttributeKind.AUTHOR_EMAIL)]):
            if display_name or address:
                return display_name or address
        return ""

    @property
    def copyright(self) -> str:
        return self.get_attribute(AttributeKind.LICENSE)

    @property
    def version(self) -> str:
        return self.get_attribute(AttributeKind.VERSION) or self._config.version_default

    @property
    def version_info(self) -> Version | None:
        return Version.try_parse(self.version)

    @property
    def culture(self) -> str:
        return self._config.culture_default or _current_culture()

    @property
    def path(self) -> Path | None:
        if self._module_path is not None:
            return self._module_path.resolve()
        return self.source.location

    @property
    def module_name(self) -> str:
        """File name of the application path without its extension."""
        path = self.path
        return path.stem if path is not None else ""

    @property
    def directory_path(self) -> Path | None:
        path = self.path
        if path is None:
            return None
        return path if path.is_dir() else path.parent

    def to_dict(self) -> dict[str, Any]:
        path = self.path
        directory = self.directory_path
        return {
            "title": self.title,
            "description": self.description,
            "product_name": self.product_name,
            "company": self.company,
            "copyright": self.copyright,
            "version": self.version,
            "culture": self.culture,
            "module_name": self.module_name,
            "path": str(path) if path is not None else "",
            "directory_path": str(directory) if directory is not None else "",
        }
