"""Registry of attribute factories with per-kind cached values."""

from __future__ import annotations

import re
import threading
from collections.abc import Callable

from appmeta.common.errors import InvalidKindError, NotRegisteredError
from appmeta.common.logging import get_logger
from appmeta.common.types import AttributeKind
from appmeta.metadata.interfaces import MetadataSource

logger = get_logger(__name__)

AttributeFactory = Callable[[MetadataSource], str]

_FIELD_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*(?:-[A-Za-z0-9]+)*$")


def normalize_kind(kind: AttributeKind | str) -> str:
    """Return the lookup key for an attribute kind.

    Raises:
        InvalidKindError: kind is not shaped like a metadata field name.
    """
    if not isinstance(kind, str) or not _FIELD_NAME_RE.match(kind):
        raise InvalidKindError(f"Not a metadata attribute kind: {kind!r}")
    return kind.lower()


class AttributeRegistry:
    """Maps attribute kinds to factories that read a string from a source.

    The first value computed for a kind is cached until the kind is
    re-registered, deregistered or the registry is cleared. Safe to use
    from several threads; a factory may run more than once under a race,
    but only the first stored result is ever returned.
    """

    def __init__(self, source: MetadataSource) -> None:
        self._source = source
        self._lock = threading.Lock()
        self._factories: dict[str, AttributeFactory] = {}
        self._values: dict[str, str] = {}

    @property
    def source(self) -> MetadataSource:
        return self._source

    def register(self, kind: AttributeKind | str, factory: AttributeFactory) -> bool:
        """Register a factory for kind. Returns False if kind was already registered."""
        if not callable(factory):
            raise TypeError(f"Attribute factory for {kind!r} must be callable")
        key = normalize_kind(kind)
        with self._lock:
            added = key not in self._factories
            self._factories[key] = factory
            self._values.pop(key, None)
        logger.debug("attribute_registered", kind=key, replaced=not added)
        return added

    def deregister(self, kind: AttributeKind | str) -> AttributeFactory | None:
        """Remove and return the factory for kind, or None if it was not registered."""
        key = normalize_kind(kind)
        with self._lock:
            factory = self._factories.pop(key, None)
            self._values.pop(key, None)
        if factory is not None:
            logger.debug("attribute_deregistered", kind=key)
        return factory

    def is_registered(self, kind: AttributeKind | str) -> bool:
        key = normalize_kind(kind)
        with self._lock:
            return key in self._factories

    def __contains__(self, kind: object) -> bool:
        try:
            return self.is_registered(kind)  # type: ignore[arg-type]
        except InvalidKindError:
            return False

    def kinds(self) -> list[str]:
        with self._lock:
            return list(self._factories)

    def get(self, kind: AttributeKind | str) -> str:
        """Return the cached value for kind, computing it on first use.

        Raises:
            NotRegisteredError: no factory is registered for kind.
        """
        key = normalize_kind(kind)
        with self._lock:
            if key in self._values:
                return self._values[key]
            factory = self._factories.get(key)
        if factory is None:
            raise NotRegisteredError(key)

        value = factory(self._source)
        if value is None:
            value = ""
        elif not isinstance(value, str):
            value = str(value)

        with self._lock:
            # Registration may have changed while the factory ran
            if self._factories.get(key) is not factory:
                return value
            value = self._values.setdefault(key, value)
        logger.debug("attribute_cached", kind=key)
        return value

    def clear(self) -> None:
        """Drop every factory and cached value."""
        with self._lock:
            self._factories.clear()
            self._values.clear()
        logger.debug("attribute_registry_cleared")
