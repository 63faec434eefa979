"""Domain types for appmeta."""

from __future__ import annotations

from enum import StrEnum


class AttributeKind(StrEnum):
    """Standard core-metadata fields exposed by a metadata source."""

    NAME = "Name"
    SUMMARY = "Summary"
    VERSION = "Version"
    AUTHOR = "Author"
    AUTHOR_EMAIL = "Author-email"
    MAINTAINER = "Maintainer"
    LICENSE = "License"
    HOME_PAGE = "Home-page"
    KEYWORDS = "Keywords"
    REQUIRES_PYTHON = "Requires-Python"
