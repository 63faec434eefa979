"""Tests for the AppInfo metadata accessor."""

from __future__ import annotations

from pathlib import Path

import pytest

from appmeta.common.config import MetadataConfig
from appmeta.common.errors import NotRegisteredError
from appmeta.common.types import AttributeKind
from appmeta.metadata.app_info import AppInfo
from appmeta.metadata.sources import MappingSource
from appmeta.versioning.version import Version


def _make_source(**overrides: str) -> MappingSource:
    values = {
        "Name": "demo-app",
        "Summary": "A demo application",
        "Version": "2.0 SP1",
        "Author": "Demo Corp",
        "License": "MIT",
    }
    values.update(overrides)
    return MappingSource({k: v for k, v in values.items() if v})


class TestStandardFields:
    def test_descriptive_fields(self) -> None:
        info = AppInfo(_make_source())
        assert info.title == "demo-app"
        assert info.product_name == "demo-app"
        assert info.description == "A demo application"
        assert info.company == "Demo Corp"
        assert info.copyright == "MIT"
        assert info.version == "2.0 SP1"

    def test_version_info_is_parsed(self) -> None:
        assert AppInfo(_make_source()).version_info == Version(2, 0, 0, 0, 1)

    def test_unparsable_version_info_is_none(self) -> None:
        assert AppInfo(_make_source(Version="2024.1-beta")).version_info is None

    def test_missing_version_uses_default(self) -> None:
        info = AppInfo(_make_source(Version=""))
        assert info.version == "0.0.0.0"
        assert info.version_info == Version()

        info = AppInfo(_make_source(Version=""), config=MetadataConfig(version_default="1.0"))
        assert info.version == "1.0"

    def test_missing_fields_are_empty(self) -> None:
        info = AppInfo(MappingSource({"Name": "bare"}))
        assert info.description == ""
        assert info.copyright == ""
        assert info.company == ""

    def test_company_falls_back_to_maintainer_then_author_email(self) -> None:
        info = AppInfo(_make_source(Author="", Maintainer="Maintainers Inc"))
        assert info.company == "Maintainers Inc"

        info = AppInfo(_make_source(Author="", **{"Author-email": "Jane Doe <jane@example.com>"}))
        assert info.company == "Jane Doe"

        info = AppInfo(_make_source(Author="", **{"Author-email": "jane@example.com"}))
        assert info.company == "jane@example.com"


class TestTitleAndPath:
    def test_title_falls_back_to_source_name(self) -> None:
        info = AppInfo(MappingSource({"Summary": "x"}, name="from-source"))
        assert info.title == "from-source"

    def test_title_falls_back_to_module_file(self, tmp_path: Path) -> None:
        module_file = tmp_path / "tool.py"
        module_file.write_text("")
        info = AppInfo(MappingSource({}), module_path=module_file)
        assert info.title == "tool"

    def test_module_path_wins_over_location(self, tmp_path: Path) -> None:
        module_file = tmp_path / "pkg" / "main.py"
        module_file.parent.mkdir()
        module_file.write_text("")
        info = AppInfo(MappingSource({}, location=tmp_path), module_path=module_file)
        assert info.path == module_file.resolve()
        assert info.directory_path == module_file.parent.resolve()
        assert info.module_name == "main"
        assert info.to_dict()["module_name"] == "main"

    def test_directory_location(self, tmp_path: Path) -> None:
        info = AppInfo(MappingSource({}, location=tmp_path))
        assert info.path == tmp_path
        assert info.directory_path == tmp_path

    def test_no_path(self) -> None:
        info = AppInfo(MappingSource({"Name": "x"}))
        assert info.path is None
        assert info.directory_path is None
        assert info.module_name == ""
        assert info.to_dict()["path"] == ""


class TestCulture:
    def test_configured_culture_wins(self) -> None:
        info = AppInfo(_make_source(), config=MetadataConfig(culture_default="de-DE"))
        assert info.culture == "de-DE"

    def test_current_locale_formatted_as_tag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("appmeta.metadata.app_info.locale.getlocale", lambda: ("en_US", "UTF-8"))
        assert AppInfo(_make_source()).culture == "en-US"

    def test_c_locale_is_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("appmeta.metadata.app_info.locale.getlocale", lambda: (None, None))
        assert AppInfo(_make_source()).culture == ""


class TestCustomAttributes:
    def test_register_custom_kind(self) -> None:
        info = AppInfo(_make_source())
        assert info.register_attribute("X-Build", lambda source: f"{source.name}-42") is True
        assert info.get_attribute("X-Build") == "demo-app-42"

    def test_replace_standard_kind(self) -> None:
        info = AppInfo(_make_source())
        assert info.register_attribute(AttributeKind.SUMMARY, lambda source: "Replaced") is False
        assert info.description == "Replaced"

    def test_config_overrides_registered(self) -> None:
        cfg = MetadataConfig(overrides={"License": "Apache-2.0", "X-Channel": "beta"})
        info = AppInfo(_make_source(), config=cfg)
        assert info.copyright == "Apache-2.0"
        assert info.get_attribute("x-channel") == "beta"

    def test_unknown_kind_raises(self) -> None:
        with pytest.raises(NotRegisteredError):
            AppInfo(_make_source()).get_attribute("X-Unknown")

    def test_all_standard_kinds_registered(self) -> None:
        info = AppInfo(_make_source())
        assert all(kind in info.registry for kind in AttributeKind)


class TestToDict:
    def test_keys(self) -> None:
        data = AppInfo(_make_source(), config=MetadataConfig(culture_default="en-GB")).to_dict()
        assert data["title"] == "demo-app"
        assert data["version"] == "2.0 SP1"
        assert data["culture"] == "en-GB"
        assert set(data) == {
            "title",
            "description",
            "product_name",
            "company",
            "copyright",
            "version",
            "culture",
            "module_name",
            "path",
            "directory_path",
        }
