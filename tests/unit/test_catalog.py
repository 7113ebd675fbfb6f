"""Tests for the settings catalog, setting targets and resolver."""

import pytest
from pydantic import ValidationError

from settingsbridge.targets import (
    CatalogResolver,
    SettingFailedError,
    SettingItem,
    SettingsCatalog,
    SettingType,
)


class TestSettingType:
    def test_parse_is_case_insensitive(self) -> None:
        assert SettingType.parse("boolean") is SettingType.BOOLEAN
        assert SettingType.parse("SETTINGCOLLECTION") is SettingType.SETTING_COLLECTION

    def test_parse_unknown(self) -> None:
        assert SettingType.parse("Hologram") is None
        assert SettingType.parse(None) is None

    def test_composite_kinds(self) -> None:
        assert SettingType.CUSTOM.is_composite
        assert SettingType.SETTING_COLLECTION.is_composite
        assert not SettingType.ACTION.is_composite


class TestListing:
    def test_default_listing_hides_composite_and_unknown(self, catalog) -> None:
        assert catalog.list_settings() == [
            ("Broken", SettingType.BOOLEAN),
            ("Locked", SettingType.STRING),
            ("Notifications", SettingType.BOOLEAN),
            ("Orientation", SettingType.LIST),
            ("Troubleshoot", SettingType.ACTION),
            ("X", SettingType.RANGE),
        ]

    def test_include_all_lists_composite_kinds(self, catalog) -> None:
        ids = [setting_id for setting_id, _ in catalog.list_settings(include_all=True)]

        assert "Background" in ids
        assert "Themes" in ids
        assert "Mystery" not in ids

    def test_list_targets_uses_type_names(self, catalog) -> None:
        assert ("Themes", "SettingCollection") in catalog.list_targets(include_all=True)


class TestResolver:
    def test_resolves_setting_item(self, catalog) -> None:
        item = CatalogResolver(catalog).resolve("Orientation")

        assert isinstance(item, SettingItem)
        assert item.setting_id == "Orientation"
        assert item.setting_type is SettingType.LIST

    @pytest.mark.parametrize("setting_id", ["", "Nope"])
    def test_unknown_setting(self, catalog, setting_id) -> None:
        with pytest.raises(SettingFailedError, match="No such setting"):
            CatalogResolver(catalog).resolve(setting_id)

    def test_unknown_type_cannot_be_instantiated(self, catalog) -> None:
        with pytest.raises(SettingFailedError, match="unknown type 'Hologram'"):
            CatalogResolver(catalog).resolve("Mystery")

    def test_resolved_items_share_setting_state(self, catalog) -> None:
        resolver = CatalogResolver(catalog)

        resolver.resolve("Notifications").set_value("Value", True)

        assert resolver.resolve("Notifications").get_value() is True


class TestSettingItem:
    def test_values_and_flags(self, catalog) -> None:
        item = CatalogResolver(catalog).resolve("Orientation")

        assert item.get_value() == "Landscape"
        assert item.get_possible_values() == ["Landscape", "Portrait"]
        assert item.is_enabled() is True
        assert item.is_applicable() is True

    def test_unknown_value_name(self, catalog) -> None:
        item = CatalogResolver(catalog).resolve("X")

        with pytest.raises(SettingFailedError, match="no value named 'Min'"):
            item.get_value("Min")

    def test_disabled_setting_refuses_changes(self, catalog) -> None:
        item = CatalogResolver(catalog).resolve("Locked")

        with pytest.raises(SettingFailedError, match="Setting is disabled"):
            item.set_value("Value", "other")
        assert item.get_value() == "fixed"

    def test_only_actions_can_be_invoked(self, catalog) -> None:
        resolver = CatalogResolver(catalog)
        resolver.resolve("Troubleshoot").invoke()

        assert catalog.backend("Troubleshoot").invocations == 1
        with pytest.raises(SettingFailedError, match="cannot be invoked"):
            resolver.resolve("X").invoke()

    def test_simulated_failure_carries_error_code(self, catalog) -> None:
        item = CatalogResolver(catalog).resolve("Broken")

        with pytest.raises(SettingFailedError) as exc_info:
            item.get_value()

        assert exc_info.value.error_code == 5
        assert str(exc_info.value) == "Access is denied (error code 5)"

    def test_catalog_file_is_not_modified(self, catalog, catalog_data) -> None:
        CatalogResolver(catalog).resolve("X").set_value("Value", 7)

        assert catalog.definitions["X"].values == {"Value": 42}
        assert catalog_data["settings"]["X"]["values"] == {"Value": 42}


class TestLoad:
    def test_load_file(self, catalog_file) -> None:
        catalog = SettingsCatalog.load(catalog_file)

        assert catalog.setting_type("X") is SettingType.RANGE
        assert catalog.definitions["Orientation"].possible_values == ["Landscape", "Portrait"]

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError, match="Catalog file not found"):
            SettingsCatalog.load(tmp_path / "nope.json")

    def test_invalid_schema(self) -> None:
        with pytest.raises(ValidationError):
            SettingsCatalog.from_dict({"settings": {"X": {"values": {}}}})
