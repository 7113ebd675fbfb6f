import json

import pytest

from settingsbridge.core.dispatcher import Dispatcher
from settingsbridge.core.registry import CapabilityRegistry
from settingsbridge.targets import CatalogResolver, SettingItem, SettingsCatalog
from tests.utils import DictResolver, Thermostat, sample_catalog_data


@pytest.fixture
def catalog_data():
    """Raw sample catalog JSON"""
    return sample_catalog_data()


@pytest.fixture
def catalog_file(tmp_path, catalog_data):
    """Sample catalog written to a temporary file"""
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(catalog_data), encoding="utf-8")
    return path


@pytest.fixture
def catalog(catalog_data):
    """Fresh in-memory catalog"""
    return SettingsCatalog.from_dict(catalog_data)


@pytest.fixture
def setting_registry():
    return CapabilityRegistry.build(SettingItem)


@pytest.fixture
def setting_dispatcher(catalog, setting_registry):
    """Dispatcher over the sample catalog"""
    return Dispatcher(CatalogResolver(catalog), [setting_registry])


@pytest.fixture
def thermostat():
    return Thermostat()


@pytest.fixture
def thermostat_resolver(thermostat):
    return DictResolver({"T": thermostat})


@pytest.fixture
def thermostat_dispatcher(thermostat_resolver):
    """Dispatcher over a single fake target with id 'T'"""
    return Dispatcher(thermostat_resolver, [CapabilityRegistry.build(Thermostat)])
