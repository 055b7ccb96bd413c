"""Shared pytest fixtures for spdx-jsonld tests."""

import os
import sys

import pytest

# Add the parent directory to the path so we can import spdx_jsonld
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from spdx_jsonld.config.config_loader import SpdxJsonLdConfig
from spdx_jsonld.schema.schema_cache import SchemaCache
from spdx_jsonld.store.jsonld_store import JsonLDStore
from spdx_jsonld.store.listed_licenses import ListedLicenseRepository
from spdx_jsonld.store.memory_store import InMemoryModelStore
from test_spdx_jsonld.utils.test_helpers import SPEC_VERSION, setup_test_logging

setup_test_logging()


def create_test_config() -> SpdxJsonLdConfig:
    """Create a config object with built-in settings, ignoring config files on disk."""
    config = SpdxJsonLdConfig.__new__(SpdxJsonLdConfig)
    config.config_data = {
        'spec': {
            'latest_version': SPEC_VERSION,
            'resource_dir': None
        },
        'serializer': {
            'pretty': True,
            'use_external_listed_elements': False
        },
        'app': {
            'log_level': 'DEBUG'
        }
    }
    config.config_path = "<programmatically created for tests>"
    return config


@pytest.fixture(scope="session")
def schema_cache() -> SchemaCache:
    return SchemaCache(latest_version=SPEC_VERSION)


@pytest.fixture(scope="session")
def schema(schema_cache):
    return schema_cache.get_or_create(SPEC_VERSION)


@pytest.fixture
def test_config(monkeypatch) -> SpdxJsonLdConfig:
    for name in ("SPDX_JSONLD_LATEST_VERSION", "SPDX_JSONLD_RESOURCE_DIR",
                 "SPDX_JSONLD_PRETTY", "SPDX_JSONLD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return create_test_config()


@pytest.fixture
def memory_store() -> InMemoryModelStore:
    return InMemoryModelStore()


@pytest.fixture
def listed_licenses() -> ListedLicenseRepository:
    repository = ListedLicenseRepository()
    repository.add_listed_license("Apache-2.0", SPEC_VERSION, name="Apache License 2.0",
                                  license_text="Apache License Version 2.0, January 2004")
    repository.add_listed_license("Classpath-exception-2.0", SPEC_VERSION,
                                  name="Classpath exception 2.0", exception=True)
    return repository


@pytest.fixture
def jsonld_store(test_config, schema_cache, listed_licenses) -> JsonLDStore:
    return JsonLDStore(config=test_config, schema_cache=schema_cache, listed_licenses=listed_licenses)
