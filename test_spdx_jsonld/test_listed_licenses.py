"""Tests for the listed license repository."""

from spdx_jsonld.model.typed_node import PropertyDescriptor
from spdx_jsonld.store.listed_licenses import ListedLicenseRepository
from spdx_jsonld.store.memory_store import InMemoryModelStore
from test_spdx_jsonld.utils.test_helpers import SPEC_VERSION, TERMS


def test_uses_supplied_empty_store():
    license_store = InMemoryModelStore()

    repository = ListedLicenseRepository(license_store)
    repository.add_listed_license("MIT", SPEC_VERSION, name="MIT License")

    assert repository.license_store is license_store
    assert license_store.exists("https://spdx.org/licenses/MIT")


def test_license_and_exception_ids():
    repository = ListedLicenseRepository()
    repository.add_listed_license("MIT", SPEC_VERSION, license_text="Permission is hereby granted")
    repository.add_listed_license("LLVM-exception", SPEC_VERSION, exception=True)

    assert repository.is_listed_license_id("MIT")
    assert not repository.is_listed_exception_id("MIT")
    assert repository.is_listed_exception_id("LLVM-exception")
    assert not repository.is_listed_license_id("Unknown-1.0")
    assert repository.license_store.get_value(
        "https://spdx.org/licenses/MIT",
        PropertyDescriptor("licenseText", TERMS + "SimpleLicensing/")) == "Permission is hereby granted"


def test_uri_conversion():
    assert ListedLicenseRepository.license_id_to_uri("Apache-2.0") == "https://spdx.org/licenses/Apache-2.0"
    assert ListedLicenseRepository.object_uri_to_license_or_exception_id(
        "https://spdx.org/licenses/Apache-2.0") == "Apache-2.0"
    assert ListedLicenseRepository.is_listed_license_uri("https://spdx.org/licenses/MIT")
    assert not ListedLicenseRepository.is_listed_license_uri("http://example.com/MIT")
