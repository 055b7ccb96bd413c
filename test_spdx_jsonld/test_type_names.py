"""Tests for the type name codec."""

import pytest

from spdx_jsonld.model.type_names import (
    class_uri_to_type,
    from_wire_type,
    property_to_field_name,
    to_wire_type,
)
from spdx_jsonld.model.typed_node import PropertyDescriptor

TERMS = "https://spdx.org/rdf/3.0.1/terms/"


@pytest.mark.parametrize("type_name, wire_type", [
    ("Core.Relationship", "Relationship"),
    ("Core.SpdxDocument", "SpdxDocument"),
    ("Software.SpdxPackage", "software_Package"),
    ("Software.SpdxFile", "software_File"),
    ("Software.Sbom", "software_Sbom"),
    ("ExpandedLicensing.ListedLicense", "expandedlicensing_ListedLicense"),
    ("SimpleLicensing.AnyLicenseInfo", "simplelicensing_AnyLicenseInfo"),
    ("Security.CvssV3VulnAssessmentRelationship", "security_CvssV3VulnAssessmentRelationship"),
])
def test_wire_type_mapping(type_name, wire_type):
    assert to_wire_type(type_name) == wire_type
    assert from_wire_type(wire_type) == type_name


def test_unknown_profile_prefix():
    assert from_wire_type("bogus_Thing") is None
    assert from_wire_type("software_") is None
    assert from_wire_type("") is None


def test_class_uri_to_type():
    assert class_uri_to_type(TERMS + "Software/Package") == "Software.SpdxPackage"
    assert class_uri_to_type(TERMS + "Core/Person") == "Core.Person"
    assert class_uri_to_type(TERMS + "SimpleLicensing/AnyLicenseInfo") == "SimpleLicensing.AnyLicenseInfo"


def test_property_to_field_name():
    assert property_to_field_name(PropertyDescriptor("name", TERMS + "Core/")) == "name"
    assert property_to_field_name(PropertyDescriptor("packageVersion", TERMS + "Software/")) == \
        "software_packageVersion"
    assert property_to_field_name(PropertyDescriptor("isOsiApproved", TERMS + "ExpandedLicensing/")) == \
        "expandedlicensing_isOsiApproved"


def test_reserved_property_names_are_aliased():
    assert property_to_field_name(PropertyDescriptor("spdxFile", TERMS + "Software/")) == "software_file"
    assert property_to_field_name(PropertyDescriptor("spdxPackage", TERMS + "Software/")) == "software_package"
