"""Test Helper Functions

Utility functions to build object-model store content for codec tests.
"""

import logging
from typing import Dict, Any

from spdx_jsonld.model.typed_node import IdType, PropertyDescriptor, SimpleUriValue, TypedNode
from spdx_jsonld.store.model_store import ModelStore

SPEC_VERSION = "3.0.1"
TERMS = "https://spdx.org/rdf/3.0.1/terms/"

AGENT_URI = "http://test.uri#AGENT"
PACKAGE_URI = "http://test.uri#PACKAGE"
CREATED = "2024-07-22T16:01:15Z"
SHA256_VALUE = "d301fcd0b7c84c879456eb041af246fbc7edbfea54f6470a859d8bd4073a47b8"


def setup_test_logging():
    """Set up logging for tests."""
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def core(name: str) -> PropertyDescriptor:
    return PropertyDescriptor(name, TERMS + "Core/")


def software(name: str) -> PropertyDescriptor:
    return PropertyDescriptor(name, TERMS + "Software/")


def expanded(name: str) -> PropertyDescriptor:
    return PropertyDescriptor(name, TERMS + "ExpandedLicensing/")


def simple(name: str) -> PropertyDescriptor:
    return PropertyDescriptor(name, TERMS + "SimpleLicensing/")


def create_node(store: ModelStore, object_uri: str, type_name: str) -> TypedNode:
    typed_node = TypedNode(object_uri, type_name, SPEC_VERSION)
    store.create(typed_node)
    return typed_node


def create_creation_info(store: ModelStore, created_by: TypedNode = None) -> TypedNode:
    """Create an anonymous creation info, optionally crediting an agent."""
    creation_info = create_node(store, store.get_next_id(IdType.ANONYMOUS), "Core.CreationInfo")
    store.set_value(creation_info.object_uri, core("created"), CREATED)
    store.set_value(creation_info.object_uri, core("specVersion"), SPEC_VERSION)
    if created_by is not None:
        store.add_value_to_collection(creation_info.object_uri, core("createdBy"), created_by)
    return creation_info


def populate_person_and_package(store: ModelStore) -> Dict[str, TypedNode]:
    """
    Create a person and a package sharing one creation info; the package
    carries an anonymous sha256 hash.

    Returns:
        Dict with 'person', 'package', 'creation_info' and 'hash' nodes
    """
    person = TypedNode(AGENT_URI, "Core.Person", SPEC_VERSION)
    store.create(person)
    creation_info = create_creation_info(store, person)
    store.set_value(person.object_uri, core("name"), "Gary")
    store.set_value(person.object_uri, core("creationInfo"), creation_info)

    package = create_node(store, PACKAGE_URI, "Software.SpdxPackage")
    store.set_value(package.object_uri, core("creationInfo"), creation_info)
    store.set_value(package.object_uri, core("name"), "package name")
    store.set_value(package.object_uri, software("packageVersion"), "1.0")
    store.set_value(package.object_uri, core("suppliedBy"), person)

    sha256 = create_node(store, store.get_next_id(IdType.ANONYMOUS), "Core.Hash")
    store.set_value(sha256.object_uri, core("algorithm"), SimpleUriValue(TERMS + "Core/HashAlgorithm/sha256"))
    store.set_value(sha256.object_uri, core("hashValue"), SHA256_VALUE)
    store.add_value_to_collection(package.object_uri, core("verifiedUsing"), sha256)

    return {"person": person, "package": package, "creation_info": creation_info, "hash": sha256}


def expected_person_and_package_graph() -> list:
    """The canonical @graph for ``populate_person_and_package``."""
    return [
        {
            "@id": "_:creationInfo_0",
            "type": "CreationInfo",
            "created": CREATED,
            "createdBy": [AGENT_URI],
            "specVersion": SPEC_VERSION
        },
        {
            "spdxId": AGENT_URI,
            "type": "Person",
            "creationInfo": "_:creationInfo_0",
            "name": "Gary"
        },
        {
            "spdxId": PACKAGE_URI,
            "type": "software_Package",
            "creationInfo": "_:creationInfo_0",
            "name": "package name",
            "software_packageVersion": "1.0",
            "suppliedBy": AGENT_URI,
            "verifiedUsing": [
                {
                    "type": "Hash",
                    "algorithm": "sha256",
                    "hashValue": SHA256_VALUE
                }
            ]
        }
    ]
