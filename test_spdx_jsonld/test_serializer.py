"""Tests for the JSON-LD graph serializer."""

import json

import pytest

from spdx_jsonld.jsonld.serializer import GraphSerializer
from spdx_jsonld.model.typed_node import ExternalElement, IdType, SimpleUriValue
from spdx_jsonld.store.copy_manager import ModelCopyManager
from spdx_jsonld.store.memory_store import InMemoryModelStore
from spdx_jsonld.utils.exceptions import InvalidGraphDataError
from test_spdx_jsonld.utils.test_helpers import (
    AGENT_URI,
    PACKAGE_URI,
    SPEC_VERSION,
    TERMS,
    core,
    create_creation_info,
    create_node,
    expected_person_and_package_graph,
    populate_person_and_package,
)

CONTEXT_URL = "https://spdx.org/rdf/3.0.1/spdx-context.jsonld"
EXTERNAL_URI = "http://external.example.com/doc#elem"


@pytest.fixture
def serializer_factory(schema_cache):
    def factory(store, **kwargs):
        return GraphSerializer(store, SPEC_VERSION, schema_cache=schema_cache, **kwargs)
    return factory


class TestPersonAndPackage:
    """Two elements sharing a creation info, with an inline hash."""

    def test_serialize_all(self, memory_store, serializer_factory):
        populate_person_and_package(memory_store)

        result = serializer_factory(memory_store).serialize()

        assert result == {"@context": CONTEXT_URL, "@graph": expected_person_and_package_graph()}

    def test_entry_field_order(self, memory_store, serializer_factory):
        populate_person_and_package(memory_store)

        graph = serializer_factory(memory_store).serialize()["@graph"]

        assert list(graph[0].keys()) == ["@id", "type", "created", "createdBy", "specVersion"]
        assert list(graph[2].keys()) == ["spdxId", "type", "creationInfo", "name", "software_packageVersion",
                                         "suppliedBy", "verifiedUsing"]

    def test_output_validates(self, memory_store, serializer_factory, schema):
        populate_person_and_package(memory_store)
        assert schema.validate(serializer_factory(memory_store).serialize())

    def test_single_element_selection(self, memory_store, serializer_factory):
        nodes = populate_person_and_package(memory_store)

        graph = serializer_factory(memory_store).serialize(nodes["person"])["@graph"]

        assert [e.get("spdxId") or e.get("@id") for e in graph] == ["_:creationInfo_0", AGENT_URI]

    def test_document_selection(self, memory_store, serializer_factory):
        nodes = populate_person_and_package(memory_store)
        document = create_node(memory_store, "http://test.uri#DOCUMENT", "Core.SpdxDocument")
        memory_store.set_value(document.object_uri, core("creationInfo"), nodes["creation_info"])
        memory_store.add_value_to_collection(document.object_uri, core("element"), nodes["person"])
        memory_store.add_value_to_collection(document.object_uri, core("element"), nodes["package"])
        memory_store.add_value_to_collection(document.object_uri, core("rootElement"), nodes["package"])

        graph = serializer_factory(memory_store).serialize(document)["@graph"]

        ids = [e.get("spdxId") or e.get("@id") for e in graph]
        assert ids == ["_:creationInfo_0", AGENT_URI, "http://test.uri#DOCUMENT", PACKAGE_URI]
        document_entry = graph[2]
        assert "element" not in document_entry
        assert document_entry["rootElement"] == [PACKAGE_URI]
        assert document_entry["type"] == "SpdxDocument"


class TestReferences:

    def test_external_element_is_emitted_as_uri(self, memory_store, serializer_factory):
        nodes = populate_person_and_package(memory_store)
        relationship = create_node(memory_store, "http://test.uri#REL", "Core.Relationship")
        memory_store.set_value(relationship.object_uri, core("creationInfo"), nodes["creation_info"])
        memory_store.set_value(relationship.object_uri, core("from"), nodes["package"])
        memory_store.add_value_to_collection(relationship.object_uri, core("to"), ExternalElement(EXTERNAL_URI))
        memory_store.set_value(relationship.object_uri, core("relationshipType"),
                               SimpleUriValue(TERMS + "Core/RelationshipType/dependsOn"))

        graph = serializer_factory(memory_store).serialize()["@graph"]

        relationship_entry = next(e for e in graph if e.get("spdxId") == "http://test.uri#REL")
        assert relationship_entry["to"] == [EXTERNAL_URI]
        assert relationship_entry["from"] == PACKAGE_URI
        assert relationship_entry["relationshipType"] == "dependsOn"
        assert all(e.get("spdxId") != EXTERNAL_URI for e in graph)

    def test_well_known_individual_keeps_full_uri(self, memory_store, serializer_factory):
        nodes = populate_person_and_package(memory_store)
        relationship = create_node(memory_store, "http://test.uri#REL", "Core.Relationship")
        memory_store.set_value(relationship.object_uri, core("creationInfo"), nodes["creation_info"])
        memory_store.set_value(relationship.object_uri, core("from"), nodes["package"])
        memory_store.add_value_to_collection(relationship.object_uri, core("to"),
                                             SimpleUriValue(TERMS + "Core/NoneElement"))

        graph = serializer_factory(memory_store).serialize()["@graph"]

        relationship_entry = next(e for e in graph if e.get("spdxId") == "http://test.uri#REL")
        assert relationship_entry["to"] == [TERMS + "Core/NoneElement"]

    def test_anonymous_element_gets_generated_id(self, memory_store, serializer_factory):
        creation_info = create_creation_info(memory_store)
        person = create_node(memory_store, memory_store.get_next_id(IdType.ANONYMOUS), "Core.Person")
        memory_store.set_value(person.object_uri, core("creationInfo"), creation_info)
        memory_store.add_value_to_collection(creation_info.object_uri, core("createdBy"), person)

        graph = serializer_factory(memory_store).serialize()["@graph"]

        person_entry = next(e for e in graph if "spdxId" in e)
        generated_id = person_entry["spdxId"]
        assert generated_id.startswith("https://generated-prefix/")
        assert "#SPDXRef-gnrtd" in generated_id
        creation_info_entry = next(e for e in graph if e.get("type") == "CreationInfo")
        assert creation_info_entry["createdBy"] == [generated_id]

    def test_creation_infos_numbered_in_element_order(self, memory_store, serializer_factory):
        for suffix in ("B", "A"):
            creation_info = create_creation_info(memory_store)
            memory_store.set_value(creation_info.object_uri, core("comment"), suffix)
            person = create_node(memory_store, f"http://test.uri#{suffix}", "Core.Person")
            memory_store.set_value(person.object_uri, core("creationInfo"), creation_info)

        graph = serializer_factory(memory_store).serialize()["@graph"]

        by_id = {e.get("spdxId") or e.get("@id"): e for e in graph}
        assert by_id["http://test.uri#A"]["creationInfo"] == "_:creationInfo_0"
        assert by_id["_:creationInfo_0"]["comment"] == "A"
        assert by_id["http://test.uri#B"]["creationInfo"] == "_:creationInfo_1"


class TestListedLicenses:

    def _populate(self, store):
        nodes = populate_person_and_package(store)
        license_node = create_node(store, "https://spdx.org/licenses/Apache-2.0", "ExpandedLicensing.ListedLicense")
        store.set_value(license_node.object_uri, core("creationInfo"), nodes["creation_info"])
        relationship = create_node(store, "http://test.uri#REL", "Core.Relationship")
        store.set_value(relationship.object_uri, core("creationInfo"), nodes["creation_info"])
        store.set_value(relationship.object_uri, core("from"), nodes["package"])
        store.add_value_to_collection(relationship.object_uri, core("to"), license_node)
        store.set_value(relationship.object_uri, core("relationshipType"),
                        SimpleUriValue(TERMS + "Core/RelationshipType/hasDeclaredLicense"))

    def test_listed_license_serialized_by_default(self, memory_store, serializer_factory):
        self._populate(memory_store)
        graph = serializer_factory(memory_store).serialize()["@graph"]
        assert any(e.get("spdxId") == "https://spdx.org/licenses/Apache-2.0" for e in graph)

    def test_external_listed_elements_are_skipped(self, memory_store, serializer_factory):
        self._populate(memory_store)

        graph = serializer_factory(memory_store, use_external_listed_elements=True).serialize()["@graph"]

        assert all(e.get("spdxId") != "https://spdx.org/licenses/Apache-2.0" for e in graph)
        relationship_entry = next(e for e in graph if e.get("spdxId") == "http://test.uri#REL")
        assert relationship_entry["to"] == ["https://spdx.org/licenses/Apache-2.0"]


class TestDeterminism:

    def test_output_independent_of_creation_order(self, memory_store, serializer_factory):
        populate_person_and_package(memory_store)
        reordered = InMemoryModelStore()
        manager = ModelCopyManager()
        manager.copy(reordered, memory_store, PACKAGE_URI)
        manager.copy(reordered, memory_store, AGENT_URI)

        first = json.dumps(serializer_factory(memory_store).serialize(), indent=2)
        second = json.dumps(serializer_factory(reordered).serialize(), indent=2)

        assert first == second

    def test_repeated_serialization_is_stable(self, memory_store, serializer_factory):
        populate_person_and_package(memory_store)
        serializer = serializer_factory(memory_store)
        assert serializer.serialize() == serializer.serialize()


class TestErrors:

    def test_unsupported_selection(self, memory_store, serializer_factory):
        nodes = populate_person_and_package(memory_store)
        with pytest.raises(InvalidGraphDataError):
            serializer_factory(memory_store).serialize(nodes["creation_info"])

    def test_unsupported_value(self, memory_store, serializer_factory):
        nodes = populate_person_and_package(memory_store)
        memory_store.set_value(nodes["person"].object_uri, core("comment"), object())
        with pytest.raises(InvalidGraphDataError):
            serializer_factory(memory_store).serialize()

    def test_cyclic_inline_values(self, memory_store, serializer_factory):
        nodes = populate_person_and_package(memory_store)
        other = create_node(memory_store, memory_store.get_next_id(IdType.ANONYMOUS), "Core.Hash")
        memory_store.add_value_to_collection(nodes["hash"].object_uri, core("verifiedUsing"), other)
        memory_store.add_value_to_collection(other.object_uri, core("verifiedUsing"), nodes["hash"])
        with pytest.raises(InvalidGraphDataError):
            serializer_factory(memory_store).serialize()

    def test_lock_released_after_error(self, memory_store, serializer_factory):
        nodes = populate_person_and_package(memory_store)
        with pytest.raises(InvalidGraphDataError):
            serializer_factory(memory_store).serialize(nodes["creation_info"])
        with memory_store.critical_section(read_only=False):
            memory_store.set_value(nodes["person"].object_uri, core("name"), "Updated")
        assert memory_store.get_value(nodes["person"].object_uri, core("name")) == "Updated"
