"""Tests for canonical JSON ordering."""

from spdx_jsonld.jsonld.node_comparator import compare_json, sort_json


def test_scalars():
    assert compare_json("a", "b") < 0
    assert compare_json("b", "a") > 0
    assert compare_json("a", "a") == 0
    assert compare_json(1, 2.5) < 0
    assert compare_json(False, True) < 0


def test_values_of_different_kinds():
    assert compare_json(True, 1) < 0
    assert compare_json(1, "1") < 0
    assert compare_json("z", ["a"]) < 0
    assert compare_json(["a"], {"a": 1}) < 0


def test_objects_with_spdx_id_sort_after_objects_without():
    creation_info = {"@id": "_:creationInfo_0", "type": "CreationInfo"}
    element = {"spdxId": "http://a", "type": "Person"}
    assert compare_json(creation_info, element) < 0
    assert compare_json(element, creation_info) > 0


def test_objects_compare_by_spdx_id():
    assert compare_json({"spdxId": "http://a", "name": "z"}, {"spdxId": "http://b", "name": "a"}) < 0


def test_objects_without_id_compare_field_by_field():
    a = {"type": "Hash", "algorithm": "sha1", "hashValue": "x"}
    b = {"type": "Hash", "algorithm": "sha256", "hashValue": "a"}
    assert compare_json(a, b) < 0
    assert compare_json({"@id": "_:creationInfo_1"}, {"@id": "_:creationInfo_0"}) > 0


def test_missing_field_sorts_first():
    assert compare_json({"type": "Hash"}, {"type": "Hash", "comment": "c"}) < 0


def test_arrays_compare_by_length_then_sorted_elements():
    assert compare_json(["z"], ["a", "b"]) < 0
    assert compare_json(["b", "a"], ["a", "b"]) == 0
    assert compare_json(["a", "c"], ["b", "a"]) > 0


def test_sort_graph():
    graph = [
        {"spdxId": "http://test.uri#PACKAGE", "type": "software_Package"},
        {"@id": "_:creationInfo_1", "type": "CreationInfo"},
        {"spdxId": "http://test.uri#AGENT", "type": "Person"},
        {"@id": "_:creationInfo_0", "type": "CreationInfo"},
    ]
    assert [e.get("spdxId") or e.get("@id") for e in sort_json(graph)] == [
        "_:creationInfo_0",
        "_:creationInfo_1",
        "http://test.uri#AGENT",
        "http://test.uri#PACKAGE",
    ]
