"""
Canonical JSON Node Ordering

Total order over JSON values used to sort the serialized ``@graph`` so that
output is byte-identical for equal graphs regardless of store iteration order.
"""

from functools import cmp_to_key
from typing import Any, List

from spdx_jsonld.model.spdx_constants import JSON_SPDX_ID

# Rank of each JSON kind when two values of different kinds are compared
_KIND_RANK = {
    "null": 0,
    "boolean": 1,
    "number": 2,
    "string": 3,
    "array": 4,
    "object": 5,
}


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    return "object"


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_json(a: Any, b: Any) -> int:
    """
    Compare two JSON values.

    Objects carrying an ``spdxId`` sort after objects without one and by that
    id among themselves; other objects compare field by field over the sorted
    union of their field names, a missing field sorting first. Arrays compare
    by length, then element-wise after sorting both. Values of different
    kinds compare by kind.

    Returns:
        Negative, zero or positive as ``a`` sorts before, equal to or after ``b``
    """
    kind_a, kind_b = _kind(a), _kind(b)
    if kind_a != kind_b:
        return _sign(_KIND_RANK[kind_a], _KIND_RANK[kind_b])

    if kind_a == "null":
        return 0
    if kind_a in ("boolean", "number", "string"):
        return _sign(a, b)
    if kind_a == "array":
        return _compare_arrays(a, b)
    return _compare_objects(a, b)


def _compare_arrays(a: List[Any], b: List[Any]) -> int:
    if len(a) != len(b):
        return _sign(len(a), len(b))
    for item_a, item_b in zip(sort_json(a), sort_json(b)):
        result = compare_json(item_a, item_b)
        if result:
            return result
    return 0


def _compare_objects(a: dict, b: dict) -> int:
    id_a = a.get(JSON_SPDX_ID)
    id_b = b.get(JSON_SPDX_ID)
    if isinstance(id_a, str) and isinstance(id_b, str):
        return _sign(id_a, id_b)
    if isinstance(id_a, str):
        return 1
    if isinstance(id_b, str):
        return -1

    for field_name in sorted(set(a) | set(b)):
        if field_name not in a:
            return -1
        if field_name not in b:
            return 1
        result = compare_json(a[field_name], b[field_name])
        if result:
            return result
    return 0


json_sort_key = cmp_to_key(compare_json)


def sort_json(values: List[Any]) -> List[Any]:
    """Return the values in canonical order."""
    return sorted(values, key=json_sort_key)
