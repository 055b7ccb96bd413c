"""
License Expression Formatter

Default rendering of license-info nodes as compact SPDX license expression
strings (``MIT AND (Apache-2.0 OR GPL-2.0-only WITH Classpath-exception-2.0)``).
The serializer accepts any callable with the same signature.
"""

import logging
from typing import Callable, List, Optional

from spdx_jsonld.model import spdx_constants as sc
from spdx_jsonld.model.typed_node import TypedNode
from spdx_jsonld.schema.jsonld_schema import JsonLDSchema
from spdx_jsonld.store.model_store import ModelStore

logger = logging.getLogger(__name__)

LicenseFormatter = Callable[[ModelStore, TypedNode, JsonLDSchema], str]

_SET_OPERATORS = {
    sc.EXPANDED_CONJUNCTIVE_LICENSE_SET: " AND ",
    sc.EXPANDED_DISJUNCTIVE_LICENSE_SET: " OR ",
}


def _local_name(uri: str) -> str:
    if uri.startswith(sc.LISTED_LICENSE_NAMESPACE):
        return uri[len(sc.LISTED_LICENSE_NAMESPACE):]
    for separator in ("#", "/"):
        if separator in uri:
            return uri.rsplit(separator, 1)[-1]
    return uri


def _single(store: ModelStore, node: TypedNode, schema: JsonLDSchema, field_name: str) -> Optional[object]:
    descriptor = schema.get_property_descriptor(field_name)
    if descriptor is None:
        return None
    return store.get_value(node.object_uri, descriptor)


def _members(store: ModelStore, node: TypedNode, schema: JsonLDSchema) -> List[object]:
    descriptor = schema.get_property_descriptor(sc.PROP_MEMBER)
    if descriptor is None:
        return []
    return store.list_values(node.object_uri, descriptor)


def _format_operand(store: ModelStore, value: object, schema: JsonLDSchema, nested: bool) -> str:
    if isinstance(value, TypedNode):
        return _format(store, value, schema, nested)
    return _local_name(str(value))


def _format(store: ModelStore, node: TypedNode, schema: JsonLDSchema, nested: bool) -> str:
    if node.type == sc.SIMPLE_LICENSE_EXPRESSION:
        expression = _single(store, node, schema, sc.PROP_LICENSE_EXPRESSION)
        if expression is None:
            return node.object_uri
        return f"({expression})" if nested else str(expression)

    operator = _SET_OPERATORS.get(node.type)
    if operator:
        members = sorted(_format_operand(store, m, schema, True) for m in _members(store, node, schema))
        joined = operator.join(members)
        return f"({joined})" if nested and len(members) > 1 else joined

    if node.type == sc.EXPANDED_OR_LATER_OPERATOR:
        subject = _single(store, node, schema, sc.PROP_SUBJECT_LICENSE)
        return _format_operand(store, subject, schema, True) + "+"

    if node.type == sc.EXPANDED_WITH_ADDITION_OPERATOR:
        subject = _single(store, node, schema, sc.PROP_SUBJECT_EXTENDABLE_LICENSE)
        addition = _single(store, node, schema, sc.PROP_SUBJECT_ADDITION)
        text = (f"{_format_operand(store, subject, schema, True)} WITH "
                f"{_format_operand(store, addition, schema, True)}")
        return f"({text})" if nested else text

    return _local_name(node.object_uri)


def format_license_info(store: ModelStore, node: TypedNode, schema: JsonLDSchema) -> str:
    """
    Render a license-info node as a license expression string.

    Args:
        store: Store holding the node
        node: License-info node
        schema: Schema used to resolve property descriptors

    Returns:
        License expression text
    """
    return _format(store, node, schema, nested=False)
