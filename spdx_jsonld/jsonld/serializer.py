"""
SPDX JSON-LD Graph Serializer

Converts object-model store content into a canonical SPDX JSON-LD document:
a ``@context`` URL plus a ``@graph`` array holding one entry per selected
element and one per creation info they use. Output ordering is deterministic.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Set

from spdx_jsonld.jsonld.license_formatter import LicenseFormatter, format_license_info
from spdx_jsonld.jsonld.node_comparator import sort_json
from spdx_jsonld.jsonld.reference_policy import ReferencePolicy, decide_reference_policy
from spdx_jsonld.model import spdx_constants as sc
from spdx_jsonld.model.jsonld_model import JsonLdDocument
from spdx_jsonld.model.type_names import property_to_field_name, to_wire_type
from spdx_jsonld.model.typed_node import ExternalElement, IdType, SimpleUriValue, TypedNode
from spdx_jsonld.schema.schema_cache import SchemaCache, get_schema_cache
from spdx_jsonld.store.model_store import ModelStore
from spdx_jsonld.utils.exceptions import InvalidGraphDataError

logger = logging.getLogger(__name__)

DOCUMENT_SKIPPED_FIELDS = frozenset([sc.PROP_ELEMENT, sc.PROP_NAMESPACE_MAP])


class GraphSerializer:
    """
    Serializes store content for one target spec version.

    A serializer instance carries per-call state and is not meant to be
    shared between threads; create one per ``serialize`` call or reuse it
    sequentially.
    """

    def __init__(self, model_store: ModelStore, spec_version: Optional[str] = None,
                 pretty: bool = True, use_external_listed_elements: bool = False,
                 schema_cache: Optional[SchemaCache] = None,
                 license_formatter: Optional[LicenseFormatter] = None,
                 generated_id_prefix: str = sc.GENERATED_SERIALIZED_ID_PREFIX):
        """
        Args:
            model_store: Store to serialize from
            spec_version: Target spec version, defaults to the cache's latest
            pretty: Render license-info values as license expression strings
            use_external_listed_elements: Leave listed licenses out of the graph
                and refer to them by URI only
            schema_cache: Schema cache, defaults to the process-wide cache
            license_formatter: Renders license-info nodes when ``pretty``
            generated_id_prefix: Prefix for ids minted for anonymous elements
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.model_store = model_store
        self.pretty = pretty
        self.use_external_listed_elements = use_external_listed_elements
        self.schema_cache = schema_cache or get_schema_cache()
        self.schema = self.schema_cache.get_or_create(spec_version)
        self.license_formatter = license_formatter or format_license_info
        self.generated_id_prefix = generated_id_prefix

        self._element_types: Set[str] = set(self.schema.element_types)
        self._type_order: Dict[str, int] = {t: i for i, t in enumerate(self.schema.element_types)}
        self._creation_info_descriptor = self.schema.get_property_descriptor(sc.PROP_CREATION_INFO)

        self._wire_ids: Dict[str, str] = {}
        self._creation_info_ids: Dict[str, str] = {}

    def serialize(self, selection: Optional[TypedNode] = None) -> Dict[str, Any]:
        """
        Serialize a selection of the store.

        Args:
            selection: None for every element in the store, an SpdxDocument for
                the document and its members, or a single element

        Returns:
            JSON document as a dict with ``@context`` and ``@graph``

        Raises:
            InvalidGraphDataError: If the selection is not an element or the
                store holds a value that cannot be serialized
        """
        self._wire_ids = {}
        self._creation_info_ids = {}
        with self.model_store.critical_section(read_only=True):
            graph = self._serialize_graph(selection)

        document = JsonLdDocument(**{sc.JSON_CONTEXT: self.schema.context_url, sc.JSON_GRAPH: graph})
        self.logger.info(f"Serialized {len(graph)} graph entries for spec version {self.schema.spec_version}")
        return document.to_json_dict()

    # ========================================
    # Selection
    # ========================================

    def _select_nodes(self, selection: Optional[TypedNode]) -> List[TypedNode]:
        if selection is None:
            nodes = [n for n in self.model_store.get_all_items() if n.type in self._element_types]
        elif selection.type == sc.CORE_SPDX_DOCUMENT:
            nodes = self._document_members(selection)
        elif selection.type in self._element_types:
            nodes = [selection]
        else:
            raise InvalidGraphDataError(f"Unsupported type for serialization: {selection.type}")
        return sorted(nodes, key=lambda n: (self._type_order.get(n.type, len(self._type_order)), n.object_uri))

    def _document_members(self, document: TypedNode) -> List[TypedNode]:
        members: Dict[str, TypedNode] = {}
        for field_name in (sc.PROP_ELEMENT, sc.PROP_ROOT_ELEMENT):
            descriptor = self.schema.get_property_descriptor(field_name)
            if descriptor is None:
                continue
            for value in self.model_store.list_values(document.object_uri, descriptor):
                if isinstance(value, TypedNode) and value.object_uri != document.object_uri:
                    members.setdefault(value.object_uri, value)
        return list(members.values())

    def _is_skipped_listed_element(self, node: TypedNode) -> bool:
        return (self.use_external_listed_elements
                and node.object_uri.startswith(sc.LISTED_LICENSE_NAMESPACE))

    # ========================================
    # Ids
    # ========================================

    def _mint_id(self, object_uri: str) -> str:
        minted = (f"{self.generated_id_prefix}{uuid.uuid4()}#"
                  f"{self.model_store.get_next_id(IdType.SPDX_ID)}")
        self.logger.warning(f"Anonymous element {object_uri} serialized with generated id {minted}")
        return minted

    def _wire_id(self, object_uri: str) -> str:
        wire_id = self._wire_ids.get(object_uri)
        if wire_id is None:
            wire_id = self._mint_id(object_uri) if self.model_store.is_anon(object_uri) else object_uri
            self._wire_ids[object_uri] = wire_id
        return wire_id

    def _creation_info_id(self, object_uri: str) -> str:
        wire_id = self._creation_info_ids.get(object_uri)
        if wire_id is None:
            wire_id = f"{sc.CREATION_INFO_ID_PREFIX}{len(self._creation_info_ids)}"
            self._creation_info_ids[object_uri] = wire_id
        return wire_id

    def _collect_creation_info(self, node: TypedNode) -> None:
        if self._creation_info_descriptor is None:
            return
        value = self.model_store.get_value(node.object_uri, self._creation_info_descriptor)
        if isinstance(value, TypedNode):
            self._creation_info_id(value.object_uri)

    # ========================================
    # Graph
    # ========================================

    def _serialize_graph(self, selection: Optional[TypedNode]) -> List[Dict[str, Any]]:
        nodes = self._select_nodes(selection)
        document = selection if selection is not None and selection.type == sc.CORE_SPDX_DOCUMENT else None
        emitted = [n for n in nodes if not self._is_skipped_listed_element(n)]

        # Ids and creation info indexes are fixed before any entry is built
        if document is not None:
            self._wire_id(document.object_uri)
            self._collect_creation_info(document)
        for node in emitted:
            self._wire_id(node.object_uri)
            self._collect_creation_info(node)

        graph: List[Dict[str, Any]] = []
        if document is not None:
            graph.append(self._build_entry(document, set(), DOCUMENT_SKIPPED_FIELDS))
        for node in emitted:
            graph.append(self._build_entry(node, set()))

        for object_uri in list(self._creation_info_ids):
            creation_info = self.model_store.get_typed_node(object_uri)
            if creation_info is None:
                self.logger.warning(f"Creation info {object_uri} is referenced but not in the store")
                continue
            graph.append(self._build_entry(creation_info, set(), id_field=sc.JSON_ID,
                                           wire_id=self._creation_info_ids[object_uri]))
        return sort_json(graph)

    def _build_entry(self, node: TypedNode, active: Set[str],
                     skipped_fields: frozenset = frozenset(),
                     id_field: Optional[str] = None, wire_id: Optional[str] = None,
                     inline: bool = False) -> Dict[str, Any]:
        entry: Dict[str, Any] = {}
        if id_field is None:
            id_field = sc.JSON_SPDX_ID if node.type in self._element_types else sc.JSON_ID
        if wire_id is None and not (inline and self.model_store.is_anon(node.object_uri)):
            wire_id = self._wire_id(node.object_uri)
        if wire_id is not None:
            entry[id_field] = wire_id
        entry[sc.JSON_TYPE] = to_wire_type(node.type)

        fields = []
        for descriptor in self.model_store.get_property_value_descriptors(node.object_uri):
            field_name = property_to_field_name(descriptor)
            if field_name not in skipped_fields:
                fields.append((field_name, descriptor))

        for field_name, descriptor in sorted(fields, key=lambda f: f[0]):
            if self.model_store.is_collection_property(node.object_uri, descriptor):
                values = self.model_store.list_values(node.object_uri, descriptor)
                if values:
                    entry[field_name] = [self._to_json_value(field_name, v, active) for v in values]
            else:
                value = self.model_store.get_value(node.object_uri, descriptor)
                if value is not None:
                    entry[field_name] = self._to_json_value(field_name, value, active)
        return entry

    def _to_json_value(self, field_name: str, value: Any, active: Set[str]) -> Any:
        if isinstance(value, (bool, int, float, str)):
            return value
        if isinstance(value, ExternalElement):
            return value.uri
        if isinstance(value, SimpleUriValue):
            return self._individual_to_json(field_name, value.uri)
        if isinstance(value, TypedNode):
            return self._node_to_json(value, active)
        raise InvalidGraphDataError(f"Unsupported value type {type(value).__name__} for property {field_name}")

    def _individual_to_json(self, field_name: str, uri: str) -> str:
        vocab = self.schema.get_vocab(field_name)
        if vocab and uri.startswith(vocab):
            return uri[len(vocab):]
        if vocab is None and self.schema.is_enum_value(uri):
            return uri.rsplit("/", 1)[-1]
        return uri

    def _node_to_json(self, node: TypedNode, active: Set[str]) -> Any:
        policy = decide_reference_policy(node.type, self._element_types,
                                         self.schema.any_license_info_types, self.pretty)
        if policy == ReferencePolicy.ELEMENT_REFERENCE:
            return self._wire_id(node.object_uri)
        if policy == ReferencePolicy.CREATION_INFO_REFERENCE:
            return self._creation_info_id(node.object_uri)
        if policy == ReferencePolicy.LICENSE_EXPRESSION:
            return self.license_formatter(self.model_store, node, self.schema)
        if node.object_uri in active:
            raise InvalidGraphDataError(f"Cyclic inline value at {node.object_uri}")
        return self._build_entry(node, active | {node.object_uri}, inline=True)
