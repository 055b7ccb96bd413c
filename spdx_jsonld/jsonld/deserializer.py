"""
SPDX JSON-LD Graph Deserializer

Maps SPDX JSON-LD graph entries onto object-model store nodes. Deserializing
a graph runs three passes over the entries: collect creation info spec
versions, create every node, then populate properties. Cross references,
blank node ids, enumeration values and scalar typing are resolved against the
schema of each node's spec version.
"""

import logging
import threading
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from spdx_jsonld.model import spdx_constants as sc
from spdx_jsonld.model.type_names import from_wire_type
from spdx_jsonld.model.typed_node import ExternalElement, IdType, SimpleUriValue, TypedNode
from spdx_jsonld.schema.jsonld_schema import JsonLDSchema, ScalarType
from spdx_jsonld.schema.schema_cache import SchemaCache, get_schema_cache
from spdx_jsonld.store.copy_manager import ModelCopyManager
from spdx_jsonld.store.listed_licenses import ListedLicenseRepository
from spdx_jsonld.store.model_store import ModelStore
from spdx_jsonld.utils.exceptions import InvalidGraphDataError

logger = logging.getLogger(__name__)

TRUE_STRINGS = ("true",)
FALSE_STRINGS = ("false",)


def is_absolute_uri(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


class GraphDeserializer:
    """
    Deserializes SPDX JSON-LD into a model store.

    The blank node table is shared by every call on one instance, so a blank
    id maps to the same anonymous store id across calls. Relying on that
    across unrelated documents is a caller error.
    """

    def __init__(self, model_store: ModelStore,
                 schema_cache: Optional[SchemaCache] = None,
                 listed_licenses: Optional[ListedLicenseRepository] = None,
                 copy_manager: Optional[ModelCopyManager] = None,
                 default_spec_version: Optional[str] = None):
        """
        Args:
            model_store: Store to deserialize into
            schema_cache: Schema cache, defaults to the process-wide cache
            listed_licenses: Repository used to resolve listed license references
            copy_manager: Copies listed licenses into ``model_store``
            default_spec_version: Version for nodes without creation info,
                defaults to the cache's latest version
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.model_store = model_store
        self.schema_cache = schema_cache or get_schema_cache()
        self.listed_licenses = listed_licenses or ListedLicenseRepository()
        self.copy_manager = copy_manager or ModelCopyManager()
        self.default_spec_version = default_spec_version or self.schema_cache.latest_version

        self._blank_ids: Dict[str, str] = {}
        self._blank_lock = threading.Lock()

    # ========================================
    # Entry points
    # ========================================

    def deserialize_graph(self, graph: Any) -> List[TypedNode]:
        """
        Deserialize the entries of an ``@graph`` array.

        Args:
            graph: List of JSON objects

        Returns:
            Typed nodes of every entry whose id is not a blank node id, in input order

        Raises:
            InvalidGraphDataError: If the graph or any entry cannot be mapped
        """
        if not isinstance(graph, list):
            raise InvalidGraphDataError(f"Expected a JSON array for @graph, got {type(graph).__name__}")
        for entry in graph:
            if not isinstance(entry, dict):
                raise InvalidGraphDataError(f"Graph entries must be JSON objects, got {type(entry).__name__}")

        creation_info_versions = self._collect_creation_info_versions(graph)

        id_map: Dict[str, TypedNode] = {}
        non_blank: List[TypedNode] = []
        for entry in graph:
            json_id = self._json_id(entry)
            typed_node = self._create_node(entry, json_id, id_map, creation_info_versions)
            if not sc.is_blank_id(json_id):
                non_blank.append(typed_node)

        for entry in graph:
            self._fill_properties(id_map[self._json_id(entry)], entry, id_map)

        self.logger.info(f"Deserialized {len(graph)} graph entries ({len(non_blank)} with stable ids)")
        return non_blank

    def deserialize_element(self, element: Any) -> TypedNode:
        """
        Deserialize a single root element (a document without ``@graph``).

        Raises:
            InvalidGraphDataError: If the element has no id, a blank id or an unknown type
        """
        if not isinstance(element, dict):
            raise InvalidGraphDataError(f"Expected a JSON object for the root element, got {type(element).__name__}")
        json_id = self._json_id(element)
        if sc.is_blank_id(json_id):
            raise InvalidGraphDataError(f"Root element can not have a blank node id: {json_id}")
        id_map: Dict[str, TypedNode] = {}
        typed_node = self._create_node(element, json_id, id_map, {})
        self._fill_properties(typed_node, element, id_map)
        return typed_node

    # ========================================
    # Pass 1 and 2: creation infos and nodes
    # ========================================

    def _collect_creation_info_versions(self, graph: List[Dict[str, Any]]) -> Dict[str, str]:
        versions: Dict[str, str] = {}
        creation_info_wire_type = "CreationInfo"
        for entry in graph:
            if entry.get(sc.JSON_TYPE) != creation_info_wire_type:
                continue
            json_id = entry.get(sc.JSON_ID)
            spec_version = entry.get(sc.PROP_SPEC_VERSION)
            if not isinstance(json_id, str) or not isinstance(spec_version, str):
                self.logger.warning(f"Creation info {json_id} is missing an id or specVersion, ignoring its version")
                continue
            versions[json_id] = spec_version
        return versions

    @staticmethod
    def _json_id(entry: Dict[str, Any]) -> str:
        json_id = entry.get(sc.JSON_SPDX_ID)
        if json_id is None:
            json_id = entry.get(sc.JSON_ID)
        if not isinstance(json_id, str) or not json_id:
            raise InvalidGraphDataError(f"Missing id for graph entry of type {entry.get(sc.JSON_TYPE)}")
        return json_id

    def _type_name(self, entry: Dict[str, Any], schema: JsonLDSchema) -> str:
        wire_type = entry.get(sc.JSON_TYPE)
        if not isinstance(wire_type, str):
            raise InvalidGraphDataError(f"Missing type for {entry.get(sc.JSON_SPDX_ID) or entry.get(sc.JSON_ID)}")
        type_name = from_wire_type(wire_type)
        if type_name is None or type_name not in schema.all_types:
            raise InvalidGraphDataError(f"Unknown type: {wire_type}")
        return type_name

    def _store_id(self, json_id: str) -> str:
        if not sc.is_blank_id(json_id):
            return json_id
        with self._blank_lock:
            store_id = self._blank_ids.get(json_id)
            if store_id is None:
                store_id = self.model_store.get_next_id(IdType.ANONYMOUS)
                self._blank_ids[json_id] = store_id
            return store_id

    def _spec_version(self, entry: Dict[str, Any], creation_info_versions: Dict[str, str],
                      default: Optional[str] = None) -> str:
        spec_version = entry.get(sc.PROP_SPEC_VERSION)
        if isinstance(spec_version, str):
            return spec_version
        creation_info = entry.get(sc.PROP_CREATION_INFO)
        if isinstance(creation_info, dict):
            spec_version = creation_info.get(sc.PROP_SPEC_VERSION)
        elif isinstance(creation_info, str):
            spec_version = creation_info_versions.get(creation_info)
        if isinstance(spec_version, str):
            return spec_version
        return default or self.default_spec_version

    def _create_node(self, entry: Dict[str, Any], json_id: Optional[str], id_map: Dict[str, TypedNode],
                     creation_info_versions: Dict[str, str], default_version: Optional[str] = None) -> TypedNode:
        spec_version = self._spec_version(entry, creation_info_versions, default_version)
        type_name = self._type_name(entry, self.schema_cache.get_or_create(spec_version))
        if json_id:
            store_id = self._store_id(json_id)
        else:
            store_id = self.model_store.get_next_id(IdType.ANONYMOUS)
        typed_node = TypedNode(store_id, type_name, spec_version)
        self.model_store.create(typed_node)
        if json_id:
            id_map[json_id] = typed_node
        return typed_node

    # ========================================
    # Pass 3: properties
    # ========================================

    def _fill_properties(self, typed_node: TypedNode, entry: Dict[str, Any], id_map: Dict[str, TypedNode]) -> None:
        schema = self.schema_cache.get_or_create(typed_node.spec_version)
        for field_name, value in entry.items():
            if field_name in sc.NON_PROPERTY_FIELDS:
                continue
            descriptor = schema.get_property_descriptor(field_name)
            if descriptor is None:
                raise InvalidGraphDataError(f"Unknown property {field_name} on {typed_node.object_uri}")
            if isinstance(value, list):
                for item in value:
                    self.model_store.add_value_to_collection(
                        typed_node.object_uri, descriptor,
                        self._to_store_value(field_name, item, schema, typed_node.spec_version, id_map))
            else:
                self.model_store.set_value(
                    typed_node.object_uri, descriptor,
                    self._to_store_value(field_name, value, schema, typed_node.spec_version, id_map))

    def _to_store_value(self, field_name: str, value: Any, schema: JsonLDSchema,
                        spec_version: str, id_map: Dict[str, TypedNode]) -> Any:
        if isinstance(value, dict):
            return self._nested_node(value, spec_version, id_map)
        if value is None:
            raise InvalidGraphDataError(f"Null value for property {field_name}")
        if isinstance(value, list):
            raise InvalidGraphDataError(f"Nested array value for property {field_name}")
        if isinstance(value, bool):
            return self._coerce_boolean(field_name, value, schema)
        if isinstance(value, (int, float)):
            return self._coerce_number(field_name, value, schema)
        if isinstance(value, str):
            return self._string_value(field_name, value, schema, spec_version, id_map)
        raise InvalidGraphDataError(f"Unsupported JSON value for property {field_name}: {value!r}")

    def _nested_node(self, value: Dict[str, Any], spec_version: str, id_map: Dict[str, TypedNode]) -> TypedNode:
        json_id = value.get(sc.JSON_SPDX_ID) or value.get(sc.JSON_ID)
        if json_id is not None and not isinstance(json_id, str):
            raise InvalidGraphDataError(f"Invalid id for nested object: {json_id!r}")
        if json_id and json_id in id_map:
            return id_map[json_id]
        typed_node = self._create_node(value, json_id, id_map, {}, default_version=spec_version)
        self._fill_properties(typed_node, value, id_map)
        return typed_node

    def _coerce_boolean(self, field_name: str, value: bool, schema: JsonLDSchema) -> Any:
        property_type = schema.get_property_type(field_name)
        if property_type is None or property_type == ScalarType.BOOLEAN:
            return value
        if property_type == ScalarType.STRING:
            return "true" if value else "false"
        raise InvalidGraphDataError(f"Boolean value for property {field_name} declared as {property_type.value}")

    def _coerce_number(self, field_name: str, value: Any, schema: JsonLDSchema) -> Any:
        property_type = schema.get_property_type(field_name)
        if property_type is None:
            return int(value)
        if property_type == ScalarType.INTEGER:
            if isinstance(value, float) and not value.is_integer():
                raise InvalidGraphDataError(f"Non-integer value {value} for integer property {field_name}")
            return int(value)
        if property_type == ScalarType.DOUBLE:
            return float(value)
        if property_type == ScalarType.STRING:
            return str(value)
        raise InvalidGraphDataError(f"Numeric value for property {field_name} declared as {property_type.value}")

    def _string_value(self, field_name: str, value: str, schema: JsonLDSchema,
                      spec_version: str, id_map: Dict[str, TypedNode]) -> Any:
        property_type = schema.get_property_type(field_name)
        node_valued = property_type == ScalarType.REFERENCE

        if (node_valued or property_type is None) and value in id_map:
            return id_map[value]

        if node_valued:
            if value.startswith(sc.LISTED_LICENSE_NAMESPACE):
                return self._listed_license_value(value, spec_version)
            if sc.is_blank_id(value):
                raise InvalidGraphDataError(f"Unresolved blank node reference {value} for property {field_name}")
            if not is_absolute_uri(value):
                raise InvalidGraphDataError(f"Reference {value} for property {field_name} is not a URI")
            if sc.is_well_known_individual(value):
                return SimpleUriValue(value)
            return ExternalElement(value)

        if schema.is_enum(field_name):
            vocab = schema.get_vocab(field_name)
            if vocab is None:
                raise InvalidGraphDataError(f"No vocabulary for enumeration property {field_name}")
            return SimpleUriValue(vocab + value)

        if property_type is None:
            self.logger.warning(f"No type declared for property {field_name}, keeping value as a string")
            return value
        if property_type == ScalarType.STRING:
            return value
        if property_type == ScalarType.BOOLEAN:
            lowered = value.strip().lower()
            if lowered in TRUE_STRINGS:
                return True
            if lowered in FALSE_STRINGS:
                return False
            raise InvalidGraphDataError(f"Invalid boolean {value!r} for property {field_name}")
        try:
            if property_type == ScalarType.INTEGER:
                return int(value)
            if property_type == ScalarType.DOUBLE:
                return float(value)
        except ValueError as e:
            raise InvalidGraphDataError(f"Invalid {property_type.value} {value!r} for property {field_name}") from e
        raise InvalidGraphDataError(f"Unsupported type {property_type.value} for property {field_name}")

    def _listed_license_value(self, uri: str, spec_version: str) -> Any:
        license_id = self.listed_licenses.object_uri_to_license_or_exception_id(uri)
        if (self.listed_licenses.is_listed_license_id(license_id)
                or self.listed_licenses.is_listed_exception_id(license_id)):
            return self.copy_manager.copy(self.model_store, self.listed_licenses.license_store,
                                          uri, spec_version)
        self.logger.debug(f"{uri} is not a known listed license, keeping it as an external element")
        return ExternalElement(uri)
