"""
JSON-LD Store

Model store wrapper that reads and writes SPDX 3 JSON-LD. Every object-model
operation is delegated to a base store; ``serialize`` and ``deserialize`` run
the graph codec against it.
"""

import json
import logging
from typing import Any, BinaryIO, Dict, List, Optional, Union

from pydantic import ValidationError

from spdx_jsonld.config.config_loader import SpdxJsonLdConfig, get_config
from spdx_jsonld.jsonld.deserializer import GraphDeserializer
from spdx_jsonld.jsonld.document_reconstructor import DocumentReconstructor
from spdx_jsonld.jsonld.serializer import GraphSerializer
from spdx_jsonld.model import spdx_constants as sc
from spdx_jsonld.model.jsonld_model import JsonLdDocument
from spdx_jsonld.model.typed_node import IdType, PropertyDescriptor, TypedNode
from spdx_jsonld.schema.schema_cache import SchemaCache
from spdx_jsonld.store.copy_manager import ModelCopyManager
from spdx_jsonld.store.listed_licenses import ListedLicenseRepository
from spdx_jsonld.store.memory_store import InMemoryModelStore
from spdx_jsonld.store.model_store import ModelStore
from spdx_jsonld.utils.exceptions import InvalidGraphDataError, OverwriteConflictError

logger = logging.getLogger(__name__)


class JsonLDStore(ModelStore):
    """
    Model store with SPDX JSON-LD serialization.

    Attributes:
        pretty: Indent output and render license-info values as expressions
        use_external_listed_elements: Refer to listed licenses by URI instead
            of serializing them
    """

    def __init__(self, base_store: Optional[ModelStore] = None,
                 config: Optional[SpdxJsonLdConfig] = None,
                 schema_cache: Optional[SchemaCache] = None,
                 listed_licenses: Optional[ListedLicenseRepository] = None,
                 copy_manager: Optional[ModelCopyManager] = None):
        """
        Args:
            base_store: Store the object model lives in, a new in-memory store if None
            config: Configuration, defaults to the global configuration
            schema_cache: Schema cache, built from the configured spec settings if None
            listed_licenses: Listed license repository for resolving license references
            copy_manager: Copy manager used to import listed licenses
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.base_store = base_store if base_store is not None else InMemoryModelStore()
        self.config = config or get_config()

        spec_config = self.config.get_spec_config()
        serializer_config = self.config.get_serializer_config()
        deserializer_config = self.config.get_deserializer_config()

        self.latest_version: str = str(spec_config['latest_version'])
        self.schema_cache = schema_cache or SchemaCache(latest_version=self.latest_version,
                                                        resource_dir=spec_config.get('resource_dir'))
        self.listed_licenses = listed_licenses or ListedLicenseRepository()
        self.copy_manager = copy_manager or ModelCopyManager()

        self.pretty: bool = bool(serializer_config['pretty'])
        self.use_external_listed_elements: bool = bool(serializer_config['use_external_listed_elements'])
        self.generated_id_prefix: str = serializer_config['generated_id_prefix']
        self.document_uri_prefix: str = deserializer_config['document_uri_prefix']

    # ========================================
    # Serialization
    # ========================================

    def serialize(self, selection: Optional[TypedNode] = None) -> bytes:
        """
        Serialize store content as SPDX JSON-LD.

        Args:
            selection: None for every element, an SpdxDocument for the document
                and its members, or a single element

        Returns:
            UTF-8 encoded JSON
        """
        serializer = GraphSerializer(self, spec_version=self.latest_version,
                                     pretty=self.pretty,
                                     use_external_listed_elements=self.use_external_listed_elements,
                                     schema_cache=self.schema_cache,
                                     generated_id_prefix=self.generated_id_prefix)
        document = serializer.serialize(selection)
        if self.pretty:
            text = json.dumps(document, indent=2, ensure_ascii=False)
        else:
            text = json.dumps(document, separators=(",", ":"), ensure_ascii=False)
        return text.encode("utf-8")

    def write(self, stream: BinaryIO, selection: Optional[TypedNode] = None) -> None:
        """Serialize to a binary stream; stream errors propagate."""
        stream.write(self.serialize(selection))

    # ========================================
    # Deserialization
    # ========================================

    @staticmethod
    def _parse(data: Union[bytes, str]) -> Dict[str, Any]:
        if isinstance(data, bytes):
            try:
                data = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidGraphDataError(f"Input is not UTF-8 encoded: {e}") from e
        try:
            root = json.loads(data)
        except json.JSONDecodeError as e:
            raise InvalidGraphDataError(f"Malformed JSON: {e}") from e
        if not isinstance(root, dict):
            raise InvalidGraphDataError(f"Expected a JSON object at the document root, got {type(root).__name__}")
        return root

    def deserialize(self, data: Union[bytes, str], overwrite: bool = False) -> TypedNode:
        """
        Deserialize SPDX JSON-LD into the store.

        Args:
            data: JSON document
            overwrite: Allow replacing objects that already exist in the store

        Returns:
            The SpdxDocument the deserialized elements belong to

        Raises:
            InvalidGraphDataError: If the input is not valid SPDX JSON-LD
            OverwriteConflictError: If ids already exist and overwrite is False
        """
        root = self._parse(data)
        try:
            document = JsonLdDocument.model_validate(root)
        except ValidationError as e:
            raise InvalidGraphDataError(f"Invalid JSON-LD document structure: {e}") from e

        with self.critical_section(read_only=False):
            if not overwrite:
                self._check_overwrite(root)

            deserializer = GraphDeserializer(self, schema_cache=self.schema_cache,
                                             listed_licenses=self.listed_licenses,
                                             copy_manager=self.copy_manager,
                                             default_spec_version=self.latest_version)
            if document.is_graph:
                graph_nodes = deserializer.deserialize_graph(document.graph)
            else:
                graph_nodes = [deserializer.deserialize_element(document.element_fields())]

            reconstructor = DocumentReconstructor(self, schema_cache=self.schema_cache,
                                                  spec_version=self.latest_version,
                                                  document_uri_prefix=self.document_uri_prefix)
            return reconstructor.reconstruct(graph_nodes)

    def read(self, stream: BinaryIO, overwrite: bool = False) -> TypedNode:
        """Deserialize from a binary stream; stream errors propagate."""
        return self.deserialize(stream.read(), overwrite)

    def _check_overwrite(self, root: Dict[str, Any]) -> None:
        graph = root.get(sc.JSON_GRAPH)
        entries = graph if isinstance(graph, list) else [root]
        existing: List[str] = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            for id_field in (sc.JSON_SPDX_ID, sc.JSON_ID):
                json_id = entry.get(id_field)
                if (isinstance(json_id, str) and not sc.is_blank_id(json_id)
                        and json_id not in existing and self.exists(json_id)):
                    existing.append(json_id)
        if existing:
            raise OverwriteConflictError(existing)

    def validate(self, data: Union[bytes, str]) -> bool:
        """Validate a JSON document against the latest schema."""
        try:
            root = self._parse(data)
        except InvalidGraphDataError as e:
            self.logger.error(f"Unable to validate document: {e}")
            return False
        return self.schema_cache.get_or_create(self.latest_version).validate(root)

    # ========================================
    # Delegated model store operations
    # ========================================

    def create(self, typed_node: TypedNode) -> None:
        self.base_store.create(typed_node)

    def exists(self, object_uri: str) -> bool:
        return self.base_store.exists(object_uri)

    def is_anon(self, object_uri: str) -> bool:
        return self.base_store.is_anon(object_uri)

    def get_next_id(self, id_type: IdType) -> str:
        return self.base_store.get_next_id(id_type)

    def get_typed_node(self, object_uri: str) -> Optional[TypedNode]:
        return self.base_store.get_typed_node(object_uri)

    def get_all_items(self, type_filter: Optional[str] = None) -> List[TypedNode]:
        return self.base_store.get_all_items(type_filter)

    def get_value(self, object_uri: str, descriptor: PropertyDescriptor) -> Optional[Any]:
        return self.base_store.get_value(object_uri, descriptor)

    def set_value(self, object_uri: str, descriptor: PropertyDescriptor, value: Any) -> None:
        self.base_store.set_value(object_uri, descriptor, value)

    def remove_property(self, object_uri: str, descriptor: PropertyDescriptor) -> None:
        self.base_store.remove_property(object_uri, descriptor)

    def add_value_to_collection(self, object_uri: str, descriptor: PropertyDescriptor, value: Any) -> bool:
        return self.base_store.add_value_to_collection(object_uri, descriptor, value)

    def clear_value_collection(self, object_uri: str, descriptor: PropertyDescriptor) -> None:
        self.base_store.clear_value_collection(object_uri, descriptor)

    def list_values(self, object_uri: str, descriptor: PropertyDescriptor) -> List[Any]:
        return self.base_store.list_values(object_uri, descriptor)

    def is_collection_property(self, object_uri: str, descriptor: PropertyDescriptor) -> bool:
        return self.base_store.is_collection_property(object_uri, descriptor)

    def get_property_value_descriptors(self, object_uri: str) -> List[PropertyDescriptor]:
        return self.base_store.get_property_value_descriptors(object_uri)

    def enter_critical_section(self, read_only: bool) -> Any:
        return self.base_store.enter_critical_section(read_only)

    def leave_critical_section(self, lock: Any) -> None:
        self.base_store.leave_critical_section(lock)
