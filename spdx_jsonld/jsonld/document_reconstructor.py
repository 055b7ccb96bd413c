"""
Document Reconstructor

Rebuilds the SpdxDocument view over freshly deserialized graph nodes: the
document's element list, its root elements and an import entry for every
external element the graph refers to.
"""

import logging
import uuid
from typing import Any, List, Optional, Set

from spdx_jsonld.model import spdx_constants as sc
from spdx_jsonld.model.typed_node import ExternalElement, IdType, PropertyDescriptor, TypedNode
from spdx_jsonld.schema.jsonld_schema import JsonLDSchema
from spdx_jsonld.schema.schema_cache import SchemaCache, get_schema_cache
from spdx_jsonld.store.model_store import ModelStore
from spdx_jsonld.utils.exceptions import SchemaUnavailableError

logger = logging.getLogger(__name__)


class DocumentReconstructor:
    """Derives the aggregate SpdxDocument for a deserialized graph."""

    def __init__(self, model_store: ModelStore, schema_cache: Optional[SchemaCache] = None,
                 spec_version: Optional[str] = None,
                 document_uri_prefix: str = sc.DOCUMENT_URI_PREFIX):
        self.model_store = model_store
        self.schema_cache = schema_cache or get_schema_cache()
        self.schema: JsonLDSchema = self.schema_cache.get_or_create(spec_version)
        self.document_uri_prefix = document_uri_prefix

    def _descriptor(self, field_name: str) -> PropertyDescriptor:
        descriptor = self.schema.get_property_descriptor(field_name)
        if descriptor is None:
            raise SchemaUnavailableError(f"Schema {self.schema.spec_version} does not define {field_name}")
        return descriptor

    def reconstruct(self, graph_nodes: List[TypedNode]) -> TypedNode:
        """
        Find or create the SpdxDocument for the graph and populate it.

        Args:
            graph_nodes: Non-blank nodes returned by the deserializer

        Returns:
            The document node
        """
        element_property = self._descriptor(sc.PROP_ELEMENT)
        root_element_property = self._descriptor(sc.PROP_ROOT_ELEMENT)

        document = self._find_or_create_document(graph_nodes)
        document_uri = document.object_uri

        element_types = set(self.schema.element_types)
        elements: List[TypedNode] = []
        self.model_store.clear_value_collection(document_uri, element_property)
        for node in graph_nodes:
            if node.object_uri == document_uri:
                continue
            if node.type not in element_types:
                logger.debug(f"Skipping non-element {node.object_uri} ({node.type}) for document elements")
                continue
            self.model_store.add_value_to_collection(document_uri, element_property, node)
            elements.append(node)

        if not self.model_store.list_values(document_uri, root_element_property):
            for node in elements:
                self.model_store.add_value_to_collection(document_uri, root_element_property, node)

        external_uris: Set[str] = set()
        visited: Set[str] = set()
        for node in graph_nodes:
            self._collect_external_uris(node, external_uris, visited)
        self._add_imports(document, external_uris)

        logger.info(f"Document {document_uri} holds {len(elements)} elements "
                    f"and {len(external_uris)} external references")
        return document

    def _find_or_create_document(self, graph_nodes: List[TypedNode]) -> TypedNode:
        documents = [n for n in graph_nodes if n.type == sc.CORE_SPDX_DOCUMENT]
        if len(documents) == 1:
            return documents[0]
        if documents:
            logger.warning(f"Graph holds {len(documents)} SPDX documents, creating an enclosing document")
        document = TypedNode(f"{self.document_uri_prefix}{uuid.uuid4()}", sc.CORE_SPDX_DOCUMENT,
                             self.schema.spec_version)
        self.model_store.create(document)
        return document

    def _collect_external_uris(self, node: TypedNode, external_uris: Set[str], visited: Set[str]) -> None:
        if node.object_uri in visited or not self.model_store.exists(node.object_uri):
            return
        visited.add(node.object_uri)
        for descriptor in self.model_store.get_property_value_descriptors(node.object_uri):
            for value in self.model_store.list_values(node.object_uri, descriptor):
                self._collect_value(value, external_uris, visited)

    def _collect_value(self, value: Any, external_uris: Set[str], visited: Set[str]) -> None:
        if isinstance(value, ExternalElement):
            external_uris.add(value.uri)
        elif isinstance(value, TypedNode):
            self._collect_external_uris(value, external_uris, visited)

    def _add_imports(self, document: TypedNode, external_uris: Set[str]) -> None:
        import_property = self._descriptor(sc.PROP_IMPORT)
        external_id_property = self._descriptor(sc.PROP_EXTERNAL_SPDX_ID)

        already_imported = set()
        for existing in self.model_store.list_values(document.object_uri, import_property):
            if isinstance(existing, TypedNode) and self.model_store.exists(existing.object_uri):
                external_id = self.model_store.get_value(existing.object_uri, external_id_property)
                if external_id is not None:
                    already_imported.add(str(external_id))

        for uri in sorted(external_uris - already_imported):
            external_map = TypedNode(self.model_store.get_next_id(IdType.ANONYMOUS), sc.CORE_EXTERNAL_MAP,
                                     document.spec_version)
            self.model_store.create(external_map)
            self.model_store.set_value(external_map.object_uri, external_id_property, uri)
            self.model_store.add_value_to_collection(document.object_uri, import_property, external_map)
