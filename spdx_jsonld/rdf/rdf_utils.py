"""
RDF Utilities

Bridges serialized SPDX JSON-LD documents to linked data tooling: JSON-LD
expansion with pyld against the bundled context (no network access) and
conversion of the expanded form into an rdflib Graph.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from pyld import jsonld
from rdflib import Graph

from spdx_jsonld.schema.jsonld_schema import JsonLDSchema
from spdx_jsonld.utils.exceptions import InvalidGraphDataError

logger = logging.getLogger(__name__)


def create_document_loader(schema: JsonLDSchema) -> Callable[..., Dict[str, Any]]:
    """
    Create a pyld document loader that serves the schema's bundled context.

    Any other URL is refused, so expansion never touches the network.
    """
    def load_document(url: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if url == schema.context_url:
            return {
                "contentType": "application/ld+json",
                "contextUrl": None,
                "documentUrl": url,
                "document": schema.context_document,
            }
        raise jsonld.JsonLdError(
            f"Refusing to load remote document {url}",
            "jsonld.LoadDocumentError",
            {"url": url},
            code="loading document failed")

    return load_document


def expand_document(document: Dict[str, Any], schema: JsonLDSchema) -> List[Dict[str, Any]]:
    """
    Expand a serialized SPDX document to full-IRI JSON-LD.

    Args:
        document: Document with ``@context`` and ``@graph``
        schema: Schema whose bundled context matches the document's context URL

    Returns:
        Expanded JSON-LD node list

    Raises:
        InvalidGraphDataError: If the document is not valid JSON-LD
    """
    try:
        return jsonld.expand(document, {"documentLoader": create_document_loader(schema)})
    except jsonld.JsonLdError as e:
        raise InvalidGraphDataError(f"JSON-LD expansion failed: {e}") from e


def to_rdf_graph(document: Dict[str, Any], schema: JsonLDSchema) -> Graph:
    """
    Convert a serialized SPDX document into an rdflib Graph.

    Args:
        document: Document with ``@context`` and ``@graph``
        schema: Schema whose bundled context matches the document's context URL

    Returns:
        Graph holding the document's triples
    """
    expanded = expand_document(document, schema)
    graph = Graph()
    graph.parse(data=json.dumps(expanded), format="json-ld")
    logger.debug(f"Converted document to RDF graph with {len(graph)} triples")
    return graph
