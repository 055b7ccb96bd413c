"""JSON-LD Model Classes

Pydantic model for the top-level SPDX JSON-LD document envelope.
"""

from typing import Dict, List, Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class JsonLdDocument(BaseModel):
    """
    Pydantic model for an SPDX JSON-LD document.

    The serializer always produces the ``@context`` + ``@graph`` form. A
    single-element document (no ``@graph``) keeps its element fields as
    extra attributes.
    """
    model_config = ConfigDict(extra="allow")

    context: Optional[Union[str, Dict[str, Any], List[Union[str, Dict[str, Any]]]]] = Field(
        None,
        alias="@context",
        description="Context URL the document's terms are resolved against"
    )
    graph: Optional[List[Dict[str, Any]]] = Field(
        None,
        alias="@graph",
        description="Top-level graph entries, in canonical order"
    )

    def to_json_dict(self) -> Dict[str, Any]:
        """Dump with JSON-LD keyword names, leaving out unset envelope fields."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @property
    def is_graph(self) -> bool:
        return self.graph is not None

    def element_fields(self) -> Dict[str, Any]:
        """Fields of a single-element document, without the envelope keywords."""
        return dict(self.model_extra or {})
