"""
SPDX JSON-LD Exceptions

Exception hierarchy shared by the schema, serializer, deserializer and store
modules. Stream and file I/O errors are never wrapped and propagate as-is.
"""

from typing import List, Optional


class SpdxJsonLdError(Exception):
    """Base class for all spdx-jsonld errors."""
    pass


class SchemaUnavailableError(SpdxJsonLdError):
    """Raised when a schema or context resource is missing or cannot be parsed."""
    pass


class InvalidGraphDataError(SpdxJsonLdError):
    """Raised when JSON-LD input or store content cannot be mapped onto the schema."""
    pass


class ModelStoreError(SpdxJsonLdError):
    """Raised when a store operation references an object that does not exist."""
    pass


class OverwriteConflictError(SpdxJsonLdError):
    """
    Raised when deserialization would overwrite existing store objects
    without permission.

    Attributes:
        existing_ids: Every conflicting id found in the input, in input order
    """

    MAX_REPORTED_IDS = 5

    def __init__(self, existing_ids: List[str], message: Optional[str] = None):
        self.existing_ids = list(existing_ids)
        if message is None:
            message = self._build_message(self.existing_ids)
        super().__init__(message)

    @classmethod
    def _build_message(cls, existing_ids: List[str]) -> str:
        shown = ", ".join(existing_ids[:cls.MAX_REPORTED_IDS])
        if len(existing_ids) > cls.MAX_REPORTED_IDS:
            shown += ", [more]..."
        return f"Overwrite is not permitted and the following IDs already exist: {shown}"
