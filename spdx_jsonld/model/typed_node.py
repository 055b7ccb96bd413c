"""
Typed Node Values

Value types exchanged between the codec and the object-model store: typed
node handles, property descriptors, id kinds and individual URI values.
"""

from dataclasses import dataclass
from enum import Enum


class IdType(Enum):
    """Kinds of identifiers a store can issue."""
    ANONYMOUS = "Anonymous"
    SPDX_ID = "SpdxId"
    LICENSE_REF = "LicenseRef"
    DOCUMENT_REF = "DocumentRef"
    LISTED_LICENSE = "ListedLicense"
    URI = "Uri"


@dataclass(frozen=True)
class TypedNode:
    """
    Handle for a node in the object-model store.

    Attributes:
        object_uri: Store id (URI or anonymous id)
        type: Type name in Profile.ClassName form
        spec_version: SPDX spec version the node conforms to
    """
    object_uri: str
    type: str
    spec_version: str


@dataclass(frozen=True, order=True)
class PropertyDescriptor:
    """Property identity: local name plus namespace URI (ending in '/')."""
    name: str
    namespace: str

    @property
    def uri(self) -> str:
        return self.namespace + self.name

    @property
    def profile(self) -> str:
        """Last path segment of the namespace, e.g. 'Core' or 'Software'."""
        return self.namespace.rstrip("/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class SimpleUriValue:
    """A value that is only a URI: enumeration values and well-known individuals."""
    uri: str

    def __str__(self) -> str:
        return self.uri


@dataclass(frozen=True)
class ExternalElement(SimpleUriValue):
    """Reference to an element defined outside the current document."""
    pass
