"""
Abstract interface for SPDX object-model stores.

The serializer, deserializer and document reconstructor only talk to the
object model through this interface: typed nodes with named, possibly
multi-valued properties, addressed by URI or by store-issued anonymous id.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from spdx_jsonld.model.typed_node import IdType, PropertyDescriptor, TypedNode


class ModelStore(ABC):
    """
    Abstract interface for object-model store implementations.

    Values are scalars (str, int, float, bool), ``TypedNode`` handles for
    other store objects, or individual URI values (``SimpleUriValue`` and
    ``ExternalElement``). Collection properties hold ordered lists of values.
    """

    # ========================================
    # Object lifecycle
    # ========================================

    @abstractmethod
    def create(self, typed_node: TypedNode) -> None:
        """
        Create an object, replacing any existing object with the same id.

        Args:
            typed_node: Id, type and spec version of the object
        """
        pass

    @abstractmethod
    def exists(self, object_uri: str) -> bool:
        pass

    @abstractmethod
    def is_anon(self, object_uri: str) -> bool:
        """True if the id was issued by ``get_next_id(IdType.ANONYMOUS)``."""
        pass

    @abstractmethod
    def get_next_id(self, id_type: IdType) -> str:
        """
        Issue a new id of the given kind, unique within this store.

        Args:
            id_type: Kind of id to issue

        Returns:
            The new id
        """
        pass

    @abstractmethod
    def get_typed_node(self, object_uri: str) -> Optional[TypedNode]:
        pass

    @abstractmethod
    def get_all_items(self, type_filter: Optional[str] = None) -> List[TypedNode]:
        """
        List stored objects.

        Args:
            type_filter: Only return objects of this type name

        Returns:
            Typed nodes in creation order
        """
        pass

    # ========================================
    # Property values
    # ========================================

    @abstractmethod
    def get_value(self, object_uri: str, descriptor: PropertyDescriptor) -> Optional[Any]:
        """Single value of a property; for collections, a copy of the value list."""
        pass

    @abstractmethod
    def set_value(self, object_uri: str, descriptor: PropertyDescriptor, value: Any) -> None:
        pass

    @abstractmethod
    def remove_property(self, object_uri: str, descriptor: PropertyDescriptor) -> None:
        pass

    @abstractmethod
    def add_value_to_collection(self, object_uri: str, descriptor: PropertyDescriptor, value: Any) -> bool:
        """
        Append a value to a collection property, creating the collection if needed.

        Returns:
            True if the collection changed
        """
        pass

    @abstractmethod
    def clear_value_collection(self, object_uri: str, descriptor: PropertyDescriptor) -> None:
        pass

    @abstractmethod
    def list_values(self, object_uri: str, descriptor: PropertyDescriptor) -> List[Any]:
        """Values of a collection property in insertion order (empty if unset)."""
        pass

    @abstractmethod
    def is_collection_property(self, object_uri: str, descriptor: PropertyDescriptor) -> bool:
        pass

    @abstractmethod
    def get_property_value_descriptors(self, object_uri: str) -> List[PropertyDescriptor]:
        """Descriptors of every property that currently has a value."""
        pass

    # ========================================
    # Critical sections
    # ========================================

    @abstractmethod
    def enter_critical_section(self, read_only: bool) -> Any:
        """
        Acquire the store lock.

        Args:
            read_only: Acquire shared (True) or exclusive (False) access

        Returns:
            Token to pass to ``leave_critical_section``
        """
        pass

    @abstractmethod
    def leave_critical_section(self, lock: Any) -> None:
        pass

    @contextmanager
    def critical_section(self, read_only: bool) -> Iterator[None]:
        """Hold the store lock for the duration of a with-block."""
        lock = self.enter_critical_section(read_only)
        try:
            yield
        finally:
            self.leave_critical_section(lock)
