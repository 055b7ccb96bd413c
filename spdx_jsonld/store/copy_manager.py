"""
Model Copy Manager

Copies objects, with every nested value they reference, from one model store
into another. Used to materialize listed licenses from the license repository
into the store being deserialized into.
"""

import logging
import threading
from typing import Any, Dict, Optional, Set, Tuple

from spdx_jsonld.model.typed_node import IdType, TypedNode
from spdx_jsonld.store.model_store import ModelStore
from spdx_jsonld.utils.exceptions import ModelStoreError

logger = logging.getLogger(__name__)


class ModelCopyManager:
    """
    Deep copy between stores, memoized per (source store, target store, id).

    Non-anonymous objects keep their id; anonymous objects receive a fresh
    anonymous id in the target store.
    """

    def __init__(self):
        self._copied: Dict[Tuple[int, int, str], str] = {}
        self._lock = threading.RLock()

    def copy(self, to_store: ModelStore, from_store: ModelStore, object_uri: str,
             spec_version: Optional[str] = None) -> TypedNode:
        """
        Copy an object and its nested values.

        Args:
            to_store: Store to copy into
            from_store: Store holding the object
            object_uri: Id of the object in ``from_store``
            spec_version: Spec version for the copy; defaults to the source's

        Returns:
            Typed node of the copy in ``to_store``

        Raises:
            ModelStoreError: If the object does not exist in ``from_store``
        """
        with self._lock:
            return self._copy(to_store, from_store, object_uri, spec_version, set())

    def _copy(self, to_store: ModelStore, from_store: ModelStore, object_uri: str,
              spec_version: Optional[str], in_progress: Set[str]) -> TypedNode:
        source = from_store.get_typed_node(object_uri)
        if source is None:
            raise ModelStoreError(f"Cannot copy {object_uri}: not found in source store")
        version = spec_version or source.spec_version

        key = (id(from_store), id(to_store), object_uri)
        copied_uri = self._copied.get(key)
        if copied_uri is not None and (copied_uri in in_progress or to_store.exists(copied_uri)):
            return TypedNode(copied_uri, source.type, version)

        if from_store.is_anon(object_uri):
            target_uri = to_store.get_next_id(IdType.ANONYMOUS)
        else:
            target_uri = object_uri
        target = TypedNode(target_uri, source.type, version)
        to_store.create(target)
        self._copied[key] = target_uri
        in_progress.add(target_uri)

        for descriptor in from_store.get_property_value_descriptors(object_uri):
            if from_store.is_collection_property(object_uri, descriptor):
                for value in from_store.list_values(object_uri, descriptor):
                    to_store.add_value_to_collection(
                        target_uri, descriptor,
                        self._copy_value(to_store, from_store, value, spec_version, in_progress))
            else:
                value = from_store.get_value(object_uri, descriptor)
                to_store.set_value(target_uri, descriptor,
                                   self._copy_value(to_store, from_store, value, spec_version, in_progress))

        logger.debug(f"Copied {object_uri} to {target_uri}")
        return target

    def _copy_value(self, to_store: ModelStore, from_store: ModelStore, value: Any,
                    spec_version: Optional[str], in_progress: Set[str]) -> Any:
        if isinstance(value, TypedNode):
            return self._copy(to_store, from_store, value.object_uri, spec_version, in_progress)
        return value
