"""
In-Memory Model Store

Dictionary-backed ``ModelStore`` implementation used as the default base
store and in tests.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from spdx_jsonld.model.spdx_constants import ANON_ID_PREFIX
from spdx_jsonld.model.typed_node import IdType, PropertyDescriptor, TypedNode
from spdx_jsonld.store.model_store import ModelStore
from spdx_jsonld.utils.exceptions import ModelStoreError

logger = logging.getLogger(__name__)

ID_PREFIXES = {
    IdType.ANONYMOUS: ANON_ID_PREFIX,
    IdType.SPDX_ID: "SPDXRef-gnrtd",
    IdType.LICENSE_REF: "LicenseRef-gnrtd",
    IdType.DOCUMENT_REF: "DocumentRef-gnrtd",
    IdType.LISTED_LICENSE: "ListedLicense-gnrtd",
    IdType.URI: "urn:spdx-gnrtd:",
}


class ReadWriteLock:
    """
    Readers-writer lock: many concurrent readers or a single writer.

    Waiting writers block new readers so writers are not starved.
    """

    def __init__(self):
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._condition:
            while self._writer or self._writers_waiting:
                self._condition.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._condition:
            self._readers -= 1
            if self._readers == 0:
                self._condition.notify_all()

    def acquire_write(self) -> None:
        with self._condition:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._condition.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._condition:
            self._writer = False
            self._condition.notify_all()


@dataclass
class _StoredObject:
    typed_node: TypedNode
    properties: Dict[PropertyDescriptor, Any] = field(default_factory=dict)


class InMemoryModelStore(ModelStore):
    """
    Model store holding every object in process memory.

    Individual operations are atomic; multi-step operations should run inside
    ``critical_section``.
    """

    def __init__(self):
        self._objects: Dict[str, _StoredObject] = {}
        self._counters: Dict[IdType, int] = {id_type: 0 for id_type in IdType}
        self._data_lock = threading.RLock()
        self._rw_lock = ReadWriteLock()

    def _get_object(self, object_uri: str) -> _StoredObject:
        stored = self._objects.get(object_uri)
        if stored is None:
            raise ModelStoreError(f"Object {object_uri} does not exist in the store")
        return stored

    def create(self, typed_node: TypedNode) -> None:
        with self._data_lock:
            if typed_node.object_uri in self._objects:
                logger.debug(f"Replacing existing object {typed_node.object_uri}")
                # Keep the original position so iteration order stays stable
                self._objects[typed_node.object_uri].typed_node = typed_node
                self._objects[typed_node.object_uri].properties.clear()
            else:
                self._objects[typed_node.object_uri] = _StoredObject(typed_node)

    def exists(self, object_uri: str) -> bool:
        with self._data_lock:
            return object_uri in self._objects

    def is_anon(self, object_uri: str) -> bool:
        return object_uri.startswith(ANON_ID_PREFIX)

    def get_next_id(self, id_type: IdType) -> str:
        with self._data_lock:
            while True:
                self._counters[id_type] += 1
                candidate = f"{ID_PREFIXES[id_type]}{self._counters[id_type]}"
                if candidate not in self._objects:
                    return candidate

    def get_typed_node(self, object_uri: str) -> Optional[TypedNode]:
        with self._data_lock:
            stored = self._objects.get(object_uri)
            return stored.typed_node if stored else None

    def get_all_items(self, type_filter: Optional[str] = None) -> List[TypedNode]:
        with self._data_lock:
            return [stored.typed_node for stored in self._objects.values()
                    if type_filter is None or stored.typed_node.type == type_filter]

    def get_value(self, object_uri: str, descriptor: PropertyDescriptor) -> Optional[Any]:
        with self._data_lock:
            value = self._get_object(object_uri).properties.get(descriptor)
            if isinstance(value, list):
                return list(value)
            return value

    def set_value(self, object_uri: str, descriptor: PropertyDescriptor, value: Any) -> None:
        if value is None:
            raise ModelStoreError(f"Null value for property {descriptor.name} of {object_uri}")
        with self._data_lock:
            self._get_object(object_uri).properties[descriptor] = value

    def remove_property(self, object_uri: str, descriptor: PropertyDescriptor) -> None:
        with self._data_lock:
            self._get_object(object_uri).properties.pop(descriptor, None)

    def add_value_to_collection(self, object_uri: str, descriptor: PropertyDescriptor, value: Any) -> bool:
        if value is None:
            raise ModelStoreError(f"Null value for collection {descriptor.name} of {object_uri}")
        with self._data_lock:
            properties = self._get_object(object_uri).properties
            existing = properties.get(descriptor)
            if existing is None:
                properties[descriptor] = [value]
            elif isinstance(existing, list):
                existing.append(value)
            else:
                raise ModelStoreError(f"Property {descriptor.name} of {object_uri} is not a collection")
            return True

    def clear_value_collection(self, object_uri: str, descriptor: PropertyDescriptor) -> None:
        with self._data_lock:
            properties = self._get_object(object_uri).properties
            if isinstance(properties.get(descriptor), list):
                properties[descriptor].clear()

    def list_values(self, object_uri: str, descriptor: PropertyDescriptor) -> List[Any]:
        with self._data_lock:
            value = self._get_object(object_uri).properties.get(descriptor)
            if value is None:
                return []
            if isinstance(value, list):
                return list(value)
            return [value]

    def is_collection_property(self, object_uri: str, descriptor: PropertyDescriptor) -> bool:
        with self._data_lock:
            return isinstance(self._get_object(object_uri).properties.get(descriptor), list)

    def get_property_value_descriptors(self, object_uri: str) -> List[PropertyDescriptor]:
        with self._data_lock:
            return list(self._get_object(object_uri).properties.keys())

    def enter_critical_section(self, read_only: bool) -> Any:
        if read_only:
            self._rw_lock.acquire_read()
        else:
            self._rw_lock.acquire_write()
        return read_only

    def leave_critical_section(self, lock: Any) -> None:
        if lock:
            self._rw_lock.release_read()
        else:
            self._rw_lock.release_write()

    def __len__(self) -> int:
        with self._data_lock:
            return len(self._objects)
