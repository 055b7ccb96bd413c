"""
Schema Cache

Memoizes ``JsonLDSchema`` instances per spec version. When a requested version
cannot be loaded the cache falls back to the latest supported version and
records the substitution as a ``SchemaFallbackEvent``.
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from spdx_jsonld.model.spdx_constants import LATEST_SPEC_VERSION
from spdx_jsonld.schema.jsonld_schema import JsonLDSchema
from spdx_jsonld.utils.exceptions import SchemaUnavailableError

logger = logging.getLogger(__name__)

SchemaFactory = Callable[[str], JsonLDSchema]


@dataclass(frozen=True)
class SchemaFallbackEvent:
    """Record of a schema version substitution."""
    requested_version: str
    fallback_version: str
    reason: str


class SchemaCache:
    """
    Thread-safe, per-version cache of schema services.

    Two callers racing on the same miss may both construct a schema; the
    first instance inserted is the one every caller receives.
    """

    def __init__(self, latest_version: str = LATEST_SPEC_VERSION,
                 schema_factory: Optional[SchemaFactory] = None,
                 resource_dir: Optional[Union[str, Path]] = None,
                 on_fallback: Optional[Callable[[SchemaFallbackEvent], None]] = None):
        """
        Args:
            latest_version: Version used when a requested version is unavailable
            schema_factory: Builds a schema for a version; defaults to the packaged resources
            resource_dir: Resource directory for the default factory
            on_fallback: Called with each fallback event
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.latest_version = latest_version
        self._schema_factory = schema_factory or (
            lambda version: JsonLDSchema.for_spec_version(version, resource_dir=resource_dir))
        self._on_fallback = on_fallback
        self._schemas: Dict[str, JsonLDSchema] = {}
        self._fallback_events: List[SchemaFallbackEvent] = []
        self._lock = threading.Lock()

    def get_or_create(self, spec_version: Optional[str] = None) -> JsonLDSchema:
        """
        Get the schema for a spec version, loading it on first use.

        Args:
            spec_version: Requested version; None means the latest version

        Returns:
            Schema for the version, or for the latest version if it is unavailable

        Raises:
            SchemaUnavailableError: If neither the version nor the latest version loads
        """
        version = spec_version or self.latest_version
        with self._lock:
            cached = self._schemas.get(version)
        if cached is not None:
            return cached

        try:
            schema = self._schema_factory(version)
        except SchemaUnavailableError as e:
            if version == self.latest_version:
                self.logger.error(f"Unable to load schema for latest version {version}: {e}")
                raise
            schema = self._fall_back(version, str(e))

        with self._lock:
            return self._schemas.setdefault(version, schema)

    def _fall_back(self, requested_version: str, reason: str) -> JsonLDSchema:
        self.logger.warning(f"Schema for spec version {requested_version} is unavailable, "
                            f"using {self.latest_version}: {reason}")
        schema = self.get_or_create(self.latest_version)
        event = SchemaFallbackEvent(requested_version, self.latest_version, reason)
        with self._lock:
            self._fallback_events.append(event)
        if self._on_fallback is not None:
            self._on_fallback(event)
        return schema

    @property
    def fallback_events(self) -> List[SchemaFallbackEvent]:
        with self._lock:
            return list(self._fallback_events)

    def cached_versions(self) -> List[str]:
        with self._lock:
            return sorted(self._schemas)

    def clear(self) -> None:
        with self._lock:
            self._schemas.clear()
            self._fallback_events.clear()


# Global cache instance
_cache_instance: Optional[SchemaCache] = None
_cache_lock = threading.Lock()


def get_schema_cache() -> SchemaCache:
    """
    Get the process-wide default schema cache.

    Components accept an explicit cache; this instance is used when none is given.
    """
    global _cache_instance

    with _cache_lock:
        if _cache_instance is None:
            _cache_instance = SchemaCache()
        return _cache_instance
