"""
Listed License Repository

Holds SPDX listed licenses and license exceptions in their own model store so
references into ``https://spdx.org/licenses/`` can be resolved to full license
objects during deserialization.
"""

import logging
from typing import Optional

from spdx_jsonld.model import spdx_constants as sc
from spdx_jsonld.model.typed_node import PropertyDescriptor, TypedNode
from spdx_jsonld.store.memory_store import InMemoryModelStore
from spdx_jsonld.store.model_store import ModelStore

logger = logging.getLogger(__name__)


class ListedLicenseRepository:
    """Repository of listed licenses and exceptions, keyed by license id."""

    def __init__(self, license_store: Optional[ModelStore] = None):
        self.license_store: ModelStore = license_store if license_store is not None else InMemoryModelStore()

    @staticmethod
    def is_listed_license_uri(uri: str) -> bool:
        return uri.startswith(sc.LISTED_LICENSE_NAMESPACE)

    @staticmethod
    def object_uri_to_license_or_exception_id(uri: str) -> str:
        """``https://spdx.org/licenses/Apache-2.0`` -> ``Apache-2.0``."""
        if uri.startswith(sc.LISTED_LICENSE_NAMESPACE):
            return uri[len(sc.LISTED_LICENSE_NAMESPACE):]
        return uri

    @staticmethod
    def license_id_to_uri(license_id: str) -> str:
        return sc.LISTED_LICENSE_NAMESPACE + license_id

    def _has_type(self, license_id: str, type_name: str) -> bool:
        typed_node = self.license_store.get_typed_node(self.license_id_to_uri(license_id))
        return typed_node is not None and typed_node.type == type_name

    def is_listed_license_id(self, license_id: str) -> bool:
        return self._has_type(license_id, sc.EXPANDED_LISTED_LICENSE)

    def is_listed_exception_id(self, license_id: str) -> bool:
        return self._has_type(license_id, sc.EXPANDED_LISTED_LICENSE_EXCEPTION)

    def add_listed_license(self, license_id: str, spec_version: str,
                           name: Optional[str] = None, license_text: Optional[str] = None,
                           exception: bool = False) -> TypedNode:
        """
        Register a listed license or exception.

        Args:
            license_id: SPDX license id, e.g. ``Apache-2.0``
            spec_version: Spec version of the license object
            name: Full license name
            license_text: License or exception text
            exception: Register a license exception instead of a license

        Returns:
            Typed node of the stored license
        """
        type_name = sc.EXPANDED_LISTED_LICENSE_EXCEPTION if exception else sc.EXPANDED_LISTED_LICENSE
        typed_node = TypedNode(self.license_id_to_uri(license_id), type_name, spec_version)
        self.license_store.create(typed_node)

        namespace = sc.terms_namespace(spec_version)
        if name:
            self.license_store.set_value(typed_node.object_uri,
                                         PropertyDescriptor("name", namespace + "Core/"), name)
        if license_text:
            text_property = (PropertyDescriptor("additionText", namespace + "ExpandedLicensing/")
                             if exception else PropertyDescriptor("licenseText", namespace + "SimpleLicensing/"))
            self.license_store.set_value(typed_node.object_uri, text_property, license_text)

        logger.debug(f"Registered listed {'exception' if exception else 'license'} {license_id}")
        return typed_node
